"""
Error types shared across the match engine.
"""


class InvalidArgumentError(ValueError):
    """
    Raised when an input cannot be scored or processed.

    Retrying with the same input cannot succeed.
    """


class BroadcastValidationError(ValueError):
    """Raised when a broadcast is not ready to be sent."""
