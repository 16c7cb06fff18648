"""
Utility modules for the match engine.
"""

from .formatting import (
    format_budget_range,
    format_currency,
    format_optional_currency,
)
from .config import Config

__all__ = [
    "format_budget_range",
    "format_currency",
    "format_optional_currency",
    "Config",
]
