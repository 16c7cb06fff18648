"""
Investor Broadcast

Turns ranked matches into an outgoing broadcast: default message,
recipient selection, validation and per-investor activity records.
"""

from .message import (
    SMS_SEGMENT_LENGTH,
    BroadcastChannel,
    compose_default_message,
    sms_segment_count,
)
from .selection import RecipientSelection
from .dispatch import (
    ActivityRecord,
    Broadcast,
    BroadcastDispatcher,
    DispatchReceipt,
    PreviewDispatcher,
    prepare_broadcast,
)

__all__ = [
    "SMS_SEGMENT_LENGTH",
    "BroadcastChannel",
    "compose_default_message",
    "sms_segment_count",
    "RecipientSelection",
    "ActivityRecord",
    "Broadcast",
    "BroadcastDispatcher",
    "DispatchReceipt",
    "PreviewDispatcher",
    "prepare_broadcast",
]
