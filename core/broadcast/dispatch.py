"""
Broadcast preparation and dispatch.

A Broadcast is validated once, then handed to a dispatcher. Each recipient
produces one activity record for the caller to persist.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, Optional, Sequence

from core.errors import BroadcastValidationError
from core.matching.models import Listing, MatchResult

from .message import BroadcastChannel, sms_segment_count
from .selection import RecipientSelection


logger = logging.getLogger(__name__)


DESCRIPTION_MESSAGE_CHARS: Final[int] = 200
ACTIVITY_CREATED_BY: Final[str] = "System"


@dataclass(frozen=True)
class ActivityRecord:
    """An activity row logged against an investor."""

    activity_type: str
    description: str
    related_to_type: str
    related_to_id: str
    created_by: str = ACTIVITY_CREATED_BY

    def to_dict(self) -> dict:
        return {
            "activity_type": self.activity_type,
            "description": self.description,
            "related_to_type": self.related_to_type,
            "related_to_id": self.related_to_id,
            "created_by": self.created_by,
        }


@dataclass(frozen=True)
class Broadcast:
    """A validated message addressed to selected matches."""

    listing: Listing
    channel: BroadcastChannel
    message: str
    recipients: tuple

    @property
    def recipient_count(self) -> int:
        return len(self.recipients)

    @property
    def segments(self) -> Optional[int]:
        """SMS segments per recipient; None for email."""
        if self.channel is BroadcastChannel.SMS:
            return sms_segment_count(self.message)
        return None

    def activity_records(self) -> list[ActivityRecord]:
        """One activity per recipient, in ranking order."""
        description = (
            f"Broadcast sent about {self.listing.address}: "
            f"{self.message[:DESCRIPTION_MESSAGE_CHARS]}..."
        )
        return [
            ActivityRecord(
                activity_type=self.channel.value,
                description=description,
                related_to_type="investor",
                related_to_id=result.buyer.id,
            )
            for result in self.recipients
        ]


def prepare_broadcast(
    listing: Listing,
    results: Sequence[MatchResult],
    selected_ids: Optional[Sequence[str]],
    channel: BroadcastChannel,
    message: str,
) -> Broadcast:
    """
    Validate and assemble a broadcast.

    Args:
        listing: The listing being broadcast.
        results: Ranked matches for the listing.
        selected_ids: Chosen buyer ids; None keeps the default selection.
        channel: Email or SMS.
        message: Message body.

    Returns:
        Broadcast addressed to the selected matches, in ranking order.

    Raises:
        InvalidArgumentError: If a selected id is not among the matches.
        BroadcastValidationError: If nobody is selected or the message is blank.
    """
    selection = RecipientSelection(results)
    if selected_ids is not None:
        selection.replace(selected_ids)

    if len(selection) == 0:
        raise BroadcastValidationError("Please select at least one investor")
    if not message or not message.strip():
        raise BroadcastValidationError("Please enter a message")

    return Broadcast(
        listing=listing,
        channel=channel,
        message=message,
        recipients=tuple(selection.selected_results()),
    )


@dataclass
class DispatchReceipt:
    """Outcome of handing a broadcast to a dispatcher."""

    channel: BroadcastChannel
    recipient_count: int
    delivered: bool
    activities: list[ActivityRecord] = field(default_factory=list)
    dispatched_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "channel": self.channel.value,
            "recipient_count": self.recipient_count,
            "delivered": self.delivered,
            "activities": [a.to_dict() for a in self.activities],
            "dispatched_at": self.dispatched_at.isoformat(),
        }


class BroadcastDispatcher(ABC):
    """Abstract base class for broadcast delivery."""

    @abstractmethod
    def dispatch(self, broadcast: Broadcast) -> DispatchReceipt:
        """
        Deliver a broadcast to its recipients.

        Args:
            broadcast: A validated broadcast.

        Returns:
            DispatchReceipt with the activities to log.
        """
        pass


class PreviewDispatcher(BroadcastDispatcher):
    """
    Records a broadcast without delivering it.

    No email or SMS provider is wired in; the receipt carries the activity
    records so the caller can still log the outreach.
    """

    def dispatch(self, broadcast: Broadcast) -> DispatchReceipt:
        logger.info(
            "Preview broadcast via %s to %d investor(s) about %s",
            broadcast.channel.value,
            broadcast.recipient_count,
            broadcast.listing.address or broadcast.listing.id,
        )
        if broadcast.segments and broadcast.segments > 1:
            logger.warning(
                "SMS broadcast will be sent as %d segments", broadcast.segments
            )
        return DispatchReceipt(
            channel=broadcast.channel,
            recipient_count=broadcast.recipient_count,
            delivered=False,
            activities=broadcast.activity_records(),
        )
