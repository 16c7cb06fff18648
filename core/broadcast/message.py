"""
Default broadcast message composition.
"""

import math
from enum import Enum
from typing import Optional

from core.matching.models import Listing
from utils.formatting import NOT_AVAILABLE, format_optional_currency


SMS_SEGMENT_LENGTH = 160


class BroadcastChannel(Enum):
    """Delivery channel for a broadcast."""
    EMAIL = "email"
    SMS = "sms"


def _or_na(value: Optional[object]) -> str:
    # 0 and blanks both read as N/A
    if not value:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compose_email(listing: Listing, currency: str = "USD") -> str:
    """Default email body announcing a listing."""
    property_type = listing.property_type.value if listing.property_type else None
    location = f"{listing.address}, {listing.city}" if listing.city else listing.address

    lines = [
        f"New Investment Opportunity: {listing.address}",
        "",
        "Property Details:",
        f"Address: {location}",
        f"Bedrooms: {_or_na(listing.bedrooms)}",
        f"Bathrooms: {_or_na(listing.bathrooms)}",
        f"Type: {_or_na(property_type)}",
        f"Asking Price: {format_optional_currency(listing.asking_price, currency)}",
        f"ARV: {format_optional_currency(listing.arv, currency)}",
        f"Est. Repairs: {format_optional_currency(listing.estimated_repairs, currency)}",
        "",
        "This is a great opportunity! Reply to this email or call me if you're interested.",
        "",
        "Best regards,",
        "Your Name",
        "Your Company",
        "Your Phone",
    ]
    return "\n".join(lines)


def compose_sms(listing: Listing, currency: str = "USD") -> str:
    """Default one-line SMS teaser for a listing."""
    return (
        f"New Deal! {_or_na(listing.bedrooms)}bd/{_or_na(listing.bathrooms)}ba "
        f"at {listing.address} - {format_optional_currency(listing.asking_price, currency)}. "
        f"ARV {format_optional_currency(listing.arv, currency)}. Interested? Call me!"
    )


def compose_default_message(
    listing: Listing,
    channel: BroadcastChannel,
    currency: str = "USD",
) -> str:
    """
    Compose the default message for a listing on the given channel.

    Args:
        listing: The listing being broadcast.
        channel: Email or SMS.
        currency: Currency code used for amounts.

    Returns:
        Message text, ready for the sender to edit.
    """
    if channel is BroadcastChannel.SMS:
        return compose_sms(listing, currency)
    return compose_email(listing, currency)


def sms_segment_count(message: str) -> int:
    """Number of SMS segments the message will be split into."""
    if not message:
        return 0
    return math.ceil(len(message) / SMS_SEGMENT_LENGTH)
