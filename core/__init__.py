"""
Wholesale Match Engine - Core Business Logic

This module provides the broadcast pipeline:
1. Record Mapping (backend rows -> Listing / Buyer)
2. Eligibility (active investors, open properties)
3. Scoring & Ranking (deterministic, stable)
4. Default Selection (auto-select threshold)
5. Broadcast (message, recipients, activity records)
"""

from .errors import InvalidArgumentError, BroadcastValidationError

# Match Engine
from .matching import (
    AUTO_SELECT_THRESHOLD,
    Buyer,
    BuyerMatcher,
    InvestorStatus,
    InvestorType,
    Listing,
    MatchBreakdown,
    MatchResult,
    MatchTier,
    PropertyType,
    default_selection,
    score_matches,
    tier_for_score,
)

# Record mapping
from .records import (
    BROADCAST_PROPERTY_STATUSES,
    active_buyers,
    broadcastable_listings,
    buyer_from_row,
    listing_from_row,
)

# Broadcast
from .broadcast import (
    BroadcastChannel,
    PreviewDispatcher,
    RecipientSelection,
    compose_default_message,
    prepare_broadcast,
)

__all__ = [
    # Errors
    "InvalidArgumentError",
    "BroadcastValidationError",
    # Match Engine
    "AUTO_SELECT_THRESHOLD",
    "Buyer",
    "BuyerMatcher",
    "InvestorStatus",
    "InvestorType",
    "Listing",
    "MatchBreakdown",
    "MatchResult",
    "MatchTier",
    "PropertyType",
    "default_selection",
    "score_matches",
    "tier_for_score",
    # Record mapping
    "BROADCAST_PROPERTY_STATUSES",
    "active_buyers",
    "broadcastable_listings",
    "buyer_from_row",
    "listing_from_row",
    # Broadcast
    "BroadcastChannel",
    "PreviewDispatcher",
    "RecipientSelection",
    "compose_default_message",
    "prepare_broadcast",
]
