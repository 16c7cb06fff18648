"""
Match Engine

Scores active investors against a property for the broadcast feature:
budget fit, property-type preference and investor-type presence, ranked
with a fixed auto-selection threshold.
"""

from .models import (
    Buyer,
    InvestorStatus,
    InvestorType,
    Listing,
    MatchBreakdown,
    MatchResult,
    MatchTier,
    PropertyType,
)
from .engine import (
    AUTO_SELECT_THRESHOLD,
    BuyerMatcher,
    default_selection,
    score_matches,
    tier_for_score,
)

__all__ = [
    # Models
    "Buyer",
    "InvestorStatus",
    "InvestorType",
    "Listing",
    "MatchBreakdown",
    "MatchResult",
    "MatchTier",
    "PropertyType",
    # Engine
    "AUTO_SELECT_THRESHOLD",
    "BuyerMatcher",
    "default_selection",
    "score_matches",
    "tier_for_score",
]
