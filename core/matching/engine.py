"""
Buyer-to-listing match scoring.

Scores candidate buyers against a single listing and ranks them for a
broadcast.
"""

import math
from numbers import Real
from typing import Iterable, List, Optional

from core.errors import InvalidArgumentError

from .models import Buyer, Listing, MatchBreakdown, MatchResult, MatchTier


# Score at or above which a buyer is pre-selected for broadcast.
AUTO_SELECT_THRESHOLD = 60

# Tier lower bounds
TIER_EXCELLENT = 80
TIER_GOOD = 60
TIER_FAIR = 40


def tier_for_score(score: int) -> MatchTier:
    """Map a 0-100 score to its display tier."""
    if score >= TIER_EXCELLENT:
        return MatchTier.EXCELLENT
    elif score >= TIER_GOOD:
        return MatchTier.GOOD
    elif score >= TIER_FAIR:
        return MatchTier.FAIR
    else:
        return MatchTier.WEAK


class BuyerMatcher:
    """
    Scores buyers against a listing.

    Scoring methodology (points, max 100):
    - Budget fit (40): asking price inside the buyer's budget band,
      20 if within 20% outside it
    - Property type (30): listing type is one of the buyer's preferences
    - Investor type (30): buyer has declared at least one strategy

    Stateless; one instance may be shared between callers.
    """

    POINTS_BUDGET = 40
    POINTS_BUDGET_PARTIAL = 20
    POINTS_PROPERTY_TYPE = 30
    POINTS_INVESTOR_TYPE = 30

    # Partial budget credit band, as a fraction of the violated bound
    BUDGET_TOLERANCE = 0.2

    def score(self, listing: Listing, buyer: Buyer) -> MatchResult:
        """
        Score a single buyer.

        Args:
            listing: The listing being offered.
            buyer: The candidate buyer.

        Returns:
            MatchResult, including buyers that score 0.

        Raises:
            InvalidArgumentError: If the listing has no asking price or type.
        """
        self._validate_listing(listing)
        return self._score(listing, buyer)

    def score_batch(self, listing: Listing, buyers: Iterable[Buyer]) -> List[MatchResult]:
        """
        Score and rank buyers for a listing.

        Buyers scoring 0 are dropped. The rest are sorted by score
        descending; equal scores keep their input order.

        Args:
            listing: The listing being offered.
            buyers: Eligible (active) buyers.

        Returns:
            Ranked list of MatchResult.

        Raises:
            InvalidArgumentError: If the listing has no asking price or type.
        """
        self._validate_listing(listing)
        results = [self._score(listing, buyer) for buyer in buyers]
        matched = [r for r in results if r.score > 0]
        # sorted() is stable, including with reverse=True
        return sorted(matched, key=lambda r: r.score, reverse=True)

    def _score(self, listing: Listing, buyer: Buyer) -> MatchResult:
        breakdown = MatchBreakdown(
            budget=self._budget_points(listing.asking_price, buyer.min_budget, buyer.max_budget),
            property_type=self._property_type_points(listing, buyer),
            investor_type=self._investor_type_points(buyer),
        )
        total = breakdown.total
        return MatchResult(
            buyer=buyer,
            score=total,
            tier=tier_for_score(total),
            default_selected=total >= AUTO_SELECT_THRESHOLD,
            breakdown=breakdown,
        )

    def _validate_listing(self, listing: Listing) -> None:
        price = listing.asking_price
        if price is None:
            raise InvalidArgumentError("listing asking_price is required")
        if isinstance(price, bool) or not isinstance(price, Real):
            raise InvalidArgumentError(f"listing asking_price must be numeric, got {price!r}")
        if not math.isfinite(price):
            raise InvalidArgumentError(f"listing asking_price must be finite, got {price!r}")
        if listing.property_type is None:
            raise InvalidArgumentError("listing property_type is required")

    def _budget_points(
        self,
        price: float,
        min_budget: Optional[int],
        max_budget: Optional[int],
    ) -> int:
        """
        Budget fit points.

        A missing bound does not constrain its side. The tolerance band is
        measured against the bound itself, not the gap.
        """
        above_min = min_budget is None or price >= min_budget
        below_max = max_budget is None or price <= max_budget

        if above_min and below_max:
            return self.POINTS_BUDGET

        if not above_min:
            diff = min_budget - price
            if diff < min_budget * self.BUDGET_TOLERANCE:
                return self.POINTS_BUDGET_PARTIAL
        else:
            diff = price - max_budget
            if diff < max_budget * self.BUDGET_TOLERANCE:
                return self.POINTS_BUDGET_PARTIAL

        return 0

    def _property_type_points(self, listing: Listing, buyer: Buyer) -> int:
        if listing.property_type in buyer.preferred_property_types:
            return self.POINTS_PROPERTY_TYPE
        return 0

    def _investor_type_points(self, buyer: Buyer) -> int:
        # Any declared strategy counts; which one is not weighed.
        if buyer.investor_types:
            return self.POINTS_INVESTOR_TYPE
        return 0


_default_matcher = BuyerMatcher()


def score_matches(listing: Listing, buyers: Iterable[Buyer]) -> List[MatchResult]:
    """Rank buyers for a listing with the default matcher."""
    return _default_matcher.score_batch(listing, buyers)


def default_selection(results: Iterable[MatchResult]) -> List[str]:
    """Ids of the buyers pre-selected for broadcast, in ranking order."""
    return [r.buyer.id for r in results if r.default_selected]
