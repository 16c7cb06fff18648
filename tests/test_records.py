"""
Tests for CRM record mapping

Tests covering:
- Investor rows with null arrays and unknown tags
- Property rows with blank or unknown types
- Active investor and open property filters
"""

import logging
import pytest

from core.errors import InvalidArgumentError
from core.matching import InvestorStatus, InvestorType, PropertyType, score_matches
from core.records import (
    BROADCAST_PROPERTY_STATUSES,
    active_buyers,
    broadcastable_listings,
    buyer_from_row,
    listing_from_row,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def investor_row():
    return {
        "id": "inv-7",
        "name": "Dana Cruz",
        "email": "dana@example.com",
        "phone": "555-0107",
        "investor_type": ["buy-and-hold", "BRRRR"],
        "preferred_property_types": ["single-family", "multi-family"],
        "min_budget": 80000,
        "max_budget": 250000,
        "status": "active",
    }


@pytest.fixture
def property_row():
    return {
        "id": "prop-3",
        "address": "48 Orchard Ave",
        "city": "Toledo",
        "property_type": "multi-family",
        "bedrooms": 4,
        "bathrooms": 2.5,
        "asking_price": 185000,
        "arv": 260000,
        "repair_costs": 30000,
        "status": "evaluating",
    }


# =============================================================================
# Test: Investor Rows
# =============================================================================


class TestBuyerFromRow:

    def test_maps_all_fields(self, investor_row):
        buyer = buyer_from_row(investor_row)

        assert buyer.id == "inv-7"
        assert buyer.name == "Dana Cruz"
        assert buyer.min_budget == 80000
        assert buyer.max_budget == 250000
        assert buyer.investor_types == frozenset({InvestorType.BUY_AND_HOLD, InvestorType.BRRRR})
        assert buyer.preferred_property_types == frozenset(
            {PropertyType.SINGLE_FAMILY, PropertyType.MULTI_FAMILY}
        )
        assert buyer.status is InvestorStatus.ACTIVE

    def test_null_arrays_become_empty(self, investor_row):
        investor_row["investor_type"] = None
        investor_row["preferred_property_types"] = None

        buyer = buyer_from_row(investor_row)

        assert buyer.investor_types == frozenset()
        assert buyer.preferred_property_types == frozenset()

    def test_null_budgets_stay_unbounded(self, investor_row):
        investor_row["min_budget"] = None
        investor_row["max_budget"] = None

        buyer = buyer_from_row(investor_row)

        assert buyer.min_budget is None
        assert buyer.max_budget is None

    def test_unknown_tags_dropped_with_warning(self, investor_row, caplog):
        investor_row["investor_type"] = ["house-hacker"]
        investor_row["preferred_property_types"] = ["condo", "castle"]

        with caplog.at_level(logging.WARNING, logger="core.records"):
            buyer = buyer_from_row(investor_row)

        assert buyer.investor_types == frozenset()
        assert buyer.preferred_property_types == frozenset({PropertyType.CONDO})
        assert "house-hacker" in caplog.text
        assert "castle" in caplog.text

    def test_unknown_status_rejected(self, investor_row):
        investor_row["status"] = "archived"

        with pytest.raises(InvalidArgumentError):
            buyer_from_row(investor_row)

    def test_missing_status_defaults_to_active(self, investor_row):
        del investor_row["status"]

        assert buyer_from_row(investor_row).is_active


# =============================================================================
# Test: Property Rows
# =============================================================================


class TestListingFromRow:

    def test_maps_scoring_and_descriptive_fields(self, property_row):
        listing = listing_from_row(property_row)

        assert listing.asking_price == 185000
        assert listing.property_type is PropertyType.MULTI_FAMILY
        assert listing.address == "48 Orchard Ave"
        assert listing.bathrooms == 2.5
        assert listing.estimated_repairs == 30000

    def test_blank_property_type_left_for_engine_to_reject(self, property_row):
        property_row["property_type"] = ""

        listing = listing_from_row(property_row)

        assert listing.property_type is None
        with pytest.raises(InvalidArgumentError):
            score_matches(listing, [])

    def test_unknown_property_type_rejected(self, property_row):
        property_row["property_type"] = "houseboat"

        with pytest.raises(InvalidArgumentError):
            listing_from_row(property_row)

    def test_infinite_whole_number_rejected(self, property_row):
        property_row["arv"] = float("inf")

        with pytest.raises(InvalidArgumentError):
            listing_from_row(property_row)

    def test_missing_price_is_none(self, property_row):
        property_row["asking_price"] = None

        assert listing_from_row(property_row).asking_price is None


# =============================================================================
# Test: Eligibility Filters
# =============================================================================


class TestEligibility:

    def test_active_buyers_filters_and_preserves_order(self, investor_row):
        rows = []
        for i, status in enumerate(["active", "inactive", "active", "do_not_contact"]):
            row = dict(investor_row, id=f"inv-{i}", status=status)
            rows.append(buyer_from_row(row))

        assert [b.id for b in active_buyers(rows)] == ["inv-0", "inv-2"]

    def test_broadcast_statuses(self):
        assert BROADCAST_PROPERTY_STATUSES == {"lead", "evaluating", "offer_made"}

    def test_broadcastable_listings(self, property_row):
        rows = [
            dict(property_row, id="a", status="lead"),
            dict(property_row, id="b", status="closed"),
            dict(property_row, id="c", status="offer_made"),
            dict(property_row, id="d", status="under_contract"),
        ]

        assert [l.id for l in broadcastable_listings(rows)] == ["a", "c"]
