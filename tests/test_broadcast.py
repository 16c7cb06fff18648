"""
Tests for Investor Broadcast

Tests covering:
1. Default email and SMS messages
2. SMS segment counting
3. Recipient selection starts from the auto-select threshold
4. Validation of empty selections and blank messages
5. One activity record per recipient
"""

import logging
import pytest

from core.errors import BroadcastValidationError, InvalidArgumentError
from core.matching import Buyer, InvestorType, Listing, PropertyType, score_matches
from core.broadcast import (
    SMS_SEGMENT_LENGTH,
    BroadcastChannel,
    PreviewDispatcher,
    RecipientSelection,
    compose_default_message,
    prepare_broadcast,
    sms_segment_count,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def listing():
    return Listing(
        id="prop-9",
        address="301 Maple Dr",
        city="Akron",
        asking_price=95000,
        property_type=PropertyType.TOWNHOUSE,
        bedrooms=3,
        bathrooms=1.5,
        arv=160000,
        estimated_repairs=25000,
    )


@pytest.fixture
def results(listing):
    """Three matches: 100, 70 and 40 points."""
    buyers = [
        Buyer(id="fair", name="Fair Fund"),
        Buyer(
            id="top",
            name="Top Capital",
            preferred_property_types=frozenset({PropertyType.TOWNHOUSE}),
            investor_types=frozenset({InvestorType.FIX_AND_FLIP}),
        ),
        Buyer(id="good", name="Good Homes", investor_types=frozenset({InvestorType.BRRRR})),
    ]
    return score_matches(listing, buyers)


# =============================================================================
# Test: Message Composition
# =============================================================================


class TestDefaultMessage:

    def test_email_includes_property_details(self, listing):
        message = compose_default_message(listing, BroadcastChannel.EMAIL)

        assert message.startswith("New Investment Opportunity: 301 Maple Dr")
        assert "Address: 301 Maple Dr, Akron" in message
        assert "Bedrooms: 3" in message
        assert "Bathrooms: 1.5" in message
        assert "Type: townhouse" in message
        assert "Asking Price: $95,000" in message
        assert "ARV: $160,000" in message
        assert "Est. Repairs: $25,000" in message

    def test_email_marks_missing_values(self):
        listing = Listing(asking_price=70000, property_type=None, address="9 Pine Ct")

        message = compose_default_message(listing, BroadcastChannel.EMAIL)

        assert "Bedrooms: N/A" in message
        assert "Type: N/A" in message
        assert "ARV: N/A" in message

    def test_zero_rooms_read_as_not_available(self):
        lot = Listing(
            asking_price=40000,
            property_type=PropertyType.LAND,
            address="Lot 14 Ridge Rd",
            bedrooms=0,
            bathrooms=0,
        )

        email = compose_default_message(lot, BroadcastChannel.EMAIL)
        sms = compose_default_message(lot, BroadcastChannel.SMS)

        assert "Bedrooms: N/A" in email
        assert "Bathrooms: N/A" in email
        assert sms.startswith("New Deal! N/Abd/N/Aba at Lot 14 Ridge Rd")

    def test_sms_teaser(self, listing):
        message = compose_default_message(listing, BroadcastChannel.SMS)

        assert message == (
            "New Deal! 3bd/1.5ba at 301 Maple Dr - $95,000. "
            "ARV $160,000. Interested? Call me!"
        )

    @pytest.mark.parametrize(
        "length, segments",
        [(0, 0), (1, 1), (SMS_SEGMENT_LENGTH, 1), (SMS_SEGMENT_LENGTH + 1, 2), (480, 3)],
    )
    def test_sms_segment_count(self, length, segments):
        assert sms_segment_count("x" * length) == segments


# =============================================================================
# Test: Recipient Selection
# =============================================================================


class TestRecipientSelection:

    def test_starts_with_default_selection(self, results):
        selection = RecipientSelection(results)

        assert selection.selected_ids == ["top", "good"]
        assert "fair" not in selection

    def test_toggle(self, results):
        selection = RecipientSelection(results)

        assert selection.toggle("fair") is True
        assert selection.toggle("top") is False
        assert selection.selected_ids == ["good", "fair"]

    def test_select_all_and_deselect_all(self, results):
        selection = RecipientSelection(results)

        selection.select_all()
        assert selection.selected_ids == ["top", "good", "fair"]

        selection.deselect_all()
        assert len(selection) == 0

    def test_unknown_id_rejected(self, results):
        selection = RecipientSelection(results)

        with pytest.raises(InvalidArgumentError):
            selection.toggle("stranger")

    def test_duplicate_ids_rejected(self, listing):
        twins = [
            Buyer(id="dup", name="First", investor_types=frozenset({InvestorType.FIX_AND_FLIP})),
            Buyer(id="dup", name="Second", investor_types=frozenset({InvestorType.FIX_AND_FLIP})),
        ]

        with pytest.raises(InvalidArgumentError, match="dup"):
            RecipientSelection(score_matches(listing, twins))

    def test_blank_id_rejected(self, listing):
        anonymous = [Buyer(id="", investor_types=frozenset({InvestorType.FIX_AND_FLIP}))]

        with pytest.raises(InvalidArgumentError):
            RecipientSelection(score_matches(listing, anonymous))


# =============================================================================
# Test: Broadcast Validation and Activities
# =============================================================================


class TestPrepareBroadcast:

    def test_default_recipients_used_when_none_given(self, listing, results):
        broadcast = prepare_broadcast(listing, results, None, BroadcastChannel.EMAIL, "Hi")

        assert [r.buyer.id for r in broadcast.recipients] == ["top", "good"]

    def test_explicit_selection_in_rank_order(self, listing, results):
        broadcast = prepare_broadcast(
            listing, results, ["fair", "top"], BroadcastChannel.SMS, "Deal!"
        )

        assert [r.buyer.id for r in broadcast.recipients] == ["top", "fair"]

    def test_empty_selection_rejected(self, listing, results):
        with pytest.raises(BroadcastValidationError, match="select at least one investor"):
            prepare_broadcast(listing, results, [], BroadcastChannel.EMAIL, "Hi")

    def test_no_matches_rejected(self, listing):
        with pytest.raises(BroadcastValidationError):
            prepare_broadcast(listing, [], None, BroadcastChannel.EMAIL, "Hi")

    @pytest.mark.parametrize("message", ["", "   \n"])
    def test_blank_message_rejected(self, listing, results, message):
        with pytest.raises(BroadcastValidationError, match="enter a message"):
            prepare_broadcast(listing, results, None, BroadcastChannel.EMAIL, message)

    def test_unmatched_recipient_rejected(self, listing, results):
        with pytest.raises(InvalidArgumentError):
            prepare_broadcast(listing, results, ["nobody"], BroadcastChannel.EMAIL, "Hi")

    def test_one_activity_per_recipient(self, listing, results):
        broadcast = prepare_broadcast(listing, results, None, BroadcastChannel.SMS, "Deal!")

        activities = broadcast.activity_records()

        assert [a.related_to_id for a in activities] == ["top", "good"]
        for activity in activities:
            assert activity.activity_type == "sms"
            assert activity.related_to_type == "investor"
            assert activity.created_by == "System"
            assert activity.description == "Broadcast sent about 301 Maple Dr: Deal!..."

    def test_activity_description_truncates_message(self, listing, results):
        message = "A" * 250
        broadcast = prepare_broadcast(listing, results, None, BroadcastChannel.EMAIL, message)

        description = broadcast.activity_records()[0].description

        assert description == f"Broadcast sent about 301 Maple Dr: {'A' * 200}..."

    def test_segments_only_for_sms(self, listing, results):
        email = prepare_broadcast(listing, results, None, BroadcastChannel.EMAIL, "x" * 200)
        sms = prepare_broadcast(listing, results, None, BroadcastChannel.SMS, "x" * 200)

        assert email.segments is None
        assert sms.segments == 2


class TestPreviewDispatcher:

    def test_receipt_carries_activities(self, listing, results, caplog):
        broadcast = prepare_broadcast(listing, results, None, BroadcastChannel.EMAIL, "Hello")

        with caplog.at_level(logging.INFO, logger="core.broadcast.dispatch"):
            receipt = PreviewDispatcher().dispatch(broadcast)

        assert receipt.delivered is False
        assert receipt.recipient_count == 2
        assert len(receipt.activities) == 2
        assert "2 investor(s)" in caplog.text

        payload = receipt.to_dict()
        assert payload["channel"] == "email"
        assert payload["activities"][0]["related_to_id"] == "top"
