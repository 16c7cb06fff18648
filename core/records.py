"""
CRM Records - Backend Row Mapping

Maps investor and property rows from the data-storage API onto the
Match Engine's input types. Rows are plain dicts keyed by column name.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Iterable, Optional

from core.errors import InvalidArgumentError
from core.matching.models import (
    Buyer,
    InvestorStatus,
    InvestorType,
    Listing,
    PropertyType,
)


logger = logging.getLogger(__name__)


# Property statuses that may still be offered to investors
BROADCAST_PROPERTY_STATUSES: Final[frozenset[str]] = frozenset({
    "lead",
    "evaluating",
    "offer_made",
})


# =============================================================================
# Field Helpers
# =============================================================================


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InvalidArgumentError(f"Expected a whole number, got {value!r}") from None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Expected a number, got {value!r}") from None


def _price(value: Any) -> Optional[float]:
    """Asking price as stored; whole-dollar floats become ints."""
    number = _optional_float(value)
    if number is not None and number.is_integer():
        return int(number)
    return number


def _parse_tags(values: Optional[Iterable[str]], parser, row_id: str, column: str) -> frozenset:
    """Parse a tag array column, dropping unknown tags with a warning."""
    if isinstance(values, str):
        values = [values]
    parsed = set()
    for raw in values or ():
        tag = parser(raw) if isinstance(raw, str) else None
        if tag is None:
            logger.warning("Dropping unknown %s tag %r on record %s", column, raw, row_id)
            continue
        parsed.add(tag)
    return frozenset(parsed)


# =============================================================================
# Row Mapping
# =============================================================================


def listing_from_row(row: dict[str, Any]) -> Listing:
    """
    Build a Listing from a property row.

    A blank property type maps to None; the engine rejects it at scoring
    time. An unrecognised property type is an InvalidArgumentError.
    """
    raw_type = _text(row.get("property_type"))
    property_type = None
    if raw_type:
        property_type = PropertyType.from_string(raw_type)
        if property_type is None:
            raise InvalidArgumentError(f"Unknown property type: {raw_type!r}")

    return Listing(
        asking_price=_price(row.get("asking_price")),
        property_type=property_type,
        id=_text(row.get("id")),
        address=_text(row.get("address")),
        city=_text(row.get("city")),
        bedrooms=_optional_int(row.get("bedrooms")),
        bathrooms=_optional_float(row.get("bathrooms")),
        arv=_optional_int(row.get("arv")),
        estimated_repairs=_optional_int(
            row.get("estimated_repairs", row.get("repair_costs"))
        ),
    )


def buyer_from_row(row: dict[str, Any]) -> Buyer:
    """
    Build a Buyer from an investor row.

    Null tag arrays become empty sets. Unknown status values raise
    InvalidArgumentError.
    """
    row_id = _text(row.get("id"))
    return Buyer(
        id=row_id,
        name=_text(row.get("name")),
        email=_text(row.get("email")),
        phone=_text(row.get("phone")),
        min_budget=_optional_int(row.get("min_budget")),
        max_budget=_optional_int(row.get("max_budget")),
        preferred_property_types=_parse_tags(
            row.get("preferred_property_types"),
            PropertyType.from_string,
            row_id,
            "preferred_property_types",
        ),
        investor_types=_parse_tags(
            row.get("investor_type"),
            InvestorType.from_string,
            row_id,
            "investor_type",
        ),
        status=row.get("status") or InvestorStatus.ACTIVE.value,
    )


# =============================================================================
# Eligibility
# =============================================================================


def active_buyers(buyers: Iterable[Buyer]) -> list[Buyer]:
    """Keep only active buyers, preserving order."""
    return [b for b in buyers if b.is_active]


def is_broadcastable(row: dict[str, Any]) -> bool:
    """True if the property row may be offered to investors."""
    return _text(row.get("status")).lower() in BROADCAST_PROPERTY_STATUSES


def broadcastable_listings(rows: Iterable[dict[str, Any]]) -> list[Listing]:
    """Map property rows still open for broadcast, preserving order."""
    return [listing_from_row(row) for row in rows if is_broadcastable(row)]
