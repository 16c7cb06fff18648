"""
Data models for the Match Engine.

Defines the listing and buyer inputs, the closed tag sets used for
comparison, and the scored match output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from core.errors import InvalidArgumentError


# =============================================================================
# Enumerations
# =============================================================================


class PropertyType(Enum):
    """
    Property type classification.

    Matched by exact membership only.
    """
    SINGLE_FAMILY = "single-family"
    MULTI_FAMILY = "multi-family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    LAND = "land"

    @classmethod
    def from_string(cls, value: str) -> Optional["PropertyType"]:
        """Convert string to PropertyType, case-insensitive."""
        normalised = value.lower().strip().replace("_", "-").replace(" ", "-")
        for member in cls:
            if member.value == normalised:
                return member
        return None


class InvestorType(Enum):
    """Investment strategy declared by an investor."""
    BRRRR = "BRRRR"
    FIX_AND_FLIP = "fix-and-flip"
    BUY_AND_HOLD = "buy-and-hold"
    WHOLESALE = "wholesale"

    @classmethod
    def from_string(cls, value: str) -> Optional["InvestorType"]:
        """Convert string to InvestorType, case-insensitive."""
        normalised = value.lower().strip().replace("_", "-").replace(" ", "-")
        for member in cls:
            if member.value.lower() == normalised:
                return member
        return None


class InvestorStatus(Enum):
    """Contact status of an investor record."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DO_NOT_CONTACT = "do_not_contact"


class MatchTier(Enum):
    """
    Display bucket derived from a match score.

    >= 80: Excellent
    60-79: Good
    40-59: Fair
    < 40: Weak
    """
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    WEAK = "weak"


# =============================================================================
# Coercion Helpers
# =============================================================================


def _coerce_property_type(value) -> PropertyType:
    if isinstance(value, PropertyType):
        return value
    if isinstance(value, str):
        parsed = PropertyType.from_string(value)
        if parsed is not None:
            return parsed
    raise InvalidArgumentError(f"Unknown property type: {value!r}")


def _coerce_investor_type(value) -> InvestorType:
    if isinstance(value, InvestorType):
        return value
    if isinstance(value, str):
        parsed = InvestorType.from_string(value)
        if parsed is not None:
            return parsed
    raise InvalidArgumentError(f"Unknown investor type: {value!r}")


def _coerce_status(value) -> InvestorStatus:
    if isinstance(value, InvestorStatus):
        return value
    try:
        return InvestorStatus(str(value).lower().strip())
    except ValueError:
        raise InvalidArgumentError(f"Unknown investor status: {value!r}") from None


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class Listing:
    """
    A property being offered to buyers.

    Only asking_price and property_type take part in scoring. Both may be
    None here so that the engine, not the constructor, rejects them.
    """

    asking_price: Optional[float]
    property_type: Optional[PropertyType]

    # Descriptive fields
    id: str = ""
    address: str = ""
    city: str = ""
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    arv: Optional[int] = None
    estimated_repairs: Optional[int] = None

    def __post_init__(self):
        if self.property_type is not None:
            object.__setattr__(self, "property_type", _coerce_property_type(self.property_type))


@dataclass(frozen=True)
class Buyer:
    """An investor evaluated for fit against a listing."""

    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    min_budget: Optional[int] = None
    max_budget: Optional[int] = None
    preferred_property_types: FrozenSet[PropertyType] = field(default_factory=frozenset)
    investor_types: FrozenSet[InvestorType] = field(default_factory=frozenset)
    status: InvestorStatus = InvestorStatus.ACTIVE

    def __post_init__(self):
        object.__setattr__(
            self,
            "preferred_property_types",
            frozenset(_coerce_property_type(v) for v in self.preferred_property_types or ()),
        )
        object.__setattr__(
            self,
            "investor_types",
            frozenset(_coerce_investor_type(v) for v in self.investor_types or ()),
        )
        object.__setattr__(self, "status", _coerce_status(self.status))

    @property
    def is_active(self) -> bool:
        return self.status is InvestorStatus.ACTIVE


# =============================================================================
# Outputs
# =============================================================================


@dataclass(frozen=True)
class MatchBreakdown:
    """Points awarded per criterion."""

    budget: int
    property_type: int
    investor_type: int

    @property
    def total(self) -> int:
        return self.budget + self.property_type + self.investor_type

    def to_dict(self) -> dict:
        return {
            "budget": self.budget,
            "property_type": self.property_type,
            "investor_type": self.investor_type,
        }


@dataclass(frozen=True)
class MatchResult:
    """A buyer annotated with its score against one listing."""

    buyer: Buyer
    score: int  # 0-100
    tier: MatchTier
    default_selected: bool
    breakdown: MatchBreakdown

    @property
    def badge(self) -> str:
        """Percentage badge shown next to the buyer."""
        return f"{self.score}% Match"

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "investor_id": self.buyer.id,
            "name": self.buyer.name,
            "email": self.buyer.email,
            "phone": self.buyer.phone,
            "min_budget": self.buyer.min_budget,
            "max_budget": self.buyer.max_budget,
            "score": self.score,
            "tier": self.tier.value,
            "default_selected": self.default_selected,
            "breakdown": self.breakdown.to_dict(),
        }

