"""
Match & Broadcast Routes - JSON API

Request bodies mirror the backend's property and investor rows. The caller
fetches the rows; these routes only score, compose and validate.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from core import (
    AUTO_SELECT_THRESHOLD,
    BroadcastChannel,
    BroadcastValidationError,
    InvalidArgumentError,
    PreviewDispatcher,
    active_buyers,
    buyer_from_row,
    compose_default_message,
    listing_from_row,
    prepare_broadcast,
    score_matches,
)
from core.broadcast import sms_segment_count
from core.records import BROADCAST_PROPERTY_STATUSES, is_broadcastable
from reporting import MatchReportGenerator
from utils.config import Config


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api", tags=["matching"])
config = Config.load()
dispatcher = PreviewDispatcher()


# =============================================================================
# API Request Models
# =============================================================================


class PropertyInput(BaseModel):
    """A property row."""
    id: str = ""
    address: str = ""
    city: str = ""
    property_type: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    asking_price: Optional[float] = None
    arv: Optional[int] = None
    estimated_repairs: Optional[int] = None
    status: Optional[str] = None


class InvestorInput(BaseModel):
    """An investor row."""
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    investor_type: Optional[List[str]] = None
    preferred_property_types: Optional[List[str]] = None
    min_budget: Optional[int] = None
    max_budget: Optional[int] = None
    status: str = "active"


class MatchRequest(BaseModel):
    """Request body for scoring investors against a property."""
    property: PropertyInput
    investors: List[InvestorInput] = []


class PreviewRequest(BaseModel):
    """Request body for the default broadcast message."""
    property: PropertyInput
    channel: BroadcastChannel = BroadcastChannel.EMAIL


class BroadcastRequest(BaseModel):
    """Request body for sending a broadcast."""
    property: PropertyInput
    investors: List[InvestorInput] = []
    selected_ids: Optional[List[str]] = Field(
        default=None,
        description="Investor ids to send to; omitted = default selection",
    )
    channel: BroadcastChannel = BroadcastChannel.EMAIL
    message: str = ""


# =============================================================================
# Helpers
# =============================================================================


def _rank(body: MatchRequest | BroadcastRequest):
    """Map rows and score active investors. Raises HTTPException(400)."""
    try:
        listing = listing_from_row(body.property.model_dump())
        buyers = active_buyers(buyer_from_row(inv.model_dump()) for inv in body.investors)
        return listing, score_matches(listing, buyers)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Routes
# =============================================================================


@router.post("/matches")
async def match_investors(body: MatchRequest):
    """
    Rank investors for a property.

    Returns matched investors (score > 0), best first, with tier and
    default selection flag.
    """
    listing, results = _rank(body)
    return JSONResponse({
        "property_id": listing.id,
        "auto_select_threshold": AUTO_SELECT_THRESHOLD,
        "total_count": len(results),
        "matches": [r.to_dict() for r in results],
    })


@router.post("/broadcast/preview")
async def preview_broadcast(body: PreviewRequest):
    """Default message for a property on the chosen channel."""
    try:
        listing = listing_from_row(body.property.model_dump())
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    message = compose_default_message(listing, body.channel, config.currency)
    return JSONResponse({
        "channel": body.channel.value,
        "message": message,
        "length": len(message),
        "sms_segments": sms_segment_count(message) if body.channel is BroadcastChannel.SMS else None,
    })


@router.post("/broadcast")
async def send_broadcast(body: BroadcastRequest):
    """
    Validate and dispatch a broadcast.

    Returns the activity records to log, one per recipient.
    """
    row = body.property.model_dump()
    if row.get("status") and not is_broadcastable(row):
        raise HTTPException(
            status_code=400,
            detail=f"Property status {row['status']!r} is not open for broadcast "
            f"(expected one of: {', '.join(sorted(BROADCAST_PROPERTY_STATUSES))})",
        )

    listing, results = _rank(body)
    try:
        broadcast = prepare_broadcast(
            listing,
            results,
            body.selected_ids,
            body.channel,
            body.message,
        )
    except (InvalidArgumentError, BroadcastValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    receipt = dispatcher.dispatch(broadcast)
    return JSONResponse({"success": True, **receipt.to_dict()})


@router.post("/reports/matches")
async def match_report(body: MatchRequest):
    """Ranked matches for a property as a PDF match sheet."""
    listing, results = _rank(body)
    generator = MatchReportGenerator(output_dir=config.reports_dir, currency=config.currency)
    pdf_bytes = generator.generate_to_buffer(listing, results)
    filename = f"MATCH-{listing.id or 'listing'}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
