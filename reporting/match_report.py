"""
Investor Match Sheet PDF Generator

Renders the ranked investor matches for one property as a printable sheet:
1. Property summary
2. Ranked candidates (score badge, tier, default selection)
3. Selection note

Library Choice: ReportLab
- Pure Python
- Deterministic layout for the same input
"""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.matching.engine import AUTO_SELECT_THRESHOLD
from core.matching.models import Listing, MatchResult, MatchTier
from utils.formatting import format_budget_range, format_optional_currency


# =============================================================================
# Color Palette
# =============================================================================


class MatchPalette:
    """Print-friendly colours for the match sheet."""

    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    SLATE = colors.Color(0.35, 0.38, 0.42)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    WHITE = colors.white

    # Tier badges
    EXCELLENT = colors.Color(0.15, 0.4, 0.25)
    EXCELLENT_BG = colors.Color(0.86, 0.96, 0.88)
    GOOD = colors.Color(0.12, 0.25, 0.55)
    GOOD_BG = colors.Color(0.86, 0.91, 0.99)
    FAIR = colors.Color(0.55, 0.42, 0.05)
    FAIR_BG = colors.Color(0.99, 0.96, 0.8)
    WEAK = colors.Color(0.4, 0.4, 0.4)
    WEAK_BG = colors.Color(0.95, 0.95, 0.95)


TIER_COLOURS = {
    MatchTier.EXCELLENT: (MatchPalette.EXCELLENT, MatchPalette.EXCELLENT_BG),
    MatchTier.GOOD: (MatchPalette.GOOD, MatchPalette.GOOD_BG),
    MatchTier.FAIR: (MatchPalette.FAIR, MatchPalette.FAIR_BG),
    MatchTier.WEAK: (MatchPalette.WEAK, MatchPalette.WEAK_BG),
}


@dataclass
class MatchReportSuccess:
    """Returned when the match sheet was written to disk."""

    path: Path
    candidates: int


# =============================================================================
# Style Configuration
# =============================================================================


def get_match_styles() -> dict:
    """Paragraph styles for the match sheet."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name="MatchTitle",
        parent=styles["Normal"],
        fontSize=18,
        leading=22,
        textColor=MatchPalette.CHARCOAL,
        alignment=TA_LEFT,
        fontName="Helvetica-Bold",
        spaceAfter=4 * mm,
    ))

    styles.add(ParagraphStyle(
        name="MatchSectionTitle",
        parent=styles["Normal"],
        fontSize=12,
        leading=16,
        textColor=MatchPalette.CHARCOAL,
        fontName="Helvetica-Bold",
        spaceBefore=12,
        spaceAfter=8,
    ))

    styles.add(ParagraphStyle(
        name="MatchBodyText",
        parent=styles["Normal"],
        fontSize=9,
        leading=13,
        textColor=MatchPalette.CHARCOAL,
        fontName="Helvetica",
        spaceAfter=4,
    ))

    styles.add(ParagraphStyle(
        name="MatchNote",
        parent=styles["Normal"],
        fontSize=8,
        leading=11,
        textColor=MatchPalette.GRAY,
        fontName="Helvetica-Oblique",
    ))

    return styles


class MatchReportGenerator:
    """
    Generates investor match sheets.

    Usage:
        generator = MatchReportGenerator(output_dir=Path("reports"))
        result = generator.generate(listing, score_matches(listing, buyers))
    """

    PAGE_WIDTH, PAGE_HEIGHT = LETTER
    MARGIN = 16 * mm

    def __init__(self, output_dir: Path = Path("reports"), currency: str = "USD"):
        self.output_dir = Path(output_dir)
        self.currency = currency
        self.styles = get_match_styles()

    def generate(self, listing: Listing, results: Sequence[MatchResult]) -> MatchReportSuccess:
        """Write MATCH-<listing id>.pdf and return its location."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"MATCH-{listing.id or 'listing'}.pdf"
        output_path.write_bytes(self.generate_to_buffer(listing, results))
        return MatchReportSuccess(path=output_path, candidates=len(results))

    def generate_to_buffer(self, listing: Listing, results: Sequence[MatchResult]) -> bytes:
        """Generate the PDF and return it as bytes."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=LETTER,
            leftMargin=self.MARGIN,
            rightMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN + 6 * mm,
            title=f"Investor Matches - {listing.address or listing.id}",
            subject="Investor Property Broadcast",
        )

        story = []
        story.extend(self._build_property_summary(listing))
        story.extend(self._build_candidates(results))
        story.extend(self._build_selection_note(results))

        doc.build(story, onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)
        return buffer.getvalue()

    def _draw_footer(self, canvas_obj: canvas.Canvas, doc):
        canvas_obj.saveState()
        canvas_obj.setFont("Helvetica", 7)
        canvas_obj.setFillColor(MatchPalette.GRAY)
        canvas_obj.drawString(self.MARGIN, self.MARGIN, "INVESTOR MATCH SHEET")
        canvas_obj.drawRightString(self.PAGE_WIDTH - self.MARGIN, self.MARGIN, f"{doc.page}")
        canvas_obj.restoreState()

    # =========================================================================
    # Sections
    # =========================================================================

    def _build_property_summary(self, listing: Listing) -> list:
        elements = [Paragraph("Matched Investors", self.styles["MatchTitle"])]

        location = ", ".join(part for part in (listing.address, listing.city) if part)
        property_type = listing.property_type.value if listing.property_type else "N/A"
        rows = [
            ["Property", location or listing.id],
            ["Type", property_type],
            ["Beds / Baths", f"{listing.bedrooms or 0}bd / {listing.bathrooms or 0}ba"],
            ["Asking Price", format_optional_currency(listing.asking_price, self.currency)],
            ["ARV", format_optional_currency(listing.arv, self.currency)],
        ]
        table = Table(rows, colWidths=[35 * mm, 120 * mm])
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("TEXTCOLOR", (0, 0), (0, -1), MatchPalette.SLATE),
            ("TEXTCOLOR", (1, 0), (1, -1), MatchPalette.CHARCOAL),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]))
        elements.append(table)
        return elements

    def _build_candidates(self, results: Sequence[MatchResult]) -> list:
        elements = [Paragraph(f"Candidates ({len(results)})", self.styles["MatchSectionTitle"])]

        if not results:
            elements.append(Paragraph(
                "No investors match this property criteria.",
                self.styles["MatchBodyText"],
            ))
            return elements

        table_data = [["#", "Investor", "Budget", "Match", "Tier", "Selected"]]
        for rank, result in enumerate(results, start=1):
            buyer = result.buyer
            table_data.append([
                str(rank),
                buyer.name or buyer.id,
                format_budget_range(buyer.min_budget, buyer.max_budget, self.currency),
                result.badge,
                result.tier.value.title(),
                "Yes" if result.default_selected else "",
            ])

        table = Table(
            table_data,
            colWidths=[8 * mm, 50 * mm, 50 * mm, 24 * mm, 20 * mm, 18 * mm],
            repeatRows=1,
        )
        table_style = [
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("BACKGROUND", (0, 0), (-1, 0), MatchPalette.CHARCOAL),
            ("TEXTCOLOR", (0, 0), (-1, 0), MatchPalette.WHITE),
            ("TEXTCOLOR", (0, 1), (-1, -1), MatchPalette.CHARCOAL),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, MatchPalette.LIGHT_GRAY),
            ("TOPPADDING", (0, 0), (-1, -1), 2 * mm),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2 * mm),
        ]

        # Colour the badge cell by tier
        for i, result in enumerate(results, start=1):
            text_colour, background = TIER_COLOURS[result.tier]
            table_style.append(("BACKGROUND", (3, i), (3, i), background))
            table_style.append(("TEXTCOLOR", (3, i), (3, i), text_colour))

        table.setStyle(TableStyle(table_style))
        elements.append(table)
        return elements

    def _build_selection_note(self, results: Sequence[MatchResult]) -> list:
        selected = sum(1 for r in results if r.default_selected)
        return [
            Spacer(1, 8),
            Paragraph(
                f"{selected} investor(s) pre-selected. Investors scoring "
                f"{AUTO_SELECT_THRESHOLD}% or more are selected by default.",
                self.styles["MatchNote"],
            ),
        ]
