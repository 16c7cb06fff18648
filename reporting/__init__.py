"""
Reporting module for the match engine.

Generates printable investor match sheets for a property.

Usage:
    from reporting import MatchReportGenerator

    generator = MatchReportGenerator()
    pdf_bytes = generator.generate_to_buffer(listing, results)
"""

from .match_report import (
    MatchPalette,
    MatchReportGenerator,
    MatchReportSuccess,
    get_match_styles,
)

__all__ = [
    "MatchPalette",
    "MatchReportGenerator",
    "MatchReportSuccess",
    "get_match_styles",
]
