"""
BCDR Gap Analysis.

Components:
    BCDRGapAnalyzer: Reconciles process objectives with resource capabilities
    ResilienceGapAnalyzer: Coverage, compliance and readiness insights
    render_bcdr_report: Plain-text rendering of a BCDR report
"""

from .gap_analyzer import BCDRGapAnalyzer, urgency_bonus
from .report_text import render_bcdr_report
from .resilience_gaps import ResilienceGapAnalyzer

__all__ = [
    "BCDRGapAnalyzer",
    "ResilienceGapAnalyzer",
    "render_bcdr_report",
    "urgency_bonus",
]
