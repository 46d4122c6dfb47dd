"""
Temporal Impact Scoring.

Components:
    TemporalImpactScorer: Worst-case severities, weighted score and suggested MTPD
    derive_recovery_objective: MTPD/RTO/RPO suggestions from the impact profile

Example:
    >>> from bia.engine.impact import TemporalImpactScorer
    >>> scorer = TemporalImpactScorer(impact_threshold=3)
    >>> scores = scorer.score_all(snapshot)
"""

from .recovery import derive_recovery_objective
from .scorer import TemporalImpactScorer, classify_impact_level, validate_category_weights

__all__ = [
    "TemporalImpactScorer",
    "classify_impact_level",
    "validate_category_weights",
    "derive_recovery_objective",
]
