"""
Recovery Objective Deriver — MTPD/RTO/RPO from Temporal Impact.

Suggests recovery objectives for a process from the point in time at
which its impacts become intolerable:

1. MTPD = offset of the first timeline point reaching the impact
   threshold, or the default maximum when none does
2. MTPD is capped at 8h for critical and 16h for high processes
3. RTO = 50% / 65% / 80% of MTPD depending on peak severity
4. RPO = 50% / 75% of RTO depending on peak severity
5. MBCO applies to critical processes and to MTPDs of 4h or less

Version: recovery_deriver_v1
"""

import math
from typing import Optional, Sequence

import structlog

from bia.models.entities import ImpactCategory, Process, TemporalImpactMatrix, TimelinePoint
from bia.models.enums import CriticalityTier
from bia.models.impact import DerivedRecoveryObjective

from .scorer import TemporalImpactScorer

logger = structlog.get_logger()


# MTPD ceilings (hours) by criticality tier
MTPD_CAPS = {
    CriticalityTier.CRITICAL: 8.0,
    CriticalityTier.HIGH: 16.0,
}

MBCO_MTPD_HOURS = 4.0


def _rto_fraction(peak_severity: int) -> float:
    if peak_severity > 3.5:
        return 0.5
    if peak_severity > 2.5:
        return 0.65
    return 0.8


def _rpo_fraction(peak_severity: int) -> float:
    return 0.5 if peak_severity > 3.5 else 0.75


def derive_recovery_objective(
    process: Process,
    matrix: Optional[TemporalImpactMatrix],
    categories: Sequence[ImpactCategory],
    timeline_points: Sequence[TimelinePoint],
    impact_threshold: int = TemporalImpactScorer.DEFAULT_THRESHOLD,
    default_mtpd_hours: float = 72.0,
    scorer: Optional[TemporalImpactScorer] = None,
) -> DerivedRecoveryObjective:
    """
    Derive suggested recovery objectives for a process.

    Args:
        process: Process to derive objectives for
        matrix: The process's impact matrix, or None if unassessed
        categories: Organization impact categories
        timeline_points: Configured timeline points
        impact_threshold: Severity (1-5) that defines an intolerable impact
        default_mtpd_hours: MTPD used when the threshold is never reached
        scorer: Optional scorer to reuse

    Returns:
        DerivedRecoveryObjective with MTPD, RTO and RPO in hours

    Example:
        >>> objective = derive_recovery_objective(process, matrix, categories, points)
        >>> print(objective.mtpd, objective.rto, objective.rpo)
    """
    scorer = scorer or TemporalImpactScorer(impact_threshold=impact_threshold)

    breach = scorer.suggest_mtpd(matrix, categories, timeline_points, threshold=impact_threshold)
    mtpd = breach if breach is not None else default_mtpd_hours

    cap = MTPD_CAPS.get(process.criticality)
    if cap is not None and mtpd > cap:
        mtpd = cap
    mtpd = max(1.0, mtpd)

    max_impacts = scorer.max_impact_per_category(matrix, categories)
    peak = max(max_impacts.values(), default=0)

    rto = max(1.0, float(math.floor(mtpd * _rto_fraction(peak))))
    rpo = max(0.5, float(math.floor(rto * _rpo_fraction(peak))))
    mbco = process.criticality == CriticalityTier.CRITICAL or mtpd <= MBCO_MTPD_HOURS

    logger.debug(
        "recovery_objective_derived",
        process_id=process.id,
        criticality=process.criticality.value,
        mtpd=mtpd,
        rto=rto,
        rpo=rpo,
        peak_severity=peak,
        threshold_breached=breach is not None,
    )

    return DerivedRecoveryObjective(
        process_id=process.id,
        mtpd=mtpd,
        rto=rto,
        rpo=rpo,
        mbco=mbco,
        threshold_breached=breach is not None,
    )
