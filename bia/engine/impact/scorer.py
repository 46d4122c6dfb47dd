"""
Temporal Impact Scorer — Weighted Criticality over Impact Time Series.

This module turns a process's Temporal Impact Matrix (severity 0-5 per
timeline point and impact category) into:

- a worst-case severity per category over the whole planning horizon,
- a weighted criticality score: Σ(max[c] · weight[c]) / Σ weight[c],
- a suggested MTPD: the earliest timeline offset at which any category
  reaches the configured impact threshold.

Timeline points are scanned in ascending offset order and the first
breach wins, even when a later point dips back below the threshold.

Category weights are percentages that must total 100. When they do not,
weighting is skipped and the score is reported as 0.

Version: impact_scorer_v1
"""

from typing import Optional, Sequence

import numpy as np
import structlog

from bia.models.entities import AnalysisSnapshot, ImpactCategory, TemporalImpactMatrix, TimelinePoint
from bia.models.enums import ImpactLevel
from bia.models.impact import ProcessImpactScore

logger = structlog.get_logger()


# Lower bound of each impact band, most severe first
IMPACT_LEVEL_BANDS = [
    (4.5, ImpactLevel.CRITICAL),
    (3.5, ImpactLevel.HIGH),
    (2.5, ImpactLevel.MEDIUM),
    (1.5, ImpactLevel.LOW),
    (0.5, ImpactLevel.MINIMAL),
]

WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 0.01


def classify_impact_level(score: float) -> ImpactLevel:
    """
    Band a 0-5 weighted score into a qualitative impact level.

    Args:
        score: Weighted impact score

    Returns:
        ImpactLevel for the score
    """
    for lower_bound, level in IMPACT_LEVEL_BANDS:
        if score >= lower_bound:
            return level
    return ImpactLevel.NONE


def validate_category_weights(categories: Sequence[ImpactCategory]) -> bool:
    """
    Check that impact category weights total 100 percent.

    Args:
        categories: Organization impact categories

    Returns:
        True when the weights total 100 (within 0.01)
    """
    total = sum(c.weight for c in categories)
    return abs(total - WEIGHT_TOTAL) <= WEIGHT_TOLERANCE


class TemporalImpactScorer:
    """
    Scores processes from their temporal impact matrices.

    Stateless apart from its configuration; one scorer can be shared
    across snapshots and threads.

    Attributes:
        impact_threshold: Severity (1-5) at which a timeline point is intolerable
        enforce_weight_total: Report 0 when category weights do not total 100
        logger: Structured logger

    Example:
        >>> scorer = TemporalImpactScorer(impact_threshold=3)
        >>> score = scorer.score_process("p1", matrix, categories, timeline_points)
        >>> print(score.weighted_score, score.suggested_mtpd)
    """

    DEFAULT_THRESHOLD = 3

    def __init__(
        self,
        impact_threshold: int = DEFAULT_THRESHOLD,
        enforce_weight_total: bool = True,
    ):
        """
        Initialize the scorer.

        Args:
            impact_threshold: Severity (1-5) that defines an intolerable impact
            enforce_weight_total: Skip weighting when weights do not total 100

        Raises:
            ValueError: If impact_threshold is outside 1-5
        """
        if not 1 <= impact_threshold <= 5:
            raise ValueError(
                f"impact_threshold must be between 1 and 5, got {impact_threshold}"
            )
        self.impact_threshold = impact_threshold
        self.enforce_weight_total = enforce_weight_total
        self.logger = structlog.get_logger()

    # =========================================================================
    # Per-category worst case
    # =========================================================================

    def max_impact_per_category(
        self,
        matrix: Optional[TemporalImpactMatrix],
        categories: Sequence[ImpactCategory],
    ) -> dict[str, int]:
        """
        Worst-case severity of each category over every assessed timeline point.

        Args:
            matrix: The process's impact matrix, or None if unassessed
            categories: Organization impact categories

        Returns:
            {category_id: max severity}; all zeros for an unassessed process
        """
        if not categories:
            return {}

        rows = list(matrix.values.values()) if matrix is not None else []
        if not rows:
            return {c.id: 0 for c in categories}

        grid = np.array(
            [[row.get(c.id, 0) for c in categories] for row in rows],
            dtype=int,
        )
        worst = grid.max(axis=0)
        return {c.id: int(worst[i]) for i, c in enumerate(categories)}

    # =========================================================================
    # Weighted score
    # =========================================================================

    def weighted_score(
        self,
        max_impacts: dict[str, int],
        categories: Sequence[ImpactCategory],
    ) -> float:
        """
        Weight-average the worst-case severities.

        Args:
            max_impacts: Worst-case severity per category id
            categories: Organization impact categories (with weights)

        Returns:
            Score in [0, 5] rounded to 2 decimals; 0 when there is nothing to weigh
        """
        if not categories:
            return 0.0

        weights = np.array([c.weight for c in categories], dtype=float)
        weight_sum = float(weights.sum())
        if weight_sum <= 0.0:
            return 0.0

        if self.enforce_weight_total and not validate_category_weights(categories):
            self.logger.warning(
                "category_weights_invalid",
                weight_total=round(weight_sum, 4),
                expected_total=WEIGHT_TOTAL,
                category_count=len(categories),
            )
            return 0.0

        values = np.array([max_impacts.get(c.id, 0) for c in categories], dtype=float)
        score = float(np.dot(values, weights) / weight_sum)
        return round(score, 2)

    # =========================================================================
    # MTPD suggestion
    # =========================================================================

    def suggest_mtpd(
        self,
        matrix: Optional[TemporalImpactMatrix],
        categories: Sequence[ImpactCategory],
        timeline_points: Sequence[TimelinePoint],
        threshold: Optional[int] = None,
    ) -> Optional[float]:
        """
        Earliest timeline offset at which any category reaches the threshold.

        Timeline points are evaluated in ascending offset order and the
        search stops at the first breach.

        Args:
            matrix: The process's impact matrix, or None if unassessed
            categories: Organization impact categories
            timeline_points: Configured timeline points (any order)
            threshold: Override of the configured impact threshold

        Returns:
            Offset in hours of the first breaching point, or None

        Raises:
            ValueError: If threshold is outside 1-5
        """
        threshold = self.impact_threshold if threshold is None else threshold
        if not 1 <= threshold <= 5:
            raise ValueError(f"threshold must be between 1 and 5, got {threshold}")

        if matrix is None or not categories or not timeline_points:
            return None

        ordered = sorted(timeline_points, key=lambda p: p.offset_hours)
        grid = np.array(
            [[matrix.severity(p.id, c.id) for c in categories] for p in ordered],
            dtype=int,
        )
        worst_per_point = grid.max(axis=1)
        breaches = np.flatnonzero(worst_per_point >= threshold)
        if breaches.size == 0:
            return None

        return ordered[int(breaches[0])].offset_hours

    # =========================================================================
    # Full process score
    # =========================================================================

    def score_process(
        self,
        process_id: str,
        matrix: Optional[TemporalImpactMatrix],
        categories: Sequence[ImpactCategory],
        timeline_points: Sequence[TimelinePoint],
    ) -> ProcessImpactScore:
        """
        Compute the complete impact profile of one process.

        Args:
            process_id: Process being scored
            matrix: The process's impact matrix, or None if unassessed
            categories: Organization impact categories
            timeline_points: Configured timeline points

        Returns:
            ProcessImpactScore (zero-valued for an unassessed process)
        """
        max_impacts = self.max_impact_per_category(matrix, categories)
        score = self.weighted_score(max_impacts, categories)
        mtpd = self.suggest_mtpd(matrix, categories, timeline_points)

        highest_category = None
        highest_value = 0
        for category in categories:
            value = max_impacts.get(category.id, 0)
            if value > highest_value:
                highest_category, highest_value = category.id, value

        result = ProcessImpactScore(
            process_id=process_id,
            max_impact_per_category=max_impacts,
            weighted_score=score,
            suggested_mtpd=mtpd,
            impact_level=classify_impact_level(score),
            highest_category=highest_category,
            assessed=matrix is not None and bool(matrix.values),
        )

        self.logger.debug(
            "process_impact_scored",
            process_id=process_id,
            weighted_score=score,
            suggested_mtpd=mtpd,
            highest_category=highest_category,
        )

        return result

    def score_all(self, snapshot: AnalysisSnapshot) -> dict[str, ProcessImpactScore]:
        """
        Score every process in a snapshot.

        Args:
            snapshot: Analysis snapshot

        Returns:
            {process_id: ProcessImpactScore}
        """
        scores = {
            process.id: self.score_process(
                process.id,
                snapshot.impact_matrices.get(process.id),
                snapshot.categories,
                snapshot.timeline_points,
            )
            for process in snapshot.processes
        }

        self.logger.info(
            "impact_scoring_complete",
            process_count=len(scores),
            assessed_count=sum(1 for s in scores.values() if s.assessed),
            category_count=len(snapshot.categories),
            weights_valid=validate_category_weights(snapshot.categories),
        )

        return scores
