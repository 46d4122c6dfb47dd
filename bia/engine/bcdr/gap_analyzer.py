"""
BCDR Gap Analyzer — Recovery Objective Reconciliation.

Reconciles each process's recovery objectives with the capabilities of
the resources drawn on its saved dependency map, and consolidates the
findings into a readiness report:

1. RTO gaps: resource RTO > process RTO
2. RPO gaps: same for data and systems resources, using RPO
3. Resource SPOFs: resources used by two or more processes
4. Missing dependency mapping: no map, or only the process's own node
5. Cascade impacts: affected processes for every used resource
6. Recovery priority: tier·10 + weighted impact·5 + RTO urgency bonus
7. Readiness score: passed checks / (4 · process count), as a percentage

A process without an RTO (or RPO) sets no requirement and never produces
a gap; a resource without one cannot be compared and is skipped. Gaps
are only reported for strictly greater resource values.

Version: bcdr_gap_v1
"""

import math
from typing import Optional, Sequence

import structlog

from bia.models.bcdr import (
    BCDRReport,
    CascadeImpact,
    MissingDependency,
    RecoveryPriorityEntry,
    ResourceSpof,
    RpoGap,
    RtoGap,
)
from bia.models.entities import BusinessResource, Process, RecoveryObjective
from bia.models.enums import CriticalityTier, ResourceType
from bia.models.impact import ProcessImpactScore
from bia.models.network import NormalizedDependencyMap

logger = structlog.get_logger()


# Recovery priority weights
TIER_PRIORITY_SCORE = {
    CriticalityTier.CRITICAL: 5,
    CriticalityTier.HIGH: 4,
    CriticalityTier.MEDIUM: 3,
}
DEFAULT_TIER_PRIORITY_SCORE = 2
TIER_MULTIPLIER = 10
IMPACT_MULTIPLIER = 5

# (RTO strictly below, bonus), most urgent first
URGENCY_BONUSES = [
    (24.0, 20),
    (72.0, 10),
]

UNSET_RTO_DISPLAY = 999.0

RPO_RESOURCE_TYPES = {ResourceType.DATA, ResourceType.SYSTEMS}

SPOF_MIN_PROCESSES = 2
CHECKS_PER_PROCESS = 4


def urgency_bonus(rto_hours: Optional[float]) -> int:
    """
    Priority bonus for tight recovery time objectives.

    Args:
        rto_hours: Process RTO, or None when unset

    Returns:
        20 below 24h, 10 below 72h, else 0 (also 0 without an RTO)
    """
    if rto_hours is None:
        return 0
    for limit, bonus in URGENCY_BONUSES:
        if rto_hours < limit:
            return bonus
    return 0


class BCDRGapAnalyzer:
    """
    Produces the BCDR gap report for a snapshot.

    Each step is exposed as its own method so callers can compose them;
    ``analyze`` runs them all.

    Attributes:
        recovery_priority_top_n: Number of processes kept in the priority list
        logger: Structured logger

    Example:
        >>> analyzer = BCDRGapAnalyzer()
        >>> report = analyzer.analyze(processes, resources, objectives, maps, scores)
        >>> print(f"Readiness: {report.readiness_score}%")
    """

    DEFAULT_PRIORITY_TOP_N = 10

    def __init__(self, recovery_priority_top_n: int = DEFAULT_PRIORITY_TOP_N):
        """
        Initialize the analyzer.

        Args:
            recovery_priority_top_n: Processes kept in the priority list (default 10)

        Raises:
            ValueError: If recovery_priority_top_n is below 1
        """
        if recovery_priority_top_n < 1:
            raise ValueError(
                f"recovery_priority_top_n must be at least 1, got {recovery_priority_top_n}"
            )
        self.recovery_priority_top_n = recovery_priority_top_n
        self.logger = structlog.get_logger()

    # =========================================================================
    # Objective gaps
    # =========================================================================

    def detect_rto_gaps(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        recovery_objectives: dict[str, RecoveryObjective],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> list[RtoGap]:
        """
        Find resources that cannot be restored within their process's RTO.

        Args:
            processes: Processes to check
            resources: Registered resources
            recovery_objectives: Objectives keyed by process id
            dependency_maps: Normalized maps keyed by process id

        Returns:
            One RtoGap per (process, resource) misalignment
        """
        gaps = []
        for process, resource in self._process_resources(processes, resources, dependency_maps):
            objective = recovery_objectives.get(process.id)
            process_rto = objective.rto if objective is not None else None
            resource_rto = resource.rto_hours
            if process_rto is None or resource_rto is None:
                continue
            if resource_rto > process_rto:
                gaps.append(
                    RtoGap(
                        process_id=process.id,
                        process_name=process.name,
                        process_rto=process_rto,
                        resource_id=resource.id,
                        resource_name=resource.name,
                        resource_rto=resource_rto,
                        gap=resource_rto - process_rto,
                    )
                )
        return gaps

    def detect_rpo_gaps(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        recovery_objectives: dict[str, RecoveryObjective],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> list[RpoGap]:
        """
        Find data/systems resources whose RPO exceeds their process's RPO.

        Args:
            processes: Processes to check
            resources: Registered resources
            recovery_objectives: Objectives keyed by process id
            dependency_maps: Normalized maps keyed by process id

        Returns:
            One RpoGap per (process, resource) misalignment
        """
        gaps = []
        for process, resource in self._process_resources(processes, resources, dependency_maps):
            if resource.type not in RPO_RESOURCE_TYPES:
                continue
            objective = recovery_objectives.get(process.id)
            process_rpo = objective.rpo if objective is not None else None
            resource_rpo = resource.rpo_hours
            if process_rpo is None or resource_rpo is None:
                continue
            if resource_rpo > process_rpo:
                gaps.append(
                    RpoGap(
                        process_id=process.id,
                        process_name=process.name,
                        process_rpo=process_rpo,
                        resource_id=resource.id,
                        resource_name=resource.name,
                        resource_rpo=resource_rpo,
                        gap=resource_rpo - process_rpo,
                    )
                )
        return gaps

    # =========================================================================
    # Resource usage
    # =========================================================================

    def resource_usage(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> dict[str, list[Process]]:
        """
        Distinct dependent processes per resource.

        Args:
            processes: Processes to tally
            resources: Registered resources
            dependency_maps: Normalized maps keyed by process id

        Returns:
            {resource_id: [Process, ...]} in first-use order
        """
        usage: dict[str, list[Process]] = {}
        for process, resource in self._process_resources(processes, resources, dependency_maps):
            users = usage.setdefault(resource.id, [])
            if all(p.id != process.id for p in users):
                users.append(process)
        return usage

    def detect_single_points_of_failure(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> list[ResourceSpof]:
        """
        Resources that two or more processes depend on.

        Returns:
            ResourceSpof list in first-use order
        """
        resources_by_id = {r.id: r for r in resources}
        return [
            ResourceSpof(
                resource_id=resource_id,
                resource_name=resources_by_id[resource_id].name,
                process_count=len(users),
                processes=[p.name for p in users],
            )
            for resource_id, users in self.resource_usage(processes, resources, dependency_maps).items()
            if len(users) >= SPOF_MIN_PROCESSES
        ]

    def compute_cascade_impacts(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> list[CascadeImpact]:
        """
        Processes affected by the failure of each used resource.

        Returns:
            CascadeImpact list in first-use order
        """
        resources_by_id = {r.id: r for r in resources}
        return [
            CascadeImpact(
                resource_id=resource_id,
                resource_name=resources_by_id[resource_id].name,
                affected_processes=[p.name for p in users],
            )
            for resource_id, users in self.resource_usage(processes, resources, dependency_maps).items()
            if users
        ]

    def detect_missing_dependencies(
        self,
        processes: Sequence[Process],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ) -> list[MissingDependency]:
        """
        Processes with no saved map, or a map holding only their own node.

        Returns:
            MissingDependency list in process order
        """
        missing = []
        for process in processes:
            dep_map = dependency_maps.get(process.id)
            if dep_map is None or dep_map.is_trivial:
                missing.append(MissingDependency(process_id=process.id, process_name=process.name))
        return missing

    # =========================================================================
    # Priority & readiness
    # =========================================================================

    def compute_recovery_priority(
        self,
        processes: Sequence[Process],
        recovery_objectives: dict[str, RecoveryObjective],
        impact_scores: dict[str, ProcessImpactScore],
        top_n: Optional[int] = None,
    ) -> list[RecoveryPriorityEntry]:
        """
        Rank processes by recovery priority.

        score = tier score · 10 + weighted impact · 5 + urgency bonus

        Args:
            processes: Processes to rank
            recovery_objectives: Objectives keyed by process id
            impact_scores: Impact scores keyed by process id (missing → 0)
            top_n: Override of the configured cap

        Returns:
            Highest scoring entries first; ties keep process order
        """
        top_n = self.recovery_priority_top_n if top_n is None else top_n

        entries = []
        for process in processes:
            objective = recovery_objectives.get(process.id)
            rto = objective.rto if objective is not None else None
            impact = impact_scores.get(process.id)
            weighted = impact.weighted_score if impact is not None else 0.0

            tier_score = TIER_PRIORITY_SCORE.get(process.criticality, DEFAULT_TIER_PRIORITY_SCORE)
            score = tier_score * TIER_MULTIPLIER + weighted * IMPACT_MULTIPLIER + urgency_bonus(rto)

            entries.append(
                RecoveryPriorityEntry(
                    process_id=process.id,
                    process_name=process.name,
                    criticality=process.criticality,
                    rto=rto if rto is not None else UNSET_RTO_DISPLAY,
                    score=round(score, 2),
                )
            )

        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[:top_n]

    @staticmethod
    def compute_readiness_score(
        process_count: int,
        rto_gap_count: int,
        rpo_gap_count: int,
        missing_dependency_count: int,
        spof_count: int,
    ) -> int:
        """
        Heuristic readiness percentage.

        Four checks per process: RTO alignment, RPO alignment, dependency
        coverage and absence of resource SPOFs. Halves round up (62.5 -> 63).

        Gap counts are per process/resource pair and can exceed the process
        count, which would push the raw ratio below zero. The result is
        always clamped to 0-100 so it stays a percentage.

        Returns:
            Rounded percentage in 0-100; 0 when there are no processes
        """
        total_checks = process_count * CHECKS_PER_PROCESS
        if total_checks == 0:
            return 0

        passed_checks = (
            (process_count - rto_gap_count)
            + (process_count - rpo_gap_count)
            + (process_count - missing_dependency_count)
            + max(0, process_count - spof_count)
        )
        score = int(math.floor(passed_checks / total_checks * 100 + 0.5))
        return min(100, max(0, score))

    # =========================================================================
    # Full report
    # =========================================================================

    def analyze(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        recovery_objectives: dict[str, RecoveryObjective],
        dependency_maps: dict[str, NormalizedDependencyMap],
        impact_scores: Optional[dict[str, ProcessImpactScore]] = None,
    ) -> BCDRReport:
        """
        Produce the consolidated BCDR report.

        Args:
            processes: Registered processes
            resources: Registered resources
            recovery_objectives: Objectives keyed by process id
            dependency_maps: Normalized maps keyed by process id
            impact_scores: Impact scores keyed by process id

        Returns:
            BCDRReport
        """
        impact_scores = impact_scores or {}

        rto_gaps = self.detect_rto_gaps(processes, resources, recovery_objectives, dependency_maps)
        rpo_gaps = self.detect_rpo_gaps(processes, resources, recovery_objectives, dependency_maps)
        spofs = self.detect_single_points_of_failure(processes, resources, dependency_maps)
        missing = self.detect_missing_dependencies(processes, dependency_maps)
        cascades = self.compute_cascade_impacts(processes, resources, dependency_maps)
        priority = self.compute_recovery_priority(processes, recovery_objectives, impact_scores)

        readiness = self.compute_readiness_score(
            process_count=len(processes),
            rto_gap_count=len(rto_gaps),
            rpo_gap_count=len(rpo_gaps),
            missing_dependency_count=len(missing),
            spof_count=len(spofs),
        )

        report = BCDRReport(
            rto_gaps=rto_gaps,
            rpo_gaps=rpo_gaps,
            single_points_of_failure=spofs,
            missing_dependencies=missing,
            cascade_impacts=cascades,
            recovery_priority=priority,
            readiness_score=readiness,
            critical_issues=len(rto_gaps) + len(rpo_gaps),
            warnings=len(spofs) + len(missing),
        )

        self.logger.info(
            "bcdr_gap_analysis_complete",
            process_count=len(processes),
            rto_gap_count=len(rto_gaps),
            rpo_gap_count=len(rpo_gaps),
            spof_count=len(spofs),
            missing_dependency_count=len(missing),
            readiness_score=readiness,
        )

        return report

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _process_resources(
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        dependency_maps: dict[str, NormalizedDependencyMap],
    ):
        """Yield (process, resource) for every registered resource on each process's map."""
        resources_by_id = {r.id: r for r in resources}
        for process in processes:
            dep_map = dependency_maps.get(process.id)
            if dep_map is None:
                continue
            for resource_id in dep_map.resource_ids:
                resource = resources_by_id.get(resource_id)
                if resource is not None:
                    yield process, resource
