"""
Resilience Gap Insights — Coverage, Compliance and Readiness Findings.

Turns the state of the BIA registry into actionable findings:

- Coverage: critical/high processes without impact assessments or
  recovery objectives; processes without any recovery option
- Compliance: processes whose RTO no documented recovery option meets
- Readiness: untested recovery options; options with low readiness
- Financial: recovery options with a high combined cost

Insights are returned most severe first and can be summarized or
turned into a phased remediation plan.

Version: resilience_gaps_v1
"""

from typing import Optional, Sequence

import structlog

from bia.models.bcdr import GapInsight, GapSummary
from bia.models.entities import Process, RecoveryObjective, RecoveryOption, TemporalImpactMatrix
from bia.models.enums import CriticalityTier, GapSeverity, GapType, TestingStatus

logger = structlog.get_logger()


HIGH_PRIORITY_TIERS = {CriticalityTier.CRITICAL, CriticalityTier.HIGH}
UNTESTED_STATUSES = {TestingStatus.NOT_TESTED, TestingStatus.PENDING}

LOW_READINESS_THRESHOLD = 50.0
HIGH_COST_THRESHOLD = 500_000.0
MAX_LISTED_ITEMS = 5

SEVERITY_ORDER = {
    GapSeverity.CRITICAL: 0,
    GapSeverity.HIGH: 1,
    GapSeverity.MEDIUM: 2,
    GapSeverity.LOW: 3,
}

# (severity, heading) of each remediation phase
REMEDIATION_PHASES = [
    (GapSeverity.CRITICAL, "CRITICAL PHASE (Immediate - Next 30 days)"),
    (GapSeverity.HIGH, "HIGH PRIORITY PHASE (1-3 months)"),
    (GapSeverity.MEDIUM, "MEDIUM PRIORITY PHASE (3-6 months)"),
]


class ResilienceGapAnalyzer:
    """
    Identifies resilience gaps across processes and recovery options.

    Example:
        >>> analyzer = ResilienceGapAnalyzer()
        >>> gaps = analyzer.identify(processes, matrices, objectives, options)
        >>> for line in analyzer.remediation_plan(gaps):
        ...     print(line)
    """

    def __init__(self):
        self.logger = structlog.get_logger()

    def identify(
        self,
        processes: Sequence[Process],
        impact_matrices: dict[str, TemporalImpactMatrix],
        recovery_objectives: dict[str, RecoveryObjective],
        recovery_options: Sequence[RecoveryOption],
    ) -> list[GapInsight]:
        """
        Identify all resilience gaps.

        Args:
            processes: Registered processes
            impact_matrices: Impact matrices keyed by process id
            recovery_objectives: Objectives keyed by process id
            recovery_options: Documented recovery options

        Returns:
            GapInsight list sorted by severity, most severe first
        """
        gaps: list[GapInsight] = []

        options_by_process: dict[str, list[RecoveryOption]] = {}
        for option in recovery_options:
            options_by_process.setdefault(option.process_id, []).append(option)

        high_priority = [p for p in processes if p.criticality in HIGH_PRIORITY_TIERS]

        without_impact = [p for p in high_priority if p.id not in impact_matrices]
        if without_impact:
            gaps.append(
                GapInsight(
                    type=GapType.COVERAGE,
                    severity=GapSeverity.CRITICAL,
                    title="Critical Processes Missing Impact Assessments",
                    description=(
                        f"{len(without_impact)} critical/high priority processes lack impact "
                        "assessment documentation required for ISO 22301 compliance."
                    ),
                    affected_count=len(without_impact),
                    affected_items=[p.name for p in without_impact],
                    recommendation=(
                        "Complete impact assessments for all critical processes immediately. "
                        "This is a mandatory compliance requirement."
                    ),
                )
            )

        without_objectives = [p for p in high_priority if p.id not in recovery_objectives]
        if without_objectives:
            gaps.append(
                GapInsight(
                    type=GapType.COVERAGE,
                    severity=GapSeverity.CRITICAL,
                    title="Critical Processes Missing Recovery Objectives",
                    description=(
                        f"{len(without_objectives)} critical/high priority processes lack "
                        "defined RTO/RPO targets."
                    ),
                    affected_count=len(without_objectives),
                    affected_items=[p.name for p in without_objectives],
                    recommendation=(
                        "Define RTO, RPO, and MTPD for all critical processes based on "
                        "impact assessment results."
                    ),
                )
            )

        rto_non_compliant = [
            p for p in processes
            if not self._rto_met(recovery_objectives.get(p.id), options_by_process.get(p.id, []))
        ]
        if rto_non_compliant:
            any_critical = any(p.criticality == CriticalityTier.CRITICAL for p in rto_non_compliant)
            gaps.append(
                GapInsight(
                    type=GapType.COMPLIANCE,
                    severity=GapSeverity.CRITICAL if any_critical else GapSeverity.HIGH,
                    title="RTO Compliance Gaps - Strategy Inadequacy",
                    description=(
                        f"{len(rto_non_compliant)} processes have defined RTO targets but no "
                        "recovery strategy can meet them within the required timeframe."
                    ),
                    affected_count=len(rto_non_compliant),
                    affected_items=[p.name for p in rto_non_compliant],
                    recommendation=(
                        "Upgrade recovery strategies to meet RTO targets. Consider cloud-based "
                        "or high-availability solutions for critical processes."
                    ),
                )
            )

        without_strategy = [p for p in processes if not options_by_process.get(p.id)]
        if without_strategy:
            critical_count = sum(1 for p in without_strategy if p.criticality in HIGH_PRIORITY_TIERS)
            gaps.append(
                GapInsight(
                    type=GapType.COVERAGE,
                    severity=GapSeverity.CRITICAL if critical_count > 0 else GapSeverity.MEDIUM,
                    title="Processes Missing Recovery Strategies",
                    description=(
                        f"{len(without_strategy)} processes ({critical_count} critical) lack "
                        "defined recovery strategies."
                    ),
                    affected_count=len(without_strategy),
                    affected_items=[p.name for p in without_strategy[:MAX_LISTED_ITEMS]],
                    recommendation=(
                        "Develop and document recovery strategies for all business processes, "
                        "prioritizing critical processes."
                    ),
                )
            )

        untested = [o for o in recovery_options if o.testing_status in UNTESTED_STATUSES]
        if untested:
            gaps.append(
                GapInsight(
                    type=GapType.READINESS,
                    severity=GapSeverity.HIGH,
                    title="Recovery Strategies Not Tested",
                    description=(
                        f"{len(untested)} recovery strategies have not been tested or have pending "
                        "test results. Untested strategies carry execution risk."
                    ),
                    affected_count=len(untested),
                    recommendation=(
                        "Schedule and conduct recovery testing for all strategies. Document test "
                        "results and remediate failures."
                    ),
                )
            )

        low_readiness = [
            o for o in recovery_options
            if o.readiness_score and o.readiness_score < LOW_READINESS_THRESHOLD
        ]
        if low_readiness:
            gaps.append(
                GapInsight(
                    type=GapType.READINESS,
                    severity=GapSeverity.MEDIUM,
                    title="Low Readiness Scores in Recovery Strategies",
                    description=(
                        f"{len(low_readiness)} recovery strategies have readiness scores below 50%, "
                        "indicating implementation concerns."
                    ),
                    affected_count=len(low_readiness),
                    recommendation=(
                        "Review and improve readiness for low-scoring strategies. Address resource "
                        "constraints and documentation gaps."
                    ),
                )
            )

        high_cost = [
            o for o in recovery_options
            if o.implementation_cost + o.operational_cost > HIGH_COST_THRESHOLD
        ]
        if high_cost:
            gaps.append(
                GapInsight(
                    type=GapType.FINANCIAL,
                    severity=GapSeverity.MEDIUM,
                    title="High-Cost Recovery Strategies",
                    description=(
                        f"{len(high_cost)} recovery strategies exceed $500K in combined "
                        "implementation and operational costs."
                    ),
                    affected_count=len(high_cost),
                    recommendation=(
                        "Conduct cost-benefit analysis to validate ROI. Consider phased "
                        "implementation or alternative approaches."
                    ),
                )
            )

        gaps.sort(key=lambda g: SEVERITY_ORDER[g.severity])

        self.logger.info(
            "resilience_gaps_identified",
            gap_count=len(gaps),
            critical_count=sum(1 for g in gaps if g.severity == GapSeverity.CRITICAL),
        )

        return gaps

    @staticmethod
    def _rto_met(objective: Optional[RecoveryObjective], options: list[RecoveryOption]) -> bool:
        """Whether any option restores the process within its RTO (vacuously true without one)."""
        if objective is None or objective.rto is None:
            return True
        if not options:
            return False
        return any(o.rto.to_hours() <= objective.rto for o in options)

    @staticmethod
    def summarize(gaps: Sequence[GapInsight]) -> GapSummary:
        """
        Count gaps by severity.

        Args:
            gaps: Identified gaps

        Returns:
            GapSummary
        """
        affected = {item for g in gaps for item in g.affected_items}
        return GapSummary(
            total=len(gaps),
            critical=sum(1 for g in gaps if g.severity == GapSeverity.CRITICAL),
            high=sum(1 for g in gaps if g.severity == GapSeverity.HIGH),
            medium=sum(1 for g in gaps if g.severity == GapSeverity.MEDIUM),
            low=sum(1 for g in gaps if g.severity == GapSeverity.LOW),
            affected_process_count=len(affected),
        )

    @staticmethod
    def remediation_plan(gaps: Sequence[GapInsight]) -> list[str]:
        """
        Phased remediation plan, one line per heading or action.

        Low severity gaps are left out of the plan.

        Args:
            gaps: Identified gaps

        Returns:
            Plan lines; empty when there is nothing to remediate
        """
        plan: list[str] = []
        for severity, heading in REMEDIATION_PHASES:
            phase_gaps = [g for g in gaps if g.severity == severity]
            if not phase_gaps:
                continue
            if plan:
                plan.append("")
            plan.append(heading)
            plan.extend(f"  - {g.title}: {g.recommendation}" for g in phase_gaps)
        return plan
