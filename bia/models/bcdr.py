"""
BCDR gap analysis models.

This module defines the report structures produced by reconciling
process recovery objectives with the capabilities of the resources the
processes depend on, together with the resilience gap insights derived
from recovery options.
"""

from pydantic import Field, field_validator

from .base import ResultModel
from .enums import CriticalityTier, GapSeverity, GapType


class RtoGap(ResultModel):
    """A resource that cannot be restored within its dependent process's RTO."""

    process_id: str = Field(description="Dependent process id")
    process_name: str = Field(description="Dependent process name")
    process_rto: float = Field(alias="processRTO", ge=0.0, description="Process RTO (h)")
    resource_id: str = Field(description="Resource id")
    resource_name: str = Field(description="Resource name")
    resource_rto: float = Field(alias="resourceRTO", ge=0.0, description="Resource RTO (h)")
    gap: float = Field(gt=0.0, description="resource_rto - process_rto (h)")


class RpoGap(ResultModel):
    """A data/systems resource whose RPO exceeds its dependent process's RPO."""

    process_id: str = Field(description="Dependent process id")
    process_name: str = Field(description="Dependent process name")
    process_rpo: float = Field(alias="processRPO", ge=0.0, description="Process RPO (h)")
    resource_id: str = Field(description="Resource id")
    resource_name: str = Field(description="Resource name")
    resource_rpo: float = Field(alias="resourceRPO", ge=0.0, description="Resource RPO (h)")
    gap: float = Field(gt=0.0, description="resource_rpo - process_rpo (h)")


class ResourceSpof(ResultModel):
    """A resource shared by two or more processes."""

    resource_id: str = Field(description="Resource id")
    resource_name: str = Field(description="Resource name")
    process_count: int = Field(ge=2, description="Number of dependent processes")
    processes: list[str] = Field(description="Dependent process names")


class MissingDependency(ResultModel):
    """A process with no (or only a trivial) saved dependency map."""

    process_id: str = Field(description="Process id")
    process_name: str = Field(description="Process name")


class CascadeImpact(ResultModel):
    """All processes affected if a resource fails."""

    resource_id: str = Field(description="Resource id")
    resource_name: str = Field(description="Resource name")
    affected_processes: list[str] = Field(description="Dependent process names")


class RecoveryPriorityEntry(ResultModel):
    """
    Recovery ordering score of a process.

    ``rto`` is 999 when the process has no RTO; that sentinel is for
    display only and never earns an urgency bonus.
    """

    process_id: str = Field(description="Process id")
    process_name: str = Field(description="Process name")
    criticality: CriticalityTier = Field(description="Process criticality tier")
    rto: float = Field(ge=0.0, description="Process RTO (h), 999 when unset")
    score: float = Field(ge=0.0, description="Recovery priority score")


class BCDRReport(ResultModel):
    """
    Consolidated BCDR readiness report.

    Attributes:
        rto_gaps: Resource/process RTO misalignments
        rpo_gaps: Resource/process RPO misalignments (data and systems only)
        single_points_of_failure: Resources shared by two or more processes
        missing_dependencies: Processes without a usable dependency map
        cascade_impacts: Affected processes per used resource
        recovery_priority: Highest recovery priority processes, best first
        readiness_score: Heuristic readiness percentage (0-100)
        critical_issues: RTO gap count + RPO gap count
        warnings: SPOF count + missing dependency count
    """

    rto_gaps: list[RtoGap] = Field(default_factory=list)
    rpo_gaps: list[RpoGap] = Field(default_factory=list)
    single_points_of_failure: list[ResourceSpof] = Field(default_factory=list)
    missing_dependencies: list[MissingDependency] = Field(default_factory=list)
    cascade_impacts: list[CascadeImpact] = Field(default_factory=list)
    recovery_priority: list[RecoveryPriorityEntry] = Field(default_factory=list)
    readiness_score: int = Field(default=0, ge=0, le=100)
    critical_issues: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)


class GapInsight(ResultModel):
    """
    An actionable resilience gap.

    Attributes:
        type: Gap category
        severity: Gap severity
        title: Short headline
        description: What was found
        affected_count: Number of affected processes or options
        recommendation: Suggested remediation
        affected_items: Names of affected processes, where listed
    """

    type: GapType
    severity: GapSeverity
    title: str
    description: str
    affected_count: int = Field(ge=1)
    recommendation: str
    affected_items: list[str] = Field(default_factory=list)

    @field_validator("title", "recommendation")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Ensure headline and recommendation carry content."""
        if not v.strip():
            raise ValueError("Must not be empty")
        return v.strip()


class GapSummary(ResultModel):
    """Counts of resilience gaps by severity."""

    total: int = Field(ge=0)
    critical: int = Field(ge=0)
    high: int = Field(ge=0)
    medium: int = Field(ge=0)
    low: int = Field(ge=0)
    affected_process_count: int = Field(ge=0, description="Distinct affected items across gaps")
