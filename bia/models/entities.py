"""
Input record models for the BIA analytics engine.

These models mirror the records owned by the BIA registry (processes,
impact configuration, resources, dependencies, recovery objectives and
saved dependency maps). The engine treats them as an immutable snapshot
for the duration of one analysis run.

Records accept both snake_case field names and the camelCase keys used
by the registry UI, so a collaborator can pass its JSON payloads through
``model_validate`` unchanged.
"""

from typing import Any, Optional

from pydantic import Field, field_validator

from .base import RecordModel
from .enums import (
    CriticalityTier,
    DependencyType,
    LinkDirection,
    ProcessStatus,
    RecoveryStrategy,
    Redundancy,
    ResourceType,
    TestingStatus,
    TimeUnit,
)

# Hours per time unit
UNIT_HOURS = {
    TimeUnit.MINUTES: 1.0 / 60.0,
    TimeUnit.HOURS: 1.0,
    TimeUnit.DAYS: 24.0,
    TimeUnit.WEEKS: 168.0,
}

MIN_SEVERITY = 0
MAX_SEVERITY = 5


class TimeValue(RecordModel):
    """A duration expressed as value + unit."""

    value: float = Field(description="Magnitude of the duration", ge=0.0)
    unit: TimeUnit = Field(default=TimeUnit.HOURS, description="Unit of the duration")

    def to_hours(self) -> float:
        """Convert to hours."""
        return self.value * UNIT_HOURS[self.unit]


class Process(RecordModel):
    """
    A business activity registered for impact analysis.

    Attributes:
        id: Registry identifier
        name: Display name
        owner: Accountable owner
        department: Owning department
        description: Free-text description
        criticality: Ordinal criticality tier
        status: Lifecycle status
    """

    id: str = Field(description="Registry identifier")
    name: str = Field(description="Display name")
    owner: str = Field(default="", description="Accountable owner")
    department: str = Field(default="", description="Owning department")
    description: str = Field(default="", description="Free-text description")
    criticality: CriticalityTier = Field(
        default=CriticalityTier.MEDIUM, description="Ordinal criticality tier"
    )
    status: ProcessStatus = Field(default=ProcessStatus.DRAFT, description="Lifecycle status")


class TimeBasedDefinition(RecordModel):
    """What a category's severity means at one timeline point."""

    timeline_point_id: str = Field(description="Timeline point this definition applies to")
    description: str = Field(description="Textual definition of the severity levels")


class ImpactCategory(RecordModel):
    """
    An organization-wide dimension of harm (financial, legal, ...).

    Category weights are percentages; a valid configuration totals 100.
    """

    id: str = Field(description="Category identifier")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Free-text description")
    weight: float = Field(description="Weight in percent", ge=0.0, le=100.0)
    color: str = Field(default="#6B7280", description="Display color")
    time_based_definitions: list[TimeBasedDefinition] = Field(
        default_factory=list, description="Per timeline point severity definitions"
    )


class TimelinePoint(RecordModel):
    """A time offset on the x-axis of temporal impact analysis."""

    id: str = Field(description="Timeline point identifier")
    label: str = Field(default="", description="Display label, e.g. '1 day'")
    value: float = Field(description="Offset magnitude", ge=0.0)
    unit: TimeUnit = Field(default=TimeUnit.HOURS, description="Offset unit")

    @property
    def offset_hours(self) -> float:
        """Offset from the start of the disruption, in hours."""
        return self.value * UNIT_HOURS[self.unit]


class TemporalImpactMatrix(RecordModel):
    """
    Severity (0-5) per timeline point and impact category for one process.

    Values are keyed ``{timeline_point_id: {category_id: severity}}``.
    Missing cells read as 0. Rows are not required to be monotonic.
    """

    process_id: str = Field(description="Process this matrix belongs to")
    values: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="Severity by timeline point then category"
    )

    @field_validator("values")
    @classmethod
    def validate_severity_range(cls, v: dict[str, dict[str, int]]) -> dict[str, dict[str, int]]:
        """Ensure every severity is within 0-5."""
        for point_id, row in v.items():
            for category_id, severity in row.items():
                if not MIN_SEVERITY <= severity <= MAX_SEVERITY:
                    raise ValueError(
                        f"Severity {severity} for {point_id}/{category_id} "
                        f"must be between {MIN_SEVERITY} and {MAX_SEVERITY}"
                    )
        return v

    def severity(self, timeline_point_id: str, category_id: str) -> int:
        """Severity of one cell, 0 when not assessed."""
        return self.values.get(timeline_point_id, {}).get(category_id, 0)


class RecoveryObjective(RecordModel):
    """
    Recovery targets for a process, in hours.

    ``None`` means no requirement has been set.
    """

    process_id: str = Field(description="Process these objectives belong to")
    mtpd: Optional[float] = Field(default=None, ge=0.0, description="Max tolerable period of disruption (h)")
    rto: Optional[float] = Field(default=None, ge=0.0, description="Recovery time objective (h)")
    rpo: Optional[float] = Field(default=None, ge=0.0, description="Recovery point objective (h)")
    mbco: bool = Field(default=False, description="Minimum business continuity objective applies")
    recovery_strategy: Optional[RecoveryStrategy] = Field(
        default=None, description="Recovery strategy tag"
    )
    strategy_notes: str = Field(default="", description="Free-text strategy notes")


class BusinessResource(RecordModel):
    """
    A supporting asset (personnel, systems, equipment, ...).

    Attributes:
        id: Registry identifier
        name: Display name (also the label used on dependency maps)
        type: Resource class
        rto: Time to restore the resource
        rpo: Data loss window of the resource
        redundancy: Redundancy level
        quantity_at_intervals: Quantity required per timeline point id
    """

    id: str = Field(description="Registry identifier")
    name: str = Field(description="Display name")
    type: ResourceType = Field(description="Resource class")
    description: str = Field(default="", description="Free-text description")
    rto: Optional[TimeValue] = Field(default=None, description="Time to restore the resource")
    rpo: Optional[TimeValue] = Field(default=None, description="Data loss window of the resource")
    redundancy: Redundancy = Field(default=Redundancy.NONE, description="Redundancy level")
    quantity_at_intervals: dict[str, int] = Field(
        default_factory=dict, description="Quantity required per timeline point id"
    )

    @property
    def rto_hours(self) -> Optional[float]:
        return self.rto.to_hours() if self.rto is not None else None

    @property
    def rpo_hours(self) -> Optional[float]:
        return self.rpo.to_hours() if self.rpo is not None else None


class Dependency(RecordModel):
    """Directed process-to-process dependency: source requires target."""

    id: str = Field(description="Dependency identifier")
    source_process_id: str = Field(description="Dependent process")
    target_process_id: str = Field(description="Process depended upon")
    type: DependencyType = Field(default=DependencyType.OPERATIONAL, description="Dependency type")
    criticality: int = Field(default=3, ge=1, le=5, description="Criticality weight 1-5")
    description: str = Field(default="", description="Free-text description")


class ResourceDependency(RecordModel):
    """Directed resource-to-resource dependency."""

    id: str = Field(description="Dependency identifier")
    source_resource_id: str = Field(description="Dependent resource")
    target_resource_id: str = Field(description="Resource depended upon")
    type: DependencyType = Field(default=DependencyType.TECHNICAL, description="Dependency type")
    is_blocking: bool = Field(default=False, description="Failure of target blocks source")
    description: str = Field(default="", description="Free-text description")


class DependencyMapNode(RecordModel):
    """A node of a saved dependency map canvas."""

    id: str = Field(description="Canvas node id")
    data: dict[str, Any] = Field(default_factory=dict, description="Opaque canvas node data")


class DependencyMapEdge(RecordModel):
    """An edge of a saved dependency map canvas."""

    id: str = Field(default="", description="Canvas edge id")
    source: str = Field(description="Canvas id of the source node")
    target: str = Field(description="Canvas id of the target node")
    data: dict[str, Any] = Field(default_factory=dict, description="Opaque canvas edge data")


class DependencyMap(RecordModel):
    """
    A process's saved dependency map, as serialized by the canvas.

    Resource nodes carry a ``resourceType`` key in their data; the engine
    reads nothing else of the canvas's node id conventions.
    """

    process_id: str = Field(description="Process the map was drawn for")
    nodes: list[DependencyMapNode] = Field(default_factory=list, description="Canvas nodes")
    edges: list[DependencyMapEdge] = Field(default_factory=list, description="Canvas edges")


class ProcessResourceLink(RecordModel):
    """Normalized process/resource edge derived from a dependency map."""

    process_id: str = Field(description="Process end of the link")
    resource_id: str = Field(description="Resource end of the link")
    direction: LinkDirection = Field(
        default=LinkDirection.PROCESS_TO_RESOURCE, description="Edge direction on the map"
    )
    criticality: int = Field(default=3, ge=1, le=5, description="Criticality weight 1-5")
    quantity: Optional[int] = Field(default=None, ge=0, description="Quantity of the resource needed")


class RecoveryOption(RecordModel):
    """A recovery strategy documented for a process."""

    id: str = Field(description="Option identifier")
    process_id: str = Field(description="Process the option recovers")
    title: str = Field(default="", description="Display title")
    rto: TimeValue = Field(description="Recovery time the option achieves")
    rpo: Optional[TimeValue] = Field(default=None, description="Recovery point the option achieves")
    implementation_cost: float = Field(default=0.0, ge=0.0, description="One-off cost")
    operational_cost: float = Field(default=0.0, ge=0.0, description="Running cost")
    readiness_score: Optional[float] = Field(
        default=None, ge=0.0, le=100.0, description="Implementation readiness (0-100)"
    )
    testing_status: TestingStatus = Field(
        default=TestingStatus.NOT_TESTED, description="Outcome of the last test"
    )


class AnalysisSnapshot(RecordModel):
    """
    Everything one analysis run reads, supplied by the caller.

    Per-process records are keyed by process id.
    """

    processes: list[Process] = Field(default_factory=list)
    resources: list[BusinessResource] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)
    resource_dependencies: list[ResourceDependency] = Field(default_factory=list)
    categories: list[ImpactCategory] = Field(default_factory=list)
    timeline_points: list[TimelinePoint] = Field(default_factory=list)
    impact_matrices: dict[str, TemporalImpactMatrix] = Field(default_factory=dict)
    recovery_objectives: dict[str, RecoveryObjective] = Field(default_factory=dict)
    dependency_maps: dict[str, DependencyMap] = Field(default_factory=dict)
    recovery_options: list[RecoveryOption] = Field(default_factory=list)
