"""
Pytest configuration and shared fixtures for the BIA engine test suite.

Test-automator agent: data factories for every registry record, a
reference snapshot, and reusable fixtures across all test types
(unit, golden, property-based).
"""

import os
from typing import Optional

import pytest

# Settings come from the environment; keep test runs isolated from a local .env
os.environ.setdefault("DEV_MODE", "true")
os.environ.setdefault("LOG_LEVEL", "warning")


# ---------------------------------------------------------------------------
# Pydantic model factories, reusable across all test suites
# ---------------------------------------------------------------------------

from bia.config import Settings, get_settings
from bia.models.entities import (
    AnalysisSnapshot,
    BusinessResource,
    Dependency,
    DependencyMap,
    DependencyMapEdge,
    DependencyMapNode,
    ImpactCategory,
    Process,
    RecoveryObjective,
    RecoveryOption,
    ResourceDependency,
    TemporalImpactMatrix,
    TimelinePoint,
    TimeValue,
)
from bia.models.enums import (
    CriticalityTier,
    DependencyType,
    Redundancy,
    ResourceType,
    TestingStatus,
    TimeUnit,
)


def make_process(
    process_id: str = "p1",
    name: Optional[str] = None,
    criticality: CriticalityTier = CriticalityTier.MEDIUM,
    **overrides,
) -> Process:
    """Factory function for creating test Process objects."""
    defaults = dict(
        id=process_id,
        name=name or f"Process {process_id}",
        owner="Operations",
        department="Finance",
        criticality=criticality,
    )
    defaults.update(overrides)
    return Process(**defaults)


def make_resource(
    resource_id: str = "r1",
    name: Optional[str] = None,
    resource_type: ResourceType = ResourceType.SYSTEMS,
    rto_hours: Optional[float] = 4.0,
    rpo_hours: Optional[float] = None,
    redundancy: Redundancy = Redundancy.NONE,
    **overrides,
) -> BusinessResource:
    """Factory function for creating test BusinessResource objects (RTO/RPO in hours)."""
    defaults = dict(
        id=resource_id,
        name=name or f"Resource {resource_id}",
        type=resource_type,
        rto=TimeValue(value=rto_hours, unit=TimeUnit.HOURS) if rto_hours is not None else None,
        rpo=TimeValue(value=rpo_hours, unit=TimeUnit.HOURS) if rpo_hours is not None else None,
        redundancy=redundancy,
    )
    defaults.update(overrides)
    return BusinessResource(**defaults)


def make_category(category_id: str = "financial", weight: float = 100.0, **overrides) -> ImpactCategory:
    """Factory function for creating test ImpactCategory objects."""
    defaults = dict(
        id=category_id,
        name=category_id.title(),
        weight=weight,
    )
    defaults.update(overrides)
    return ImpactCategory(**defaults)


def make_timeline_point(
    point_id: str = "t1",
    value: float = 1.0,
    unit: TimeUnit = TimeUnit.HOURS,
    **overrides,
) -> TimelinePoint:
    """Factory function for creating test TimelinePoint objects."""
    defaults = dict(
        id=point_id,
        label=f"{value:g} {unit.value}",
        value=value,
        unit=unit,
    )
    defaults.update(overrides)
    return TimelinePoint(**defaults)


def make_matrix(process_id: str = "p1", values: Optional[dict] = None) -> TemporalImpactMatrix:
    """Factory function for creating test TemporalImpactMatrix objects."""
    return TemporalImpactMatrix(process_id=process_id, values=values or {})


def make_objective(
    process_id: str = "p1",
    rto: Optional[float] = 4.0,
    rpo: Optional[float] = None,
    **overrides,
) -> RecoveryObjective:
    """Factory function for creating test RecoveryObjective objects."""
    defaults = dict(process_id=process_id, rto=rto, rpo=rpo)
    defaults.update(overrides)
    return RecoveryObjective(**defaults)


def make_dependency(
    dependency_id: str = "d1",
    source: str = "p1",
    target: str = "p2",
    criticality: int = 3,
    **overrides,
) -> Dependency:
    """Factory function for creating test process Dependency objects."""
    defaults = dict(
        id=dependency_id,
        source_process_id=source,
        target_process_id=target,
        type=DependencyType.OPERATIONAL,
        criticality=criticality,
    )
    defaults.update(overrides)
    return Dependency(**defaults)


def make_resource_dependency(
    dependency_id: str = "rd1",
    source: str = "r1",
    target: str = "r2",
    is_blocking: bool = False,
    **overrides,
) -> ResourceDependency:
    """Factory function for creating test ResourceDependency objects."""
    defaults = dict(
        id=dependency_id,
        source_resource_id=source,
        target_resource_id=target,
        is_blocking=is_blocking,
    )
    defaults.update(overrides)
    return ResourceDependency(**defaults)


def make_dependency_map(
    process: Process,
    resources: list[BusinessResource],
    criticality: int = 3,
    by_label: bool = False,
) -> DependencyMap:
    """
    Factory for a saved canvas map: the process node plus one node and
    one process → resource edge per resource.

    Resource nodes reference the resource by id, or only by label when
    ``by_label`` is set.
    """
    nodes = [
        DependencyMapNode(id=f"process-{process.id}", data={"label": process.name, "isProcess": True})
    ]
    edges = []
    for resource in resources:
        data = {"label": resource.name, "resourceType": resource.type.value}
        if not by_label:
            data["resourceId"] = resource.id
        node_id = f"node-{resource.id}"
        nodes.append(DependencyMapNode(id=node_id, data=data))
        edges.append(
            DependencyMapEdge(
                id=f"edge-{resource.id}",
                source=f"process-{process.id}",
                target=node_id,
                data={"criticality": criticality},
            )
        )
    return DependencyMap(process_id=process.id, nodes=nodes, edges=edges)


def make_recovery_option(
    option_id: str = "o1",
    process_id: str = "p1",
    rto_hours: float = 2.0,
    testing_status: TestingStatus = TestingStatus.PASS,
    **overrides,
) -> RecoveryOption:
    """Factory function for creating test RecoveryOption objects."""
    defaults = dict(
        id=option_id,
        process_id=process_id,
        title=f"Option {option_id}",
        rto=TimeValue(value=rto_hours, unit=TimeUnit.HOURS),
        testing_status=testing_status,
        readiness_score=80.0,
    )
    defaults.update(overrides)
    return RecoveryOption(**defaults)


def make_snapshot(**overrides) -> AnalysisSnapshot:
    """Factory function for creating test AnalysisSnapshot objects."""
    return AnalysisSnapshot(**overrides)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fresh_settings_cache():
    """Re-read settings from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Explicit settings with all defaults."""
    return Settings(_env_file=None)


@pytest.fixture
def categories():
    """Financial 60 / legal 40 impact categories."""
    return [
        make_category("financial", weight=60.0),
        make_category("legal", weight=40.0),
    ]


@pytest.fixture
def timeline_points():
    """Timeline points at 4h, 1 day and 1 week, deliberately out of order."""
    return [
        make_timeline_point("t_week", value=1.0, unit=TimeUnit.WEEKS),
        make_timeline_point("t_4h", value=4.0, unit=TimeUnit.HOURS),
        make_timeline_point("t_day", value=1.0, unit=TimeUnit.DAYS),
    ]


@pytest.fixture
def sample_snapshot(categories, timeline_points):
    """
    Reference organization: payroll and billing share the ERP system,
    billing also uses the customer database; support has no dependency map.
    """
    payroll = make_process("payroll", name="Payroll", criticality=CriticalityTier.CRITICAL)
    billing = make_process("billing", name="Billing", criticality=CriticalityTier.HIGH)
    support = make_process("support", name="Support", criticality=CriticalityTier.LOW)

    erp = make_resource("erp", name="ERP", rto_hours=48.0, rpo_hours=24.0)
    crm_db = make_resource(
        "crm_db", name="Customer DB", resource_type=ResourceType.DATA, rto_hours=2.0, rpo_hours=1.0
    )
    staff = make_resource("staff", name="Finance Staff", resource_type=ResourceType.PERSONNEL, rto_hours=72.0)

    return make_snapshot(
        processes=[payroll, billing, support],
        resources=[erp, crm_db, staff],
        dependencies=[make_dependency("d1", source="billing", target="payroll", criticality=4)],
        resource_dependencies=[make_resource_dependency("rd1", source="erp", target="crm_db", is_blocking=True)],
        categories=categories,
        timeline_points=timeline_points,
        impact_matrices={
            "payroll": make_matrix(
                "payroll",
                {
                    "t_4h": {"financial": 2, "legal": 1},
                    "t_day": {"financial": 4, "legal": 3},
                    "t_week": {"financial": 5, "legal": 4},
                },
            ),
            "billing": make_matrix(
                "billing",
                {
                    "t_4h": {"financial": 1},
                    "t_day": {"financial": 2, "legal": 1},
                    "t_week": {"financial": 3, "legal": 2},
                },
            ),
        },
        recovery_objectives={
            "payroll": make_objective("payroll", rto=8.0, rpo=4.0),
            "billing": make_objective("billing", rto=24.0, rpo=0.5),
        },
        dependency_maps={
            "payroll": make_dependency_map(payroll, [erp, staff], criticality=5),
            "billing": make_dependency_map(billing, [erp, crm_db]),
        },
        recovery_options=[
            make_recovery_option("o_payroll", process_id="payroll", rto_hours=12.0),
            make_recovery_option(
                "o_billing",
                process_id="billing",
                rto_hours=8.0,
                testing_status=TestingStatus.NOT_TESTED,
                readiness_score=40.0,
            ),
        ],
    )
