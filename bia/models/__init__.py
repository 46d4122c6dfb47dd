"""
Pydantic v2 data models for the BIA analytics engine.

Model Organization:
    - enums: Enumeration types for consistent classification
    - entities: Registry records the engine reads (processes, resources, ...)
    - impact: Per-process impact scores and derived recovery objectives
    - network: Dependency network analysis results
    - bcdr: BCDR gap report and resilience gap insights
    - analysis: Composite result of a full analysis run

Usage:
    >>> from bia.models import Process, ImpactCategory, CriticalityTier
    >>> process = Process(id="p1", name="Payroll", criticality=CriticalityTier.HIGH)
    >>> category = ImpactCategory.model_validate(
    ...     {"id": "financial", "name": "Financial", "weight": 60}
    ... )
"""

# Enumerations
from .enums import (
    CriticalityTier,
    DependencyType,
    GapSeverity,
    GapType,
    ImpactLevel,
    LinkDirection,
    NodeKind,
    ProcessStatus,
    RecoveryStrategy,
    Redundancy,
    ResourceType,
    TestingStatus,
    TimeUnit,
)

# Registry records
from .entities import (
    AnalysisSnapshot,
    BusinessResource,
    Dependency,
    DependencyMap,
    DependencyMapEdge,
    DependencyMapNode,
    ImpactCategory,
    Process,
    ProcessResourceLink,
    RecoveryObjective,
    RecoveryOption,
    ResourceDependency,
    TemporalImpactMatrix,
    TimeBasedDefinition,
    TimelinePoint,
    TimeValue,
)

# Results
from .impact import DerivedRecoveryObjective, ProcessImpactScore
from .network import CriticalPath, GraphAnalysisResult, NetworkStats, NormalizedDependencyMap, SpofNode
from .bcdr import (
    BCDRReport,
    CascadeImpact,
    GapInsight,
    GapSummary,
    MissingDependency,
    RecoveryPriorityEntry,
    ResourceSpof,
    RpoGap,
    RtoGap,
)
from .analysis import BIAAnalysisResult

__all__ = [
    # Enums
    "CriticalityTier",
    "DependencyType",
    "GapSeverity",
    "GapType",
    "ImpactLevel",
    "LinkDirection",
    "NodeKind",
    "ProcessStatus",
    "RecoveryStrategy",
    "Redundancy",
    "ResourceType",
    "TestingStatus",
    "TimeUnit",
    # Records
    "AnalysisSnapshot",
    "BusinessResource",
    "Dependency",
    "DependencyMap",
    "DependencyMapEdge",
    "DependencyMapNode",
    "ImpactCategory",
    "Process",
    "ProcessResourceLink",
    "RecoveryObjective",
    "RecoveryOption",
    "ResourceDependency",
    "TemporalImpactMatrix",
    "TimeBasedDefinition",
    "TimelinePoint",
    "TimeValue",
    # Results
    "DerivedRecoveryObjective",
    "ProcessImpactScore",
    "CriticalPath",
    "GraphAnalysisResult",
    "NetworkStats",
    "NormalizedDependencyMap",
    "SpofNode",
    "BCDRReport",
    "CascadeImpact",
    "GapInsight",
    "GapSummary",
    "MissingDependency",
    "RecoveryPriorityEntry",
    "ResourceSpof",
    "RpoGap",
    "RtoGap",
    "BIAAnalysisResult",
]
