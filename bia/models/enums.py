"""
Enumeration types for the BIA analytics engine.

This module defines all enum types used across the engine for type safety
and consistent validation. All enums inherit from str to ensure JSON
serialization compatibility with the registry records they mirror.
"""

from enum import Enum


class CriticalityTier(str, Enum):
    """
    Ordinal criticality tier assigned to a business process.

    Ordered from least to most critical. The tier feeds the recovery
    priority score and the MTPD caps of derived recovery objectives.
    """

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ProcessStatus(str, Enum):
    """Lifecycle status of a process record. Processes are soft-cancelled, never deleted."""

    DRAFT = "draft"
    IN_REVIEW = "in-review"
    APPROVED = "approved"
    CANCELLED = "cancelled"


class TimeUnit(str, Enum):
    """Units for timeline offsets and resource recovery objectives."""

    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


class ResourceType(str, Enum):
    """Classes of supporting business resources."""

    PERSONNEL = "personnel"
    SYSTEMS = "systems"
    EQUIPMENT = "equipment"
    FACILITIES = "facilities"
    VENDORS = "vendors"
    DATA = "data"


class Redundancy(str, Enum):
    """Redundancy level of a business resource."""

    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


class DependencyType(str, Enum):
    """Nature of a dependency edge."""

    TECHNICAL = "technical"
    OPERATIONAL = "operational"
    RESOURCE = "resource"


class RecoveryStrategy(str, Enum):
    """Recovery strategy tag attached to a recovery objective."""

    HIGH_AVAILABILITY = "high-availability"
    WARM_STANDBY = "warm-standby"
    COLD_BACKUP = "cold-backup"
    MANUAL = "manual"
    CLOUD_BASED = "cloud-based"


class TestingStatus(str, Enum):
    """Outcome of the last test of a recovery option."""

    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    PENDING = "pending"
    NOT_TESTED = "not-tested"


class ImpactLevel(str, Enum):
    """
    Qualitative band of a weighted impact score (0-5 scale).

    Bands:
    - CRITICAL: >= 4.5
    - HIGH: >= 3.5
    - MEDIUM: >= 2.5
    - LOW: >= 1.5
    - MINIMAL: >= 0.5
    - NONE: below 0.5
    """

    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class NodeKind(str, Enum):
    """Kind of node in the dependency graph."""

    PROCESS = "process"
    RESOURCE = "resource"


class LinkDirection(str, Enum):
    """Direction of a process/resource link on a dependency map."""

    PROCESS_TO_RESOURCE = "process_to_resource"
    RESOURCE_TO_PROCESS = "resource_to_process"


class GapSeverity(str, Enum):
    """Severity of a resilience gap insight, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GapType(str, Enum):
    """Category of a resilience gap insight."""

    COVERAGE = "coverage"
    COMPLIANCE = "compliance"
    READINESS = "readiness"
    FINANCIAL = "financial"
