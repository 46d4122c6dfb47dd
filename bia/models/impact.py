"""
Impact scoring result models.

Outputs of the time-series impact scorer and the recovery objective
deriver, one per process.
"""

from typing import Optional

from pydantic import Field, field_validator

from .base import ResultModel
from .enums import ImpactLevel


class ProcessImpactScore(ResultModel):
    """
    Worst-case impact profile and weighted criticality score of a process.

    Attributes:
        process_id: Process the score belongs to
        max_impact_per_category: Max severity (0-5) per category over all timeline points
        weighted_score: Weight-averaged worst-case severity (0-5, 2 dp)
        suggested_mtpd: Earliest timeline offset (hours) breaching the threshold, or None
        impact_level: Qualitative band of the weighted score
        highest_category: Category with the largest worst-case severity
        assessed: Whether the process had an impact matrix at all
    """

    process_id: str = Field(description="Process the score belongs to")
    max_impact_per_category: dict[str, int] = Field(
        default_factory=dict, description="Max severity per category id"
    )
    weighted_score: float = Field(default=0.0, ge=0.0, le=5.0, description="Weighted criticality score")
    suggested_mtpd: Optional[float] = Field(
        default=None, alias="suggestedMTPD", description="Suggested MTPD in hours"
    )
    impact_level: ImpactLevel = Field(default=ImpactLevel.NONE, description="Band of the weighted score")
    highest_category: Optional[str] = Field(
        default=None, description="Category id with the largest worst-case severity"
    )
    assessed: bool = Field(default=False, description="Whether an impact matrix was supplied")

    @field_validator("max_impact_per_category")
    @classmethod
    def validate_severity_bounds(cls, v: dict[str, int]) -> dict[str, int]:
        """Ensure worst-case severities stay on the 0-5 scale."""
        for category_id, severity in v.items():
            if not 0 <= severity <= 5:
                raise ValueError(f"Severity for {category_id} out of range: {severity}")
        return v


class DerivedRecoveryObjective(ResultModel):
    """Recovery objectives suggested from a process's temporal impact profile."""

    process_id: str = Field(description="Process the objectives are derived for")
    mtpd: float = Field(ge=1.0, description="Max tolerable period of disruption (h)")
    rto: float = Field(ge=1.0, description="Recovery time objective (h)")
    rpo: float = Field(ge=0.5, description="Recovery point objective (h)")
    mbco: bool = Field(description="Minimum business continuity objective applies")
    threshold_breached: bool = Field(
        description="Whether any timeline point reached the impact threshold"
    )
