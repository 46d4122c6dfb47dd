"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Impact scoring
    impact_threshold: int = Field(
        default=3, ge=1, le=5, description="Severity at which a timeline point counts as intolerable"
    )
    default_mtpd_hours: float = Field(
        default=72.0, gt=0, description="MTPD used when no timeline point breaches the threshold"
    )
    enforce_category_weight_total: bool = Field(
        default=True, description="Score 0 when impact category weights do not total 100"
    )

    # Network analysis
    spof_degree_threshold: int = Field(
        default=2, ge=0, description="Degree above which a node is a potential SPOF"
    )
    spof_top_n: int = Field(default=10, ge=1, description="Max SPOF nodes reported")
    critical_path_top_n: int = Field(default=20, ge=1, description="Max critical paths reported")
    critical_path_max_nodes: int = Field(
        default=500, ge=2, description="Node count above which critical path search is skipped"
    )
    include_map_links_in_graph: bool = Field(
        default=False,
        description="Add dependency-map process/resource links as edges of the analysis graph",
    )

    # BCDR
    recovery_priority_top_n: int = Field(
        default=10, ge=1, description="Max processes in the recovery priority list"
    )

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only json and console renderers are supported."""
        v = v.strip().lower()
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
