"""
Composite result of one full analysis run.
"""

from pydantic import Field

from .base import ResultModel
from .bcdr import BCDRReport, GapInsight
from .impact import ProcessImpactScore
from .network import GraphAnalysisResult


class BIAAnalysisResult(ResultModel):
    """
    Everything the engine derives from one snapshot.

    Attributes:
        impact_scores: Impact score per process id
        graph_analysis: Dependency network analysis
        bcdr_report: BCDR gap analysis and readiness score
        resilience_gaps: Resilience gap insights, most severe first
        warnings: Input problems skipped during the run
    """

    impact_scores: dict[str, ProcessImpactScore] = Field(default_factory=dict)
    graph_analysis: GraphAnalysisResult = Field(default_factory=GraphAnalysisResult)
    bcdr_report: BCDRReport = Field(default_factory=BCDRReport)
    resilience_gaps: list[GapInsight] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
