"""
BIA Analysis Engine — Core Orchestrator.

Single entry point that runs every analytics component over one
snapshot of the BIA registry:

1. Score the temporal impact of every process
2. Normalize the saved dependency maps into process/resource links
3. Build the process/resource dependency network from Dependency and
   Resource Dependency records
4. Analyze the network (centrality, SPOFs, critical paths, statistics)
5. Reconcile recovery objectives with resource capabilities (BCDR gaps)
6. Identify coverage, compliance and readiness gaps

Every component is pure over the snapshot; the engine keeps no state
between calls and can analyze independent snapshots concurrently.

Version: bia_engine_v1
"""

from typing import Optional
from uuid import uuid4

import structlog

from bia.config import Settings, get_settings
from bia.models.analysis import BIAAnalysisResult
from bia.models.entities import AnalysisSnapshot
from bia.models.impact import DerivedRecoveryObjective
from bia.utils.logging import bind_run_context, clear_run_context

from .bcdr import BCDRGapAnalyzer, ResilienceGapAnalyzer
from .impact import TemporalImpactScorer, derive_recovery_objective, validate_category_weights
from .network import DependencyGraphBuilder, DependencyMapAdapter, NetworkAnalyzer

logger = structlog.get_logger()


class BIAAnalysisEngine:
    """
    Orchestrates the complete BIA analysis pipeline.

    Attributes:
        settings: Engine settings the components are configured from
        scorer: Temporal impact scorer
        graph_builder: Dependency graph builder
        network_analyzer: Network analyzer
        gap_analyzer: BCDR gap analyzer
        resilience_analyzer: Resilience gap analyzer
        logger: Structured logger

    Example:
        >>> engine = BIAAnalysisEngine()
        >>> result = engine.analyze(snapshot)
        >>> print(f"Readiness: {result.bcdr_report.readiness_score}%")
        >>> print(f"SPOFs: {[s.name for s in result.graph_analysis.spof_nodes]}")
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the engine and its components.

        Args:
            settings: Optional settings (default: cached environment settings)

        Raises:
            ValueError: If a setting is outside the range a component accepts
        """
        self.settings = settings or get_settings()
        self.scorer = TemporalImpactScorer(
            impact_threshold=self.settings.impact_threshold,
            enforce_weight_total=self.settings.enforce_category_weight_total,
        )
        self.graph_builder = DependencyGraphBuilder()
        self.network_analyzer = NetworkAnalyzer(
            spof_threshold=self.settings.spof_degree_threshold,
            spof_top_n=self.settings.spof_top_n,
            critical_path_top_n=self.settings.critical_path_top_n,
            critical_path_max_nodes=self.settings.critical_path_max_nodes,
        )
        self.gap_analyzer = BCDRGapAnalyzer(
            recovery_priority_top_n=self.settings.recovery_priority_top_n,
        )
        self.resilience_analyzer = ResilienceGapAnalyzer()
        self.logger = structlog.get_logger()

    def analyze(self, snapshot: AnalysisSnapshot) -> BIAAnalysisResult:
        """
        Run the full analysis over a snapshot.

        Args:
            snapshot: Everything the run reads

        Returns:
            BIAAnalysisResult with all component outputs and input warnings
        """
        run_id = f"bia_{uuid4().hex[:12]}"
        bind_run_context(run_id=run_id)

        try:
            self.logger.info(
                "bia_analysis_started",
                process_count=len(snapshot.processes),
                resource_count=len(snapshot.resources),
                category_count=len(snapshot.categories),
                timeline_point_count=len(snapshot.timeline_points),
            )

            warnings: list[str] = []

            # Step 1: Temporal impact scores
            impact_scores = self.scorer.score_all(snapshot)
            if (
                snapshot.categories
                and self.settings.enforce_category_weight_total
                and not validate_category_weights(snapshot.categories)
            ):
                total = sum(c.weight for c in snapshot.categories)
                warnings.append(
                    f"Impact category weights total {total:g}, expected 100; weighted scores set to 0"
                )

            # Step 2: Dependency maps → process/resource links
            adapter = DependencyMapAdapter(snapshot.resources)
            normalized_maps = adapter.normalize_all(snapshot.processes, snapshot.dependency_maps)
            links = []
            for normalized in normalized_maps.values():
                links.extend(normalized.links)
                warnings.extend(normalized.warnings)

            # Steps 3-4: Dependency network (map links only when opted in)
            graph_links = links if self.settings.include_map_links_in_graph else []
            dep_graph = self.graph_builder.build_from_snapshot(snapshot, links=graph_links)
            graph_analysis = self.network_analyzer.analyze(dep_graph)
            warnings.extend(graph_analysis.warnings)

            # Step 5: BCDR gaps
            bcdr_report = self.gap_analyzer.analyze(
                snapshot.processes,
                snapshot.resources,
                snapshot.recovery_objectives,
                normalized_maps,
                impact_scores,
            )

            # Step 6: Resilience insights
            resilience_gaps = self.resilience_analyzer.identify(
                snapshot.processes,
                snapshot.impact_matrices,
                snapshot.recovery_objectives,
                snapshot.recovery_options,
            )

            result = BIAAnalysisResult(
                impact_scores=impact_scores,
                graph_analysis=graph_analysis,
                bcdr_report=bcdr_report,
                resilience_gaps=resilience_gaps,
                warnings=warnings,
            )

            self.logger.info(
                "bia_analysis_complete",
                readiness_score=bcdr_report.readiness_score,
                critical_issues=bcdr_report.critical_issues,
                spof_count=len(graph_analysis.spof_nodes),
                resilience_gap_count=len(resilience_gaps),
                warning_count=len(warnings),
            )

            return result
        finally:
            clear_run_context()

    def suggest_recovery_objectives(
        self,
        snapshot: AnalysisSnapshot,
    ) -> dict[str, DerivedRecoveryObjective]:
        """
        Derive suggested MTPD/RTO/RPO for every process from its impact profile.

        Args:
            snapshot: Analysis snapshot

        Returns:
            {process_id: DerivedRecoveryObjective}
        """
        suggestions = {
            process.id: derive_recovery_objective(
                process,
                snapshot.impact_matrices.get(process.id),
                snapshot.categories,
                snapshot.timeline_points,
                impact_threshold=self.settings.impact_threshold,
                default_mtpd_hours=self.settings.default_mtpd_hours,
                scorer=self.scorer,
            )
            for process in snapshot.processes
        }

        self.logger.info(
            "recovery_objectives_suggested",
            process_count=len(suggestions),
            breached_count=sum(1 for s in suggestions.values() if s.threshold_breached),
        )

        return suggestions
