"""
Network Analyzer — Centrality, SPOF and Critical Path Analysis.

Read-only queries over a built dependency graph:

1. Degree centrality: in + out degree of every node (edges treated as
   undirected). This is the structural importance proxy; betweenness
   and closeness centrality are not computed.
2. SPOF detection: nodes whose degree exceeds a threshold (default 2),
   most connected first, capped at top-N (default 10).
3. Critical paths: for every ordered pair of distinct nodes, the route
   minimizing Σ(6 - criticality_weight), so that high-criticality edges
   are cheap and the search favours high-criticality routes. Paths are
   ranked by the sum of raw criticality weights (not by search cost)
   and the top-N (default 20) are kept. Unreachable pairs are skipped.
4. Network statistics: node/edge counts, density and average degree.

Critical path search runs single-source Dijkstra from every node with an
outgoing edge, which visits the same pairs with the same cost function
as a per-pair search at O(V · E log V). Graphs above a configurable node
ceiling skip the search with a warning.

Version: network_analyzer_v1
"""

from typing import Optional

import networkx as nx
import structlog

from bia.models.network import CriticalPath, GraphAnalysisResult, NetworkStats, SpofNode

from .graph_builder import DependencyGraph

logger = structlog.get_logger()

# Edge cost = COST_BASE - criticality_weight
COST_BASE = 6
DEFAULT_EDGE_CRITICALITY = 1


def edge_cost(u: str, v: str, edge_data: dict) -> float:
    """
    Dijkstra cost of moving from u to v.

    On a multigraph ``edge_data`` maps edge keys to attribute dicts; the
    cheapest parallel edge (highest criticality) is used.
    """
    return min(
        COST_BASE - attrs.get("criticality_weight", DEFAULT_EDGE_CRITICALITY)
        for attrs in edge_data.values()
    )


class NetworkAnalyzer:
    """
    Structural analysis of a dependency network.

    Attributes:
        spof_threshold: Degree above which a node is flagged as a SPOF
        spof_top_n: Maximum SPOF nodes reported
        critical_path_top_n: Maximum critical paths reported
        critical_path_max_nodes: Node count above which path search is skipped
        logger: Structured logger

    Example:
        >>> analyzer = NetworkAnalyzer()
        >>> result = analyzer.analyze(dep_graph)
        >>> for path in result.critical_paths[:3]:
        ...     print(" → ".join(path.path), path.criticality)
    """

    DEFAULT_SPOF_THRESHOLD = 2
    DEFAULT_SPOF_TOP_N = 10
    DEFAULT_CRITICAL_PATH_TOP_N = 20
    DEFAULT_CRITICAL_PATH_MAX_NODES = 500

    def __init__(
        self,
        spof_threshold: int = DEFAULT_SPOF_THRESHOLD,
        spof_top_n: int = DEFAULT_SPOF_TOP_N,
        critical_path_top_n: int = DEFAULT_CRITICAL_PATH_TOP_N,
        critical_path_max_nodes: int = DEFAULT_CRITICAL_PATH_MAX_NODES,
    ):
        """
        Initialize the analyzer.

        Args:
            spof_threshold: Degree above which a node is flagged (default 2)
            spof_top_n: Maximum SPOF nodes reported (default 10)
            critical_path_top_n: Maximum critical paths reported (default 20)
            critical_path_max_nodes: Node ceiling for path search (default 500)

        Raises:
            ValueError: If a limit is not positive or the threshold is negative
        """
        if spof_threshold < 0:
            raise ValueError(f"spof_threshold must be non-negative, got {spof_threshold}")
        for name, value in (
            ("spof_top_n", spof_top_n),
            ("critical_path_top_n", critical_path_top_n),
            ("critical_path_max_nodes", critical_path_max_nodes),
        ):
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")

        self.spof_threshold = spof_threshold
        self.spof_top_n = spof_top_n
        self.critical_path_top_n = critical_path_top_n
        self.critical_path_max_nodes = critical_path_max_nodes
        self.logger = structlog.get_logger()

    # =========================================================================
    # Centrality & SPOF
    # =========================================================================

    def degree_centrality(self, dep_graph: DependencyGraph) -> dict[str, int]:
        """
        Undirected degree (in + out) of every node.

        Args:
            dep_graph: Built dependency graph

        Returns:
            {node_key: degree}, in node key order
        """
        return {node: int(degree) for node, degree in dep_graph.graph.degree()}

    def detect_spof(
        self,
        dep_graph: DependencyGraph,
        threshold: Optional[int] = None,
        top_n: Optional[int] = None,
    ) -> list[SpofNode]:
        """
        Flag nodes whose degree exceeds the threshold.

        Args:
            dep_graph: Built dependency graph
            threshold: Override of the configured degree threshold
            top_n: Override of the configured result cap

        Returns:
            SpofNode list sorted by degree descending; ties keep node key order
        """
        threshold = self.spof_threshold if threshold is None else threshold
        top_n = self.spof_top_n if top_n is None else top_n

        centrality = self.degree_centrality(dep_graph)
        flagged = [(node, degree) for node, degree in centrality.items() if degree > threshold]
        flagged.sort(key=lambda item: item[1], reverse=True)

        spof_nodes = [
            SpofNode(
                id=node,
                name=dep_graph.label(node),
                centrality=degree,
                type=dep_graph.kind(node),
            )
            for node, degree in flagged[:top_n]
        ]

        self.logger.debug(
            "spof_nodes_detected",
            threshold=threshold,
            flagged_count=len(flagged),
            reported_count=len(spof_nodes),
        )

        return spof_nodes

    # =========================================================================
    # Critical paths
    # =========================================================================

    def find_critical_paths(
        self,
        dep_graph: DependencyGraph,
        top_n: Optional[int] = None,
    ) -> tuple[list[CriticalPath], bool]:
        """
        Rank minimum-cost paths between all ordered node pairs by criticality.

        Args:
            dep_graph: Built dependency graph
            top_n: Override of the configured result cap

        Returns:
            (paths sorted by summed criticality descending, truncated flag).
            The flag is True when the graph exceeded the node ceiling and
            the search was skipped.
        """
        top_n = self.critical_path_top_n if top_n is None else top_n
        graph = dep_graph.graph
        nodes = list(graph.nodes)

        if len(nodes) > self.critical_path_max_nodes:
            self.logger.warning(
                "critical_path_search_skipped",
                node_count=len(nodes),
                max_nodes=self.critical_path_max_nodes,
            )
            return [], True

        paths: list[CriticalPath] = []
        for source in nodes:
            if graph.out_degree(source) == 0:
                continue

            shortest = nx.single_source_dijkstra_path(graph, source, weight=edge_cost)
            for target in nodes:
                if target == source or target not in shortest:
                    continue
                node_path = shortest[target]
                paths.append(
                    CriticalPath(
                        path=[dep_graph.label(n) for n in node_path],
                        node_ids=list(node_path),
                        criticality=self._path_criticality(graph, node_path),
                        length=len(node_path),
                    )
                )

        paths.sort(key=lambda p: p.criticality, reverse=True)

        self.logger.debug(
            "critical_paths_computed",
            node_count=len(nodes),
            path_count=len(paths),
            top_criticality=paths[0].criticality if paths else None,
        )

        return paths[:top_n], False

    @staticmethod
    def _path_criticality(graph: nx.MultiDiGraph, node_path: list[str]) -> int:
        """Sum raw criticality weights along a path, taking the edge Dijkstra used."""
        total = 0
        for u, v in zip(node_path, node_path[1:]):
            total += max(
                attrs.get("criticality_weight", DEFAULT_EDGE_CRITICALITY)
                for attrs in graph[u][v].values()
            )
        return total

    # =========================================================================
    # Statistics
    # =========================================================================

    def network_stats(self, dep_graph: DependencyGraph) -> NetworkStats:
        """
        Node/edge counts, density and average degree.

        density = 2|E| / (|V|(|V|-1)), 0 when |V| < 2
        avg_degree = 2|E| / |V|, 0 when |V| = 0

        Args:
            dep_graph: Built dependency graph

        Returns:
            NetworkStats
        """
        node_count = dep_graph.node_count
        edge_count = dep_graph.edge_count

        density = (2 * edge_count) / (node_count * (node_count - 1)) if node_count >= 2 else 0.0
        avg_degree = (2 * edge_count) / node_count if node_count > 0 else 0.0

        return NetworkStats(
            nodes=node_count,
            edges=edge_count,
            density=density,
            avg_degree=avg_degree,
        )

    # =========================================================================
    # Full analysis
    # =========================================================================

    def analyze(self, dep_graph: DependencyGraph) -> GraphAnalysisResult:
        """
        Run every network query.

        Args:
            dep_graph: Built dependency graph

        Returns:
            GraphAnalysisResult carrying the graph's build warnings
        """
        critical_paths, truncated = self.find_critical_paths(dep_graph)
        warnings = list(dep_graph.warnings)
        if truncated:
            warnings.append(
                f"Critical path search skipped: {dep_graph.node_count} nodes exceeds "
                f"the limit of {self.critical_path_max_nodes}"
            )

        result = GraphAnalysisResult(
            degree_centrality=self.degree_centrality(dep_graph),
            spof_nodes=self.detect_spof(dep_graph),
            critical_paths=critical_paths,
            network_stats=self.network_stats(dep_graph),
            critical_paths_truncated=truncated,
            warnings=warnings,
        )

        self.logger.info(
            "network_analysis_complete",
            node_count=result.network_stats.nodes,
            edge_count=result.network_stats.edges,
            spof_count=len(result.spof_nodes),
            critical_path_count=len(result.critical_paths),
            truncated=truncated,
        )

        return result
