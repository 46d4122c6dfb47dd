"""
Dependency Network Analysis.

Components:
    DependencyMapAdapter: Reduces saved canvas maps to process/resource links
    DependencyGraphBuilder: Builds the process/resource multigraph
    NetworkAnalyzer: Degree centrality, SPOF detection, critical paths, statistics

Example:
    >>> from bia.engine.network import DependencyGraphBuilder, NetworkAnalyzer
    >>> dep_graph = DependencyGraphBuilder().build_from_snapshot(snapshot)
    >>> result = NetworkAnalyzer().analyze(dep_graph)
"""

from .analyzer import NetworkAnalyzer, edge_cost
from .dependency_map import DependencyMapAdapter
from .graph_builder import (
    DependencyGraph,
    DependencyGraphBuilder,
    process_node_key,
    resource_node_key,
)

__all__ = [
    "DependencyMapAdapter",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "NetworkAnalyzer",
    "edge_cost",
    "process_node_key",
    "resource_node_key",
]
