"""
Dependency network analysis result models.

Structures returned by the network analyzer: degree centrality, single
points of failure, ranked critical paths and whole-network statistics.
"""

from pydantic import Field

from .base import ResultModel
from .entities import ProcessResourceLink
from .enums import NodeKind


class NormalizedDependencyMap(ResultModel):
    """
    A saved dependency map reduced to the process/resource links it draws.

    Attributes:
        process_id: Process the map belongs to
        resource_ids: Distinct matched resources, in first-seen order
        links: One link per matched resource
        node_count: Number of canvas nodes on the map (0 when no map)
        is_trivial: No map, or a map holding only the process's own node
        warnings: Resource nodes that matched no registered resource
    """

    process_id: str
    resource_ids: list[str] = Field(default_factory=list)
    links: list[ProcessResourceLink] = Field(default_factory=list)
    node_count: int = Field(default=0, ge=0)
    is_trivial: bool = Field(default=True)
    warnings: list[str] = Field(default_factory=list)


class SpofNode(ResultModel):
    """
    A node whose undirected degree marks it as a potential single point of failure.

    Attributes:
        id: Graph node key (``process:<id>`` or ``resource:<id>``)
        name: Node label
        centrality: Undirected degree (in + out)
        type: Whether the node is a process or a resource
    """

    id: str = Field(description="Graph node key")
    name: str = Field(description="Node label")
    centrality: int = Field(ge=0, description="Undirected degree")
    type: NodeKind = Field(description="Process or resource")


class CriticalPath(ResultModel):
    """
    Minimum-cost route between two nodes under the criticality cost function.

    ``criticality`` is the sum of raw edge criticality weights along the
    path, not the search cost. ``length`` counts nodes.
    """

    path: list[str] = Field(description="Node labels from source to target")
    node_ids: list[str] = Field(description="Graph node keys from source to target")
    criticality: int = Field(ge=0, description="Sum of edge criticality weights")
    length: int = Field(ge=2, description="Number of nodes on the path")


class NetworkStats(ResultModel):
    """Whole-network size and connectivity statistics."""

    nodes: int = Field(ge=0, description="Node count")
    edges: int = Field(ge=0, description="Edge count")
    density: float = Field(ge=0.0, description="2|E| / (|V|(|V|-1)), 0 when |V| < 2")
    avg_degree: float = Field(ge=0.0, description="2|E| / |V|, 0 when |V| = 0")


class GraphAnalysisResult(ResultModel):
    """
    Complete network analysis of a dependency graph.

    Attributes:
        degree_centrality: Undirected degree per node key
        spof_nodes: Potential single points of failure, most connected first
        critical_paths: Top critical paths, highest summed criticality first
        network_stats: Size and connectivity statistics
        critical_paths_truncated: Path search skipped because the graph was too large
        warnings: Input problems encountered while building the graph
    """

    degree_centrality: dict[str, int] = Field(default_factory=dict)
    spof_nodes: list[SpofNode] = Field(default_factory=list)
    critical_paths: list[CriticalPath] = Field(default_factory=list)
    network_stats: NetworkStats = Field(
        default_factory=lambda: NetworkStats(nodes=0, edges=0, density=0.0, avg_degree=0.0)
    )
    critical_paths_truncated: bool = Field(default=False)
    warnings: list[str] = Field(default_factory=list)
