"""
Dependency Graph Builder — Process & Resource Network Assembly.

Assembles a directed multigraph from the BIA registry:

- Nodes: one per process (``process:<id>``) and one per business
  resource (``resource:<id>``), so the two id spaces never collide
- Edges: one per process dependency, resource dependency and
  process/resource link drawn on a dependency map, each carrying
  ``{type, criticality_weight}``

Criticality weights:
- Process dependency: its own 1-5 criticality
- Resource dependency: 5 when blocking, else 3
- Process/resource link: the link's 1-5 criticality annotation

Nodes and edges are inserted sorted by key, so building twice from the
same records yields identical graphs, iteration order included. Edges
that reference an unknown node are skipped with a warning.

Version: dep_graph_builder_v1
"""

from typing import Iterable, Optional, Sequence

import networkx as nx
import structlog

from bia.models.entities import (
    AnalysisSnapshot,
    BusinessResource,
    Dependency,
    Process,
    ProcessResourceLink,
    ResourceDependency,
)
from bia.models.enums import CriticalityTier, DependencyType, LinkDirection, NodeKind, Redundancy

logger = structlog.get_logger()

PROCESS_PREFIX = "process:"
RESOURCE_PREFIX = "resource:"

BLOCKING_WEIGHT = 5
NON_BLOCKING_WEIGHT = 3

# Node criticality shown on the network, 1 (low) to 5 (critical)
TIER_CRITICALITY = {
    CriticalityTier.CRITICAL: 5,
    CriticalityTier.HIGH: 4,
    CriticalityTier.MEDIUM: 3,
    CriticalityTier.LOW: 2,
    CriticalityTier.MINIMAL: 1,
}

REDUNDANCY_CRITICALITY = {
    Redundancy.NONE: 5,
    Redundancy.PARTIAL: 3,
    Redundancy.FULL: 1,
}


def process_node_key(process_id: str) -> str:
    """Graph key of a process node."""
    return f"{PROCESS_PREFIX}{process_id}"


def resource_node_key(resource_id: str) -> str:
    """Graph key of a resource node."""
    return f"{RESOURCE_PREFIX}{resource_id}"


class DependencyGraph:
    """
    A built dependency network plus the input problems met while building it.

    Attributes:
        graph: NetworkX MultiDiGraph; node attrs ``label, kind, criticality``,
            edge attrs ``id, type, criticality_weight, edge_kind``
        warnings: Human-readable descriptions of skipped records
    """

    def __init__(self, graph: nx.MultiDiGraph, warnings: Optional[list[str]] = None):
        self.graph = graph
        self.warnings = warnings or []

    @property
    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def label(self, node: str) -> str:
        """Display label of a node, falling back to its key."""
        return self.graph.nodes[node].get("label", node)

    def kind(self, node: str) -> NodeKind:
        """Whether a node is a process or a resource."""
        return self.graph.nodes[node]["kind"]

    def __contains__(self, node: str) -> bool:
        return node in self.graph


class DependencyGraphBuilder:
    """
    Builds dependency graphs from registry records.

    The builder holds no state between calls; ``build`` is a pure
    function of its arguments.

    Example:
        >>> builder = DependencyGraphBuilder()
        >>> dep_graph = builder.build(processes, resources, dependencies, resource_deps)
        >>> print(dep_graph.node_count, dep_graph.edge_count, dep_graph.warnings)
    """

    def __init__(self):
        self.logger = structlog.get_logger()

    def build(
        self,
        processes: Sequence[Process],
        resources: Sequence[BusinessResource],
        dependencies: Sequence[Dependency] = (),
        resource_dependencies: Sequence[ResourceDependency] = (),
        links: Iterable[ProcessResourceLink] = (),
    ) -> DependencyGraph:
        """
        Build the dependency network.

        Args:
            processes: Registered processes
            resources: Registered business resources
            dependencies: Process-to-process dependencies
            resource_dependencies: Resource-to-resource dependencies
            links: Process/resource links from dependency maps

        Returns:
            DependencyGraph with any skipped-record warnings
        """
        graph = nx.MultiDiGraph()
        warnings: list[str] = []

        nodes: dict[str, dict] = {}
        for process in processes:
            key = process_node_key(process.id)
            if key in nodes:
                warnings.append(f"Duplicate process id {process.id} ignored")
                continue
            nodes[key] = {
                "label": process.name,
                "kind": NodeKind.PROCESS,
                "criticality": TIER_CRITICALITY[process.criticality],
                "department": process.department,
            }
        for resource in resources:
            key = resource_node_key(resource.id)
            if key in nodes:
                warnings.append(f"Duplicate resource id {resource.id} ignored")
                continue
            nodes[key] = {
                "label": resource.name,
                "kind": NodeKind.RESOURCE,
                "criticality": REDUNDANCY_CRITICALITY[resource.redundancy],
                "resource_type": resource.type,
            }

        for key in sorted(nodes):
            graph.add_node(key, **nodes[key])

        edges = list(self._dependency_edges(dependencies))
        edges.extend(self._resource_dependency_edges(resource_dependencies))
        edges.extend(self._link_edges(links))
        edges.sort(key=lambda e: e[2]["id"])

        seen_edge_ids: set[str] = set()
        for source, target, attrs in edges:
            edge_id = attrs["id"]
            if edge_id in seen_edge_ids:
                warnings.append(f"Duplicate edge {edge_id} ignored")
                continue

            missing = [n for n in (source, target) if n not in graph]
            if missing:
                message = f"Edge {edge_id} references unknown node(s): {', '.join(missing)}"
                warnings.append(message)
                self.logger.warning(
                    "dependency_edge_skipped",
                    edge_id=edge_id,
                    source=source,
                    target=target,
                    missing_nodes=missing,
                )
                continue

            seen_edge_ids.add(edge_id)
            graph.add_edge(source, target, key=edge_id, **attrs)

        self.logger.info(
            "dependency_graph_built",
            node_count=graph.number_of_nodes(),
            edge_count=graph.number_of_edges(),
            skipped_count=len(warnings),
        )

        return DependencyGraph(graph, warnings)

    def build_from_snapshot(
        self,
        snapshot: AnalysisSnapshot,
        links: Iterable[ProcessResourceLink] = (),
    ) -> DependencyGraph:
        """
        Build the dependency network of a snapshot.

        Args:
            snapshot: Analysis snapshot
            links: Process/resource links from normalized dependency maps

        Returns:
            DependencyGraph
        """
        return self.build(
            snapshot.processes,
            snapshot.resources,
            snapshot.dependencies,
            snapshot.resource_dependencies,
            links,
        )

    # =========================================================================
    # Edge construction
    # =========================================================================

    @staticmethod
    def _dependency_edges(dependencies: Sequence[Dependency]):
        for dep in dependencies:
            yield (
                process_node_key(dep.source_process_id),
                process_node_key(dep.target_process_id),
                {
                    "id": f"dep:{dep.id}",
                    "type": dep.type,
                    "criticality_weight": dep.criticality,
                    "edge_kind": NodeKind.PROCESS,
                },
            )

    @staticmethod
    def _resource_dependency_edges(resource_dependencies: Sequence[ResourceDependency]):
        for dep in resource_dependencies:
            yield (
                resource_node_key(dep.source_resource_id),
                resource_node_key(dep.target_resource_id),
                {
                    "id": f"resdep:{dep.id}",
                    "type": dep.type,
                    "criticality_weight": BLOCKING_WEIGHT if dep.is_blocking else NON_BLOCKING_WEIGHT,
                    "edge_kind": NodeKind.RESOURCE,
                },
            )

    @staticmethod
    def _link_edges(links: Iterable[ProcessResourceLink]):
        for link in links:
            process_key = process_node_key(link.process_id)
            resource_key = resource_node_key(link.resource_id)
            if link.direction == LinkDirection.RESOURCE_TO_PROCESS:
                source, target = resource_key, process_key
            else:
                source, target = process_key, resource_key
            yield (
                source,
                target,
                {
                    "id": f"link:{link.process_id}:{link.resource_id}",
                    "type": DependencyType.RESOURCE,
                    "criticality_weight": link.criticality,
                    "edge_kind": NodeKind.RESOURCE,
                },
            )
