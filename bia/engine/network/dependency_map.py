"""
Dependency Map Adapter — Canvas Blob Normalization.

Saved dependency maps are opaque node/edge blobs produced by the
registry's drag-and-drop canvas. This adapter reduces one to the list of
business resources the process depends on, without relying on the
canvas's node id conventions:

1. A node is a resource node when its data carries ``resourceType``
2. Resource nodes are matched by ``data.resourceId`` when present,
   otherwise by ``data.label`` against the resource name
3. The first edge touching a resource node gives the link direction,
   criticality (default 3) and quantity annotations
4. A resource drawn twice on the same map yields a single link

Version: dep_map_adapter_v1
"""

from typing import Any, Optional, Sequence

import structlog

from bia.models.entities import (
    BusinessResource,
    DependencyMap,
    DependencyMapEdge,
    DependencyMapNode,
    Process,
    ProcessResourceLink,
)
from bia.models.enums import LinkDirection
from bia.models.network import NormalizedDependencyMap

logger = structlog.get_logger()

RESOURCE_MARKER_KEY = "resourceType"
DEFAULT_LINK_CRITICALITY = 3


def _coerce_criticality(value: Any) -> int:
    """Read a 1-5 criticality annotation, falling back to the default."""
    try:
        criticality = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LINK_CRITICALITY
    return min(5, max(1, criticality))


def _coerce_quantity(value: Any) -> Optional[int]:
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return None
    return quantity if quantity >= 0 else None


class DependencyMapAdapter:
    """
    Normalizes saved dependency maps against the resource registry.

    Attributes:
        resources_by_id: Registered resources keyed by id
        resources_by_name: Registered resources keyed by name (first wins)
        logger: Structured logger

    Example:
        >>> adapter = DependencyMapAdapter(resources)
        >>> normalized = adapter.normalize("p1", snapshot.dependency_maps.get("p1"))
        >>> print(normalized.resource_ids, normalized.is_trivial)
    """

    def __init__(self, resources: Sequence[BusinessResource]):
        """
        Initialize the adapter.

        Args:
            resources: Registered business resources
        """
        self.resources_by_id = {r.id: r for r in resources}
        self.resources_by_name: dict[str, BusinessResource] = {}
        for resource in resources:
            self.resources_by_name.setdefault(resource.name, resource)
        self.logger = structlog.get_logger()

    @staticmethod
    def is_resource_node(node: DependencyMapNode) -> bool:
        """Whether a canvas node stands for a business resource."""
        return bool(node.data.get(RESOURCE_MARKER_KEY))

    def resolve_resource(self, node: DependencyMapNode) -> Optional[BusinessResource]:
        """
        Find the registered resource a canvas node stands for.

        Args:
            node: A resource node

        Returns:
            The matching BusinessResource, or None
        """
        resource_id = node.data.get("resourceId")
        if resource_id is not None and str(resource_id) in self.resources_by_id:
            return self.resources_by_id[str(resource_id)]

        label = node.data.get("label")
        if label is None:
            return None
        return self.resources_by_name.get(str(label))

    def normalize(
        self,
        process_id: str,
        dependency_map: Optional[DependencyMap],
    ) -> NormalizedDependencyMap:
        """
        Reduce a process's saved map to its resource links.

        Args:
            process_id: Process the map belongs to
            dependency_map: Saved map, or None if the process has none

        Returns:
            NormalizedDependencyMap (trivial and empty when there is no map)
        """
        if dependency_map is None:
            return NormalizedDependencyMap(process_id=process_id)

        edges_by_node: dict[str, list[DependencyMapEdge]] = {}
        for edge in dependency_map.edges:
            edges_by_node.setdefault(edge.source, []).append(edge)
            if edge.target != edge.source:
                edges_by_node.setdefault(edge.target, []).append(edge)

        resource_ids: list[str] = []
        links: list[ProcessResourceLink] = []
        warnings: list[str] = []

        for node in dependency_map.nodes:
            if not self.is_resource_node(node):
                continue

            resource = self.resolve_resource(node)
            if resource is None:
                message = (
                    f"Dependency map of process {process_id}: resource node "
                    f"'{node.data.get('label', node.id)}' matches no registered resource"
                )
                warnings.append(message)
                self.logger.warning(
                    "dependency_map_resource_unmatched",
                    process_id=process_id,
                    node_id=node.id,
                    label=node.data.get("label"),
                )
                continue

            if resource.id in resource_ids:
                continue
            resource_ids.append(resource.id)
            links.append(self._build_link(process_id, resource, node, edges_by_node.get(node.id, [])))

        normalized = NormalizedDependencyMap(
            process_id=process_id,
            resource_ids=resource_ids,
            links=links,
            node_count=len(dependency_map.nodes),
            is_trivial=len(dependency_map.nodes) <= 1,
            warnings=warnings,
        )

        self.logger.debug(
            "dependency_map_normalized",
            process_id=process_id,
            node_count=normalized.node_count,
            resource_count=len(resource_ids),
            unmatched_count=len(warnings),
        )

        return normalized

    def normalize_all(
        self,
        processes: Sequence[Process],
        dependency_maps: dict[str, DependencyMap],
    ) -> dict[str, NormalizedDependencyMap]:
        """
        Normalize the saved map of every process.

        Args:
            processes: Processes to normalize maps for
            dependency_maps: Saved maps keyed by process id

        Returns:
            {process_id: NormalizedDependencyMap}
        """
        return {
            process.id: self.normalize(process.id, dependency_maps.get(process.id))
            for process in processes
        }

    def _build_link(
        self,
        process_id: str,
        resource: BusinessResource,
        node: DependencyMapNode,
        edges: list[DependencyMapEdge],
    ) -> ProcessResourceLink:
        """Build the link for a resource node from its first incident edge."""
        direction = LinkDirection.PROCESS_TO_RESOURCE
        criticality = node.data.get("criticality", DEFAULT_LINK_CRITICALITY)
        quantity = node.data.get("quantity")

        if edges:
            edge = edges[0]
            if edge.source == node.id and edge.target != node.id:
                direction = LinkDirection.RESOURCE_TO_PROCESS
            criticality = edge.data.get("criticality", criticality)
            quantity = edge.data.get("quantity", quantity)

        return ProcessResourceLink(
            process_id=process_id,
            resource_id=resource.id,
            direction=direction,
            criticality=_coerce_criticality(criticality),
            quantity=_coerce_quantity(quantity),
        )
