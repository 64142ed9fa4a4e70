"""
Dependency inference and layering for the workflow graph.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from nfbuilder.graph.call_extractor import CallInstance
from nfbuilder.graph.graph_schema import GraphEdge, GraphNode

# PROC.out or PROC.out.channel; the channel name is not retained.
CHANNEL_OUTPUT_PATTERN = re.compile(r"(\w+)\.out(?:\.\w+)?", re.ASCII)


class DependencyResolver:
    def infer_edges(
        self, calls: Sequence[CallInstance], known_names: Iterable[str]
    ) -> List[GraphEdge]:
        names = set(known_names)
        edges: List[GraphEdge] = []
        seen: Set[Tuple[str, str]] = set()
        for call in calls:
            target = call.process_name
            for match in CHANNEL_OUTPUT_PATTERN.finditer(call.raw_argument_text):
                source = match.group(1)
                if source not in names or source == target:
                    continue
                if (source, target) in seen:
                    continue
                seen.add((source, target))
                edges.append(
                    GraphEdge(
                        id=GraphEdge.edge_id(source, target),
                        source=source,
                        target=target,
                    )
                )
        return edges

    def adjacency(
        self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]
    ) -> Dict[str, List[str]]:
        graph: Dict[str, List[str]] = {node.id: [] for node in nodes}
        for edge in edges:
            if edge.source not in graph or edge.target not in graph:
                continue
            if edge.target not in graph[edge.source]:
                graph[edge.source].append(edge.target)
        return graph

    def in_degree(
        self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]
    ) -> Dict[str, int]:
        graph = self.adjacency(nodes, edges)
        degree: Dict[str, int] = {node_id: 0 for node_id in graph}
        for targets in graph.values():
            for target in targets:
                degree[target] += 1
        return degree

    def layers(
        self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]
    ) -> Tuple[List[List[str]], List[str]]:
        """
        Kahn's algorithm processed in waves; each wave is one layer.

        Returns the layers and the ids that never reached zero in-degree
        (members of, or downstream of, a cycle).
        """
        graph = self.adjacency(nodes, edges)
        degree = self.in_degree(nodes, edges)

        queue: List[str] = [node_id for node_id in graph if degree[node_id] == 0]
        layers: List[List[str]] = []
        placed: Set[str] = set()
        while queue:
            layer = queue
            queue = []
            for node_id in layer:
                placed.add(node_id)
                for target in graph[node_id]:
                    degree[target] -= 1
                    if degree[target] == 0:
                        queue.append(target)
            layers.append(layer)

        unplaced = [node_id for node_id in graph if node_id not in placed]
        return layers, unplaced
