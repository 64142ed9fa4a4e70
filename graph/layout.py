"""
Layered layout for the workflow graph: node coordinates and edge curves.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from nfbuilder.graph.dependency_resolver import DependencyResolver
from nfbuilder.graph.graph_schema import GraphEdge, GraphNode, Point, WorkflowLayout

LOGGER = logging.getLogger(__name__)


class LayoutConfig(BaseModel):
    node_width: float = 180.0
    node_height: float = 60.0
    x_spacing: float = 80.0
    y_spacing: float = 100.0
    canvas_width: float = 800.0
    min_canvas_width: float = 800.0
    min_canvas_height: float = 600.0
    curve_offset: float = 30.0
    curve_depth: float = 0.6


class LayeredLayoutEngine:
    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        resolver: Optional[DependencyResolver] = None,
    ) -> None:
        self.config = config or LayoutConfig()
        self.resolver = resolver or DependencyResolver()

    def make_node(self, process_name: str) -> GraphNode:
        return GraphNode(
            id=process_name,
            display_name=process_name,
            width=self.config.node_width,
            height=self.config.node_height,
        )

    def layout(
        self,
        nodes: Sequence[GraphNode],
        edges: Sequence[GraphEdge],
        canvas_width: Optional[float] = None,
    ) -> WorkflowLayout:
        width = self.config.canvas_width if canvas_width is None else canvas_width
        layers, unplaced = self.resolver.layers(nodes, edges)
        if unplaced:
            LOGGER.warning(
                "%d process(es) could not be placed (dependency cycle): %s",
                len(unplaced),
                ", ".join(unplaced),
            )

        source_nodes = {node.id: node for node in nodes}
        positioned: Dict[str, GraphNode] = {}
        for index, layer in enumerate(layers):
            for node_id, x in zip(layer, self._layer_x_positions(len(layer), width)):
                positioned[node_id] = source_nodes[node_id].model_copy(
                    update={"x": x, "y": self._layer_y(index)}
                )

        placed_nodes = [positioned[node.id] for node in nodes if node.id in positioned]
        placed_edges: List[GraphEdge] = []
        for edge in edges:
            if edge.source not in positioned or edge.target not in positioned:
                continue
            placed_edges.append(
                self._route_edge(edge, positioned[edge.source], positioned[edge.target])
            )

        bounding_width, bounding_height = self._bounding_box(placed_nodes)
        return WorkflowLayout(
            nodes=placed_nodes,
            edges=placed_edges,
            bounding_width=bounding_width,
            bounding_height=bounding_height,
            unplaced=unplaced,
            canvas_width=width,
        )

    def _layer_x_positions(self, count: int, canvas_width: float) -> List[float]:
        cfg = self.config
        layer_width = count * cfg.node_width + (count - 1) * cfg.x_spacing
        current = (canvas_width - layer_width) / 2
        if current < cfg.x_spacing:
            current = cfg.x_spacing
        positions: List[float] = []
        for _ in range(count):
            positions.append(current)
            current += cfg.node_width + cfg.x_spacing
        return positions

    def _layer_y(self, layer_index: int) -> float:
        cfg = self.config
        return layer_index * (cfg.node_height + cfg.y_spacing) + cfg.y_spacing

    def _route_edge(self, edge: GraphEdge, source: GraphNode, target: GraphNode) -> GraphEdge:
        cfg = self.config
        start = Point(x=source.x + source.width / 2, y=source.y + source.height)
        end = Point(x=target.x + target.width / 2, y=target.y)

        if start.y < end.y:
            control_y = start.y + (end.y - start.y) * cfg.curve_depth
            if start.x > end.x:
                control_x = start.x - (start.x - end.x) * 0.5 - cfg.curve_offset
            elif start.x < end.x:
                control_x = start.x + (end.x - start.x) * 0.5 + cfg.curve_offset
            else:
                control_x = start.x + cfg.curve_offset
        else:
            dx = end.x - start.x
            dy = end.y - start.y
            curvature = min(math.hypot(dx, dy) * 0.25, 50.0)
            control_x = (start.x + end.x) / 2 + curvature
            control_y = (start.y + end.y) / 2

        return edge.model_copy(
            update={
                "start_point": start,
                "end_point": end,
                "control_point": Point(x=control_x, y=control_y),
            }
        )

    def _bounding_box(self, nodes: Sequence[GraphNode]) -> Tuple[float, float]:
        cfg = self.config
        max_x = max((node.x + node.width for node in nodes), default=0.0)
        max_y = max((node.y + node.height for node in nodes), default=0.0)
        return (
            max(cfg.min_canvas_width, max_x + cfg.x_spacing * 2),
            max(cfg.min_canvas_height, max_y + cfg.y_spacing * 2),
        )
