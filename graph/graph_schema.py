"""
Node, edge and layout result types for the workflow visualizer.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Point(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GraphNode(BaseModel):
    id: str
    display_name: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class GraphEdge(BaseModel):
    id: str
    source: str
    target: str
    start_point: Point = Field(default_factory=Point)
    end_point: Point = Field(default_factory=Point)
    control_point: Point = Field(default_factory=Point)

    @staticmethod
    def edge_id(source: str, target: str) -> str:
        return f"{source}->{target}"


class WorkflowLayout(BaseModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)
    bounding_width: float = 0.0
    bounding_height: float = 0.0
    unplaced: List[str] = Field(default_factory=list)
    canvas_width: float = 0.0


class VisualizationReport(BaseModel):
    success: bool
    layout: Optional[WorkflowLayout] = None
    error: Optional[str] = None
    message: Optional[str] = None
    call_count: int = 0
