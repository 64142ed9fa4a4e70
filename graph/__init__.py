from nfbuilder.graph.call_extractor import CallInstance, extract_calls
from nfbuilder.graph.dependency_resolver import DependencyResolver
from nfbuilder.graph.graph_schema import (
    GraphEdge,
    GraphNode,
    Point,
    VisualizationReport,
    WorkflowLayout,
)
from nfbuilder.graph.layout import LayeredLayoutEngine, LayoutConfig
from nfbuilder.graph.svg_renderer import render_svg
from nfbuilder.graph.visualizer import WorkflowVisualizer

__all__ = [
    "CallInstance",
    "extract_calls",
    "DependencyResolver",
    "GraphNode",
    "GraphEdge",
    "Point",
    "WorkflowLayout",
    "VisualizationReport",
    "LayeredLayoutEngine",
    "LayoutConfig",
    "WorkflowVisualizer",
    "render_svg",
]
