"""
Workflow visualizer: extract calls, infer dependencies, lay out the graph.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from nfbuilder.graph.call_extractor import extract_calls
from nfbuilder.graph.dependency_resolver import DependencyResolver
from nfbuilder.graph.graph_schema import GraphNode, VisualizationReport
from nfbuilder.graph.layout import LayeredLayoutEngine, LayoutConfig
from nfbuilder.ir.pipeline_schema import Pipeline

LOGGER = logging.getLogger(__name__)

NOTHING_TO_SHOW = (
    "Define some processes and add calls to them in the workflow to see a visualization."
)
NO_KNOWN_CALLS = (
    "Could not parse any known process calls from the workflow content, "
    "or no processes are defined that match calls in the workflow."
)


class WorkflowVisualizer:
    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        resolver: Optional[DependencyResolver] = None,
    ) -> None:
        self.resolver = resolver or DependencyResolver()
        self.engine = LayeredLayoutEngine(config=config, resolver=self.resolver)

    def visualize_pipeline(
        self, pipeline: Pipeline, canvas_width: Optional[float] = None
    ) -> VisualizationReport:
        return self.visualize(
            pipeline.workflow_content, pipeline.process_names(), canvas_width=canvas_width
        )

    def visualize(
        self,
        workflow_source: Any,
        process_names: Sequence[str],
        canvas_width: Optional[float] = None,
    ) -> VisualizationReport:
        try:
            return self._visualize(workflow_source, process_names, canvas_width)
        except Exception as exc:
            LOGGER.exception("Error parsing workflow for visualization")
            return VisualizationReport(
                success=False,
                error=f"Could not visualize workflow: {exc}",
            )

    def _visualize(
        self,
        workflow_source: Any,
        process_names: Sequence[str],
        canvas_width: Optional[float],
    ) -> VisualizationReport:
        known = list(process_names)
        calls = extract_calls(workflow_source, known)

        nodes: List[GraphNode] = []
        seen: Dict[str, GraphNode] = {}
        for call in calls:
            if call.process_name not in seen:
                node = self.engine.make_node(call.process_name)
                seen[call.process_name] = node
                nodes.append(node)

        edges = self.resolver.infer_edges(calls, known)
        layout = self.engine.layout(nodes, edges, canvas_width=canvas_width)

        has_text = isinstance(workflow_source, str) and bool(workflow_source.strip())
        message: Optional[str] = None
        if not known and not has_text:
            message = NOTHING_TO_SHOW
        elif not nodes and has_text:
            message = NO_KNOWN_CALLS
        elif layout.unplaced:
            message = (
                f"{len(layout.unplaced)} process(es) could not be placed because of "
                f"a dependency cycle: {', '.join(layout.unplaced)}"
            )

        return VisualizationReport(
            success=True,
            layout=layout,
            message=message,
            call_count=len(calls),
        )
