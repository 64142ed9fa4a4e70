"""
Nextflow pipeline builder entrypoint: orchestration and command line.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from nfbuilder.agents.base import LLMProtocol, SuggestionError
from nfbuilder.agents.pipeline_genie import PipelineGenieAgent
from nfbuilder.agents.process_agent import ProcessSuggestionAgent
from nfbuilder.agents.workflow_agent import WorkflowSuggestionAgent
from nfbuilder.compiler.nextflow_codegen import CodegenResult, NextflowCodeGenerator
from nfbuilder.graph.graph_schema import VisualizationReport
from nfbuilder.graph.layout import LayoutConfig
from nfbuilder.graph.svg_renderer import render_svg
from nfbuilder.graph.visualizer import WorkflowVisualizer
from nfbuilder.ir.pipeline_schema import (
    PARAMETER_TYPES,
    NextflowProcess,
    Pipeline,
    PipelineParameter,
    ProcessPartsSuggestion,
    default_pipeline,
    load_pipeline_json,
    model_dump_compat,
)
from nfbuilder.ir.validators import PipelineValidationError, normalize_process_name
from nfbuilder.ir.versioning import normalize_pipeline_name
from nfbuilder.services.pipeline_service import (
    PipelineService,
    new_parameter_id,
    new_process_id,
)
from nfbuilder.services.suggestion_service import SuggestionService
from nfbuilder.templates.process_templates import PROCESS_TEMPLATES, apply_template

LOGGER = logging.getLogger(__name__)


class PipelineBuilder:
    def __init__(
        self,
        llm: Optional[LLMProtocol] = None,
        *,
        layout_config: Optional[LayoutConfig] = None,
        process_agent: Optional[ProcessSuggestionAgent] = None,
        workflow_agent: Optional[WorkflowSuggestionAgent] = None,
        genie_agent: Optional[PipelineGenieAgent] = None,
    ) -> None:
        self.codegen = NextflowCodeGenerator()
        self.visualizer = WorkflowVisualizer(config=layout_config)
        self.process_agent = process_agent or ProcessSuggestionAgent(llm=llm)
        self.workflow_agent = workflow_agent or WorkflowSuggestionAgent(llm=llm)
        self.genie_agent = genie_agent or PipelineGenieAgent(llm=llm)

    @classmethod
    def from_environment(cls, layout_config: Optional[LayoutConfig] = None) -> "PipelineBuilder":
        """Build with one text-service client per agent, each at its own temperature."""
        return cls(
            layout_config=layout_config,
            process_agent=ProcessSuggestionAgent.from_environment(),  # type: ignore[arg-type]
            workflow_agent=WorkflowSuggestionAgent.from_environment(),  # type: ignore[arg-type]
            genie_agent=PipelineGenieAgent.from_environment(),  # type: ignore[arg-type]
        )

    def render(self, pipeline: Pipeline) -> CodegenResult:
        return self.codegen.render_all(pipeline)

    def generate(self, pipeline: Pipeline, output_dir: str) -> CodegenResult:
        result = self.codegen.generate(pipeline, output_dir)
        LOGGER.info("Generated %s in %s", ", ".join(sorted(result.files)), result.output_dir)
        return result

    def visualize(
        self, pipeline: Pipeline, canvas_width: Optional[float] = None
    ) -> VisualizationReport:
        return self.visualizer.visualize_pipeline(pipeline, canvas_width=canvas_width)

    def suggest_process(self, task_description: str) -> ProcessPartsSuggestion:
        return self.process_agent.suggest(task_description)

    def suggest_workflow(
        self, pipeline: Pipeline, pipeline_goal: str, apply: bool = False
    ) -> Tuple[str, Pipeline]:
        text = self.workflow_agent.suggest(pipeline_goal, pipeline.process_names())
        if apply:
            pipeline = SuggestionService.apply_workflow_suggestion(pipeline, text)
        return text, pipeline

    def generate_pipeline(
        self, pipeline_goal: str, base: Optional[Pipeline] = None
    ) -> Pipeline:
        suggestion = self.genie_agent.generate(pipeline_goal)
        return SuggestionService.apply_pipeline_suggestion(base or default_pipeline(), suggestion)


def _read_pipeline(path: str) -> Pipeline:
    return load_pipeline_json(Path(path).read_text(encoding="utf-8"))


def _write_pipeline(pipeline: Pipeline, path: str) -> None:
    Path(path).write_text(pipeline.to_json() + "\n", encoding="utf-8")


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nextflow pipeline builder")
    parser.add_argument("--log-level", type=str, default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Write the starter pipeline definition.")
    init.add_argument("--output", type=str, required=True)

    generate = sub.add_parser("generate", help="Render main.nf and nextflow.config.")
    generate.add_argument("--pipeline", type=str, required=True)
    generate.add_argument("--output-dir", type=str, default=".")

    visualize = sub.add_parser("visualize", help="Lay out the workflow graph.")
    visualize.add_argument("--pipeline", type=str, required=True)
    visualize.add_argument("--canvas-width", type=float, default=None)
    visualize.add_argument("--svg", type=str, default=None)

    add_param = sub.add_parser("add-param", help="Add or replace a parameter.")
    add_param.add_argument("--pipeline", type=str, required=True)
    add_param.add_argument("--name", type=str, required=True)
    add_param.add_argument("--type", type=str, default="string", choices=PARAMETER_TYPES)
    add_param.add_argument("--default", type=str, default="")
    add_param.add_argument("--description", type=str, default="")

    add_process = sub.add_parser("add-process", help="Add a process, optionally from a template.")
    add_process.add_argument("--pipeline", type=str, required=True)
    add_process.add_argument("--name", type=str, default="")
    add_process.add_argument("--template", type=str, default=None)

    remove = sub.add_parser("remove", help="Delete a parameter or process by name.")
    remove.add_argument("--pipeline", type=str, required=True)
    remove.add_argument("--kind", type=str, choices=("param", "process"), required=True)
    remove.add_argument("--name", type=str, required=True)

    bump = sub.add_parser("bump-version", help="Bump the pipeline version.")
    bump.add_argument("--pipeline", type=str, required=True)
    bump.add_argument("--part", type=str, default="patch", choices=("major", "minor", "patch"))

    sub.add_parser("templates", help="List the built-in process templates.")

    suggest_process = sub.add_parser("suggest-process", help="Ask AI for process parts.")
    suggest_process.add_argument("--task", type=str, required=True)

    suggest_workflow = sub.add_parser("suggest-workflow", help="Ask AI for a workflow block.")
    suggest_workflow.add_argument("--pipeline", type=str, required=True)
    suggest_workflow.add_argument("--goal", type=str, required=True)
    suggest_workflow.add_argument("--apply", action="store_true")

    genie = sub.add_parser("genie", help="Ask AI for a complete pipeline.")
    genie.add_argument("--goal", type=str, required=True)
    genie.add_argument("--pipeline", type=str, default=None)
    genie.add_argument("--output", type=str, required=True)
    return parser


def _run(args: argparse.Namespace, builder: PipelineBuilder) -> int:
    if args.command == "init":
        _write_pipeline(default_pipeline(), args.output)
        return 0

    if args.command == "templates":
        _print_json(
            [
                {
                    "template_name": tpl.template_name,
                    "template_description": tpl.template_description,
                    "process_name_suggestion": tpl.process_name_suggestion,
                }
                for tpl in PROCESS_TEMPLATES
            ]
        )
        return 0

    if args.command == "suggest-process":
        _print_json(model_dump_compat(builder.suggest_process(args.task)))
        return 0

    if args.command == "genie":
        base = _read_pipeline(args.pipeline) if args.pipeline else None
        pipeline = builder.generate_pipeline(args.goal, base=base)
        _write_pipeline(pipeline, args.output)
        return 0

    pipeline = _read_pipeline(args.pipeline)

    if args.command == "generate":
        result = builder.generate(pipeline, args.output_dir)
        _print_json(
            {
                "output_dir": result.output_dir,
                "files": sorted(result.files),
                "errors": result.errors,
            }
        )
        return 0 if result.success else 1

    if args.command == "visualize":
        report = builder.visualize(pipeline, canvas_width=args.canvas_width)
        _print_json(model_dump_compat(report))
        if not report.success or report.layout is None:
            return 1
        if args.svg:
            Path(args.svg).write_text(render_svg(report.layout), encoding="utf-8")
            LOGGER.info(
                "Wrote %s visualization to %s", normalize_pipeline_name(pipeline.name), args.svg
            )
        return 0

    if args.command == "add-param":
        existing = pipeline.parameter_map().get(args.name)
        param = PipelineParameter(
            id=existing.id if existing else new_parameter_id(),
            name=args.name,
            default_value=args.default,
            description=args.description,
            type=args.type,
        )
        _write_pipeline(PipelineService.add_or_update_parameter(pipeline, param), args.pipeline)
        return 0

    if args.command == "add-process":
        process = NextflowProcess(
            id=new_process_id(),
            name=normalize_process_name(args.name, len(pipeline.processes)) if args.name else "",
        )
        process = apply_template(process, args.template)
        _write_pipeline(PipelineService.add_or_update_process(pipeline, process), args.pipeline)
        return 0

    if args.command == "remove":
        if args.kind == "param":
            target = pipeline.parameter_map().get(args.name)
            updated = PipelineService.delete_parameter(pipeline, target.id) if target else None
        else:
            proc = pipeline.process_map().get(args.name)
            updated = PipelineService.delete_process(pipeline, proc.id) if proc else None
        if updated is None:
            raise LookupError(f"No {args.kind} named '{args.name}'.")
        _write_pipeline(updated, args.pipeline)
        return 0

    if args.command == "bump-version":
        _write_pipeline(PipelineService.bump_version(pipeline, args.part), args.pipeline)
        return 0

    if args.command == "suggest-workflow":
        text, updated = builder.suggest_workflow(pipeline, args.goal, apply=args.apply)
        print(text)
        if args.apply:
            _write_pipeline(updated, args.pipeline)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None, builder: Optional[PipelineBuilder] = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    builder = builder or PipelineBuilder.from_environment()
    try:
        return _run(args, builder)
    except (PipelineValidationError, SuggestionError, LookupError, ValueError, OSError) as exc:
        LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
