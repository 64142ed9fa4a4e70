"""
Nextflow code generation (main.nf and nextflow.config) from a Pipeline.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List

from pydantic import BaseModel, Field

from nfbuilder.ir.pipeline_schema import NextflowProcess, Pipeline, PipelineParameter
from nfbuilder.ir.validators import validate_pipeline

LOGGER = logging.getLogger(__name__)

SCRIPT_FILENAME = "main.nf"
CONFIG_FILENAME = "nextflow.config"
INDENT = "    "
PATH_LIKE_TYPES = ("path", "file", "directory")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class CodegenError(RuntimeError):
    """Raised when an artifact cannot be rendered."""


class CodegenResult(BaseModel):
    output_dir: str
    files: Dict[str, str] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


def _indent(text: str, level: int = 1) -> List[str]:
    if not text.strip():
        return []
    prefix = INDENT * level
    return [prefix + line if line.strip() else "" for line in text.strip("\n").splitlines()]


def _identifier(name: str, kind: str) -> str:
    candidate = name.strip()
    if not IDENTIFIER_PATTERN.match(candidate):
        raise CodegenError(f"{kind} name '{name}' is not a valid Nextflow identifier.")
    return candidate


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _comment(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def render_parameter_value(param: PipelineParameter) -> str:
    raw = param.default_value.strip()
    if param.type == "integer" and re.fullmatch(r"[-+]?\d+", raw):
        return str(int(raw))
    if param.type == "boolean" and raw.lower() in ("true", "false"):
        return raw.lower()
    if not raw and param.type in PATH_LIKE_TYPES + ("integer", "boolean"):
        return "null"
    return _quote(param.default_value)


class NextflowCodeGenerator:
    def render_script(self, pipeline: Pipeline) -> str:
        lines: List[str] = [
            "#!/usr/bin/env nextflow",
            "",
            "nextflow.enable.dsl = 2",
            "",
            "/*",
            f" * {pipeline.name} v{pipeline.version}",
        ]
        if pipeline.description.strip():
            lines.extend(f" * {line}".rstrip() for line in pipeline.description.strip().splitlines())
        lines.extend([" */", ""])

        if pipeline.parameters:
            lines.append("// Parameters")
            for param in pipeline.parameters:
                line = f"params.{_identifier(param.name, 'Parameter')} = {render_parameter_value(param)}"
                if param.description.strip():
                    line += f"  // {_comment(param.description)}"
                lines.append(line)
            lines.append("")

        for process in pipeline.processes:
            lines.extend(self._render_process(process))
            lines.append("")

        lines.append("workflow {")
        workflow_body = _indent(pipeline.workflow_content)
        lines.extend(workflow_body or [f"{INDENT}// No workflow content defined"])
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_process(self, process: NextflowProcess) -> List[str]:
        lines: List[str] = [f"process {_identifier(process.name, 'Process')} {{"]
        if process.description.strip():
            lines.append(f"{INDENT}// {_comment(process.description)}")
        if process.directive_declarations.strip():
            lines.extend(_indent(process.directive_declarations))
            lines.append("")

        for label, block in (
            ("input", process.input_declarations),
            ("output", process.output_declarations),
        ):
            if block.strip():
                lines.append(f"{INDENT}{label}:")
                lines.extend(_indent(block, 2))
                lines.append("")

        lines.append(f"{INDENT}script:")
        lines.append(f'{INDENT}"""')
        script_body = _indent(process.script, 2) or [
            f"{INDENT * 2}echo \"{process.name}: no script defined\""
        ]
        lines.extend(script_body)
        lines.append(f'{INDENT}"""')
        lines.append("}")
        return lines

    def render_config(self, pipeline: Pipeline) -> str:
        lines: List[str] = [
            f"// nextflow.config for {pipeline.name}",
            "",
            "manifest {",
            f"{INDENT}name = {_quote(pipeline.name)}",
            f"{INDENT}description = {_quote(_comment(pipeline.description))}",
            f"{INDENT}version = {_quote(pipeline.version)}",
            f"{INDENT}mainScript = {_quote(SCRIPT_FILENAME)}",
            "}",
            "",
        ]
        if pipeline.parameters:
            lines.append("params {")
            for param in pipeline.parameters:
                lines.append(f"{INDENT}{_identifier(param.name, 'Parameter')} = {render_parameter_value(param)}")
            lines.append("}")
            lines.append("")

        if pipeline.nextflow_config_content.strip():
            lines.append(pipeline.nextflow_config_content.strip("\n"))
            lines.append("")
        return "\n".join(lines)

    def render_all(self, pipeline: Pipeline) -> CodegenResult:
        """Render both artifacts; a failure in one does not block the other."""
        validate_pipeline(pipeline)
        renderers: Dict[str, Callable[[Pipeline], str]] = {
            SCRIPT_FILENAME: self.render_script,
            CONFIG_FILENAME: self.render_config,
        }
        result = CodegenResult(output_dir="")
        for filename, renderer in renderers.items():
            try:
                result.files[filename] = renderer(pipeline)
            except Exception as exc:
                LOGGER.error("Error generating %s: %s", filename, exc)
                result.errors[filename] = str(exc)
        return result

    def generate(self, pipeline: Pipeline, output_dir: str) -> CodegenResult:
        target = Path(output_dir)
        target.mkdir(parents=True, exist_ok=True)
        result = self.render_all(pipeline)
        result.output_dir = str(target)
        for filename, content in result.files.items():
            (target / filename).write_text(content, encoding="utf-8")
        return result
