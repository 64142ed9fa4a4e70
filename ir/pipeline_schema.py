"""
Typed in-memory model for Nextflow pipeline definitions.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ParameterType = Literal["string", "integer", "boolean", "path", "file", "directory"]

PARAMETER_TYPES: List[str] = ["string", "integer", "boolean", "path", "file", "directory"]


class StrictModel(BaseModel):
    """Base model that rejects undeclared fields."""

    model_config = ConfigDict(extra="forbid")


class PipelineParameter(StrictModel):
    id: str
    name: str
    default_value: str = ""
    description: str = ""
    type: ParameterType = "string"


class NextflowProcess(StrictModel):
    id: str
    name: str
    description: str = ""
    input_declarations: str = ""
    output_declarations: str = ""
    directive_declarations: str = ""
    script: str = ""


class Pipeline(StrictModel):
    name: str
    description: str = ""
    version: str = "1.0.0"
    parameters: List[PipelineParameter] = Field(default_factory=list)
    processes: List[NextflowProcess] = Field(default_factory=list)
    workflow_content: str = ""
    nextflow_config_content: str = ""

    def process_names(self) -> List[str]:
        return [process.name for process in self.processes]

    def process_map(self) -> Dict[str, NextflowProcess]:
        return {process.name: process for process in self.processes}

    def parameter_map(self) -> Dict[str, PipelineParameter]:
        return {param.name: param for param in self.parameters}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(model_dump_compat(self), indent=indent, sort_keys=True)


class ProcessTemplate(StrictModel):
    template_name: str
    template_description: str
    process_name_suggestion: str
    description: str = ""
    input_declarations: str = ""
    output_declarations: str = ""
    directive_declarations: str = ""
    script: str = ""


class _SuggestionModel(BaseModel):
    """Lenient base for payloads coming back from the text service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class AIParameterSuggestion(_SuggestionModel):
    name: Optional[str] = None
    type: Optional[str] = None
    default_value: Optional[Any] = Field(default=None, alias="defaultValue")
    description: Optional[str] = None


class AIProcessSuggestion(_SuggestionModel):
    name: Optional[str] = None
    description: Optional[str] = None
    input_declarations: Optional[str] = Field(default=None, alias="inputDeclarations")
    output_declarations: Optional[str] = Field(default=None, alias="outputDeclarations")
    directive_declarations: Optional[str] = Field(
        default=None, alias="directiveDeclarations"
    )
    script: Optional[str] = None


class AIPipelineSuggestion(_SuggestionModel):
    pipeline_name: str = Field(alias="pipelineName")
    pipeline_description: str = Field(default="", alias="pipelineDescription")
    pipeline_version: Optional[str] = Field(default=None, alias="pipelineVersion")
    parameters: List[AIParameterSuggestion] = Field(default_factory=list)
    processes: List[AIProcessSuggestion] = Field(default_factory=list)
    workflow_content: str = Field(alias="workflowContent")


class ProcessPartsSuggestion(BaseModel):
    raw_text: str
    input_declarations: str = ""
    output_declarations: str = ""
    directive_declarations: str = ""
    script: str = ""


def default_pipeline() -> Pipeline:
    """Starter model shown before the user has entered anything."""

    return Pipeline(
        name="MyAwesomePipeline",
        description="A Nextflow pipeline built with the awesome builder.",
        version="1.0.0",
        workflow_content=(
            "// Example: \n"
            "// READ_QC( Channel.fromPath(params.input_reads, checkIfExists: true) )\n"
            "// ALIGN_READS( READ_QC.out.passed_reads, Channel.fromPath(params.reference_genome) )\n"
            "// VARIANT_CALLING( ALIGN_READS.out.bams )"
        ),
        nextflow_config_content=(
            "// Example: \n"
            "// params.max_cpus = 16\n"
            "// params.max_memory = '64.GB'"
        ),
    )


def model_dump_compat(model: BaseModel) -> Dict[str, Any]:
    if hasattr(model, "model_dump"):
        return model.model_dump()  # type: ignore[attr-defined]
    return model.dict()


def model_copy_compat(model: BaseModel, deep: bool = False, update: Optional[Dict[str, Any]] = None) -> Any:
    if hasattr(model, "model_copy"):
        return model.model_copy(deep=deep, update=update)  # type: ignore[attr-defined]
    return model.copy(deep=deep, update=update)


def load_pipeline_json(raw: str) -> Pipeline:
    if hasattr(Pipeline, "model_validate_json"):
        return Pipeline.model_validate_json(raw)  # type: ignore[attr-defined]
    return Pipeline.parse_raw(raw)
