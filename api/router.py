"""
FastAPI router for the Nextflow pipeline builder.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from nfbuilder.agents.base import SuggestionError, SuggestionUnavailableError
from nfbuilder.graph.svg_renderer import render_svg
from nfbuilder.ir.pipeline_schema import (
    Pipeline,
    ProcessPartsSuggestion,
    model_dump_compat,
)
from nfbuilder.ir.validators import PipelineValidationError
from nfbuilder.main import PipelineBuilder
from nfbuilder.templates.process_templates import PROCESS_TEMPLATES


class GenerateResponse(BaseModel):
    files: Dict[str, str]
    errors: Dict[str, str] = Field(default_factory=dict)


class VisualizeRequest(BaseModel):
    pipeline: Pipeline
    canvas_width: Optional[float] = Field(default=None, gt=0)
    include_svg: bool = False


class VisualizeResponse(BaseModel):
    report: Dict[str, Any]
    svg: Optional[str] = None


class WorkflowSuggestionRequest(BaseModel):
    pipeline: Pipeline
    goal: str
    apply: bool = False


class WorkflowSuggestionResponse(BaseModel):
    suggestion: str
    pipeline: Pipeline


class ProcessSuggestionRequest(BaseModel):
    task: str


class PipelineSuggestionRequest(BaseModel):
    goal: str
    pipeline: Optional[Pipeline] = None


@lru_cache(maxsize=1)
def get_builder() -> PipelineBuilder:
    return PipelineBuilder.from_environment()


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, SuggestionUnavailableError):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, SuggestionError):
        detail: Dict[str, Any] = {"message": str(exc)}
        if exc.raw_response:
            detail["raw_response"] = exc.raw_response
        return HTTPException(status_code=502, detail=detail)
    return HTTPException(status_code=400, detail=str(exc))


router = APIRouter(prefix="/nfb", tags=["nfb"])


@router.get("/health")
def health(builder: PipelineBuilder = Depends(get_builder)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "ai_available": {
            "process": builder.process_agent.available,
            "workflow": builder.workflow_agent.available,
            "pipeline": builder.genie_agent.available,
        },
    }


@router.get("/templates")
def list_templates() -> List[Dict[str, Any]]:
    return [model_dump_compat(template) for template in PROCESS_TEMPLATES]


@router.post("/generate", response_model=GenerateResponse)
def generate(
    pipeline: Pipeline, builder: PipelineBuilder = Depends(get_builder)
) -> GenerateResponse:
    try:
        result = builder.render(pipeline)
    except PipelineValidationError as exc:
        raise _http_error(exc) from exc
    if not result.files and result.errors:
        raise HTTPException(status_code=400, detail=result.errors)
    return GenerateResponse(files=result.files, errors=result.errors)


@router.post("/visualize", response_model=VisualizeResponse)
def visualize(
    payload: VisualizeRequest, builder: PipelineBuilder = Depends(get_builder)
) -> VisualizeResponse:
    report = builder.visualize(payload.pipeline, canvas_width=payload.canvas_width)
    svg = None
    if payload.include_svg and report.layout is not None:
        svg = render_svg(report.layout)
    return VisualizeResponse(report=model_dump_compat(report), svg=svg)


@router.post("/suggest/workflow", response_model=WorkflowSuggestionResponse)
def suggest_workflow(
    payload: WorkflowSuggestionRequest, builder: PipelineBuilder = Depends(get_builder)
) -> WorkflowSuggestionResponse:
    try:
        text, pipeline = builder.suggest_workflow(
            payload.pipeline, payload.goal, apply=payload.apply
        )
    except (SuggestionError, ValueError) as exc:
        raise _http_error(exc) from exc
    return WorkflowSuggestionResponse(suggestion=text, pipeline=pipeline)


@router.post("/suggest/process", response_model=ProcessPartsSuggestion)
def suggest_process(
    payload: ProcessSuggestionRequest, builder: PipelineBuilder = Depends(get_builder)
) -> ProcessPartsSuggestion:
    try:
        return builder.suggest_process(payload.task)
    except (SuggestionError, ValueError) as exc:
        raise _http_error(exc) from exc


@router.post("/suggest/pipeline", response_model=Pipeline)
def suggest_pipeline(
    payload: PipelineSuggestionRequest, builder: PipelineBuilder = Depends(get_builder)
) -> Pipeline:
    try:
        return builder.generate_pipeline(payload.goal, base=payload.pipeline)
    except (SuggestionError, ValueError) as exc:
        raise _http_error(exc) from exc
