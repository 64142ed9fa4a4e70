"""
Editing operations on the in-memory Pipeline model.
"""

from __future__ import annotations

import uuid
from typing import Any, List

from nfbuilder.ir.pipeline_schema import (
    NextflowProcess,
    Pipeline,
    PipelineParameter,
    model_copy_compat,
)
from nfbuilder.ir.validators import PipelineValidationError
from nfbuilder.ir.versioning import bump_semver

EDITABLE_FIELDS = (
    "name",
    "description",
    "version",
    "workflow_content",
    "nextflow_config_content",
)


def new_parameter_id() -> str:
    return f"param-{uuid.uuid4().hex[:12]}"


def new_process_id() -> str:
    return f"proc-{uuid.uuid4().hex[:12]}"


class PipelineService:
    """Each operation returns a new Pipeline and leaves the input untouched."""

    @staticmethod
    def update_field(pipeline: Pipeline, field: str, value: Any) -> Pipeline:
        if field not in EDITABLE_FIELDS:
            raise PipelineValidationError(
                f"Field '{field}' cannot be edited directly. Editable: {', '.join(EDITABLE_FIELDS)}"
            )
        return model_copy_compat(pipeline, update={field: str(value)})

    @staticmethod
    def add_or_update_parameter(pipeline: Pipeline, param: PipelineParameter) -> Pipeline:
        if not param.name.strip():
            raise PipelineValidationError("Parameter name cannot be empty.")
        params: List[PipelineParameter] = list(pipeline.parameters)
        for index, existing in enumerate(params):
            if existing.id == param.id:
                params[index] = param
                break
        else:
            params.append(param)
        return model_copy_compat(pipeline, update={"parameters": params})

    @staticmethod
    def delete_parameter(pipeline: Pipeline, param_id: str) -> Pipeline:
        params = [param for param in pipeline.parameters if param.id != param_id]
        return model_copy_compat(pipeline, update={"parameters": params})

    @staticmethod
    def add_or_update_process(pipeline: Pipeline, process: NextflowProcess) -> Pipeline:
        if not process.name.strip():
            raise PipelineValidationError("Process name cannot be empty.")
        processes: List[NextflowProcess] = list(pipeline.processes)
        for index, existing in enumerate(processes):
            if existing.id == process.id:
                processes[index] = process
                break
        else:
            processes.append(process)
        return model_copy_compat(pipeline, update={"processes": processes})

    @staticmethod
    def delete_process(pipeline: Pipeline, process_id: str) -> Pipeline:
        processes = [proc for proc in pipeline.processes if proc.id != process_id]
        return model_copy_compat(pipeline, update={"processes": processes})

    @staticmethod
    def bump_version(pipeline: Pipeline, part: str = "patch") -> Pipeline:
        return model_copy_compat(
            pipeline, update={"version": bump_semver(pipeline.version, part=part)}
        )
