"""
Validation and normalization utilities for Pipeline definitions.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, List

from nfbuilder.ir.pipeline_schema import PARAMETER_TYPES, Pipeline
from nfbuilder.ir.versioning import is_semver


class PipelineValidationError(ValueError):
    """Raised when a pipeline definition fails semantic validation."""


def _duplicates(values: List[str]) -> List[str]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def validate_pipeline(pipeline: Pipeline) -> Pipeline:
    if not pipeline.name.strip():
        raise PipelineValidationError("Pipeline name cannot be empty.")
    if not is_semver(pipeline.version):
        raise PipelineValidationError(
            f"Pipeline version must look like MAJOR.MINOR.PATCH, got '{pipeline.version}'."
        )

    param_names = [param.name.strip() for param in pipeline.parameters]
    if any(not name for name in param_names):
        raise PipelineValidationError("Parameter names cannot be empty.")
    duplicated = _duplicates(param_names)
    if duplicated:
        raise PipelineValidationError(
            f"Parameter names must be unique: {', '.join(duplicated)}"
        )

    process_names = [process.name.strip() for process in pipeline.processes]
    if any(not name for name in process_names):
        raise PipelineValidationError("Process names cannot be empty.")
    duplicated = _duplicates(process_names)
    if duplicated:
        raise PipelineValidationError(
            f"Process names must be unique: {', '.join(duplicated)}"
        )

    ids = [param.id for param in pipeline.parameters] + [
        process.id for process in pipeline.processes
    ]
    duplicated = _duplicates(ids)
    if duplicated:
        raise PipelineValidationError(f"Ids must be unique: {', '.join(duplicated)}")

    return pipeline


def normalize_parameter_name(raw: Any, index: int) -> str:
    name = str(raw or "").strip()
    name = re.sub(r"\s+", "_", name)
    return name or f"param_{index}"


def normalize_process_name(raw: Any, index: int) -> str:
    name = str(raw or "").strip().upper()
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"[^A-Z0-9_]", "", name)
    return name or f"PROCESS_{index}"


def coerce_parameter_type(raw: Any) -> str:
    candidate = str(raw or "").strip()
    return candidate if candidate in PARAMETER_TYPES else "string"
