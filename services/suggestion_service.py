"""
Merging text-service suggestions back into the Pipeline model.
"""

from __future__ import annotations

import logging
from typing import List

from nfbuilder.ir.pipeline_schema import (
    AIPipelineSuggestion,
    NextflowProcess,
    Pipeline,
    PipelineParameter,
    ProcessPartsSuggestion,
    model_copy_compat,
)
from nfbuilder.ir.validators import (
    coerce_parameter_type,
    normalize_parameter_name,
    normalize_process_name,
)
from nfbuilder.services.pipeline_service import new_parameter_id, new_process_id

LOGGER = logging.getLogger(__name__)

PROCESS_PARTS = (
    "input_declarations",
    "output_declarations",
    "directive_declarations",
    "script",
)


class SuggestionMergeError(ValueError):
    """Raised when a suggestion carries nothing usable for the requested part."""


def _text(value: object) -> str:
    return "" if value is None else str(value)


class SuggestionService:
    @staticmethod
    def apply_pipeline_suggestion(
        pipeline: Pipeline, suggestion: AIPipelineSuggestion
    ) -> Pipeline:
        """
        Replace parameters and processes with the suggested ones.

        Scalar fields fall back to the current value when the suggestion
        leaves them empty; the free-form config content is kept as is.
        """
        params: List[PipelineParameter] = []
        for index, item in enumerate(suggestion.parameters):
            params.append(
                PipelineParameter(
                    id=new_parameter_id(),
                    name=normalize_parameter_name(item.name, index),
                    default_value=_text(item.default_value),
                    description=_text(item.description),
                    type=coerce_parameter_type(item.type),  # type: ignore[arg-type]
                )
            )

        processes: List[NextflowProcess] = []
        for index, item in enumerate(suggestion.processes):
            processes.append(
                NextflowProcess(
                    id=new_process_id(),
                    name=normalize_process_name(item.name, index),
                    description=_text(item.description),
                    input_declarations=_text(item.input_declarations),
                    output_declarations=_text(item.output_declarations),
                    directive_declarations=_text(item.directive_declarations),
                    script=_text(item.script),
                )
            )

        LOGGER.info(
            "Applying pipeline suggestion '%s': %d parameter(s), %d process(es)",
            suggestion.pipeline_name,
            len(params),
            len(processes),
        )
        return model_copy_compat(
            pipeline,
            update={
                "name": suggestion.pipeline_name or pipeline.name,
                "description": suggestion.pipeline_description or pipeline.description,
                "version": suggestion.pipeline_version or pipeline.version,
                "parameters": params,
                "processes": processes,
                "workflow_content": suggestion.workflow_content or pipeline.workflow_content,
            },
        )

    @staticmethod
    def apply_workflow_suggestion(pipeline: Pipeline, suggestion_text: str) -> Pipeline:
        if not suggestion_text or not suggestion_text.strip():
            return pipeline
        return model_copy_compat(pipeline, update={"workflow_content": suggestion_text})

    @staticmethod
    def apply_process_suggestion(
        process: NextflowProcess, suggestion: ProcessPartsSuggestion, part: str
    ) -> NextflowProcess:
        if part not in PROCESS_PARTS:
            raise ValueError(f"Unknown process part '{part}'. Use one of: {', '.join(PROCESS_PARTS)}")
        content = getattr(suggestion, part)
        if not content:
            raise SuggestionMergeError(f"Could not find or parse {part} from suggestion.")
        return model_copy_compat(process, update={part: content})
