from nfbuilder.ir.pipeline_schema import (
    AIParameterSuggestion,
    AIPipelineSuggestion,
    AIProcessSuggestion,
    NextflowProcess,
    Pipeline,
    PipelineParameter,
    ProcessPartsSuggestion,
    ProcessTemplate,
    default_pipeline,
)
from nfbuilder.ir.validators import PipelineValidationError, validate_pipeline
from nfbuilder.ir.versioning import bump_semver, parse_semver

__all__ = [
    "Pipeline",
    "PipelineParameter",
    "NextflowProcess",
    "ProcessTemplate",
    "ProcessPartsSuggestion",
    "AIPipelineSuggestion",
    "AIParameterSuggestion",
    "AIProcessSuggestion",
    "PipelineValidationError",
    "validate_pipeline",
    "default_pipeline",
    "parse_semver",
    "bump_semver",
]
