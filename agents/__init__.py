from nfbuilder.agents.base import (
    LLMProtocol,
    SuggestionConfig,
    SuggestionError,
    SuggestionUnavailableError,
)
from nfbuilder.agents.pipeline_genie import PipelineGenieAgent
from nfbuilder.agents.process_agent import ProcessSuggestionAgent, extract_block
from nfbuilder.agents.workflow_agent import WorkflowSuggestionAgent

__all__ = [
    "LLMProtocol",
    "SuggestionConfig",
    "SuggestionError",
    "SuggestionUnavailableError",
    "PipelineGenieAgent",
    "ProcessSuggestionAgent",
    "WorkflowSuggestionAgent",
    "extract_block",
]
