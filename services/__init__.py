"""
Model editing and suggestion-merge services.
"""

from nfbuilder.services.pipeline_service import PipelineService, new_parameter_id, new_process_id
from nfbuilder.services.suggestion_service import SuggestionMergeError, SuggestionService

__all__ = [
    "PipelineService",
    "SuggestionService",
    "SuggestionMergeError",
    "new_parameter_id",
    "new_process_id",
]
