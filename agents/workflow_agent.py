"""
Suggests the body of a Nextflow workflow block from a goal and process names.
"""

from __future__ import annotations

from typing import Sequence

from nfbuilder.agents.base import SuggestionAgent
from nfbuilder.agents.structured_output import strip_code_fence


class WorkflowSuggestionAgent(SuggestionAgent):
    default_temperature = 0.6

    def suggest(self, pipeline_goal: str, process_names: Sequence[str]) -> str:
        if not pipeline_goal.strip():
            raise ValueError("Please describe your pipeline goal for AI suggestion.")
        prompt = self._build_prompt(pipeline_goal, process_names)
        return strip_code_fence(self._invoke_text(prompt, "workflow suggestion"))

    @staticmethod
    def _build_prompt(pipeline_goal: str, process_names: Sequence[str]) -> str:
        return f"""You are an expert Nextflow pipeline development assistant.
A user wants to create a workflow for the following goal: "{pipeline_goal}".
The available processes are: {', '.join(process_names)}. If no processes are listed, assume common bioinformatics process names if relevant to the goal.

Suggest the Nextflow workflow block content. This is the part that goes inside `workflow {{ ... }}`.
Focus on logically connecting the available processes using Nextflow channel syntax.
Use placeholders like `Channel.fromPath(params.input_files)` for initial inputs.
Example:
PROCESS_A ( Channel.fromPath(params.reads) )
PROCESS_B ( PROCESS_A.out.some_output )
PROCESS_C ( PROCESS_A.out.another_output, PROCESS_B.out.result )

Only provide the content for the workflow block. Do not include the "workflow {{ ... }}" wrapper itself.
"""
