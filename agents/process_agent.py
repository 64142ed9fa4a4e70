"""
Suggests input/output/directive/script parts for a single Nextflow process.
"""

from __future__ import annotations

import logging
import re

from nfbuilder.agents.base import SuggestionAgent
from nfbuilder.ir.pipeline_schema import ProcessPartsSuggestion

LOGGER = logging.getLogger(__name__)

SCRIPT_BODY_PATTERN = re.compile(r'script:\s*"""\s*(.*?)\s*"""', re.DOTALL)


def extract_block(suggestion_text: str, block_name: str) -> str:
    """
    Pull the body of a ```nextflow_<block_name> fenced block out of the text.

    For the script block only the body of the triple-quoted script is kept.
    Returns an empty string when the block is missing.
    """
    pattern = re.compile(
        r"```nextflow_" + re.escape(block_name) + r"\s*\n?(.*?)\n?\s*```", re.DOTALL
    )
    match = pattern.search(suggestion_text)
    if not match or not match.group(1):
        return ""
    if block_name == "script":
        script_match = SCRIPT_BODY_PATTERN.search(match.group(1))
        return script_match.group(1).strip() if script_match else ""
    return match.group(1).strip()


class ProcessSuggestionAgent(SuggestionAgent):
    default_temperature = 0.5

    def suggest(self, task_description: str) -> ProcessPartsSuggestion:
        if not task_description.strip():
            raise ValueError("Please describe the task for the process.")
        text = self._invoke_text(self._build_prompt(task_description), "process suggestion")
        suggestion = ProcessPartsSuggestion(
            raw_text=text,
            input_declarations=extract_block(text, "input"),
            output_declarations=extract_block(text, "output"),
            directive_declarations=extract_block(text, "directive"),
            script=extract_block(text, "script"),
        )
        missing = [
            name
            for name in ("input_declarations", "output_declarations", "directive_declarations", "script")
            if not getattr(suggestion, name)
        ]
        if missing:
            LOGGER.info("Process suggestion is missing: %s", ", ".join(missing))
        return suggestion

    @staticmethod
    def _build_prompt(task_description: str) -> str:
        return f'''You are an expert assistant for Nextflow pipeline development.
A user is creating a Nextflow process to perform the following task: "{task_description}".

Please provide suggestions for the following parts of a Nextflow process, formatted clearly:
1.  **Input Declarations** (one declaration per line, e.g., `tuple val(meta), path(reads)` or `params.my_param`):
    ```nextflow_input
    // Suggested input declarations here
    ```

2.  **Output Declarations** (one declaration per line, e.g., `tuple val(meta), path("*.bam"), emit: aligned_bams` or `path "output_file.txt"`):
    ```nextflow_output
    // Suggested output declarations here
    ```

3.  **Directive Declarations** (one declaration per line, e.g., `publishDir params.outdir, mode: 'copy'` or `tag "${{meta.id}}"`):
    ```nextflow_directive
    // Suggested directive declarations here
    ```

4.  **Script Block** (shell commands, enclosed in a `script:` block with triple quotes):
    ```nextflow_script
    script:
    """
    #!/bin/bash
    # Suggested shell script commands here
    # Use placeholders like ${{task.cpus}}, ${{input_file_variable}}, output_file_name.txt
    """
    ```

Use common Nextflow conventions and placeholders. Be specific and provide actionable examples.
If the task is unclear, provide a general template.
'''
