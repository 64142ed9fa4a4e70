"""
Goal-to-pipeline generation agent ("pipeline genie").
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from nfbuilder.agents.base import SuggestionAgent, SuggestionError, response_text
from nfbuilder.agents.structured_output import (
    extract_json_block,
    invoke_bound_schema,
    supports_tool_binding,
)
from nfbuilder.ir.pipeline_schema import AIPipelineSuggestion

LOGGER = logging.getLogger(__name__)

REQUIRED_KEYS = ("pipelineName", "parameters", "processes", "workflowContent")


def parse_pipeline_payload(payload: Dict[str, Any], raw: str = "") -> AIPipelineSuggestion:
    """
    Check the top-level shape and build the suggestion.

    Entries of ``parameters`` / ``processes`` that are not objects are dropped.
    """
    if (
        not payload.get("pipelineName")
        or not isinstance(payload.get("parameters"), list)
        or not isinstance(payload.get("processes"), list)
        or "workflowContent" not in payload
    ):
        raise SuggestionError(
            "AI response is not in the expected JSON format. Key top-level fields "
            f"might be missing or of the wrong type (expected {', '.join(REQUIRED_KEYS)}).",
            raw_response=raw or json.dumps(payload),
        )

    cleaned = dict(payload)
    cleaned["parameters"] = [item for item in payload["parameters"] if isinstance(item, dict)]
    cleaned["processes"] = [item for item in payload["processes"] if isinstance(item, dict)]
    for key in ("pipelineName", "pipelineDescription", "pipelineVersion", "workflowContent"):
        if key in cleaned:
            cleaned[key] = "" if cleaned[key] is None else str(cleaned[key])
    try:
        return AIPipelineSuggestion.model_validate(cleaned)
    except ValidationError as exc:
        raise SuggestionError(
            f"AI response could not be validated: {exc}", raw_response=raw
        ) from exc


class PipelineGenieAgent(SuggestionAgent):
    default_temperature = 0.7

    def generate(self, pipeline_goal: str) -> AIPipelineSuggestion:
        if not pipeline_goal.strip():
            raise ValueError("Please describe your overall pipeline goal.")
        llm = self._require_llm()
        prompt = self._build_prompt(pipeline_goal)

        if supports_tool_binding(llm):
            try:
                payload = invoke_bound_schema(llm, prompt=prompt, schema=AIPipelineSuggestion)
            except Exception as exc:
                raise SuggestionError(
                    f"Error processing full pipeline suggestion: {exc}"
                ) from exc
            if payload is None:
                raise SuggestionError("No pipeline object found in the AI response.")
            return parse_pipeline_payload(payload)

        try:
            response = llm.invoke(prompt)
        except Exception as exc:
            raise SuggestionError(f"Error processing full pipeline suggestion: {exc}") from exc

        raw = response_text(response).strip()
        block = extract_json_block(raw)
        if not block:
            raise SuggestionError("No JSON object found in the AI response.", raw_response=raw)
        try:
            payload = json.loads(block)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Pipeline suggestion is not valid JSON: %s", exc)
            raise SuggestionError(
                f"Error processing full pipeline suggestion: {exc}", raw_response=raw
            ) from exc
        if not isinstance(payload, dict):
            raise SuggestionError("AI response is not a JSON object.", raw_response=raw)
        return parse_pipeline_payload(payload, raw=raw)

    @staticmethod
    def _build_prompt(pipeline_goal: str) -> str:
        return f"""You are an expert Nextflow pipeline development assistant.
A user wants to create a complete Nextflow pipeline for the following goal: "{pipeline_goal}".

Your output MUST be a single, valid JSON object. Do NOT include any markdown formatting
(like ```json) or any explanatory text before or after the JSON block.

All special characters inside JSON string values MUST be escaped: backslash as \\\\,
double quote as \\", newline as \\n, tab as \\t. No literal newlines or unescaped double
quotes are allowed inside a string value.

The JSON object has the top-level keys "pipelineName", "pipelineDescription",
"parameters", "processes", "workflowContent" and an optional "pipelineVersion" (e.g. "1.0.0").

1. pipelineName: string, e.g. "RNASeqAnalysis".
2. pipelineDescription: string, e.g. "Analyzes RNA-seq data.".
3. pipelineVersion: string, optional.
4. parameters: array of objects with
   "name" (string), "type" (one of 'string', 'integer', 'boolean', 'path', 'file', 'directory'),
   "defaultValue" (string) and "description" (string).
   Example: {{ "name": "outdir", "type": "directory", "defaultValue": "./results", "description": "Output directory" }}
5. processes: array of objects with
   "name" (string, e.g. "FASTQC_PROCESS"), "description" (string),
   "inputDeclarations", "outputDeclarations", "directiveDeclarations" (multi-line strings,
   one declaration per line) and "script" (the shell script body).
6. workflowContent: string with the Nextflow workflow logic that calls the processes, e.g.
   "CH1 = Channel.fromPath(params.input_dir)\\nMY_PROCESS( CH1 )".

Before answering, review every string value and make sure the escaping is correct.
The final output must be a single JSON object.

Based on the goal: "{pipeline_goal}"

Generate ONLY the single, valid JSON object.
"""
