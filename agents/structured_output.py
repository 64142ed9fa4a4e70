"""
LangChain tool-binding helpers for structured suggestions.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable, Optional, Type

from pydantic import BaseModel

FENCE_PATTERN = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def supports_tool_binding(llm: Any) -> bool:
    return llm is not None and hasattr(llm, "bind_tools")


def strip_code_fence(raw: str) -> str:
    text = raw.strip()
    match = FENCE_PATTERN.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


def extract_json_block(raw: str) -> Optional[str]:
    raw = strip_code_fence(raw)
    if raw.startswith("{") and raw.endswith("}"):
        return raw
    match = re.search(r"\{.*\}", raw, re.DOTALL)
    return match.group(0) if match else None


def invoke_bound_schema(
    llm: Any,
    *,
    prompt: str,
    schema: Type[BaseModel],
    tool_choice: str = "any",
) -> Optional[Dict[str, Any]]:
    """
    Invoke an LLM with a bound pydantic schema tool and return the raw tool args.

    Falls back to a JSON object found in the message content. Returns None when
    the answer carries no object; errors raised by the client propagate.
    """
    bound = _bind_tools(llm, schema=schema, tool_choice=tool_choice)
    response = bound.invoke(prompt)

    for raw_args in _iter_tool_args(response):
        payload = coerce_payload(raw_args)
        if payload is not None:
            return payload

    content = getattr(response, "content", None)
    if isinstance(content, str):
        return coerce_payload(extract_json_block(content))
    return None


def _bind_tools(llm: Any, *, schema: Type[BaseModel], tool_choice: str) -> Any:
    try:
        return llm.bind_tools([schema], tool_choice=tool_choice)
    except TypeError:
        # Older adapters may not accept tool_choice kwarg.
        return llm.bind_tools([schema])


def _iter_tool_args(response: Any) -> Iterable[Any]:
    tool_calls = getattr(response, "tool_calls", None)
    if isinstance(tool_calls, list):
        for call in tool_calls:
            extracted = _extract_args(call)
            if extracted is not None:
                yield extracted

    additional = getattr(response, "additional_kwargs", None)
    if isinstance(additional, dict):
        nested = additional.get("tool_calls")
        if isinstance(nested, list):
            for call in nested:
                extracted = _extract_args(call)
                if extracted is not None:
                    yield extracted


def _extract_args(call: Any) -> Optional[Any]:
    if isinstance(call, dict):
        if "args" in call:
            return call.get("args")
        function_obj = call.get("function")
        if isinstance(function_obj, dict):
            return function_obj.get("arguments")
        return call.get("arguments")
    return getattr(call, "args", None)


def coerce_payload(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        stripped = raw.strip()
        if not stripped:
            return None
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            return None
        if isinstance(parsed, dict):
            return parsed
    return None
