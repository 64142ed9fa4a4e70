"""
Shared LLM configuration for the pipeline builder.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)

NFB_BEDROCK_MODEL_ID = os.getenv(
    "NFB_BEDROCK_MODEL_ID", "us.anthropic.claude-sonnet-4-20250514-v1:0"
)

AI_UNAVAILABLE_MESSAGE = (
    "AI features are disabled: the text-generation client is not configured or "
    "failed to initialize. Set NFB_AI_ENABLED=1 and provide AWS credentials to enable them."
)


def ai_enabled() -> bool:
    return os.getenv("NFB_AI_ENABLED", "1").strip().lower() not in ("0", "false", "no", "off")


def build_chat_bedrock_converse(
    *,
    region_name: Optional[str] = None,
    temperature: float = 0.0,
) -> Any:
    """
    Build a ChatBedrockConverse client pinned to the configured model.
    """

    from langchain_aws import ChatBedrockConverse

    resolved_region = region_name or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    kwargs: Dict[str, Any] = {
        "model": NFB_BEDROCK_MODEL_ID,
        "temperature": temperature,
    }
    if resolved_region:
        kwargs["region_name"] = resolved_region
    return ChatBedrockConverse(**kwargs)


def build_default_llm(temperature: float = 0.0) -> Optional[Any]:
    """Return a configured client, or None when AI features are off or unavailable."""
    if not ai_enabled():
        LOGGER.warning("NFB_AI_ENABLED is off; AI features are disabled.")
        return None
    try:
        return build_chat_bedrock_converse(temperature=temperature)
    except Exception as exc:
        LOGGER.error("Failed to initialize the text-generation client: %s", exc)
        return None
