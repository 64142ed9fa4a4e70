"""
Shared pieces for the suggestion agents.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from pydantic import BaseModel

from nfbuilder.llm import AI_UNAVAILABLE_MESSAGE, build_default_llm


class LLMProtocol(Protocol):
    def invoke(self, prompt: Any, **kwargs: Any) -> Any:  # pragma: no cover - protocol only
        ...


class SuggestionConfig(BaseModel):
    temperature: float = 0.5


class SuggestionError(RuntimeError):
    """Raised when the text service fails or returns something unusable."""

    def __init__(self, message: str, raw_response: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class SuggestionUnavailableError(SuggestionError):
    """Raised when no text-generation client is configured."""

    def __init__(self, message: str = AI_UNAVAILABLE_MESSAGE) -> None:
        super().__init__(message)


def response_text(response: Any) -> str:
    text = getattr(response, "content", None)
    if text is None:
        text = str(response)
    if isinstance(text, list):
        text = " ".join(
            str(item.get("text", "")) if isinstance(item, dict) else str(item)
            for item in text
        )
    return str(text)


class SuggestionAgent:
    default_temperature = 0.5

    def __init__(
        self,
        llm: Optional[LLMProtocol] = None,
        config: Optional[SuggestionConfig] = None,
    ) -> None:
        self.llm = llm
        self.config = config or SuggestionConfig(temperature=self.default_temperature)

    @classmethod
    def from_environment(cls, config: Optional[SuggestionConfig] = None) -> "SuggestionAgent":
        resolved = config or SuggestionConfig(temperature=cls.default_temperature)
        return cls(llm=build_default_llm(temperature=resolved.temperature), config=resolved)

    @property
    def available(self) -> bool:
        return self.llm is not None

    def _require_llm(self) -> LLMProtocol:
        if self.llm is None:
            raise SuggestionUnavailableError()
        return self.llm

    def _invoke_text(self, prompt: str, label: str) -> str:
        llm = self._require_llm()
        try:
            response = llm.invoke(prompt)
        except Exception as exc:
            raise SuggestionError(f"Error generating {label}: {exc}") from exc
        text = response_text(response).strip()
        if not text:
            raise SuggestionError(f"Empty {label} from the text service.")
        return text
