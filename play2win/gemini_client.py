"""Thin Gemini text-completion client with a model fallback list."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

import google.generativeai as genai

from . import settings
from .config import setup_logger
from .errors import APIError, LLMError

logger = setup_logger(__name__)

SOURCE = "Gemini"

# Substrings of an error message meaning "this model is not available, try the next"
_MODEL_UNAVAILABLE_MARKERS = ("not found", "404", "model")


@dataclass(frozen=True)
class GenerationResult:
    model: str
    text: str


ModelFactory = Callable[[str], Any]


def _default_model_factory(api_key: str) -> ModelFactory:
    genai.configure(api_key=api_key)

    def factory(name: str) -> Any:
        return genai.GenerativeModel(name)

    return factory


def _response_text(response: Any) -> str:
    try:
        text = getattr(response, "text", "")
    except ValueError:
        # blocked / candidate-less responses raise on .text
        return ""
    return (text or "").strip()


def is_model_unavailable(exc: BaseException) -> bool:
    msg = str(exc).lower()
    return any(marker in msg for marker in _MODEL_UNAVAILABLE_MARKERS)


class GeminiClient:
    """
    Generate text with the first configured model that answers.

    Errors that look like "model unavailable" move on to the next model;
    anything else (bad key, quota, network) is raised immediately.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        models: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        model_factory: Optional[ModelFactory] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.models = list(settings.GEMINI_MODELS if models is None else models)
        self.timeout = settings.GEMINI_TIMEOUT_S if timeout is None else timeout
        self._model_factory = model_factory

    @property
    def configured(self) -> bool:
        return bool(self.api_key) or self._model_factory is not None

    def _factory(self) -> ModelFactory:
        if self._model_factory is None:
            if not self.api_key:
                raise APIError(
                    SOURCE,
                    "NOT_CONFIGURED",
                    "Gemini API key not configured",
                    "Please set GEMINI_API_KEY in your .env file",
                )
            self._model_factory = _default_model_factory(self.api_key)
        return self._model_factory

    def generate(self, prompt: str) -> GenerationResult:
        factory = self._factory()
        last_error: Optional[BaseException] = None

        for name in self.models:
            try:
                model = factory(name)
                response = model.generate_content(
                    prompt, request_options={"timeout": self.timeout}
                )
            except Exception as exc:
                if not is_model_unavailable(exc):
                    raise
                last_error = exc
                logger.info("gemini_model_unavailable: model=%s error=%s", name, exc)
                continue

            text = _response_text(response)
            if text:
                logger.debug("gemini_generated: model=%s chars=%d", name, len(text))
                return GenerationResult(model=name, text=text)
            last_error = LLMError(f"Empty response from Gemini model {name}")
            logger.warning("gemini_empty_response: model=%s", name)

        if last_error is not None:
            raise last_error
        raise LLMError("All model attempts failed. Please check your API key has access to Gemini models.")


def classify_generation_error(exc: BaseException) -> Tuple[APIError, int]:
    """Map a generation failure to (APIError, http_status)."""
    if isinstance(exc, APIError):
        return exc, 500

    message = str(exc) or "Unknown error occurred"
    lowered = message.lower()
    status_attr = getattr(exc, "code", None) or getattr(exc, "status", None)

    if "api key" in lowered or "authentication" in lowered:
        return APIError(
            SOURCE,
            "INVALID_KEY",
            "Gemini API key error",
            "Invalid or missing API key. Please check your .env file and ensure GEMINI_API_KEY is set correctly.",
        ), 500
    if "quota" in lowered or "exceeded" in lowered:
        return APIError(
            SOURCE,
            "QUOTA_EXCEEDED",
            "Gemini Quota Exceeded",
            "You have exceeded your Gemini API quota. Please check your billing and plan details.",
        ), 429
    if "rate limit" in lowered or "429" in lowered or status_attr == 429:
        return APIError(
            SOURCE,
            "RATE_LIMITED",
            "Rate Limit Exceeded",
            "Too many requests. Please try again in a few moments.",
        ), 429
    if any(marker in lowered for marker in ("model", "not found", "not available", "404")):
        return APIError(
            SOURCE,
            "MODEL_UNAVAILABLE",
            "Model error",
            f"The selected model is not available for your API key. Error: {message}",
        ), 500
    if "permission" in lowered or "forbidden" in lowered or status_attr == 403:
        return APIError(
            SOURCE,
            "PERMISSION_DENIED",
            "Permission Denied",
            "Your API key does not have permission to access this resource. Please check your API key permissions.",
        ), 403
    if "network" in lowered or "timeout" in lowered or "connection" in lowered:
        return APIError(
            SOURCE,
            "NETWORK",
            "Network Error",
            "Failed to connect to Gemini API. Please check your internet connection and try again.",
        ), 500
    return APIError(SOURCE, "GENERATION_FAILED", "Failed to generate response", message), 500


__all__ = [
    "GeminiClient",
    "GenerationResult",
    "classify_generation_error",
    "is_model_unavailable",
]
