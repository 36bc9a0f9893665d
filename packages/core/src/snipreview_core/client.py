"""Review client — the capability the orchestrator calls to generate a review.

The orchestrator only knows ``generate(code, language, credential)``. Which
SDK sits behind it is chosen once from configuration; the SDK client is built
lazily per credential so a credential change takes effect on the next request.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from snipreview_core.providers.anthropic import AnthropicReviewer
from snipreview_core.providers.base import BaseReviewer
from snipreview_core.providers.gemini import GeminiReviewer
from snipreview_core.providers.openai import OpenAIReviewer

logger = logging.getLogger(__name__)

_PROVIDERS: dict[str, type[BaseReviewer]] = {
    "gemini": GeminiReviewer,
    "anthropic": AnthropicReviewer,
    "openai": OpenAIReviewer,
}


class ReviewClient(Protocol):
    def generate(self, code: str, language: str, credential: str) -> str: ...


def get_reviewer(model: str, api_key: str) -> BaseReviewer:
    try:
        reviewer_cls = _PROVIDERS[model]
    except KeyError:
        raise ValueError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(_PROVIDERS)}.")
    return reviewer_cls(api_key=api_key)


class ProviderReviewClient:
    """ReviewClient backed by one of the SDK providers."""

    def __init__(self, model: str):
        if model not in _PROVIDERS:
            raise ValueError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(_PROVIDERS)}.")
        self.model = model
        self._reviewer: BaseReviewer | None = None
        self._reviewer_key: str | None = None
        self._lock = threading.Lock()

    def generate(self, code: str, language: str, credential: str) -> str:
        return self._reviewer_for(credential).review(code, language)

    def _reviewer_for(self, credential: str) -> BaseReviewer:
        with self._lock:
            reviewer = self._reviewer
            if reviewer is None or self._reviewer_key != credential:
                logger.debug("Creating %s reviewer.", self.model)
                reviewer = get_reviewer(self.model, credential)
                self._reviewer = reviewer
                self._reviewer_key = credential
            return reviewer
