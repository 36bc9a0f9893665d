"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review() → _build_prompt() → _call_api()   ← only this differs per provider
             → _clean()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Failures are not retried here. Whatever the SDK raises is wrapped in a
RemoteError whose message names the provider and whose ``detail`` keeps the
original text, so the orchestrator can show it without knowing any SDK.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from snipreview_core.exceptions import RemoteError

logger = logging.getLogger(__name__)

_MAX_TOKENS = 4096


class BaseReviewer(ABC):
    NAME: str = "AI provider"
    MAX_TOKENS: int = _MAX_TOKENS

    def review(self, code: str, language: str) -> str:
        """Return a Markdown review of ``code``.

        Raises RemoteError if the provider call fails or returns nothing.
        """
        prompt = self._build_prompt(code, language)
        try:
            raw = self._call_api(prompt)
        except Exception as e:
            logger.error("%s API call failed: %s", self.__class__.__name__, e)
            raise RemoteError(f"Failed to get review from {self.NAME}: {e}", detail=str(e)) from e
        text = self._clean(raw)
        if not text:
            raise RemoteError(f"Failed to get review from {self.NAME}: empty response", detail="empty response")
        return text

    @abstractmethod
    def _call_api(self, prompt: str) -> str:
        """Make a single API call and return the raw text response.

        This is the only method subclasses must implement. It should raise
        on failure.
        """

    def _build_prompt(self, code: str, language: str) -> str:
        return f"""You are an expert code reviewer with years of experience reviewing {language} code.
Please provide a thorough review of the following code snippet.
Focus on:
- **Bugs and Errors:** Identify any potential bugs or logical errors.
- **Best Practices:** Check if the code follows established best practices and conventions for {language}.
- **Performance:** Suggest any potential performance optimizations.
- **Readability and Style:** Comment on the code's clarity, naming conventions, and overall style.
- **Security:** Point out any potential security vulnerabilities.

Provide your feedback in a clear, constructive, and actionable format. Use Markdown for formatting,
including code blocks tagged `{language}` for examples. Start with a brief summary of the code's quality.

Here is the code to review:
```{language}
{code}
```"""

    def _clean(self, raw: str | None) -> str:
        return (raw or "").strip()
