from __future__ import annotations

from snipreview_core.providers.base import BaseReviewer


class GeminiReviewer(BaseReviewer):
    NAME = "Gemini API"
    MODEL = "gemini-2.5-flash"

    def __init__(self, api_key: str):
        try:
            from google import genai
        except ImportError:
            raise ImportError(
                "The 'google-genai' package is required for this provider. "
                "Install it with: pip install 'snipreview[gemini]'"
            )
        self.client = genai.Client(api_key=api_key)

    def _call_api(self, prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.MODEL,
            contents=prompt,
        )
        return response.text
