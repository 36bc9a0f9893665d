"""Session data model.

Decoupled from snipreview_core so the store layer can be used independently
and snipreview_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SESSION_LANGUAGE = "javascript"


@dataclass
class SessionRecord:
    """The code, language and review result a user can save and restore.

    Serialised as ``{"code", "language", "reviewResult"}``, the shape the
    browser build wrote to local storage, so sessions stay interchangeable.
    """

    code: str = ""
    language: str = DEFAULT_SESSION_LANGUAGE
    review_result: str = ""

    def to_dict(self) -> dict:
        return {"code": self.code, "language": self.language, "reviewResult": self.review_result}

    @classmethod
    def from_dict(cls, d: dict) -> SessionRecord:
        return cls(
            code=_as_str(d.get("code"), ""),
            language=_as_str(d.get("language"), DEFAULT_SESSION_LANGUAGE) or DEFAULT_SESSION_LANGUAGE,
            review_result=_as_str(d.get("reviewResult"), ""),
        )


def _as_str(value, default: str) -> str:
    return value if isinstance(value, str) else default
