"""Review request orchestration.

The orchestrator owns the one piece of shared state, the current
ReviewState snapshot, and is the only thing that replaces it. A request
moves IDLE → LOADING → SUCCESS | ERROR; a new request may start from any
terminal state.

Snapshots are immutable. Every replacement is pushed to subscribers, so a
caller that renders state only ever sees complete, consistent snapshots
(never LOADING with a result, never ERROR without a message).

Overlapping requests: each submit takes a generation number. When the backend
call or the formatter returns for a generation that has since been superseded,
the result is dropped and the newer request's state stands.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from snipreview_core.client import ReviewClient
from snipreview_core.credentials import CredentialResolver
from snipreview_core.exceptions import ConfigurationError, ReviewError, ValidationError
from snipreview_core.formatting import FormattingPipeline
from snipreview_core.languages import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

EMPTY_CODE_MESSAGE = "Please enter some code to review."
NOT_CONFIGURED_MESSAGE = "API key not configured. Save a key with `snipreview key set` or set it in the environment."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class ReviewStatus(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ReviewRequest:
    code: str
    language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class ReviewState:
    status: ReviewStatus = ReviewStatus.IDLE
    result: str = ""
    error_message: Optional[str] = None
    formatting_status: str = ""
    is_loading: bool = False
    error_kind: Optional[str] = None  # "validation" | "configuration" | "remote"


@dataclass(frozen=True)
class SessionSnapshot:
    code: str
    language: str
    review_result: str


Observer = Callable[[ReviewState], None]


class ReviewOrchestrator:
    def __init__(
        self,
        client: ReviewClient,
        credentials: CredentialResolver,
        formatting: FormattingPipeline | None = None,
        format_reviews: bool = True,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.client = client
        self.credentials = credentials
        self.formatting = formatting
        self.format_reviews = format_reviews
        self.code = ""
        self.language = language
        self._state = ReviewState()
        self._observers: list[Observer] = []
        self._generation = 0

    # ------------------------------------------------------------------ #
    # State access                                                         #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> ReviewState:
        return self._state

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def set_code(self, code: str) -> None:
        self.code = code

    def set_language(self, language: str) -> None:
        self.language = language

    def restore(self, record) -> None:
        """Replace the working code, language and result with a saved session.

        ``record`` is anything with ``code``, ``language`` and
        ``review_result`` attributes, such as a stored SessionRecord.
        """
        self._generation += 1
        self.code = record.code
        self.language = record.language or DEFAULT_LANGUAGE
        if record.review_result:
            self._set_state(ReviewState(status=ReviewStatus.SUCCESS, result=record.review_result))
        else:
            self._set_state(ReviewState())

    def snapshot_session(self) -> SessionSnapshot:
        """Capture the working code, language and latest successful review."""
        result = self._state.result if self._state.status is ReviewStatus.SUCCESS else ""
        return SessionSnapshot(code=self.code, language=self.language, review_result=result)

    # ------------------------------------------------------------------ #
    # Request lifecycle                                                    #
    # ------------------------------------------------------------------ #

    async def submit_review(self, request: ReviewRequest | None = None) -> ReviewState:
        """Run one review request and return the final snapshot.

        Never raises for validation, configuration or backend failures; those
        end in an ERROR snapshot.
        """
        if request is None:
            request = ReviewRequest(code=self.code, language=self.language)
        else:
            self.code = request.code
            self.language = request.language

        self._generation += 1
        generation = self._generation

        if not request.code.strip():
            self._set_state(
                ReviewState(
                    status=ReviewStatus.ERROR,
                    error_message=EMPTY_CODE_MESSAGE,
                    error_kind=ValidationError.kind,
                )
            )
            return self._state

        self._set_state(ReviewState(status=ReviewStatus.LOADING, is_loading=True))

        try:
            await self._run(request, generation)
        finally:
            if self._is_current(generation) and self._state.is_loading:
                if self._state.status is ReviewStatus.LOADING:
                    # Cancelled before the backend answered.
                    self._set_state(ReviewState())
                else:
                    self._set_state(replace(self._state, is_loading=False))

        return self._state

    async def _run(self, request: ReviewRequest, generation: int) -> None:
        try:
            if not self.credentials.is_configured():
                raise ConfigurationError(NOT_CONFIGURED_MESSAGE)
            credential = self.credentials.credential.value
            text = await asyncio.to_thread(self.client.generate, request.code, request.language, credential)
        except ReviewError as e:
            self._fail(generation, str(e) or UNKNOWN_ERROR_MESSAGE, e.kind)
            return
        except Exception as e:
            logger.error("Review request failed: %s", e)
            self._fail(generation, str(e) or UNKNOWN_ERROR_MESSAGE, "remote")
            return

        if not self._is_current(generation):
            logger.debug("Discarding review for superseded request %d.", generation)
            return
        self._set_state(ReviewState(status=ReviewStatus.SUCCESS, result=text, is_loading=True))

        if self.format_reviews and self.formatting is not None and self.formatting.supports(request.language):
            outcome = await asyncio.to_thread(self.formatting.apply, text, request.language)
            if not self._is_current(generation):
                return
            self._set_state(replace(self._state, result=outcome.text, formatting_status=outcome.message))

    def _fail(self, generation: int, message: str, kind: str) -> None:
        if not self._is_current(generation):
            logger.debug("Discarding failure for superseded request %d: %s", generation, message)
            return
        self._set_state(
            ReviewState(status=ReviewStatus.ERROR, error_message=message, error_kind=kind, is_loading=True)
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _set_state(self, state: ReviewState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Review state observer %r failed.", observer)
