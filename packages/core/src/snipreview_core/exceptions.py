"""Error taxonomy for review requests.

Validation and configuration errors are raised before anything leaves the
process. RemoteError wraps whatever the review backend raised. FormattingError
never escapes the formatting pipeline; it only downgrades the output to the
raw review text.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for every failure the orchestrator knows how to surface."""

    kind = "review"


class ValidationError(ReviewError):
    """The request itself is unusable (e.g. empty code)."""

    kind = "validation"


class ConfigurationError(ReviewError):
    """No credential is available, so a remote call would be guaranteed to fail."""

    kind = "configuration"


class RemoteError(ReviewError):
    """The review backend failed (auth, network, quota, server).

    ``detail`` keeps the original failure text for diagnostics; the message is
    the stable, user-facing one.
    """

    kind = "remote"

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.detail = detail


class FormattingError(ReviewError):
    """A formatter could not be run or rejected its input."""

    kind = "formatting"
