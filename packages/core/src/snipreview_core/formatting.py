"""Post-processing of review output with per-language pretty-printers.

A review is Markdown. The pipeline looks for fenced code blocks tagged with
the request's language and runs them through that language's formatter.
Formatters are external executables (prettier, black, sqlformat) driven over
stdin/stdout, so a missing tool is an ordinary formatting failure.

Formatting is strictly best-effort: any failure leaves the original review
text in place and is reported only through ``FormattingOutcome.message``.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import re
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

from snipreview_core.exceptions import FormattingError
from snipreview_core.languages import fence_tags

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 20

# ```lang ...\n<body>```: the body is captured without the closing fence.
_FENCE_RE = re.compile(
    r"^(?P<open>```[ \t]*(?P<tag>[^\s`]*)[^\n]*\n)(?P<body>.*?)^(?P<close>```[ \t]*)\r?$",
    re.MULTILINE | re.DOTALL,
)


@dataclass
class FormattingOutcome:
    applied: bool
    message: str
    text: str


class Formatter(ABC):
    name: str = "formatter"

    @abstractmethod
    def format(self, text: str, language: str) -> str:
        """Return ``text`` reformatted. Raise FormattingError on failure."""


class SubprocessFormatter(Formatter):
    """Pipe text through an external formatter command.

    Formatters shipped as Python packages set ``module`` and run under the
    current interpreter, so they are found wherever snipreview is installed.
    """

    module: str | None = None

    def __init__(self, timeout: float = _DEFAULT_TIMEOUT):
        self.timeout = timeout

    @abstractmethod
    def command(self, language: str) -> list[str]:
        """Return the argv that reads source on stdin and writes it to stdout."""

    def format(self, text: str, language: str) -> str:
        cmd = self.command(language)
        if self.module is not None:
            if importlib.util.find_spec(self.module) is None:
                raise FormattingError(f"{self.module} is not installed (pip install 'snipreview[format]')")
        elif shutil.which(cmd[0]) is None:
            raise FormattingError(f"{cmd[0]} is not installed")

        env = os.environ.copy()
        env["TERM"] = "dumb"
        try:
            proc = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            raise FormattingError(f"{self.name} timed out after {self.timeout}s")
        except OSError as e:
            raise FormattingError(f"could not run {self.name}: {e}")

        if proc.returncode != 0:
            raise FormattingError(f"{self.name} exited with {proc.returncode}: {proc.stderr.strip()[:200]}")
        return proc.stdout


class PrettierFormatter(SubprocessFormatter):
    name = "prettier"
    PARSERS = {
        "javascript": "babel",
        "typescript": "typescript",
        "html": "html",
        "css": "css",
    }

    def command(self, language: str) -> list[str]:
        return ["prettier", "--parser", self.PARSERS[language]]


class BlackFormatter(SubprocessFormatter):
    name = "black"
    module = "black"

    def command(self, language: str) -> list[str]:
        return [sys.executable, "-m", "black", "--quiet", "-"]


class SqlFormatter(SubprocessFormatter):
    name = "sqlformat"
    module = "sqlparse"

    def command(self, language: str) -> list[str]:
        return [sys.executable, "-m", "sqlparse", "--reindent", "--keywords", "upper", "-"]


def default_formatters(timeout: float = _DEFAULT_TIMEOUT) -> dict[str, Formatter]:
    """Formatters for the languages with a known grammar.

    General-purpose compiled languages (java, csharp, go, rust) are left
    unmapped and pass through untouched.
    """
    prettier = PrettierFormatter(timeout)
    mapping: dict[str, Formatter] = {language: prettier for language in PrettierFormatter.PARSERS}
    mapping["python"] = BlackFormatter(timeout)
    mapping["sql"] = SqlFormatter(timeout)
    return mapping


class FormattingPipeline:
    def __init__(self, formatters: dict[str, Formatter] | None = None):
        self.formatters = default_formatters() if formatters is None else formatters

    def supports(self, language: str) -> bool:
        return language in self.formatters

    def apply(self, text: str, language: str) -> FormattingOutcome:
        formatter = self.formatters.get(language)
        if formatter is None:
            return FormattingOutcome(applied=False, message="", text=text)

        try:
            formatted, count = self._format_blocks(text, language, formatter)
        except Exception as e:
            logger.warning("Formatting %s review output with %s failed: %s", language, formatter.name, e)
            return FormattingOutcome(
                applied=False,
                message=f"Formatting for {language} could not be applied, showing raw output.",
                text=text,
            )

        if count == 0:
            return FormattingOutcome(applied=False, message="", text=text)
        return FormattingOutcome(
            applied=True,
            message=f"Code blocks formatted with {formatter.name}.",
            text=formatted,
        )

    def _format_blocks(self, text: str, language: str, formatter: Formatter) -> tuple[str, int]:
        """Format every block fenced as ``language``; return the text and the block count."""
        tags = fence_tags(language)
        pieces: list[str] = []
        last = 0
        count = 0
        for match in _FENCE_RE.finditer(text):
            if match.group("tag").lower() not in tags:
                continue
            body = formatter.format(match.group("body"), language)
            if not body.endswith("\n"):
                body += "\n"
            pieces.append(text[last : match.start("body")])
            pieces.append(body)
            last = match.end("body")
            count += 1
        pieces.append(text[last:])
        return "".join(pieces), count
