"""Tests for the review formatting pipeline."""

import subprocess
import sys
from unittest.mock import MagicMock

import pytest

from snipreview_core.exceptions import FormattingError
from snipreview_core.formatting import (
    BlackFormatter,
    Formatter,
    FormattingPipeline,
    PrettierFormatter,
    SqlFormatter,
    default_formatters,
)

REVIEW = """## Summary
The code is fine.

```javascript
const x=1;let y=2
```

Some prose.

```python
x=1
```
"""


class UpperFormatter(Formatter):
    name = "upper"

    def __init__(self):
        self.calls = []

    def format(self, text, language):
        self.calls.append((text, language))
        return text.upper()


class BrokenFormatter(Formatter):
    name = "broken"

    def format(self, text, language):
        raise FormattingError("syntax error")


class TestFormattingPipeline:
    def test_unmapped_language_is_noop(self):
        pipeline = FormattingPipeline({"javascript": UpperFormatter()})
        outcome = pipeline.apply(REVIEW, "rust")
        assert outcome.applied is False
        assert outcome.message == ""
        assert outcome.text == REVIEW

    def test_formats_only_matching_blocks(self):
        formatter = UpperFormatter()
        pipeline = FormattingPipeline({"javascript": formatter})
        outcome = pipeline.apply(REVIEW, "javascript")

        assert outcome.applied is True
        assert "upper" in outcome.message
        assert "CONST X=1;LET Y=2" in outcome.text
        # Prose and other-language blocks are untouched.
        assert "The code is fine." in outcome.text
        assert "x=1\n```" in outcome.text
        assert formatter.calls == [("const x=1;let y=2\n", "javascript")]

    def test_alias_fence_tags_are_formatted(self):
        pipeline = FormattingPipeline({"javascript": UpperFormatter()})
        outcome = pipeline.apply("```js\nlet a\n```\n", "javascript")
        assert outcome.text == "```js\nLET A\n```\n"

    def test_formatted_block_keeps_trailing_newline(self):
        class NoNewline(Formatter):
            name = "nonl"

            def format(self, text, language):
                return text.strip()

        pipeline = FormattingPipeline({"sql": NoNewline()})
        outcome = pipeline.apply("```sql\nselect 1\n```", "sql")
        assert outcome.text == "```sql\nselect 1\n```"

    def test_failure_keeps_original_text(self):
        pipeline = FormattingPipeline({"javascript": BrokenFormatter()})
        outcome = pipeline.apply(REVIEW, "javascript")
        assert outcome.applied is False
        assert outcome.text == REVIEW
        assert "could not be applied, showing raw output" in outcome.message

    def test_unexpected_exception_is_contained(self):
        class Exploding(Formatter):
            def format(self, text, language):
                raise KeyError("boom")

        pipeline = FormattingPipeline({"python": Exploding()})
        outcome = pipeline.apply(REVIEW, "python")
        assert outcome.applied is False
        assert outcome.text == REVIEW

    def test_review_without_blocks_is_not_applied(self):
        formatter = UpperFormatter()
        pipeline = FormattingPipeline({"python": formatter})
        outcome = pipeline.apply("No code here.", "python")
        assert outcome.applied is False
        assert outcome.message == ""
        assert outcome.text == "No code here."
        assert formatter.calls == []

    def test_other_language_blocks_only_is_not_applied(self):
        pipeline = FormattingPipeline({"sql": UpperFormatter()})
        outcome = pipeline.apply(REVIEW, "sql")
        assert outcome.applied is False
        assert outcome.message == ""
        assert outcome.text == REVIEW

    def test_crlf_review_is_formatted(self):
        review = "Intro\r\n```javascript\r\nconst x=1\r\n```\r\n"
        outcome = FormattingPipeline({"javascript": UpperFormatter()}).apply(review, "javascript")
        assert outcome.applied is True
        assert outcome.text == "Intro\r\n```javascript\r\nCONST X=1\r\n```\r\n"

    def test_supports(self):
        pipeline = FormattingPipeline({"python": UpperFormatter()})
        assert pipeline.supports("python")
        assert not pipeline.supports("go")


class TestDefaultFormatters:
    def test_known_grammars_are_mapped(self):
        mapping = default_formatters()
        for language in ("javascript", "typescript", "html", "css", "python", "sql"):
            assert language in mapping

    def test_compiled_languages_unmapped(self):
        mapping = default_formatters()
        for language in ("java", "csharp", "go", "rust"):
            assert language not in mapping

    def test_timeout_passed_through(self):
        assert default_formatters(timeout=3)["python"].timeout == 3


class TestSubprocessFormatter:
    def test_prettier_command_uses_parser(self):
        assert PrettierFormatter().command("typescript") == ["prettier", "--parser", "typescript"]
        assert PrettierFormatter().command("javascript") == ["prettier", "--parser", "babel"]

    def test_black_reads_stdin(self):
        assert BlackFormatter().command("python")[-1] == "-"

    def test_sqlformat_runs_under_current_interpreter(self):
        cmd = SqlFormatter().command("sql")
        assert cmd[:3] == [sys.executable, "-m", "sqlparse"]
        assert cmd[-1] == "-"

    def test_missing_python_module_raises(self, mocker):
        mocker.patch("snipreview_core.formatting.importlib.util.find_spec", return_value=None)
        run = mocker.patch("snipreview_core.formatting.subprocess.run")
        with pytest.raises(FormattingError, match="black is not installed"):
            BlackFormatter().format("x=1\n", "python")
        run.assert_not_called()

    def test_missing_executable_raises(self, mocker):
        mocker.patch("snipreview_core.formatting.shutil.which", return_value=None)
        with pytest.raises(FormattingError, match="not installed"):
            PrettierFormatter().format("let a", "javascript")

    def test_successful_run_returns_stdout(self, mocker):
        mocker.patch("snipreview_core.formatting.importlib.util.find_spec", return_value=object())
        run = mocker.patch(
            "snipreview_core.formatting.subprocess.run",
            return_value=MagicMock(returncode=0, stdout="SELECT 1\n", stderr=""),
        )
        assert SqlFormatter(timeout=5).format("select 1", "sql") == "SELECT 1\n"
        kwargs = run.call_args.kwargs
        assert kwargs["input"] == "select 1"
        assert kwargs["timeout"] == 5

    def test_nonzero_exit_raises(self, mocker):
        mocker.patch("snipreview_core.formatting.shutil.which", return_value="/usr/bin/prettier")
        mocker.patch(
            "snipreview_core.formatting.subprocess.run",
            return_value=MagicMock(returncode=2, stdout="", stderr="SyntaxError: Unexpected token"),
        )
        with pytest.raises(FormattingError, match="Unexpected token"):
            PrettierFormatter().format("let =", "javascript")

    def test_timeout_raises(self, mocker):
        mocker.patch("snipreview_core.formatting.shutil.which", return_value="/usr/bin/prettier")
        mocker.patch(
            "snipreview_core.formatting.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="prettier", timeout=1),
        )
        with pytest.raises(FormattingError, match="timed out"):
            PrettierFormatter(timeout=1).format("let a", "javascript")

    def test_pipeline_degrades_when_tool_missing(self, mocker):
        mocker.patch("snipreview_core.formatting.shutil.which", return_value=None)
        outcome = FormattingPipeline().apply(REVIEW, "javascript")
        assert outcome.applied is False
        assert outcome.text == REVIEW


class TestInstalledFormatters:
    def test_python_review_formatted_with_black(self):
        pytest.importorskip("black")
        outcome = FormattingPipeline(default_formatters()).apply("```python\nx=1\n```\n", "python")
        assert outcome.applied is True
        assert outcome.message == "Code blocks formatted with black."
        assert outcome.text == "```python\nx = 1\n```\n"

    def test_sql_review_formatted_with_sqlparse(self):
        pytest.importorskip("sqlparse")
        outcome = FormattingPipeline(default_formatters()).apply("```sql\nselect a from t\n```\n", "sql")
        assert outcome.applied is True
        assert "SELECT a\nFROM t" in outcome.text
