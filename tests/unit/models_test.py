"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from tagcase.models import Diagnostic, LintReport, SourceFile, StructField, Verdict


def _diagnostic(verdict: Verdict = Verdict.NOT_CAMEL_CASE) -> Diagnostic:
    return Diagnostic(file="./a.go", line=7, value="Bad_key", verdict=verdict)


class TestDiagnostic:
    def test_format(self) -> None:
        assert _diagnostic().format() == './a.go:7: "Bad_key" is not camelcase'
        assert str(_diagnostic(Verdict.CONTAINS_WHITESPACE)) == './a.go:7: "Bad_key" contains whitespace'

    def test_ok_verdict_has_no_message(self) -> None:
        with pytest.raises(ValueError):
            _ = _diagnostic(Verdict.OK).message

    def test_is_frozen(self) -> None:
        diagnostic = _diagnostic()
        with pytest.raises(ValidationError):
            diagnostic.line = 8  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert _diagnostic() == _diagnostic()

    def test_serializes_to_dict(self) -> None:
        assert _diagnostic().model_dump(mode="json") == {
            "file": "./a.go",
            "line": 7,
            "value": "Bad_key",
            "verdict": "is not camelcase",
        }


class TestLintReport:
    def test_exit_codes(self) -> None:
        assert LintReport().exit_code == 0
        assert LintReport(diagnostics=(_diagnostic(),)).exit_code == 1
        assert LintReport(diagnostics=(_diagnostic(),), parse_errors=("x.go:1:1: syntax error",)).exit_code == 2


class TestStructField:
    def test_name_joins_names(self) -> None:
        field = StructField(names=("A", "B"), type_text="int", line=3, tag='json:"a"')
        assert field.name == "A, B"

    def test_tag_defaults_to_none(self) -> None:
        assert StructField(names=("A",), type_text="int", line=3).tag is None


class TestSourceFile:
    def test_requires_display_path(self) -> None:
        with pytest.raises(ValidationError):
            SourceFile(path="/a.go")  # type: ignore[call-arg]
