from pydantic import BaseModel, ConfigDict

from tagcase.core.policy import Verdict, describe

__all__ = [
    "Diagnostic",
    "LintReport",
    "SourceFile",
    "StructField",
    "StructTypeDecl",
    "TagLookup",
    "TagValue",
    "Verdict",
]


class SourceFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    display_path: str


class TagValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    options: tuple[str, ...] = ()


class TagLookup(BaseModel):
    model_config = ConfigDict(frozen=True)

    found: bool
    value: str = ""


class StructField(BaseModel):
    model_config = ConfigDict(frozen=True)

    names: tuple[str, ...]
    type_text: str
    line: int
    tag: str | None = None

    @property
    def name(self) -> str:
        return ", ".join(self.names)


class StructTypeDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    line: int
    fields: tuple[StructField, ...] = ()


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    value: str
    verdict: Verdict

    @property
    def message(self) -> str:
        return f'"{self.value}" {describe(self.verdict)}'

    def format(self) -> str:
        return f"{self.file}:{self.line}: {self.message}"

    def __str__(self) -> str:
        return self.format()


class LintReport(BaseModel):
    """Outcome of a lint run.

    ``parse_errors`` is only populated when the run was asked to keep going
    past unparseable files.
    """

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = ()
    parse_errors: tuple[str, ...] = ()

    @property
    def exit_code(self) -> int:
        if self.parse_errors:
            return 2
        return 1 if self.diagnostics else 0
