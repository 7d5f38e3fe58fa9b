import logging
from collections.abc import Sequence

from tagcase.core.errors import ParseError
from tagcase.core.extract import iter_tagged_fields
from tagcase.core.policy import Verdict, check_key
from tagcase.core.ports.resolver import TargetResolver
from tagcase.core.resolver import FileSystemResolver
from tagcase.core.source import ParsedUnit, parse_file, parse_source
from tagcase.core.tags import SERIALIZATION_TAG_KEY, serialization_key
from tagcase.models import Diagnostic, LintReport, SourceFile

logger = logging.getLogger(__name__)


def lint_unit(unit: ParsedUnit, tag_key: str = SERIALIZATION_TAG_KEY) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for field in iter_tagged_fields(unit):
        key = serialization_key(field.tag or "", tag_key)
        if not key.found:
            continue
        verdict = check_key(key.value)
        if verdict is Verdict.OK:
            continue
        diagnostics.append(
            Diagnostic(
                file=unit.source_file.display_path,
                line=field.line,
                value=key.value,
                verdict=verdict,
            )
        )
    return diagnostics


def lint_file(source_file: SourceFile) -> list[Diagnostic]:
    logger.debug("Linting %s", source_file.display_path)
    return lint_unit(parse_file(source_file))


def lint_source(source: str | bytes, path: str = "<input>") -> list[Diagnostic]:
    """Lint Go source held in memory."""
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    unit = parse_source(source_bytes, SourceFile(path=path, display_path=path))
    return lint_unit(unit)


def run_lint(
    specifiers: Sequence[str],
    resolver: TargetResolver | None = None,
    keep_going: bool = False,
) -> LintReport:
    """Lint every file the targets resolve to.

    Files are processed in resolver order and diagnostics keep that order.
    A ``ResolutionError`` always propagates. A ``ParseError`` propagates
    unless ``keep_going`` is set, in which case it is recorded in the report
    and the next file is linted.
    """
    resolver = resolver or FileSystemResolver()
    files = resolver.resolve(specifiers)
    logger.debug("Resolved %d file(s)", len(files))

    diagnostics: list[Diagnostic] = []
    parse_errors: list[str] = []
    for source_file in files:
        try:
            diagnostics.extend(lint_file(source_file))
        except ParseError as exc:
            if not keep_going:
                raise
            logger.warning("Skipping %s: %s", source_file.display_path, exc.message)
            parse_errors.append(str(exc))

    return LintReport(diagnostics=tuple(diagnostics), parse_errors=tuple(parse_errors))
