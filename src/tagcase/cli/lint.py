from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from tagcase.cli.log_setup import setup_logging
from tagcase.config import get_settings
from tagcase.core.errors import TagcaseError
from tagcase.core.lint import run_lint
from tagcase.core.resolver import get_resolver

err_console = Console(stderr=True, soft_wrap=True)


def _print_error(message: str) -> None:
    err_console.print(f"[red]error:[/red] {escape(message)}")


def lint(
    targets: Annotated[
        list[str] | None,
        typer.Argument(help="Packages, directories, .go files or ./... patterns. Defaults to the current package."),
    ] = None,
    keep_going: Annotated[
        bool | None,
        typer.Option(
            "--keep-going/--no-keep-going",
            help="Report parse errors and keep linting the remaining files. Overrides TAGCASE_KEEP_GOING.",
        ),
    ] = None,
    resolver: Annotated[str | None, typer.Option(help="Target resolver: 'fs' (default) or 'go'.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Check that JSON keys in Go struct tags are camelCase."""
    setup_logging(verbose)
    settings = get_settings()

    try:
        target_resolver = get_resolver(resolver or settings.resolver)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--resolver") from exc

    try:
        report = run_lint(
            targets or [],
            resolver=target_resolver,
            keep_going=settings.keep_going if keep_going is None else keep_going,
        )
    except TagcaseError as exc:
        _print_error(str(exc))
        raise typer.Exit(2) from exc

    for diagnostic in report.diagnostics:
        typer.echo(diagnostic.format())
    for message in report.parse_errors:
        _print_error(message)

    if report.exit_code:
        raise typer.Exit(report.exit_code)
