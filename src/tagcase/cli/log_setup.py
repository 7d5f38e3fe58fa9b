import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(is_verbose: bool = False) -> None:
    """Route log records to stderr through rich; DEBUG when verbose, WARNING otherwise."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=is_verbose,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if is_verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
