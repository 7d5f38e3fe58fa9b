import typer

from tagcase.cli.lint import lint

app = typer.Typer(
    name="tagcase",
    help="tagcase: lint JSON keys in Go struct tags.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("lint")(lint)


def main() -> None:
    app()
