import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from highlight_modules.cli.colors import colors
from highlight_modules.cli.export import export

app = typer.Typer(
    name="highlight-modules",
    help="Highlight Modules CLI: export highlighted code layers as standalone files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress details.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


app.command("colors")(colors)
app.command("export")(export)


def main() -> None:
    app()
