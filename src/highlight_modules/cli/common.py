from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from highlight_modules.config import DEFAULT_DATASET_NAME
from highlight_modules.core.annotations import load_dataset
from highlight_modules.core.errors import DatasetNotFoundError, DatasetParseError
from highlight_modules.models import AnnotationDataset

console = Console()

ProjectRootOption = Annotated[
    Path,
    typer.Option("--project-root", "-p", help="Project root that annotated paths are relative to."),
]
HighlightsOption = Annotated[
    Path | None,
    typer.Option("--highlights", help=f"Highlights file (default: <project root>/{DEFAULT_DATASET_NAME})."),
]


def resolve_dataset_path(project_root: Path, highlights: Path | None) -> Path:
    return highlights if highlights is not None else project_root / DEFAULT_DATASET_NAME


def load_or_exit(dataset_path: Path) -> AnnotationDataset:
    try:
        return load_dataset(dataset_path)
    except DatasetNotFoundError:
        console.print(f"[yellow]No {dataset_path.name} file found at {dataset_path}.[/yellow]", soft_wrap=True)
        raise typer.Exit(1) from None
    except DatasetParseError as exc:
        console.print(
            f"[red]Error reading or processing {dataset_path.name}:[/red] {escape(str(exc))}",
            soft_wrap=True,
        )
        raise typer.Exit(1) from None
