from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from highlight_modules.cli.common import (
    HighlightsOption,
    ProjectRootOption,
    console,
    load_or_exit,
    resolve_dataset_path,
)
from highlight_modules.config import DEFAULT_EXPORT_PATH, EXPORT_PATH_ENV, SINGLE_FOLDER_ENV, ExportSettings
from highlight_modules.core.catalog import build_catalog, select_colors
from highlight_modules.core.errors import UnknownColorError
from highlight_modules.core.export import run_export
from highlight_modules.sources import FileSystemSourceTree


def export(
    project_root: ProjectRootOption = Path("."),
    highlights: HighlightsOption = None,
    color: Annotated[
        list[str] | None,
        typer.Option("--color", "-c", help="Layer to export, by color value or name. Repeatable; default: all."),
    ] = None,
    single_folder: Annotated[
        bool,
        typer.Option(
            "--single-folder/--separate-folders",
            envvar=SINGLE_FOLDER_ENV,
            help="Merge several layers into one folder instead of one folder per layer.",
        ),
    ] = False,
    export_path: Annotated[
        str,
        typer.Option(envvar=EXPORT_PATH_ENV, help="Folder, relative to the project root, that receives the exports."),
    ] = DEFAULT_EXPORT_PATH,
    timestamp: Annotated[
        datetime | None,
        typer.Option(formats=["%Y%m%d_%H%M", "%Y-%m-%dT%H:%M"], help="Timestamp used in folder names."),
    ] = None,
) -> None:
    """Export highlighted code of the selected layers, keeping its original position."""
    dataset = load_or_exit(resolve_dataset_path(project_root, highlights))
    catalog = build_catalog(dataset)
    if not catalog:
        console.print("No highlight colors found in the highlights file.")
        return

    try:
        selected = select_colors(catalog, color or [])
    except UnknownColorError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(2) from None

    settings = ExportSettings(export_to_single_folder=single_folder, export_path=export_path or DEFAULT_EXPORT_PATH)
    summary = run_export(
        dataset,
        selected,
        FileSystemSourceTree(project_root),
        project_root,
        settings,
        timestamp=timestamp,
    )

    for layer in summary.layers:
        location = Path(settings.export_path) / layer.destination.name
        console.print(
            f"Exported {layer.range_count} snippet(s) for layer {escape(layer.color.name)} to: {location.as_posix()}",
            soft_wrap=True,
        )

    if summary.issues:
        skipped = ", ".join(sorted({issue.file_path for issue in summary.issues}))
        console.print(
            f"[yellow]{len(summary.issues)} issue(s) while exporting, skipped parts of: {escape(skipped)}[/yellow]",
            soft_wrap=True,
        )

    if summary.nothing_exported:
        console.print("No code found to export for the selected layers.")
    else:
        console.print(
            f"[green]Exported a total of {summary.total_ranges} snippet(s) "
            f"for {summary.layer_count} layer(s) with modules.json.[/green]",
            soft_wrap=True,
        )
