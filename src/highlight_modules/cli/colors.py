from pathlib import Path

from rich.table import Table

from highlight_modules.cli.common import (
    HighlightsOption,
    ProjectRootOption,
    console,
    load_or_exit,
    resolve_dataset_path,
)
from highlight_modules.core.catalog import build_catalog, count_usage


def colors(
    project_root: ProjectRootOption = Path("."),
    highlights: HighlightsOption = None,
) -> None:
    """List the highlight layers found in the highlights file."""
    dataset = load_or_exit(resolve_dataset_path(project_root, highlights))
    catalog = build_catalog(dataset)
    if not catalog:
        console.print("No highlight colors found in the highlights file.")
        return

    table = Table(show_lines=False)
    for header in ("layer", "color", "files", "ranges"):
        table.add_column(header)
    for color in catalog:
        file_count, range_count = count_usage(dataset, color.value)
        table.add_row(color.name, color.value, str(file_count), str(range_count))
    console.print(table)
    console.print(f"({len(catalog)} layers)")
