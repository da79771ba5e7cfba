import logging
from collections.abc import Sequence
from pathlib import Path

from highlight_modules.config import MANIFEST_NAME
from highlight_modules.core.errors import ExportIssue, IssueKind
from highlight_modules.models import Color, ExportManifest, ExportRecord

logger = logging.getLogger(__name__)


def build_manifest(records: Sequence[ExportRecord], colors: Sequence[Color]) -> ExportManifest:
    return ExportManifest(modules=list(records), colors=list(colors))


def write_manifest(records: Sequence[ExportRecord], colors: Sequence[Color], destination: Path) -> Path:
    """Write ``modules.json`` into *destination*, creating the folder if needed."""
    destination.mkdir(parents=True, exist_ok=True)
    manifest_path = destination / MANIFEST_NAME
    manifest_path.write_text(build_manifest(records, colors).to_json(), encoding="utf-8")
    logger.info("Wrote manifest with %d record(s) to %s", len(records), manifest_path)
    return manifest_path


def _try_write_manifest(
    records: Sequence[ExportRecord],
    colors: Sequence[Color],
    destination: Path,
    issues: list[ExportIssue],
) -> Path | None:
    try:
        return write_manifest(records, colors, destination)
    except OSError as exc:
        message = f"Could not write {MANIFEST_NAME} to {destination}: {exc}"
        logger.warning("%s", message)
        color_values = ", ".join(color.value for color in colors)
        issues.append(ExportIssue(IssueKind.WRITE_FAILURE, color_values, destination.as_posix(), message))
        return None


def write_manifests(
    records: Sequence[ExportRecord],
    layers: Sequence[tuple[Color, Path]],
    merged: bool,
    *,
    issues: list[ExportIssue] | None = None,
) -> list[Path]:
    """Write the manifest(s) for one export run.

    Merged runs get a single manifest listing every record and color. Otherwise
    each layer's folder gets a manifest restricted to that layer's color.
    Folders that cannot be written are reported in *issues* and left out of
    the returned paths.
    """
    issue_sink = issues if issues is not None else []
    if not layers:
        return []

    if merged:
        destination = layers[0][1]
        written = [_try_write_manifest(records, [color for color, _ in layers], destination, issue_sink)]
    else:
        written = []
        for color, destination in layers:
            layer_records = [record for record in records if record.color_value == color.value]
            written.append(_try_write_manifest(layer_records, [color], destination, issue_sink))
    return [path for path in written if path is not None]
