import logging
import re
import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from highlight_modules.config import ExportSettings
from highlight_modules.core.errors import ExportIssue, IssueKind, RangeOutOfBoundsError
from highlight_modules.core.extract import extract_range, place_pieces
from highlight_modules.core.manifest import write_manifests
from highlight_modules.core.ports.sources import SourceTree
from highlight_modules.models import AnnotationDataset, Color, ExportRecord

logger = logging.getLogger(__name__)

MERGED_FOLDER_PREFIX = "selected_layers"
_UNSAFE_IN_FOLDER = re.compile(r"[\s/\\]")


class WritePolicy(str, Enum):
    # Separate folders: later ranges overwrite earlier ones.
    OVERWRITE = "overwrite"
    # Single folder: lines filled by an earlier layer are left untouched.
    KEEP_EARLIER_LAYERS = "keep_earlier_layers"


@dataclass
class ReconstructionStore:
    """Reconstructed files shared by the layers of one merged export run."""

    files: dict[str, list[str]] = field(default_factory=dict)
    cleared: set[Path] = field(default_factory=set)


@dataclass(frozen=True)
class LayerExport:
    color: Color
    destination: Path
    range_count: int


@dataclass
class ExportSummary:
    layers: list[LayerExport] = field(default_factory=list)
    records: list[ExportRecord] = field(default_factory=list)
    issues: list[ExportIssue] = field(default_factory=list)
    manifests: list[Path] = field(default_factory=list)
    merged: bool = False

    @property
    def total_ranges(self) -> int:
        return sum(layer.range_count for layer in self.layers)

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def nothing_exported(self) -> bool:
        return self.total_ranges == 0


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%Y%m%d_%H%M")


def layer_folder_name(layer_name: str, stamp: str) -> str:
    return f"{_UNSAFE_IN_FOLDER.sub('_', layer_name)}_{stamp}"


def merged_folder_name(stamp: str) -> str:
    return f"{MERGED_FOLDER_PREFIX}_{stamp}"


def _reset_destination(destination: Path, store: ReconstructionStore | None) -> None:
    if store is not None and destination in store.cleared:
        return
    if destination.exists():
        logger.info("Clearing previous export at %s", destination)
        shutil.rmtree(destination)
    if store is not None:
        store.cleared.add(destination)


def _fit(lines: list[str], line_count: int) -> list[str]:
    return (lines + [""] * line_count)[:line_count]


def _write_reconstruction(destination: Path, relative_path: str, lines: list[str]) -> None:
    target = destination / relative_path
    if not target.resolve().is_relative_to(destination.resolve()):
        raise OSError(f"Refusing to write outside the export folder: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text("\n".join(lines), encoding="utf-8", newline="")


def export_layer(
    color: Color,
    dataset: AnnotationDataset,
    sources: SourceTree,
    destination: Path,
    records: list[ExportRecord],
    *,
    store: ReconstructionStore | None = None,
    policy: WritePolicy = WritePolicy.OVERWRITE,
    issues: list[ExportIssue] | None = None,
) -> int:
    """Rebuild every file annotated with *color* under *destination*.

    Appends one record per range to *records* and returns the number of ranges
    processed, including ranges whose lines were kept from an earlier layer or
    skipped as out of bounds.
    """
    issue_sink = issues if issues is not None else []
    try:
        _reset_destination(destination, store)
    except OSError as exc:
        message = f"Could not clear export folder {destination}: {exc}"
        logger.warning("%s", message)
        issue_sink.append(ExportIssue(IssueKind.WRITE_FAILURE, color.value, destination.as_posix(), message))
        return 0

    processed = 0
    for relative_path, ranges in dataset.ranges_for(color.value):
        source_lines = sources.read_lines(relative_path)
        if source_lines is None:
            message = f"File not found: {sources.describe(relative_path)}"
            logger.warning("%s", message)
            issue_sink.append(ExportIssue(IssueKind.SOURCE_FILE_MISSING, color.value, relative_path, message))
            continue

        line_count = len(source_lines)
        stored = store.files.get(relative_path) if store is not None else None
        base = _fit(stored, line_count) if stored is not None else [""] * line_count
        lines = list(base)

        placed = 0
        for rng in ranges:
            records.append(
                ExportRecord(
                    file_path=relative_path,
                    layer_name=color.name,
                    color_value=color.value,
                    range=rng.span(),
                )
            )
            processed += 1
            try:
                extraction = extract_range(source_lines, rng)
            except RangeOutOfBoundsError as exc:
                message = f"Skipping range in {relative_path}: {exc}"
                logger.warning("%s", message)
                issue_sink.append(ExportIssue(IssueKind.RANGE_OUT_OF_BOUNDS, color.value, relative_path, message))
                continue

            for line_index, content in place_pieces(extraction, rng, line_count):
                if policy is WritePolicy.KEEP_EARLIER_LAYERS and base[line_index]:
                    continue
                lines[line_index] = content
            placed += 1

        if not placed:
            continue

        try:
            _write_reconstruction(destination, relative_path, lines)
        except OSError as exc:
            message = f"Could not write {relative_path} to {destination}: {exc}"
            logger.warning("%s", message)
            issue_sink.append(ExportIssue(IssueKind.WRITE_FAILURE, color.value, relative_path, message))
            continue

        if store is not None:
            store.files[relative_path] = lines

    logger.info("Exported %d range(s) for layer %s to %s", processed, color.name, destination)
    return processed


def _unique_folder(name: str, used: set[str]) -> str:
    candidate = name
    suffix = 2
    while candidate in used:
        candidate = f"{name}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def run_export(
    dataset: AnnotationDataset,
    colors: Sequence[Color],
    sources: SourceTree,
    project_root: str | Path,
    settings: ExportSettings | None = None,
    timestamp: datetime | None = None,
) -> ExportSummary:
    """Export the selected layers one after another and write their manifests.

    Settings default to the environment (see ``ExportSettings.from_env``).
    """
    settings = settings or ExportSettings.from_env()
    stamp = format_timestamp(timestamp or datetime.now())
    export_root = Path(project_root) / settings.export_path
    merged = len(colors) > 1 and settings.export_to_single_folder

    store = ReconstructionStore() if merged else None
    policy = WritePolicy.KEEP_EARLIER_LAYERS if merged else WritePolicy.OVERWRITE
    summary = ExportSummary(merged=merged)
    used_folders: set[str] = set()
    merged_destination = export_root / merged_folder_name(stamp)

    for color in colors:
        if merged:
            destination = merged_destination
        else:
            destination = export_root / _unique_folder(layer_folder_name(color.name, stamp), used_folders)
        count = export_layer(
            color,
            dataset,
            sources,
            destination,
            summary.records,
            store=store,
            policy=policy,
            issues=summary.issues,
        )
        summary.layers.append(LayerExport(color=color, destination=destination, range_count=count))

    summary.manifests = write_manifests(
        summary.records,
        [(layer.color, layer.destination) for layer in summary.layers],
        merged,
        issues=summary.issues,
    )
    return summary
