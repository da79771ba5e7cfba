import json
import logging
from pathlib import Path

from pydantic import ValidationError

from highlight_modules.core.errors import DatasetNotFoundError, DatasetParseError
from highlight_modules.models import AnnotationDataset

logger = logging.getLogger(__name__)


def parse_dataset(text: str) -> AnnotationDataset:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetParseError(f"Highlights file is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise DatasetParseError(f"Highlights file must contain a JSON object, got {type(raw).__name__}")

    try:
        dataset = AnnotationDataset.model_validate(raw)
    except ValidationError as exc:
        raise DatasetParseError(f"Highlights file does not match the expected shape: {exc}") from exc

    for path, color_value, expected, found in dataset.name_conflicts():
        logger.warning(
            "Layer %s in %s is named %r, keeping first seen name %r",
            color_value,
            path,
            found,
            expected,
        )
    return dataset


def load_dataset(path: str | Path) -> AnnotationDataset:
    """Load and validate a highlights dataset without modifying it."""
    dataset_path = Path(path)
    try:
        raw_bytes = dataset_path.read_bytes()
    except FileNotFoundError:
        raise DatasetNotFoundError(f"Highlights file not found: {dataset_path}") from None
    except IsADirectoryError:
        raise DatasetNotFoundError(f"Highlights path is a directory: {dataset_path}") from None

    try:
        text = raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DatasetParseError(f"Highlights file is not UTF-8 text: {exc}") from exc

    dataset = parse_dataset(text)
    logger.info("Loaded %d annotated file(s) from %s", len(dataset.files), dataset_path)
    return dataset
