from dataclasses import dataclass
from enum import Enum


class HighlightModulesError(Exception):
    """Base class for errors raised by highlight-modules."""


class DatasetNotFoundError(HighlightModulesError, FileNotFoundError):
    pass


class DatasetParseError(HighlightModulesError, ValueError):
    pass


class RangeOutOfBoundsError(HighlightModulesError, IndexError):
    pass


class UnknownColorError(HighlightModulesError, LookupError):
    pass


class IssueKind(str, Enum):
    SOURCE_FILE_MISSING = "source_file_missing"
    RANGE_OUT_OF_BOUNDS = "range_out_of_bounds"
    WRITE_FAILURE = "write_failure"


@dataclass(frozen=True)
class ExportIssue:
    """A recoverable problem met while exporting one file or range."""

    kind: IssueKind
    color_value: str
    file_path: str
    message: str
