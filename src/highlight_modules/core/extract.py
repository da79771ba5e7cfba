from collections.abc import Sequence
from dataclasses import dataclass

from highlight_modules.core.errors import RangeOutOfBoundsError
from highlight_modules.models import RangeSpan


@dataclass(frozen=True)
class Extraction:
    text: str
    pieces: list[str]


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def extract_range(source_lines: Sequence[str], rng: RangeSpan) -> Extraction:
    """Cut the highlighted text of *rng* out of *source_lines*.

    Partial first/last lines are trimmed on the newline-joined slice: the
    first ``start_character`` characters are dropped from the front and
    ``len(last_line) - end_character`` characters from the back. Both bounds
    are clamped to the text and swapped when they cross.
    """
    if rng.end_line >= len(source_lines):
        raise RangeOutOfBoundsError(
            f"Range ends on line {rng.end_line} but the source has {len(source_lines)} line(s)"
        )

    sliced = source_lines[rng.start_line : rng.end_line + 1]
    text = "\n".join(sliced)
    last_length = len(sliced[-1])

    if rng.start_character > 0 or rng.end_character < last_length:
        start = _clamp(rng.start_character, len(text))
        end = _clamp(len(text) - (last_length - rng.end_character), len(text))
        text = text[min(start, end) : max(start, end)]

    return Extraction(text=text, pieces=text.split("\n"))


def place_pieces(extraction: Extraction, rng: RangeSpan, line_count: int) -> list[tuple[int, str]]:
    """Map extracted pieces to ``(line_index, content)`` in the reconstructed file.

    The first piece is padded with ``start_character`` spaces; lines past
    *line_count* are dropped.
    """
    placements: list[tuple[int, str]] = []
    for offset, piece in enumerate(extraction.pieces):
        line_index = rng.start_line + offset
        if line_index >= line_count:
            break
        prefix = " " * rng.start_character if offset == 0 else ""
        placements.append((line_index, prefix + piece))
    return placements
