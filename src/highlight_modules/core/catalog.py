from collections.abc import Iterable

from highlight_modules.core.errors import UnknownColorError
from highlight_modules.models import AnnotationDataset, Color


def build_catalog(dataset: AnnotationDataset) -> list[Color]:
    """Return the distinct colors of *dataset* in first-seen order.

    A color's display name comes from the first range that carries it. A color
    whose ranges are all empty falls back to its value until a named range
    shows up in a later file.
    """
    catalog: dict[str, Color] = {}
    for colors in dataset.files.values():
        for color_value, ranges in colors.items():
            known = catalog.get(color_value)
            if known is None:
                name = ranges[0].name if ranges else color_value
                catalog[color_value] = Color(name=name, value=color_value)
            elif known.name == color_value and ranges:
                catalog[color_value] = Color(name=ranges[0].name, value=color_value)
    return list(catalog.values())


def count_usage(dataset: AnnotationDataset, color_value: str) -> tuple[int, int]:
    """Return ``(file_count, range_count)`` for *color_value*."""
    pairs = dataset.ranges_for(color_value)
    return len(pairs), sum(len(ranges) for _, ranges in pairs)


def select_colors(catalog: list[Color], wanted: Iterable[str]) -> list[Color]:
    """Resolve user-provided color values or layer names against *catalog*.

    An empty selection means every color, in catalog order.
    """
    tokens = list(wanted)
    if not tokens:
        return list(catalog)

    by_value = {color.value.lower(): color for color in catalog}
    by_name: dict[str, Color] = {}
    for color in catalog:
        by_name.setdefault(color.name, color)

    selected: dict[str, Color] = {}
    for token in tokens:
        color = by_value.get(token.strip().lower()) or by_name.get(token.strip())
        if color is None:
            known = ", ".join(f"{c.name} ({c.value})" for c in catalog) or "none"
            raise UnknownColorError(f"Unknown layer '{token}'. Known layers: {known}")
        selected.setdefault(color.value, color)
    return list(selected.values())
