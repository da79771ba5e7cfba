"""Unit tests for the color catalog and layer selection."""

import pytest

from highlight_modules.core.catalog import build_catalog, count_usage, select_colors
from highlight_modules.core.errors import UnknownColorError
from highlight_modules.models import AnnotationDataset, Color


def _range(name: str) -> dict[str, object]:
    return {"name": name, "startLine": 0, "endLine": 0, "startCharacter": 0, "endCharacter": 1}


class TestBuildCatalog:
    def test_first_seen_order_across_files(self, sample_dataset: AnnotationDataset) -> None:
        catalog = build_catalog(sample_dataset)
        assert catalog == [Color(name="Red", value="#ff0000"), Color(name="Blue layer", value="#0000ff")]

    def test_deduplicates_by_value_keeping_first_name(self) -> None:
        dataset = AnnotationDataset.model_validate(
            {
                "files": {
                    "a.py": {"#111": [_range("One")]},
                    "b.py": {"#111": [_range("Renamed")], "#222": [_range("Two")]},
                }
            }
        )
        assert build_catalog(dataset) == [Color(name="One", value="#111"), Color(name="Two", value="#222")]

    def test_catalog_values_match_dataset_colors(self, sample_dataset: AnnotationDataset) -> None:
        values = {color.value for color in build_catalog(sample_dataset)}
        assert values == {value for colors in sample_dataset.files.values() for value in colors}

    def test_empty_dataset_gives_empty_catalog(self) -> None:
        assert build_catalog(AnnotationDataset()) == []

    def test_color_without_ranges_uses_value_as_name(self) -> None:
        dataset = AnnotationDataset.model_validate({"files": {"a.py": {"#333": []}}})
        assert build_catalog(dataset) == [Color(name="#333", value="#333")]

    def test_named_range_in_later_file_replaces_fallback_name(self) -> None:
        dataset = AnnotationDataset.model_validate(
            {"files": {"a.py": {"#333": []}, "b.py": {"#333": [_range("Grey")]}}}
        )
        assert build_catalog(dataset) == [Color(name="Grey", value="#333")]


class TestCountUsage:
    def test_counts_files_and_ranges(self, sample_dataset: AnnotationDataset) -> None:
        assert count_usage(sample_dataset, "#ff0000") == (2, 2)
        assert count_usage(sample_dataset, "#0000ff") == (1, 1)
        assert count_usage(sample_dataset, "#abcdef") == (0, 0)


class TestSelectColors:
    @pytest.fixture
    def catalog(self) -> list[Color]:
        return [Color(name="Red", value="#FF0000"), Color(name="Blue layer", value="#0000ff")]

    def test_empty_selection_returns_all(self, catalog: list[Color]) -> None:
        assert select_colors(catalog, []) == catalog

    def test_selects_by_value_case_insensitively(self, catalog: list[Color]) -> None:
        assert select_colors(catalog, ["#ff0000"]) == [catalog[0]]

    def test_selects_by_name_in_given_order(self, catalog: list[Color]) -> None:
        assert select_colors(catalog, ["Blue layer", "Red"]) == [catalog[1], catalog[0]]

    def test_duplicates_collapse(self, catalog: list[Color]) -> None:
        assert select_colors(catalog, ["Red", "#ff0000"]) == [catalog[0]]

    def test_unknown_token_raises(self, catalog: list[Color]) -> None:
        with pytest.raises(UnknownColorError, match="Unknown layer 'Green'"):
            select_colors(catalog, ["Green"])
