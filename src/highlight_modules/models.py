from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RangeSpan(_CamelModel):
    start_line: int = Field(ge=0)
    end_line: int = Field(ge=0)
    start_character: int = Field(ge=0)
    end_character: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_line_order(self) -> "RangeSpan":
        if self.end_line < self.start_line:
            raise ValueError(f"endLine ({self.end_line}) must not precede startLine ({self.start_line})")
        return self


class HighlightRange(RangeSpan):
    name: str

    def span(self) -> RangeSpan:
        return RangeSpan(
            start_line=self.start_line,
            end_line=self.end_line,
            start_character=self.start_character,
            end_character=self.end_character,
        )


FileAnnotations = dict[str, list[HighlightRange]]


class AnnotationDataset(_CamelModel):
    files: dict[str, FileAnnotations] = Field(default_factory=dict)

    @field_validator("files", mode="before")
    @classmethod
    def _null_files_as_empty(cls, value: object) -> object:
        return {} if value is None else value

    def ranges_for(self, color_value: str) -> list[tuple[str, list[HighlightRange]]]:
        """Return ``(relative_path, ranges)`` pairs for files annotating *color_value*, in dataset order."""
        return [(path, colors[color_value]) for path, colors in self.files.items() if colors.get(color_value)]

    def name_conflicts(self) -> list[tuple[str, str, str, str]]:
        """Return ``(path, color_value, expected_name, found_name)`` for ranges disagreeing on a layer name.

        The first name seen for a color is authoritative.
        """
        first_names: dict[str, str] = {}
        conflicts: list[tuple[str, str, str, str]] = []
        for path, colors in self.files.items():
            for color_value, ranges in colors.items():
                for rng in ranges:
                    expected = first_names.setdefault(color_value, rng.name)
                    if rng.name != expected:
                        conflicts.append((path, color_value, expected, rng.name))
        return conflicts


class Color(_CamelModel):
    name: str
    value: str


class ExportRecord(_CamelModel):
    file_path: str
    layer_name: str
    color_value: str
    range: RangeSpan


class ExportManifest(_CamelModel):
    modules: list[ExportRecord] = Field(default_factory=list)
    colors: list[Color] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
