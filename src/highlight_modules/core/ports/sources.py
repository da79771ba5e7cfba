from typing import Protocol


class SourceTree(Protocol):
    def read_lines(self, relative_path: str) -> list[str] | None: ...

    def describe(self, relative_path: str) -> str: ...
