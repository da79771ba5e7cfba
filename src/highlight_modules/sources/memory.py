from collections.abc import Mapping


class InMemorySourceTree:
    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.reads: list[str] = []

    def describe(self, relative_path: str) -> str:
        return f"memory://{relative_path}"

    def read_lines(self, relative_path: str) -> list[str] | None:
        self.reads.append(relative_path)
        text = self.files.get(relative_path)
        if text is None:
            return None
        return text.split("\n")
