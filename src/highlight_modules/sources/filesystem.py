from pathlib import Path


class FileSystemSourceTree:
    """Read annotated source files relative to a project root.

    Text is split on ``"\\n"`` only, so carriage returns stay part of each line.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def describe(self, relative_path: str) -> str:
        return str(self.root / relative_path)

    def read_lines(self, relative_path: str) -> list[str] | None:
        path = self.root / relative_path
        if not path.is_file():
            return None
        return path.read_bytes().decode("utf-8", errors="replace").split("\n")
