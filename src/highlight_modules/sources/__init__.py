from highlight_modules.sources.filesystem import FileSystemSourceTree
from highlight_modules.sources.memory import InMemorySourceTree

__all__ = [
    "FileSystemSourceTree",
    "InMemorySourceTree",
]
