import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """The slice of a key-value client the local task store relies on.

    A Redis client created with ``decode_responses=True`` satisfies it, as
    does ``FileStorage``.
    """

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> object: ...

    def ping(self) -> object: ...


class FileStorage:
    """Keeps each key as a file inside a directory on the local disk."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def get(self, name: str) -> str | None:
        path = self._path(name)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, name: str, value: str) -> bool:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        return True

    def ping(self) -> bool:
        if self.directory.exists() and not self.directory.is_dir():
            raise NotADirectoryError(f"{self.directory} is not a directory")
        return True
