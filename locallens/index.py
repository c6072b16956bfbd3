"""Persistent store of image descriptions and their embeddings."""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from typing import Any, Union

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Entry:
    """An indexed image with its description and embedding."""

    path: str
    description: str
    embedding: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "embedding", tuple(self.embedding))


class Index:
    """Thread-safe map from image path to entry, saved as JSON."""

    def __init__(self, index_path: PathLike) -> None:
        self._index_path = os.fspath(index_path)
        self._lock = threading.RLock()
        self._entries: dict[str, Entry] = {}

    @property
    def index_path(self) -> str:
        return self._index_path

    def add(self, entry: Entry) -> None:
        """Add an entry, replacing any entry with the same path."""
        with self._lock:
            self._entries[entry.path] = entry

    def get(self, path: str) -> Entry | None:
        """Return the entry for ``path``, or None."""
        with self._lock:
            return self._entries.get(path)

    def remove(self, path: str) -> None:
        """Delete the entry for ``path`` if present."""
        with self._lock:
            self._entries.pop(path, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def all(self) -> list[Entry]:
        """Return a snapshot of every entry."""
        with self._lock:
            return list(self._entries.values())

    def save(self) -> None:
        """Write the index to its file."""
        with self._lock:
            payload = {
                path: {"description": e.description, "embedding": list(e.embedding)}
                for path, e in self._entries.items()
            }
            with open(self._index_path, "w", encoding="utf-8") as fh:
                json.dump(payload, fh)

    def load(self) -> None:
        """Read the index from its file; a missing file leaves it unchanged."""
        with self._lock:
            if not os.path.exists(self._index_path):
                return
            with open(self._index_path, encoding="utf-8") as fh:
                raw = json.load(fh)
            self._entries = _decode(raw)


def _decode(raw: Any) -> dict[str, Entry]:
    if not isinstance(raw, dict):
        raise ValueError("decode: index file must hold an object of entries")
    entries: dict[str, Entry] = {}
    for path, item in raw.items():
        try:
            description = item["description"]
            embedding = [float(v) for v in item["embedding"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"decode: malformed entry for {path!r}: {exc}") from exc
        if not isinstance(description, str):
            raise ValueError(f"decode: description of {path!r} is not text")
        entries[path] = Entry(path, description, embedding)
    return entries