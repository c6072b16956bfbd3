"""Orchestration of folder indexing and semantic search."""

from __future__ import annotations

import os
import stat
from typing import Iterator, Union

from . import search as _search
from .backend import Loader, ModelPath
from .description import Describer
from .embedding import Embedder
from .index import Entry, Index
from .logger import Logger

PathLike = Union[str, "os.PathLike[str]"]

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"})


class Service:
    """Indexes image folders and searches them by text."""

    def __init__(
        self,
        log: Logger,
        vision_paths: ModelPath,
        embed_paths: ModelPath,
        index_path: PathLike,
        loader: Loader,
    ) -> None:
        self._log = log
        self._describer = Describer(log, vision_paths, loader)
        self._embedder = Embedder(log, embed_paths, loader)
        self.index = Index(index_path)

    def __enter__(self) -> "Service":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def index_folder(self, folder_path: PathLike) -> None:
        """Describe, embed and index every image under ``folder_path``."""
        images = find_images(folder_path)
        if not images:
            self._log("no images found", "folder", os.fspath(folder_path))
            return

        self._log("found images", "count", len(images))

        descriptions: dict[str, str] = {}
        self._describer.load()
        try:
            for img_path in images:
                try:
                    descriptions[img_path] = self._describer.describe(img_path)
                except Exception as exc:
                    self._log("describe error", "path", img_path, "error", exc)
        finally:
            self._describer.unload()

        self._embedder.load()
        try:
            for img_path, desc in descriptions.items():
                self._log("embedding description", "path", img_path)
                try:
                    vec = self._embedder.embed(desc)
                except Exception as exc:
                    self._log("embed error", "path", img_path, "error", exc)
                    continue
                self.index.add(Entry(img_path, desc, vec))
        finally:
            self._embedder.unload()

        self.index.save()
        self._log("indexing complete", "indexed", len(self.index))

    def search(self, query: str, k: int) -> list[_search.Result]:
        """Return the ``k`` indexed images most similar to ``query``."""
        if not self._embedder.is_loaded():
            self._embedder.load()
        query_vec = self._embedder.embed(query)
        entries = (
            _search.Entry(e.path, e.description, e.embedding) for e in self.index.all()
        )
        return _search.find_top_k(query_vec, entries, k)

    def close(self) -> None:
        """Release both models."""
        self._describer.unload()
        self._embedder.unload()


def find_images(folder_path: PathLike) -> list[str]:
    """Return image files under ``folder_path`` in lexical walk order."""
    return list(_walk(os.fspath(folder_path)))


def _walk(path: str) -> Iterator[str]:
    info = os.lstat(path)
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))
    elif _extension(path) in IMAGE_EXTENSIONS:
        yield path


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:].lower() if dot >= 0 else ""