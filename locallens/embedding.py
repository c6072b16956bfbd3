"""Text vectorisation with an embedding model."""

from __future__ import annotations

import threading
import time
from typing import Any, Mapping

from .backend import Loader, ModelBackend, ModelPath
from .logger import Logger


class ModelNotLoadedError(RuntimeError):
    """Raised when an embedding is requested before the model is loaded."""

    def __init__(self, message: str = "embedding model not loaded") -> None:
        super().__init__(message)


class EmptyTextError(ValueError):
    """Raised when asked to embed empty text."""

    def __init__(self, message: str = "empty text") -> None:
        super().__init__(message)


_EMBED_SETTINGS: Mapping[str, Any] = {
    "context_window": 2048,
    "n_batch": 2048,
    "n_ubatch": 512,
    "cache_type_k": "q8_0",
    "cache_type_v": "q8_0",
    "flash_attention": True,
}


class Embedder:
    """Manages the embedding model that turns text into vectors."""

    def __init__(self, log: Logger, paths: ModelPath, loader: Loader) -> None:
        self._log = log
        self._paths = paths
        self._loader = loader
        self._lock = threading.Lock()
        self._backend: ModelBackend | None = None

    def load(self) -> None:
        """Load the embedding model; does nothing if it is already loaded."""
        with self._lock:
            if self._backend is not None:
                return
            start = time.perf_counter()
            self._log("loading embedding model")
            config = dict(_EMBED_SETTINGS, model_files=self._paths.model_files)
            self._backend = self._loader(**config)
            self._log(
                "embedding model loaded",
                "loading time", f"{time.perf_counter() - start:.3f}s",
                "context_window", config["context_window"],
            )

    def unload(self) -> None:
        """Release the embedding model; does nothing if it is not loaded."""
        with self._lock:
            if self._backend is None:
                return
            self._log("unloading embedding model")
            self._backend.unload()
            self._backend = None

    def is_loaded(self) -> bool:
        """Whether the embedding model is loaded."""
        with self._lock:
            return self._backend is not None

    def embed(self, text: str) -> list[float]:
        """Convert ``text`` into an embedding vector."""
        with self._lock:
            backend = self._backend
        if backend is None:
            raise ModelNotLoadedError()
        if text == "":
            raise EmptyTextError()

        start = time.perf_counter()
        response = backend.embeddings({"input": text, "truncate": True})
        items = response.get("data") or []
        if not items:
            raise RuntimeError("no embedding data returned")

        self._log("embedding finished", "embedding time", f"{time.perf_counter() - start:.3f}s")
        return [float(v) for v in items[0]["embedding"]]