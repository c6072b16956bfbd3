"""Image description with a vision model."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Mapping

from . import image
from .backend import Loader, ModelBackend, ModelPath
from .logger import Logger


class ModelNotLoadedError(RuntimeError):
    """Raised when a description is requested before the model is loaded."""

    def __init__(self, message: str = "vision model not loaded") -> None:
        super().__init__(message)


class EmptyImageError(ValueError):
    """Raised when the image data is empty."""

    def __init__(self, message: str = "empty image data") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Prompt:
    """Prompt values sent with every description request."""

    system_prompt: str
    user_prompt: str
    max_tokens: int
    temperature: float


DEFAULT_PROMPT = Prompt(
    system_prompt="You extract image keywords for semantic search.",
    user_prompt=(
        "Describe this image in detail. Include:\n"
        "objects, people, background, colors, actions, visible text and overall context. "
        "Be descriptive and precise."
    ),
    max_tokens=300,
    temperature=0.1,
)

_VISION_SETTINGS: Mapping[str, Any] = {
    "context_window": 1024,
    "n_batch": 8,
    "n_ubatch": 8,
    "cache_type_k": "q8_0",
    "cache_type_v": "q8_0",
}


class Describer:
    """Manages the vision model that turns images into text descriptions."""

    def __init__(self, log: Logger, paths: ModelPath, loader: Loader) -> None:
        self._log = log
        self._paths = paths
        self._loader = loader
        self._lock = threading.Lock()
        self._backend: ModelBackend | None = None

    def load(self) -> None:
        """Load the vision model; does nothing if it is already loaded."""
        with self._lock:
            if self._backend is not None:
                return
            start = time.perf_counter()
            self._log("loading vision model")
            config = dict(
                _VISION_SETTINGS,
                model_files=self._paths.model_files,
                proj_file=self._paths.proj_file,
            )
            self._backend = self._loader(**config)
            self._log(
                "vision model loaded",
                "loading time", f"{time.perf_counter() - start:.3f}s",
                "context_window", config["context_window"],
            )

    def unload(self) -> None:
        """Release the vision model; does nothing if it is not loaded."""
        with self._lock:
            if self._backend is None:
                return
            self._log("unloading vision model")
            self._backend.unload()
            self._backend = None

    def is_loaded(self) -> bool:
        """Whether the vision model is loaded."""
        with self._lock:
            return self._backend is not None

    def describe(self, image_path: str) -> str:
        """Return a text description of the image at ``image_path``."""
        with self._lock:
            backend = self._backend
        if backend is None:
            raise ModelNotLoadedError()

        self._log("\nresizing image", "path", image_path)
        image_data = image.resize(image_path, image.DEFAULT_MAX_SIDE)
        if not image_data:
            raise EmptyImageError()

        prompt = DEFAULT_PROMPT
        data = {
            "messages": [
                {"role": "system", "content": prompt.system_prompt},
                {"role": "user", "content": image_data},
                {"role": "user", "content": prompt.user_prompt},
            ],
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
        }

        self._log("describing image", "path", image_path)
        start = time.perf_counter()
        response = backend.chat(data)
        try:
            description = response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise RuntimeError("chat: malformed response") from exc

        self._log(
            "description finished",
            "elapsed", f"{time.perf_counter() - start:.3f}s",
            "description", description,
        )
        return description