"""Model file locations and the interface of a loaded inference model."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Union

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class ModelPath:
    """Files that make up one model on disk."""

    model_files: tuple[str, ...] = ()
    proj_file: str = ""

    def __post_init__(self) -> None:
        files: Iterable[PathLike] = self.model_files
        object.__setattr__(self, "model_files", tuple(os.fspath(f) for f in files))
        object.__setattr__(self, "proj_file", os.fspath(self.proj_file))


@dataclass(frozen=True)
class ModelPaths:
    """Locations of the vision model and the embedding model."""

    vision: ModelPath
    embed: ModelPath


class ModelBackend(ABC):
    """A loaded inference model.

    ``chat`` answers with a mapping shaped like
    ``{"choices": [{"message": {"content": str}}]}`` and ``embeddings``
    with ``{"data": [{"embedding": [float, ...]}]}``.
    """

    @abstractmethod
    def chat(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        """Run a chat completion request."""

    @abstractmethod
    def embeddings(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        """Compute embeddings for the request input."""

    @abstractmethod
    def unload(self) -> None:
        """Release the model's resources."""

    def __enter__(self) -> "ModelBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unload()


Loader = Callable[..., ModelBackend]
"""Creates a backend from a model configuration given as keyword arguments."""