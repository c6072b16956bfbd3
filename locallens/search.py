"""Similarity search over embedding vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Result:
    """A search hit with its similarity score."""

    path: str
    description: str
    score: float


@dataclass(frozen=True)
class Entry:
    """A searchable item with an embedding vector."""

    path: str
    description: str
    embedding: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "embedding", tuple(self.embedding))


def find_top_k(query: Sequence[float], entries: Iterable[Entry], k: int) -> list[Result]:
    """Return the ``k`` entries most similar to ``query``, best first."""
    if k <= 0:
        return []
    results = [
        Result(entry.path, entry.description, cosine_similarity(query, entry.embedding))
        for entry in entries
    ]
    results.sort(key=attrgetter("score"), reverse=True)
    return results[:k]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0 when undefined or lengths differ."""
    if len(a) != len(b) or not a:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = sum(x * x for x in a)
    norm_b = sum(y * y for y in b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))