"""Local semantic image search built on image descriptions and text embeddings."""

__version__ = "0.1.0"

__all__ = [
    "backend",
    "description",
    "embedding",
    "image",
    "index",
    "logger",
    "search",
    "service",
    "sysmon",
]