"""Small key/value loggers used throughout the application."""

from __future__ import annotations

import os
import sys
from typing import Any, Callable, TextIO

Logger = Callable[..., None]
"""A logger takes a message followed by alternating keys and values."""

_SINK = open(os.devnull, "w", encoding="utf-8")


def _emit(stream: TextIO, msg: str, args: tuple[Any, ...]) -> None:
    pairs = zip(args[::2], args[1::2])
    fields = "".join(f" {key}[{value}]" for key, value in pairs)
    print(f"{msg}:{fields}", file=stream)


def new() -> Logger:
    """Return a logger that writes ``msg: key[value] ...`` lines to stdout."""

    def log(msg: str, *args: Any) -> None:
        _emit(sys.stdout, msg, args)

    return log


def discard() -> Logger:
    """Return a logger whose lines go to the null device."""

    def log(msg: str, *args: Any) -> None:
        _emit(_SINK, msg, args)

    return log