"""Image loading and resizing for vision inference."""

from __future__ import annotations

import io
import os
from typing import Union

from PIL import Image, UnidentifiedImageError

DEFAULT_MAX_SIDE = 384
DEFAULT_QUALITY = 90

PathLike = Union[str, "os.PathLike[str]"]


def resize(src_path: PathLike, max_side: int = DEFAULT_MAX_SIDE) -> bytes:
    """Load an image, shrink it to fit ``max_side`` and return JPEG bytes.

    Images that already fit are re-encoded to JPEG unchanged in size.
    """
    img = _load(src_path)
    width, height = img.size
    if width > max_side or height > max_side:
        img = img.resize(_scale_dimensions(width, height, max_side), Image.Resampling.BICUBIC)

    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=DEFAULT_QUALITY)
    return buf.getvalue()


def _load(path: PathLike) -> Image.Image:
    with open(path, "rb") as fh:
        try:
            with Image.open(fh) as im:
                im.load()
                return _flatten(im)
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise ValueError(f"decode: {exc}") from exc


def _flatten(im: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto black."""
    if "A" in im.mode or "transparency" in im.info:
        rgba = im.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
        return Image.alpha_composite(background, rgba).convert("RGB")
    return im.convert("RGB")


def _scale_dimensions(width: int, height: int, max_side: int) -> tuple[int, int]:
    if width >= height:
        return max_side, int(height * max_side / width)
    return int(width * max_side / height), max_side