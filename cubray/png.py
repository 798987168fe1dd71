"""PNG texture loading."""

from __future__ import annotations

import os
from typing import Union

from PIL import Image as PILImage

from .errors import MlxErrno, MlxError
from .image import Texture


def _decode(path: Union[str, os.PathLike]) -> Texture:
    with PILImage.open(path) as source:
        if source.format != "PNG":
            raise MlxError(MlxErrno.INVPNG)
        rgba = source.convert("RGBA")
    width, height = rgba.size
    return Texture(width, height, rgba.tobytes())


def load_png(path: Union[str, os.PathLike]) -> Texture:
    """Decode a PNG file into an RGBA texture."""
    try:
        return _decode(path)
    except MlxError:
        raise
    except (OSError, ValueError, SyntaxError, PILImage.DecompressionBombError) as exc:
        raise MlxError(MlxErrno.INVPNG) from exc