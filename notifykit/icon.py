"""Loading, scaling and conversion of notification icons."""

from __future__ import annotations

import hashlib
import logging
import os
import sys
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from PIL import Image

__all__ = [
    "IconError",
    "to_cairo_argb",
    "scale_icon",
    "load_from_file",
    "load_from_icon",
    "icon_for_name",
    "icon_for_data",
]

_log = logging.getLogger(__name__)

_SUFFIXES = (".svg", ".png", ".xpm")

if sys.byteorder == "little":
    _CAIRO_B, _CAIRO_G, _CAIRO_R, _CAIRO_A = 0, 1, 2, 3
else:
    _CAIRO_A, _CAIRO_R, _CAIRO_G, _CAIRO_B = 0, 1, 2, 3


class IconError(ValueError):
    """Raw icon data could not be turned into an image."""


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA", "La", "RGBa") or "transparency" in image.info


def to_cairo_argb(image: Image.Image) -> bytes:
    """Return the pixels as native-endian, premultiplied cairo ARGB32 data.

    The stride of the result is ``4 * image.width``.
    """
    alpha = _has_alpha(image)
    source = image.convert("RGBA" if alpha else "RGB")
    channels = 4 if alpha else 3
    raw = source.tobytes()
    out = bytearray(4 * source.width * source.height)
    for index, offset in enumerate(range(0, len(raw), channels)):
        red, green, blue = raw[offset], raw[offset + 1], raw[offset + 2]
        base = 4 * index
        if alpha:
            a = raw[offset + 3]
            factor = a / 255.0
            out[base + _CAIRO_R] = int(red * factor + 0.5)
            out[base + _CAIRO_G] = int(green * factor + 0.5)
            out[base + _CAIRO_B] = int(blue * factor + 0.5)
            out[base + _CAIRO_A] = a
        else:
            out[base + _CAIRO_R] = red
            out[base + _CAIRO_G] = green
            out[base + _CAIRO_B] = blue
            out[base + _CAIRO_A] = 0xFF
    return bytes(out)


def scale_icon(image: Image.Image | None, max_icon_size: int) -> Image.Image | None:
    """Shrink ``image`` so its larger side is at most ``max_icon_size``.

    A ``max_icon_size`` of 0 disables scaling. The aspect ratio is kept.
    """
    if image is None:
        return None
    width, height = image.size
    larger = max(width, height)
    if not max_icon_size or larger <= max_icon_size:
        return image
    scaled_w = scaled_h = max_icon_size
    if width >= height:
        scaled_h = (max_icon_size * height) // width
    else:
        scaled_w = (max_icon_size * width) // height
    return image.resize((scaled_w, scaled_h), Image.Resampling.BILINEAR)


def load_from_file(filename: str | os.PathLike[str]) -> Image.Image | None:
    """Load an image from a file path; ``~`` is expanded. Returns None on failure."""
    path = os.path.expanduser(os.fspath(filename))
    try:
        with Image.open(path) as opened:
            opened.load()
            return opened.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        _log.warning("%s", exc)
        return None


def _path_from_uri(uri: str) -> str | None:
    parsed = urlparse(uri)
    if parsed.scheme != "file" or parsed.netloc not in ("", "localhost"):
        return None
    if not parsed.path:
        return None
    return url2pathname(unquote(parsed.path))


def load_from_icon(iconname: str | None, icon_path: str | None) -> Image.Image | None:
    """Load an icon given as ``file://`` URI, file path or name.

    Names are searched in each ``:``-separated folder of ``icon_path``
    with the suffixes ``.svg``, ``.png`` and ``.xpm``, in that order.
    """
    if not iconname:
        return None

    if iconname.startswith("file://"):
        local = _path_from_uri(iconname)
        if local:
            iconname = local

    if iconname[0] in ("/", "~"):
        return load_from_file(iconname)

    for folder in (icon_path or "").split(":"):
        for suffix in _SUFFIXES:
            candidate = f"{folder}/{iconname}{suffix}"
            if os.access(candidate, os.R_OK):
                image = load_from_file(candidate)
                if image is not None:
                    return image
    _log.warning("No icon found in path: '%s'", iconname)
    return None


def icon_for_name(
    name: str, icon_path: str | None
) -> tuple[Image.Image, str] | None:
    """Load an icon by name; returns the image and its identifier, or None."""
    image = load_from_icon(name, icon_path)
    if image is None:
        return None
    return image, name


def icon_for_data(
    width: int,
    height: int,
    rowstride: int,
    has_alpha: bool,
    bits_per_sample: int,
    n_channels: int,
    data: bytes,
) -> tuple[Image.Image, str]:
    """Build an image from raw notification image data.

    Returns the image and an MD5 identifier of its pixel data, with the
    row padding left out. Raises IconError for malformed data.
    """
    pixelstride = (n_channels * bits_per_sample + 7) // 8
    row_len = width * pixelstride
    expected = (height - 1) * rowstride + row_len
    data = bytes(data)
    if len(data) != expected:
        raise IconError(
            f"Expected image data to be of length {expected} "
            f"but got a length of {len(data)}"
        )
    if (
        width <= 0
        or height <= 0
        or bits_per_sample != 8
        or n_channels != (4 if has_alpha else 3)
        or rowstride < row_len
    ):
        raise IconError("Cannot serialise raw icon data into an image.")

    compact = b"".join(
        data[row * rowstride: row * rowstride + row_len] for row in range(height)
    )
    mode = "RGBA" if has_alpha else "RGB"
    image = Image.frombytes(mode, (width, height), compact)
    return image, hashlib.md5(compact).hexdigest()