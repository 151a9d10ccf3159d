from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from img_header.errors import ImgHeaderError, PerFileTransformError, ResourceLoadError

LOGGER = logging.getLogger(__name__)

RASTER_MODE = "RGBA"


def _decode(path: Path, error_cls: type[ImgHeaderError]) -> Image.Image:
    try:
        with Image.open(path) as im:
            return im.convert(RASTER_MODE)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise error_cls(f"cannot read image {path}: {e}") from e


def load_image(path: Path) -> Image.Image:
    return _decode(path, PerFileTransformError)


def load_header(path: Path) -> Image.Image:
    return _decode(path, ResourceLoadError)


def _as_raster(image: Image.Image) -> Image.Image:
    return image if image.mode == RASTER_MODE else image.convert(RASTER_MODE)


def compose(header: Image.Image, target: Image.Image) -> Image.Image:
    """
    Returns a new RGBA image with `header` on top of `target`.

    The canvas is `target.width` wide and `header.height + target.height` tall. Both images
    are pasted without a mask, so their pixels (alpha included) overwrite the canvas as-is.
    A header wider than the target is clipped at the right edge; a narrower one leaves the
    rest of its rows fully transparent.
    """
    canvas = Image.new(
        RASTER_MODE, (target.width, header.height + target.height), (0, 0, 0, 0)
    )
    canvas.paste(_as_raster(header), (0, 0))
    canvas.paste(_as_raster(target), (0, header.height))
    return canvas


def output_format(path: Path) -> str:
    name = path.name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def _pillow_format(format_tag: str) -> str | None:
    if not format_tag:
        return None
    # Pillow registers lowercase extensions only, so "PNG" is not recognised.
    pil_format = Image.registered_extensions().get(f".{format_tag}")
    if pil_format is None or pil_format not in Image.SAVE:
        return None
    return pil_format


def encode(image: Image.Image, format_tag: str, destination: Path) -> bool:
    """
    Writes `image` to `destination` as `format_tag`.

    Returns False, without touching the filesystem, when the tag is empty, Pillow has no
    writer for it, or the writer rejects the RGBA raster (JPEG, for instance). The image is
    encoded in memory first, so only errors writing `destination` itself propagate.
    """
    pil_format = _pillow_format(format_tag)
    if pil_format is None:
        return False

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=pil_format)
    except (OSError, ValueError) as e:
        LOGGER.debug("%s writer rejected %s image: %s", pil_format, image.mode, e)
        return False

    destination.write_bytes(buffer.getvalue())
    return True


def transform_file(*, header: Image.Image, source: Path, destination: Path) -> bool:
    target = load_image(source)
    try:
        composite = compose(header, target)
    finally:
        target.close()
    try:
        return encode(composite, output_format(destination), destination)
    finally:
        composite.close()
