"""Image loading and scale-to-fit sizing for image cells."""

import io
from pathlib import Path
from typing import Optional, Tuple, Union

import PIL.Image
from reportlab.lib.utils import ImageReader


def open_image(source: Union[str, Path, bytes, PIL.Image.Image]) -> ImageReader:
    """Open an image from a path, raw bytes or a PIL image as a ReportLab ImageReader."""
    if isinstance(source, PIL.Image.Image):
        return ImageReader(source)
    if isinstance(source, bytes):
        return ImageReader(PIL.Image.open(io.BytesIO(source)))
    return ImageReader(PIL.Image.open(Path(source)))


def image_size(image: ImageReader) -> Tuple[float, float]:
    """Natural (width, height) of an image in points (one pixel per point)."""
    width, height = image.getSize()
    return float(width), float(height)


def compute_fit_size(
    image_width: float,
    image_height: float,
    max_width: float,
    scale: float = 1.0,
    max_height: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Scale an image and shrink it, keeping its aspect ratio, to fit a box.

    Args:
        image_width: Natural image width.
        image_height: Natural image height.
        max_width: Available width (cell width minus horizontal padding).
        scale: Scale applied before fitting.
        max_height: Optional available height.

    Returns:
        (width, height) of the fitted image.
    """
    width = image_width * scale
    height = image_height * scale

    if width > max_width > 0:
        height = height * (max_width / width)
        width = max_width

    if max_height is not None and height > max_height > 0:
        width = width * (max_height / height)
        height = max_height

    return width, height
