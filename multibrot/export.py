"""
Image export for rendered rasters.

Rasters are (height, width, 3) uint8 arrays with row 0 at the top;
pygame surfaces are indexed (x, y), hence the swapaxes below.
"""

import os
from datetime import datetime

import numpy as np
import pygame

from .params import FractalError


def raster_to_surface(raster):
    """Convert a raster to a pygame Surface."""
    raster = np.asarray(raster)
    if raster.ndim != 3 or raster.shape[2] != 3 or raster.dtype != np.uint8:
        raise FractalError(
            f"raster must be a (height, width, 3) uint8 array, "
            f"got shape {raster.shape} dtype {raster.dtype}"
        )
    return pygame.surfarray.make_surface(raster.swapaxes(0, 1))


def default_export_path(directory=None, ext='jpg'):
    """
    Build a timestamped export filename.

    Uses ~/Desktop when it exists, otherwise the current directory.
    """
    if directory is None:
        desktop_path = os.path.expanduser("~/Desktop")
        directory = desktop_path if os.path.isdir(desktop_path) else os.getcwd()
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(directory, f"multibrot_{timestamp}.{ext}")


def save_image(raster, path):
    """
    Encode a raster to an image file.

    The format follows the file extension (JPEG, PNG, BMP, ...).

    Returns:
        The path written.
    """
    surface = raster_to_surface(raster)
    pygame.image.save(surface, path)
    return path
