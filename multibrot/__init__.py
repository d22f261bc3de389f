"""
Multibrot Set Viewer Package

An interactive explorer for the generalized Mandelbrot set
z -> z^power + c (default power 5) with a configurable initial value,
using Pygame for display and Numba for JIT-compiled computation.

Quick Start:
    from multibrot import FractalParameters, render
    raster = render(400, 400, FractalParameters(power=5))

Or from command line:
    python -m multibrot

Package Structure:
    - params.py: FractalParameters snapshot and error types
    - colormaps.py: 256-entry palettes (sine, grayscale)
    - compute.py: JIT-compiled viewport mapping, escape-time iteration, coloring
    - renderer.py: Async rendering with stale-request cancellation
    - view.py: Pan/zoom/settings state behind the UI
    - settings.py: settings.json loading and verbose logging
    - export.py: Saving rasters as image files
    - menu.py: Settings side panel
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom in/out
    - Drag: Pan around
    - R: Reset to default view
    - C: Cycle palette
    - Ctrl+S: Save image
    - ESC: Quit
"""

from .params import (
    FractalParameters,
    PixelResult,
    FractalError,
    InvalidDimensionError,
    ParameterRangeError,
)
from .colormaps import PALETTES, get_palette, get_default_palette, list_palette_names
from .compute import pixel_to_plane, evaluate, colorize, render, view_bounds
from .renderer import AsyncRenderer
from .view import ViewState

__version__ = "1.0.0"
__all__ = [
    "FractalParameters",
    "PixelResult",
    "FractalError",
    "InvalidDimensionError",
    "ParameterRangeError",
    "PALETTES",
    "get_palette",
    "get_default_palette",
    "list_palette_names",
    "pixel_to_plane",
    "evaluate",
    "colorize",
    "render",
    "view_bounds",
    "AsyncRenderer",
    "ViewState",
]
