"""
Multibrot computation functions using Numba JIT compilation.

This module contains the performance-critical part of the viewer:
- Viewport mapping from pixel coordinates to the complex plane
- Escape-time iteration of z -> z^power + c, starting from z0
- Smooth coloring of escaped points through a 256-entry palette

The per-pixel kernels are compiled in nopython mode without fastmath so
that a given parameter snapshot always produces the same raster. The
full-raster kernel spreads rows over threads with prange; every row is
written by exactly one thread.

Bounds follow the viewer's convention: for half extent a, zoom scale s
and pan offset (ox, oy) the view spans [-a/s + ox, a/s + ox] on both
axes, and pixel (px, py) maps to (x_min + px*dx, y_min + py*dy) with
dx = (x_max - x_min) / width. Row 0 is the top of the raster.
"""

import math

import numpy as np
from numba import jit, prange

from .colormaps import NUM_COLORS, get_default_palette
from .params import FractalError, FractalParameters, PixelResult, check_dimensions


@jit(nopython=True, cache=True)
def complex_pow(zr, zi, n):
    """
    Compute z^n in polar form: |z|^n * (cos(n*arg z) + i*sin(n*arg z)).

    arg z is atan2(zi, zr), so the principal branch is used. z = 0 maps
    to 0 for every n >= 1.
    """
    r = math.hypot(zr, zi)
    if r == 0.0:
        return 0.0, 0.0
    theta = math.atan2(zi, zr)
    rn = math.pow(r, float(n))
    return rn * math.cos(n * theta), rn * math.sin(n * theta)


@jit(nopython=True, cache=True)
def escape_time(cr, ci, z0r, z0i, power, max_iter, escape_radius):
    """
    Iterate z -> z^power + c from z0 until |z| >= escape_radius.

    Returns:
        (iteration_count, |z|) for the last z computed. The count equals
        max_iter when the point never escaped.
    """
    zr, zi = z0r, z0i
    iteration = 0
    while iteration < max_iter and math.hypot(zr, zi) < escape_radius:
        pr, pi = complex_pow(zr, zi, power)
        zr = pr + cr
        zi = pi + ci
        iteration += 1
    return iteration, math.hypot(zr, zi)


@jit(nopython=True, cache=True)
def smooth_color_index(iteration, magnitude, max_iter, log_power):
    """
    Map an escaped point to a palette index.

    smoothed = n + 1 - log(log|z|) / log(power), index =
    int(sqrt(smoothed / max_iter) * 255) mod 256.

    The double log is only defined for |z| > 1. For |z| <= 1 (possible
    with escape radii <= 1 or a z0 already outside the radius) and for
    non-finite magnitudes the plain count n is used instead, and
    smoothed is clamped to a minimum of 0.
    """
    smoothed = float(iteration)
    if magnitude > 1.0 and math.isfinite(magnitude):
        smoothed = iteration + 1.0 - math.log(math.log(magnitude)) / log_power
    if not smoothed > 0.0:
        smoothed = 0.0
    return int(math.sqrt(smoothed / max_iter) * 255.0) % NUM_COLORS


@jit(nopython=True, parallel=True, cache=True)
def render_rows(x_min, y_min, x_step, y_step, z0r, z0i, power, max_iter,
                escape_radius, palette, out, start_row, row_count):
    """
    Render a horizontal band of rows into an existing RGB array.

    Used both for full renders (one band covering the whole raster) and
    for cancellable renders that proceed band by band.

    Args:
        x_min, y_min: Plane coordinate of pixel (0, 0)
        x_step, y_step: Plane distance between adjacent pixels
        z0r, z0i: Initial value of z
        power: Integer exponent of the recurrence
        max_iter: Iteration budget; points reaching it are black
        escape_radius: Escape threshold on |z|
        palette: (256, 3) uint8 color table
        out: (height, width, 3) uint8 output array (modified in place)
        start_row, row_count: Band to compute
    """
    width = out.shape[1]
    log_power = math.log(power)

    for r in prange(row_count):
        py = start_row + r
        y = y_min + py * y_step
        for px in range(width):
            x = x_min + px * x_step
            iteration, magnitude = escape_time(x, y, z0r, z0i, power, max_iter, escape_radius)
            if iteration == max_iter:
                # Points in the set are black
                out[py, px, 0] = 0
                out[py, px, 1] = 0
                out[py, px, 2] = 0
            else:
                idx = smooth_color_index(iteration, magnitude, max_iter, log_power)
                out[py, px, 0] = palette[idx, 0]
                out[py, px, 1] = palette[idx, 1]
                out[py, px, 2] = palette[idx, 2]


def view_bounds(params):
    """Return (x_min, x_max, y_min, y_max) of the viewport for params."""
    a = params.view_half_extent
    s = params.scale
    ox, oy = params.pan_offset
    return (-a / s + ox, a / s + ox, -a / s + oy, a / s + oy)


def sampling_grid(width, height, params):
    """
    Return (x_min, y_min, x_step, y_step) for a width x height raster.

    Raises:
        InvalidDimensionError if width or height is not a positive int
    """
    check_dimensions(width, height)
    x_min, x_max, y_min, y_max = view_bounds(params)
    return x_min, y_min, (x_max - x_min) / width, (y_max - y_min) / height


def pixel_to_plane(px, py, width, height, params):
    """Map pixel (px, py) of a width x height raster to a plane point."""
    x_min, y_min, x_step, y_step = sampling_grid(width, height, params)
    return complex(x_min + px * x_step, y_min + py * y_step)


def evaluate(c, params):
    """Run the escape-time iteration for plane point c."""
    c = complex(c)
    z0 = params.initial_value
    iteration, magnitude = escape_time(
        c.real, c.imag, z0.real, z0.imag,
        params.power, params.max_iterations, params.escape_radius
    )
    return PixelResult(int(iteration), float(magnitude))


def colorize(result, params, palette=None):
    """Return the (r, g, b) color for a PixelResult."""
    if result.iteration_count == params.max_iterations:
        return (0, 0, 0)
    palette = as_palette(palette)
    idx = smooth_color_index(
        result.iteration_count, result.final_magnitude,
        params.max_iterations, math.log(params.power)
    )
    return tuple(int(v) for v in palette[idx])


def as_palette(palette):
    """Return palette as a validated (256, 3) uint8 array (default: Sine)."""
    if palette is None:
        return get_default_palette()
    palette = np.asarray(palette)
    if palette.shape != (NUM_COLORS, 3) or palette.dtype != np.uint8:
        raise FractalError(
            f"palette must be a ({NUM_COLORS}, 3) uint8 array, "
            f"got shape {palette.shape} dtype {palette.dtype}"
        )
    return palette


def new_raster(width, height):
    """Allocate a black raster of the given size."""
    check_dimensions(width, height)
    return np.zeros((height, width, 3), dtype=np.uint8)


def render_band(params, palette, out, start_row, row_count):
    """Render rows [start_row, start_row + row_count) of out."""
    height, width = out.shape[:2]
    x_min, y_min, x_step, y_step = sampling_grid(width, height, params)
    z0 = params.initial_value
    render_rows(
        x_min, y_min, x_step, y_step, z0.real, z0.imag,
        params.power, params.max_iterations, params.escape_radius,
        palette, out, start_row, row_count
    )


def render(width, height, params, palette=None):
    """
    Render the full raster for a parameter snapshot.

    Args:
        width, height: Raster dimensions in pixels (must be positive)
        params: FractalParameters snapshot
        palette: (256, 3) uint8 color table (default: Sine palette)

    Returns:
        New (height, width, 3) uint8 array, row 0 at the top.
    """
    if not isinstance(params, FractalParameters):
        raise TypeError(f"params must be FractalParameters, got {type(params).__name__}")
    palette = as_palette(palette)
    out = new_raster(width, height)
    render_band(params, palette, out, 0, height)
    return out


def warmup_jit(palette=None):
    """
    Warm up JIT compilation with a tiny raster.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first interactive render.
    """
    params = FractalParameters(max_iterations=10)
    render(4, 4, params, palette)
    colorize(evaluate(10 + 10j, params), params, palette)
