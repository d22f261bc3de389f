"""
Palette definitions for multibrot rendering.

Each palette function returns a numpy array of shape (256, 3) with
RGB values (uint8). The renderer indexes it with the smoothed color
index, so the table is treated as cyclic.

To add a new palette:
1. Define a create_palette_xxx() function that returns the color array
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import math
from functools import lru_cache

import numpy as np


NUM_COLORS = 256  # Fixed table size; color indices wrap modulo this


def _freeze(colors):
    colors.flags.writeable = False
    return colors


def create_palette_sine(frequency=0.3, phases=(0.0, 2.0, 4.0)):
    """
    Sine palette: three phase-shifted sinusoids, one per channel.

    channel(i) = round(sin(frequency * i + phase) * 127 + 128), clamped
    to [0, 255]. With the defaults the red, green and blue waves are
    offset by 2 radians, which cycles through saturated hues roughly
    every 21 entries.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        for ch, phase in enumerate(phases):
            v = round(math.sin(frequency * i + phase) * 127 + 128)
            colors[i, ch] = min(255, max(0, v))
    return _freeze(colors)


def create_palette_grayscale():
    """
    Grayscale palette: black -> white.

    Good for seeing raw iteration structure.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        colors[i] = i
    return _freeze(colors)


# Registry of all available palettes.
# Keys are display names, values are factory functions.
PALETTES = {
    'Sine': create_palette_sine,
    'Grayscale': create_palette_grayscale,
}


@lru_cache(maxsize=None)
def get_palette(name):
    """
    Get a palette by name.

    Palettes are built once and shared read-only between renders.

    Raises:
        KeyError if name not found
    """
    return PALETTES[name]()


def get_default_palette():
    """Get the default palette (Sine)."""
    return get_palette('Sine')


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())
