import math

import numpy as np
import pytest

from multibrot.colormaps import (
    NUM_COLORS,
    PALETTES,
    create_palette_sine,
    get_default_palette,
    get_palette,
    list_palette_names,
)


def test_sine_palette_shape_and_range():
    palette = create_palette_sine()
    assert palette.shape == (256, 3)
    assert palette.dtype == np.uint8
    assert palette.min() >= 0
    assert palette.max() <= 255


def test_sine_palette_matches_formula():
    palette = create_palette_sine()
    # i = 0: sin(0), sin(2), sin(4)
    assert tuple(palette[0]) == (128, 243, 32)
    for i in (1, 17, 100, 255):
        expected = [round(math.sin(0.3 * i + phase) * 127 + 128) for phase in (0, 2, 4)]
        assert list(palette[i]) == expected


def test_sine_palette_is_deterministic():
    assert np.array_equal(create_palette_sine(), create_palette_sine())


def test_default_palette_is_shared_and_read_only():
    palette = get_default_palette()
    assert palette is get_default_palette()
    assert np.array_equal(palette, create_palette_sine())
    with pytest.raises(ValueError):
        palette[0, 0] = 0


def test_grayscale_palette():
    palette = get_palette('Grayscale')
    assert palette.shape == (NUM_COLORS, 3)
    assert tuple(palette[0]) == (0, 0, 0)
    assert tuple(palette[200]) == (200, 200, 200)


def test_palette_registry():
    assert list_palette_names() == list(PALETTES.keys())
    assert 'Sine' in list_palette_names()
    with pytest.raises(KeyError):
        get_palette('NoSuchPalette')
