import dataclasses
import math

import numpy as np
import pytest

from multibrot.params import (
    FractalError,
    FractalParameters,
    InvalidDimensionError,
    ParameterRangeError,
    check_dimensions,
)


def test_defaults():
    p = FractalParameters()
    assert p.power == 5
    assert p.initial_value == 0j
    assert p.escape_radius == 2.0
    assert p.view_half_extent == 2.0
    assert p.scale == 1.0
    assert p.pan_offset == (0.0, 0.0)


def test_snapshot_is_frozen():
    p = FractalParameters()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.scale = 2.0


def test_values_are_normalized():
    p = FractalParameters(power=np.int64(3), initial_value=1, escape_radius=3,
                          pan_offset=[1, 2], max_iterations=np.int32(20))
    assert type(p.power) is int
    assert type(p.max_iterations) is int
    assert p.initial_value == complex(1, 0)
    assert p.pan_offset == (1.0, 2.0)
    assert isinstance(p.escape_radius, float)
    assert p == FractalParameters(power=3, initial_value=1 + 0j, escape_radius=3.0,
                                  pan_offset=(1.0, 2.0), max_iterations=20)


@pytest.mark.parametrize("changes", [
    {"power": 1},
    {"power": 2.5},
    {"power": True},
    {"max_iterations": 9},
    {"max_iterations": 1001},
    {"max_iterations": 50.0},
    {"escape_radius": 0.0},
    {"escape_radius": -1.0},
    {"escape_radius": math.inf},
    {"view_half_extent": 0.0},
    {"view_half_extent": math.nan},
    {"scale": 0.0},
    {"scale": -2.0},
    {"initial_value": complex(math.nan, 0)},
    {"pan_offset": (0.0,)},
    {"pan_offset": (0.0, math.inf)},
    {"scale": 5e-321},
    {"scale": 1e-308, "view_half_extent": 10.0},
    {"scale": 1e-307, "pan_offset": (1.7e308, 0.0)},
    {"scale": 1e300, "view_half_extent": 1e-30},
])
def test_out_of_range_parameters_are_rejected(changes):
    with pytest.raises(ParameterRangeError):
        FractalParameters(**changes)


def test_range_error_is_a_value_error():
    with pytest.raises(ValueError):
        FractalParameters(scale=0.0)
    assert issubclass(ParameterRangeError, FractalError)
    assert issubclass(InvalidDimensionError, FractalError)


def test_with_changes_returns_new_validated_snapshot():
    p = FractalParameters()
    q = p.with_changes(scale=2.0, pan_offset=(0.5, 0.5))
    assert p.scale == 1.0
    assert q.scale == 2.0
    assert q.pan_offset == (0.5, 0.5)
    with pytest.raises(ParameterRangeError):
        p.with_changes(scale=-1.0)


@pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-1, 4), (4.0, 4), (True, 4)])
def test_check_dimensions_rejects(width, height):
    with pytest.raises(InvalidDimensionError):
        check_dimensions(width, height)


def test_check_dimensions_accepts_numpy_ints():
    check_dimensions(np.int64(3), 1)


def test_extreme_but_representable_viewports_are_accepted():
    FractalParameters(scale=1e300, view_half_extent=0.1)
    FractalParameters(scale=1e-300, view_half_extent=10.0, pan_offset=(1e300, -1e300))
