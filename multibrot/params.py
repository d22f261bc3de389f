"""
Parameter snapshot and error types for the fractal core.

A FractalParameters instance is an immutable snapshot of everything the
core needs for one render: the fractal recurrence z -> z^power + c, the
escape bounds, and the viewport (half extent, zoom scale, pan offset).
The UI layer builds a new snapshot on every user action and hands it to
compute.render(); the core never mutates it.
"""

import math
import numbers
from dataclasses import dataclass, replace
from typing import NamedTuple


# Bounds the core re-validates (the UI clamps to narrower ranges first)
MIN_POWER = 2
MIN_ITERATIONS = 10
MAX_ITERATIONS = 1000


class FractalError(ValueError):
    """Base class for errors raised by the fractal core."""


class InvalidDimensionError(FractalError):
    """Raster width or height is not a positive integer."""


class ParameterRangeError(FractalError):
    """A fractal parameter lies outside its documented bounds."""


class PixelResult(NamedTuple):
    """Outcome of iterating a single plane point."""
    iteration_count: int
    final_magnitude: float


def _require_finite(name, value):
    if not math.isfinite(value):
        raise ParameterRangeError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class FractalParameters:
    """
    Immutable parameter snapshot for a single render.

    Attributes:
        power: Integer exponent of the recurrence (>= 2)
        initial_value: Starting z for every pixel
        max_iterations: Iteration budget (10..1000)
        escape_radius: Magnitude at which a point counts as escaped (> 0)
        view_half_extent: Half the side of the viewport at scale 1 ("a")
        scale: Zoom factor, accumulated multiplicatively (> 0)
        pan_offset: (x, y) viewport center in plane units
    """

    power: int = 5
    initial_value: complex = 0j
    max_iterations: int = 100
    escape_radius: float = 2.0
    view_half_extent: float = 2.0
    scale: float = 1.0
    pan_offset: tuple = (0.0, 0.0)

    def __post_init__(self):
        if isinstance(self.power, bool) or not isinstance(self.power, numbers.Integral):
            raise ParameterRangeError(f"power must be an integer, got {self.power!r}")
        if self.power < MIN_POWER:
            raise ParameterRangeError(f"power must be >= {MIN_POWER}, got {self.power}")

        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, numbers.Integral):
            raise ParameterRangeError(
                f"max_iterations must be an integer, got {self.max_iterations!r}"
            )
        if not MIN_ITERATIONS <= self.max_iterations <= MAX_ITERATIONS:
            raise ParameterRangeError(
                f"max_iterations must be in [{MIN_ITERATIONS}, {MAX_ITERATIONS}], "
                f"got {self.max_iterations}"
            )

        for name in ('escape_radius', 'view_half_extent', 'scale'):
            value = getattr(self, name)
            _require_finite(name, value)
            if value <= 0:
                raise ParameterRangeError(f"{name} must be > 0, got {value}")

        # Normalize so equal snapshots compare and hash equal
        z0 = complex(self.initial_value)
        _require_finite('initial_value.real', z0.real)
        _require_finite('initial_value.imag', z0.imag)
        object.__setattr__(self, 'initial_value', z0)

        if len(self.pan_offset) != 2:
            raise ParameterRangeError(f"pan_offset must be an (x, y) pair, got {self.pan_offset!r}")
        pan = (float(self.pan_offset[0]), float(self.pan_offset[1]))
        _require_finite('pan_offset.x', pan[0])
        _require_finite('pan_offset.y', pan[1])
        object.__setattr__(self, 'pan_offset', pan)

        # Viewport edges and width must be representable, or pixels map to NaN
        half = self.view_half_extent / self.scale
        edges = (2 * half, pan[0] - half, pan[0] + half, pan[1] - half, pan[1] + half)
        if half == 0 or not all(math.isfinite(v) for v in edges):
            raise ParameterRangeError(
                f"viewport half extent / scale = {half!r} around {pan} is not representable"
            )

        object.__setattr__(self, 'power', int(self.power))
        object.__setattr__(self, 'max_iterations', int(self.max_iterations))
        object.__setattr__(self, 'escape_radius', float(self.escape_radius))
        object.__setattr__(self, 'view_half_extent', float(self.view_half_extent))
        object.__setattr__(self, 'scale', float(self.scale))

    def with_changes(self, **changes):
        """Return a new validated snapshot with the given fields replaced."""
        return replace(self, **changes)


def check_dimensions(width, height):
    """Raise InvalidDimensionError unless width and height are positive ints."""
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimensionError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimensionError(f"{name} must be > 0, got {value}")
