"""
Mutable view state owned by the UI layer.

ViewState collects user actions (draw with new settings, wheel zoom,
drag pan, reset) and turns them into immutable FractalParameters
snapshots for the renderer. All clamping to the UI ranges happens here;
the core only validates.
"""

import math

from .params import FractalParameters
from .settings import load_settings

# Zoom limits; with the UI half-extent range the viewport stays representable
MIN_SCALE = 1e-300
MAX_SCALE = 1e300


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


class ViewState:
    """
    Current pan/zoom and iteration settings of the viewer.

    Attributes:
        power, initial_value, max_iterations, escape_radius,
        view_half_extent: Settings applied by the last "draw"
        scale: Zoom factor, kept within [MIN_SCALE, MAX_SCALE]
        offset_x, offset_y: Pan offset in plane units
    """

    def __init__(self, settings=None):
        settings = settings or load_settings()
        self.ranges = settings['ranges']
        self.zoom_in_factor = settings['zoom_in_factor']
        self.zoom_out_factor = settings['zoom_out_factor']

        defaults = settings['defaults']
        self.power = 5
        self.initial_value = 0j
        self.max_iterations = 100
        self.escape_radius = 2.0
        self.view_half_extent = 2.0
        self.apply_settings(
            max_iterations=defaults['max_iterations'],
            escape_radius=defaults['escape_radius'],
            view_half_extent=defaults['view_half_extent'],
            initial_value=complex(*defaults['initial_value']),
            power=defaults['power'],
        )

        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def _clamp(self, name, value):
        lo, hi = self.ranges[name][:2]
        return clamp(value, lo, hi)

    def apply_settings(self, max_iterations=None, escape_radius=None,
                       view_half_extent=None, initial_value=None, power=None):
        """
        Apply new draw settings, clamping each to its UI range.

        Arguments left as None keep their current value.
        """
        if max_iterations is not None:
            self.max_iterations = int(self._clamp('max_iterations', int(round(max_iterations))))
        if escape_radius is not None:
            self.escape_radius = float(self._clamp('escape_radius', escape_radius))
        if view_half_extent is not None:
            self.view_half_extent = float(self._clamp('view_half_extent', view_half_extent))
        if initial_value is not None:
            z0 = complex(initial_value)
            self.initial_value = complex(
                self._clamp('initial_value', z0.real),
                self._clamp('initial_value', z0.imag),
            )
        if power is not None:
            self.power = int(self._clamp('power', int(round(power))))

    def zoom(self, wheel_delta):
        """Zoom in for a positive wheel delta, out otherwise."""
        factor = self.zoom_in_factor if wheel_delta > 0 else self.zoom_out_factor
        new_scale = clamp(self.scale * factor, MIN_SCALE, MAX_SCALE)
        if self._viewport_is_finite(new_scale, self.offset_x, self.offset_y):
            self.scale = new_scale

    def pixel_step(self, width, height):
        """Plane units per pixel along x and y for the current view."""
        extent = 2 * self.view_half_extent / self.scale
        return extent / width, extent / height

    def pan(self, dx_pixels, dy_pixels, width, height):
        """
        Shift the view by a drag delta (previous - current mouse position).

        The delta is converted to plane units with the current pixel step,
        so dragging moves the picture with the mouse at any zoom level.
        """
        step_x, step_y = self.pixel_step(width, height)
        offset_x = self.offset_x + dx_pixels * step_x
        offset_y = self.offset_y + dy_pixels * step_y
        if self._viewport_is_finite(self.scale, offset_x, offset_y):
            self.offset_x = offset_x
            self.offset_y = offset_y

    def _viewport_is_finite(self, scale, offset_x, offset_y):
        half = self.view_half_extent / scale
        edges = (2 * half, offset_x - half, offset_x + half, offset_y - half, offset_y + half)
        return half > 0 and all(math.isfinite(v) for v in edges)

    def reset(self):
        """Return to the identity view; iteration settings are kept."""
        self.scale = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def snapshot(self):
        """Build the immutable parameter snapshot for the next render."""
        return FractalParameters(
            power=self.power,
            initial_value=self.initial_value,
            max_iterations=self.max_iterations,
            escape_radius=self.escape_radius,
            view_half_extent=self.view_half_extent,
            scale=self.scale,
            pan_offset=(self.offset_x, self.offset_y),
        )
