import os
import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

# pygame must never try to open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from multibrot.params import FractalParameters


@pytest.fixture
def default_params():
    """The end-to-end parameter set: z^5 + c, z0 = 0, N = 50."""
    return FractalParameters(
        power=5,
        initial_value=0j,
        max_iterations=50,
        escape_radius=2.0,
        view_half_extent=2.0,
        scale=1.0,
        pan_offset=(0.0, 0.0),
    )


@pytest.fixture
def skewed_params():
    """Panned, zoomed, cubic, with a nonzero z0 - exercises every field."""
    return FractalParameters(
        power=3,
        initial_value=0.1 + 0.05j,
        max_iterations=60,
        escape_radius=2.5,
        view_half_extent=1.5,
        scale=1.7,
        pan_offset=(0.3, -0.2),
    )
