"""
Settings for the multibrot viewer.

Defaults live in settings.json next to this file. Any key missing from
the file (or the whole file, if it cannot be read) falls back to the
built-in DEFAULT_SETTINGS below.
"""

import copy
import json
import os


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULT_SETTINGS = {
    'window': {'width': 800, 'height': 600, 'panel_width': 200},
    'defaults': {
        'power': 5,
        'initial_value': [0.0, 0.0],
        'max_iterations': 100,
        'escape_radius': 2.0,
        'view_half_extent': 2.0,
    },
    # UI ranges: [min, max, step]
    'ranges': {
        'max_iterations': [10, 1000, 10],
        'escape_radius': [1.0, 100.0, 0.5],
        'view_half_extent': [0.1, 10.0, 0.1],
        'initial_value': [-10.0, 10.0, 0.05],
        'power': [2, 8, 1],
    },
    'zoom_in_factor': 1.1,
    'zoom_out_factor': 0.9,
    'render_delay_ms': 25,
    'band_rows': 16,
    'palette': 'Sine',
}

VERBOSE = False


def set_verbose(flag):
    global VERBOSE
    VERBOSE = bool(flag)


def log(message, *args, **kwargs):
    """Print a diagnostic message when verbose mode is on."""
    if VERBOSE:
        print(message, *args, **kwargs)


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_settings(path=None):
    """
    Load settings from a JSON file, merged over DEFAULT_SETTINGS.

    Args:
        path: Settings file (default: the packaged settings.json)

    Returns:
        dict with the same layout as DEFAULT_SETTINGS
    """
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings_path = path or SETTINGS_PATH
    try:
        with open(settings_path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {os.path.basename(settings_path)}: {e}")
        return settings
    if not isinstance(loaded, dict):
        print(f"Warning: Ignoring {os.path.basename(settings_path)}: top level is not an object")
        return settings
    return _merge(settings, loaded)
