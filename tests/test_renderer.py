import numpy as np
import pytest

from multibrot.colormaps import get_palette
from multibrot.compute import render
from multibrot.params import FractalError, InvalidDimensionError
from multibrot import renderer as renderer_module
from multibrot.renderer import AsyncRenderer

TIMEOUT = 60


def test_async_result_matches_render(skewed_params):
    renderer = AsyncRenderer()
    request_id = renderer.submit(40, 30, skewed_params)
    assert renderer.wait(TIMEOUT)

    got_id, raster = renderer.get_result()
    assert got_id == request_id
    assert np.array_equal(raster, render(40, 30, skewed_params))


def test_result_is_handed_out_once(default_params):
    renderer = AsyncRenderer()
    renderer.submit(8, 8, default_params)
    assert renderer.wait(TIMEOUT)
    assert renderer.get_result()[1] is not None
    assert renderer.get_result() == (None, None)


def test_band_size_does_not_change_output(skewed_params):
    # Odd height so the last band is partial
    renderer = AsyncRenderer(band_rows=3)
    renderer.submit(17, 11, skewed_params)
    assert renderer.wait(TIMEOUT)
    _, raster = renderer.get_result()
    assert np.array_equal(raster, render(17, 11, skewed_params))


def test_request_ids_increase(default_params):
    renderer = AsyncRenderer()
    ids = [renderer.submit(4, 4, default_params) for _ in range(3)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 3
    assert renderer.wait(TIMEOUT)


def test_only_newest_request_is_delivered(default_params):
    renderer = AsyncRenderer(band_rows=1)
    snapshots = [default_params.with_changes(scale=1.0 + 0.5 * i) for i in range(5)]
    ids = [renderer.submit(64, 64, p) for p in snapshots]
    assert renderer.wait(TIMEOUT)

    got_id, raster = renderer.get_result()
    assert got_id == ids[-1]
    assert np.array_equal(raster, render(64, 64, snapshots[-1]))
    assert renderer.get_result() == (None, None)


def test_stale_result_is_discarded(default_params):
    renderer = AsyncRenderer()
    renderer.submit(8, 8, default_params)
    assert renderer.wait(TIMEOUT)
    # Not collected before a newer request arrives
    newer = default_params.with_changes(scale=2.0)
    newer_id = renderer.submit(8, 8, newer)
    got_id, raster = renderer.get_result()
    assert got_id in (None, newer_id)
    assert renderer.wait(TIMEOUT)
    if got_id is None:
        got_id, raster = renderer.get_result()
    assert got_id == newer_id
    assert np.array_equal(raster, render(8, 8, newer))


def test_palette_applies_to_later_requests(default_params):
    renderer = AsyncRenderer()
    renderer.set_palette(get_palette('Grayscale'))
    renderer.submit(16, 16, default_params)
    assert renderer.wait(TIMEOUT)
    _, raster = renderer.get_result()
    assert np.array_equal(raster, render(16, 16, default_params, get_palette('Grayscale')))


def test_submit_validates_synchronously(default_params):
    renderer = AsyncRenderer()
    with pytest.raises(InvalidDimensionError):
        renderer.submit(0, 10, default_params)
    with pytest.raises(TypeError):
        renderer.submit(10, 10, None)
    # Nothing was queued
    assert renderer.wait(0.1)
    assert renderer.get_result() == (None, None)


def test_invalid_palette_is_rejected():
    with pytest.raises(FractalError):
        AsyncRenderer(palette=np.zeros((10, 3), dtype=np.uint8))
    renderer = AsyncRenderer()
    with pytest.raises(FractalError):
        renderer.set_palette(np.zeros((256, 4), dtype=np.uint8))


def test_band_rows_must_be_positive():
    with pytest.raises(ValueError):
        AsyncRenderer(band_rows=0)


def test_worker_error_is_raised_by_wait(default_params, monkeypatch, capsys):
    def broken_band(*args):
        raise RuntimeError("band failed")

    monkeypatch.setattr(renderer_module, "render_band", broken_band)
    renderer = AsyncRenderer()
    renderer.submit(8, 8, default_params)
    with pytest.raises(RuntimeError, match="band failed"):
        renderer.wait(TIMEOUT)
    assert renderer.get_result() == (None, None)
    assert "failed" in capsys.readouterr().out

    # The worker survives and the next request clears the error
    monkeypatch.undo()
    request_id = renderer.submit(8, 8, default_params)
    assert renderer.wait(TIMEOUT)
    got_id, raster = renderer.get_result()
    assert got_id == request_id
    assert np.array_equal(raster, render(8, 8, default_params))
