"""
Asynchronous multibrot renderer with stale-request cancellation.

The AsyncRenderer class handles:
- Background computation so the UI stays responsive
- Request ids: every submit() gets a monotonically increasing id
- Cancellation: the worker renders in row bands and abandons a raster
  as soon as a newer request arrives
- Only the newest completed raster is ever handed back
"""

import threading
import time

from .compute import as_palette, new_raster, render_band
from .params import FractalParameters, check_dimensions
from .settings import log


class AsyncRenderer:
    """
    Renders parameter snapshots on a background thread.

    Usage:
        renderer = AsyncRenderer()
        renderer.submit(600, 600, params)

        # In your game loop:
        request_id, raster = renderer.get_result()
        if raster is not None:
            display(raster)

    Attributes:
        palette: (256, 3) uint8 color table used for new requests
        band_rows: Rows rendered between cancellation checks
    """

    BAND_ROWS = 16

    def __init__(self, palette=None, band_rows=BAND_ROWS):
        if band_rows <= 0:
            raise ValueError(f"band_rows must be > 0, got {band_rows}")
        self.palette = as_palette(palette)
        self.band_rows = band_rows

        self.lock = threading.Lock()
        self.done = threading.Condition(self.lock)
        self.computing = False
        self.pending = None  # (request_id, width, height, params, palette)
        self.latest_id = 0
        self.completed_id = 0
        self.result = None  # (request_id, raster) not yet collected
        self.error = None

    @property
    def busy(self):
        with self.lock:
            return self.computing

    def set_palette(self, palette):
        """Use a new palette for requests submitted after this call."""
        palette = as_palette(palette)
        with self.lock:
            self.palette = palette

    def submit(self, width, height, params):
        """
        Queue a render, superseding any request still in flight.

        Dimensions and the params type are checked here so that errors
        reach the caller instead of the worker thread.

        Returns:
            The request id of the new render.
        """
        check_dimensions(width, height)
        if not isinstance(params, FractalParameters):
            raise TypeError(f"params must be FractalParameters, got {type(params).__name__}")

        with self.lock:
            self.latest_id += 1
            self.error = None
            request_id = self.latest_id
            self.pending = (request_id, width, height, params, self.palette)
            if not self.computing:
                self.computing = True
                thread = threading.Thread(target=self._compute_thread)
                thread.daemon = True
                thread.start()
        return request_id

    def _compute_thread(self):
        """Background thread: render pending requests until none are left."""
        while True:
            with self.lock:
                job = self.pending
                self.pending = None
                if job is None:
                    self.computing = False
                    self.done.notify_all()
                    break

            request_id, width, height, params, palette = job
            start = time.perf_counter()
            try:
                raster = self._render_cancellable(width, height, params, palette)
            except Exception as e:
                print(f"Render #{request_id} failed: {e}")
                with self.lock:
                    if request_id == self.latest_id:
                        self.error = e
                    self.completed_id = request_id
                    self.done.notify_all()
                continue

            if raster is None:
                log(f"Discarded stale render #{request_id}")
                continue

            log(f"Render #{request_id} ({width}x{height}) took "
                f"{time.perf_counter() - start:.3f}s")
            with self.lock:
                if request_id == self.latest_id:
                    self.result = (request_id, raster)
                    self.error = None
                self.completed_id = request_id
                self.done.notify_all()

    def _render_cancellable(self, width, height, params, palette):
        """Render band by band; return None if a newer request arrived."""
        out = new_raster(width, height)
        for start_row in range(0, height, self.band_rows):
            with self.lock:
                if self.pending is not None:
                    return None
            rows = min(self.band_rows, height - start_row)
            render_band(params, palette, out, start_row, rows)
        return out

    def get_result(self):
        """
        Get the newest render result if ready.

        Returns:
            (request_id, raster) once per completed request, or
            (None, None) if nothing new is available.
        """
        with self.lock:
            if self.result is None:
                return None, None
            request_id, raster = self.result
            self.result = None
            if request_id != self.latest_id:
                return None, None
            return request_id, raster

    def wait(self, timeout=None):
        """
        Block until the newest submitted request has finished.

        Returns:
            True if it finished, False on timeout.

        Raises:
            The worker's exception if the newest request failed.
        """
        with self.lock:
            finished = self.done.wait_for(
                lambda: self.completed_id == self.latest_id and self.pending is None,
                timeout
            )
            if finished and self.error is not None:
                raise self.error
            return finished
