"""
Main application module for the multibrot viewer.

Contains the MultibrotApp class which handles:
- Window setup and main loop
- User input (wheel zoom, drag pan, keyboard)
- Submitting parameter snapshots to the async renderer
- Display and image export
"""

import pygame

from .colormaps import get_palette, list_palette_names
from .compute import render, warmup_jit
from .export import default_export_path, raster_to_surface, save_image
from .menu import Menu
from .renderer import AsyncRenderer
from .settings import load_settings, log
from .view import ViewState


class MultibrotApp:
    """
    Main application class for the multibrot viewer.

    Handles the pygame window, event loop, and coordinates
    between the view state, renderer, menu, and display.
    """

    CAPTION = "Multibrot z^{power} + c - Scroll to zoom, drag to pan, R to reset"

    def __init__(self, width=None, height=None, max_iter=None, power=None, settings=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default from settings, 800)
            height: Window height in pixels (default from settings, 600)
            max_iter: Initial maximum iteration count
            power: Initial exponent of the recurrence
            settings: Settings dict (default: load_settings())
        """
        self.settings = settings or load_settings()
        window = self.settings['window']
        self.width = width or window['width']
        self.height = height or window['height']
        self.panel_width = window['panel_width']
        if self.width <= self.panel_width:
            raise ValueError(
                f"window width must exceed the {self.panel_width}px settings panel, got {self.width}"
            )

        # Fractal area, left of the panel
        self.view_width = self.width - self.panel_width
        self.view_height = self.height

        self.view = ViewState(self.settings)
        self.view.apply_settings(max_iterations=max_iter, power=power)

        self.palette_names = list_palette_names()
        palette_name = self.settings['palette']
        self.palette_idx = (self.palette_names.index(palette_name)
                            if palette_name in self.palette_names else 0)

        self.render_delay_ms = self.settings['render_delay_ms']

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Components
        self.renderer = None
        self.menu = None

        # Display state
        self.current_surface = None
        self.current_raster = None

        # Input state
        self.last_mouse_pos = None

        # Render timing
        self.last_action_time = 0
        self.pending_render = False

        self.running = False

    @property
    def palette(self):
        return get_palette(self.palette_names[self.palette_idx])

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()
        self._warmup_and_initial_render()

        self.running = True
        while self.running:
            current_time = pygame.time.get_ticks()

            self._handle_events(current_time)
            self._check_render_result()
            self._maybe_start_render(current_time)
            self._draw()

            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.DOUBLEBUF)
        self._set_caption()
        self.clock = pygame.time.Clock()

    def _set_caption(self, text=None):
        pygame.display.set_caption(text or self.CAPTION.format(power=self.view.power))

    def _init_components(self):
        """Initialize renderer and menu."""
        self.renderer = AsyncRenderer(self.palette, band_rows=self.settings['band_rows'])
        self.menu = Menu(self.view_width, self.panel_width, self.height, self.view.ranges)
        self.menu.load_from(self.view)
        self.menu.palette_name = self.palette_names[self.palette_idx]

    def _warmup_and_initial_render(self):
        """Warm up JIT and do initial render."""
        self._set_caption("Compiling (first run only)...")
        log("Warming up JIT")
        warmup_jit(self.palette)

        params = self.view.snapshot()
        self._show(render(self.view_width, self.view_height, params, self.palette))
        self._set_caption()

    def _show(self, raster):
        self.current_raster = raster
        self.current_surface = raster_to_surface(raster)

    def _request_render(self, current_time):
        self.last_action_time = current_time
        self.pending_render = True

    def _handle_events(self, current_time):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            # Menu gets first crack at events
            menu_handled, action = self.menu.handle_event(event)
            if action == Menu.DRAW:
                self.view.apply_settings(**self.menu.get_settings())
                self.menu.load_from(self.view)
                self._request_render(current_time)
            elif action == Menu.SAVE:
                self._save_image()
            elif action == Menu.RESET:
                self.view.reset()
                self._request_render(current_time)
            if menu_handled:
                continue

            if event.type == pygame.MOUSEWHEEL:
                if not self.menu.point_in_menu(pygame.mouse.get_pos()):
                    self.view.zoom(event.y)
                    self._request_render(current_time)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.last_mouse_pos = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.last_mouse_pos = None
            elif event.type == pygame.MOUSEMOTION:
                self._handle_mouse_motion(event, current_time)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event, current_time)

    def _handle_mouse_motion(self, event, current_time):
        """Pan while the left button is held."""
        if self.last_mouse_pos is None:
            return
        dx = self.last_mouse_pos[0] - event.pos[0]
        dy = self.last_mouse_pos[1] - event.pos[1]
        self.last_mouse_pos = event.pos
        if dx or dy:
            self.view.pan(dx, dy, self.view_width, self.view_height)
            self._request_render(current_time)

    def _handle_key(self, event, current_time):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.view.reset()
            self._request_render(current_time)
        elif event.key == pygame.K_c:
            self.palette_idx = (self.palette_idx + 1) % len(self.palette_names)
            self.renderer.set_palette(self.palette)
            self.menu.palette_name = self.palette_names[self.palette_idx]
            self._request_render(current_time)
        elif event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_s and pygame.key.get_mods() & (pygame.KMOD_CTRL | pygame.KMOD_META):
            self._save_image()

    def _save_image(self):
        """Save the raster currently on screen."""
        if self.current_raster is None:
            return
        filename = default_export_path()
        try:
            save_image(self.current_raster, filename)
        except pygame.error as e:
            print(f"Could not save image to {filename}: {e}")
            self._set_caption("Save failed - see console")
            return
        self._set_caption(f"Saved: {filename}")
        print(f"Image saved to: {filename}")

    def _check_render_result(self):
        """Check if async render has completed."""
        request_id, raster = self.renderer.get_result()
        if raster is not None:
            log(f"Showing render #{request_id}")
            self._show(raster)
            self._set_caption()

    def _maybe_start_render(self, current_time):
        """Start a new render if conditions are met."""
        if self.pending_render and current_time - self.last_action_time > self.render_delay_ms:
            self.pending_render = False
            self.renderer.submit(self.view_width, self.view_height, self.view.snapshot())
            self._set_caption("Computing...")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        self.menu.draw(self.screen)
        pygame.display.flip()


def run(width=None, height=None, max_iter=None, power=None):
    """
    Run the multibrot viewer.

    Args:
        width: Window width (default 800)
        height: Window height (default 600)
        max_iter: Maximum iterations (default 100)
        power: Exponent of z^power + c (default 5)
    """
    app = MultibrotApp(width, height, max_iter, power)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
