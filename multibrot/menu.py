"""
Side settings panel for the multibrot viewer.

Provides numeric steppers for the iteration settings (N, R, a, z0, power)
and the Draw / Save / Reset buttons.
"""

import pygame


class Stepper:
    """A labelled numeric field with - and + buttons."""

    BUTTON_WIDTH = 24

    def __init__(self, x, y, width, label, value, lo, hi, step, decimals=0):
        self.x = x
        self.y = y
        self.width = width
        self.height = 24
        self.label = label
        self.lo = lo
        self.hi = hi
        self.step = step
        self.decimals = decimals
        self.value = self._clamp(value)

    def _clamp(self, value):
        value = max(self.lo, min(self.hi, value))
        if self.decimals == 0:
            return int(round(value))
        return round(value, self.decimals)

    def set_value(self, value):
        self.value = self._clamp(value)

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def minus_rect(self):
        return pygame.Rect(self.x, self.y, self.BUTTON_WIDTH, self.height)

    def plus_rect(self):
        return pygame.Rect(self.x + self.width - self.BUTTON_WIDTH, self.y,
                           self.BUTTON_WIDTH, self.height)

    def handle_event(self, event):
        """Returns (handled, value_changed)."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            old_value = self.value
            if self.minus_rect().collidepoint(event.pos):
                self.value = self._clamp(self.value - self.step)
            elif self.plus_rect().collidepoint(event.pos):
                self.value = self._clamp(self.value + self.step)
            elif not self.get_rect().collidepoint(event.pos):
                return False, False
            return True, old_value != self.value

        elif event.type == pygame.MOUSEWHEEL:
            if self.get_rect().collidepoint(pygame.mouse.get_pos()):
                old_value = self.value
                self.value = self._clamp(self.value + self.step * event.y)
                return True, old_value != self.value

        return False, False

    def format_value(self):
        return f"{self.value:.{self.decimals}f}"

    def draw(self, screen, font, small_font):
        label = small_font.render(self.label, True, (180, 180, 180))
        screen.blit(label, (self.x, self.y - 16))

        rect = self.get_rect()
        pygame.draw.rect(screen, (55, 55, 55), rect)
        pygame.draw.rect(screen, (100, 100, 100), rect, 1)

        for sign, button in (('-', self.minus_rect()), ('+', self.plus_rect())):
            pygame.draw.rect(screen, (70, 70, 70), button)
            pygame.draw.rect(screen, (100, 100, 100), button, 1)
            text = font.render(sign, True, (220, 220, 220))
            screen.blit(text, text.get_rect(center=button.center))

        text = small_font.render(self.format_value(), True, (220, 220, 220))
        screen.blit(text, text.get_rect(center=rect.center))


class Button:
    """A push button."""

    def __init__(self, x, y, width, text, color=(60, 60, 60)):
        self.x = x
        self.y = y
        self.width = width
        self.height = 26
        self.text = text
        self.color = color

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def handle_event(self, event):
        """Returns True if the button was clicked."""
        return (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.get_rect().collidepoint(event.pos))

    def draw(self, screen, font):
        rect = self.get_rect()
        pygame.draw.rect(screen, self.color, rect)
        pygame.draw.rect(screen, tuple(min(255, c + 40) for c in self.color), rect, 1)
        text = font.render(self.text, True, (230, 230, 230))
        screen.blit(text, text.get_rect(center=rect.center))


class Menu:
    """
    Settings panel docked on the right edge of the window.

    Stepper changes are only applied when Draw is pressed:
    handle_event reports an action and the app decides what to do with it.
    """

    DRAW = 'draw'
    SAVE = 'save'
    RESET = 'reset'

    def __init__(self, x, width, height, ranges):
        self.x = x
        self.y = 0
        self.width = width
        self.height = height

        self.font = None
        self.small_font = None

        inner_x = x + 8
        inner_w = width - 16

        self.draw_button = Button(inner_x, 10, inner_w, 'Draw', (70, 100, 70))
        self.save_button = Button(inner_x, 42, inner_w, 'Save', (60, 80, 110))
        self.reset_button = Button(inner_x, 74, inner_w, 'Reset', (100, 70, 70))

        def stepper(row, label, name, value, decimals):
            lo, hi, step = ranges[name]
            return Stepper(inner_x, 130 + row * 46, inner_w, label, value, lo, hi, step, decimals)

        self.iter_stepper = stepper(0, 'Max iterations (N):', 'max_iterations', 100, 0)
        self.radius_stepper = stepper(1, 'Escape radius (R):', 'escape_radius', 2.0, 2)
        self.size_stepper = stepper(2, 'View size (a):', 'view_half_extent', 2.0, 2)
        self.z0_real_stepper = stepper(3, 'z0 (real):', 'initial_value', 0.0, 2)
        self.z0_imag_stepper = stepper(4, 'z0 (imaginary):', 'initial_value', 0.0, 2)
        self.power_stepper = stepper(5, 'Power:', 'power', 5, 0)

        self.steppers = [
            self.iter_stepper,
            self.radius_stepper,
            self.size_stepper,
            self.z0_real_stepper,
            self.z0_imag_stepper,
            self.power_stepper,
        ]

        self.palette_name = ''

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14)
        self.small_font = pygame.font.SysFont('Arial', 12)

    def load_from(self, view):
        """Show the settings currently held by a ViewState."""
        self.iter_stepper.set_value(view.max_iterations)
        self.radius_stepper.set_value(view.escape_radius)
        self.size_stepper.set_value(view.view_half_extent)
        self.z0_real_stepper.set_value(view.initial_value.real)
        self.z0_imag_stepper.set_value(view.initial_value.imag)
        self.power_stepper.set_value(view.power)

    def get_settings(self):
        """Keyword arguments for ViewState.apply_settings()."""
        return {
            'max_iterations': self.iter_stepper.value,
            'escape_radius': self.radius_stepper.value,
            'view_half_extent': self.size_stepper.value,
            'initial_value': complex(self.z0_real_stepper.value, self.z0_imag_stepper.value),
            'power': self.power_stepper.value,
        }

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def point_in_menu(self, pos):
        return self.get_rect().collidepoint(pos)

    def handle_event(self, event):
        """
        Handle a pygame event.
        Returns (handled, action) where action is DRAW, SAVE, RESET or None.
        """
        if event.type == pygame.MOUSEBUTTONDOWN and not self.point_in_menu(event.pos):
            return False, None

        if self.draw_button.handle_event(event):
            return True, self.DRAW
        if self.save_button.handle_event(event):
            return True, self.SAVE
        if self.reset_button.handle_event(event):
            return True, self.RESET

        for s in self.steppers:
            handled, _ = s.handle_event(event)
            if handled:
                return True, None

        if event.type == pygame.MOUSEBUTTONDOWN:
            return True, None
        return False, None

    def draw(self, screen):
        if self.font is None:
            self.init_fonts()

        pygame.draw.rect(screen, (40, 40, 40), self.get_rect())
        pygame.draw.line(screen, (100, 100, 100), (self.x, 0), (self.x, self.height))

        for button in (self.draw_button, self.save_button, self.reset_button):
            button.draw(screen, self.font)
        for s in self.steppers:
            s.draw(screen, self.font, self.small_font)

        if self.palette_name:
            hint = self.small_font.render(f"Palette: {self.palette_name} (C)", True, (140, 140, 140))
            screen.blit(hint, (self.x + 8, self.height - 40))
        hint = self.small_font.render('Wheel: zoom  Drag: pan', True, (140, 140, 140))
        screen.blit(hint, (self.x + 8, self.height - 22))
