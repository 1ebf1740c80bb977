"""Keyboard mutators for the running engine."""

import pygame
from pygame.locals import *

from attractors import AttractorEngine


MIN_TRAIL_LENGTH = 16
MAX_TRAIL_LENGTH = 16384

HELP_LINES = (
    "SPACE  pause / resume",
    "N      add a trajectory",
    "UP/DN  double / halve trail length",
    "C      toggle distance coloring",
    "O      toggle parameter oscillation",
    "H      toggle this help",
    "ESC    quit",
)


class InputHandler:
    """Maps key presses to engine mutators and app toggles."""

    def __init__(self, engine: AttractorEngine):
        self.engine = engine
        self.paused = False
        self.show_help = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        if event.type != KEYDOWN:
            return True

        engine = self.engine
        if event.key == K_ESCAPE:
            return False
        elif event.key == K_SPACE:
            self.paused = not self.paused
        elif event.key == K_h:
            self.show_help = not self.show_help
        elif event.key == K_n:
            index = engine.add()
            print(f"[App] Added trajectory {index}")
        elif event.key == K_UP:
            engine.trail_length = min(engine.trail_length * 2, MAX_TRAIL_LENGTH)
        elif event.key == K_DOWN:
            engine.trail_length = max(engine.trail_length // 2, MIN_TRAIL_LENGTH)
        elif event.key == K_c:
            if engine.colors.distance_enabled:
                engine.disable_distance_coloring()
                palette = engine.system.settings.COLORS["palette"]
                if palette is not None:
                    engine.set_body_colors(palette)
            else:
                engine.enable_distance_coloring()
            print(f"[App] Color mode: {engine.colors.mode}")
        elif event.key == K_o:
            engine.set_oscillation(not engine.oscillator.enabled)
            print(f"[App] Oscillation {'on' if engine.oscillator.enabled else 'off'}")

        return True
