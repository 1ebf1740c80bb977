"""HUD text drawn over the trails."""

import pygame
from OpenGL.GL import *


class HudRenderer:
    """Renders lines of text with pygame fonts blitted through glDrawPixels."""

    def __init__(self, color=(0.9, 0.9, 0.9), font_name: str = "monospace", font_size: int = 16):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = tuple(int(round(c * 255)) for c in color[:3])
        self.line_height = self.font.get_linesize()

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple):
        """Draw one line with its top-left corner at (x, y) from the top-left of the screen."""
        surface = self.font.render(text, True, self.color)
        data = pygame.image.tostring(surface, "RGBA", True)
        w, h = surface.get_size()

        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        # Alpha blending stays enabled from TrailRenderer setup
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)

    def draw_lines(self, lines, x: int, y: int, screen_size: tuple):
        for i, line in enumerate(lines):
            self.draw_text(line, x, y + i * self.line_height, screen_size)
