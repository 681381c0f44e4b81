"""Text rendering for HUD elements."""

import pygame
from OpenGL.GL import *

from config import boids as config


class TextRenderer:
    """Renders text overlays using pygame fonts and OpenGL."""

    def __init__(self, font_name: str = "monospace", font_size: int = 16):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = config.COLORS["text"]

    def draw_text(self, text: str, x: int, y: int):
        """
        Draw text with its top-left corner at (x, y).

        Assumes the top-left-origin orthographic projection set up by the
        application, so the surface is uploaded without flipping.
        """
        text_surface = self.font.render(text, True, self.color)
        text_data = pygame.image.tostring(text_surface, "RGBA", False)
        w, h = text_surface.get_size()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        # Raster position is the bottom-left of the image; flip rows with a negative zoom
        glRasterPos2f(x, y)
        glPixelZoom(1.0, -1.0)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, text_data)
        glPixelZoom(1.0, 1.0)
        glDisable(GL_BLEND)
