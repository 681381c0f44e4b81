"""Boundary frame rendering for spatial reference."""

from OpenGL.GL import *
from config import boids as config


class BoundaryFrame:
    """Draws the turn-back margin as an outlined rectangle inside the world."""

    def __init__(self, width: float, height: float, margin: float):
        self.width = width
        self.height = height
        self.margin = margin
        self.color = config.COLORS["margin"]

    def draw(self):
        m = self.margin
        w = self.width - m
        h = self.height - m

        glBegin(GL_LINE_LOOP)
        glColor3f(*self.color)
        glVertex2f(m, m)
        glVertex2f(w, m)
        glVertex2f(w, h)
        glVertex2f(m, h)
        glEnd()
