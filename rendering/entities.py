"""Entity rendering - triangles for agents, squares for obstacles."""

import math
from typing import Iterable

from OpenGL.GL import *

from boids import EntityKind, EntityView
from config import boids as config


class EntityRenderer:
    """Draws entity views in immediate mode."""

    def __init__(self):
        self.colors = config.COLORS

    def _agent_color(self, view: EntityView):
        return self.colors["agent_selected"] if view.selected else self.colors["agent"]

    def _obstacle_color(self, view: EntityView):
        return self.colors["obstacle_selected"] if view.selected else self.colors["obstacle"]

    def _draw_agent(self, view: EntityView):
        """
        Triangle whose base is centered on the agent's position.

        The base is `scale` wide, the tip sits 1.5 * scale ahead along the heading.
        """
        x, y = view.position
        direction = view.heading
        orthogonal = direction + math.pi / 2

        half = view.scale / 2
        dx = half * math.cos(orthogonal)
        dy = half * math.sin(orthogonal)
        tip_x = x + 1.5 * view.scale * math.cos(direction)
        tip_y = y + 1.5 * view.scale * math.sin(direction)

        glColor3f(*self._agent_color(view))
        glVertex2f(x - dx, y - dy)
        glVertex2f(x + dx, y + dy)
        glVertex2f(tip_x, tip_y)

    def _draw_obstacle(self, view: EntityView):
        x, y = view.position
        half = view.scale / 2

        glColor3f(*self._obstacle_color(view))
        glVertex2f(x - half, y - half)
        glVertex2f(x + half, y - half)
        glVertex2f(x + half, y + half)
        glVertex2f(x - half, y + half)

    def draw(self, views: Iterable[EntityView]):
        views = list(views)

        glBegin(GL_TRIANGLES)
        for view in views:
            if view.kind is EntityKind.AGENT:
                self._draw_agent(view)
        glEnd()

        glBegin(GL_QUADS)
        for view in views:
            if view.kind is EntityKind.OBSTACLE:
                self._draw_obstacle(view)
        glEnd()
