"""Main application class that ties everything together."""

from typing import Optional

import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import boids as config
from .input_handler import InputHandler
from rendering import BoundaryFrame, EntityRenderer, TextRenderer
from boids import Simulation


class Application:
    """Main application managing the game loop and rendering."""

    def __init__(self, settings: Optional[dict] = None):
        # World size follows the window unless overridden
        settings = dict(settings or {})
        width = int(settings.get("width", config.WINDOW["width"]))
        height = int(settings.get("height", config.WINDOW["height"]))
        settings.setdefault("width", float(width))
        settings.setdefault("height", float(height))
        self.screen_size = (width, height)

        pygame.init()
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL)
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        print("[App] Initializing simulation...")
        self.simulation = Simulation(settings)
        self.input_handler = InputHandler(self.simulation)

        # Rendering components
        self.frame = BoundaryFrame(width, height, float(self.simulation.flock.margin))
        self.entity_renderer = EntityRenderer()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        self._setup_gl()
        print("[App] Ready!")

    def _setup_gl(self):
        """Initialize a 2D projection with the origin at the top-left corner."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.screen_size[0], self.screen_size[1], 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self):
        """Advance the simulation by one tick."""
        self.simulation.tick()

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)

        self.frame.draw()
        self.entity_renderer.draw(self.simulation.views())

        # Draw HUD
        status = "RUNNING" if self.simulation.running else "PAUSED"
        self.text_renderer.draw_text(
            f"Agents: {self.simulation.agent_count}  |  Obstacles: {self.simulation.obstacle_count}"
            f"  |  FPS: {self.fps:.0f}  |  {status}",
            10, 10
        )
        if self.input_handler.show_help:
            self.text_renderer.draw_text(
                "LMB: Add/select | RMB: Obstacle | SPACE: Pause | BACKSPACE: Clear | H: Help",
                10, 30
            )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            self.clock.tick(config.WINDOW["fps"])
            self.fps = self.clock.get_fps()

            # Input first, then a full tick, then render: no overlap
            self._handle_events()
            self._update()
            self._render()

        pygame.quit()
        print("[App] Shutdown complete")
