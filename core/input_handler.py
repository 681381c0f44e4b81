"""Input handling: turns pygame events into simulation commands."""

import pygame
from pygame.locals import *

from boids import Simulation


class InputHandler:
    """Maps mouse and keyboard events onto the simulation's input operations."""

    def __init__(self, simulation: Simulation):
        self.simulation = simulation
        self.show_help = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key == K_SPACE:
                running = self.simulation.toggle_running()
                print(f"[App] {'Running' if running else 'Paused'}")
            elif event.key == K_BACKSPACE:
                self.simulation.clear_agents()
            elif event.key == K_h:
                self.show_help = not self.show_help
        elif event.type == MOUSEBUTTONDOWN:
            position = (float(event.pos[0]), float(event.pos[1]))
            if event.button == 1:
                # Clicking an entity toggles its selection, empty space spawns an agent
                handle = self.simulation.toggle_selection(position)
                if handle is not None:
                    print(f"[Input] Toggled selection of entity {handle}")
                else:
                    self.simulation.spawn_agent(position)
            elif event.button == 3:
                self.simulation.spawn_obstacle(position)

        return True
