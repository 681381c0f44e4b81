"""Simulation context owning the scene, the flocking rule and the run state."""

import math
from typing import List, Optional

import numpy as np

from config import boids as config
from .entity import EntityKind, EntityView, make_agent, make_obstacle, view_of
from .flock import Flock
from .scene import Scene


class Simulation:
    """
    Everything one running demo needs, created at startup and passed around.

    Input-layer operations may be called at any time between ticks; if a
    tick is in progress the scene defers them to the tick boundary.
    """

    def __init__(self, settings: Optional[dict] = None, obstacle_size: Optional[float] = None,
                 select_radius: Optional[float] = None):
        self.scene = Scene()
        self.flock = Flock(settings)
        self.agent_size = float(self.flock.settings["size"])
        self.obstacle_size = float(obstacle_size if obstacle_size is not None
                                   else config.OBSTACLES["size"])
        self.select_radius = float(select_radius if select_radius is not None
                                   else config.SELECTION["radius"])
        self.running = True

        count = int(self.flock.settings["initial_count"])
        if count > 0:
            self.populate(count)

    # ------------------------------------------------------------------
    # Input layer
    # ------------------------------------------------------------------

    def spawn_agent(self, position, initial_velocity=None) -> int:
        if initial_velocity is None:
            initial_velocity = self.flock.settings["initial_velocity"]
        return self.scene.add(make_agent(position, initial_velocity, self.agent_size))

    def spawn_obstacle(self, position) -> int:
        return self.scene.add(make_obstacle(position, self.obstacle_size))

    def toggle_selection(self, position, radius: Optional[float] = None) -> Optional[int]:
        """Flip `selected` on the entity nearest `position`; returns its handle if any."""
        if radius is None:
            radius = self.select_radius
        handle = self.scene.find_nearest(position, radius)
        if handle is not None:
            entity = self.scene.get(handle)
            entity.selected = not entity.selected
        return handle

    def clear_agents(self) -> int:
        """Remove every agent; obstacles stay."""
        removed = self.scene.remove_all(lambda e: e.kind is EntityKind.AGENT)
        if self.scene.is_frozen:
            print("[Scene] Clearing agents at end of tick")
        else:
            print(f"[Scene] Cleared {removed} agents")
        return removed

    def toggle_running(self) -> bool:
        self.running = not self.running
        return self.running

    def populate(self, count: int, seed: Optional[int] = None) -> List[int]:
        """Spawn `count` agents at random positions inside the margins, random headings."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")

        rng = np.random.default_rng(seed)
        margin = float(self.flock.margin)
        width = float(self.flock.width)
        height = float(self.flock.height)
        # Fall back to the full world when the margins leave no room
        low_x, high_x = (margin, width - margin) if width > 2 * margin else (0.0, width)
        low_y, high_y = (margin, height - margin) if height > 2 * margin else (0.0, height)

        vx0, vy0 = self.flock.settings["initial_velocity"]
        speed = math.sqrt(vx0 * vx0 + vy0 * vy0) or 1.0

        xs = rng.uniform(low_x, high_x, count)
        ys = rng.uniform(low_y, high_y, count)
        angles = rng.uniform(-math.pi, math.pi, count)

        handles = []
        for x, y, angle in zip(xs, ys, angles):
            velocity = (math.cos(angle) * speed, math.sin(angle) * speed)
            handles.append(self.spawn_agent((x, y), velocity))
        print(f"[Scene] Spawned {count} agents")
        return handles

    # ------------------------------------------------------------------
    # Tick and render state
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """Run one update unless paused. Returns True if the flock moved."""
        if not self.running:
            return False
        self.flock.update(self.scene)
        return True

    def views(self) -> List[EntityView]:
        return [view_of(entity) for entity in self.scene.iterate()]

    @property
    def agent_count(self) -> int:
        return len(self.scene.agents())

    @property
    def obstacle_count(self) -> int:
        return len(self.scene.obstacles())
