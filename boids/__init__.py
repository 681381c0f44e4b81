"""2D flocking simulation core."""

from .entity import Agent, Obstacle, Entity, EntityKind, EntityView, make_agent, make_obstacle
from .scene import Scene
from .flock import Flock, Forces, turn_towards
from .simulation import Simulation

__all__ = [
    "Agent", "Obstacle", "Entity", "EntityKind", "EntityView",
    "make_agent", "make_obstacle",
    "Scene", "Flock", "Forces", "turn_towards", "Simulation",
]
