"""Scene entities: agents (boids) and static obstacles."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

import numpy as np


class EntityKind(Enum):
    AGENT = "agent"
    OBSTACLE = "obstacle"


@dataclass
class Agent:
    """Payload of a mobile boid. Heading is derived from velocity."""
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))


@dataclass
class Obstacle:
    """Payload of a static obstacle. Obstacles only repel agents."""


Payload = Union[Agent, Obstacle]


@dataclass(eq=False)
class Entity:
    """
    A single object living in the scene.

    Attributes:
        position: 2D world position
        scale: Visual size, also the obstacle's drawn extent
        payload: Agent or Obstacle, carrying the kind-specific state
        selected: Highlight flag, presentation only
        handle: Identity assigned by the scene on insertion
    """
    position: np.ndarray
    scale: float
    payload: Payload
    selected: bool = False
    handle: Optional[int] = None

    @property
    def kind(self) -> EntityKind:
        if isinstance(self.payload, Agent):
            return EntityKind.AGENT
        if isinstance(self.payload, Obstacle):
            return EntityKind.OBSTACLE
        raise TypeError(f"Unknown entity payload: {type(self.payload).__name__}")

    @property
    def is_agent(self) -> bool:
        return self.kind is EntityKind.AGENT

    @property
    def velocity(self) -> Optional[np.ndarray]:
        """Velocity of an agent, None for obstacles."""
        if self.kind is EntityKind.AGENT:
            return self.payload.velocity
        return None

    @property
    def heading(self) -> Optional[float]:
        """Heading angle in radians, None for obstacles."""
        if self.kind is EntityKind.AGENT:
            vx, vy = self.payload.velocity
            return math.atan2(vy, vx)
        return None

    def distance_to(self, point) -> float:
        dx = self.position[0] - point[0]
        dy = self.position[1] - point[1]
        return math.sqrt(dx * dx + dy * dy)


class EntityView(NamedTuple):
    """Read-only snapshot handed to the renderer."""
    handle: int
    kind: EntityKind
    position: Tuple[float, float]
    heading: Optional[float]
    scale: float
    selected: bool


def make_agent(position, velocity, scale: float) -> Entity:
    """Create an agent at `position` moving with `velocity`."""
    return Entity(
        position=np.array(position, dtype=np.float64),
        scale=float(scale),
        payload=Agent(velocity=np.array(velocity, dtype=np.float64)),
    )


def make_obstacle(position, scale: float) -> Entity:
    """Create a static obstacle at `position`."""
    return Entity(
        position=np.array(position, dtype=np.float64),
        scale=float(scale),
        payload=Obstacle(),
    )


def view_of(entity: Entity) -> EntityView:
    return EntityView(
        handle=entity.handle,
        kind=entity.kind,
        position=(float(entity.position[0]), float(entity.position[1])),
        heading=entity.heading,
        scale=entity.scale,
        selected=entity.selected,
    )
