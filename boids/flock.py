"""Flocking engine - brute-force neighbor scan, heading smoothing and integration, Numba JIT."""

import math
from typing import NamedTuple, Optional

import numpy as np
from numba import njit, prange

from config import boids as config
from .entity import EntityKind


UPDATE_MODES = ("sequential", "snapshot")


# ============================================================================
# NUMBA JIT-COMPILED FLOCKING FUNCTIONS
# ============================================================================

@njit(cache=True)
def accumulate_agent_forces(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    is_agent: np.ndarray,
    separation: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    boundary: np.ndarray,
    width: float,
    height: float,
    margin: float,
    dist_threshold: float,
    avoid_factor: float,
    alignement_factor: float,
    centering_factor: float,
    turn_factor: float
):
    """Write the four steering components of agent i into row i of each force array."""
    n = positions.shape[0]
    px = positions[i, 0]
    py = positions[i, 1]

    sep_x, sep_y = 0.0, 0.0
    bary_x, bary_y = 0.0, 0.0
    total_agents = 0
    align_x, align_y = 0.0, 0.0
    align_count = 0

    for j in range(n):
        dx = positions[j, 0] - px
        dy = positions[j, 1] - py
        dist = math.sqrt(dx * dx + dy * dy)

        if not is_agent[j]:
            # Obstacles only repel
            if dist < dist_threshold:
                sep_x -= dx * avoid_factor
                sep_y -= dy * avoid_factor
            continue

        bary_x += positions[j, 0]
        bary_y += positions[j, 1]
        total_agents += 1
        if j == i:
            continue

        if dist < dist_threshold:
            sep_x -= dx * avoid_factor
            sep_y -= dy * avoid_factor
        else:
            # No outer radius: every agent outside the separation range aligns
            align_x += velocities[j, 0]
            align_y += velocities[j, 1]
            align_count += 1

    separation[i, 0] = sep_x
    separation[i, 1] = sep_y

    alignment[i, 0] = 0.0
    alignment[i, 1] = 0.0
    if align_count > 0:
        alignment[i, 0] = (align_x / align_count - velocities[i, 0]) * alignement_factor
        alignment[i, 1] = (align_y / align_count - velocities[i, 1]) * alignement_factor

    cohesion[i, 0] = 0.0
    cohesion[i, 1] = 0.0
    if total_agents > 1:
        cx = bary_x / total_agents - px
        cy = bary_y / total_agents - py
        norm = math.sqrt(cx * cx + cy * cy)
        if norm > 0.0:
            cohesion[i, 0] = cx / norm * centering_factor
            cohesion[i, 1] = cy / norm * centering_factor

    wall_x, wall_y = 0.0, 0.0
    if px < margin:
        wall_x += turn_factor
    if px > width - margin:
        wall_x -= turn_factor
    if py < margin:
        wall_y += turn_factor
    if py > height - margin:
        wall_y -= turn_factor
    boundary[i, 0] = wall_x
    boundary[i, 1] = wall_y


@njit(cache=True)
def turn_towards(vx: float, vy: float, dir_x: float, dir_y: float, rad_step: float):
    """
    Rotate velocity (vx, vy) toward direction (dir_x, dir_y) by at most rad_step.

    The magnitude of the velocity is preserved. A zero direction leaves the
    velocity untouched.
    """
    if dir_x == 0.0 and dir_y == 0.0:
        return vx, vy

    target = math.atan2(dir_y, dir_x)
    current = math.atan2(vy, vx)
    diff = target - current
    if diff > math.pi:
        diff -= 2.0 * math.pi
    elif diff <= -math.pi:
        diff += 2.0 * math.pi

    # Close enough, stop jittering
    if abs(diff) < rad_step:
        return vx, vy

    if diff > 0.0:
        current += rad_step
    else:
        current -= rad_step

    norm = math.sqrt(vx * vx + vy * vy)
    return math.cos(current) * norm, math.sin(current) * norm


@njit(cache=True)
def integrate_agent(
    i: int,
    positions: np.ndarray,
    velocities: np.ndarray,
    fx: float,
    fy: float,
    max_speed: float,
    rad_step: float,
    dt: float
):
    """Apply force to velocity, clamp speed, smooth heading, then advance position."""
    vx = velocities[i, 0] + fx * dt
    vy = velocities[i, 1] + fy * dt

    speed = math.sqrt(vx * vx + vy * vy)
    if speed > max_speed:
        vx = vx / speed * max_speed
        vy = vy / speed * max_speed

    # Steer by the raw force, not the clamped velocity
    vx, vy = turn_towards(vx, vy, fx, fy, rad_step)

    velocities[i, 0] = vx
    velocities[i, 1] = vy
    positions[i, 0] += vx * dt
    positions[i, 1] += vy * dt


@njit(cache=True)
def update_sequential(
    positions: np.ndarray,
    velocities: np.ndarray,
    is_agent: np.ndarray,
    separation: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    boundary: np.ndarray,
    width: float,
    height: float,
    margin: float,
    dist_threshold: float,
    avoid_factor: float,
    alignement_factor: float,
    centering_factor: float,
    turn_factor: float,
    max_speed: float,
    rad_step: float,
    dt: float
):
    """Update agents in order, in place; later agents see earlier agents' new state."""
    n = positions.shape[0]
    for i in range(n):
        if not is_agent[i]:
            continue

        accumulate_agent_forces(
            i, positions, velocities, is_agent,
            separation, alignment, cohesion, boundary,
            width, height, margin, dist_threshold,
            avoid_factor, alignement_factor, centering_factor, turn_factor
        )
        fx = separation[i, 0] + alignment[i, 0] + cohesion[i, 0] + boundary[i, 0]
        fy = separation[i, 1] + alignment[i, 1] + cohesion[i, 1] + boundary[i, 1]
        integrate_agent(i, positions, velocities, fx, fy, max_speed, rad_step, dt)


@njit(parallel=True, cache=True)
def compute_flocking(
    positions: np.ndarray,
    velocities: np.ndarray,
    is_agent: np.ndarray,
    separation: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    boundary: np.ndarray,
    width: float,
    height: float,
    margin: float,
    dist_threshold: float,
    avoid_factor: float,
    alignement_factor: float,
    centering_factor: float,
    turn_factor: float
):
    """Compute force components of every agent against one unchanged state."""
    n = positions.shape[0]
    for i in prange(n):
        if is_agent[i]:
            accumulate_agent_forces(
                i, positions, velocities, is_agent,
                separation, alignment, cohesion, boundary,
                width, height, margin, dist_threshold,
                avoid_factor, alignement_factor, centering_factor, turn_factor
            )


@njit(cache=True)
def update_physics(
    positions: np.ndarray,
    velocities: np.ndarray,
    is_agent: np.ndarray,
    separation: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    boundary: np.ndarray,
    max_speed: float,
    rad_step: float,
    dt: float
):
    """Apply precomputed forces to every agent."""
    n = positions.shape[0]
    for i in range(n):
        if not is_agent[i]:
            continue
        fx = separation[i, 0] + alignment[i, 0] + cohesion[i, 0] + boundary[i, 0]
        fy = separation[i, 1] + alignment[i, 1] + cohesion[i, 1] + boundary[i, 1]
        integrate_agent(i, positions, velocities, fx, fy, max_speed, rad_step, dt)


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Forces(NamedTuple):
    """Per-entity steering components, one row per scene entity (zero for obstacles)."""
    separation: np.ndarray
    alignment: np.ndarray
    cohesion: np.ndarray
    boundary: np.ndarray

    @property
    def total(self) -> np.ndarray:
        return self.separation + self.alignment + self.cohesion + self.boundary


class Flock:
    """
    Flocking rule applied to every agent of a scene once per tick.

    Settings default to `config.BOIDS`; any key can be overridden.
    """

    def __init__(self, settings: Optional[dict] = None):
        params = dict(config.BOIDS)
        if settings:
            unknown = set(settings) - set(params)
            if unknown:
                raise KeyError(f"Unknown flock settings: {', '.join(sorted(unknown))}")
            params.update(settings)
        self.settings = params

        self.width = np.float64(params["width"])
        self.height = np.float64(params["height"])
        self.margin = np.float64(params["boundary_margin"])
        self.rad_step = np.float64(params["rad_step"])
        self.dist_threshold = np.float64(params["dist_threshold"])
        self.max_speed = np.float64(params["max_speed"])

        # Flocking parameters
        self.centering_factor = np.float64(params["centering_factor"])
        self.avoid_factor = np.float64(params["avoid_factor"])
        self.alignement_factor = np.float64(params["alignement_factor"])
        self.turn_factor = np.float64(params["turn_factor"])

        if params["update_mode"] not in UPDATE_MODES:
            raise ValueError(
                f"update_mode must be one of {UPDATE_MODES}, got {params['update_mode']!r}"
            )
        self.update_mode = params["update_mode"]

        # Forces of the most recent tick
        self.forces = self._empty_forces(0)
        self.tick_count = 0

        self._warmup_numba()

    def _warmup_numba(self):
        """Pre-compile Numba functions."""
        n = 4
        pos = np.random.rand(n, 2).astype(np.float64) * 100
        vel = np.random.rand(n, 2).astype(np.float64)
        mask = np.array([True, True, True, False])
        forces = self._empty_forces(n)

        update_sequential(
            pos, vel, mask, *forces,
            800.0, 600.0, 100.0, 50.0, 0.001, 0.01, 0.005, 0.05, 3.0, 0.01, 1.0
        )
        if self.update_mode == "snapshot":
            compute_flocking(
                pos, vel, mask, *forces,
                800.0, 600.0, 100.0, 50.0, 0.001, 0.01, 0.005, 0.05
            )
            update_physics(pos, vel, mask, *forces, 3.0, 0.01, 1.0)

    @staticmethod
    def _empty_forces(n: int) -> Forces:
        return Forces(*(np.zeros((n, 2), dtype=np.float64) for _ in range(4)))

    @staticmethod
    def _pack(entities):
        """Copy entity state into contiguous arrays for the kernels."""
        n = len(entities)
        positions = np.zeros((n, 2), dtype=np.float64)
        velocities = np.zeros((n, 2), dtype=np.float64)
        is_agent = np.zeros(n, dtype=np.bool_)
        for i, entity in enumerate(entities):
            positions[i] = entity.position
            if entity.kind is EntityKind.AGENT:
                velocities[i] = entity.payload.velocity
                is_agent[i] = True
        return positions, velocities, is_agent

    def _rule_params(self):
        return (
            float(self.width),
            float(self.height),
            float(self.margin),
            float(self.dist_threshold),
            float(self.avoid_factor),
            float(self.alignement_factor),
            float(self.centering_factor),
            float(self.turn_factor),
        )

    def compute_forces(self, scene) -> Forces:
        """Evaluate every agent's steering against the current scene, without moving anything."""
        entities = scene.iterate()
        positions, velocities, is_agent = self._pack(entities)
        forces = self._empty_forces(len(entities))
        if entities:
            compute_flocking(positions, velocities, is_agent, *forces, *self._rule_params())
        return forces

    def update(self, scene, dt: float = 1.0):
        """Advance every agent of the scene by one tick."""
        with scene.frozen() as entities:
            forces = self._empty_forces(len(entities))
            self.forces = forces
            if not entities:
                return

            positions, velocities, is_agent = self._pack(entities)
            dt64 = float(dt)

            if self.update_mode == "sequential":
                update_sequential(
                    positions, velocities, is_agent, *forces,
                    *self._rule_params(),
                    float(self.max_speed), float(self.rad_step), dt64
                )
            else:
                compute_flocking(positions, velocities, is_agent, *forces, *self._rule_params())
                update_physics(
                    positions, velocities, is_agent, *forces,
                    float(self.max_speed), float(self.rad_step), dt64
                )

            for i, entity in enumerate(entities):
                if is_agent[i]:
                    entity.position[:] = positions[i]
                    entity.payload.velocity[:] = velocities[i]

            self.tick_count += 1
