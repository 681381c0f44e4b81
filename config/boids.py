"""Configuration for the 2D Boids flocking simulation."""

WINDOW = {
    "width": 800,
    "height": 600,
    "title": "BOIDS",
    "fps": 100,                # One simulation tick per frame
}

BOIDS = {
    # World bounds (match the window)
    "width": 800.0,
    "height": 600.0,
    "boundary_margin": 100.0,  # Agents start turning this far from an edge

    "rad_step": 0.01,          # Max heading change per tick (radians)
    "dist_threshold": 50.0,    # Separation radius, also obstacle reach
    "max_speed": 3.0,

    # Flocking behavior
    "centering_factor": 0.005,   # How much the boid will turn towards the barycenter
    "avoid_factor": 0.001,       # How much the boid will turn away from another boid
    "alignement_factor": 0.01,   # How much the boid will align with other boids
    "turn_factor": 0.05,         # How much the boid will turn away from the screen edges

    "size": 5.0,
    "initial_velocity": (1.0, 0.0),
    "initial_count": 0,
    "update_mode": "sequential",  # or "snapshot"
}

OBSTACLES = {
    "size": 10.0,
}

SELECTION = {
    "radius": 10.0,
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "agent": (1.0, 0.0, 0.0),
    "agent_selected": (0.0, 1.0, 1.0),
    "obstacle": (0.0, 1.0, 0.0),
    "obstacle_selected": (1.0, 1.0, 0.0),
    "margin": (0.15, 0.15, 0.2),
    "text": (230, 230, 230),
}
