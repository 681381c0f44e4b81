"""
2D Boids Simulation
===================

Agents flock by separation, alignment and cohesion while avoiding
obstacles and the window edges.

Controls:
    - Left click: Add an agent, or toggle selection of the entity under the cursor
    - Right click: Add an obstacle
    - SPACE: Pause/Resume simulation
    - BACKSPACE: Remove all agents
    - H: Toggle help text
    - ESC: Quit

Usage:
    python main.py                     # Empty scene
    python main.py --agents 50         # Start with 50 random agents
    python main.py --snapshot          # Order-independent update scheme
"""

import argparse

from core import Application


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Interactive 2D boids flocking simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, help="Window/world width in pixels")
    parser.add_argument("--height", type=int, help="Window/world height in pixels")
    parser.add_argument("--agents", type=int, default=0, help="Number of random agents to start with")
    parser.add_argument("--snapshot", action="store_true",
                        help="Compute all forces from the pre-tick state before moving any agent")
    return parser.parse_args(argv)


def build_settings(args) -> dict:
    settings = {}
    if args.width:
        settings["width"] = float(args.width)
    if args.height:
        settings["height"] = float(args.height)
    if args.agents:
        settings["initial_count"] = args.agents
    if args.snapshot:
        settings["update_mode"] = "snapshot"
    return settings


def main(argv=None):
    args = parse_args(argv)
    app = Application(build_settings(args))
    app.run()


if __name__ == "__main__":
    main()
