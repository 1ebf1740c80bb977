"""
Attractor Trails
================

Real-time trails of chaotic systems: a cloud of Lorenz trajectories or a
perturbed three-body orbit, each drawn as a fading line strip.

Usage:
    python main.py                             # Lorenz, 12 trajectories
    python main.py --system three_body         # Three-body system
    python main.py --count 40 --length 256     # More, shorter trails
    python main.py --distance-colors           # Color by distance to the lobes

Controls:
    - SPACE: Pause / resume
    - N: Add a trajectory
    - UP/DOWN: Double / halve trail length
    - C: Toggle distance coloring
    - O: Toggle parameter oscillation
    - H: Toggle help
    - ESC: Quit
"""

import argparse
import sys

from attractors import AttractorError, get_system


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Chaotic attractor trails")
    parser.add_argument("--system", default="lorenz", choices=["lorenz", "three_body"],
                        help="System to simulate")
    parser.add_argument("--count", "-n", type=int, help="Trajectories seeded at startup")
    parser.add_argument("--length", "-l", type=int, help="Points kept per trail")
    parser.add_argument("--steps", type=int, help="RK4 sub-steps per frame")
    parser.add_argument("--distance-colors", action="store_true",
                        help="Color trails by distance to the reference centers")
    parser.add_argument("--no-oscillation", action="store_true",
                        help="Hold the system parameters constant")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Deferred so --help works without a display
    from core import AttractorApplication

    try:
        app = AttractorApplication(
            get_system(args.system),
            count=args.count,
            trail_length=args.length,
            steps_per_frame=args.steps,
            distance_colors=args.distance_colors,
            oscillation=False if args.no_oscillation else None,
        )
    except (AttractorError, ValueError) as e:
        print(f"[App] {type(e).__name__}: {e}")
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
