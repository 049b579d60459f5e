"""Main entry point for the boid simulation."""

import argparse
import logging

from .config import BoidConfig
from .controls import ControlSurface
from .metrics import summarize
from .simulation import Simulation
from .visualize import BoidVisualizer, plot_single_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run an interactive boids flocking simulation')
    parser.add_argument('--num-boids', type=int, default=50, help='Number of boids')
    parser.add_argument('--frames', type=int, default=None,
                        help='Number of frames to simulate (default: run until the window closes)')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--width', type=float, default=800.0, help='World width')
    parser.add_argument('--height', type=float, default=600.0, help='World height')
    parser.add_argument('--save', type=str, default=None,
                        help='Save animation to file (e.g., boids.mp4 or boids.gif)')
    parser.add_argument('--snapshot', action='store_true',
                        help='Just save a single snapshot instead of animating')
    parser.add_argument('--headless', action='store_true',
                        help='Step the simulation without a window and print flock metrics')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging verbosity')
    return parser


def run_headless(simulation: Simulation, frames: int, report_every: int = 50):
    """Step the simulation ``frames`` times, printing metrics periodically."""
    for frame in range(1, frames + 1):
        simulation.update()
        if frame % report_every == 0 or frame == frames:
            stats = summarize(simulation.positions(), simulation.velocities(),
                              simulation.perception_radius)
            print(f"Frame {frame}: polarization={stats['polarization']:.3f} "
                  f"nearest={stats['nearest_neighbor']:.2f} "
                  f"neighbors={stats['mean_neighbors']:.1f} speed={stats['mean_speed']:.2f}")


def main(argv=None):
    """Run the boid simulation."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    config = BoidConfig(num_boids=args.num_boids, seed=args.seed,
                        world_width=args.width, world_height=args.height)
    simulation = Simulation(config.world_width, config.world_height, config=config)
    controls = ControlSurface(simulation)
    controls.boid_count = config.num_boids

    print(f"Initializing simulation with {simulation.count} boids...")
    print(f"World size: {simulation.width} x {simulation.height}")
    print(f"Perception radius: {simulation.perception_radius}")

    if args.headless:
        run_headless(simulation, args.frames or 500)
    elif args.snapshot:
        snapshot_path = args.save or 'boid_snapshot.png'
        if args.frames:
            run_headless(simulation, args.frames, report_every=args.frames)
        plot_single_frame(simulation, save_path=snapshot_path)
    elif args.save:
        frames = args.frames or 500
        print(f"Rendering {frames} frames...")
        visualizer = BoidVisualizer(simulation, controls, show_controls=False)
        visualizer.save_animation(args.save, num_frames=frames, fps=30)
    else:
        print("Starting interactive animation. Close the window to exit.")
        visualizer = BoidVisualizer(simulation, controls)
        anim = visualizer.animate(num_frames=args.frames)
        visualizer.show()


if __name__ == '__main__':
    main()
