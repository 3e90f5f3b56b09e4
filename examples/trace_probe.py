#!/usr/bin/env python3
"""Trace a grid of rays through a small scene and report hit statistics.

This script exercises the intersection core end to end: it builds a world
with a Lambertian sphere resting on a checkered quad floor, fires one ray
per grid cell from a pinhole at the origin, follows each ray for a few
diffuse bounces, and prints how many rays hit, scattered and escaped along
with the per-shape intersection counters.

Usage:
    python -m examples.trace_probe [options]

Options:
    --width WIDTH       Rays across (default: 64)
    --height HEIGHT     Rays down (default: 64)
    --bounces BOUNCES   Maximum bounces per ray (default: 4)
    --arch ARCH         Taichi backend (default: TRACECORE_ARCH or cpu)
    --seed SEED         Random seed for scattering (default: 0)
    --verbose           Log object creation

Example:
    python -m examples.trace_probe --width 128 --height 128 --bounces 8
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Trace a grid of rays and report hit statistics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=64, help="Rays across (default: 64)")
    parser.add_argument("--height", type=int, default=64, help="Rays down (default: 64)")
    parser.add_argument(
        "--bounces",
        type=int,
        default=4,
        help="Maximum bounces per ray (default: 4)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default=None,
        help="Taichi backend (default: TRACECORE_ARCH or cpu)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("--verbose", action="store_true", help="Log object creation")
    return parser.parse_args()


def build_scene() -> None:
    """Populate the world with a sphere on a checkered floor."""
    from tracecore.materials.material import MaterialSpec
    from tracecore.scene.world import add_quad_object, add_sphere_object, clear_world

    clear_world()
    floor = MaterialSpec.checker((0.9, 0.9, 0.9), (0.2, 0.3, 0.1), scale=0.5)
    add_quad_object((-4.0, -0.5, -6.0), (0.0, 0.0, 6.0), (8.0, 0.0, 0.0), floor)
    add_sphere_object((0.0, 0.0, -2.0), 0.5, MaterialSpec.lambertian((0.7, 0.3, 0.3)))
    add_sphere_object((1.2, 0.0, -2.5), 0.5, MaterialSpec.none())


def trace_grid(width: int, height: int, bounces: int) -> dict[str, int]:
    """Trace one ray per grid cell and tally what happened to it.

    Args:
        width: Number of rays across.
        height: Number of rays down.
        bounces: Maximum number of scatter events per ray.

    Returns:
        Counts of primary hits, scatter events, absorbed and escaped rays.
    """
    from tracecore.core.interval import make_interval
    from tracecore.core.ray import Ray, vec3
    from tracecore.geometry.sphere import SELF_INTERSECTION_EPSILON
    from tracecore.scene.world import intersect_world, scatter_world_hit

    tallies = ti.field(dtype=ti.i32, shape=4)

    @ti.kernel
    def trace():
        for i, j in ti.ndrange(width, height):
            u = (i + 0.5) / width * 2.0 - 1.0
            v = (j + 0.5) / height * 2.0 - 1.0
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(u, v, -1.0))
            done = 0
            for depth in range(bounces + 1):
                if done == 0:
                    hit = intersect_world(ray, make_interval(SELF_INTERSECTION_EPSILON, ti.math.inf))
                    if hit.record.hit == 0:
                        ti.atomic_add(tallies[3], 1)
                        done = 1
                    else:
                        if depth == 0:
                            ti.atomic_add(tallies[0], 1)
                        scattered = scatter_world_hit(ray, hit)
                        if scattered.scattered == 0 or depth == bounces:
                            ti.atomic_add(tallies[2], 1)
                            done = 1
                        else:
                            ti.atomic_add(tallies[1], 1)
                            ray = scattered.ray

    trace()
    counts = tallies.to_numpy()
    return {
        "primary_hits": int(counts[0]),
        "scatters": int(counts[1]),
        "absorbed": int(counts[2]),
        "escaped": int(counts[3]),
    }


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from tracecore.config import TracerConfig, init_tracer

    config = TracerConfig.from_env()
    if args.arch is not None:
        config.arch = args.arch
    config.random_seed = args.seed
    if args.verbose:
        config.log_level = "DEBUG"
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")

    try:
        init_tracer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from tracecore.core.stats import get_intersection_counts, reset_intersection_counts
    from tracecore.scene.world import get_object_count, world_bounding_box

    build_scene()
    reset_intersection_counts()

    start_time = time.time()
    tallies = trace_grid(args.width, args.height, args.bounces)
    elapsed = time.time() - start_time

    lo, hi = world_bounding_box()
    print(f"Objects: {get_object_count()}")
    print(f"World bounds: {lo} .. {hi}")
    for name, value in tallies.items():
        print(f"  {name}: {value}")
    for kind, value in get_intersection_counts().items():
        print(f"  {kind} tests: {value}")
    print(f"Total time: {elapsed:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
