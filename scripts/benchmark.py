#!/usr/bin/env python
"""
Time edge extraction and triangle intersection on generated meshes.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --grid 64 --iterations 5
    python scripts/benchmark.py --grid 32 --native-compatible
"""

import argparse
import time

from shadowcore import Caster, ShadowCoreConfig, Triangle3, solve_edges, solve_intersection


def grid_caster(n: int) -> Caster:
    """n x n quad grid in the XZ plane, two triangles per quad."""
    vertices = [(float(x), 0.0, float(z)) for z in range(n + 1) for x in range(n + 1)]
    indices = []
    row = n + 1
    for z in range(n):
        for x in range(n):
            i = z * row + x
            indices += [i, i + row, i + 1, i + 1, i + row, i + row + 1]
    return Caster(vertices, indices)


def format_time(ms: float) -> str:
    if ms < 1.0:
        return f"{ms * 1000:.1f}us"
    return f"{ms:.2f}ms"


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('--grid', type=int, default=32, help='Grid resolution (quads per side)')
    parser.add_argument('--iterations', type=int, default=3, help='Timed iterations')
    parser.add_argument('--native-compatible', action='store_true',
                        help='Directed edge keys and ignored transform')
    args = parser.parse_args()

    caster = grid_caster(args.grid)
    config = ShadowCoreConfig.native_compatible() if args.native_compatible else ShadowCoreConfig()

    samples = []
    result = None
    for _ in range(args.iterations):
        start = time.perf_counter()
        result = solve_edges(caster, config=config)
        samples.append((time.perf_counter() - start) * 1000)

    print(f"Edges: {args.grid}x{args.grid} grid, {result.stats['triangle_count']} triangles")
    print(f"  {result.stats['edge_count']} edges "
          f"({result.stats['boundary_edge_count']} boundary, {result.stats['interior_edge_count']} interior)")
    print(f"  best {format_time(min(samples))}, avg {format_time(sum(samples) / len(samples))}")

    a = Triangle3.from_points((0, 0, 0), (2, 0, 0), (0, 2, 0))
    b = Triangle3.from_points((1, -1, -1), (1, -1, 1), (1, 1, 0))
    count = 10000
    start = time.perf_counter()
    for _ in range(count):
        solve_intersection(a, b)
    elapsed = (time.perf_counter() - start) * 1000
    print(f"Intersection: {format_time(elapsed / count)} per pair ({count} pairs)")


if __name__ == '__main__':
    main()
