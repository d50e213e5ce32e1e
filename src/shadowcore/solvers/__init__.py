"""
Solvers for shadow-casting geometry.

1. TriangleIntersectionSolver - segment where two triangles cut each other
2. EdgeSolver - distinct mesh edges annotated with their owning triangles
"""

from .sc_intersection_solver import (
    TriangleIntersectionSolver,
    LineInterval,
)

from .sc_edge_solver import (
    EdgeSolver,
    Caster,
    IndexedLine,
)

__all__ = [
    # Triangle intersection
    'TriangleIntersectionSolver',
    'LineInterval',
    # Edge extraction
    'EdgeSolver',
    'Caster',
    'IndexedLine',
]
