"""shadowcore - triangle intersection and mesh edge adjacency for shadow rendering."""

__version__ = "0.1.0"

from shadowcore.mathutils import Vec3, Mat4, Line3, Triangle3
from shadowcore.solvers import Caster, IndexedLine, EdgeSolver, TriangleIntersectionSolver
from shadowcore.sc_engine import ShadowCoreConfig, EdgeResult, solve_edges, solve_intersection
from shadowcore.sc_errors import ShadowCoreError, InputContractError, ConfigurationError


__all__ = [
    'Vec3',
    'Mat4',
    'Line3',
    'Triangle3',
    'Caster',
    'IndexedLine',
    'EdgeSolver',
    'TriangleIntersectionSolver',
    'ShadowCoreConfig',
    'EdgeResult',
    'solve_edges',
    'solve_intersection',
    'ShadowCoreError',
    'InputContractError',
    'ConfigurationError',
]
