"""
Triangle-triangle intersection solver (Moller's interval overlap test).

Given two triangles, finds the segment along which they cut through each
other. The computation is done entirely in float32 so the result matches a
native single-precision implementation bit for bit.

Algorithm:
    1. Plane of each triangle: n = (v1-v0)x(v2-v0) (unnormalized), d = -n.v0
    2. Signed distances of each triangle's vertices to the other's plane.
       If all three agree in sign (checked through products), the triangles
       cannot touch -> early rejection.
    3. Direction of the plane-plane line: L = nA x nB.
    4. Each triangle covers an interval of that line. The vertex alone on its
       side of the other plane is found, all vertices are projected onto the
       normalized L, and the two edges leaving the lone vertex are
       interpolated at their crossing with the other plane.
    5. The two intervals are intersected; an empty overlap means no
       intersection.
    6. The interval is lifted back into 3D from the point of L closest to
       the origin.

Degeneracy:
    Nearly parallel planes are not guarded: they produce NaN/inf values that
    flow into the result, following IEEE rules. Coplanar triangles (all
    distances exactly zero) are reported as no intersection.

Main API:
    # Sentinel style: NaN endpoints mean "no intersection"
    line = TriangleIntersectionSolver.intersect(a, b)
    if line.is_nan(): ...

    # Optional style
    line = TriangleIntersectionSolver.find(a, b)   # None when disjoint
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from shadowcore.mathutils.vec3 import Vec3
from shadowcore.mathutils.sc_shapes import Line3, Triangle3
from shadowcore.profiling import timed


# ============================================================================
# CONSTANTS
# ============================================================================

_ZERO = np.float32(0.0)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class LineInterval:
    """
    Parametric range [lo, hi] along the normalized plane-plane line that lies
    inside one triangle.
    """
    lo: np.float32
    hi: np.float32

    def overlap(self, other: 'LineInterval') -> 'LineInterval':
        """Overlap of two intervals. NaN bounds propagate."""
        return LineInterval(np.maximum(self.lo, other.lo), np.minimum(self.hi, other.hi))

    def is_empty(self) -> bool:
        return bool(self.lo > self.hi)


# ============================================================================
# SOLVER
# ============================================================================

class TriangleIntersectionSolver:
    """
    Single-pair triangle intersection. Pure and stateless; batching and
    broad-phase culling are left to the caller.
    """

    @staticmethod
    @timed("triangle_intersection")
    def intersect(a: Triangle3, b: Triangle3) -> Line3:
        """
        Intersection segment of two triangles.

        Returns:
            The segment, or Line3.nan() (both endpoints all-NaN) if the
            triangles do not intersect.
        """
        line = TriangleIntersectionSolver.find(a, b)
        return line if line is not None else Line3.nan()

    @staticmethod
    def find(a: Triangle3, b: Triangle3) -> Optional[Line3]:
        """Intersection segment of two triangles, or None if they do not intersect."""
        with np.errstate(divide='ignore', invalid='ignore', over='ignore', under='ignore'):
            return TriangleIntersectionSolver._solve(a, b)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _solve(a: Triangle3, b: Triangle3) -> Optional[Line3]:
        n_a, d_a = a.plane()
        dist_b = _signed_distances(n_a, d_a, b)
        if _same_side(dist_b):
            return None

        n_b, d_b = b.plane()
        dist_a = _signed_distances(n_b, d_b, a)
        if _same_side(dist_a):
            return None

        direction = n_a.cross(n_b)
        length_sq = direction.dot(direction)
        unit = direction / np.sqrt(length_sq)

        interval_a = _compute_interval(a, dist_a, unit)
        interval_b = _compute_interval(b, dist_b, unit)
        if interval_a is None or interval_b is None:
            return None

        overlap = interval_a.overlap(interval_b)
        if overlap.is_empty():
            return None

        # Point on the line closest to the origin. Each term strips one plane
        # normal's component from the other so n_a.p = -d_a and n_b.p = -d_b.
        base = (n_b.cross(direction) * -d_a + direction.cross(n_a) * -d_b) / length_sq

        return Line3(base + unit * overlap.lo, base + unit * overlap.hi)


def _signed_distances(normal: Vec3, offset, tri: Triangle3) -> Tuple[np.float32, np.float32, np.float32]:
    return (
        normal.dot(tri.a) + offset,
        normal.dot(tri.b) + offset,
        normal.dot(tri.c) + offset,
    )


def _same_side(dist) -> bool:
    d0, d1, d2 = dist
    return bool(d0 * d1 > _ZERO and d0 * d2 > _ZERO)


def _lone_vertex(dist) -> Optional[int]:
    """
    Index of the vertex on the opposite side of the plane from the other two,
    or None when all three distances are zero (coplanar).
    """
    d0, d1, d2 = dist
    if d0 * d1 > _ZERO:
        return 2
    if d0 * d2 > _ZERO:
        return 1
    if d1 * d2 > _ZERO or d0 != _ZERO:
        return 0
    if d1 != _ZERO:
        return 1
    if d2 != _ZERO:
        return 2
    return None


def _compute_interval(tri: Triangle3, dist, unit: Vec3) -> Optional[LineInterval]:
    lone = _lone_vertex(dist)
    if lone is None:
        return None

    proj = (unit.dot(tri.a), unit.dot(tri.b), unit.dot(tri.c))
    p_lone = proj[lone]
    d_lone = dist[lone]

    t0, t1 = (
        p_lone + (proj[other] - p_lone) * d_lone / (d_lone - dist[other])
        for other in (i for i in range(3) if i != lone)
    )
    if t0 > t1:
        t0, t1 = t1, t0
    return LineInterval(t0, t1)
