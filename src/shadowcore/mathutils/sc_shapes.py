"""
Line3 and Triangle3 - composite value types built on Vec3.
"""

import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from shadowcore.mathutils.vec3 import Vec3
from shadowcore.mathutils.sc_mat4 import Mat4
from shadowcore.sc_errors import InputContractError


@dataclass(frozen=True)
class Line3:
    """An ordered segment from a to b.

    Equality and hash are exact on both endpoints in order, so (a, b) and
    (b, a) are different keys. Use canonical() to merge them.
    """
    a: Vec3
    b: Vec3

    @staticmethod
    def nan() -> 'Line3':
        """The "no result" sentinel: both endpoints all-NaN."""
        return Line3(Vec3.nan(), Vec3.nan())

    def is_nan(self) -> bool:
        """True if either endpoint has a NaN component."""
        return self.a.is_nan() or self.b.is_nan()

    def reversed(self) -> 'Line3':
        return Line3(self.b, self.a)

    def canonical(self) -> 'Line3':
        """Endpoints ordered by the Vec3 bit-pattern total order."""
        if self.b.bits() < self.a.bits():
            return Line3(self.b, self.a)
        return self

    def length(self):
        return (self.b - self.a).length()

    def to_tuple(self) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
        return (self.a.to_tuple(), self.b.to_tuple())


@dataclass(frozen=True)
class Triangle3:
    """An ordered vertex triple. Winding only sets the sign of the normal."""
    a: Vec3
    b: Vec3
    c: Vec3

    def __iter__(self):
        yield self.a
        yield self.b
        yield self.c

    def normal(self) -> Vec3:
        """Unnormalized normal (b-a)x(c-a); its length is twice the area."""
        return (self.b - self.a).cross(self.c - self.a)

    def plane(self):
        """Plane equation (n, d) with n.p + d = 0 for points on the plane."""
        n = self.normal()
        return n, -n.dot(self.a)

    def transformed(self, transform: Mat4) -> 'Triangle3':
        with np.errstate(over='ignore', invalid='ignore', under='ignore'):
            return Triangle3(
                transform.transform_point(self.a),
                transform.transform_point(self.b),
                transform.transform_point(self.c),
            )

    @staticmethod
    def from_points(a, b, c) -> 'Triangle3':
        """Build from three indexables of 3 numbers (tuples, lists, Vec3)."""
        return Triangle3(Vec3.from_sequence(a), Vec3.from_sequence(b), Vec3.from_sequence(c))

    @staticmethod
    def from_mesh(vertices: Sequence, indices: Sequence[int], triangle_index: int = 0,
                  transform: Optional[Mat4] = None) -> 'Triangle3':
        """
        Build the triangle_index-th triangle of an indexed mesh.

        Args:
            vertices: Vertex positions (Vec3 or indexables of 3)
            indices: Flat index buffer, one entry per triangle corner
            triangle_index: Which corner triple to read
            transform: Optional local-to-world transform applied to the corners

        Raises:
            InputContractError: If the triangle or one of its indices is out of range
        """
        start = triangle_index * 3
        if triangle_index < 0 or start + 3 > len(indices):
            raise InputContractError(
                f"Triangle {triangle_index} out of range for {len(indices) // 3} triangles"
            )
        corners = []
        for i in indices[start:start + 3]:
            if not isinstance(i, numbers.Integral) or isinstance(i, bool):
                raise InputContractError(f"Vertex index {i!r} is not an integer")
            i = int(i)
            if i < 0 or i >= len(vertices):
                raise InputContractError(
                    f"Vertex index {i} out of range for {len(vertices)} vertices"
                )
            corners.append(Vec3.from_sequence(vertices[i]))
        tri = Triangle3(corners[0], corners[1], corners[2])
        if transform is not None:
            tri = tri.transformed(transform)
        return tri
