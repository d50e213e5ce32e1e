"""
Geometry kernel: single-precision value types.

- Vec3: float32 vector with bit-exact equality/hash
- Line3: ordered segment, NaN sentinel for "no result"
- Triangle3: ordered vertex triple with plane helpers
- Mat4: row-major affine transform (translation in the last column)
"""

from .vec3 import Vec3
from .sc_mat4 import Mat4
from .sc_shapes import Line3, Triangle3

__all__ = ['Vec3', 'Mat4', 'Line3', 'Triangle3']
