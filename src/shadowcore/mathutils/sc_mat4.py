"""
Mat4 - 4x4 affine transform in single precision.

Row-major storage, column-vector convention: a point is transformed as

    x' = m00*x + m01*y + m02*z + m03
    y' = m10*x + m11*y + m12*z + m13
    z' = m20*x + m21*y + m22*z + m23

with an implicit w = 1. The translation lives in the last column, which is
the layout a host engine hands over with a local-to-world matrix.
"""

import numpy as np

from shadowcore.mathutils.vec3 import Vec3
from shadowcore.sc_errors import InputContractError

_f32 = np.float32

# Identity matrix as tuple-of-tuples (immutable)
_IDENTITY_4x4_TUPLE = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0)
)


class Mat4:
    """Immutable 4x4 float32 matrix."""
    __slots__ = ('m',)

    def __init__(self, rows=_IDENTITY_4x4_TUPLE):
        object.__setattr__(self, 'm', tuple(
            tuple(_f32(v) for v in row) for row in rows
        ))

    def __setattr__(self, name, value):
        raise AttributeError("Mat4 is immutable")

    def __reduce__(self):
        return (Mat4, (self.m,))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls):
        return cls(_IDENTITY_4x4_TUPLE)

    @classmethod
    def translation(cls, x, y, z):
        return cls((
            (1.0, 0.0, 0.0, x),
            (0.0, 1.0, 0.0, y),
            (0.0, 0.0, 1.0, z),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def scale(cls, x, y, z):
        return cls((
            (x, 0.0, 0.0, 0.0),
            (0.0, y, 0.0, 0.0),
            (0.0, 0.0, z, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        ))

    @classmethod
    def from_sequence(cls, values):
        """Build from 16 row-major floats, a 4x4 nested sequence, or another Mat4.

        Raises:
            InputContractError: If the values do not form a 4x4 matrix.
        """
        if isinstance(values, Mat4):
            return values
        try:
            arr = np.asarray(values, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise InputContractError(f"Transform is not numeric: {e}") from e
        if arr.shape == (16,):
            arr = arr.reshape(4, 4)
        if arr.shape != (4, 4):
            raise InputContractError(
                f"Transform must hold 16 floats (4x4), got shape {arr.shape}"
            )
        return cls(arr)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __getitem__(self, index):
        return self.m[index]

    def __eq__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self.m == other.m

    def __hash__(self):
        return hash(self.m)

    def __repr__(self):
        rows = ", ".join(
            "(" + ", ".join(repr(float(v)) for v in row) + ")" for row in self.m
        )
        return f"Mat4({rows})"

    def is_identity(self):
        return self.m == Mat4.identity().m

    def to_array(self):
        """Copy into a (4, 4) float32 numpy array."""
        return np.array(self.m, dtype=np.float32)

    def to_tuple(self):
        return tuple(tuple(float(v) for v in row) for row in self.m)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def transform_point(self, point):
        """Transform a point (w = 1). Accepts a Vec3 or any indexable of 3."""
        m = self.m
        x, y, z = _f32(point[0]), _f32(point[1]), _f32(point[2])
        return Vec3(
            m[0][0] * x + m[0][1] * y + m[0][2] * z + m[0][3],
            m[1][0] * x + m[1][1] * y + m[1][2] * z + m[1][3],
            m[2][0] * x + m[2][1] * y + m[2][2] * z + m[2][3]
        )

    def multiply(self, other):
        """Matrix product self @ other (applies other first, then self)."""
        a = self.m
        b = other.m
        return Mat4(tuple(
            tuple(
                a[r][0] * b[0][c] + a[r][1] * b[1][c] + a[r][2] * b[2][c] + a[r][3] * b[3][c]
                for c in range(4)
            )
            for r in range(4)
        ))

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            return self.multiply(other)
        if isinstance(other, Vec3):
            return self.transform_point(other)
        return NotImplemented
