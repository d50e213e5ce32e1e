"""
Single-precision 3D vector math.

This module provides Vec3, an immutable 3D vector whose components are
numpy float32 scalars. Every operation rounds to float32 after each step,
so results are bit-for-bit what a native f32 implementation produces.

Vec3 equality and hashing work on the raw bit patterns of the three
components. That makes a Vec3 usable as a dict/set key for exact
deduplication of mesh vertices:
    - two NaNs with identical bits are equal
    - 0.0 and -0.0 are different keys

Vec3 supports arithmetic operators (+, -, *, /) and indexing.
"""
import numpy as np

_f32 = np.float32
_NAN = np.float32(np.nan)


class Vec3:
    """
    An immutable float32 3D vector.

    Stores components directly as attributes for fast access.
    Supports indexing like a tuple for compatibility with buffer code.
    """
    __slots__ = ('x', 'y', 'z', '_key')

    def __init__(self, x=0.0, y=0.0, z=0.0):
        object.__setattr__(self, 'x', _f32(x))
        object.__setattr__(self, 'y', _f32(y))
        object.__setattr__(self, 'z', _f32(z))
        object.__setattr__(self, '_key', None)

    @classmethod
    def from_sequence(cls, values):
        """Build a Vec3 from any indexable of three numbers."""
        return cls(values[0], values[1], values[2])

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def nan(cls):
        """The all-NaN vector, used as the "no result" sentinel."""
        return cls(_NAN, _NAN, _NAN)

    def __setattr__(self, name, value):
        raise AttributeError("Vec3 is immutable")

    def __reduce__(self):
        return (Vec3, (self.x, self.y, self.z))

    def __getitem__(self, i):
        if i == 0: return self.x
        if i == 1: return self.y
        if i == 2: return self.z
        raise IndexError(f"Vec3 index {i} out of range")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __len__(self):
        return 3

    def __repr__(self):
        return f"Vec3({float(self.x)}, {float(self.y)}, {float(self.z)})"

    # ------------------------------------------------------------------
    # Exact identity
    # ------------------------------------------------------------------

    def bits(self):
        """Tuple of the uint32 bit patterns of (x, y, z)."""
        key = self._key
        if key is None:
            raw = np.array((self.x, self.y, self.z), dtype=np.float32).view(np.uint32)
            key = (int(raw[0]), int(raw[1]), int(raw[2]))
            object.__setattr__(self, '_key', key)
        return key

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.bits() == other.bits()

    def __ne__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.bits() != other.bits()

    def __hash__(self):
        return hash(self.bits())

    def is_nan(self):
        """True if any component is NaN."""
        return self.x != self.x or self.y != self.y or self.z != self.z

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other):
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar):
        s = _f32(scalar)
        return Vec3(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        s = _f32(scalar)
        with np.errstate(divide='ignore', invalid='ignore'):
            return Vec3(self.x / s, self.y / s, self.z / s)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other):
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """Cross product."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_sq(self):
        """Squared length (avoids sqrt)."""
        return self.dot(self)

    def length(self):
        """Vector length/magnitude."""
        return np.sqrt(self.dot(self))

    def normalized(self):
        """Return normalized copy. A zero vector normalizes to NaN."""
        return self / self.length()

    def to_tuple(self):
        """Convert to a tuple of Python floats."""
        return (float(self.x), float(self.y), float(self.z))

    def to_list(self):
        """Convert to a list of Python floats."""
        return [float(self.x), float(self.y), float(self.z)]
