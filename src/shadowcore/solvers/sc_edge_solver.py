"""
Edge/adjacency solver - unique mesh edges and the triangles that own them.

A shadow-volume pass needs every edge of a caster mesh together with the
(at most two) triangles on either side of it:

    - one owner  -> boundary edge, always a silhouette candidate
    - two owners -> interior edge, a silhouette only when exactly one of the
                    two triangles faces the light (decided by the caller)

Edges are deduplicated by exact vertex coordinates (Vec3 bit patterns), not
by vertex index, so meshes that split vertices for UV/normal seams still
connect across the seam.

Main API:
    caster = Caster(vertices, indices, transform)
    edges = EdgeSolver.solve(caster)
    for edge in edges:
        edge.line        # Line3
        edge.tris        # (Optional[int], Optional[int])
        edge.is_boundary

Options:
    canonicalize: Order each edge's endpoints before deduplication so the
        two opposite-winding traversals of a shared edge merge into one
        entry. When off, edges are keyed as (v0,v1), (v1,v2), (v2,v0) exactly
        as built from each triangle.
    apply_transform: Place vertices through the caster transform before
        comparing them. When off the transform is carried but ignored.
"""

import logging
import numbers
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from shadowcore.mathutils.vec3 import Vec3
from shadowcore.mathutils.sc_mat4 import Mat4
from shadowcore.mathutils.sc_shapes import Line3, Triangle3
from shadowcore.profiling import timed
from shadowcore.sc_errors import InputContractError

logger = logging.getLogger(__name__)

# Indices cross the host boundary as int32
_INT32_MAX = 2**31 - 1


def _as_index(value, position: int) -> int:
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        raise InputContractError(
            f"Index {value!r} at position {position} is not an integer"
        )
    return int(value)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class Caster:
    """
    A shadow-casting mesh handed over by the host for one call.

    Attributes:
        vertices: Vertex positions (converted to Vec3)
        indices: Flat triangle index buffer; every 3 entries form a triangle
        transform: Local-to-world transform, identity by default
    """
    vertices: List[Vec3]
    indices: List[int]
    transform: Mat4 = field(default_factory=Mat4.identity)

    def __post_init__(self):
        self.vertices = [v if isinstance(v, Vec3) else Vec3.from_sequence(v) for v in self.vertices]
        self.indices = [_as_index(i, position) for position, i in enumerate(self.indices)]
        if self.transform is None:
            self.transform = Mat4.identity()
        elif not isinstance(self.transform, Mat4):
            self.transform = Mat4.from_sequence(self.transform)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def validate(self) -> None:
        """
        Check the index buffer against the vertex buffer.

        Raises:
            InputContractError: If the index count is not a multiple of 3 or
                an index is negative, beyond int32, or past the last vertex.
        """
        if len(self.indices) % 3 != 0:
            raise InputContractError(
                f"Index count {len(self.indices)} is not a multiple of 3"
            )
        vertex_count = len(self.vertices)
        for position, i in enumerate(self.indices):
            if i < 0 or i > _INT32_MAX or i >= vertex_count:
                raise InputContractError(
                    f"Index {i} at position {position} is out of range for {vertex_count} vertices"
                )

    def placed_vertices(self) -> List[Vec3]:
        """Vertices in transform space. Identity transforms keep exact bits."""
        if self.transform.is_identity():
            return list(self.vertices)
        transform_point = self.transform.transform_point
        with np.errstate(over='ignore', invalid='ignore', under='ignore'):
            return [transform_point(v) for v in self.vertices]

    def triangle(self, triangle_index: int, apply_transform: bool = True) -> Triangle3:
        """The triangle_index-th triangle, optionally placed through the transform."""
        return Triangle3.from_mesh(
            self.vertices,
            self.indices,
            triangle_index,
            self.transform if apply_transform and not self.transform.is_identity() else None,
        )


@dataclass(frozen=True)
class IndexedLine:
    """
    A distinct mesh edge and the triangle(s) it borders.

    Attributes:
        line: The edge segment
        tris: Owning triangle indices; (t, None) for a boundary edge,
            (t0, t1) with t0 < t1 for an interior edge
    """
    line: Line3
    tris: Tuple[Optional[int], Optional[int]]

    @property
    def owner_count(self) -> int:
        return sum(1 for t in self.tris if t is not None)

    @property
    def is_boundary(self) -> bool:
        """True if only one triangle owns this edge."""
        return self.owner_count == 1

    @property
    def is_interior(self) -> bool:
        """True if two triangles share this edge."""
        return self.owner_count == 2


# ============================================================================
# SOLVER
# ============================================================================

class EdgeSolver:
    """Builds the deduplicated, owner-annotated edge list of a caster mesh."""

    @staticmethod
    @timed("edge_solver")
    def solve(caster: Caster, canonicalize: bool = True, apply_transform: bool = True) -> List[IndexedLine]:
        """
        Find all distinct edges of a mesh and their owning triangles.

        Args:
            caster: The mesh to process
            canonicalize: Merge opposite-winding traversals of an edge
            apply_transform: Compare vertices in transform space

        Returns:
            IndexedLine list in first-seen order

        Raises:
            InputContractError: If the caster breaks the index contract
        """
        caster.validate()
        vertices = caster.placed_vertices() if apply_transform else caster.vertices
        indices = caster.indices

        edges = EdgeSolver._collect_edges(vertices, indices, canonicalize)
        owners = EdgeSolver._collect_owners(vertices, indices)

        result = []
        for line in edges:
            common = sorted(owners[line.a] & owners[line.b])
            if len(common) > 2:
                logger.debug("Non-manifold edge %s shared by triangles %s", line, common)
            result.append(IndexedLine(
                line=line,
                tris=(
                    common[0] if common else None,
                    common[1] if len(common) > 1 else None,
                ),
            ))

        logger.debug("Extracted %d edges from %d triangles", len(result), caster.triangle_count)
        return result

    @staticmethod
    def _collect_edges(vertices: Sequence[Vec3], indices: Sequence[int], canonicalize: bool) -> List[Line3]:
        """Distinct edges in first-seen order (dict keys keep insertion order)."""
        edges: Dict[Line3, None] = {}
        for corner in range(0, len(indices), 3):
            v0 = vertices[indices[corner]]
            v1 = vertices[indices[corner + 1]]
            v2 = vertices[indices[corner + 2]]
            for line in (Line3(v0, v1), Line3(v1, v2), Line3(v2, v0)):
                if canonicalize:
                    line = line.canonical()
                edges.setdefault(line, None)
        return list(edges)

    @staticmethod
    def _collect_owners(vertices: Sequence[Vec3], indices: Sequence[int]) -> Dict[Vec3, Set[int]]:
        """Reverse index: vertex position -> triangles using it as a corner."""
        owners: Dict[Vec3, Set[int]] = {}
        for position, i in enumerate(indices):
            owners.setdefault(vertices[i], set()).add(position // 3)
        return owners
