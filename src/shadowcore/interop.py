"""
Flat buffer boundary for host runtimes.

A host (game engine, native plugin, another process through shared memory)
talks to shadowcore with raw numeric buffers and fixed-layout records only.
The layouts below are packed little-endian, fields in declared order:

    VEC3_DTYPE       x, y, z float32                     12 bytes
    LINE3_DTYPE      a, b  (VEC3)                        24 bytes
    TRIANGLE3_DTYPE  a, b, c (VEC3)                      36 bytes
    MAT4_DTYPE       16 float32, row-major               64 bytes
    EDGE_DTYPE       a, b (VEC3), tri0, tri1 int32       32 bytes

Any buffer-protocol object (numpy array, bytes, bytearray, memoryview) or
plain sequence is accepted on input.

Buffer ownership:
    Inputs are only read during the call and never retained.
    calculate_edges() returns a freshly allocated numpy array that belongs
    to the caller; it is released with the last reference, there is no
    separate free entry point. A caller that manages its own storage passes
    `out`, an EDGE_DTYPE array with at least edge_capacity(index_count)
    records. The result is then the leading view out[:count] and no memory
    is allocated for the records.

Sentinels:
    - intersect() writes all-NaN endpoints when the triangles do not meet.
    - EDGE_DTYPE tri1 (or tri0) holds NO_TRIANGLE (-1) for "no owner".
"""

from typing import List, Optional, Sequence

import numpy as np
from numpy.lib import recfunctions as rfn

from shadowcore.mathutils.vec3 import Vec3
from shadowcore.mathutils.sc_mat4 import Mat4
from shadowcore.mathutils.sc_shapes import Line3, Triangle3
from shadowcore.solvers.sc_intersection_solver import TriangleIntersectionSolver
from shadowcore.solvers.sc_edge_solver import Caster, EdgeSolver, IndexedLine
from shadowcore.sc_errors import InputContractError


# =============================================================================
# Record Layouts
# =============================================================================

VEC3_DTYPE = np.dtype([('x', '<f4'), ('y', '<f4'), ('z', '<f4')])
LINE3_DTYPE = np.dtype([('a', VEC3_DTYPE), ('b', VEC3_DTYPE)])
TRIANGLE3_DTYPE = np.dtype([('a', VEC3_DTYPE), ('b', VEC3_DTYPE), ('c', VEC3_DTYPE)])
MAT4_DTYPE = np.dtype(('<f4', (4, 4)))
EDGE_DTYPE = np.dtype([
    ('a', VEC3_DTYPE),
    ('b', VEC3_DTYPE),
    ('tri0', '<i4'),
    ('tri1', '<i4'),
])

NO_TRIANGLE = -1


# =============================================================================
# Input Conversion
# =============================================================================

def _float_buffer(buffer, name: str) -> np.ndarray:
    """Flatten any float-ish buffer into a 1-D float32 array."""
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        if memoryview(buffer).nbytes % 4 != 0:
            raise InputContractError(f"{name}: byte length is not a multiple of 4")
        return np.frombuffer(buffer, dtype='<f4')
    if isinstance(buffer, (np.ndarray, np.void)) and buffer.dtype.names is not None:
        # Record scalars (recs[i]) and 0-d records become 1-element arrays
        records = np.asarray(buffer).reshape(-1)
        return rfn.structured_to_unstructured(records, dtype=np.float32).reshape(-1)
    try:
        return np.asarray(buffer, dtype=np.float32).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InputContractError(f"{name}: not a float buffer ({e})") from e


def _index_buffer(buffer) -> np.ndarray:
    """Flatten an index buffer into a 1-D integer array."""
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        if memoryview(buffer).nbytes % 4 != 0:
            raise InputContractError("indices: byte length is not a multiple of 4")
        return np.frombuffer(buffer, dtype='<i4')
    arr = np.asarray(buffer)
    if arr.size == 0:
        return arr.astype(np.int64).reshape(-1)
    if arr.dtype.kind not in 'iu':
        raise InputContractError(f"indices: expected integers, got dtype {arr.dtype}")
    return arr.reshape(-1)


def _triangle(buffer, name: str) -> Triangle3:
    if isinstance(buffer, Triangle3):
        return buffer
    flat = _float_buffer(buffer, name)
    if flat.size != 9:
        raise InputContractError(f"{name}: a triangle needs 9 floats, got {flat.size}")
    return Triangle3(Vec3(*flat[0:3]), Vec3(*flat[3:6]), Vec3(*flat[6:9]))


def _write_vec3(target: np.ndarray, vectors: Sequence[Vec3]) -> None:
    target['x'] = np.array([v.x for v in vectors], dtype=np.float32)
    target['y'] = np.array([v.y for v in vectors], dtype=np.float32)
    target['z'] = np.array([v.z for v in vectors], dtype=np.float32)


def _read_vec3(record) -> Vec3:
    return Vec3(record['x'], record['y'], record['z'])


# =============================================================================
# Triangle Intersection
# =============================================================================

def intersect(a, b) -> np.ndarray:
    """
    Intersection segment of two triangles as a LINE3_DTYPE record.

    Args:
        a, b: 9 floats each (three packed VEC3 corners), a TRIANGLE3_DTYPE
            record, or a Triangle3

    Returns:
        0-d LINE3_DTYPE array. Both endpoints are all-NaN when the triangles
        do not intersect; check with np.isnan rather than expecting an error.
    """
    line = TriangleIntersectionSolver.intersect(_triangle(a, 'a'), _triangle(b, 'b'))
    record = np.empty((), dtype=LINE3_DTYPE)
    record['a'] = (line.a.x, line.a.y, line.a.z)
    record['b'] = (line.b.x, line.b.y, line.b.z)
    return record


def line_from_record(record) -> Line3:
    """Convert a LINE3_DTYPE record back to a Line3."""
    if isinstance(record, np.ndarray):
        record = record[()]
    return Line3(_read_vec3(record['a']), _read_vec3(record['b']))


# =============================================================================
# Edge Extraction
# =============================================================================

def edge_capacity(index_count: int) -> int:
    """Upper bound on the edges a mesh with index_count corners can produce."""
    if index_count < 0:
        raise InputContractError(f"Index count must be non-negative, got {index_count}")
    return int(index_count)


def _check_out(out, required: int) -> None:
    if not isinstance(out, np.ndarray) or out.dtype != EDGE_DTYPE or out.ndim != 1:
        raise InputContractError("out must be a 1-D array with dtype EDGE_DTYPE")
    if len(out) < required:
        raise InputContractError(
            f"out holds {len(out)} records, at least {required} required"
        )


def edges_to_records(edges: Sequence[IndexedLine], out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Pack IndexedLine objects into EDGE_DTYPE records.

    Args:
        edges: Edges to pack
        out: Optional caller-owned EDGE_DTYPE array with room for all edges

    Returns:
        The filled records (out[:len(edges)] when out is given)
    """
    count = len(edges)
    if out is None:
        records = np.empty(count, dtype=EDGE_DTYPE)
    else:
        _check_out(out, count)
        records = out[:count]

    _write_vec3(records['a'], [e.line.a for e in edges])
    _write_vec3(records['b'], [e.line.b for e in edges])
    records['tri0'] = np.array(
        [NO_TRIANGLE if e.tris[0] is None else e.tris[0] for e in edges], dtype=np.int32
    )
    records['tri1'] = np.array(
        [NO_TRIANGLE if e.tris[1] is None else e.tris[1] for e in edges], dtype=np.int32
    )
    return records


def edges_from_records(records: np.ndarray) -> List[IndexedLine]:
    """Unpack EDGE_DTYPE records into IndexedLine objects."""
    result = []
    for record in records:
        tri0 = int(record['tri0'])
        tri1 = int(record['tri1'])
        result.append(IndexedLine(
            line=Line3(_read_vec3(record['a']), _read_vec3(record['b'])),
            tris=(
                None if tri0 == NO_TRIANGLE else tri0,
                None if tri1 == NO_TRIANGLE else tri1,
            ),
        ))
    return result


def calculate_edges(vertices, indices, transform=None, out: Optional[np.ndarray] = None,
                    canonicalize: bool = True, apply_transform: bool = True) -> np.ndarray:
    """
    Distinct mesh edges with owning triangles, as EDGE_DTYPE records.

    Args:
        vertices: Packed float32 positions (3 per vertex), shape (N, 3), or
            a VEC3_DTYPE array
        indices: int32 triangle corners, length a multiple of 3
        transform: 16 row-major floats, a (4, 4) array, a Mat4, or None
        out: Optional caller-owned EDGE_DTYPE output buffer with at least
            edge_capacity(len(indices)) records
        canonicalize: Merge opposite-winding traversals of shared edges
        apply_transform: Compare vertices after placing them through transform

    Returns:
        EDGE_DTYPE records, NO_TRIANGLE in tri1 for boundary edges

    Raises:
        InputContractError: On malformed buffers, out-of-range indices or a
            too-small out buffer. Nothing is written to out in that case.
    """
    flat = _float_buffer(vertices, 'vertices')
    if flat.size % 3 != 0:
        raise InputContractError(f"vertices: {flat.size} floats is not a multiple of 3")
    idx = _index_buffer(indices)
    matrix = Mat4.identity() if transform is None else Mat4.from_sequence(transform)
    if out is not None:
        _check_out(out, edge_capacity(idx.size))

    caster = Caster(
        vertices=[Vec3(*row) for row in flat.reshape(-1, 3)],
        indices=idx.tolist(),
        transform=matrix,
    )
    edges = EdgeSolver.solve(caster, canonicalize=canonicalize, apply_transform=apply_transform)
    return edges_to_records(edges, out)


# =============================================================================
# Layout Checks
# =============================================================================

def sum_vectors(buffer) -> Vec3:
    """
    Sum a packed VEC3 buffer in float32, in buffer order.

    Lets a host confirm its vertex layout (stride, component order) matches
    VEC3_DTYPE before handing over real meshes.
    """
    flat = _float_buffer(buffer, 'buffer')
    if flat.size % 3 != 0:
        raise InputContractError(f"buffer: {flat.size} floats is not a multiple of 3")
    total = Vec3.zero()
    for row in flat.reshape(-1, 3):
        total = total + Vec3(*row)
    return total
