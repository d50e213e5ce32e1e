"""Test fixtures and utilities for shadowcore testing.

Organized into logical modules:
- meshes: Triangle pairs and caster meshes with known answers
- assertions: Custom assertion functions (assert_vec3_close, assert_segments_match, ...)
"""

from .meshes import (
    crossing_pair,
    CROSSING_PAIR_SEGMENT,
    stacked_pair,
    coplanar_adjacent_pair,
    folded_pair,
    missed_pair,
    single_triangle_caster,
    same_order_shared_edge_caster,
    quad_caster,
    split_vertex_quad_caster,
    tetrahedron_caster,
    fan_caster,
)
from .assertions import (
    assert_vec3_close,
    assert_segment_close,
    assert_segments_match,
    edge_set,
    undirected,
)

__all__ = [
    'crossing_pair',
    'CROSSING_PAIR_SEGMENT',
    'stacked_pair',
    'coplanar_adjacent_pair',
    'folded_pair',
    'missed_pair',
    'single_triangle_caster',
    'same_order_shared_edge_caster',
    'quad_caster',
    'split_vertex_quad_caster',
    'tetrahedron_caster',
    'fan_caster',
    'assert_vec3_close',
    'assert_segment_close',
    'assert_segments_match',
    'edge_set',
    'undirected',
]
