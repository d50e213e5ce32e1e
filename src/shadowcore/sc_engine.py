"""
shadowcore engine - main entry point for Python callers.

Wraps the solvers with configuration, statistics and optional profiling.

Usage:
    from shadowcore import solve_edges, solve_intersection, ShadowCoreConfig

    # Simple usage with defaults
    result = solve_edges(caster)
    result.edges            # List[IndexedLine]
    result.boundary_edges() # silhouette candidates regardless of light

    # With configuration
    config = ShadowCoreConfig(canonicalize_edges=False)
    result = solve_edges(caster, config=config)

    # Reproduce the original native library output exactly
    result = solve_edges(caster, config=ShadowCoreConfig.native_compatible())

    # With profiling
    result = solve_edges(caster, profile=True)
    print(result.timings)
    # {'edge_solver': {'count': 1, 'total_ms': 0.4, 'avg_ms': 0.4}, ...}
"""

import logging
import os
import warnings
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from shadowcore.mathutils.sc_shapes import Line3, Triangle3
from shadowcore.profiling import (
    TIMING_DISABLED,
    record_timings,
    clear_timings,
    section_timings,
    timed_section,
)
from shadowcore.sc_errors import ConfigurationError
from shadowcore.solvers import Caster, EdgeSolver, IndexedLine, TriangleIntersectionSolver

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

_ENV_FLAGS = {
    'canonicalize_edges': 'SHADOWCORE_CANONICALIZE_EDGES',
    'apply_transform': 'SHADOWCORE_APPLY_TRANSFORM',
    'profile': 'SHADOWCORE_PROFILE',
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass
class ShadowCoreConfig:
    """
    Configuration options for shadowcore calls.

    Attributes:
        canonicalize_edges: Order edge endpoints before deduplication so a
            shared edge walked in opposite directions by its two triangles
            becomes one entry with two owners. When False, edges are keyed
            exactly as built from each triangle, (v0,v1), (v1,v2), (v2,v0).

        apply_transform: Place caster vertices through the caster transform
            before edge extraction. When False the transform is ignored.

        profile: Collect timings of instrumented sections into the result.

        options: Free-form extra options carried for callers.
    """
    canonicalize_edges: bool = True
    apply_transform: bool = True
    profile: bool = False

    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def native_compatible(cls) -> 'ShadowCoreConfig':
        """Directed edge keys and an ignored transform, like the native library."""
        return cls(canonicalize_edges=False, apply_transform=False)

    @classmethod
    def from_env(cls, environ=None) -> 'ShadowCoreConfig':
        """
        Build a config from SHADOWCORE_* environment variables.

        Recognized: SHADOWCORE_CANONICALIZE_EDGES, SHADOWCORE_APPLY_TRANSFORM,
        SHADOWCORE_PROFILE with values 1/0, true/false, yes/no, on/off.
        Unset variables keep the defaults.

        Raises:
            ConfigurationError: If a variable holds an unrecognized value.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for attr, var in _ENV_FLAGS.items():
            raw = environ.get(var)
            if raw is None or raw == '':
                continue
            lowered = raw.strip().lower()
            if lowered in _TRUE_VALUES:
                values[attr] = True
            elif lowered in _FALSE_VALUES:
                values[attr] = False
            else:
                raise ConfigurationError(f"{var}={raw!r} is not a boolean flag")
        return cls(**values)


@dataclass
class EdgeResult:
    """
    Result from solve_edges.

    Attributes:
        edges: Distinct edges with their owning triangles.
        timings: Timing data from profiled sections (if config.profile=True).
            Each key is a section name, value contains count, total_ms
            and avg_ms.
        stats: Counts of triangles and edges by kind.
    """
    edges: List[IndexedLine]
    timings: Optional[Dict[str, Any]] = None
    stats: Optional[Dict[str, int]] = None

    def boundary_edges(self) -> List[IndexedLine]:
        """Edges with a single owner (permanent silhouette candidates)."""
        return [e for e in self.edges if e.is_boundary]

    def interior_edges(self) -> List[IndexedLine]:
        """Edges shared by two triangles (need a facing test against the light)."""
        return [e for e in self.edges if e.is_interior]


# =============================================================================
# Internal Helpers
# =============================================================================

def _effective_config(config: Optional[ShadowCoreConfig], **overrides) -> ShadowCoreConfig:
    if config is None:
        config = ShadowCoreConfig()
    elif not isinstance(config, ShadowCoreConfig):
        raise ConfigurationError(f"config must be a ShadowCoreConfig, got {type(config).__name__}")
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **changes) if changes else config


def _start_profiling(config: ShadowCoreConfig) -> bool:
    if not config.profile:
        return False
    if TIMING_DISABLED:
        warnings.warn("Timings are compiled out (SHADOWCORE_NO_PROFILING or -O); none collected")
        return False
    clear_timings()
    record_timings(True)
    return True


def _collect_stats(caster: Caster, edges: List[IndexedLine]) -> Dict[str, int]:
    stats = {
        'triangle_count': caster.triangle_count,
        'vertex_count': len(caster.vertices),
        'edge_count': len(edges),
        'boundary_edge_count': 0,
        'interior_edge_count': 0,
    }
    for edge in edges:
        if edge.is_boundary:
            stats['boundary_edge_count'] += 1
        elif edge.is_interior:
            stats['interior_edge_count'] += 1
    return stats


# =============================================================================
# Main API
# =============================================================================

def solve_intersection(a: Triangle3, b: Triangle3) -> Line3:
    """
    Intersection segment of two triangles.

    Returns:
        The segment, or Line3.nan() when the triangles do not intersect.
        Check result.is_nan(); no exception is raised for disjoint input.
    """
    return TriangleIntersectionSolver.intersect(a, b)


def solve_edges(
    caster: Caster,
    config: Optional[ShadowCoreConfig] = None,
    *,
    # Convenience kwargs that override config
    canonicalize_edges: Optional[bool] = None,
    apply_transform: Optional[bool] = None,
    profile: Optional[bool] = None,
) -> EdgeResult:
    """
    Extract the distinct edges of a caster mesh with their owning triangles.

    Args:
        caster: The mesh (vertices, indices, transform).
        config: Configuration options (ShadowCoreConfig instance).
        canonicalize_edges: Override config.canonicalize_edges.
        apply_transform: Override config.apply_transform.
        profile: Override config.profile.

    Returns:
        EdgeResult with edges, stats and (when profiling) timings.

    Raises:
        InputContractError: If the caster's index buffer is invalid.
        ConfigurationError: If config is not a ShadowCoreConfig.

    Examples:
        result = solve_edges(caster)
        for edge in result.boundary_edges():
            ...

        result = solve_edges(caster, apply_transform=False, profile=True)
    """
    config = _effective_config(
        config,
        canonicalize_edges=canonicalize_edges,
        apply_transform=apply_transform,
        profile=profile,
    )
    profiling = _start_profiling(config)

    try:
        with timed_section("solve_edges"):
            edges = EdgeSolver.solve(
                caster,
                canonicalize=config.canonicalize_edges,
                apply_transform=config.apply_transform,
            )

        timings = section_timings() if profiling else None
        stats = _collect_stats(caster, edges)
        logger.debug(
            "solve_edges: %(triangle_count)d triangles -> %(edge_count)d edges "
            "(%(boundary_edge_count)d boundary, %(interior_edge_count)d interior)",
            stats,
        )

        return EdgeResult(edges=edges, timings=timings, stats=stats)

    finally:
        if profiling:
            record_timings(False)
