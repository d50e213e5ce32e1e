"""
Unit tests for the engine entry points and configuration.
"""

import unittest

from shadowcore import (
    solve_edges,
    solve_intersection,
    ShadowCoreConfig,
    EdgeResult,
    ConfigurationError,
    InputContractError,
    ShadowCoreError,
)
from shadowcore.mathutils import Mat4
from shadowcore.profiling import TIMING_DISABLED, is_recording
from shadowcore.solvers import Caster
from tests.test_fixtures import (
    crossing_pair,
    stacked_pair,
    quad_caster,
    tetrahedron_caster,
    single_triangle_caster,
    assert_segment_close,
    CROSSING_PAIR_SEGMENT,
)


class ConfigTests(unittest.TestCase):
    """Tests for ShadowCoreConfig"""

    def testDefaults(self):
        config = ShadowCoreConfig()
        self.assertTrue(config.canonicalize_edges)
        self.assertTrue(config.apply_transform)
        self.assertFalse(config.profile)
        self.assertEqual(config.options, {})

    def testNativeCompatible(self):
        """Test the native preset turns off both deviations"""
        config = ShadowCoreConfig.native_compatible()
        self.assertFalse(config.canonicalize_edges)
        self.assertFalse(config.apply_transform)

    def testFromEnv(self):
        """Test boolean flags are read from the environment"""
        config = ShadowCoreConfig.from_env({
            'SHADOWCORE_CANONICALIZE_EDGES': 'off',
            'SHADOWCORE_APPLY_TRANSFORM': 'False',
            'SHADOWCORE_PROFILE': '1',
        })
        self.assertFalse(config.canonicalize_edges)
        self.assertFalse(config.apply_transform)
        self.assertTrue(config.profile)

    def testFromEnvUnsetKeepsDefaults(self):
        """Test missing or empty variables keep the defaults"""
        self.assertEqual(ShadowCoreConfig.from_env({}), ShadowCoreConfig())
        self.assertEqual(ShadowCoreConfig.from_env({'SHADOWCORE_PROFILE': ''}), ShadowCoreConfig())

    def testFromEnvBadValue(self):
        """Test an unrecognized flag value raises"""
        with self.assertRaises(ConfigurationError):
            ShadowCoreConfig.from_env({'SHADOWCORE_APPLY_TRANSFORM': 'maybe'})

    def testErrorHierarchy(self):
        """Test both error kinds share the package base class"""
        self.assertTrue(issubclass(ConfigurationError, ShadowCoreError))
        self.assertTrue(issubclass(InputContractError, ShadowCoreError))
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class SolveEdgesTests(unittest.TestCase):
    """Tests for solve_edges()"""

    def testDefaultResult(self):
        """Test the default call returns edges and stats but no timings"""
        result = solve_edges(quad_caster())
        self.assertIsInstance(result, EdgeResult)
        self.assertEqual(len(result.edges), 5)
        self.assertIsNone(result.timings)
        self.assertEqual(result.stats, {
            'triangle_count': 2,
            'vertex_count': 4,
            'edge_count': 5,
            'boundary_edge_count': 4,
            'interior_edge_count': 1,
        })

    def testBoundaryAndInterior(self):
        """Test the result splits edges by owner count"""
        result = solve_edges(quad_caster())
        self.assertEqual(len(result.boundary_edges()), 4)
        self.assertEqual(len(result.interior_edges()), 1)
        self.assertEqual(solve_edges(tetrahedron_caster()).boundary_edges(), [])

    def testConfigObject(self):
        """Test options are taken from the config"""
        result = solve_edges(quad_caster(), ShadowCoreConfig(canonicalize_edges=False))
        self.assertEqual(len(result.edges), 6)

    def testKeywordOverride(self):
        """Test keyword arguments override the config"""
        config = ShadowCoreConfig(canonicalize_edges=False)
        result = solve_edges(quad_caster(), config, canonicalize_edges=True)
        self.assertEqual(len(result.edges), 5)
        # The caller's config is left untouched
        self.assertFalse(config.canonicalize_edges)

    def testNativeCompatibleIgnoresTransform(self):
        """Test the native preset keeps local coordinates and directed edges"""
        caster = single_triangle_caster(Mat4.translation(0, 0, 2))
        result = solve_edges(caster, ShadowCoreConfig.native_compatible())
        self.assertTrue(all(float(e.line.a.z) == 0.0 for e in result.edges))
        placed = solve_edges(caster)
        self.assertTrue(all(float(e.line.a.z) == 2.0 for e in placed.edges))

    def testNotAConfig(self):
        """Test a non-config object raises"""
        with self.assertRaises(ConfigurationError):
            solve_edges(quad_caster(), config={'canonicalize_edges': False})

    def testInvalidCaster(self):
        """Test contract errors propagate"""
        with self.assertRaises(InputContractError):
            solve_edges(Caster(vertices=[(0, 0, 0)], indices=[0, 0, 1]))

    @unittest.skipIf(TIMING_DISABLED, "timing compiled out")
    def testProfileTimings(self):
        """Test profiling collects timings and is switched off afterwards"""
        result = solve_edges(quad_caster(), profile=True)
        self.assertIn('edge_solver', result.timings)
        self.assertIn('solve_edges', result.timings)
        self.assertEqual(result.timings['edge_solver']['count'], 1)
        self.assertFalse(is_recording())

    @unittest.skipIf(TIMING_DISABLED, "timing compiled out")
    def testProfilingOffAfterError(self):
        """Test profiling is switched off even when the call raises"""
        with self.assertRaises(InputContractError):
            solve_edges(Caster(vertices=[], indices=[0]), profile=True)
        self.assertFalse(is_recording())


class SolveIntersectionTests(unittest.TestCase):
    """Tests for solve_intersection()"""

    def testCrossing(self):
        a, b = crossing_pair()
        assert_segment_close(self, solve_intersection(a, b), CROSSING_PAIR_SEGMENT)

    def testDisjoint(self):
        a, b = stacked_pair()
        self.assertTrue(solve_intersection(a, b).is_nan())


if __name__ == '__main__':
    unittest.main()
