import unittest

from mesh_checks import balance_violations, structure

from treecutmesh.errors import InvalidDomainError, InvalidSettingsError
from treecutmesh.model.cell import Rect
from treecutmesh.model.level_sets import circle, flower
from treecutmesh.model.quadtree import get_leaf_cells
from treecutmesh.pre.mesher import MeshSettings, QuadtreeMesher, build
from treecutmesh.pre.refinement import is_mixed_cell


class TestBuild(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.level_set = staticmethod(circle(0.5, 0.5, 0.25))
        cls.tree = build(Rect(0.0, 0.0, 1.0, 1.0), cls.level_set, max_level=4, min_cell_size=0.001)
        cls.leaves = get_leaf_cells(cls.tree)

    def test_leaves_within_level_range(self):
        self.assertTrue(self.leaves)
        self.assertTrue(all(0 <= leaf.level <= 4 for leaf in self.leaves))
        self.assertTrue(all(leaf.is_leaf for leaf in self.leaves))

    def test_internal_cells_have_four_children(self):
        for cell in self.tree:
            self.assertIn(len(cell.children), (0, 4))
            for child in self.tree.children_of(cell):
                self.assertEqual(child.parent, cell.index)
                self.assertEqual(child.level, cell.level + 1)

    def test_leaves_tile_domain(self):
        self.assertAlmostEqual(sum(leaf.area for leaf in self.leaves), 1.0, places=12)

    def test_mesh_is_balanced(self):
        self.assertEqual(balance_violations(self.tree), [])
        self.assertEqual(self.tree.floor_hits, [])

    def test_interface_leaves_share_one_level(self):
        mixed = {leaf.level for leaf in self.leaves if is_mixed_cell(leaf, self.level_set)}
        self.assertEqual(mixed, {4})

    def test_build_is_deterministic(self):
        again = build(Rect(0.0, 0.0, 1.0, 1.0), self.level_set, max_level=4, min_cell_size=0.001)
        self.assertEqual(structure(again), structure(self.tree))

    def test_tuple_bounds_are_accepted(self):
        from_tuple = build((0.0, 0.0, 1.0, 1.0), self.level_set, max_level=4, min_cell_size=0.001)
        self.assertEqual(structure(from_tuple), structure(self.tree))


class TestMesher(unittest.TestCase):
    def test_invalid_domain(self):
        with self.assertRaises(InvalidDomainError):
            build((0.0, 0.0, 0.0, 1.0), circle(0.5, 0.5, 0.25))
        with self.assertRaises(InvalidDomainError):
            build((0.0, 0.0, 1.0, -1.0), circle(0.5, 0.5, 0.25))

    def test_invalid_settings(self):
        with self.assertRaises(InvalidSettingsError):
            MeshSettings(max_level=-1)
        with self.assertRaises(InvalidSettingsError):
            MeshSettings(max_level=2.5)
        with self.assertRaises(InvalidSettingsError):
            MeshSettings(min_cell_size=-0.1)
        with self.assertRaises(InvalidSettingsError):
            MeshSettings(lip_const=float("nan"))

    def test_non_numeric_settings_are_rejected(self):
        for kwargs in (
            {"max_level": "3"},
            {"max_level": None},
            {"max_level": True},
            {"min_cell_size": None},
            {"min_cell_size": "0.1"},
            {"lip_const": [1.0]},
        ):
            with self.subTest(**{key: repr(value) for key, value in kwargs.items()}):
                with self.assertRaises(InvalidSettingsError):
                    MeshSettings(**kwargs)

    def test_whole_float_level_is_accepted(self):
        settings = MeshSettings(max_level=4.0, min_cell_size=0, lip_const=2)
        self.assertEqual(settings.max_level, 4)
        self.assertIsInstance(settings.max_level, int)
        self.assertIsInstance(settings.min_cell_size, float)

    def test_stats_are_collected(self):
        level_set = flower(1.0, 1.0, 0.5)
        mesher = QuadtreeMesher(MeshSettings(max_level=5, min_cell_size=0.001))
        tree = mesher.generate(Rect(0.0, 0.0, 2.0, 2.0), level_set)
        stats = mesher.stats
        leaves = get_leaf_cells(tree)

        self.assertIsNotNone(stats)
        self.assertEqual(stats.num_cells, len(tree))
        self.assertEqual(stats.num_leaves, len(leaves))
        self.assertEqual(sum(stats.leaves_per_level.values()), len(leaves))
        self.assertEqual(stats.max_level, 5)
        self.assertGreater(stats.whitney_subdivisions, 0)
        self.assertGreater(stats.num_mixed, 0)
        self.assertEqual(stats.floor_hits, 0)
        self.assertEqual(balance_violations(tree), [])

    def test_max_level_zero_keeps_root(self):
        tree = build((0.0, 0.0, 1.0, 1.0), circle(0.5, 0.5, 0.25), max_level=0)
        self.assertEqual(len(tree), 1)
        self.assertTrue(tree.root.is_leaf)

    def test_interface_outside_domain(self):
        tree = build((0.0, 0.0, 1.0, 1.0), circle(10.0, 10.0, 0.5), max_level=6)
        self.assertEqual(len(tree), 1)

    def test_size_floor_limits_depth(self):
        tree = build((0.0, 0.0, 1.0, 1.0), circle(0.5, 0.5, 0.25), max_level=10, min_cell_size=0.1)
        self.assertTrue(all(leaf.width >= 0.0625 for leaf in get_leaf_cells(tree)))

    def test_generation_is_logged(self):
        with self.assertLogs("treecutmesh.pre.mesher", level="INFO") as captured:
            build((0.0, 0.0, 1.0, 1.0), circle(0.5, 0.5, 0.25), max_level=3)
        self.assertTrue(any("Quadtree generated" in message for message in captured.output))


if __name__ == "__main__":
    unittest.main()
