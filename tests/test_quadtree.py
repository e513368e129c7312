import math
import unittest

from treecutmesh.errors import InvalidDomainError, QuadtreeError
from treecutmesh.model.cell import Cell, Direction, Quadrant, Rect
from treecutmesh.model.quadtree import are_neighbors, create_root, get_leaf_cells, subdivide


class TestQuadTree(unittest.TestCase):
    def test_create_root_is_level_zero_leaf(self):
        tree = create_root(0.0, 0.0, 1.0, 1.0)
        root = tree.root

        self.assertEqual(len(tree), 1)
        self.assertEqual(root.index, 0)
        self.assertEqual(root.level, 0)
        self.assertTrue(root.is_leaf)
        self.assertEqual(root.children, [])
        self.assertIsNone(root.parent)
        for direction in Direction:
            self.assertIsNone(root.neighbor(direction))

    def test_create_root_rejects_degenerate_domain(self):
        with self.assertRaises(InvalidDomainError):
            create_root(0.0, 0.0, 0.0, 1.0)
        with self.assertRaises(InvalidDomainError):
            create_root(0.0, 0.0, 1.0, -2.0)
        with self.assertRaises(ValueError):
            create_root(0.0, 0.0, math.inf, 1.0)

    def test_rect_from_tuple(self):
        rect = Rect.from_bounds((1, 2, 3, 4))
        self.assertEqual(rect, Rect(1.0, 2.0, 3.0, 4.0))
        self.assertEqual(rect.x_max, 4.0)
        self.assertEqual(rect.y_max, 6.0)

    def test_subdivide_tiles_parent(self):
        tree = create_root(-1.0, 2.0, 4.0, 2.0)
        root = tree.root
        children = subdivide(tree, root)

        self.assertFalse(root.is_leaf)
        self.assertEqual(len(children), 4)
        self.assertEqual(root.children, [child.index for child in children])

        sw, se, nw, ne = children
        self.assertEqual((sw.x_min, sw.y_min), (-1.0, 2.0))
        self.assertEqual((se.x_min, se.y_min), (1.0, 2.0))
        self.assertEqual((nw.x_min, nw.y_min), (-1.0, 3.0))
        self.assertEqual((ne.x_min, ne.y_min), (1.0, 3.0))
        self.assertIs(children[Quadrant.NE], ne)

        for child in children:
            self.assertEqual(child.level, 1)
            self.assertEqual(child.parent, root.index)
            self.assertIs(tree.parent_of(child), root)
            self.assertAlmostEqual(child.width, 2.0)
            self.assertAlmostEqual(child.height, 1.0)
        self.assertAlmostEqual(sum(child.area for child in children), root.area)

    def test_subdivide_twice_raises(self):
        tree = create_root(0.0, 0.0, 1.0, 1.0)
        subdivide(tree, tree.root)
        with self.assertRaises(QuadtreeError):
            subdivide(tree, tree.root)

    def test_get_leaf_cells(self):
        tree = create_root(0.0, 0.0, 1.0, 1.0)
        self.assertEqual(get_leaf_cells(tree), [tree.root])

        sw, se, nw, ne = subdivide(tree, tree.root)
        subdivide(tree, ne)
        leaves = get_leaf_cells(tree)

        self.assertEqual(len(leaves), 7)
        self.assertTrue(all(leaf.is_leaf for leaf in leaves))
        self.assertNotIn(ne, leaves)
        self.assertEqual(len(get_leaf_cells(tree, start=ne)), 4)
        self.assertEqual(tree.max_level, 2)

    def test_cell_identity_and_geometry(self):
        a = Cell(index=0, x_min=0.0, y_min=0.0, width=3.0, height=4.0, level=0)
        b = Cell(index=1, x_min=0.0, y_min=0.0, width=3.0, height=4.0, level=0)

        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)
        self.assertEqual(a.diagonal, 5.0)
        self.assertEqual(a.center, (1.5, 2.0))
        self.assertEqual(a.corners().shape, (4, 2))
        self.assertEqual(a.edge(Direction.EAST), (3.0, 0.0, 4.0))
        self.assertEqual(a.edge(Direction.NORTH), (4.0, 0.0, 3.0))

    def test_can_refine_respects_floors(self):
        cell = Cell(index=0, x_min=0.0, y_min=0.0, width=0.1, height=0.2, level=2)
        self.assertTrue(cell.can_refine(max_level=3, min_cell_size=0.05))
        self.assertFalse(cell.can_refine(max_level=2, min_cell_size=0.05))
        self.assertFalse(cell.can_refine(max_level=5, min_cell_size=0.15))

    def test_are_neighbors(self):
        tree = create_root(0.0, 0.0, 1.0, 1.0)
        sw, se, nw, ne = subdivide(tree, tree.root)
        sw.east = se.index

        self.assertTrue(are_neighbors(sw, se))
        self.assertFalse(are_neighbors(sw, ne))

    def test_direction_opposites(self):
        self.assertEqual(Direction.NORTH.opposite, Direction.SOUTH)
        self.assertEqual(Direction.EAST.opposite, Direction.WEST)
        self.assertTrue(Direction.SOUTH.is_horizontal)
        self.assertFalse(Direction.WEST.is_horizontal)


if __name__ == "__main__":
    unittest.main()
