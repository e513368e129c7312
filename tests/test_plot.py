import unittest

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from treecutmesh.model.level_sets import circle  # noqa: E402
from treecutmesh.model.quadtree import create_root  # noqa: E402
from treecutmesh.pre.mesher import build  # noqa: E402
from treecutmesh.view.plot import plot_geometric_fractions, plot_interface_zoom, plot_quadtree  # noqa: E402


class TestPlot(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.level_set = staticmethod(circle(0.5, 0.5, 0.25))
        cls.tree = build((0.0, 0.0, 1.0, 1.0), cls.level_set, max_level=4)

    def tearDown(self) -> None:
        plt.close("all")

    def test_plot_quadtree(self):
        for color_by_level in (False, True):
            fig = plot_quadtree(self.tree, self.level_set, color_by_level=color_by_level)
            self.assertIsInstance(fig, Figure)
            self.assertEqual(len(fig.axes), 1)

    def test_plot_geometric_fractions(self):
        fig = plot_geometric_fractions(self.tree, self.level_set)
        self.assertIsInstance(fig, Figure)
        # Two panels plus the colorbar
        self.assertEqual(len(fig.axes), 3)

    def test_plot_interface_zoom(self):
        fig = plot_interface_zoom(self.tree, self.level_set)
        self.assertIsInstance(fig, Figure)
        zoom = fig.axes[1]
        x_min, x_max = zoom.get_xlim()
        self.assertGreaterEqual(x_min, 0.0)
        self.assertLessEqual(x_max, 1.0)

    def test_zoom_without_interface_raises(self):
        tree = create_root(0.0, 0.0, 1.0, 1.0)
        with self.assertRaises(ValueError):
            plot_interface_zoom(tree, lambda x, y: x + 10.0)


if __name__ == "__main__":
    unittest.main()
