import unittest

import numpy as np

from treecutmesh.model.level_sets import circle, flower, level_set_circle, level_set_flower


class TestLevelSets(unittest.TestCase):
    def test_circle_sign_convention(self):
        self.assertEqual(level_set_circle(0.5, 0.5, 0.5, 0.5, 0.25), -0.25)
        self.assertAlmostEqual(level_set_circle(0.8, 0.5, 0.5, 0.5, 0.25), 0.05)
        self.assertAlmostEqual(level_set_circle(0.75, 0.5, 0.5, 0.5, 0.25), 0.0)

    def test_flower(self):
        self.assertLess(level_set_flower(1.0, 1.0, 1.0, 1.0, 0.5, 5, 0.3), 0.0)
        self.assertGreater(level_set_flower(2.0, 2.0, 1.0, 1.0, 0.5, 5, 0.3), 0.0)
        # Zero amplitude is a plain circle
        self.assertAlmostEqual(
            level_set_flower(1.3, 0.9, 1.0, 1.0, 0.5, 5, 0.0),
            level_set_circle(1.3, 0.9, 1.0, 1.0, 0.5),
        )

    def test_array_inputs(self):
        xs = np.array([0.5, 0.8, 1.0])
        ys = np.array([0.5, 0.5, 0.5])
        np.testing.assert_allclose(level_set_circle(xs, ys, 0.5, 0.5, 0.25), [-0.25, 0.05, 0.25])
        self.assertEqual(level_set_flower(xs, ys, 0.5, 0.5, 0.25, 5, 0.3).shape, (3,))

    def test_factories(self):
        self.assertEqual(circle(0.5, 0.5, 0.25)(0.5, 0.5), -0.25)
        shape = flower(1.0, 1.0, 0.5)
        self.assertEqual(shape(1.7, 1.0), level_set_flower(1.7, 1.0, 1.0, 1.0, 0.5, 5, 0.3))


if __name__ == "__main__":
    unittest.main()
