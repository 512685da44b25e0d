import math
import unittest

from shafttorsion.core.section_props import circle_hollow, circle_solid, rect_solid


class TestSectionProps(unittest.TestCase):
    def test_circle_solid_polar_moment(self):
        props = circle_solid(0.05)
        self.assertTrue(math.isclose(props.J, math.pi * 0.05**4 / 32.0, rel_tol=1e-9))
        self.assertTrue(math.isclose(props.J, 6.13592e-7, rel_tol=1e-5))
        self.assertAlmostEqual(props.r_max, 0.025)

    def test_circle_hollow_polar_moment_and_radius(self):
        props = circle_hollow(0.08, 0.04)
        self.assertTrue(math.isclose(props.J, math.pi * (0.08**4 - 0.04**4) / 32.0, rel_tol=1e-9))
        self.assertTrue(math.isclose(props.J, 3.7699e-6, rel_tol=1e-4))
        self.assertAlmostEqual(props.r_max, 0.04)

    def test_rect_solid_roark_constant(self):
        props = rect_solid(0.06, 0.03)
        beta = 1.0 / 3.0 - 0.21 * 0.5 * (1 - 0.0625 / 12.0)
        self.assertTrue(math.isclose(props.J, 0.06 * 0.03**3 * beta, rel_tol=1e-9))
        self.assertAlmostEqual(props.r_max, 0.5 * math.sqrt(0.06**2 + 0.03**2))

    def test_rect_solid_orders_sides(self):
        self.assertEqual(rect_solid(0.03, 0.06), rect_solid(0.06, 0.03))

    def test_square_uses_full_ratio(self):
        props = rect_solid(0.04, 0.04)
        beta = 1.0 / 3.0 - 0.21 * (1 - 1 / 12.0)
        self.assertTrue(math.isclose(props.J, 0.04**4 * beta, rel_tol=1e-9))

    def test_section_modulus_is_j_over_radius(self):
        for props in (circle_solid(0.05), circle_hollow(0.08, 0.04), rect_solid(0.06, 0.03)):
            self.assertEqual(props.W, props.J / props.r_max)


if __name__ == "__main__":
    unittest.main()
