import unittest

from shafttorsion.core.model import Section, Shaft
from shafttorsion.core.validation import has_errors, validate_shaft


def _sec(shape="circle", **kw):
    base = dict(shape=shape, length=1.0, shear_modulus=8e10, start_moment=100.0, end_moment=50.0)
    if shape == "circle":
        base["diameter"] = 0.05
    elif shape == "rectangle":
        base.update(width=0.06, height=0.03)
    else:
        base.update(outer_diameter=0.08, inner_diameter=0.04)
    base.update(kw)
    return Section(**base)


class TestValidation(unittest.TestCase):
    def _levels(self, *sections):
        return [(m.level, m.text) for m in validate_shaft(Shaft(sections=tuple(sections)))]

    def test_valid_shaft_has_no_messages(self):
        self.assertEqual(self._levels(_sec(), _sec("rectangle"), _sec("tube")), [])

    def test_empty_shaft_is_an_error_and_stops(self):
        msgs = validate_shaft(Shaft())
        self.assertEqual(len(msgs), 1)
        self.assertEqual(msgs[0].level, "ERROR")

    def test_zero_diameter_is_an_error(self):
        msgs = self._levels(_sec(diameter=0.0))
        self.assertEqual(len(msgs), 1)
        self.assertEqual(msgs[0][0], "ERROR")
        self.assertIn("diameter", msgs[0][1])

    def test_negative_rectangle_side_is_an_error(self):
        msgs = validate_shaft(Shaft(sections=(_sec("rectangle", height=-0.03),)))
        self.assertTrue(has_errors(msgs))

    def test_solid_tube_bore_is_allowed(self):
        self.assertEqual(self._levels(_sec("tube", inner_diameter=0.0)), [])

    def test_tube_inner_not_smaller_than_outer(self):
        msgs = self._levels(_sec("tube", inner_diameter=0.08))
        self.assertEqual([lvl for lvl, _ in msgs], ["ERROR"])
        self.assertIn("inner diameter", msgs[0][1])

    def test_non_positive_shear_modulus(self):
        msgs = validate_shaft(Shaft(sections=(_sec(shear_modulus=0.0),)))
        self.assertTrue(has_errors(msgs))

    def test_shear_modulus_in_mpa_is_warned(self):
        msgs = self._levels(_sec(shear_modulus=80000.0))
        self.assertEqual([lvl for lvl, _ in msgs], ["WARN"])

    def test_inverted_rectangle_is_warned(self):
        msgs = self._levels(_sec("rectangle", width=0.03, height=0.06))
        self.assertEqual([lvl for lvl, _ in msgs], ["WARN"])
        self.assertIn("S1", msgs[0][1])


if __name__ == "__main__":
    unittest.main()
