import unittest

from shafttorsion.core.model import InvalidShapeError, MalformedInputError
from shafttorsion.ui.section_rows import row_from_section, section_from_row


def _row(**kw):
    row = {"shape": "tube", "dim1": "8", "dim2": "0.5", "length": "2", "shear_modulus": "8e10",
           "start_moment": "300", "end_moment": "-100"}
    row.update(kw)
    return row


class TestSectionRows(unittest.TestCase):
    def test_tube_row_uses_cm_and_ratio(self):
        s = section_from_row(_row())
        self.assertAlmostEqual(s.outer_diameter, 0.08)
        self.assertAlmostEqual(s.inner_diameter, 0.04)
        self.assertEqual(s.end_moment, -100.0)

    def test_circle_ignores_second_dimension(self):
        s = section_from_row(_row(shape="circle", dim1="5", dim2=""))
        self.assertEqual(s.diameter, 0.05)

    def test_row_roundtrip(self):
        for shape in ("circle", "rectangle", "tube"):
            row = _row(shape=shape, dim2="" if shape == "circle" else "0.5")
            back = row_from_section(section_from_row(row))
            self.assertEqual(back["shape"], shape)
            self.assertAlmostEqual(float(back["dim1"]), float(row["dim1"]))
            if shape != "circle":
                self.assertAlmostEqual(float(back["dim2"]), 0.5)

    def test_blank_cell(self):
        with self.assertRaises(MalformedInputError):
            section_from_row(_row(length=" "))

    def test_unknown_shape(self):
        with self.assertRaises(InvalidShapeError):
            section_from_row(_row(shape="hexagon"))


if __name__ == "__main__":
    unittest.main()
