import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from shafttorsion.core.model import InvalidShapeError, MalformedInputError, Section, Shaft
from shafttorsion.core.project_io import ShaftFileError, load_shaft_json, save_shaft_json


def _shaft():
    return Shaft(
        sections=(
            Section(shape="circle", length=1.0, shear_modulus=8e10, start_moment=1000.0, end_moment=500.0,
                    diameter=0.05),
            Section(shape="rectangle", length=0.4, shear_modulus=7.9e10, start_moment=500.0, end_moment=0.0,
                    width=0.06, height=0.03, name="key seat"),
            Section(shape="tube", length=2.0, shear_modulus=2.6e10, start_moment=0.0, end_moment=-250.0,
                    outer_diameter=0.08, inner_diameter=0.06),
        ),
        title="stepped shaft",
    )


class TestShaftSerialization(unittest.TestCase):
    def test_roundtrip_keeps_sections_and_names(self):
        shaft = _shaft()
        restored = Shaft.from_dict(json.loads(json.dumps(shaft.to_dict())))
        self.assertEqual(restored, shaft)
        self.assertEqual([s.name for s in restored], ["S1", "key seat", "S3"])
        self.assertEqual(restored.sections[2].moment_slope, shaft.sections[2].moment_slope)

    def test_only_shape_dimensions_are_written(self):
        d = _shaft().to_dict()["sections"][0]
        self.assertIn("diameter", d)
        self.assertNotIn("width", d)
        self.assertNotIn("moment_slope", d)

    def test_unknown_field_is_rejected(self):
        data = _shaft().to_dict()
        data["sections"][0]["colour"] = "red"
        with self.assertRaises(MalformedInputError):
            Shaft.from_dict(data)

    def test_invalid_shape_in_record(self):
        data = _shaft().to_dict()
        data["sections"][1]["shape"] = "square"
        with self.assertRaises(InvalidShapeError):
            Shaft.from_dict(data)

    def test_missing_required_field(self):
        data = {"sections": [{"shape": "circle", "diameter": 0.05}]}
        with self.assertRaises(MalformedInputError):
            Shaft.from_dict(data)


class TestShaftFiles(unittest.TestCase):
    def test_save_then_load(self):
        with TemporaryDirectory() as tmp:
            path = save_shaft_json(_shaft(), Path(tmp) / "nested" / "shaft.json")
            self.assertTrue(path.exists())
            self.assertEqual(load_shaft_json(path), _shaft())

    def test_missing_file(self):
        with TemporaryDirectory() as tmp:
            with self.assertRaises(ShaftFileError):
                load_shaft_json(Path(tmp) / "nope.json")

    def test_broken_json(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ShaftFileError):
                load_shaft_json(path)

    def test_zero_length_record(self):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "zero.json"
            data = _shaft().to_dict()
            data["sections"][0]["length"] = 0
            path.write_text(json.dumps(data), encoding="utf-8")
            with self.assertRaises(ShaftFileError):
                load_shaft_json(path)

    def test_unwritable_target(self):
        with TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "plain.txt"
            blocker.write_text("x", encoding="utf-8")
            with self.assertRaises(ShaftFileError):
                save_shaft_json(_shaft(), blocker / "shaft.json")


if __name__ == "__main__":
    unittest.main()
