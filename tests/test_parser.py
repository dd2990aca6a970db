import json
import math
import tempfile
import unittest
from pathlib import Path

from floorplans import two_room_walls, wall

from roomdetector import InvalidWallData, Point
from roomdetector.io.parser import load_walls, parse_wall, parse_walls, wall_to_payload


def _record(**overrides):
    record = {"id": "wall-1", "start": {"x": 0, "z": 0}, "end": {"x": 5, "z": 0}}
    record.update(overrides)
    return record


class ParseWallTests(unittest.TestCase):
    def test_defaults(self):
        parsed = parse_wall(_record())
        self.assertEqual(parsed.id, "wall-1")
        self.assertEqual(parsed.start, Point(0, 0))
        self.assertEqual(parsed.end, Point(5, 0))
        self.assertEqual(parsed.thickness, 0.15)
        self.assertEqual(parsed.height, 2.7)
        self.assertEqual(parsed.floor_level, 0)

    def test_optional_fields(self):
        parsed = parse_wall(_record(thickness=0.2, height=3, floorLevel=1))
        self.assertEqual(parsed.thickness, 0.2)
        self.assertEqual(parsed.height, 3.0)
        self.assertEqual(parsed.floor_level, 1)
        self.assertEqual(parse_wall(_record(floor_level=2)).floor_level, 2)

    def test_missing_id_is_empty(self):
        record = _record()
        del record["id"]
        self.assertEqual(parse_wall(record).id, "")

    def test_non_string_id(self):
        with self.assertRaises(InvalidWallData):
            parse_wall(_record(id=5))

    def test_missing_coordinates(self):
        with self.assertRaises(InvalidWallData):
            parse_wall(_record(start=None))
        with self.assertRaises(InvalidWallData) as ctx:
            parse_wall(_record(start={"x": 1}))
        self.assertIn("start.z", str(ctx.exception))
        with self.assertRaises(InvalidWallData):
            parse_wall(_record(end=[0, 1]))

    def test_bad_numbers(self):
        for bad in ("1.5", True, None, math.nan, math.inf):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidWallData):
                    parse_wall(_record(end={"x": bad, "z": 0}))
        with self.assertRaises(InvalidWallData):
            parse_wall(_record(thickness="thick"))

    def test_floor_level_must_be_whole(self):
        self.assertEqual(parse_wall(_record(floorLevel=2.0)).floor_level, 2)
        with self.assertRaises(InvalidWallData):
            parse_wall(_record(floorLevel=1.7))

    def test_payload_matches_wall(self):
        source = wall("wall-9", 1, 2, 3, 4, thickness=0.1, floor_level=3)
        self.assertEqual(parse_wall(wall_to_payload(source)), source)


class ParseWallsTests(unittest.TestCase):
    def test_list_payload(self):
        walls = parse_walls([_record(), _record(id="wall-2")])
        self.assertEqual([w.id for w in walls], ["wall-1", "wall-2"])

    def test_scene_payload(self):
        scene = {"version": 1, "walls": [wall_to_payload(w) for w in two_room_walls()]}
        self.assertEqual(parse_walls(scene), two_room_walls())
        self.assertEqual(parse_walls({"walls": [_record()]})[0].id, "wall-1")
        self.assertEqual(parse_walls({"version": 1}), [])
        self.assertEqual(parse_walls(None), [])

    def test_records_without_endpoints_are_skipped(self):
        no_end = _record(id="wall-2")
        del no_end["end"]
        walls = parse_walls([_record(), {"id": "boundary-1"}, no_end])
        self.assertEqual([w.id for w in walls], ["wall-1"])

    def test_present_but_malformed_point_still_raises(self):
        with self.assertRaises(InvalidWallData):
            parse_walls([_record(start={"x": 0})])

    def test_unsupported_version(self):
        with self.assertRaises(ValueError):
            parse_walls({"version": 2, "walls": []})

    def test_walls_must_be_a_list(self):
        with self.assertRaises(ValueError):
            parse_walls({"walls": {"wall-1": _record()}})

    def test_records_must_be_objects(self):
        with self.assertRaises(InvalidWallData):
            parse_walls([_record(), "wall-2"])


class LoadWallsTests(unittest.TestCase):
    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "walls.json"
            path.write_text(json.dumps([_record()]), encoding="utf-8")
            walls = load_walls(path)
        self.assertEqual(len(walls), 1)
        self.assertEqual(walls[0].end, Point(5, 0))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_walls("/nonexistent/walls.json")

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "walls.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(json.JSONDecodeError):
                load_walls(path)


if __name__ == "__main__":
    unittest.main()
