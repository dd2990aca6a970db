import json
import tempfile
import unittest
from pathlib import Path

from floorplans import as_payload, two_room_walls
from typer.testing import CliRunner

from roomdetector.cli import app


class CliTests(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.walls_path = self.tmp / "scene.json"
        self.walls_path.write_text(
            json.dumps({"version": 1, "walls": as_payload(two_room_walls())}),
            encoding="utf-8",
        )

    def tearDown(self):
        self._tmp.cleanup()

    def test_detect(self):
        result = self.runner.invoke(app, ["detect", "--walls", str(self.walls_path)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("2 rooms", result.output)
        self.assertIn("50.0 m²", result.output)

    def test_detect_by_floor(self):
        result = self.runner.invoke(app, ["detect", "-w", str(self.walls_path), "--by-floor"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Floor 0", result.output)

    def test_detect_missing_file(self):
        result = self.runner.invoke(app, ["detect", "--walls", str(self.tmp / "missing.json")])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("File not found", result.output)

    def test_detect_bad_unit(self):
        result = self.runner.invoke(app, ["detect", "-w", str(self.walls_path), "--unit", "yd"])
        self.assertEqual(result.exit_code, 2)

    def test_connected(self):
        result = self.runner.invoke(
            app, ["connected", "-w", str(self.walls_path), "--wall", "wall-p"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("7 connected walls", result.output)

    def test_room_walls(self):
        result = self.runner.invoke(app, ["room-walls", "-w", str(self.walls_path), "-i", "0"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("wall-p", result.output)

    def test_room_walls_index_out_of_range(self):
        result = self.runner.invoke(app, ["room-walls", "-w", str(self.walls_path), "-i", "5"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("out of range", result.output)

    def test_render(self):
        output = self.tmp / "plan.png"
        result = self.runner.invoke(
            app, ["render", "-w", str(self.walls_path), "-o", str(output)]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(output.exists())

    def test_info(self):
        result = self.runner.invoke(app, ["info", "-w", str(self.walls_path)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Walls: 7", result.output)


if __name__ == "__main__":
    unittest.main()
