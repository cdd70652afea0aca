import json
import os
import tempfile
import unittest

from typer.testing import CliRunner

from plangraph.cli import app

PLAN = {
    "scale": 50,
    "grid": 0.5,
    "wallThickness": 0.2,
    "nodes": [
        {"id": 1, "x": 0, "y": 0},
        {"id": 2, "x": 500, "y": 0},
        {"id": 3, "x": 500, "y": 500},
        {"id": 4, "x": 0, "y": 500},
    ],
    "walls": [
        {"id": 1, "name": "South", "a": 1, "b": 2, "thickness": 0.2},
        {"id": 2, "name": "East", "a": 2, "b": 3, "thickness": 0.2},
        {"id": 3, "name": "North", "a": 3, "b": 4, "thickness": 0.2},
        {"id": 4, "name": "West", "a": 4, "b": 1, "thickness": 0.2},
    ],
}


class CliTests(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.plan_path = os.path.join(self.tmp.name, "plan.json")
        with open(self.plan_path, "w", encoding="utf-8") as f:
            json.dump(PLAN, f)

    def test_rooms_json(self):
        result = self.runner.invoke(app, ["rooms", "--plan", self.plan_path, "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        rooms = json.loads(result.output)
        self.assertEqual(len(rooms), 1)
        self.assertEqual(rooms[0]["nodeIds"], [1, 2, 3, 4])
        self.assertAlmostEqual(rooms[0]["area"], 100.0)
        self.assertAlmostEqual(rooms[0]["innerArea"], 96.04, places=6)

    def test_rooms_table_with_other_turn(self):
        result = self.runner.invoke(app, ["rooms", "--plan", self.plan_path, "--turn=1"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Room 1", result.output)

    def test_invalid_turn(self):
        result = self.runner.invoke(app, ["rooms", "--plan", self.plan_path, "--turn=3"])
        self.assertEqual(result.exit_code, 1)

    def test_walls(self):
        result = self.runner.invoke(app, ["walls", "--plan", self.plan_path])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("South", result.output)
        self.assertIn("9.80", result.output)

    def test_stats(self):
        result = self.runner.invoke(app, ["stats", "--plan", self.plan_path])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Rooms: 1", result.output)
        self.assertIn("96.04", result.output)

        result = self.runner.invoke(app, ["stats", "--plan", self.plan_path, "--outer"])
        self.assertIn("100.00", result.output)

    def test_normalize(self):
        out_path = os.path.join(self.tmp.name, "normalized.json")
        result = self.runner.invoke(app, ["normalize", "--plan", self.plan_path, "--out", out_path])
        self.assertEqual(result.exit_code, 0, result.output)
        with open(out_path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(len(data["walls"]), 4)
        self.assertEqual(data["walls"][0]["name"], "South")

    def test_missing_plan(self):
        missing = os.path.join(self.tmp.name, "missing.json")
        result = self.runner.invoke(app, ["stats", "--plan", missing])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("File not found", result.output)

    def test_unusable_plan(self):
        bad_path = os.path.join(self.tmp.name, "bad.json")
        with open(bad_path, "w", encoding="utf-8") as f:
            json.dump({"nodes": [], "walls": []}, f)
        result = self.runner.invoke(app, ["stats", "--plan", bad_path])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid plan", result.output)

    def test_oversized_number_in_plan(self):
        bad_path = os.path.join(self.tmp.name, "huge.json")
        with open(bad_path, "w", encoding="utf-8") as f:
            f.write('{"nodes": [{"id": 1, "x": %s, "y": 0}], "walls": []}' % ("9" * 5000))
        result = self.runner.invoke(app, ["rooms", "--plan", bad_path])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid plan", result.output)


if __name__ == "__main__":
    unittest.main()
