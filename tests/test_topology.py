import unittest

from floorplans import as_payload, rectangle_walls, two_room_walls, wall

from roomdetector import detect_rooms, find_connected_walls
from roomdetector.core.topology import (
    build_room_graph,
    build_wall_contact_graph,
    point_on_segment,
    walls_touch,
    wall_components,
)
from roomdetector.core.model import Point


def _t_junction():
    return [
        wall("wall-a", 0, 0, 10, 0),
        wall("wall-b", 5, 0, 5, 5),
        wall("wall-c", 5, 5, 8, 5),
    ]


class ContactTests(unittest.TestCase):
    def test_point_on_segment(self):
        a, b = Point(0, 0), Point(10, 0)
        self.assertTrue(point_on_segment(Point(5, 0.2), a, b, 0.3))
        self.assertFalse(point_on_segment(Point(5, 0.4), a, b, 0.3))
        # Projection is clamped to the end of the segment
        self.assertFalse(point_on_segment(Point(11, 0), a, b, 0.3))

    def test_zero_length_segment(self):
        a = Point(1, 1)
        self.assertTrue(point_on_segment(Point(1.1, 1), a, a, 0.3))
        self.assertFalse(point_on_segment(Point(2, 1), a, a, 0.3))

    def test_walls_touch(self):
        a, b, c = _t_junction()
        self.assertTrue(walls_touch(a, b))
        self.assertTrue(walls_touch(b, a))
        self.assertFalse(walls_touch(a, c))


class ConnectedWallsTests(unittest.TestCase):
    def test_rectangle_in_discovery_order(self):
        found = find_connected_walls(["wall-1"], rectangle_walls(0, 0, 5, 4))
        self.assertEqual(found, ["wall-1", "wall-2", "wall-4", "wall-3"])

    def test_isolated_wall(self):
        walls = rectangle_walls(0, 0, 5, 4) + [wall("wall-x", 20, 20, 25, 20)]
        self.assertEqual(find_connected_walls(["wall-x"], walls), ["wall-x"])

    def test_t_junction_and_transitive_contact(self):
        self.assertEqual(
            find_connected_walls(["wall-a"], _t_junction()),
            ["wall-a", "wall-b", "wall-c"],
        )

    def test_unknown_seed_is_kept_but_not_expanded(self):
        walls = _t_junction()
        self.assertEqual(find_connected_walls(["wall-zzz"], walls), ["wall-zzz"])
        self.assertEqual(
            find_connected_walls(["wall-zzz", "wall-c"], walls),
            ["wall-zzz", "wall-c", "wall-b", "wall-a"],
        )

    def test_boundary_walls_are_ignored(self):
        walls = _t_junction() + [wall("boundary-1", 10, 0, 10, 10)]
        self.assertNotIn("boundary-1", find_connected_walls(["wall-a"], walls))
        self.assertEqual(find_connected_walls(["boundary-1"], walls), ["boundary-1"])

    def test_contact_threshold(self):
        walls = [wall("wall-a", 0, 0, 5, 0), wall("wall-b", 5.4, 0, 9, 0)]
        self.assertEqual(find_connected_walls(["wall-a"], walls), ["wall-a"])
        self.assertEqual(
            find_connected_walls(["wall-a"], walls, threshold=0.5),
            ["wall-a", "wall-b"],
        )

    def test_raw_wall_mappings(self):
        walls = as_payload(_t_junction())
        self.assertEqual(len(find_connected_walls(["wall-c"], walls)), 3)


class WallGraphTests(unittest.TestCase):
    def test_contact_graph(self):
        G = build_wall_contact_graph(_t_junction())
        self.assertEqual(set(G.nodes), {"wall-a", "wall-b", "wall-c"})
        self.assertTrue(G.has_edge("wall-a", "wall-b"))
        self.assertTrue(G.has_edge("wall-b", "wall-c"))
        self.assertFalse(G.has_edge("wall-a", "wall-c"))
        self.assertAlmostEqual(G.nodes["wall-a"]["length"], 10.0)

    def test_components_largest_first(self):
        walls = [wall("wall-x", 20, 20, 25, 20)] + rectangle_walls(0, 0, 5, 4)
        components = wall_components(walls)
        self.assertEqual(components, [
            {"wall-1", "wall-2", "wall-3", "wall-4"},
            {"wall-x"},
        ])

    def test_room_adjacency(self):
        walls = two_room_walls()
        left, right = detect_rooms(walls)
        G = build_room_graph([left, right], walls)
        self.assertEqual(G.number_of_nodes(), 2)
        self.assertEqual(G.edges[left.id, right.id]["wall_ids"], ("wall-p",))
        self.assertAlmostEqual(G.nodes[left.id]["area"], 25.0)

    def test_separate_rooms_are_not_adjacent(self):
        walls = rectangle_walls(0, 0, 5, 4) + rectangle_walls(10, 0, 15, 4, prefix="wall-e")
        rooms = detect_rooms(walls)
        G = build_room_graph(rooms, walls)
        self.assertEqual(G.number_of_nodes(), 2)
        self.assertEqual(G.number_of_edges(), 0)


if __name__ == "__main__":
    unittest.main()
