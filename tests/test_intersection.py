import unittest
from signalgrid.domain.config import PhysicsConfig
from signalgrid.domain.models import Direction, Phase
from signalgrid.simulation.intersection import Intersection, NETWORK_EXIT, PRESSURE_FLOOR
from signalgrid.simulation.road import Road
from signalgrid.systems.flow_system import FlowSystem

def make_crossing():
    """One intersection with every approach present; roads indexed in order."""
    config = PhysicsConfig()
    node = Intersection(0, 1, 1)
    roads = []
    for side in Direction:
        roads.append(Road(f"in_{side.name}", 1, 0, side.opposite, config))
        node.incoming[side] = len(roads) - 1
    for side in Direction:
        roads.append(Road(f"out_{side.name}", 0, 1, side, config))
        node.outgoing[side] = len(roads) - 1
    return node, roads

class TestIntersection(unittest.TestCase):
    def test_initial_state(self):
        node = Intersection(0, 2, 3)
        self.assertEqual(node.id, "2-3")
        self.assertEqual(node.phase, Phase.NS)
        self.assertEqual(node.phase_timer, 0)
        self.assertEqual(node.incoming, [None, None, None, None])

    def test_flip_resets_timer(self):
        node = Intersection(0, 0, 0)
        node.phase_timer = 5
        node.flip_phase()
        self.assertEqual(node.phase, Phase.EW)
        self.assertEqual(node.phase_timer, 0)

    def test_pressure_floor_on_empty_and_missing_roads(self):
        node = Intersection(0, 0, 0)
        self.assertEqual(node.pressure([]), (PRESSURE_FLOOR, PRESSURE_FLOOR))

        node, roads = make_crossing()
        # Downstream load alone drives raw pressure negative
        roads[node.outgoing[Direction.S]].cells = [7.0] * 10
        p_ns, p_ew = node.pressure(roads)
        self.assertEqual(p_ns, PRESSURE_FLOOR)
        self.assertEqual(p_ew, PRESSURE_FLOOR)

    def test_pressure_queue_minus_weighted_downstream(self):
        node, roads = make_crossing()
        roads[node.incoming[Direction.N]].cells[-3:] = [3.0, 3.0, 3.0]
        roads[node.outgoing[Direction.S]].cells[0] = 4.0
        roads[node.incoming[Direction.E]].cells[-1] = 5.0
        p_ns, p_ew = node.pressure(roads)
        self.assertAlmostEqual(p_ns, 9.0 - 2.0)
        self.assertAlmostEqual(p_ew, 5.0)

    def test_route_flow_only_on_green_axis(self):
        node, roads = make_crossing()
        for side in Direction:
            roads[node.incoming[side]].cells[-1] = 3.0

        transfers = node.route_flow(roads)
        self.assertEqual(
            {(t.source, t.target) for t in transfers},
            {(node.incoming[Direction.N], node.outgoing[Direction.S]),
             (node.incoming[Direction.S], node.outgoing[Direction.N])}
        )

        node.flip_phase()
        transfers = node.route_flow(roads)
        self.assertEqual(
            {(t.source, t.target) for t in transfers},
            {(node.incoming[Direction.E], node.outgoing[Direction.W]),
             (node.incoming[Direction.W], node.outgoing[Direction.E])}
        )

    def test_route_flow_limited_by_supply(self):
        node, roads = make_crossing()
        roads[node.incoming[Direction.N]].cells[-1] = 6.0
        roads[node.outgoing[Direction.S]].cells[0] = 5.0
        transfers = node.route_flow(roads)
        self.assertEqual(len(transfers), 1)
        self.assertAlmostEqual(transfers[0].amount, 2.0)

    def test_no_transfer_when_downstream_full(self):
        node, roads = make_crossing()
        roads[node.incoming[Direction.N]].cells[-1] = 6.0
        roads[node.outgoing[Direction.S]].cells[0] = 7.0
        self.assertEqual(node.route_flow(roads), [])

    def test_missing_outgoing_road_exits_uncapped(self):
        config = PhysicsConfig()
        node = Intersection(0, 0, 0)
        roads = [Road("in_N", 1, 0, Direction.S, config)]
        node.incoming[Direction.N] = 0
        roads[0].cells[-1] = 6.5

        transfers = node.route_flow(roads)
        self.assertEqual(len(transfers), 1)
        self.assertTrue(transfers[0].exits)
        self.assertEqual(transfers[0].target, NETWORK_EXIT)
        self.assertEqual(transfers[0].amount, 6.5)

    def test_full_transfer_into_empty_road(self):
        # 10-cell road ending at density 7 feeding an empty road
        config = PhysicsConfig(cells_per_road=10, max_density=7.0, wave_speed=1.0)
        node = Intersection(0, 0, 0)
        roads = [Road("src", 1, 0, Direction.S, config), Road("dst", 0, 2, Direction.S, config)]
        node.incoming[Direction.N] = 0
        node.outgoing[Direction.S] = 1
        roads[0].cells[-1] = 7.0

        transfers = node.route_flow(roads)
        self.assertEqual(len(transfers), 1)
        self.assertEqual(transfers[0].amount, 7.0)

        flow = FlowSystem()
        inflows, outflows, exited = flow.aggregate(transfers, len(roads))
        for idx, road in enumerate(roads):
            road.apply_flow(inflows[idx], outflows[idx])

        self.assertEqual(exited, 0.0)
        self.assertEqual(roads[0].total_cars(), 0.0)
        self.assertEqual(roads[1].total_cars(), 7.0)

if __name__ == '__main__':
    unittest.main()
