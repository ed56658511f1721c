import random
import unittest
from signalgrid.domain.config import PhysicsConfig
from signalgrid.domain.models import Direction
from signalgrid.simulation.road import Road

class TestRoad(unittest.TestCase):
    def setUp(self):
        self.config = PhysicsConfig()
        self.road = Road("R_E_0_0", 0, 1, Direction.E, self.config)

    def test_empty_road(self):
        self.assertEqual(len(self.road.cells), 10)
        self.assertEqual(self.road.demand(), 0.0)
        self.assertEqual(self.road.supply(), 7.0)
        self.assertEqual(self.road.total_cars(), 0.0)
        self.assertEqual(self.road.queued_load(), 0.0)

    def test_demand_capped_by_max_density(self):
        fast = Road("fast", 0, 1, Direction.E, PhysicsConfig(wave_speed=2.0))
        fast.cells[-1] = 5.0
        self.assertEqual(fast.demand(), 7.0)
        self.road.cells[-1] = 5.0
        self.assertEqual(self.road.demand(), 5.0)

    def test_supply_never_negative(self):
        self.road.cells[0] = 7.0
        self.assertEqual(self.road.supply(), 0.0)

    def test_queued_load_counts_cells_strictly_above_threshold(self):
        self.road.cells = [2.0, 2.5, 0.5, 7.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0]
        self.assertAlmostEqual(self.road.queued_load(), 9.5)
        self.assertAlmostEqual(self.road.total_cars(), 13.0)

    def test_outflow_floored_at_zero(self):
        self.road.cells[-1] = 1.0
        self.road.apply_flow(0.0, 3.0)
        self.assertEqual(self.road.cells[-1], 0.0)

    def test_propagation_uses_frozen_state(self):
        # Each occupied cell advances exactly one cell per tick
        self.road.cells = [3.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
        self.road.apply_flow(0.0, 0.0)
        self.assertEqual(self.road.cells[:3], [0.0, 3.0, 0.0])
        self.road.apply_flow(0.0, 0.0)
        self.assertEqual(self.road.cells[:3], [0.0, 0.0, 3.0])

    def test_jammed_cells_hold(self):
        self.road.cells = [7.0] * 10
        self.road.apply_flow(0.0, 0.0)
        self.assertEqual(self.road.cells, [7.0] * 10)

    def test_conservation_capacity_and_non_negativity(self):
        rng = random.Random(7)
        for _ in range(200):
            self.road.cells = [rng.uniform(0.0, 7.0) for _ in range(10)]
            outflow = self.road.demand() * rng.random()
            inflow = self.road.supply() * rng.random()
            before = self.road.total_cars()

            self.road.apply_flow(inflow, outflow)

            self.assertAlmostEqual(self.road.total_cars(), before + inflow - outflow, places=9)
            for cell in self.road.cells:
                self.assertGreaterEqual(cell, 0.0)
                self.assertLessEqual(cell, 7.0 + 1e-9)

if __name__ == '__main__':
    unittest.main()
