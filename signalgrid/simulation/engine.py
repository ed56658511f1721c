import logging
import random
from typing import Dict, List, Optional
from signalgrid.controllers.implementations import build_controller
from signalgrid.domain.config import ConfigurationError, PhysicsConfig, validate_parameters
from signalgrid.domain.graph import RoadNetwork
from signalgrid.domain.models import ControlMode, Direction, SimulationSnapshot, SimulationStats
from signalgrid.kernel.snapshot_builder import SnapshotBuilder
from signalgrid.simulation.intersection import Intersection
from signalgrid.simulation.road import Road
from signalgrid.systems.entry_system import EntrySystem
from signalgrid.systems.flow_system import FlowSystem
from signalgrid.systems.signal_system import SignalSystem

logger = logging.getLogger(__name__)

class SimulationEngine:
    """Grid of signalized intersections joined by cell-transmission roads.

    ``step()`` advances one synchronous tick and ``get_snapshot()`` returns
    a detached, read-only view. Randomness comes only from ``rng`` (or a
    ``random.Random`` seeded with ``seed``; passing both is rejected), so
    separate engines never share a stream unless the caller arranges it.
    """

    def __init__(self, rows: int, cols: int, inflow_rate: float, mode: ControlMode,
                 config: Optional[PhysicsConfig] = None,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ConfigurationError("Pass either rng or seed, not both")
        params = validate_parameters(rows, cols, inflow_rate, mode)
        self.rows = params.rows
        self.cols = params.cols
        self.inflow_rate = params.inflow_rate
        self.mode = params.mode
        self.config = config or PhysicsConfig()
        self.rng = rng if rng is not None else random.Random(seed)

        self.roads: List[Road] = []
        self.nodes: List[Intersection] = []
        self.intersections: Dict[str, Intersection] = {}
        self.total_throughput = 0.0
        self.step_count = 0

        self.signal_system = SignalSystem(build_controller(self.mode, self.config))
        self.flow_system = FlowSystem()
        self.entry_system = EntrySystem(self.inflow_rate, self.config, self.rng)
        self.snapshot_builder = SnapshotBuilder()

        self._build_grid()
        logger.info(
            "Engine built: %dx%d grid, %d roads, mode=%s, inflow=%.2f",
            self.rows, self.cols, len(self.roads), self.mode.value, self.inflow_rate
        )

    def _node_at(self, row: int, col: int) -> Intersection:
        return self.nodes[row * self.cols + col]

    def _build_grid(self):
        # Intersections, row-major
        for r in range(self.rows):
            for c in range(self.cols):
                node = Intersection(len(self.nodes), r, c)
                self.nodes.append(node)
                self.intersections[node.id] = node

        # Two opposite one-way roads per adjacent pair
        for r in range(self.rows):
            for c in range(self.cols):
                u = self._node_at(r, c)

                # Horizontal Connections (East-West)
                if c < self.cols - 1:
                    v = self._node_at(r, c + 1)
                    self._connect(f"R_E_{r}_{c}", u, v, Direction.E, is_boundary=(c == 0))
                    self._connect(f"R_W_{r}_{c}", v, u, Direction.W, is_boundary=(c + 1 == self.cols - 1))

                # Vertical Connections (North-South)
                if r < self.rows - 1:
                    v = self._node_at(r + 1, c)
                    self._connect(f"R_S_{r}_{c}", u, v, Direction.S, is_boundary=(r == 0))
                    self._connect(f"R_N_{r}_{c}", v, u, Direction.N, is_boundary=(r + 1 == self.rows - 1))

        # Entry roads start where nothing arrives from behind them
        for road in self.roads:
            upstream = self.nodes[road.u]
            road.is_entry = upstream.incoming[road.heading.opposite] is None

    def _connect(self, road_id: str, u: Intersection, v: Intersection, heading: Direction, is_boundary: bool):
        idx = len(self.roads)
        self.roads.append(Road(road_id, u.index, v.index, heading, self.config, is_boundary))
        # Leaves u towards `heading`, arrives at v from the opposite side
        u.outgoing[heading] = idx
        v.incoming[heading.opposite] = idx

    def step(self):
        # 1. Signals
        flips = self.signal_system.update(self.nodes, self.roads)

        # 2-4. Routing, aggregation, physics
        exited = self.flow_system.update(self.nodes, self.roads)
        self.total_throughput += exited

        # 5. Stochastic entry, visible from the next tick
        spawned = self.entry_system.update(self.roads)

        # 6. Time Advance
        self.step_count += 1
        logger.debug("Tick %d: %d phase flips, %.2f exited, %.2f spawned",
                     self.step_count, flips, exited, spawned)

    def get_snapshot(self) -> SimulationSnapshot:
        return self.snapshot_builder.build(self)

    def get_stats(self) -> SimulationStats:
        return self.snapshot_builder.build_stats(self)

    def network(self) -> RoadNetwork:
        network = RoadNetwork()
        for node in self.nodes:
            network.add_intersection(node.id, pos=(float(node.col), float(node.row)))
        road_length = self.config.cells_per_road * self.config.cell_length_m
        for road in self.roads:
            network.add_road(
                self.nodes[road.u].id, self.nodes[road.v].id, road.id,
                length=road_length, boundary=road.is_boundary
            )
        return network
