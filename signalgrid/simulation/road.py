from typing import List, Optional
from signalgrid.domain.config import PhysicsConfig
from signalgrid.domain.models import Direction

class Road:
    """One-way cell-transmission link between two intersections.

    ``u`` and ``v`` are indices into the engine's intersection list; the
    road never holds the intersection objects themselves.
    """

    def __init__(self, road_id: str, u: int, v: int, heading: Direction,
                 config: Optional[PhysicsConfig] = None, is_boundary: bool = False):
        self.id = road_id
        self.u = u
        self.v = v
        self.heading = heading
        self.config = config or PhysicsConfig()
        self.cells: List[float] = [0.0] * self.config.cells_per_road
        self.is_boundary = is_boundary
        self.is_entry = False

    def demand(self) -> float:
        return min(self.config.wave_speed * self.cells[-1], self.config.max_density)

    def supply(self) -> float:
        return max(0.0, self.config.max_density - self.cells[0])

    def total_cars(self) -> float:
        return sum(self.cells)

    def queued_load(self) -> float:
        threshold = self.config.queue_threshold
        return sum(c for c in self.cells if c > threshold)

    def apply_flow(self, inflow: float, outflow: float):
        max_density = self.config.max_density

        # A. Boundaries
        self.cells[-1] = max(0.0, self.cells[-1] - outflow)
        self.cells[0] += inflow

        # B. Internal propagation, every flux taken from the same frozen state
        frozen = list(self.cells)
        updated = list(frozen)
        for i in range(len(frozen) - 2, -1, -1):
            flux = max(0.0, min(frozen[i], max_density - frozen[i + 1]))
            updated[i] -= flux
            updated[i + 1] += flux
        self.cells = updated

    def __repr__(self) -> str:
        return f"Road({self.id!r}, total={self.total_cars():.2f})"
