import random
from typing import Sequence
from signalgrid.domain.config import PhysicsConfig
from signalgrid.simulation.road import Road

class EntrySystem:
    def __init__(self, inflow_rate: float, config: PhysicsConfig, rng: random.Random):
        self.inflow_rate = inflow_rate
        self.config = config
        self.rng = rng

    def update(self, roads: Sequence[Road]) -> float:
        spawned = 0.0
        for road in roads:
            if not road.is_entry:
                continue
            if road.cells[0] >= self.config.spawn_space_threshold:
                continue
            if self.rng.random() < self.inflow_rate:
                amount = min(self.config.spawn_amount, self.config.max_density - road.cells[0])
                road.cells[0] += amount
                spawned += amount
        return spawned
