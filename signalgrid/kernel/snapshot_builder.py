from typing import Any
from signalgrid.domain.models import (
    IntersectionSnapshot, RoadSnapshot, SimulationSnapshot, SimulationStats
)

class SnapshotBuilder:
    def build(self, engine: Any) -> SimulationSnapshot:
        nodes = engine.nodes
        roads = [
            RoadSnapshot(
                id=r.id,
                u=nodes[r.u].id,
                v=nodes[r.v].id,
                cells=list(r.cells),
                totalCars=r.total_cars(),
                queuedLoad=r.queued_load(),
                isBoundary=r.is_boundary
            )
            for r in engine.roads
        ]
        return SimulationSnapshot(
            mode=engine.mode,
            roads=roads,
            intersections=[
                IntersectionSnapshot(id=i.id, phase=i.phase, row=i.row, col=i.col)
                for i in nodes
            ],
            stats=self.build_stats(engine, roads)
        )

    def build_stats(self, engine: Any, roads=None) -> SimulationStats:
        if roads is None:
            total_cars = sum(r.total_cars() for r in engine.roads)
            queued = sum(r.queued_load() for r in engine.roads)
        else:
            total_cars = sum(r.totalCars for r in roads)
            queued = sum(r.queuedLoad for r in roads)
        return SimulationStats(
            step=engine.step_count,
            totalCars=total_cars,
            queuedLoad=queued,
            throughput=engine.total_throughput
        )
