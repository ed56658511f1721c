from typing import List, Sequence, Tuple
from signalgrid.simulation.intersection import Intersection, Transfer
from signalgrid.simulation.road import Road

class FlowSystem:
    def collect_transfers(self, intersections: Sequence[Intersection], roads: Sequence[Road]) -> List[Transfer]:
        transfers: List[Transfer] = []
        for intersection in intersections:
            transfers.extend(intersection.route_flow(roads))
        return transfers

    def aggregate(self, transfers: Sequence[Transfer], road_count: int) -> Tuple[List[float], List[float], float]:
        inflows = [0.0] * road_count
        outflows = [0.0] * road_count
        exited = 0.0

        for transfer in transfers:
            outflows[transfer.source] += transfer.amount
            if transfer.exits:
                exited += transfer.amount
            else:
                inflows[transfer.target] += transfer.amount
        return inflows, outflows, exited

    def update(self, intersections: Sequence[Intersection], roads: Sequence[Road]) -> float:
        """Route, aggregate and apply one tick of flow; return the amount that left the network."""
        transfers = self.collect_transfers(intersections, roads)
        inflows, outflows, exited = self.aggregate(transfers, len(roads))

        # Single synchronous physics pass
        for idx, road in enumerate(roads):
            road.apply_flow(inflows[idx], outflows[idx])
        return exited
