from typing import List, NamedTuple, Optional, Sequence, Tuple
from signalgrid.domain.models import Direction, Phase
from signalgrid.simulation.road import Road

NETWORK_EXIT = -1
PRESSURE_FLOOR = 0.1
OUTGOING_WEIGHT = 0.5

class Transfer(NamedTuple):
    source: int
    target: int  # road index, or NETWORK_EXIT
    amount: float

    @property
    def exits(self) -> bool:
        return self.target == NETWORK_EXIT

class Intersection:
    def __init__(self, index: int, row: int, col: int):
        self.index = index
        self.id = f"{row}-{col}"
        self.row = row
        self.col = col
        # Road indices keyed by Direction; incoming[N] arrives from the north side
        self.incoming: List[Optional[int]] = [None] * len(Direction)
        self.outgoing: List[Optional[int]] = [None] * len(Direction)
        self.phase = Phase.NS
        self.phase_timer = 0

    def flip_phase(self):
        self.phase = self.phase.flipped()
        self.phase_timer = 0

    def pressure(self, roads: Sequence[Road]) -> Tuple[float, float]:
        p_ns = self._axis_pressure(roads, Phase.NS)
        p_ew = self._axis_pressure(roads, Phase.EW)
        return max(PRESSURE_FLOOR, p_ns), max(PRESSURE_FLOOR, p_ew)

    def _axis_pressure(self, roads: Sequence[Road], phase: Phase) -> float:
        # Incoming queue minus weighted downstream load
        pressure = 0.0
        for side in phase.axis:
            in_idx = self.incoming[side]
            if in_idx is None:
                continue
            pressure += roads[in_idx].queued_load()
            out_idx = self.outgoing[side.opposite]
            if out_idx is not None:
                pressure -= roads[out_idx].total_cars() * OUTGOING_WEIGHT
        return pressure

    def route_flow(self, roads: Sequence[Road]) -> List[Transfer]:
        transfers: List[Transfer] = []
        for side in self.phase.axis:
            src_idx = self.incoming[side]
            if src_idx is None:
                continue

            demand = roads[src_idx].demand()
            tgt_idx = self.outgoing[side.opposite]

            if tgt_idx is None:
                # Grid edge: leaves the network without a supply check
                transfers.append(Transfer(src_idx, NETWORK_EXIT, demand))
                continue

            flow = min(demand, roads[tgt_idx].supply())
            if flow > 0:
                transfers.append(Transfer(src_idx, tgt_idx, flow))
        return transfers

    def __repr__(self) -> str:
        return f"Intersection({self.id!r}, phase={self.phase.value}, timer={self.phase_timer})"
