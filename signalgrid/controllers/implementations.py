from typing import Sequence
from signalgrid.controllers.base import Controller
from signalgrid.domain.config import PhysicsConfig
from signalgrid.domain.models import ControlMode, Phase
from signalgrid.simulation.intersection import Intersection
from signalgrid.simulation.road import Road

class FixedCycleController(Controller):
    def __init__(self, cycle_length: int):
        self.cycle_length = cycle_length

    def update(self, intersection: Intersection, roads: Sequence[Road]) -> bool:
        # Traffic state is ignored entirely
        if intersection.phase_timer >= self.cycle_length:
            intersection.flip_phase()
            return True
        return False

class MaxPressureController(Controller):
    def __init__(self, min_green: int, max_red: int):
        self.min_green = min_green
        self.max_red = max_red

    def update(self, intersection: Intersection, roads: Sequence[Road]) -> bool:
        # Starvation guard
        if intersection.phase_timer >= self.max_red:
            intersection.flip_phase()
            return True

        if intersection.phase_timer < self.min_green:
            return False

        p_ns, p_ew = intersection.pressure(roads)
        if intersection.phase is Phase.NS and p_ew > p_ns:
            intersection.flip_phase()
            return True
        if intersection.phase is Phase.EW and p_ns > p_ew:
            intersection.flip_phase()
            return True
        return False

def build_controller(mode: ControlMode, config: PhysicsConfig) -> Controller:
    if mode == ControlMode.FIXED:
        return FixedCycleController(config.fixed_cycle_steps)
    if mode == ControlMode.MAX_PRESSURE:
        return MaxPressureController(config.min_green_steps, config.max_red_steps)
    raise ValueError(f"Unknown control mode: {mode}")
