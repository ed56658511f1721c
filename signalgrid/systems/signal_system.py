import logging
from typing import Sequence
from signalgrid.controllers.base import Controller
from signalgrid.simulation.intersection import Intersection
from signalgrid.simulation.road import Road

logger = logging.getLogger(__name__)

class SignalSystem:
    def __init__(self, controller: Controller):
        self.controller = controller

    def update(self, intersections: Sequence[Intersection], roads: Sequence[Road]) -> int:
        flips = 0
        for intersection in intersections:
            intersection.phase_timer += 1
            if self.controller.update(intersection, roads):
                flips += 1
                logger.debug("Intersection %s switched to %s", intersection.id, intersection.phase.value)
        return flips
