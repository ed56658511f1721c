from abc import ABC, abstractmethod
from typing import Sequence
from signalgrid.simulation.intersection import Intersection
from signalgrid.simulation.road import Road

class Controller(ABC):
    @abstractmethod
    def update(self, intersection: Intersection, roads: Sequence[Road]) -> bool:
        """Apply the phase rule once; return True if the phase flipped."""
