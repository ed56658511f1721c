from abc import ABC, abstractmethod
from typing import Any, Optional

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class ResetCommand(Command):
    def __init__(self, inflow_rate: Optional[float] = None, seed: Optional[int] = None):
        self.inflow_rate = inflow_rate
        self.seed = seed

    def execute(self, kernel: Any):
        kernel.reset(inflow_rate=self.inflow_rate, seed=self.seed)

class ResizeGridCommand(Command):
    def __init__(self, size: int):
        self.size = size

    def execute(self, kernel: Any):
        kernel.reset(grid_size=self.size)
