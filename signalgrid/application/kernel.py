import logging
from collections import deque
from typing import Deque, List, Optional

from signalgrid.application.commands import Command
from signalgrid.domain import config
from signalgrid.domain.config import PhysicsConfig, validate_parameters
from signalgrid.domain.models import ComparisonStats, ControlMode, SimulationSnapshot
from signalgrid.kernel.command_queue import CommandQueue
from signalgrid.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)

class ComparisonKernel:
    """Runs a fixed-cycle and a max-pressure engine side by side.

    Both engines get the same grid, inflow and seed but their own
    ``random.Random``, so the comparison is controlled without any shared
    state. Commands are only applied between ticks.
    """

    def __init__(self, grid_size: int = config.DEFAULT_GRID_SIZE,
                 inflow_rate: float = config.DEFAULT_INFLOW_RATE,
                 seed: int = 42,
                 physics: Optional[PhysicsConfig] = None,
                 history_limit: int = config.HISTORY_LIMIT):
        self.grid_size = grid_size
        self.inflow_rate = inflow_rate
        self.seed = seed
        self.physics = physics or PhysicsConfig()
        self.history: Deque[ComparisonStats] = deque(maxlen=history_limit)
        self.command_queue = CommandQueue()
        self.fixed: SimulationEngine
        self.smart: SimulationEngine
        self.reset()

    def reset(self, grid_size: Optional[int] = None, inflow_rate: Optional[float] = None,
              seed: Optional[int] = None):
        grid_size = self.grid_size if grid_size is None else grid_size
        inflow_rate = self.inflow_rate if inflow_rate is None else inflow_rate
        # Validate first so a bad command leaves the running engines untouched
        validate_parameters(grid_size, grid_size, inflow_rate, ControlMode.FIXED)
        self.grid_size = grid_size
        self.inflow_rate = inflow_rate
        if seed is not None:
            self.seed = seed

        self.fixed = self._build_engine(ControlMode.FIXED)
        self.smart = self._build_engine(ControlMode.MAX_PRESSURE)
        self.history.clear()
        logger.info("Comparison reset: %dx%d grid, inflow=%.2f, seed=%d",
                    self.grid_size, self.grid_size, self.inflow_rate, self.seed)

    def _build_engine(self, mode: ControlMode) -> SimulationEngine:
        return SimulationEngine(self.grid_size, self.grid_size, self.inflow_rate, mode,
                                config=self.physics, seed=self.seed)

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def apply_commands(self):
        commands = self.command_queue.pop_all()
        while commands:
            cmd = commands.popleft()
            cmd.execute(self)

    def run_tick(self) -> ComparisonStats:
        # 1. Consume Commands
        self.apply_commands()

        # 2. Advance both engines
        self.fixed.step()
        self.smart.step()

        # 3. Record
        fixed_stats = self.fixed.get_stats()
        smart_stats = self.smart.get_stats()
        entry = ComparisonStats(
            step=fixed_stats.step,
            fixedTotalCars=fixed_stats.totalCars,
            smartTotalCars=smart_stats.totalCars,
            fixedQueued=fixed_stats.queuedLoad,
            smartQueued=smart_stats.queuedLoad,
            fixedThroughput=fixed_stats.throughput,
            smartThroughput=smart_stats.throughput
        )
        self.history.append(entry)
        return entry

    def engine_for(self, mode: ControlMode) -> SimulationEngine:
        return self.fixed if mode == ControlMode.FIXED else self.smart

    def snapshot(self, mode: ControlMode) -> SimulationSnapshot:
        return self.engine_for(mode).get_snapshot()

    def get_history(self) -> List[ComparisonStats]:
        return list(self.history)
