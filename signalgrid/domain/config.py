# Simulation Configuration
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from signalgrid.domain.models import ControlMode

# Grid Settings
DEFAULT_GRID_SIZE = 6
GRID_SIZE_OPTIONS = (2, 4, 6, 8, 10, 12, 14, 16, 18, 20)
DEFAULT_INFLOW_RATE = 0.35

# Road Physics (cell-transmission model)
CELL_LENGTH_M = 50.0
ROAD_LENGTH_CELLS = 10
MAX_CARS_PER_CELL = 7.0
WAVE_SPEED = 1.0

# Signal Timings (in ticks)
MIN_GREEN_STEPS = 3
MAX_RED_STEPS = 24
FIXED_CYCLE_STEPS = 6

# Queues & Entry
QUEUE_THRESHOLD = 2.0        # Cells denser than this count as stopped traffic
SPAWN_SPACE_THRESHOLD = 2.0  # Entry cell must be below this to accept a spawn
SPAWN_AMOUNT = 2.0           # Density block added per successful spawn

# Comparison
HISTORY_LIMIT = 200


class ConfigurationError(ValueError):
    pass


class PhysicsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    cell_length_m: float = Field(default=CELL_LENGTH_M, gt=0)
    cells_per_road: int = Field(default=ROAD_LENGTH_CELLS, ge=2)
    max_density: float = Field(default=MAX_CARS_PER_CELL, gt=0)
    wave_speed: float = Field(default=WAVE_SPEED, gt=0)
    min_green_steps: int = Field(default=MIN_GREEN_STEPS, ge=0)
    max_red_steps: int = Field(default=MAX_RED_STEPS, ge=1)
    fixed_cycle_steps: int = Field(default=FIXED_CYCLE_STEPS, ge=1)
    queue_threshold: float = Field(default=QUEUE_THRESHOLD, ge=0)
    spawn_space_threshold: float = Field(default=SPAWN_SPACE_THRESHOLD, ge=0)
    spawn_amount: float = Field(default=SPAWN_AMOUNT, ge=0)

    @model_validator(mode="after")
    def _check_signal_timings(self) -> "PhysicsConfig":
        if self.min_green_steps > self.max_red_steps:
            raise ValueError("min_green_steps must not exceed max_red_steps")
        return self


class SimulationParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    inflow_rate: float = Field(ge=0.0, le=1.0)
    mode: ControlMode


def validate_parameters(rows: int, cols: int, inflow_rate: float, mode) -> SimulationParameters:
    try:
        return SimulationParameters(rows=rows, cols=cols, inflow_rate=inflow_rate, mode=mode)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
