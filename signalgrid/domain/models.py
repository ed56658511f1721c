from enum import Enum, IntEnum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class Direction(IntEnum):
    N = 0
    S = 1
    E = 2
    W = 3

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

_OPPOSITE = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

class Phase(str, Enum):
    NS = "NS"
    EW = "EW"

    @property
    def axis(self) -> tuple:
        # Incoming sides that hold green
        return (Direction.N, Direction.S) if self is Phase.NS else (Direction.E, Direction.W)

    def flipped(self) -> "Phase":
        return Phase.EW if self is Phase.NS else Phase.NS

class ControlMode(str, Enum):
    FIXED = "FIXED"
    MAX_PRESSURE = "MAX_PRESSURE"

# Snapshot Models (read-only views for renderers and charts)

class RoadSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    u: str  # upstream intersection id
    v: str  # downstream intersection id
    cells: List[float]
    totalCars: float
    queuedLoad: float
    isBoundary: bool

class IntersectionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str  # e.g., "0-1"
    phase: Phase
    row: int
    col: int

class SimulationStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: int
    totalCars: float
    queuedLoad: float
    throughput: float

class SimulationSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: ControlMode
    roads: List[RoadSnapshot]
    intersections: List[IntersectionSnapshot]
    stats: SimulationStats

class ComparisonStats(BaseModel):
    step: int
    fixedTotalCars: float
    smartTotalCars: float
    fixedQueued: float
    smartQueued: float
    fixedThroughput: float
    smartThroughput: float

# API/Request Models

class GridResize(BaseModel):
    size: int = Field(ge=1)

class ResetRequest(BaseModel):
    inflowRate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    seed: Optional[int] = None

class StepResult(BaseModel):
    step: int
    fixed: SimulationStats
    smart: SimulationStats

class NetworkNode(BaseModel):
    id: str
    row: int
    col: int

class NetworkEdge(BaseModel):
    id: str
    u: str
    v: str
    length: float
    isBoundary: bool

class NetworkTopology(BaseModel):
    nodes: List[NetworkNode]
    edges: List[NetworkEdge]
