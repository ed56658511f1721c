from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from signalgrid.application.commands import ResetCommand, ResizeGridCommand
from signalgrid.application.kernel import ComparisonKernel
from signalgrid.domain.config import ConfigurationError, GRID_SIZE_OPTIONS
from signalgrid.domain.models import (
    ComparisonStats, ControlMode, GridResize, NetworkEdge, NetworkNode, NetworkTopology,
    ResetRequest, SimulationSnapshot, StepResult
)
from signalgrid.logging_setup import setup_logging

# Initialize Kernel
kernel = ComparisonKernel()

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield

app = FastAPI(lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _flush_commands():
    # Requests are handled one at a time, so this always lands between ticks
    try:
        kernel.apply_commands()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.get("/api/snapshot/{mode}", response_model=SimulationSnapshot)
async def get_snapshot(mode: ControlMode):
    """Returns the current snapshot of one engine"""
    return kernel.snapshot(mode)

@app.get("/api/comparison/history", response_model=List[ComparisonStats])
async def get_history():
    """Returns the rolling fixed vs. max-pressure history"""
    return kernel.get_history()

@app.post("/api/simulation/step", response_model=StepResult)
async def step_simulation(ticks: int = Query(default=1, ge=1, le=1000)):
    """Advances both engines by `ticks` ticks"""
    for _ in range(ticks):
        kernel.run_tick()
    return StepResult(
        step=kernel.fixed.step_count,
        fixed=kernel.fixed.get_stats(),
        smart=kernel.smart.get_stats()
    )

@app.post("/api/simulation/reset")
async def reset_simulation(request: Optional[ResetRequest] = None):
    """Rebuilds both engines, optionally with a new inflow rate or seed"""
    request = request or ResetRequest()
    kernel.queue_command(ResetCommand(inflow_rate=request.inflowRate, seed=request.seed))
    _flush_commands()
    return {"status": "reset", "gridSize": kernel.grid_size, "inflowRate": kernel.inflow_rate}

@app.post("/api/simulation/grid")
async def resize_grid(resize: GridResize):
    """Rebuilds both engines on a new square grid"""
    if resize.size not in GRID_SIZE_OPTIONS:
        raise HTTPException(status_code=422, detail=f"Grid size must be one of {list(GRID_SIZE_OPTIONS)}")
    kernel.queue_command(ResizeGridCommand(resize.size))
    _flush_commands()
    return {"status": "resized", "gridSize": kernel.grid_size}

@app.get("/api/network", response_model=NetworkTopology)
async def get_network():
    """Returns grid topology for renderers"""
    network = kernel.fixed.network()
    graph = network.graph
    nodes = []
    for node_id in graph.nodes:
        col, row = network.get_node_pos(node_id)
        nodes.append(NetworkNode(id=node_id, row=int(row), col=int(col)))
    edges = [
        NetworkEdge(id=data["id"], u=u, v=v, length=data["length"], isBoundary=data["boundary"])
        for u, v, data in graph.edges(data=True)
    ]
    return NetworkTopology(nodes=nodes, edges=edges)

@app.get("/")
def read_root():
    return {"status": "Signal Grid Backend Running", "step": kernel.fixed.step_count}
