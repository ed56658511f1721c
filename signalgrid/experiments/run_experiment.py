import json
import logging
import sys
import time
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from signalgrid.application.kernel import ComparisonKernel
from signalgrid.domain import config
from signalgrid.domain.config import PhysicsConfig
from signalgrid.logging_setup import setup_logging

logger = logging.getLogger(__name__)

class ExperimentConfig(BaseModel):
    grid_size: int = Field(default=config.DEFAULT_GRID_SIZE, ge=1)
    inflow_rate: float = Field(default=config.DEFAULT_INFLOW_RATE, ge=0.0, le=1.0)
    seed: int = 42
    duration_ticks: int = Field(default=100, ge=1)
    physics: PhysicsConfig = PhysicsConfig()

def load_config(config_path: Optional[str]) -> ExperimentConfig:
    if not config_path:
        return ExperimentConfig()
    with open(config_path) as f:
        return ExperimentConfig.model_validate_json(f.read())

def run_headless_experiment(experiment: ExperimentConfig):
    kernel = ComparisonKernel(
        grid_size=experiment.grid_size,
        inflow_rate=experiment.inflow_rate,
        seed=experiment.seed,
        physics=experiment.physics,
        history_limit=experiment.duration_ticks
    )

    start_time = time.time()
    for _ in range(experiment.duration_ticks):
        kernel.run_tick()
    elapsed = time.time() - start_time

    history = kernel.get_history()
    final = history[-1]
    logger.info("Experiment finished in %.4fs (%d ticks)", elapsed, experiment.duration_ticks)
    logger.info("Throughput fixed=%.1f smart=%.1f", final.fixedThroughput, final.smartThroughput)
    logger.info("Queued load fixed=%.1f smart=%.1f", final.fixedQueued, final.smartQueued)
    return history

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 2:
        print("Usage: python -m signalgrid.experiments.run_experiment <config.json|-> <output.json>")
        return 2

    setup_logging()
    try:
        experiment = load_config(None if argv[0] == "-" else argv[0])
    except ValidationError as e:
        logger.error("Invalid experiment config %s: %s", argv[0], e)
        return 2
    history = run_headless_experiment(experiment)

    with open(argv[1], 'w') as f:
        json.dump([entry.model_dump() for entry in history], f, indent=2)
    return 0

if __name__ == "__main__":
    sys.exit(main())
