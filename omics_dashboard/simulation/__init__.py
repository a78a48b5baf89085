"""Simulated pipeline runs."""

from .runner import (
    PipelineSimulator,
    SimulationError,
    get_simulation_steps,
    STAGE_DELAY_SECONDS,
    REPORT_MESSAGE,
    SUCCESS_MESSAGE,
    ERROR_RESULT_MESSAGE,
    FAILED_MESSAGE,
)

__all__ = [
    'PipelineSimulator',
    'SimulationError',
    'get_simulation_steps',
    'STAGE_DELAY_SECONDS',
    'REPORT_MESSAGE',
    'SUCCESS_MESSAGE',
    'ERROR_RESULT_MESSAGE',
    'FAILED_MESSAGE',
]
