"""Async context manager for timing and logging pipeline steps."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from src.config.constants import PipelineStep, log_pipeline_step
from src.infrastructure.logging.logger import StructuredLogger
from src.services.errors import CvGateError


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.state: dict[str, Any] = {}

    def set_state(self, **state: Any) -> None:
        self.state.update(state)


@asynccontextmanager
async def timed_step(
    step: PipelineStep,
    logger: StructuredLogger,
) -> AsyncGenerator[StepContext, None]:
    """Time a pipeline step and log its outcome.

    Expected failures (CvGateError) are logged as a step with the error
    type; anything else is logged as an error without its traceback, which
    is left to the caller that handles it. Both are re-raised.
    """
    log_pipeline_step(step)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    except CvGateError as e:
        ctx.set_state(outcome=type(e).__name__, status_code=e.status_code)
        logger.log_step(step.value, ctx.state, (time.perf_counter() - start) * 1000)
        raise
    except Exception as e:
        logger.log_error(step.value, e, ctx.state or None, exc_info=False)
        raise
    ctx.set_state(outcome="ok")
    logger.log_step(step.value, ctx.state, (time.perf_counter() - start) * 1000)
