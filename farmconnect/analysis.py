"""
Async boundary for the "AI" analyses (crop recommendation, disease detection).

Both analyses currently resolve to sample results after a fixed delay. They
run as asyncio tasks bounded by ANALYSIS_TIMEOUT_SECONDS so that a real
inference call can replace the producer without changing the contract:

- the producer's result is returned as-is
- exceeding the timeout raises AnalysisTimeout (the task is cancelled)
- a producer error is logged and re-raised
- cancellation (e.g. client disconnect) propagates as CancelledError
"""

import asyncio
import inspect
import logging
from typing import Any, Callable

from .config import settings

logger = logging.getLogger(__name__)


class AnalysisTimeout(Exception):
    """The analysis did not finish within the allowed time."""


async def _delayed(producer: Callable[[], Any], delay: float) -> Any:
    if delay > 0:
        await asyncio.sleep(delay)
    result = producer()
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_analysis(name: str, producer: Callable[[], Any], delay: float,
                       timeout: float = None) -> Any:
    """Run `producer` after `delay` seconds, bounded by `timeout` seconds."""
    timeout = settings.ANALYSIS_TIMEOUT_SECONDS if timeout is None else timeout
    logger.info("Starting %s analysis (delay=%.1fs, timeout=%.1fs)", name, delay, timeout)
    try:
        result = await asyncio.wait_for(_delayed(producer, delay), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s analysis timed out after %.1fs", name, timeout)
        raise AnalysisTimeout(f"{name} analysis timed out after {timeout:.1f}s") from None
    except asyncio.CancelledError:
        logger.info("%s analysis cancelled", name)
        raise
    except Exception:
        logger.exception("%s analysis failed", name)
        raise
    logger.info("%s analysis complete", name)
    return result


def filter_treatments(diagnosis: dict, preference: str = None) -> dict:
    """Keep only the treatments matching the preferred fertilizer type, if one is given."""
    if not preference:
        return diagnosis
    treatments = diagnosis.get("treatments") or {}
    diagnosis["treatments"] = {preference: treatments.get(preference, [])}
    return diagnosis
