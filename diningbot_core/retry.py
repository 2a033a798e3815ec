"""
Bounded retry around a whole run.

A run is re-invoked up to ``max_attempts`` times with no delay, stopping at
the first success. Exhausting the attempts is logged and reported as False,
never raised.

Usage:
    from diningbot_core.retry import run_with_retries

    ok = await run_with_retries(orchestrator.run, max_attempts=5)
"""

import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


async def run_with_retries(
    func: Callable[[], Awaitable[Any]],
    max_attempts: int = 5,
) -> bool:
    """
    Execute an async callable until it succeeds or attempts run out.

    Args:
        func: Zero-argument coroutine function performing one full run
        max_attempts: Maximum number of attempts

    Returns:
        True if an attempt succeeded
    """
    for attempt in range(1, max_attempts + 1):
        try:
            await func()
        except Exception as e:
            logger.error(f"Failed to get the menu, attempt {attempt}: {e}")
            continue
        if attempt > 1:
            logger.info(f"Run succeeded on attempt {attempt}")
        return True

    logger.error(f"Gave up trying to get the menu after {max_attempts} attempts")
    return False
