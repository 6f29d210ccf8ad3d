"""
Background matchmaking sweep.

Pairing is event-driven on every search request; this loop is the
fallback that periodically re-checks the whole pool through the same
atomic pairing step.
"""

import asyncio
import logging

from engine.service import ChatEngine

logger = logging.getLogger(__name__)


async def run_matchmaking_worker(engine: ChatEngine, interval: float) -> None:
    """
    Run the matchmaking sweep forever.

    Args:
        engine: Chat engine to sweep
        interval: Seconds between sweeps
    """
    logger.info(f"Matchmaking worker started with interval: {interval} seconds")

    while True:
        await asyncio.sleep(interval)
        try:
            if len(engine.pool) >= 2:
                await engine.sweep()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Matchmaking worker error: {e}", exc_info=True)
