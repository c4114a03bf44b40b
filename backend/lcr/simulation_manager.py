"""Simulation manager — business logic behind the simulation endpoints."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
import uuid
from typing import Optional

from lcr import redis_client
from lcr.engine import INITIAL_STAKE
from lcr.models import (
    CreateSimulationRequest,
    SimulationConfig,
    SimulationDefaults,
    SimulationSnapshot,
)
from lcr.simulation import SimulationRunner

logger = logging.getLogger(__name__)

# Player sets are mutated without guards, so only one run at a time.
_run_lock = asyncio.Lock()

# Set from the event loop, read by the worker thread between games.
_stop_requested = threading.Event()


class SimulationBusyError(ValueError):
    """Raised when a run is requested while another is still going."""


def is_running() -> bool:
    return _run_lock.locked()


def cancel_simulation() -> bool:
    """Ask the running simulation to stop after its current game.

    Returns False when nothing is running.
    """
    if not _run_lock.locked():
        return False
    _stop_requested.set()
    logger.info("Cancellation requested for the running simulation")
    return True


def get_defaults() -> SimulationDefaults:
    return SimulationDefaults(initial_stake=INITIAL_STAKE)


async def run_simulation(req: CreateSimulationRequest) -> SimulationSnapshot:
    """Run a simulation, cache its snapshot and return it."""
    if _run_lock.locked():
        raise SimulationBusyError("A simulation is already running")

    async with _run_lock:
        config = SimulationConfig(
            number_of_players=req.number_of_players,
            number_of_games=req.number_of_games,
        )
        runner = SimulationRunner(seed=req.seed)
        _stop_requested.clear()

        started = time.time()
        # CPU-bound; keep the event loop free for polling clients
        result = await asyncio.to_thread(runner.run, config, _stop_requested.is_set)
        duration_ms = (time.time() - started) * 1000

        snapshot = SimulationSnapshot(
            id=uuid.uuid4().hex,
            config=config,
            seed=req.seed,
            result=result,
            created_at=started,
            duration_ms=round(duration_ms, 3),
        )
        await redis_client.store_simulation(snapshot.id, snapshot.model_dump(mode="json"))

    logger.info(
        "Simulation %s: %d players, %d games in %.1f ms (avg %.2f turns)",
        snapshot.id,
        config.number_of_players,
        result.games_played,
        duration_ms,
        result.average_game_length,
    )
    return snapshot


async def get_simulation(sim_id: str) -> Optional[SimulationSnapshot]:
    """Load a cached snapshot, or None once it has expired."""
    data = await redis_client.load_simulation(sim_id)
    if data is None:
        return None
    return SimulationSnapshot.model_validate(data)
