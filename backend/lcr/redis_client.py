"""Redis client wrapper for caching simulation result snapshots."""

from __future__ import annotations

import json
import os
from typing import Any, Optional

import redis.asyncio as redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Snapshots expire on their own; nothing is kept across runs beyond this.
SIMULATION_TTL_SECONDS = int(os.getenv("SIMULATION_TTL_SECONDS", "3600"))

_pool: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    global _pool
    if _pool is None:
        _pool = redis.from_url(REDIS_URL, decode_responses=True)
    return _pool


def _simulation_key(sim_id: str) -> str:
    return f"simulation:{sim_id}"


async def store_simulation(sim_id: str, data: dict[str, Any]) -> None:
    r = await get_redis()
    await r.set(_simulation_key(sim_id), json.dumps(data), ex=SIMULATION_TTL_SECONDS)


async def load_simulation(sim_id: str) -> Optional[dict[str, Any]]:
    r = await get_redis()
    raw = await r.get(_simulation_key(sim_id))
    if raw is None:
        return None
    return json.loads(raw)


async def close() -> None:
    global _pool
    if _pool is not None:
        await _pool.aclose()
        _pool = None
