"""FastAPI application — REST endpoints for LCR simulations."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from lcr import redis_client, simulation_manager
from lcr.models import (
    CreateSimulationRequest,
    ErrorResponse,
    SimulationDefaults,
    SimulationSnapshot,
)
from lcr.simulation_manager import SimulationBusyError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await redis_client.close()


app = FastAPI(title="LCR Simulation API", lifespan=lifespan)

# ---------- Rate Limiting ----------

_rate_limit_enabled = os.getenv("RATE_LIMIT_ENABLED", "1") != "0"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=_rate_limit_enabled,
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please slow down."},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- REST endpoints ----------


@app.get("/api/health")
async def health():
    return {"status": "ok", "running": simulation_manager.is_running()}


@app.get("/api/simulations/defaults", response_model=SimulationDefaults)
async def get_defaults():
    return simulation_manager.get_defaults()


@app.post(
    "/api/simulations",
    response_model=SimulationSnapshot,
    responses={409: {"model": ErrorResponse}},
)
@limiter.limit("10/minute")
async def create_simulation(request: Request, req: CreateSimulationRequest):
    """Run a simulation and return its result snapshot."""
    try:
        return await simulation_manager.run_simulation(req)
    except SimulationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/simulations/cancel")
@limiter.limit("10/minute")
async def cancel_simulation(request: Request):
    """Stop the running simulation after its current game."""
    return {"cancelled": simulation_manager.cancel_simulation()}


@app.get(
    "/api/simulations/{sim_id}",
    response_model=SimulationSnapshot,
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit("60/minute")
async def get_simulation(request: Request, sim_id: str):
    snapshot = await simulation_manager.get_simulation(sim_id)
    if snapshot is None:
        logger.debug("Simulation %s not found or expired", sim_id)
        raise HTTPException(status_code=404, detail="Simulation not found")
    return snapshot
