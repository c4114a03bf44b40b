"""Pydantic models for simulation configuration and results."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_NUMBER_OF_PLAYERS = 3
DEFAULT_NUMBER_OF_GAMES = 100


class SimulationConfig(BaseModel):
    number_of_players: int = Field(default=DEFAULT_NUMBER_OF_PLAYERS, ge=2)
    number_of_games: int = Field(default=DEFAULT_NUMBER_OF_GAMES, ge=1)


# --- Request models ---


class CreateSimulationRequest(BaseModel):
    number_of_players: int = Field(default=DEFAULT_NUMBER_OF_PLAYERS, ge=2, le=100)
    number_of_games: int = Field(default=DEFAULT_NUMBER_OF_GAMES, ge=1, le=100_000)
    seed: Optional[int] = None  # None = fresh entropy


# --- Response / state models ---


class PlayerResult(BaseModel):
    player_id: int
    wins: int


class SimulationResult(BaseModel):
    """Aggregate statistics for one simulation run."""

    players: list[PlayerResult]
    shortest_game_length: int
    longest_game_length: int
    average_game_length: float
    games_played: int
    total_turns: int
    cancelled: bool = False


class SimulationSnapshot(BaseModel):
    """A completed run as handed back to clients for polling."""

    id: str
    config: SimulationConfig
    seed: Optional[int] = None
    result: SimulationResult
    created_at: float
    duration_ms: float


class SimulationDefaults(BaseModel):
    number_of_players: int = DEFAULT_NUMBER_OF_PLAYERS
    number_of_games: int = DEFAULT_NUMBER_OF_GAMES
    initial_stake: int


class ErrorResponse(BaseModel):
    detail: str
