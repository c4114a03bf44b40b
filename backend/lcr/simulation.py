"""Batch runner — plays many games and aggregates the results."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from lcr.dice import Die
from lcr.engine import INITIAL_STAKE, GameEngine, Player
from lcr.models import PlayerResult, SimulationConfig, SimulationResult

logger = logging.getLogger(__name__)


def validate_config(config: SimulationConfig) -> None:
    """Raise ValueError for a configuration the runner cannot play."""
    if config.number_of_players < 2:
        raise ValueError("Must have at least two players")
    if config.number_of_games < 1:
        raise ValueError("Must play at least one game per simulation")


def create_players(count: int) -> list[Player]:
    return [Player(seat) for seat in range(count)]


class SimulationRunner:
    """Runs a simulation with one shared random source.

    Pass ``rng`` to supply the source directly or ``seed`` for a fresh
    seeded one. Either makes every run reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        initial_stake: int = INITIAL_STAKE,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.die = Die(self.rng)
        self.initial_stake = initial_stake
        self.players: list[Player] = []

    def run(
        self,
        config: SimulationConfig,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> SimulationResult:
        """Play ``config.number_of_games`` games and return the aggregates.

        ``should_stop`` is polled between games only, so every counted
        game ran to completion. The simulation manager wires it to the
        cancel endpoint.
        """
        validate_config(config)

        self.players = create_players(config.number_of_players)
        engine = GameEngine(self.players, self.die, self.rng, self.initial_stake)

        shortest = 0
        longest = 0
        total_turns = 0
        games_played = 0
        cancelled = False

        for game_number in range(config.number_of_games):
            if should_stop is not None and should_stop():
                cancelled = True
                logger.info(
                    "Simulation stopped after %d of %d games",
                    games_played,
                    config.number_of_games,
                )
                break

            game_length = engine.play_game()
            total_turns += game_length
            games_played += 1

            if game_number == 0:
                shortest = longest = game_length
            else:
                shortest = min(shortest, game_length)
                longest = max(longest, game_length)

            winner = engine.winner
            if winner is None:
                logger.error("Game %d ended without a single winner", game_number + 1)
                continue
            winner.record_win()

        average = total_turns / games_played if games_played else 0.0

        logger.debug(
            "Simulation done: players=%d games=%d shortest=%d longest=%d avg=%.2f",
            config.number_of_players,
            games_played,
            shortest,
            longest,
            average,
        )

        return SimulationResult(
            players=[PlayerResult(player_id=p.player_id, wins=p.wins) for p in self.players],
            shortest_game_length=shortest,
            longest_game_length=longest,
            average_game_length=average,
            games_played=games_played,
            total_turns=total_turns,
            cancelled=cancelled,
        )
