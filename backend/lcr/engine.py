"""Core game engine for Left-Center-Right.

Plays a single game over a fixed circle of seats: stake distribution,
random first player, dice-driven chip transfers, turn rotation and
termination once a single player still holds chips.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Optional

from lcr.dice import Die, Outcome

logger = logging.getLogger(__name__)

# Chips each player starts a game with; also the most dice a player rolls.
INITIAL_STAKE = 3


class Player:
    """A seat at the table. Chips reset per game, wins persist per simulation."""

    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        self.chips: int = 0
        self.wins: int = 0

    def __repr__(self) -> str:
        return f"Player({self.player_id}, chips={self.chips}, wins={self.wins})"

    @property
    def has_chips(self) -> bool:
        return self.chips > 0

    def give_chip_to(self, other: Player) -> None:
        assert self.chips > 0, f"Player {self.player_id} has no chip to give"
        if self.chips <= 0:
            logger.error("Player %d tried to give a chip with none left", self.player_id)
            return
        self.chips -= 1
        other.chips += 1

    def discard_chip(self) -> None:
        """Put a chip in the center pot. The pot itself is not tracked."""
        assert self.chips > 0, f"Player {self.player_id} has no chip to discard"
        if self.chips <= 0:
            logger.error("Player %d tried to discard a chip with none left", self.player_id)
            return
        self.chips -= 1

    def reset_chips(self, amount: int) -> None:
        self.chips = amount

    def record_win(self) -> None:
        self.wins += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "chips": self.chips,
            "wins": self.wins,
        }


class GameEngine:
    """Runs LCR games over an ordered list of seated players.

    Seat order is the order of ``players``; a player's left neighbour is the
    seat before them and their right neighbour the seat after, wrapping
    around. The same ``rng`` should back the die so a seed reproduces games.
    """

    def __init__(
        self,
        players: list[Player],
        die: Die,
        rng: Optional[random.Random] = None,
        initial_stake: int = INITIAL_STAKE,
    ) -> None:
        if len(players) < 2:
            raise ValueError("Must have at least two players")
        if initial_stake < 1:
            raise ValueError("Initial stake must be at least one chip")
        self.seats = players
        self.die = die
        self.rng = rng if rng is not None else die.rng
        self.initial_stake = initial_stake

        self.current_idx: int = 0
        self.turn_number: int = 0

    # ------------------------------------------------------------------
    # Seating
    # ------------------------------------------------------------------

    def _seat_of(self, player: Player) -> int:
        """Seat index of ``player``; seat i normally holds player_id i."""
        idx = player.player_id
        if 0 <= idx < len(self.seats) and self.seats[idx] is player:
            return idx
        for i, p in enumerate(self.seats):
            if p is player:
                return i
        raise ValueError(f"Player {player.player_id} is not seated")

    def _seat_after(self, idx: int) -> int:
        return (idx + 1) % len(self.seats)

    def _seat_before(self, idx: int) -> int:
        n = len(self.seats)
        return (idx - 1 + n) % n

    def player_after(self, player: Player) -> Player:
        """Right-hand neighbour."""
        return self.seats[self._seat_after(self._seat_of(player))]

    def player_before(self, player: Player) -> Player:
        """Left-hand neighbour."""
        return self.seats[self._seat_before(self._seat_of(player))]

    @property
    def current_player(self) -> Player:
        return self.seats[self.current_idx]

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def _players_with_chips(self) -> list[Player]:
        return [p for p in self.seats if p.has_chips]

    @property
    def is_game_over(self) -> bool:
        return len(self._players_with_chips()) == 1

    @property
    def winner(self) -> Optional[Player]:
        """The sole remaining chip holder, or None while the game is running."""
        holders = self._players_with_chips()
        return holders[0] if len(holders) == 1 else None

    @property
    def chips_in_play(self) -> int:
        return sum(p.chips for p in self.seats)

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------

    def start_game(self) -> None:
        """Hand out the stake and pick the first player at random."""
        for p in self.seats:
            p.reset_chips(self.initial_stake)
        self.current_idx = self.rng.randrange(len(self.seats))
        self.turn_number = 0

    def play_turn(self) -> None:
        """Roll for the current player, apply each outcome, then move on.

        The number of dice is fixed from the chips held when the turn
        starts. A player without chips rolls nothing but still uses up
        the turn.
        """
        player = self.current_player
        roll_count = min(self.initial_stake, player.chips)

        for _ in range(roll_count):
            outcome = self.die.roll()
            if outcome == Outcome.NO_OP:
                continue
            # Rolls never outnumber chips held at turn start, so this only
            # trips if a chip went missing mid-turn.
            if not player.has_chips:
                logger.debug("Player %d has no chip for %s", player.player_id, outcome.value)
                continue
            if outcome == Outcome.LEFT:
                player.give_chip_to(self.seats[self._seat_before(self.current_idx)])
            elif outcome == Outcome.RIGHT:
                player.give_chip_to(self.seats[self._seat_after(self.current_idx)])
            elif outcome == Outcome.CENTER:
                player.discard_chip()

        self.current_idx = self._seat_after(self.current_idx)
        self.turn_number += 1

    def play_game(self) -> int:
        """Play one game to completion. Returns the number of turns taken."""
        self.start_game()
        while not self.is_game_over:
            self.play_turn()
        return self.turn_number

    def to_dict(self) -> dict[str, Any]:
        return {
            "initial_stake": self.initial_stake,
            "current_idx": self.current_idx,
            "turn_number": self.turn_number,
            "game_over": self.is_game_over,
            "winner": self.winner.player_id if self.winner else None,
            "seats": [p.to_dict() for p in self.seats],
        }
