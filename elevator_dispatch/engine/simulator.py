"""
Game runner.

The Simulator plays a controller through one game: each turn it clears the
event log, submits the controller's commands, then advances one tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from elevator_dispatch.config import DEFAULT_CONFIG, GameConfig
from elevator_dispatch.engine import events
from elevator_dispatch.engine.game import Game
from elevator_dispatch.engine.passengers import PassengerGenerator

if TYPE_CHECKING:
    from elevator_dispatch.controllers.base import Controller
    from elevator_dispatch.engine.world import WorldState

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """
    Summary of a finished run.

    Only totals are kept; the run loop stores no per-tick history.

    Attributes:
        final_score: Score when the run ended
        ticks_played: Number of ticks advanced
        failed: Whether the clock ran out
        time_remaining: Clock value when the run ended
        delivered: Passengers dropped off at their floor
        controller: Name of the controller that played
        seed: Random seed used for this run
    """
    final_score: int
    ticks_played: int
    failed: bool
    time_remaining: int
    delivered: int
    controller: str
    seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final_score": self.final_score,
            "ticks_played": self.ticks_played,
            "failed": self.failed,
            "time_remaining": self.time_remaining,
            "delivered": self.delivered,
            "controller": self.controller,
            "seed": self.seed,
        }

    def describe(self) -> str:
        status = "out of time" if self.failed else "stopped"
        return (
            f"{self.controller}: score {self.final_score} after {self.ticks_played} ticks "
            f"({status}, {self.delivered} delivered, {self.time_remaining} ticks left)"
        )


class Simulator:
    """
    Runs a controller through a game.

    Each turn:

    1. Clear the event log
    2. Ask the controller for commands and submit them
    3. Advance one tick
    4. Stop when the game is over, the controller is done, or max_ticks is hit
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        max_ticks: Optional[int] = None,
        generator: Optional[PassengerGenerator] = None,
        on_turn: Optional[Callable[["WorldState"], None]] = None,
    ):
        """
        Initialize the simulator.

        Args:
            config: Game configuration
            max_ticks: Upper bound on ticks (None = play until out of time)
            generator: Passenger arrival process
            on_turn: Called with the world after every tick, before the
                event log is cleared
        """
        self.config = config or DEFAULT_CONFIG
        self.max_ticks = max_ticks
        self.generator = generator
        self.on_turn = on_turn

    def run(self, controller: "Controller", seed: Optional[int] = None) -> GameResult:
        """
        Play one game.

        Args:
            controller: Decision source for the commands
            seed: Random seed for reproducibility

        Returns:
            GameResult summarising the run
        """
        game = Game(self.config, seed=seed, generator=self.generator)
        controller.reset()

        ticks = 0
        delivered = 0

        while not game.is_over:
            if self.max_ticks is not None and ticks >= self.max_ticks:
                break
            if controller.is_done:
                break

            game.clear_events()
            for order in controller.decide(game.state):
                game.submit(order)
            game.tick()
            ticks += 1

            delivered += sum(1 for line in game.state.events if events.is_drop_off(line))

            if self.on_turn:
                self.on_turn(game.state)

        logger.info("%s finished: score=%d ticks=%d", controller.name, game.state.score, ticks)

        return GameResult(
            final_score=game.state.score,
            ticks_played=ticks,
            failed=game.state.failed,
            time_remaining=game.state.time_remaining,
            delivered=delivered,
            controller=controller.name,
            seed=seed,
        )
