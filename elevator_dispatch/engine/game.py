"""
Game facade.

Bundles the world with the randomness and arrival process it is advanced
with, so a caller can clear events, submit commands and tick through one
object.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

import numpy as np

from elevator_dispatch.config import DEFAULT_CONFIG, GameConfig
from elevator_dispatch.engine import commands
from elevator_dispatch.engine.commands import Command, TickCommand
from elevator_dispatch.engine.passengers import PassengerGenerator, WeightedPassengerGenerator
from elevator_dispatch.engine.tick import advance_tick
from elevator_dispatch.engine.world import WorldState
from elevator_dispatch.errors import CommandError

logger = logging.getLogger(__name__)


class Game:
    """
    One running game.

    Example:
        game = Game(GameConfig(num_floors=5), seed=42)
        game.clear_events()
        game.submit("go 0 3")
        game.tick()
        print(game.events)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        generator: Optional[PassengerGenerator] = None,
    ):
        """
        Args:
            config: Game configuration (defaults to the standard building)
            seed: Random seed for reproducible arrivals
            generator: Passenger arrival process
        """
        self.config = config or DEFAULT_CONFIG
        self.generator = generator or WeightedPassengerGenerator()
        self._seed = seed
        self._rng = self._create_rng(seed)
        self.state = WorldState.create(self.config)

    def _create_rng(self, seed: Optional[int] = None) -> np.random.Generator:
        return np.random.default_rng(seed)

    def reset(self, seed: Optional[int] = None) -> WorldState:
        """Start over with a fresh world and a re-seeded RNG."""
        if seed is not None:
            self._seed = seed
        self._rng = self._create_rng(self._seed)
        self.state = WorldState.create(self.config)
        logger.info("Game reset (seed=%s)", self._seed)
        return self.state

    @property
    def rng(self) -> np.random.Generator:
        """Access the random number generator."""
        return self._rng

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def events(self) -> List[str]:
        return self.state.events.to_list()

    @property
    def is_over(self) -> bool:
        return self.state.failed

    def clear_events(self) -> None:
        self.state.events.clear()

    def go(self, elevator: int, floor: int) -> bool:
        return commands.go(self.state, elevator, floor)

    def dump(self, elevator: int) -> bool:
        return commands.dump(self.state, elevator)

    def close(self, elevator: int) -> bool:
        return commands.close(self.state, elevator)

    def tick(self) -> WorldState:
        if self.state.failed:
            logger.warning("Ticking a game that is already over")
        return advance_tick(self.state, self._rng, self.generator)

    def submit(self, command: Union[Command, str]) -> WorldState:
        """
        Apply a command object or a line of player input.

        Malformed input becomes one event line instead of an exception.
        """
        if isinstance(command, str):
            try:
                command = commands.parse_command(command)
            except CommandError as e:
                commands.reject(self.state, e)
                return self.state

        if isinstance(command, TickCommand):
            return self.tick()
        return commands.dispatch(self.state, command)
