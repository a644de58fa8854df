"""
Controller interface - Abstract base class for anything that plays the game.

A Controller looks at the world before each tick and returns the commands
to submit. This is the seam for plugging in a decision source: a script,
hand-written rules, a random baseline, or a learned model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

import numpy as np

from elevator_dispatch.engine.commands import Command, GoCommand
from elevator_dispatch.engine.world import WorldState

# Controllers may hand back parsed commands or raw input lines.
Order = Union[Command, str]


class Controller(ABC):
    """
    Abstract base class for game controllers.

    Subclasses implement ``decide``; it is called once per turn, before the
    tick, with the current world.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self._decision_count = 0

    @abstractmethod
    def decide(self, state: WorldState) -> List[Order]:
        """
        Choose this turn's commands.

        Args:
            state: Current world (read-only by convention)

        Returns:
            Commands to submit before the next tick, possibly empty
        """
        pass

    @property
    def is_done(self) -> bool:
        """True when the controller has nothing more to say (ends a run)."""
        return False

    def reset(self) -> None:
        """Reset any internal state (called between games)."""
        self._decision_count = 0

    @property
    def decision_count(self) -> int:
        """Number of turns decided since last reset."""
        return self._decision_count

    def _record_decision(self) -> None:
        self._decision_count += 1


class IdleController(Controller):
    """Never issues a command. Useful as a floor for comparisons."""

    def decide(self, state: WorldState) -> List[Order]:
        self._record_decision()
        return []


class ScriptedController(Controller):
    """
    Replays input lines.

    A turn is every line up to and including the next empty line or
    ``tick``; the commands before it are submitted, then the world ticks.
    Malformed lines are passed through untouched so the game logs them.
    """

    def __init__(self, lines: Iterable[str], name: str = "ScriptedController"):
        super().__init__(name)
        self._lines = [line.rstrip("\n") for line in lines]
        self._position = 0

    @property
    def is_done(self) -> bool:
        return self._position >= len(self._lines)

    def decide(self, state: WorldState) -> List[Order]:
        self._record_decision()
        turn: List[Order] = []
        while self._position < len(self._lines):
            line = self._lines[self._position]
            self._position += 1
            if line.strip().startswith("#"):
                continue
            if not line.strip() or line.strip().lower() == "tick":
                break
            turn.append(line)
        return turn

    def reset(self) -> None:
        super().reset()
        self._position = 0


class RandomController(Controller):
    """
    Baseline that sends every idle elevator to a random floor.
    """

    def __init__(self, seed: Optional[int] = None, name: str = "RandomController"):
        super().__init__(name)
        self._rng = np.random.default_rng(seed)

    def decide(self, state: WorldState) -> List[Order]:
        self._record_decision()
        orders: List[Order] = []
        for index, elevator in enumerate(state.elevators):
            if elevator.is_idle:
                floor = int(self._rng.integers(0, state.num_floors))
                orders.append(GoCommand(index, floor))
        return orders

    def reset(self) -> None:
        super().reset()
        # Don't reset RNG to keep successive games different
