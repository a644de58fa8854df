"""
Event log for the game.

Everything that happens during a tick or a command batch is described by
one human-readable line. The log is owned by the caller's render cycle:
the caller clears it before issuing the next batch of commands.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Union

logger = logging.getLogger(__name__)


class EventLog:
    """
    Ordered, tick-scoped sequence of event lines.

    Compares equal to a plain list of the same strings, so tests and callers
    can treat it like one.
    """

    def __init__(self, lines: Sequence[str] = ()):
        self._lines: List[str] = list(lines)

    def record(self, message: str) -> None:
        """Append one event line."""
        logger.debug("event: %s", message)
        self._lines.append(message)

    def clear(self) -> None:
        self._lines.clear()

    def to_list(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __getitem__(self, index: Union[int, slice]):
        return self._lines[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, EventLog):
            return self._lines == other._lines
        if isinstance(other, (list, tuple)):
            return self._lines == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"EventLog({self._lines!r})"


# Event text. Kept in one place so the renderer and tests agree on wording.

def passenger_arrived(floor: int) -> str:
    return f"New passenger waiting at floor {floor}."


def passenger_dropped_off(elevator: int) -> str:
    return f"Elevator {elevator} dropped off a passenger."


def is_drop_off(line: str) -> bool:
    return line.startswith("Elevator ") and line.endswith(" dropped off a passenger.")


def elevator_full(elevator: int) -> str:
    return f"Elevator {elevator} is now full."


def elevator_ready(elevator: int) -> str:
    return f"Elevator {elevator} ready to move."


def out_of_time(score: int) -> str:
    return f"Out of time. Final score: {score}"


# Reported as +10 over the base point a regular passenger would have earned.
VIP_BONUS = "+10 bonus score!"
MECHANIC_BONUS = "+20 time gained!"
BRICK_PENALTY = "-5 score from delivering brick."


def passengers_dumped(count: int) -> str:
    return f"{count} passengers dumped into the pit."


def doors_forced_closed(elevator: int) -> str:
    return f"Forcibly closed elevator {elevator}'s door."
