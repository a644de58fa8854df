"""
Command dispatcher.

Commands are validated in full before anything is mutated. A rejected
command leaves the world untouched and adds exactly one event line that
explains the expected arguments; it never raises past this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from elevator_dispatch.engine import events
from elevator_dispatch.engine.passengers import PassengerGenerator
from elevator_dispatch.engine.tick import advance_tick
from elevator_dispatch.engine.world import Elevator, WorldState
from elevator_dispatch.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoCommand:
    """Queue a destination floor for an elevator."""
    elevator: int
    target_floor: int

    def to_text(self) -> str:
        return f"go {self.elevator} {self.target_floor}"


@dataclass(frozen=True)
class DumpCommand:
    """Throw every passenger of an elevator into the pit."""
    elevator: int

    def to_text(self) -> str:
        return f"dump {self.elevator}"


@dataclass(frozen=True)
class CloseCommand:
    """Force an elevator's doors shut."""
    elevator: int

    def to_text(self) -> str:
        return f"close {self.elevator}"


@dataclass(frozen=True)
class TickCommand:
    """Advance the world by one tick."""

    def to_text(self) -> str:
        return ""


Command = Union[GoCommand, DumpCommand, CloseCommand, TickCommand]

GO_USAGE = "Usage: go <elevator> <floor>"
DUMP_USAGE = "Usage: dump <elevator>"
CLOSE_USAGE = "Usage: close <elevator>"
UNKNOWN_USAGE = "Unknown command. Try: go <elevator> <floor>, dump <elevator>, close <elevator>, or an empty line to wait."


def _parse_int(text: str, usage: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise CommandError(f"{text!r} is not a number. {usage}") from None


def parse_command(text: str) -> Command:
    """
    Parse one line of player input.

    An empty line (or ``tick``) advances time. Range checks are left to the
    dispatcher, which knows the size of the building.

    Raises:
        CommandError: If the verb is unknown or the arguments are malformed
    """
    parts = text.strip().split()
    if not parts or parts[0].lower() == "tick":
        if len(parts) > 1:
            raise CommandError("Usage: tick (takes no arguments)")
        return TickCommand()

    verb, args = parts[0].lower(), parts[1:]

    if verb == "go":
        if len(args) != 2:
            raise CommandError(GO_USAGE)
        return GoCommand(_parse_int(args[0], GO_USAGE), _parse_int(args[1], GO_USAGE))
    elif verb == "dump":
        if len(args) != 1:
            raise CommandError(DUMP_USAGE)
        return DumpCommand(_parse_int(args[0], DUMP_USAGE))
    elif verb == "close":
        if len(args) != 1:
            raise CommandError(CLOSE_USAGE)
        return CloseCommand(_parse_int(args[0], CLOSE_USAGE))

    raise CommandError(UNKNOWN_USAGE)


def _require_int(value, name: str, usage: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise CommandError(f"{name} must be a whole number, got {value!r}. {usage}")
    return int(value)


def _require_elevator(state: WorldState, index: int, usage: str) -> Elevator:
    index = _require_int(index, "Elevator", usage)
    if not 0 <= index < state.num_elevators:
        raise CommandError(
            f"No elevator {index}; elevators are 0-{state.num_elevators - 1}. {usage}"
        )
    return state.elevators[index]


def _require_floor(state: WorldState, floor: int, usage: str) -> int:
    floor = _require_int(floor, "Floor", usage)
    if not 0 <= floor < state.num_floors:
        raise CommandError(
            f"No floor {floor}; floors are 0-{state.num_floors - 1}. {usage}"
        )
    return floor


def reject(state: WorldState, error: CommandError) -> None:
    """Log a rejected command as a single event line."""
    logger.warning("Rejected command: %s", error)
    state.events.record(str(error))


def go(state: WorldState, elevator_index: int, target_floor: int) -> bool:
    """
    Queue ``target_floor`` at the back of an elevator's destinations.

    Returns:
        True if the command was applied
    """
    try:
        elevator = _require_elevator(state, elevator_index, GO_USAGE)
        target_floor = _require_floor(state, target_floor, GO_USAGE)
    except CommandError as e:
        reject(state, e)
        return False

    elevator.destinations.append(target_floor)
    return True


def dump(state: WorldState, elevator_index: int) -> bool:
    """
    Discard everyone onboard. Only allowed at the pit (the last floor).

    Returns:
        True if the command was applied
    """
    try:
        elevator = _require_elevator(state, elevator_index, DUMP_USAGE)
        if elevator.floor != state.pit_floor:
            raise CommandError(
                f"Elevator {elevator_index} must be at floor {state.pit_floor} to dump."
            )
    except CommandError as e:
        reject(state, e)
        return False

    state.events.record(events.passengers_dumped(len(elevator.onboard)))
    elevator.onboard.clear()
    return True


def close(state: WorldState, elevator_index: int) -> bool:
    """
    Shut an elevator's doors now, whatever it was doing.

    Returns:
        True if the command was applied
    """
    try:
        elevator = _require_elevator(state, elevator_index, CLOSE_USAGE)
    except CommandError as e:
        reject(state, e)
        return False

    state.events.record(events.doors_forced_closed(elevator_index))
    elevator.doors_open = False
    return True


def dispatch(
    state: WorldState,
    command: Command,
    rng: Optional[np.random.Generator] = None,
    generator: Optional[PassengerGenerator] = None,
) -> WorldState:
    """
    Apply any command to the world.

    ``rng`` and ``generator`` are only needed for ``TickCommand``.

    Returns:
        The same state object
    """
    if isinstance(command, GoCommand):
        go(state, command.elevator, command.target_floor)
    elif isinstance(command, DumpCommand):
        dump(state, command.elevator)
    elif isinstance(command, CloseCommand):
        close(state, command.elevator)
    elif isinstance(command, TickCommand):
        if rng is None or generator is None:
            raise TypeError("Advancing a tick needs both rng and generator")
        advance_tick(state, rng, generator)
    else:
        raise TypeError(f"Unknown command type: {type(command).__name__}")
    return state
