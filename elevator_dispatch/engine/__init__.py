"""Engine module - World model, tick processing and command dispatch."""

from elevator_dispatch.engine.world import (
    Elevator,
    Floor,
    Passenger,
    PassengerKind,
    WorldState,
    new_world,
)
from elevator_dispatch.engine.events import EventLog
from elevator_dispatch.engine.passengers import (
    DEFAULT_POOL,
    PassengerGenerator,
    PassengerPool,
    PoolEntry,
    WeightedPassengerGenerator,
)
from elevator_dispatch.engine.tick import advance_tick
from elevator_dispatch.engine.commands import (
    CloseCommand,
    Command,
    DumpCommand,
    GoCommand,
    TickCommand,
    dispatch,
    parse_command,
)
from elevator_dispatch.engine.game import Game
from elevator_dispatch.engine.simulator import GameResult, Simulator

__all__ = [
    "Elevator",
    "Floor",
    "Passenger",
    "PassengerKind",
    "WorldState",
    "new_world",
    "EventLog",
    "DEFAULT_POOL",
    "PassengerGenerator",
    "PassengerPool",
    "PoolEntry",
    "WeightedPassengerGenerator",
    "advance_tick",
    "CloseCommand",
    "Command",
    "DumpCommand",
    "GoCommand",
    "TickCommand",
    "dispatch",
    "parse_command",
    "Game",
    "GameResult",
    "Simulator",
]
