"""
Elevator Dispatch

A tick-based elevator dispatch game engine.

Passengers of varying value appear on the floors of a building; a player or
controller queues destinations for a fleet of elevators; the engine advances
the world one tick at a time, scores deliveries and keeps a human-readable
event log of what happened.
"""

from elevator_dispatch.config import GameConfig, load_game_config
from elevator_dispatch.engine.world import WorldState, PassengerKind
from elevator_dispatch.engine.game import Game
from elevator_dispatch.engine.simulator import Simulator, GameResult
from elevator_dispatch.controllers.base import Controller
from elevator_dispatch.errors import (
    CommandError,
    ConfigError,
    EngineInvariantError,
    PassengerPoolError,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "GameConfig",
    "load_game_config",
    # Core types
    "WorldState",
    "PassengerKind",
    "Game",
    # Running games
    "Simulator",
    "GameResult",
    "Controller",
    # Errors
    "CommandError",
    "ConfigError",
    "EngineInvariantError",
    "PassengerPoolError",
]
