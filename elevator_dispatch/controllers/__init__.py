"""Controllers module - Decision sources that play the game."""

from elevator_dispatch.controllers.base import (
    Controller,
    IdleController,
    RandomController,
    ScriptedController,
)
from elevator_dispatch.controllers.rule_based import GreedyController, Rule, RuleBasedController

__all__ = [
    "Controller",
    "IdleController",
    "RandomController",
    "ScriptedController",
    "GreedyController",
    "Rule",
    "RuleBasedController",
]
