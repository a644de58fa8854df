"""
Rule-based controller implementation.

Each elevator is handled on its own: rules are evaluated by priority and
the first matching rule produces that elevator's command for the turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from elevator_dispatch.controllers.base import Controller, Order
from elevator_dispatch.engine.commands import Command, DumpCommand, GoCommand
from elevator_dispatch.engine.world import Elevator, PassengerKind, WorldState


@dataclass
class ElevatorView:
    """What a rule sees: the world plus the elevator being decided for."""
    state: WorldState
    index: int
    elevator: Elevator


@dataclass
class Rule:
    """
    A single decision rule.

    Attributes:
        name: Rule identifier for debugging
        condition: Function that takes an ElevatorView and returns bool
        command: Function that builds the command when the condition matches
        priority: Higher priority rules are evaluated first
        description: Human-readable description of the rule
    """
    name: str
    condition: Callable[[ElevatorView], bool]
    command: Callable[[ElevatorView], Command]
    priority: int = 0
    description: str = ""

    def matches(self, view: ElevatorView) -> bool:
        return self.condition(view)


class RuleBasedController(Controller):
    """
    Controller that picks each elevator's command from ordered rules.

    Rules are evaluated by priority (highest first), then by order added.
    An elevator for which no rule matches gets no command this turn.
    """

    def __init__(self, rules: List[Rule], name: str = "RuleBasedController"):
        super().__init__(name)
        self._rules = sorted(rules, key=lambda r: -r.priority)

    @property
    def rules(self) -> List[Rule]:
        return self._rules.copy()

    def add_rule(self, rule: Rule) -> None:
        """Add a new rule and re-sort by priority."""
        self._rules.append(rule)
        self._rules.sort(key=lambda r: -r.priority)

    def match(self, view: ElevatorView) -> Optional[Rule]:
        """The rule that would decide for this elevator, if any."""
        for rule in self._rules:
            if rule.matches(view):
                return rule
        return None

    def decide(self, state: WorldState) -> List[Order]:
        self._record_decision()
        orders: List[Order] = []
        for index, elevator in enumerate(state.elevators):
            view = ElevatorView(state=state, index=index, elevator=elevator)
            rule = self.match(view)
            if rule is not None:
                orders.append(rule.command(view))
        return orders


# Condition helpers

def door_passenger_is(kind: PassengerKind) -> Callable[[ElevatorView], bool]:
    """Condition: the passenger nearest the door is of ``kind``."""
    return lambda v: bool(v.elevator.onboard) and v.elevator.onboard[0].kind is kind


def nearest_waiting_floor(state: WorldState, origin: int) -> Optional[int]:
    """Closest floor with someone waiting (ties go to the lower floor)."""
    candidates = [i for i, floor in enumerate(state.floors) if floor.waiting]
    if not candidates:
        return None
    return min(candidates, key=lambda i: (abs(i - origin), i))


class GreedyController(RuleBasedController):
    """
    Deliver whoever is at the door, otherwise fetch the nearest waiting
    passenger. Bricks are carried to the pit and dumped.
    """

    def __init__(self):
        rules = [
            Rule(
                name="dump_brick",
                condition=lambda v: (
                    v.elevator.floor == v.state.pit_floor and
                    door_passenger_is(PassengerKind.BRICK)(v)
                ),
                command=lambda v: DumpCommand(v.index),
                priority=100,
                description="Dump when a brick blocks the door at the pit",
            ),
            Rule(
                name="brick_to_pit",
                condition=lambda v: (
                    v.elevator.is_idle and door_passenger_is(PassengerKind.BRICK)(v)
                ),
                command=lambda v: GoCommand(v.index, v.state.pit_floor),
                priority=90,
                description="Take a brick to the pit instead of delivering it",
            ),
            Rule(
                name="deliver",
                condition=lambda v: v.elevator.is_idle and bool(v.elevator.onboard),
                command=lambda v: GoCommand(v.index, v.elevator.onboard[0].target_floor),
                priority=50,
                description="Go where the passenger at the door wants to go",
            ),
            Rule(
                name="collect",
                condition=lambda v: (
                    v.elevator.is_idle and
                    nearest_waiting_floor(v.state, v.elevator.floor) is not None
                ),
                command=lambda v: GoCommand(
                    v.index, nearest_waiting_floor(v.state, v.elevator.floor)
                ),
                priority=10,
                description="Fetch the nearest waiting passenger",
            ),
        ]
        super().__init__(rules, name="GreedyController")
