"""
World model.

The WorldState is the single authoritative snapshot of the building: floors
with their waiting queues, elevators with their onboard passengers, the
score, the clock and the outcome flag. It is created once per game and
mutated in place by the tick processor and the command dispatcher.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from elevator_dispatch.config import DEFAULT_CONFIG, GameConfig
from elevator_dispatch.engine.events import EventLog


class PassengerKind(Enum):
    """What a passenger is worth on delivery."""
    PASSENGER = "Passenger"
    BRICK = "Brick"
    VIP = "VIP"
    MECHANIC = "Mechanic"


@dataclass(frozen=True)
class Passenger:
    """
    A passenger waiting on a floor or riding an elevator.

    Never changes after creation; only moves between containers.
    """
    kind: PassengerKind
    target_floor: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "target_floor": self.target_floor}


@dataclass
class Floor:
    """A floor's waiting queue (front = next to board)."""
    waiting: Deque[Passenger] = field(default_factory=deque)

    def to_dict(self) -> Dict[str, Any]:
        return {"waiting": [p.to_dict() for p in self.waiting]}


@dataclass
class Elevator:
    """
    One elevator car.

    Attributes:
        floor: Current floor index
        doors_open: Whether the doors are open
        destinations: Queued target floors, served front first
        capacity: Maximum passengers onboard
        onboard: Passengers inside; index 0 is nearest the door
    """
    floor: int = 0
    doors_open: bool = True
    destinations: Deque[int] = field(default_factory=deque)
    capacity: int = 5
    onboard: Deque[Passenger] = field(default_factory=deque)

    @property
    def is_full(self) -> bool:
        return len(self.onboard) >= self.capacity

    @property
    def is_idle(self) -> bool:
        """Doors closed and nowhere to go."""
        return not self.doors_open and not self.destinations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "floor": self.floor,
            "doors_open": self.doors_open,
            "destinations": list(self.destinations),
            "capacity": self.capacity,
            "onboard": [p.to_dict() for p in self.onboard],
        }


@dataclass
class WorldState:
    """
    Snapshot of the game at the current tick.

    Unlike an immutable per-step snapshot, there is exactly one WorldState
    per game; ticks and commands mutate it in place. Callers must not share
    it across concurrent operations.

    Attributes:
        config: Configuration the world was built from
        score: Current score
        failed: Set once the clock runs out; the game is over
        time_remaining: Ticks left on the clock
        floors: Floors indexed bottom (0) to top (pit)
        elevators: Elevators indexed from 0
        events: Lines describing what happened since the last clear
    """
    config: GameConfig
    score: int = 0
    failed: bool = False
    time_remaining: int = 0
    floors: List[Floor] = field(default_factory=list)
    elevators: List[Elevator] = field(default_factory=list)
    events: EventLog = field(default_factory=EventLog)

    @classmethod
    def create(cls, config: Optional[GameConfig] = None) -> "WorldState":
        """
        Build a fresh world: empty floors, every elevator at floor 0 with
        doors open and nothing queued.
        """
        config = config or DEFAULT_CONFIG
        return cls(
            config=config,
            time_remaining=config.starting_time,
            floors=[Floor() for _ in range(config.num_floors)],
            elevators=[
                Elevator(capacity=config.elevator_capacity)
                for _ in range(config.num_elevators)
            ],
        )

    @property
    def num_floors(self) -> int:
        return len(self.floors)

    @property
    def num_elevators(self) -> int:
        return len(self.elevators)

    @property
    def pit_floor(self) -> int:
        return self.num_floors - 1

    def passenger_count(self) -> int:
        """Passengers waiting on floors plus those riding elevators."""
        waiting = sum(len(floor.waiting) for floor in self.floors)
        riding = sum(len(elevator.onboard) for elevator in self.elevators)
        return waiting + riding

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to serializable dict."""
        return {
            "config": self.config.to_dict(),
            "score": self.score,
            "failed": self.failed,
            "time_remaining": self.time_remaining,
            "floors": [floor.to_dict() for floor in self.floors],
            "elevators": [elevator.to_dict() for elevator in self.elevators],
            "events": self.events.to_list(),
        }


def new_world(
    num_floors: int,
    num_elevators: int,
    arrival_rate: float,
    initial_time_remaining: int,
    elevator_capacity: int,
) -> WorldState:
    """Create a world from its construction parameters."""
    config = GameConfig(
        num_floors=num_floors,
        num_elevators=num_elevators,
        arrival_rate=arrival_rate,
        starting_time=initial_time_remaining,
        elevator_capacity=elevator_capacity,
    )
    return WorldState.create(config)
