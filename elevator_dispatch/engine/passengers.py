"""
Passenger generation.

New passengers are the only source of uncertainty in the game. Each tick a
single Bernoulli trial decides whether someone arrives; if so, an origin,
a destination and a passenger kind are drawn from the injected random
number generator.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from elevator_dispatch.engine.world import Passenger, PassengerKind
from elevator_dispatch.errors import ConfigError, PassengerPoolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolEntry:
    """
    One kind of passenger in the weighted pool.

    Attributes:
        kind: Passenger kind produced by this entry
        weight: Relative draw weight (0 disables the kind)
    """
    kind: PassengerKind
    weight: int

    def __post_init__(self):
        if not isinstance(self.weight, (int, np.integer)) or self.weight < 0:
            raise ConfigError(f"Pool weight must be a non-negative integer, got {self.weight!r}")


class PassengerPool:
    """
    Weighted pool of passenger kinds.

    A draw picks an integer uniformly in [0, total_weight) and walks the
    entries, subtracting each weight until the remainder falls inside the
    current entry.
    """

    def __init__(self, entries: Sequence[PoolEntry]):
        self._entries: Tuple[PoolEntry, ...] = tuple(entries)

    @classmethod
    def from_weights(cls, weights: Sequence[Tuple[PassengerKind, int]]) -> "PassengerPool":
        return cls([PoolEntry(kind, weight) for kind, weight in weights])

    @property
    def entries(self) -> List[PoolEntry]:
        return list(self._entries)

    @property
    def total_weight(self) -> int:
        return sum(entry.weight for entry in self._entries)

    def probabilities(self) -> dict:
        """Expected share of each kind (empty if the pool has no weight)."""
        total = self.total_weight
        if total == 0:
            return {}
        return {entry.kind: entry.weight / total for entry in self._entries}

    def draw(self, rng: np.random.Generator) -> PassengerKind:
        """
        Draw one passenger kind.

        Raises:
            PassengerPoolError: If no entry was selected, which only happens
                when the pool's total weight is zero.
        """
        total = self.total_weight
        roll = int(rng.integers(0, total)) if total > 0 else 0

        for entry in self._entries:
            if roll < entry.weight:
                return entry.kind
            roll -= entry.weight

        raise PassengerPoolError(
            f"Passenger roll selected no pool entry (total weight {total})"
        )


DEFAULT_POOL = PassengerPool.from_weights([
    (PassengerKind.PASSENGER, 10),
    (PassengerKind.BRICK, 0),
    (PassengerKind.VIP, 3),
    (PassengerKind.MECHANIC, 1),
])


@dataclass(frozen=True)
class Arrival:
    """A newly generated passenger and the floor it appears on."""
    origin_floor: int
    passenger: Passenger


class PassengerGenerator(ABC):
    """
    Abstract base class for passenger arrival processes.

    The generator decides whether someone arrives this tick and, if so,
    who and where.
    """

    def should_arrive(self, arrival_rate: float, rng: np.random.Generator) -> bool:
        """Single Bernoulli trial with success probability ``arrival_rate``."""
        return rng.random() < arrival_rate

    @abstractmethod
    def generate(self, num_floors: int, rng: np.random.Generator) -> Arrival:
        """
        Produce one arrival.

        Args:
            num_floors: Number of floors in the building
            rng: Random number generator

        Returns:
            The new passenger and its origin floor
        """
        pass


class WeightedPassengerGenerator(PassengerGenerator):
    """
    Uniform origin, uniform destination among the other floors, and a kind
    drawn from a weighted pool.
    """

    def __init__(self, pool: PassengerPool = DEFAULT_POOL):
        self.pool = pool

    def generate(self, num_floors: int, rng: np.random.Generator) -> Arrival:
        origin = int(rng.integers(0, num_floors))

        # Draw among the other floors, skipping over the origin.
        target = int(rng.integers(0, num_floors - 1))
        if target >= origin:
            target += 1

        kind = self.pool.draw(rng)
        logger.debug("Generated %s at floor %d -> %d", kind.value, origin, target)
        return Arrival(origin_floor=origin, passenger=Passenger(kind=kind, target_floor=target))
