"""
Tick processor.

Advances the world by exactly one unit of time: the clock, every elevator's
door/movement state machine, the arrival trial and the out-of-time check.
"""

from __future__ import annotations

import logging

import numpy as np

from elevator_dispatch.engine import events
from elevator_dispatch.engine.passengers import PassengerGenerator
from elevator_dispatch.engine.world import Elevator, Passenger, PassengerKind, WorldState

logger = logging.getLogger(__name__)

VIP_SCORE = 11
MECHANIC_TIME_BONUS = 20
BRICK_PENALTY = 5
PASSENGER_SCORE = 1


def apply_debark_scoring(state: WorldState, passenger: Passenger) -> None:
    """Credit the world for a passenger who reached their floor."""
    if passenger.kind is PassengerKind.VIP:
        state.score += VIP_SCORE
        state.events.record(events.VIP_BONUS)
    elif passenger.kind is PassengerKind.MECHANIC:
        state.time_remaining += MECHANIC_TIME_BONUS
        state.events.record(events.MECHANIC_BONUS)
    elif passenger.kind is PassengerKind.BRICK:
        state.score -= BRICK_PENALTY
        state.events.record(events.BRICK_PENALTY)
    else:
        state.score += PASSENGER_SCORE


def _step_doors_open(state: WorldState, index: int, elevator: Elevator) -> None:
    floor = state.floors[elevator.floor]

    someone_getting_out = any(p.target_floor == elevator.floor for p in elevator.onboard)

    if someone_getting_out:
        # Only the passenger nearest the door can get out, even if the one
        # who wants this floor is further back.
        passenger = elevator.onboard.popleft()
        if passenger.target_floor == elevator.floor:
            logger.debug("Elevator %d debarked %s at floor %d",
                         index, passenger.kind.value, elevator.floor)
            state.events.record(events.passenger_dropped_off(index))
            apply_debark_scoring(state, passenger)
        else:
            floor.waiting.appendleft(passenger)
    elif floor.waiting and not elevator.is_full:
        elevator.onboard.appendleft(floor.waiting.popleft())
        if elevator.is_full:
            state.events.record(events.elevator_full(index))
    else:
        elevator.doors_open = False
        if not elevator.destinations:
            state.events.record(events.elevator_ready(index))


def _step_doors_closed(index: int, elevator: Elevator) -> None:
    if not elevator.destinations:
        return

    target = elevator.destinations[0]
    if target == elevator.floor:
        elevator.destinations.popleft()
        elevator.doors_open = True
    elif target < elevator.floor:
        elevator.floor -= 1
    else:
        elevator.floor += 1
    logger.debug("Elevator %d at floor %d, doors %s",
                 index, elevator.floor, "open" if elevator.doors_open else "closed")


def step_elevator(state: WorldState, index: int) -> None:
    """Run one elevator's state machine for a single tick."""
    elevator = state.elevators[index]
    if elevator.doors_open:
        _step_doors_open(state, index, elevator)
    else:
        _step_doors_closed(index, elevator)


def run_arrivals(
    state: WorldState,
    rng: np.random.Generator,
    generator: PassengerGenerator,
) -> None:
    """At most one arrival per tick, gated by the configured arrival rate."""
    if not generator.should_arrive(state.config.arrival_rate, rng):
        return

    arrival = generator.generate(state.num_floors, rng)
    state.floors[arrival.origin_floor].waiting.append(arrival.passenger)
    state.events.record(events.passenger_arrived(arrival.origin_floor))


def advance_tick(
    state: WorldState,
    rng: np.random.Generator,
    generator: PassengerGenerator,
) -> WorldState:
    """
    Advance the world by one tick.

    The caller is expected to stop ticking once ``state.failed`` is set;
    this function does not check it.

    Args:
        state: World to advance (mutated in place)
        rng: Random number generator for arrivals
        generator: Passenger arrival process

    Returns:
        The same state object, for chaining
    """
    state.time_remaining -= 1

    for index in range(state.num_elevators):
        step_elevator(state, index)

    run_arrivals(state, rng, generator)

    if state.time_remaining <= 0:
        state.failed = True
        state.events.record(events.out_of_time(state.score))
        logger.info("Game over with score %d", state.score)

    return state
