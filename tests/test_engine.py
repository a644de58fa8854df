"""
Tests for the world model and the tick processor.
"""

import numpy as np
import pytest

from elevator_dispatch.config import GameConfig
from elevator_dispatch.engine import events
from elevator_dispatch.engine.passengers import Arrival, PassengerGenerator, WeightedPassengerGenerator
from elevator_dispatch.engine.tick import advance_tick, apply_debark_scoring
from elevator_dispatch.engine.world import (
    Elevator,
    Passenger,
    PassengerKind,
    WorldState,
    new_world,
)


class NoArrivals(PassengerGenerator):
    """Generator that never produces anyone."""

    def should_arrive(self, arrival_rate, rng):
        return False

    def generate(self, num_floors, rng):
        raise AssertionError("should not be called")


class FixedArrival(PassengerGenerator):
    """Generator that always produces the same arrival."""

    def __init__(self, origin, passenger):
        self.arrival = Arrival(origin_floor=origin, passenger=passenger)

    def should_arrive(self, arrival_rate, rng):
        return True

    def generate(self, num_floors, rng):
        return self.arrival


def make_state(**config):
    """Helper to create a quiet test world."""
    config.setdefault("arrival_rate", 0.0)
    return WorldState.create(GameConfig(**config))


def tick(state, generator=None):
    return advance_tick(state, np.random.default_rng(0), generator or NoArrivals())


def rider(target, kind=PassengerKind.PASSENGER):
    return Passenger(kind=kind, target_floor=target)


class TestWorldState:
    """Tests for WorldState construction."""

    def test_create_defaults(self):
        state = WorldState.create()

        assert state.num_floors == 7
        assert state.num_elevators == 1
        assert state.time_remaining == 110
        assert state.score == 0
        assert not state.failed
        assert state.events == []

    def test_new_world(self):
        state = new_world(
            num_floors=4,
            num_elevators=3,
            arrival_rate=0.5,
            initial_time_remaining=20,
            elevator_capacity=2,
        )

        assert state.num_floors == 4
        assert state.pit_floor == 3
        assert state.config.arrival_rate == 0.5
        assert state.time_remaining == 20
        assert all(not floor.waiting for floor in state.floors)
        for elevator in state.elevators:
            assert elevator.floor == 0
            assert elevator.doors_open
            assert list(elevator.destinations) == []
            assert list(elevator.onboard) == []
            assert elevator.capacity == 2

    def test_elevators_are_independent(self):
        state = make_state(num_elevators=2)
        state.elevators[0].destinations.append(3)

        assert list(state.elevators[1].destinations) == []

    def test_to_dict(self):
        state = make_state(num_floors=3)
        state.floors[1].waiting.append(rider(2, PassengerKind.VIP))

        snapshot = state.to_dict()

        assert snapshot["floors"][1]["waiting"] == [{"kind": "VIP", "target_floor": 2}]
        assert snapshot["elevators"][0]["doors_open"] is True
        assert snapshot["failed"] is False

    def test_passenger_count(self):
        state = make_state()
        state.floors[2].waiting.extend([rider(0), rider(1)])
        state.elevators[0].onboard.append(rider(4))

        assert state.passenger_count() == 3


class TestClock:
    """Tests for time keeping and game over."""

    def test_tick_decrements_time(self):
        state = make_state(starting_time=5)
        tick(state)

        assert state.time_remaining == 4
        assert not state.failed

    def test_out_of_time(self):
        state = make_state(starting_time=1)
        state.score = 7
        tick(state)

        assert state.time_remaining == 0
        assert state.failed
        assert state.events[-1] == events.out_of_time(7)

    def test_time_decreases_by_one_every_tick(self):
        state = make_state(starting_time=10)

        for expected in range(9, 0, -1):
            tick(state)
            assert state.time_remaining == expected
            assert not state.failed

        tick(state)
        assert state.failed


class TestDoorsOpen:
    """Tests for boarding and debarking."""

    def test_boarding_fills_capacity_one_elevator(self):
        state = make_state(num_floors=3, elevator_capacity=1)
        state.floors[0].waiting.append(rider(2))

        tick(state)

        elevator = state.elevators[0]
        assert len(elevator.onboard) == 1
        assert not state.floors[0].waiting
        assert events.elevator_full(0) in state.events
        assert elevator.doors_open

    def test_boarding_is_fifo_from_floor_and_lifo_onboard(self):
        state = make_state()
        first, second = rider(3), rider(5)
        state.floors[0].waiting.extend([first, second])

        tick(state)
        tick(state)

        assert list(state.elevators[0].onboard) == [second, first]
        assert state.events == []

    def test_full_elevator_closes_doors(self):
        state = make_state(elevator_capacity=1)
        state.elevators[0].onboard.append(rider(4))
        state.floors[0].waiting.append(rider(2))

        tick(state)

        assert not state.elevators[0].doors_open
        assert len(state.floors[0].waiting) == 1

    def test_nothing_to_do_closes_doors(self):
        state = make_state()
        tick(state)

        assert not state.elevators[0].doors_open
        assert state.events == [events.elevator_ready(0)]

    def test_close_with_destinations_is_silent(self):
        state = make_state()
        state.elevators[0].destinations.append(2)
        tick(state)

        assert not state.elevators[0].doors_open
        assert state.events == []

    def test_passenger_debarks(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.floor = 3
        elevator.onboard.append(rider(3))

        tick(state)

        assert not elevator.onboard
        assert state.score == 1
        assert state.events == [events.passenger_dropped_off(0)]

    def test_only_front_passenger_can_exit(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.floor = 2
        blocker, wants_out = rider(4), rider(2)
        elevator.onboard.extend([blocker, wants_out])
        state.floors[2].waiting.append(rider(0))

        tick(state)

        # The blocker is pushed out to the front of the floor queue.
        assert list(elevator.onboard) == [wants_out]
        assert state.floors[2].waiting[0] is blocker
        assert len(state.floors[2].waiting) == 2
        assert state.score == 0

        tick(state)

        assert not elevator.onboard
        assert state.score == 1

    def test_no_match_means_nobody_leaves(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.onboard.extend([rider(4), rider(5)])

        tick(state)

        assert len(elevator.onboard) == 2
        assert not elevator.doors_open


class TestScoring:
    """Tests for debark scoring by passenger kind."""

    def _debark(self, kind, time_remaining=50):
        state = make_state(starting_time=time_remaining)
        elevator = state.elevators[0]
        elevator.floor = 1
        elevator.onboard.append(rider(1, kind))
        tick(state)
        return state

    def test_regular_passenger(self):
        state = self._debark(PassengerKind.PASSENGER)

        assert state.score == 1
        assert state.events == [events.passenger_dropped_off(0)]

    def test_vip(self):
        state = self._debark(PassengerKind.VIP)

        assert state.score == 11
        assert state.events == [events.passenger_dropped_off(0), events.VIP_BONUS]

    def test_mechanic(self):
        state = self._debark(PassengerKind.MECHANIC, time_remaining=50)

        assert state.time_remaining == 49 + 20
        assert state.score == 0
        assert events.MECHANIC_BONUS in state.events

    def test_mechanic_can_save_the_last_tick(self):
        state = self._debark(PassengerKind.MECHANIC, time_remaining=1)

        assert state.time_remaining == 20
        assert not state.failed

    def test_brick(self):
        state = self._debark(PassengerKind.BRICK)

        assert state.score == -5
        assert events.BRICK_PENALTY in state.events

    def test_apply_debark_scoring_directly(self):
        state = make_state()
        apply_debark_scoring(state, rider(0, PassengerKind.VIP))
        apply_debark_scoring(state, rider(0))

        assert state.score == 12


class TestMovement:
    """Tests for closed-door movement."""

    def test_travel_up_then_open(self):
        state = make_state(num_floors=5)
        elevator = state.elevators[0]
        elevator.doors_open = False
        elevator.destinations.append(3)

        for expected_floor in (1, 2, 3):
            tick(state)
            assert elevator.floor == expected_floor
            assert not elevator.doors_open

        # Arriving is one tick, opening at the destination is the next.
        tick(state)
        assert elevator.floor == 3
        assert elevator.doors_open
        assert list(elevator.destinations) == []

    def test_travel_down(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.floor = 4
        elevator.doors_open = False
        elevator.destinations.append(2)

        tick(state)

        assert elevator.floor == 3

    def test_destinations_served_in_order(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.doors_open = False
        elevator.destinations.extend([1, 0])

        tick(state)  # 0 -> 1
        tick(state)  # open at 1
        assert elevator.floor == 1
        assert list(elevator.destinations) == [0]

    def test_idle_elevator_does_nothing(self):
        state = make_state()
        elevator = state.elevators[0]
        elevator.floor = 2
        elevator.doors_open = False

        tick(state)

        assert elevator.floor == 2
        assert not elevator.doors_open
        assert state.events == []

    def test_elevators_step_in_index_order(self):
        state = make_state(num_elevators=2)
        tick(state)

        assert state.events == [events.elevator_ready(0), events.elevator_ready(1)]


class TestArrivals:
    """Tests for passengers appearing during a tick."""

    def test_arrival_appended_to_back(self):
        state = make_state()
        existing = rider(5)
        state.floors[2].waiting.append(existing)
        newcomer = rider(0, PassengerKind.VIP)
        state.elevators[0].doors_open = False

        tick(state, FixedArrival(2, newcomer))

        assert list(state.floors[2].waiting) == [existing, newcomer]
        assert state.events == [events.passenger_arrived(2)]

    def test_arrival_logged_after_elevator_events(self):
        state = make_state()
        tick(state, FixedArrival(4, rider(1)))

        assert state.events == [events.elevator_ready(0), events.passenger_arrived(4)]

    def test_zero_rate_never_arrives(self):
        state = make_state(arrival_rate=0.0)
        rng = np.random.default_rng(1)
        generator = WeightedPassengerGenerator()

        for _ in range(100):
            advance_tick(state, rng, generator)

        assert state.passenger_count() == 0


class TestConservation:
    """Passengers are only created by arrivals and removed by debarks."""

    def test_total_passengers_preserved(self):
        state = WorldState.create(GameConfig(
            num_floors=6, num_elevators=2, arrival_rate=0.6,
            starting_time=1000, elevator_capacity=3,
        ))
        rng = np.random.default_rng(123)
        command_rng = np.random.default_rng(321)
        generator = WeightedPassengerGenerator()

        for _ in range(300):
            for index, elevator in enumerate(state.elevators):
                if elevator.is_idle:
                    elevator.destinations.append(int(command_rng.integers(0, state.num_floors)))

            before = state.passenger_count()
            state.events.clear()
            advance_tick(state, rng, generator)

            arrived = sum(1 for line in state.events if line.startswith("New passenger"))
            dropped = sum(1 for line in state.events if events.is_drop_off(line))
            assert state.passenger_count() == before + arrived - dropped

            for elevator in state.elevators:
                assert 0 <= len(elevator.onboard) <= elevator.capacity
                assert 0 <= elevator.floor < state.num_floors
