"""
Text rendering of the world.
"""

from __future__ import annotations

from typing import List

from elevator_dispatch.engine.world import PassengerKind, WorldState

PASSENGER_GLYPHS = {
    PassengerKind.PASSENGER: "o",
    PassengerKind.BRICK: "#",
    PassengerKind.VIP: "$",
    PassengerKind.MECHANIC: "+",
}


def _elevator_cell(index: int, onboard: int, doors_open: bool) -> str:
    # [n] doors open, |n| doors closed
    left, right = ("[", "]") if doors_open else ("|", "|")
    return f"{left}{index}:{onboard}{right}"


def render_state(state: WorldState) -> str:
    """
    Draw the building top floor first, followed by the status line,
    elevator queues and this turn's events.
    """
    cell_width = max(len(_elevator_cell(i, e.capacity, True)) for i, e in enumerate(state.elevators))
    lines: List[str] = []

    for number in reversed(range(state.num_floors)):
        cells = []
        for index, elevator in enumerate(state.elevators):
            if elevator.floor == number:
                cell = _elevator_cell(index, len(elevator.onboard), elevator.doors_open)
            else:
                cell = ""
            cells.append(cell.ljust(cell_width))

        waiting = "".join(PASSENGER_GLYPHS[p.kind] for p in state.floors[number].waiting)
        marker = " pit" if number == state.pit_floor else ""
        lines.append(f"{number:>3}{marker:<4} {' '.join(cells)}  {waiting}")

    lines.append("")
    lines.append(describe_state(state))

    for index, elevator in enumerate(state.elevators):
        queue = ", ".join(str(f) for f in elevator.destinations) or "-"
        riders = " ".join(
            f"{PASSENGER_GLYPHS[p.kind]}{p.target_floor}" for p in elevator.onboard
        ) or "-"
        lines.append(f"  elevator {index}: going to {queue}; riders {riders}")

    if len(state.events):
        lines.append("")
        lines.extend(f"  * {line}" for line in state.events)

    return "\n".join(lines)


def describe_state(state: WorldState) -> str:
    """One-line summary of score and clock."""
    status = "  GAME OVER" if state.failed else ""
    return (
        f"Score: {state.score}  Time left: {state.time_remaining}  "
        f"Waiting: {sum(len(f.waiting) for f in state.floors)}{status}"
    )
