"""
wordmorph.phases — Phase state machine for the morph animation.

The animation plays up to three working phases in a fixed order:

    idle ─START─▶ deleting ─DONE_PHASE─▶ moving ─DONE_PHASE─▶ inserting ─DONE_PHASE─▶ complete
      ▲                                                                                  │
      └────────────────────────────────── RESTART ───────────────────────────────────────┘

A phase with nothing to do is skipped, repeatedly if needed, so the
machine never sits in an empty phase waiting for a DONE_PHASE that no
renderer will send.  RESET returns to idle from anywhere.  Any other
event that does not apply to the current phase is ignored.

The machine is driven from the outside (the renderer reports when a
phase has finished); it never waits or schedules anything itself.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from .core import EditPlan


logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    DELETING = "deleting"
    MOVING = "moving"
    INSERTING = "inserting"
    COMPLETE = "complete"


class Event(str, Enum):
    START = "START"
    DONE_PHASE = "DONE_PHASE"
    RESET = "RESET"
    RESTART = "RESTART"


@dataclass(frozen=True, slots=True)
class PhaseCounts:
    """How many operations each working phase has to animate."""
    deletions: int = 0
    moves: int = 0
    insertions: int = 0

    @classmethod
    def from_plan(cls, plan: EditPlan) -> "PhaseCounts":
        return cls(
            deletions=len(plan.deletions),
            moves=len(plan.moves),
            insertions=len(plan.insertions),
        )

    def for_phase(self, phase: Phase) -> Optional[int]:
        """Operation count of a working phase, None for idle/complete."""
        if phase is Phase.DELETING:
            return self.deletions
        if phase is Phase.MOVING:
            return self.moves
        if phase is Phase.INSERTING:
            return self.insertions
        return None


@dataclass(frozen=True, slots=True)
class MachineState:
    phase: Phase = Phase.IDLE
    counts: PhaseCounts = field(default_factory=PhaseCounts)


# ═══════════════════════════════════════════════════════════════════
#  TRANSITION TABLE
# ═══════════════════════════════════════════════════════════════════

PHASE_ORDER: tuple[Phase, ...] = (
    Phase.IDLE,
    Phase.DELETING,
    Phase.MOVING,
    Phase.INSERTING,
    Phase.COMPLETE,
)

# Targets before skipping; skip_forward() is applied to every one of them.
TRANSITIONS: dict[tuple[Phase, Event], Phase] = {
    (Phase.IDLE, Event.START): Phase.DELETING,
    (Phase.DELETING, Event.DONE_PHASE): Phase.MOVING,
    (Phase.MOVING, Event.DONE_PHASE): Phase.INSERTING,
    (Phase.INSERTING, Event.DONE_PHASE): Phase.COMPLETE,
    (Phase.COMPLETE, Event.RESTART): Phase.IDLE,
}


def next_phase(phase: Phase) -> Phase:
    """The phase after ``phase`` in the fixed order; complete is terminal."""
    if phase is Phase.COMPLETE:
        return Phase.COMPLETE
    return PHASE_ORDER[PHASE_ORDER.index(phase) + 1]


def skip_forward(phase: Phase, counts: PhaseCounts) -> Phase:
    """Advance past working phases whose operation count is zero."""
    while counts.for_phase(phase) == 0:
        phase = next_phase(phase)
    return phase


def coerce_event(event: Union[Event, str]) -> Event:
    """Accept an Event or its name; unknown names raise ValueError."""
    if isinstance(event, Event):
        return event
    try:
        return Event(event)
    except ValueError:
        raise ValueError(f"unknown phase machine event: {event!r}") from None


def transition(state: MachineState, event: Union[Event, str]) -> MachineState:
    """
    Pure reducer: the state that follows ``state`` on ``event``.

    Returns ``state`` itself when the event does not apply.
    """
    event = coerce_event(event)
    if event is Event.RESET:
        return replace(state, phase=Phase.IDLE)

    target = TRANSITIONS.get((state.phase, event))
    if target is None:
        return state
    return replace(state, phase=skip_forward(target, state.counts))


# ═══════════════════════════════════════════════════════════════════
#  MACHINE
# ═══════════════════════════════════════════════════════════════════

class PhaseMachine:
    """
    One animation session's phase bookkeeping.

    Create one per word pair (``PhaseMachine.from_plan(plan)``) or reuse one
    with ``load(plan)``.  ``history`` records the phases entered since the
    last reset, starting with idle.
    """

    def __init__(self, counts: Optional[PhaseCounts] = None):
        self._state = MachineState(Phase.IDLE, counts or PhaseCounts())
        self._history: list[Phase] = [Phase.IDLE]

    @classmethod
    def from_plan(cls, plan: EditPlan) -> "PhaseMachine":
        return cls(PhaseCounts.from_plan(plan))

    @property
    def state(self) -> MachineState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def counts(self) -> PhaseCounts:
        return self._state.counts

    @property
    def history(self) -> list[Phase]:
        return list(self._history)

    @property
    def is_complete(self) -> bool:
        return self._state.phase is Phase.COMPLETE

    def send(self, event: Union[Event, str]) -> Phase:
        """Feed one event to the machine and return the resulting phase."""
        event = coerce_event(event)
        before = self._state
        after = transition(before, event)

        if event is Event.RESET or (event is Event.RESTART and after is not before):
            self._history = [Phase.IDLE]
        elif after is before:
            logger.debug("Ignoring %s in phase %s", event.value, before.phase.value)
        else:
            self._history.append(after.phase)

        if after.phase is not before.phase:
            logger.debug("Phase %s -> %s on %s",
                         before.phase.value, after.phase.value, event.value)
        self._state = after
        return after.phase

    def reset(self) -> Phase:
        return self.send(Event.RESET)

    def load(self, plan: EditPlan) -> None:
        """Switch to a new plan: re-derive counts and return to idle."""
        self._state = MachineState(Phase.IDLE, PhaseCounts.from_plan(plan))
        self._history = [Phase.IDLE]

    def run(self) -> list[Phase]:
        """
        Play the whole sequence from idle, as if every phase finished at
        once, and return the phases visited (idle first, complete last).
        """
        if self.phase is Phase.COMPLETE:
            self.send(Event.RESTART)
        elif self.phase is not Phase.IDLE:
            self.reset()
        self.send(Event.START)
        while not self.is_complete:
            self.send(Event.DONE_PHASE)
        return self.history

    def __repr__(self) -> str:
        c = self.counts
        return (f"PhaseMachine(phase={self.phase.value}, deletions={c.deletions}, "
                f"moves={c.moves}, insertions={c.insertions})")
