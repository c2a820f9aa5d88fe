"""
wordmorph.script — Pre-timed animation frames for an edit plan.

A renderer that prefers a fixed timeline over driving a PhaseMachine can
play these frames in order: show ``letters``, fade ``deleting_ids``, then
wait ``duration`` milliseconds.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core import EditPlan, PlanLetter
from .settings import REDUCED_MOTION_MAX_MS, WordmorphSettings


logger = logging.getLogger(__name__)


class FramePhase(str, Enum):
    IDLE = "idle"
    DELETING = "deleting"
    MOVING = "moving"
    INSERTING = "inserting"
    FINAL = "final"


class PhaseDurations(BaseModel):
    """Milliseconds spent in each frame phase."""

    model_config = ConfigDict(frozen=True)

    idle: int = Field(default=0, ge=0)
    deleting: int = Field(default=400, ge=0)
    moving: int = Field(default=1000, ge=0)
    inserting: int = Field(default=300, ge=0)
    final: int = Field(default=0, ge=0)

    def for_phase(self, phase: FramePhase) -> int:
        return getattr(self, phase.value)


class AnimationTiming(BaseModel):
    """Durations plus the hold after deleted letters leave the screen."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    durations: PhaseDurations = Field(default_factory=PhaseDurations)
    deletion_hold_ms: int = Field(default=150, ge=0, alias="deletionHoldMs")

    def scaled(self, multiplier: float) -> "AnimationTiming":
        """Every duration multiplied by ``multiplier`` (speed presets)."""
        if multiplier < 0:
            raise ValueError(f"multiplier must be >= 0, got {multiplier}")
        return self._map(lambda ms: round(ms * multiplier))

    def clamped(self, max_ms: int = REDUCED_MOTION_MAX_MS) -> "AnimationTiming":
        """Every duration capped at ``max_ms`` (reduced motion)."""
        return self._map(lambda ms: min(ms, max_ms))

    def _map(self, fn) -> "AnimationTiming":
        durations = PhaseDurations(**{
            phase.value: fn(self.durations.for_phase(phase)) for phase in FramePhase
        })
        return AnimationTiming(durations=durations, deletion_hold_ms=fn(self.deletion_hold_ms))

    @classmethod
    def from_settings(cls, settings: WordmorphSettings) -> "AnimationTiming":
        timing = cls(
            durations=PhaseDurations(
                idle=settings.idle_ms,
                deleting=settings.deleting_ms,
                moving=settings.moving_ms,
                inserting=settings.inserting_ms,
                final=settings.final_ms,
            ),
            deletion_hold_ms=settings.deletion_hold_ms,
        )
        timing = timing.scaled(settings.speed_multiplier)
        if settings.reduced_motion:
            timing = timing.clamped()
        return timing


@dataclass(frozen=True, slots=True)
class AnimationFrame:
    phase: FramePhase
    letters: tuple[PlanLetter, ...]
    deleting_ids: tuple[str, ...]
    duration: int


def build_animation_script(
    plan: EditPlan,
    timing: Optional[Any] = None,
) -> list[AnimationFrame]:
    """
    Turn ``plan`` into an ordered list of timed frames.

    Always an idle frame first and a final frame last.  In between:
    two deleting frames (highlight, then hold after removal) if the plan
    deletes anything, a moving frame if it moves anything, and an
    inserting frame if it inserts anything.

    ``timing`` may be an AnimationTiming or a mapping with the same shape
    (``{"durations": {...}, "deletionHoldMs": 150}``).
    """
    if timing is None:
        timing = AnimationTiming()
    elif not isinstance(timing, AnimationTiming):
        timing = AnimationTiming.model_validate(timing)
    durations = timing.durations
    letters = plan.letters

    frames = [AnimationFrame(FramePhase.IDLE, letters.idle, (), durations.idle)]

    if plan.should_delete:
        deleting_ids = tuple(f"src-{i}" for i in plan.deletions)
        frames.append(AnimationFrame(
            FramePhase.DELETING, letters.idle, deleting_ids, durations.deleting))
        frames.append(AnimationFrame(
            FramePhase.DELETING, letters.after_delete, deleting_ids, timing.deletion_hold_ms))

    if plan.should_move:
        frames.append(AnimationFrame(FramePhase.MOVING, letters.moving, (), durations.moving))

    if plan.should_insert:
        frames.append(AnimationFrame(FramePhase.INSERTING, letters.final, (), durations.inserting))

    frames.append(AnimationFrame(FramePhase.FINAL, letters.final, (), durations.final))

    logger.debug("Built %d frames for %r (%d ms total)",
                 len(frames), plan, total_duration(frames))
    return frames


def total_duration(frames) -> int:
    return sum(frame.duration for frame in frames)
