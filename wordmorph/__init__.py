"""
wordmorph
=========

Edit plans for animating a misspelled word into its correct spelling.

    plan = compute_edit_plan("recieve", "receive")
    plan.moves              → (Move(4, 3), Move(3, 4))
    plan.highlight_indices  → frozenset({3, 4})

    patch("recieve", plan)  → "receive"

A plan lists which letters are deleted, which survive (and where they
go), which are freshly inserted, which survivors genuinely reorder, and
which delete/insert pairs are really one replaced slot.  It also carries
four letter snapshots with stable ids, one per animation phase, so a
renderer can tween each letter from where it was to where it goes.

The plan then drives either:
  • a PhaseMachine (deleting → moving → inserting → complete, skipping
    empty phases), fed with START / DONE_PHASE / RESET / RESTART, or
  • build_animation_script(), a pre-timed list of frames.
"""

from wordmorph.core import (
    # Types
    Alignment,
    EditPlan,
    Insertion,
    Move,
    PlanLetter,
    PlanLetters,
    Replacement,
    SurvivorPair,
    PLACEHOLDER_CHAR,
    # Engine
    resolve,
    match_survivors,
    find_min_cost_matching,
    find_moves,
    identify_true_movers,
    find_replacements,
    build_letters,
    compute_edit_plan,
    patch,
)
from wordmorph.phases import (
    Event, MachineState, Phase, PhaseCounts, PhaseMachine, skip_forward, transition,
)
from wordmorph.script import (
    AnimationFrame, AnimationTiming, FramePhase, PhaseDurations, build_animation_script,
)
from wordmorph.formats import plan_to_python, frames_to_python, to_python, to_json
from wordmorph.settings import WordmorphSettings, get_settings

__version__ = "0.1.0"
__all__ = [
    "Alignment", "EditPlan", "Insertion", "Move", "PlanLetter", "PlanLetters",
    "Replacement", "SurvivorPair", "PLACEHOLDER_CHAR",
    "resolve", "match_survivors", "find_min_cost_matching", "find_moves",
    "identify_true_movers", "find_replacements", "build_letters",
    "compute_edit_plan", "patch",
    "Event", "MachineState", "Phase", "PhaseCounts", "PhaseMachine",
    "skip_forward", "transition",
    "AnimationFrame", "AnimationTiming", "FramePhase", "PhaseDurations",
    "build_animation_script",
    "plan_to_python", "frames_to_python", "to_python", "to_json",
    "WordmorphSettings", "get_settings",
]
