"""
wordmorph.formats — Convert plans and frames into plain data for renderers.

Field names follow the renderer contract (camelCase):

    EditPlan        → {"deletions": [...], "survivorPairs": [...], ...}
    AnimationFrame  → {"phase": "deleting", "letters": [...], "deletingIds": [...], ...}
"""

import json
from typing import Any

from .core import EditPlan, PlanLetter
from .script import AnimationFrame


def _letters(letters) -> list[dict[str, str]]:
    return [{"id": letter.id, "char": letter.char} for letter in letters]


def plan_to_python(plan: EditPlan) -> dict[str, Any]:
    """Convert an edit plan to JSON-compatible Python objects."""
    return {
        "source": plan.source,
        "target": plan.target,
        "deletions": list(plan.deletions),
        "insertions": [
            {"char": ins.char, "position": ins.position} for ins in plan.insertions
        ],
        "survivorPairs": [
            {"sourceIndex": p.source_index, "targetIndex": p.target_index, "char": p.char}
            for p in plan.survivor_pairs
        ],
        "moves": [{"fromIndex": m.from_index, "toIndex": m.to_index} for m in plan.moves],
        "highlightIndices": sorted(plan.highlight_indices),
        "replacements": [
            {
                "sourceIndex": r.source_index,
                "targetIndex": r.target_index,
                "deletedChar": r.deleted_char,
                "insertedChar": r.inserted_char,
            }
            for r in plan.replacements
        ],
        # JSON object keys are strings
        "targetToSourceMap": {str(t): s for t, s in plan.target_to_source_map.items()},
        "letters": {
            "idle": _letters(plan.letters.idle),
            "afterDelete": _letters(plan.letters.after_delete),
            "moving": _letters(plan.letters.moving),
            "final": _letters(plan.letters.final),
        },
        "shouldDelete": plan.should_delete,
        "shouldMove": plan.should_move,
        "shouldInsert": plan.should_insert,
    }


def frame_to_python(frame: AnimationFrame) -> dict[str, Any]:
    return {
        "phase": frame.phase.value,
        "letters": _letters(frame.letters),
        "deletingIds": list(frame.deleting_ids),
        "duration": frame.duration,
    }


def frames_to_python(frames) -> list[dict[str, Any]]:
    return [frame_to_python(frame) for frame in frames]


def to_python(obj: Any) -> Any:
    """Convert a plan, a frame, or a list of frames."""
    if isinstance(obj, EditPlan):
        return plan_to_python(obj)
    if isinstance(obj, AnimationFrame):
        return frame_to_python(obj)
    if isinstance(obj, PlanLetter):
        return {"id": obj.id, "char": obj.char}
    if isinstance(obj, (list, tuple)):
        return [to_python(item) for item in obj]
    raise TypeError(f"Cannot convert {type(obj).__name__} to plain data")


def to_json(obj: Any, **kwargs) -> str:
    """Serialise a plan or frames to a JSON string."""
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(to_python(obj), **kwargs)
