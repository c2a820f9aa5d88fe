"""Command line entry point: print the edit plan for a word pair as JSON."""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .core import compute_edit_plan
from .formats import to_python, to_json
from .phases import PhaseMachine
from .script import AnimationTiming, build_animation_script
from .settings import SPEED_MULTIPLIERS, get_settings


LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordmorph",
        description="Compute the animation edit plan that morphs SOURCE into TARGET.",
    )
    parser.add_argument("source", help="The word as typed (usually misspelled).")
    parser.add_argument("target", help="The correct spelling.")
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Largest move displacement that is highlighted (default: from settings).",
    )
    parser.add_argument(
        "--frames",
        action="store_true",
        help="Also print the timed animation frames.",
    )
    parser.add_argument(
        "--phases",
        action="store_true",
        help="Also print the phase sequence the state machine walks through.",
    )
    parser.add_argument(
        "--speed",
        choices=sorted(SPEED_MULTIPLIERS),
        default=None,
        help="Speed preset for frame durations (default: from settings).",
    )
    parser.add_argument(
        "--reduced-motion",
        action="store_true",
        help="Cap every frame duration for reduced motion.",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    settings = get_settings()
    overrides = {}
    if args.threshold is not None:
        overrides["highlight_threshold"] = args.threshold
    if args.speed is not None:
        overrides["animation_speed"] = args.speed
    if args.reduced_motion:
        overrides["reduced_motion"] = True
    if overrides:
        try:
            settings = settings.model_validate({**settings.model_dump(), **overrides})
        except ValidationError as exc:
            parser.error(str(exc))

    plan = compute_edit_plan(args.source, args.target, settings.highlight_threshold)
    LOGGER.info("Computed %r", plan)

    if not (args.frames or args.phases):
        print(to_json(plan, indent=args.indent))
        return 0

    output = {"plan": to_python(plan)}
    if args.frames:
        frames = build_animation_script(plan, AnimationTiming.from_settings(settings))
        output["frames"] = to_python(frames)
    if args.phases:
        output["phases"] = [phase.value for phase in PhaseMachine.from_plan(plan).run()]

    print(json.dumps(output, indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
