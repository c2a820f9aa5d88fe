"""
Benchmark: wordmorph edit plans vs difflib opcodes.

difflib.SequenceMatcher is what most Python code reaches for when it needs
"what changed between two strings".  It aligns by longest matching blocks,
so a letter that changes places is reported as deleted in one spot and
inserted in another.  For an animation that is the wrong story: the viewer
should see the letter MOVE.

The point is NOT "we're faster" — the point is:
    a plan keeps every letter it can, and says which ones move.
"""

import difflib
import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wordmorph.core import compute_edit_plan, clear_plan_cache
from wordmorph.phases import PhaseMachine


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

WORD_PAIRS = [
    ("recieve", "receive"),
    ("wierd", "weird"),
    ("beleive", "believe"),
    ("seperate", "separate"),
    ("definately", "definitely"),
    ("repetative", "repetitive"),
    ("accomodate", "accommodate"),
    ("occurence", "occurrence"),
    ("neccessary", "necessary"),
    ("rythm", "rhythm"),
    ("laber", "labor"),
    ("odessy", "odyssey"),
    ("tommorow", "tomorrow"),
    ("pharoah", "pharaoh"),
]


def _difflib_counts(source, target):
    deleted = inserted = 0
    for tag, i1, i2, j1, j2 in difflib.SequenceMatcher(a=source, b=target).get_opcodes():
        if tag in ("delete", "replace"):
            deleted += i2 - i1
        if tag in ("insert", "replace"):
            inserted += j2 - j1
    return deleted, inserted


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_operation_counts():
    print("=" * 70)
    print("  §1  LETTERS KEPT: plan vs difflib")
    print("=" * 70)
    print()
    print(f"  {'pair':<28} {'plan -/+/~':>12} {'difflib -/+':>12}  highlight")

    fewer = 0
    for source, target in WORD_PAIRS:
        plan = compute_edit_plan(source, target)
        d_del, d_ins = _difflib_counts(source, target)
        p_ops = len(plan.deletions) + len(plan.insertions)
        if p_ops < d_del + d_ins:
            fewer += 1
        marks = "".join(source[i] for i in sorted(plan.highlight_indices)) or "-"
        print(f"  {source + ' → ' + target:<28} "
              f"{len(plan.deletions):>4}/{len(plan.insertions)}/{len(plan.moves):<3} "
              f"{d_del:>8}/{d_ins:<3}  {marks}")

    print()
    print(f"  RESULT: plan needs fewer deletions+insertions on {fewer}/{len(WORD_PAIRS)} pairs;")
    print("          the difference is letters shown moving instead of vanishing.")
    print()


def benchmark_phases():
    print("=" * 70)
    print("  §2  PHASES PLAYED")
    print("=" * 70)
    print()
    for source, target in WORD_PAIRS:
        phases = PhaseMachine.from_plan(compute_edit_plan(source, target)).run()
        print(f"  {source + ' → ' + target:<28} {' → '.join(p.value for p in phases)}")
    print()


def benchmark_speed():
    print("=" * 70)
    print("  §3  SPEED (uncached)")
    print("=" * 70)
    print()

    rounds = 200
    clear_plan_cache()
    t0 = time.perf_counter()
    for _ in range(rounds):
        clear_plan_cache()
        for source, target in WORD_PAIRS:
            compute_edit_plan(source, target)
    plan_dt = (time.perf_counter() - t0) / (rounds * len(WORD_PAIRS))

    t0 = time.perf_counter()
    for _ in range(rounds):
        for source, target in WORD_PAIRS:
            _difflib_counts(source, target)
    diff_dt = (time.perf_counter() - t0) / (rounds * len(WORD_PAIRS))

    print(f"  wordmorph plan:  {plan_dt*1e6:8.1f} µs / pair")
    print(f"  difflib opcodes: {diff_dt*1e6:8.1f} µs / pair")
    print()


def benchmark_scaling():
    print("=" * 70)
    print("  §4  SCALING (reversed alphabet runs)")
    print("=" * 70)
    print()
    alphabet = "abcdefghijklmnopqrstuvwxyz"
    for n in [5, 10, 20, 40, 80]:
        source = (alphabet * 4)[:n]
        target = source[::-1]
        clear_plan_cache()
        t0 = time.perf_counter()
        plan = compute_edit_plan(source, target)
        dt = time.perf_counter() - t0
        print(f"  len {n:>3}: {dt*1000:8.3f}ms  moves={len(plan.moves)}")
    print()


def main():
    print()
    print("  wordmorph benchmark")
    print()
    benchmark_operation_counts()
    benchmark_phases()
    benchmark_speed()
    benchmark_scaling()


if __name__ == "__main__":
    main()
