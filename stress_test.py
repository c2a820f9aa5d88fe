"""
Stress tests / adversarial evaluation of wordmorph.

This script attempts to BREAK the claimed plan properties:
  1. Patch round-trip (every plan really morphs source into target)
  2. Conservation and coverage of source / target indices
  3. Highlight bound and move / replacement consistency
  4. Stable ids across letter snapshots
  5. Phase machine agrees with the plan's operation counts
  6. Repeated-letter pathologies (the greedy matching's weak spot)
"""

import sys, os, random, time, itertools
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wordmorph.core import compute_edit_plan, patch
from wordmorph.phases import Phase, PhaseCounts, PhaseMachine
from wordmorph.script import FramePhase, build_animation_script


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


def plan_violations(source, target):
    """Return a list of broken properties for one word pair."""
    plan = compute_edit_plan(source, target)
    broken = []

    if patch(source, plan) != target:
        broken.append("round-trip")
    if len(source) - len(plan.deletions) + len(plan.insertions) != len(target):
        broken.append("conservation")

    sources = sorted(list(plan.deletions) + [p.source_index for p in plan.survivor_pairs])
    targets = sorted([i.position for i in plan.insertions]
                     + [p.target_index for p in plan.survivor_pairs])
    if sources != list(range(len(source))) or targets != list(range(len(target))):
        broken.append("coverage")

    by_source = {p.source_index: p for p in plan.survivor_pairs}
    for idx in plan.highlight_indices:
        if idx not in by_source or by_source[idx].displacement > plan.highlight_threshold:
            broken.append("highlight bound")
            break

    pairs = {(p.source_index, p.target_index) for p in plan.survivor_pairs}
    if any((m.from_index, m.to_index) not in pairs for m in plan.moves):
        broken.append("moves ⊆ survivors")

    positions = {i.position for i in plan.insertions}
    for r in plan.replacements:
        if r.source_index not in plan.deletions or r.target_index not in positions:
            broken.append("replacement consistency")
            break

    idle_ids = [letter.id for letter in plan.letters.idle]
    for t, s in plan.target_to_source_map.items():
        if plan.letters.final[t].id != idle_ids[s]:
            broken.append("stable ids")
            break

    return broken


# ═══════════════════════════════════════════════════════════════
#  §1  EXHAUSTIVE SMALL ALPHABET
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  PLAN PROPERTIES — exhaustive check")
print("=" * 70)

# Generate all strings of length ≤ 4 over alphabet {a, b, c}
alphabet = "abc"
all_strings = [""]
for length in range(1, 5):
    for combo in itertools.product(alphabet, repeat=length):
        all_strings.append("".join(combo))

# Test a random sample of pairs (full cross-product is 10K+ pairs)
random.seed(42)
sample_pairs = random.sample(
    [(s1, s2) for s1 in all_strings for s2 in all_strings],
    min(3000, len(all_strings)**2)
)

failures = 0
for s1, s2 in sample_pairs:
    broken = plan_violations(s1, s2)
    if broken:
        failures += 1
        if failures <= 5:
            print(f"    BROKEN: \"{s1}\" → \"{s2}\": {', '.join(broken)}")

test("All plan properties (3000 random pairs, len≤4)",
     failures == 0,
     f"{failures} failing pairs")


# ═══════════════════════════════════════════════════════════════
#  §2  REALISTIC MISSPELLINGS
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  REALISTIC MISSPELLINGS — random typos of real words")
print("=" * 70)

WORDS = [
    "receive", "separate", "definitely", "accommodate", "occurrence",
    "necessary", "rhythm", "weird", "repetitive", "embarrass",
    "millennium", "questionnaire", "conscientious", "mischievous",
    "bookkeeper", "mississippi",
]


def misspell(word, rng):
    """Apply one to three random typos: drop, double, swap, or substitute."""
    chars = list(word)
    for _ in range(rng.randint(1, 3)):
        if not chars:
            break
        i = rng.randrange(len(chars))
        kind = rng.choice(["drop", "double", "swap", "sub"])
        if kind == "drop":
            del chars[i]
        elif kind == "double":
            chars.insert(i, chars[i])
        elif kind == "swap" and i + 1 < len(chars):
            chars[i], chars[i + 1] = chars[i + 1], chars[i]
        else:
            chars[i] = rng.choice("aeiourstln")
    return "".join(chars)


rng = random.Random(7)
typo_pairs = [(misspell(w, rng), w) for w in WORDS for _ in range(50)]

failures = 0
for typo, word in typo_pairs:
    broken = plan_violations(typo, word)
    if broken:
        failures += 1
        if failures <= 5:
            print(f"    BROKEN: \"{typo}\" → \"{word}\": {', '.join(broken)}")

test(f"All plan properties ({len(typo_pairs)} random misspellings)",
     failures == 0,
     f"{failures} failing pairs")

swap_plan = compute_edit_plan("recieve", "receive")
test("Adjacent swap is highlighted",
     len(swap_plan.highlight_indices) > 0,
     f"highlights={sorted(swap_plan.highlight_indices)}")

far_plan = compute_edit_plan("repetative", "repetitive")
far = [m for m in far_plan.moves if abs(m.to_index - m.from_index) > 1]
test("Distant move is a move but not highlighted",
     bool(far) and all(m.from_index not in far_plan.highlight_indices for m in far),
     f"moves={[(m.from_index, m.to_index) for m in far_plan.moves]}")


# ═══════════════════════════════════════════════════════════════
#  §3  PHASE MACHINE vs PLAN vs SCRIPT
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  PHASE MACHINE — agrees with plan counts")
print("=" * 70)

mismatches = 0
for s1, s2 in sample_pairs[:1000] + typo_pairs[:200]:
    plan = compute_edit_plan(s1, s2)
    counts = PhaseCounts.from_plan(plan)
    visited = PhaseMachine.from_plan(plan).run()
    expected = [Phase.IDLE]
    if counts.deletions:
        expected.append(Phase.DELETING)
    if counts.moves:
        expected.append(Phase.MOVING)
    if counts.insertions:
        expected.append(Phase.INSERTING)
    expected.append(Phase.COMPLETE)
    if visited != expected:
        mismatches += 1
        if mismatches <= 3:
            print(f"    MISMATCH: \"{s1}\" → \"{s2}\": {[p.value for p in visited]}")

test("Machine visits exactly the non-empty phases",
     mismatches == 0,
     f"{mismatches} mismatches")

bad_scripts = 0
for s1, s2 in sample_pairs[:1000]:
    plan = compute_edit_plan(s1, s2)
    frames = build_animation_script(plan)
    if frames[0].phase is not FramePhase.IDLE or frames[-1].phase is not FramePhase.FINAL:
        bad_scripts += 1
    elif "".join(l.char for l in frames[-1].letters) != s2:
        bad_scripts += 1

test("Scripts start idle, end final, and spell the target",
     bad_scripts == 0,
     f"{bad_scripts} bad scripts")


# ═══════════════════════════════════════════════════════════════
#  §4  REPEATED-LETTER PATHOLOGIES
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  REPEATED LETTERS")
print("=" * 70)

for source, target in [
    ("aaaaabbbbb", "bbbbbaaaaa"),
    ("abababab", "babababa"),
    ("aaaa", "aaaaaaaa"),
    ("abcabcabc", "cbacbacba"),
    ("zzzzzz", ""),
]:
    t0 = time.perf_counter()
    broken = plan_violations(source, target)
    dt = time.perf_counter() - t0
    plan = compute_edit_plan(source, target)
    travel = sum(p.displacement for p in plan.survivor_pairs)
    test(f"\"{source}\" → \"{target}\"", not broken,
         f"moves={len(plan.moves)} travel={travel} {dt*1000:.2f}ms"
         + (f" broken={broken}" if broken else ""))


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  STRESS TEST SUMMARY")
print("=" * 70)
print("  If you see FAIL above, there's a bug.")
print("  If everything is PASS, the implementation is correct")
print("  for the tested cases (not a proof, but high confidence).")
