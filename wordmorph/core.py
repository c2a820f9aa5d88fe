"""
wordmorph.core — Edit Plan Engine
=================================

HOW A WORD IS MORPHED
═════════════════════

§1  THE PROBLEM
───────────────

Given a misspelled word (the SOURCE) and its correct spelling (the TARGET),
show the viewer how one becomes the other:

    recieve  →  receive      two letters trade places
    laber    →  labor        one letter becomes another
    hello    →  helo         one letter disappears
    cat      →  cats         one letter appears

The animation runs in four phases (delete, move, insert, settle), so what
we need is not a distance but a PLAN: which source letters go away, which
stay (and where they end up), which target letters are new, and which of
the survivors genuinely change their relative order.


§2  ALIGNMENT  (resolve)
────────────────────────

Classic LCS alignment answers the wrong question here: it refuses to keep
letters that are out of order, so an adjacent swap becomes delete + insert.
Instead we count.

    need[c]   = multiset of TARGET characters
    supply[c] = multiset of SOURCE characters

Scan the source left → right.  A character is KEPT while need[c] > 0
(and need[c] is decremented); otherwise it is DELETED.  Then scan the
target left → right against supply: once supply[c] is exhausted, every
further occurrence of c in the target is an INSERTION.

Per character value this keeps exactly min(|src_c|, |tgt_c|) letters and
inserts max(0, |tgt_c| − |src_c|) letters, which is the minimum number of
deletions and insertions possible when reordering is free.


§3  SURVIVOR MATCHING  (match_survivors)
────────────────────────────────────────

Each kept source letter must be assigned a target slot.  Slots for c are
the target positions of c that were not already claimed as insertions, so
per character the two sides have equal size.

For every character independently:

    candidates = {(s, t) : s ∈ kept_c, t ∈ slots_c},  cost = |t − s|

Sort by cost and accept greedily while neither end is taken.  Different
characters never compete for the same slot, so the per-character greedy
choice is the whole matching.  It is NOT a global optimum of total
on-screen travel for pathological inputs (many repeats + interleaved
insertions); that approximation is accepted.


§4  CLASSIFICATION
──────────────────

MOVES:  a survivor pair (s, t) moves when some other pair (s', t') CROSSES
it:  s < s' ∧ t > t'   or   s > s' ∧ t < t'.
A letter that merely slides because something before it was deleted does
not cross anything, so it is not a move.

TRUE MOVERS:  moves with 0 < |t − s| ≤ threshold (default 1).  Long jumps
read as teleportation; only short corrections get highlighted.

REPLACEMENTS:  a deletion d and an insertion at target position
survivors_before(d) occupy the same logical gap.  They animate as one slot
("this letter became that letter") instead of a disappearance and an
unrelated appearance.


§5  LETTER SNAPSHOTS
────────────────────

Four snapshots of (id, char) drive the renderer, one per phase start:

    idle          src-0 src-1 ... src-n
    after_delete  idle − pure deletions, replacements held as placeholder-i
    moving        survivors + placeholders, in target order
    final         target; survivors keep src-i, the rest are ins-j

Ids are stable across phases, which is what lets a renderer tween a letter
from where it was to where it goes.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache


logger = logging.getLogger(__name__)

#: Shown in place of a letter whose slot is being replaced.
PLACEHOLDER_CHAR = "\u00a0"

DEFAULT_HIGHLIGHT_THRESHOLD = 1


# ═══════════════════════════════════════════════════════════════════
#  PLAN TYPES
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Insertion:
    """A character that has to be freshly inserted at a target index."""
    char: str
    position: int


@dataclass(frozen=True, slots=True)
class SurvivorPair:
    """A source letter that is kept and the target slot it ends up in."""
    source_index: int
    target_index: int
    char: str

    @property
    def displacement(self) -> int:
        return abs(self.target_index - self.source_index)


@dataclass(frozen=True, slots=True)
class Move:
    from_index: int
    to_index: int


@dataclass(frozen=True, slots=True)
class Replacement:
    """
    A deletion and an insertion sharing one logical gap.

    Both operations are still listed in the plan's deletions and
    insertions; a replacement only tells the renderer to keep the slot
    open between them.
    """
    source_index: int
    target_index: int
    deleted_char: str
    inserted_char: str


@dataclass(frozen=True, slots=True)
class PlanLetter:
    id: str
    char: str

    @property
    def is_placeholder(self) -> bool:
        return self.id.startswith("placeholder-")


@dataclass(frozen=True, slots=True)
class PlanLetters:
    """What should be on screen at the start of each phase."""
    idle: tuple[PlanLetter, ...]
    after_delete: tuple[PlanLetter, ...]
    moving: tuple[PlanLetter, ...]
    final: tuple[PlanLetter, ...]


@dataclass(frozen=True, slots=True)
class Alignment:
    """Output of the alignment pass (§2)."""
    deletions: tuple[int, ...]
    insertions: tuple[Insertion, ...]
    kept_source_indices: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class EditPlan:
    """
    The complete, immutable plan for morphing ``source`` into ``target``.

    ``deletions`` is in descending order so it can be applied in place.
    ``survivor_pairs`` and ``moves`` are ordered by target index.
    """
    source: str
    target: str
    deletions: tuple[int, ...]
    insertions: tuple[Insertion, ...]
    survivor_pairs: tuple[SurvivorPair, ...]
    moves: tuple[Move, ...]
    highlight_indices: frozenset[int]
    replacements: tuple[Replacement, ...]
    letters: PlanLetters
    should_delete: bool
    should_move: bool
    should_insert: bool
    highlight_threshold: int = DEFAULT_HIGHLIGHT_THRESHOLD

    @property
    def target_to_source_map(self) -> dict[int, int]:
        """Target index → source index for every surviving letter."""
        return {p.target_index: p.source_index for p in self.survivor_pairs}

    @property
    def is_noop(self) -> bool:
        return not (self.deletions or self.insertions or self.moves)

    def __repr__(self) -> str:
        return (f"EditPlan({self.source!r} → {self.target!r}: "
                f"-{len(self.deletions)} +{len(self.insertions)} "
                f"~{len(self.moves)})")


# ═══════════════════════════════════════════════════════════════════
#  ALIGNMENT  (§2)
# ═══════════════════════════════════════════════════════════════════

def resolve(source: str, target: str) -> Alignment:
    """
    Decide which source letters are kept and which target letters are new.

    Greedy and O(n): the earliest occurrences of a character are the ones
    kept, and the latest occurrences in the target are the ones inserted.
    """
    need = Counter(target)
    deletions: list[int] = []
    kept: list[int] = []
    for i, ch in enumerate(source):
        if need[ch] > 0:
            need[ch] -= 1
            kept.append(i)
        else:
            deletions.append(i)
    deletions.sort(reverse=True)

    supply = Counter(source)
    insertions: list[Insertion] = []
    for j, ch in enumerate(target):
        if supply[ch] > 0:
            supply[ch] -= 1
        else:
            insertions.append(Insertion(ch, j))

    return Alignment(tuple(deletions), tuple(insertions), tuple(kept))


# ═══════════════════════════════════════════════════════════════════
#  SURVIVOR MATCHING  (§3)
# ═══════════════════════════════════════════════════════════════════

def find_min_cost_matching(src_indices, tgt_indices) -> list[tuple[int, int]]:
    """
    Greedy minimum-displacement matching for a single character value.

    Every (source, target) combination is a candidate with cost
    |target − source|; the cheapest candidates are accepted first as long
    as neither index has been used.  Ties resolve by source index, then
    target index, so the result is deterministic.
    """
    candidates = sorted(
        ((abs(t - s), s, t) for s in src_indices for t in tgt_indices)
    )
    used_src: set[int] = set()
    used_tgt: set[int] = set()
    pairs: list[tuple[int, int]] = []
    for _, s, t in candidates:
        if s in used_src or t in used_tgt:
            continue
        pairs.append((s, t))
        used_src.add(s)
        used_tgt.add(t)
    return pairs


def match_survivors(
    kept_source_indices,
    source: str,
    target: str,
    inserted_positions=(),
) -> list[tuple[int, int]]:
    """
    Pair every kept source index with the target slot it moves to.

    Target positions listed in ``inserted_positions`` belong to fresh
    insertions and are not offered to survivors.  Returns
    ``(source_index, target_index)`` pairs sorted by target index.
    """
    taken = set(inserted_positions)

    source_by_char: dict[str, list[int]] = {}
    for s in kept_source_indices:
        source_by_char.setdefault(source[s], []).append(s)

    target_by_char: dict[str, list[int]] = {}
    for t, ch in enumerate(target):
        if t not in taken:
            target_by_char.setdefault(ch, []).append(t)

    pairs: list[tuple[int, int]] = []
    for ch, src_indices in source_by_char.items():
        pairs.extend(find_min_cost_matching(src_indices, target_by_char.get(ch, [])))

    pairs.sort(key=lambda pair: pair[1])
    return pairs


# ═══════════════════════════════════════════════════════════════════
#  CLASSIFICATION  (§4)
# ═══════════════════════════════════════════════════════════════════

def find_moves(pairs) -> list[Move]:
    """Survivor pairs that cross at least one other pair."""
    moves: list[Move] = []
    for s, t in pairs:
        for s2, t2 in pairs:
            if (s < s2 and t > t2) or (s > s2 and t < t2):
                moves.append(Move(s, t))
                break
    return moves


def identify_true_movers(moves, max_move_distance: int = DEFAULT_HIGHLIGHT_THRESHOLD) -> list[int]:
    """
    Source indices of the moves worth highlighting.

    Only letters that actually travel, and travel at most
    ``max_move_distance`` slots, qualify:

        recieve → receive     i/e swap by one slot    highlighted
        repetative → repetitive   i jumps two slots   not highlighted
    """
    if max_move_distance < 0:
        raise ValueError(f"max_move_distance must be >= 0, got {max_move_distance}")
    highlights: list[int] = []
    for move in moves:
        if isinstance(move, Move):
            s, t = move.from_index, move.to_index
        else:
            s, t = move
        if 0 < abs(t - s) <= max_move_distance:
            highlights.append(s)
    return highlights


def find_replacements(source: str, deletions, insertions, pairs) -> list[Replacement]:
    """
    Pair deletions with insertions that land in the same gap.

    The gap left by deletion ``d`` sits at target position
    ``survivors_before(d)``, the number of survivors that precede it in
    the source.  Each insertion is claimed by at most one deletion;
    deletions are visited in the order given (descending in a plan).
    """
    by_position = {ins.position: ins for ins in insertions}
    survivor_sources = sorted(s for s, _ in pairs)
    claimed: set[int] = set()
    replacements: list[Replacement] = []

    for d in deletions:
        survivors_before = sum(1 for s in survivor_sources if s < d)
        ins = by_position.get(survivors_before)
        if ins is None or ins.position in claimed:
            continue
        claimed.add(ins.position)
        replacements.append(Replacement(
            source_index=d,
            target_index=ins.position,
            deleted_char=source[d],
            inserted_char=ins.char,
        ))
    return replacements


# ═══════════════════════════════════════════════════════════════════
#  PLAN ASSEMBLY  (§5)
# ═══════════════════════════════════════════════════════════════════

def build_letters(
    source: str,
    target: str,
    deletions,
    survivor_pairs,
    replacements,
) -> PlanLetters:
    """Build the idle / after-delete / moving / final snapshots."""
    idle = tuple(PlanLetter(f"src-{i}", ch) for i, ch in enumerate(source))

    deleted = set(deletions)
    replaced_sources = {r.source_index for r in replacements}
    after_delete: list[PlanLetter] = []
    for i, letter in enumerate(idle):
        if i not in deleted:
            after_delete.append(letter)
        elif i in replaced_sources:
            after_delete.append(PlanLetter(f"placeholder-{i}", PLACEHOLDER_CHAR))

    survivor_at = {p.target_index: p for p in survivor_pairs}
    replacement_at = {r.target_index: r for r in replacements}
    moving: list[PlanLetter] = []
    for t in range(len(target)):
        if t in replacement_at:
            moving.append(PlanLetter(f"placeholder-{replacement_at[t].source_index}",
                                     PLACEHOLDER_CHAR))
        elif t in survivor_at:
            pair = survivor_at[t]
            moving.append(PlanLetter(f"src-{pair.source_index}", pair.char))

    final = tuple(
        PlanLetter(f"src-{survivor_at[t].source_index}", ch) if t in survivor_at
        else PlanLetter(f"ins-{t}", ch)
        for t, ch in enumerate(target)
    )

    return PlanLetters(idle, tuple(after_delete), tuple(moving), final)


def compute_edit_plan(
    source: str,
    target: str,
    highlight_threshold: int = DEFAULT_HIGHLIGHT_THRESHOLD,
) -> EditPlan:
    """
    Compute the edit plan that morphs ``source`` into ``target``.

    This is the central function of the library.  It is pure: the same
    inputs always produce an equal plan, so results are memoised.

    Raises TypeError if either word is not a ``str`` and ValueError for a
    negative ``highlight_threshold``.
    """
    if not isinstance(source, str) or not isinstance(target, str):
        raise TypeError(
            f"source and target must be str, got "
            f"{type(source).__name__} and {type(target).__name__}"
        )
    if isinstance(highlight_threshold, bool) or not isinstance(highlight_threshold, int):
        raise TypeError(f"highlight_threshold must be int, got {type(highlight_threshold).__name__}")
    if highlight_threshold < 0:
        raise ValueError(f"highlight_threshold must be >= 0, got {highlight_threshold}")
    return _compute_edit_plan(source, target, highlight_threshold)


@lru_cache(maxsize=512)
def _compute_edit_plan(source: str, target: str, highlight_threshold: int) -> EditPlan:
    alignment = resolve(source, target)
    inserted_positions = [ins.position for ins in alignment.insertions]
    pairs = match_survivors(alignment.kept_source_indices, source, target, inserted_positions)

    survivor_pairs = tuple(SurvivorPair(s, t, target[t]) for s, t in pairs)
    moves = tuple(find_moves(pairs))
    highlight_indices = frozenset(identify_true_movers(moves, highlight_threshold))
    replacements = tuple(find_replacements(
        source, alignment.deletions, alignment.insertions, pairs,
    ))
    letters = build_letters(source, target, alignment.deletions, survivor_pairs, replacements)

    plan = EditPlan(
        source=source,
        target=target,
        deletions=alignment.deletions,
        insertions=alignment.insertions,
        survivor_pairs=survivor_pairs,
        moves=moves,
        highlight_indices=highlight_indices,
        replacements=replacements,
        letters=letters,
        should_delete=bool(alignment.deletions),
        should_move=bool(survivor_pairs) and source != target,
        should_insert=bool(alignment.insertions),
        highlight_threshold=highlight_threshold,
    )
    logger.debug(
        "Computed %r (replacements=%d, highlights=%s)",
        plan, len(replacements), sorted(highlight_indices),
    )
    return plan


# ═══════════════════════════════════════════════════════════════════
#  PATCH (apply a plan)
# ═══════════════════════════════════════════════════════════════════

def patch(source: str, plan: EditPlan) -> str:
    """
    Apply ``plan`` to ``source`` the way the animation does.

        1. delete ``plan.deletions`` (descending, in place)
        2. put every survivor into its target order
        3. insert ``plan.insertions`` by ascending target position

    This is the inverse of compute_edit_plan:
        patch(a, compute_edit_plan(a, b)) == b
    """
    if source != plan.source:
        raise ValueError(f"plan was computed for {plan.source!r}, not {source!r}")

    letters = list(enumerate(source))
    for d in plan.deletions:
        del letters[d]

    remaining = {i for i, _ in letters}
    if remaining != {p.source_index for p in plan.survivor_pairs}:
        raise ValueError("plan survivors do not match the letters left after deletion")

    by_source = dict(letters)
    result = [by_source[p.source_index] for p in plan.survivor_pairs]
    for ins in sorted(plan.insertions, key=lambda ins: ins.position):
        result.insert(ins.position, ins.char)
    return "".join(result)


def clear_plan_cache() -> None:
    """Drop all memoised plans."""
    _compute_edit_plan.cache_clear()


def plan_cache_info():
    return _compute_edit_plan.cache_info()
