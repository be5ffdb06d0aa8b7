"""Bracket and floater Swiss pairing for elimination tournaments."""

# Swiss Elimination
# Copyright (C) 2025  Swiss Elimination developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from swisselim.constants import BRACKET_BRANCH_LIMIT, DEFAULT_SEARCH_BUDGET
from swisselim.models.contestant import Contestant
from swisselim.pairing.criteria import StrongPairingCriteria, WeakPairingCriteria
from swisselim.pairing.preferences import (
    NO_PREFERENCE,
    FirstMovePreference,
    PreferenceStrength,
    assign_first_move,
    get_preference,
    preference_conflict,
)
from swisselim.type_hints import Bracket, ContestantId
from swisselim.utils import setup_logger

logger = setup_logger(__name__)

ContestantPair = Tuple[Contestant, Contestant]

# Opponent penalties used to order the candidate search
_FRESH = 0
_ALLOWED_REPEAT = 1
_ILLEGAL = 2

# Branch order inside the matching enumeration
_BRANCH_PAIR = 0
_BRANCH_FLOAT = 1
_BRANCH_STRANDS_PAIR = 2
_BRANCH_STRANDS_FLOAT = 3
_BRANCH_ILLEGAL = 4


@dataclass
class BracketPairingResult:
    """Result of a pairing computation for a single round.

    Attributes
    ----------
    pairings : list of (Contestant, Contestant)
        Pairs in bracket order. The first contestant moves first when
        first-move advantage is tracked, otherwise it is the higher ranked.
    bye : Contestant or None
        Contestant receiving the bye.
    strong : StrongPairingCriteria
        Hard-rule violations of the whole round, bye included.
    weak : list of WeakPairingCriteria
        Soft-rule scores, one per bracket, top bracket first.
    budget_exhausted : bool
        Whether the search stopped early and kept the best plan found.
    """

    pairings: List[ContestantPair] = field(default_factory=list)
    bye: Optional[Contestant] = None
    strong: StrongPairingCriteria = field(default_factory=StrongPairingCriteria)
    weak: List[WeakPairingCriteria] = field(default_factory=list)
    budget_exhausted: bool = False


@dataclass
class _BracketCandidate:
    pairs: List[ContestantPair]
    floaters: List[Contestant]
    strong: StrongPairingCriteria
    weak: WeakPairingCriteria
    sequence_index: int

    def sort_key(self) -> tuple:
        return (self.strong, self.weak.sort_key(), self.sequence_index)


@dataclass
class _Plan:
    """Pairings for a run of brackets, from some bracket down to the last."""

    pairs: List[ContestantPair] = field(default_factory=list)
    strong: StrongPairingCriteria = field(default_factory=StrongPairingCriteria)
    weak: Tuple[WeakPairingCriteria, ...] = ()

    def sort_key(self) -> tuple:
        return (self.strong, tuple(w.sort_key() for w in self.weak))

    def extended(self, candidate: _BracketCandidate) -> "_Plan":
        return _Plan(
            pairs=candidate.pairs + self.pairs,
            strong=candidate.strong + self.strong,
            weak=(candidate.weak,) + self.weak,
        )


class _SearchContext:
    """Per-round lookups and the shared evaluation budget.

    Meeting counts and preferences are snapshots of the histories at the start
    of the search; nothing mutates the histories while a round is paired.
    """

    def __init__(
        self,
        contestants: Sequence[Contestant],
        track_first_move: bool,
        max_repeat_pairings: int,
        budget: int,
    ) -> None:
        self.track_first_move = track_first_move
        self.max_repeat_pairings = max_repeat_pairings
        self.remaining = budget
        self.exhausted = False

        self._meetings: Counter = Counter()
        for contestant in contestants:
            for opponent_id in contestant.opponent_ids:
                self._meetings[(contestant.id, opponent_id)] += 1

        self._preferences: Dict[ContestantId, FirstMovePreference] = {}
        if track_first_move:
            self._preferences = {c.id: get_preference(c) for c in contestants}

        self._legal: Dict[ContestantId, Set[ContestantId]] = {
            a.id: {b.id for b in contestants if b is not a and self.is_legal(a, b)}
            for a in contestants
        }

    def spend(self) -> bool:
        """Consume one evaluation. Returns False once the budget is gone."""
        if self.remaining <= 0:
            self.exhausted = True
            return False
        self.remaining -= 1
        return True

    def times_met(self, a: Contestant, b: Contestant) -> int:
        return self._meetings[(a.id, b.id)]

    def conflict(self, a: Contestant, b: Contestant) -> PreferenceStrength:
        if not self.track_first_move:
            return PreferenceStrength.NONE
        return preference_conflict(
            self._preferences.get(a.id, NO_PREFERENCE),
            self._preferences.get(b.id, NO_PREFERENCE),
        )

    def penalty(self, a: Contestant, b: Contestant) -> int:
        met = self.times_met(a, b)
        if met > self.max_repeat_pairings:
            return _ILLEGAL
        if self.conflict(a, b) == PreferenceStrength.ABSOLUTE:
            return _ILLEGAL
        return _ALLOWED_REPEAT if met else _FRESH

    def is_legal(self, a: Contestant, b: Contestant) -> bool:
        return self.penalty(a, b) != _ILLEGAL

    def stranded(self, players: Sequence[Contestant]) -> int:
        """Contestants without a single legal opponent among ``players``."""
        ids = {c.id for c in players}
        return sum(1 for c in players if not self._legal[c.id] & ids)


def _candidate_limit(bracket_size: int) -> int:
    """
    Number of candidates evaluated per bracket and floater count.
    Balances performance with solution quality.
    """
    if bracket_size <= 6:
        return 120  # Small brackets: thorough search
    if bracket_size <= 12:
        return 60  # Medium brackets: balanced approach
    if bracket_size <= 20:
        return 30  # Large brackets: focused search
    return 15  # Very large brackets: minimal search


def _fold_order(rest_size: int, ideal: int) -> List[int]:
    """Opponent indices in Swiss fold order.

    The contestant half a bracket below comes first, then those further down
    (transpositions), then those above it (exchanges), nearest first.
    """
    return list(range(ideal, rest_size)) + list(range(ideal - 1, -1, -1))


def _enumerate_matchings(
    players: List[Contestant], floater_count: int, ctx: _SearchContext
) -> Iterator[Tuple[List[ContestantPair], List[Contestant]]]:
    """Yield ``(pairs, floaters)`` assignments of a bracket in preference order.

    The highest-ranked unassigned contestant is paired first, legal opponents
    in fold order before floating it, illegal opponents last. A branch that
    leaves more contestants without any legal opponent than may still float
    cannot end in a legal assignment, so it is tried after every branch that
    still can. Exactly ``floater_count`` contestants stay unpaired;
    ``len(players) - floater_count`` must be even, which guarantees there are
    no dead ends.
    """
    if len(players) == floater_count:
        yield [], list(players)
        return

    head, rest = players[0], players[1:]
    pairs_left = (len(players) - floater_count) // 2

    by_penalty = sorted(
        _fold_order(len(rest), pairs_left - 1),
        key=lambda idx: ctx.penalty(head, rest[idx]),
    )

    # (branch order, opponent index or None to float the head)
    branches: List[Tuple[int, Optional[int]]] = []
    for idx in by_penalty:
        if ctx.penalty(head, rest[idx]) == _ILLEGAL:
            order = _BRANCH_ILLEGAL
        elif ctx.stranded(rest[:idx] + rest[idx + 1 :]) > floater_count:
            order = _BRANCH_STRANDS_PAIR
        else:
            order = _BRANCH_PAIR
        branches.append((order, idx))
    if floater_count > 0:
        if ctx.stranded(rest) > floater_count - 1:
            branches.append((_BRANCH_STRANDS_FLOAT, None))
        else:
            branches.append((_BRANCH_FLOAT, None))
    branches.sort(key=lambda branch: branch[0])

    for _, idx in branches:
        if idx is None:
            for pairs, floaters in _enumerate_matchings(rest, floater_count - 1, ctx):
                yield pairs, [head] + floaters
        else:
            yield from _with_pair(head, rest, idx, floater_count, ctx)


def _with_pair(
    head: Contestant,
    rest: List[Contestant],
    idx: int,
    floater_count: int,
    ctx: _SearchContext,
) -> Iterator[Tuple[List[ContestantPair], List[Contestant]]]:
    opponent = rest[idx]
    remaining = rest[:idx] + rest[idx + 1 :]
    for pairs, floaters in _enumerate_matchings(remaining, floater_count, ctx):
        yield [(head, opponent)] + pairs, floaters


def _evaluate_candidate(
    pairs: List[ContestantPair],
    floaters: List[Contestant],
    incoming_ids: Set[ContestantId],
    next_bracket: Bracket,
    ctx: _SearchContext,
    sequence_index: int,
) -> _BracketCandidate:
    """Score one bracket assignment on strong and weak criteria."""
    max_repeats = 0
    repeats = 0
    absolute = 0
    strong_prefs = 0
    weak_prefs = 0
    paired_floater_score = 0

    for a, b in pairs:
        met = ctx.times_met(a, b)
        if met:
            repeats += 1
            max_repeats = max(max_repeats, met)
        conflict = ctx.conflict(a, b)
        if conflict == PreferenceStrength.ABSOLUTE:
            absolute += 1
        elif conflict == PreferenceStrength.STRONG:
            strong_prefs += 1
        elif conflict == PreferenceStrength.MILD:
            weak_prefs += 1
        for contestant in (a, b):
            if contestant.id in incoming_ids:
                paired_floater_score += contestant.win_count

    # Look one bracket ahead: can each floater find a legal opponent there?
    next_unpaired = 0
    next_paired_score = 0
    for floater in floaters:
        if any(ctx.is_legal(floater, other) for other in next_bracket):
            next_paired_score += floater.win_count
        else:
            next_unpaired += 1

    strong = StrongPairingCriteria(
        bye_repeats=0,
        max_pairing_repeats=max_repeats,
        pairing_repeats=repeats,
        absolute_preference_violations=absolute,
    )
    weak = WeakPairingCriteria(
        outgoing_floaters=len(floaters),
        unpaired_floaters=sum(1 for f in floaters if f.id in incoming_ids),
        sum_score_paired_floaters=paired_floater_score,
        next_unpaired_floaters=next_unpaired,
        next_sum_score_paired_floaters=next_paired_score,
        strong_preference_violations=strong_prefs,
        weak_preference_violations=weak_prefs,
    )
    return _BracketCandidate(pairs, floaters, strong, weak, sequence_index)


def _is_ideal(candidate: _BracketCandidate, floater_count: int) -> bool:
    weak = candidate.weak
    return (
        candidate.strong.is_zero()
        and weak.outgoing_floaters == floater_count
        and weak.unpaired_floaters == 0
        and weak.next_unpaired_floaters == 0
        and weak.strong_preference_violations == 0
        and weak.weak_preference_violations == 0
    )


def _bracket_candidates(
    players: List[Contestant],
    incoming_ids: Set[ContestantId],
    next_bracket: Bracket,
    is_last: bool,
    ctx: _SearchContext,
) -> List[_BracketCandidate]:
    """Collect candidate assignments for one bracket, best first.

    Floater counts are tried from the smallest upward. Larger counts are only
    explored while no candidate free of strong violations has been found.
    The first assignment of every floater count is always evaluated, so a
    bracket gets a candidate even once the budget is spent.
    """
    parity = len(players) % 2
    if is_last:
        floater_counts = [parity]
    else:
        floater_counts = list(range(parity, len(players) + 1, 2))

    limit = _candidate_limit(len(players))
    candidates: List[_BracketCandidate] = []
    sequence_index = 0

    acceptable_found = False

    for floater_count in floater_counts:
        found_ideal = False
        for evaluated, (pairs, floaters) in enumerate(
            _enumerate_matchings(players, floater_count, ctx)
        ):
            # Past the limit only the shared budget stops an unacceptable bracket
            if evaluated >= limit and acceptable_found:
                break
            if evaluated > 0 and not ctx.spend():
                break
            candidate = _evaluate_candidate(
                pairs, floaters, incoming_ids, next_bracket, ctx, sequence_index
            )
            candidates.append(candidate)
            sequence_index += 1
            if candidate.strong.is_acceptable(ctx.max_repeat_pairings):
                acceptable_found = True
            if _is_ideal(candidate, floater_count):
                found_ideal = True
                break

        if found_ideal or ctx.exhausted:
            break
        if any(c.strong.is_zero() for c in candidates):
            break

    candidates.sort(key=lambda c: c.sort_key())
    return candidates


def _search_brackets(
    brackets: List[Bracket],
    index: int,
    incoming: List[Contestant],
    ctx: _SearchContext,
) -> _Plan:
    """Pair ``brackets[index:]`` given the floaters coming from above.

    The best candidates of the current bracket are each followed down the
    remaining brackets; a bracket that cannot be paired acceptably pushes the
    search to the next candidate of the bracket above, which floats different
    or more contestants down.
    """
    if index >= len(brackets):
        return _Plan()

    players = incoming + brackets[index]
    if not players:
        return _search_brackets(brackets, index + 1, [], ctx)

    is_last = index == len(brackets) - 1
    next_bracket = brackets[index + 1] if not is_last else []
    incoming_ids = {c.id for c in incoming}

    candidates = _bracket_candidates(players, incoming_ids, next_bracket, is_last, ctx)
    logger.debug(
        f"Bracket {index} ({len(players)} players, {len(incoming)} incoming): "
        f"{len(candidates)} candidates"
    )

    best: Optional[_Plan] = None
    for candidate in candidates[:BRACKET_BRANCH_LIMIT]:
        below = _search_brackets(brackets, index + 1, candidate.floaters, ctx)
        plan = below.extended(candidate)
        if best is None or plan.sort_key() < best.sort_key():
            best = plan
        if best.strong.is_zero() or ctx.exhausted:
            break

    return best


def group_into_brackets(ranked: List[Contestant]) -> List[Bracket]:
    """Split a ranked list into maximal runs sharing the same win count."""
    brackets: List[Bracket] = []
    for contestant in ranked:
        if brackets and brackets[-1][0].win_count == contestant.win_count:
            brackets[-1].append(contestant)
        else:
            brackets.append([contestant])
    return brackets


def _bye_candidates(ranked: List[Contestant]) -> List[Contestant]:
    """Lowest ranked first, contestants without a bye before those with one."""
    lowest_first = list(reversed(ranked))
    return [c for c in lowest_first if not c.has_received_bye] + [
        c for c in lowest_first if c.has_received_bye
    ]


def _orient(
    pairs: List[ContestantPair], track_first_move: bool
) -> List[ContestantPair]:
    if not track_first_move:
        return list(pairs)
    return [assign_first_move(higher, lower) for higher, lower in pairs]


def create_bracket_pairings(
    ranked: List[Contestant],
    track_first_move: bool = True,
    max_repeat_pairings: int = 0,
    search_budget: int = DEFAULT_SEARCH_BUDGET,
) -> BracketPairingResult:
    """
    Create pairings for one round with the bracket and floater Swiss method.

    - ranked: surviving contestants, best first by the ranking key
    - track_first_move: whether first-move preferences are considered and
      the first move is allocated
    - max_repeat_pairings: how many times two contestants may meet again
    - search_budget: candidate evaluations allowed for the whole round

    An odd contestant count yields a bye. Bye candidates are tried lowest
    ranked first, those without a previous bye before the others, until a
    plan without strong violations is found; otherwise the best plan on
    (strong criteria, weak criteria) is kept. The search never fails.
    """
    ctx = _SearchContext(ranked, track_first_move, max_repeat_pairings, search_budget)

    if len(ranked) % 2 == 0:
        plan = _search_brackets(group_into_brackets(ranked), 0, [], ctx)
        result = BracketPairingResult(
            pairings=_orient(plan.pairs, track_first_move),
            bye=None,
            strong=plan.strong,
            weak=list(plan.weak),
        )
    else:
        best_plan: Optional[_Plan] = None
        best_bye: Optional[Contestant] = None
        for candidate in _bye_candidates(ranked):
            remaining = [c for c in ranked if c is not candidate]
            plan = _search_brackets(group_into_brackets(remaining), 0, [], ctx)
            plan.strong = plan.strong + StrongPairingCriteria(
                bye_repeats=1 if candidate.has_received_bye else 0
            )
            if best_plan is None or plan.sort_key() < best_plan.sort_key():
                best_plan, best_bye = plan, candidate
            if best_plan.strong.is_zero() or ctx.exhausted:
                break

        result = BracketPairingResult(
            pairings=_orient(best_plan.pairs, track_first_move),
            bye=best_bye,
            strong=best_plan.strong,
            weak=list(best_plan.weak),
        )

    result.budget_exhausted = ctx.exhausted
    if ctx.exhausted:
        logger.warning("Pairing search budget exhausted, keeping best plan found")
    if not result.strong.is_acceptable(max_repeat_pairings):
        logger.warning(
            f"No assignment free of hard-rule violations exists: {result.strong}"
        )
    return result
