"""Round compliance checks for Swiss elimination pairings.

This module re-checks a generated round against the pairing rules: every
surviving contestant plays exactly once, eliminated contestants are never
paired, byes and rematches stay within what the rules allow, and first-move
markers are opposite.
"""

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
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from swisselim.models.contestant import Contestant
from swisselim.models.game import FirstMoveAdvantage, Game
from swisselim.models.pairing import RoundPairings
from swisselim.utils import setup_logger

if TYPE_CHECKING:
    from swisselim.tournament.tournament import Tournament

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Severity of a violated criterion."""

    ABSOLUTE = "ABSOLUTE"  # Broken invariant of the engine
    QUALITY = "QUALITY"  # Unavoidable, reported by the pairing search


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for one round."""

    round_number: int
    overall_status: CriterionStatus
    summary: str
    violations: List[CriterionResult] = field(default_factory=list)
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT


def _game_in_round(contestant: Contestant, round_number: int) -> Optional[Game]:
    for game in contestant.games:
        if game.round_number == round_number:
            return game
    return None


def _meetings_before(a: Contestant, b: Contestant, round_number: int) -> int:
    return sum(
        1
        for game in a.games
        if game.opponent_id == b.id and game.round_number < round_number
    )


def _had_bye_before(contestant: Contestant, round_number: int) -> bool:
    return any(g.is_bye and g.round_number < round_number for g in contestant.games)


class RoundValidator:
    """Validates the most recently generated round of a tournament."""

    def validate_round(
        self, tournament: "Tournament", round_pairings: RoundPairings
    ) -> ValidationReport:
        """Validate a round against every criterion.

        Args:
            tournament: The tournament the round belongs to
            round_pairings: Its latest round

        Returns:
            The validation report
        """
        arena = tournament.arena
        active_ids = [c.id for c in tournament.active_contestants]
        eliminated_ids = [c.id for c in tournament.eliminated_contestants]
        round_number = round_pairings.round_number
        logger.info("Starting validation of round %s", round_number)

        results = [
            self.check_partition(round_pairings, active_ids),
            self.check_no_eliminated_paired(round_pairings, eliminated_ids),
            self.check_no_self_pairing(round_pairings),
            self.check_bye(round_pairings, arena, active_ids),
            self.check_repeat_pairings(
                round_pairings, arena, tournament.config.max_repeat_pairings
            ),
        ]
        if tournament.config.track_first_move_advantage:
            results.append(self.check_first_move_markers(round_pairings, arena))

        violations = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.ABSOLUTE
        ]
        quality_warnings = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.QUALITY
        ]
        overall_status = (
            CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
        )
        compliant = sum(1 for r in results if r.status == CriterionStatus.COMPLIANT)
        summary = (
            f"Round {round_number}: {compliant}/{len(results)} criteria compliant, "
            f"{len(violations)} violation(s), {len(quality_warnings)} warning(s)"
        )
        logger.info("Validation complete: %s", summary)

        return ValidationReport(
            round_number=round_number,
            overall_status=overall_status,
            summary=summary,
            violations=violations,
            quality_warnings=quality_warnings,
            criteria_results=results,
        )

    def check_partition(
        self, round_pairings: RoundPairings, active_ids: List[str]
    ) -> CriterionResult:
        """Every active contestant appears exactly once, bye included."""
        counts = Counter(round_pairings.contestant_ids)
        duplicated = sorted(cid for cid, n in counts.items() if n > 1)
        missing = sorted(set(active_ids) - set(counts))
        unexpected = sorted(set(counts) - set(active_ids))

        if duplicated or missing or unexpected:
            return CriterionResult(
                criterion="PARTITION",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description="Pairings do not partition the active contestants",
                details={
                    "duplicated": duplicated,
                    "missing": missing,
                    "unexpected": unexpected,
                },
            )
        return CriterionResult(
            criterion="PARTITION",
            status=CriterionStatus.COMPLIANT,
            description="Every active contestant is paired exactly once",
        )

    def check_no_eliminated_paired(
        self, round_pairings: RoundPairings, eliminated_ids: List[str]
    ) -> CriterionResult:
        paired_eliminated = sorted(
            set(round_pairings.contestant_ids) & set(eliminated_ids)
        )
        if paired_eliminated:
            return CriterionResult(
                criterion="ELIMINATED",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Eliminated contestants paired: {len(paired_eliminated)}",
                details={"contestants": paired_eliminated},
            )
        return CriterionResult(
            criterion="ELIMINATED",
            status=CriterionStatus.COMPLIANT,
            description="No eliminated contestant paired",
        )

    def check_no_self_pairing(self, round_pairings: RoundPairings) -> CriterionResult:
        for pairing in round_pairings.pairings:
            if pairing.first_id == pairing.second_id:
                return CriterionResult(
                    criterion="SELF_PAIRING",
                    status=CriterionStatus.VIOLATION,
                    violation_type=ViolationType.ABSOLUTE,
                    description=f"Contestant paired with itself: {pairing.first_id}",
                )
        return CriterionResult(
            criterion="SELF_PAIRING",
            status=CriterionStatus.COMPLIANT,
            description="No self pairing",
        )

    def check_bye(
        self, round_pairings: RoundPairings, arena, active_ids: List[str]
    ) -> CriterionResult:
        """At most one bye, repeated only if every contestant already had one."""
        round_number = round_pairings.round_number
        if round_pairings.bye_id is None:
            if len(active_ids) % 2:
                return CriterionResult(
                    criterion="BYE",
                    status=CriterionStatus.VIOLATION,
                    violation_type=ViolationType.ABSOLUTE,
                    description="Odd number of contestants without a bye",
                )
            return CriterionResult(
                criterion="BYE",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No bye assigned in this round",
            )

        bye_contestant = arena[round_pairings.bye_id]
        if _had_bye_before(bye_contestant, round_number):
            fresh = [
                cid
                for cid in active_ids
                if not _had_bye_before(arena[cid], round_number)
            ]
            if fresh:
                return CriterionResult(
                    criterion="BYE",
                    status=CriterionStatus.VIOLATION,
                    violation_type=ViolationType.QUALITY,
                    description=f"Repeat bye: {bye_contestant.name}",
                    details={"without_bye": fresh},
                )

        return CriterionResult(
            criterion="BYE",
            status=CriterionStatus.COMPLIANT,
            description=f"Bye assignment valid: {bye_contestant.name}",
        )

    def check_repeat_pairings(
        self, round_pairings: RoundPairings, arena, max_repeat_pairings: int
    ) -> CriterionResult:
        """Rematches stay within the allowance unless the search reported them."""
        round_number = round_pairings.round_number
        excessive = []
        for pairing in round_pairings.pairings:
            first, second = arena[pairing.first_id], arena[pairing.second_id]
            met = _meetings_before(first, second, round_number)
            if met > max_repeat_pairings:
                excessive.append(
                    {"contestants": [first.name, second.name], "meetings": met}
                )

        if not excessive:
            return CriterionResult(
                criterion="REPEATS",
                status=CriterionStatus.COMPLIANT,
                description="Repeat pairings within the allowance",
            )

        # Accepted only when the search found no assignment without them
        reported = not round_pairings.strong_criteria.is_acceptable(max_repeat_pairings)
        return CriterionResult(
            criterion="REPEATS",
            status=CriterionStatus.VIOLATION,
            violation_type=(
                ViolationType.QUALITY if reported else ViolationType.ABSOLUTE
            ),
            description=f"Pairings beyond the repeat allowance: {len(excessive)}",
            details={"pairings": excessive},
        )

    def check_first_move_markers(
        self, round_pairings: RoundPairings, arena
    ) -> CriterionResult:
        """The first mover plays FIRST and its opponent LAST."""
        round_number = round_pairings.round_number
        inconsistent = []
        for pairing in round_pairings.pairings:
            first_game = _game_in_round(arena[pairing.first_id], round_number)
            second_game = _game_in_round(arena[pairing.second_id], round_number)
            if (
                pairing.first_mover_id != pairing.first_id
                or first_game is None
                or second_game is None
                or first_game.advantage is not FirstMoveAdvantage.FIRST
                or second_game.advantage is not FirstMoveAdvantage.LAST
            ):
                inconsistent.append([pairing.first_id, pairing.second_id])

        if inconsistent:
            return CriterionResult(
                criterion="FIRST_MOVE",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Inconsistent first-move markers: {len(inconsistent)}",
                details={"pairings": inconsistent},
            )
        return CriterionResult(
            criterion="FIRST_MOVE",
            status=CriterionStatus.COMPLIANT,
            description="First-move markers are opposite in every pairing",
        )
