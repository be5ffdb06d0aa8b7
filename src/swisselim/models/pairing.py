"""Pairing and RoundPairings data classes."""

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

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from swisselim.models.game import GameResult
from swisselim.pairing.criteria import StrongPairingCriteria
from swisselim.type_hints import Arena, ContestantId, PairingIDs


@dataclass(frozen=True)
class Pairing:
    """Two contestants meeting in a round.

    Attributes
    ----------
    first_id : str
        First contestant. Moves first when first-move advantage is tracked,
        otherwise the higher-ranked contestant of the two.
    second_id : str
        Second contestant.
    first_mover_id : str or None
        Contestant holding the first-move advantage, ``None`` when untracked.
    """

    first_id: ContestantId
    second_id: ContestantId
    first_mover_id: Optional[ContestantId] = None

    @property
    def ids(self) -> PairingIDs:
        return (self.first_id, self.second_id)

    def opponent_of(self, contestant_id: ContestantId) -> ContestantId:
        if contestant_id == self.first_id:
            return self.second_id
        if contestant_id == self.second_id:
            return self.first_id
        raise KeyError(contestant_id)

    def matches(self, id_a: ContestantId, id_b: ContestantId) -> bool:
        """Whether this pairing is between ``id_a`` and ``id_b`` in any order."""
        return {id_a, id_b} == {self.first_id, self.second_id}


@dataclass
class RoundPairings:
    """All pairings of one round and the claim it holds on the tournament.

    While a ``RoundPairings`` is not released no further round can be
    generated. It is released once every game in it has a terminal result.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    pairings : list of Pairing
        Games of the round, best-ranked bracket first.
    bye_id : str or None
        Contestant credited with a bye, if any.
    strong_criteria : StrongPairingCriteria
        Hard-rule violations of the chosen assignment (all zero when feasible).
    eliminated_ids : list of str
        Contestants eliminated when this round was generated.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    bye_id: Optional[ContestantId] = None
    strong_criteria: StrongPairingCriteria = field(
        default_factory=StrongPairingCriteria
    )
    eliminated_ids: List[ContestantId] = field(default_factory=list)
    is_released: bool = False

    @property
    def contestant_ids(self) -> List[ContestantId]:
        """Every contestant taking part in the round, bye included."""
        ids = [cid for pairing in self.pairings for cid in pairing.ids]
        if self.bye_id is not None:
            ids.append(self.bye_id)
        return ids

    def find_pairing(
        self, id_a: ContestantId, id_b: ContestantId
    ) -> Optional[Pairing]:
        for pairing in self.pairings:
            if pairing.matches(id_a, id_b):
                return pairing
        return None

    def game_result(self, pairing: Pairing, arena: Arena) -> GameResult:
        """Result of ``pairing`` from the first contestant's point of view."""
        for game in reversed(arena[pairing.first_id].games):
            if game.round_number == self.round_number:
                return game.result
        return GameResult.IN_PROGRESS

    def statuses(self, arena: Arena) -> List[Tuple[Pairing, bool]]:
        """List of ``(pairing, in_progress)`` for the round query surface."""
        return [
            (pairing, self.game_result(pairing, arena) is GameResult.IN_PROGRESS)
            for pairing in self.pairings
        ]

    def pending_count(self, arena: Arena) -> int:
        return sum(1 for _, in_progress in self.statuses(arena) if in_progress)

    def all_terminal(self, arena: Arena) -> bool:
        return self.pending_count(arena) == 0
