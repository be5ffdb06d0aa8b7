"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for running a Swiss elimination tournament,
coordinating the round manager and the result recorder behind a small API.
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

from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from swisselim.constants import STATE_IDLE, STATE_ROUND_IN_PROGRESS
from swisselim.exceptions import (
    ContestantNotFoundException,
    DuplicateContestantException,
    RoundInProgressException,
    TournamentStateException,
)
from swisselim.models.contestant import Contestant
from swisselim.models.pairing import RoundPairings
from swisselim.models.seed import Seed
from swisselim.tournament.config import TournamentConfig
from swisselim.tournament.result_recorder import ResultRecorder
from swisselim.tournament.round_manager import RoundManager
from swisselim.tournament.scoring import (
    ContestantStanding,
    build_standings,
    rank_contestants,
)
from swisselim.type_hints import Arena, ContestantId, MutableArena, ResultReport
from swisselim.utils import setup_logger

logger = setup_logger(__name__)


class TournamentState(Enum):
    """Whether a round currently holds the tournament."""

    IDLE = STATE_IDLE
    ROUND_IN_PROGRESS = STATE_ROUND_IN_PROGRESS


class Tournament:
    """Swiss elimination tournament.

    This class coordinates all tournament operations through specialized managers:
    - RoundManager: eliminates, ranks and pairs each new round
    - ResultRecorder: validates and applies reported results

    Contestants register before the first round. Each call to
    :meth:`generate_round` opens a round; it is closed once every game of the
    round has a reported result. Contestants move from active to eliminated
    when they reach the configured number of losses, and never back.
    """

    def __init__(
        self,
        config: Optional[TournamentConfig] = None,
        contestants: Optional[Iterable[Contestant]] = None,
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        config: Tournament configuration, defaults when omitted
        contestants: Initial contestants, equivalent to calling add_contestant
        """
        self.config = config or TournamentConfig()

        self._arena: MutableArena = {}
        self._active_ids: List[ContestantId] = []
        self._eliminated_ids: List[ContestantId] = []
        self._state = TournamentState.IDLE

        # Specialized managers
        self.round_manager = RoundManager(self.config)
        self.result_recorder = ResultRecorder()

        for contestant in contestants or []:
            self.add_contestant(contestant)

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def state(self) -> TournamentState:
        return self._state

    @property
    def round_number(self) -> int:
        """Number of rounds generated so far (0 before the first round)."""
        return self.round_manager.current_round_number

    @property
    def arena(self) -> Arena:
        """Read-only view of every contestant, eliminated ones included."""
        return MappingProxyType(self._arena)

    @property
    def active_contestants(self) -> Tuple[Contestant, ...]:
        """Contestants still in the tournament, best first."""
        return tuple(
            rank_contestants(
                (self._arena[cid] for cid in self._active_ids), self._arena
            )
        )

    @property
    def eliminated_contestants(self) -> Tuple[Contestant, ...]:
        """Eliminated contestants, best first."""
        return tuple(
            rank_contestants(
                (self._arena[cid] for cid in self._eliminated_ids), self._arena
            )
        )

    @property
    def current_round_pairings(self) -> Optional[RoundPairings]:
        """Pairings of the round in progress, None when idle."""
        if self._state is TournamentState.ROUND_IN_PROGRESS:
            return self.round_manager.current_round
        return None

    @property
    def rounds(self) -> Tuple[RoundPairings, ...]:
        """Every round generated so far, first round first."""
        return tuple(self.round_manager.rounds)

    @property
    def is_finished(self) -> bool:
        """At most one contestant is left and no round is open."""
        return len(self._active_ids) <= 1 and self._state is TournamentState.IDLE

    # ========== Contestant Management ==========

    def get_contestant(self, contestant_id: ContestantId) -> Contestant:
        """Look up a contestant, active or eliminated.

        Raises:
            ContestantNotFoundException: If no contestant has this id
        """
        try:
            return self._arena[contestant_id]
        except KeyError:
            raise ContestantNotFoundException(
                f"No contestant with id {contestant_id!r}"
            ) from None

    def is_eliminated(self, contestant_id: ContestantId) -> bool:
        self.get_contestant(contestant_id)
        return contestant_id in self._eliminated_ids

    def add_contestant(self, contestant: Contestant) -> Contestant:
        """Add a contestant to the tournament.

        Args:
            contestant: Contestant to add, without any game history

        Returns:
            The contestant that was added

        Raises:
            TournamentStateException: If the first round was already generated
            DuplicateContestantException: If the id is already registered
        """
        if self.round_number > 0:
            raise TournamentStateException(
                "Contestants can only be added before the first round"
            )
        if contestant.id in self._arena:
            raise DuplicateContestantException(
                f"Contestant id {contestant.id!r} is already registered"
            )

        self._arena[contestant.id] = contestant
        self._active_ids.append(contestant.id)
        logger.info(f"Added contestant: {contestant.name} ({contestant.id})")
        return contestant

    def register(
        self,
        name: str,
        seed: Seed,
        contestant_id: Optional[ContestantId] = None,
    ) -> Contestant:
        """Create and add a contestant. See :meth:`add_contestant`."""
        return self.add_contestant(Contestant(name, seed, contestant_id))

    # ========== Round Management ==========

    def generate_round(self) -> RoundPairings:
        """Generate the pairings of the next round.

        Contestants at the loss limit are eliminated first. The survivors are
        ranked and paired, an in-progress game is opened for every pairing and
        the bye, if any, is credited immediately.

        Returns:
            The pairings of the new round

        Raises:
            RoundInProgressException: If a game of the current round has no
                result yet. Nothing is changed in that case.
        """
        pending = self._pending_games()
        if self._state is TournamentState.ROUND_IN_PROGRESS or pending:
            raise RoundInProgressException(self.round_number, pending)

        round_pairings = self.round_manager.create_next_round(
            self._arena, self._active_ids, self._eliminated_ids
        )

        if round_pairings.is_released:
            logger.info(f"Round {round_pairings.round_number} has no games to play")
        else:
            self._state = TournamentState.ROUND_IN_PROGRESS

        if len(self._active_ids) <= 1:
            logger.info("At most one contestant remains, the tournament is finished")
        return round_pairings

    def _pending_games(self) -> int:
        current = self.round_manager.current_round
        if current is not None and not current.is_released:
            return current.pending_count(self._arena)
        return sum(
            1 for cid in self._active_ids if self._arena[cid].has_game_in_progress
        )

    # ========== Result Management ==========

    def record_result(self, winner_id: ContestantId, loser_id: ContestantId) -> bool:
        """Report the outcome of a game of the round in progress.

        Returns:
            True if recorded, False if the report was rejected
        """
        recorded = self.result_recorder.record_result(
            self.current_round_pairings, winner_id, loser_id, self._arena
        )
        self._sync_state()
        return recorded

    def record_round_results(self, results: List[ResultReport]) -> bool:
        """Report several outcomes as (winner_id, loser_id) tuples.

        Returns:
            True if every report was recorded
        """
        recorded = self.result_recorder.record_round_results(
            self.current_round_pairings, results, self._arena
        )
        self._sync_state()
        return recorded

    def _sync_state(self) -> None:
        current = self.round_manager.current_round
        if current is not None and current.is_released:
            self._state = TournamentState.IDLE

    # ========== Queries ==========

    def get_standings(self) -> List[ContestantStanding]:
        """Active contestants best first, followed by the eliminated ones."""
        active = build_standings(self.active_contestants, self._arena)
        eliminated = build_standings(
            self.eliminated_contestants,
            self._arena,
            eliminated=True,
            start=len(active) + 1,
        )
        return active + eliminated
