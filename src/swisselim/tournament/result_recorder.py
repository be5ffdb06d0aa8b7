"""Result recording and validation for tournaments.

This module handles reporting game outcomes for the round in progress with
proper validation and error checking.
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

from typing import List, Optional

from swisselim.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    ResultException,
)
from swisselim.models.game import GameResult
from swisselim.models.pairing import RoundPairings
from swisselim.type_hints import Arena, ContestantId, ResultReport
from swisselim.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating game results.

    This class is responsible for:
    - Checking that a report matches a pairing of the round in progress
    - Turning the in-progress games of both sides into a win and a loss
    - Preventing duplicate result recording
    - Releasing the round once every game has a result
    """

    def record_result(
        self,
        round_pairings: Optional[RoundPairings],
        winner_id: ContestantId,
        loser_id: ContestantId,
        arena: Arena,
    ) -> bool:
        """Record the outcome of one game.

        Args:
            round_pairings: The round in progress, None if there is none
            winner_id: Contestant who won the game
            loser_id: Contestant who lost the game
            arena: All contestants of the tournament (id -> Contestant)

        Returns:
            True if recorded, False if the report was rejected (nothing changes)
        """
        try:
            self._validate_result_entry(round_pairings, winner_id, loser_id, arena)
        except ResultException as e:
            logger.error(f"Rejected result {winner_id} beat {loser_id}: {e}")
            return False

        self._record_game_result(round_pairings, winner_id, loser_id, arena)
        self._release_if_complete(round_pairings, arena)
        return True

    def record_round_results(
        self,
        round_pairings: Optional[RoundPairings],
        results_data: List[ResultReport],
        arena: Arena,
    ) -> bool:
        """Record results for several games of the round in progress.

        Args:
            round_pairings: The round in progress, None if there is none
            results_data: List of (winner_id, loser_id) tuples
            arena: All contestants of the tournament (id -> Contestant)

        Returns:
            True if all results recorded successfully, False if any errors occurred
        """
        success = True

        for winner_id, loser_id in results_data:
            if not self.record_result(round_pairings, winner_id, loser_id, arena):
                success = False

        if round_pairings is not None and not round_pairings.is_released:
            pending = round_pairings.pending_count(arena)
            logger.warning(
                f"Round {round_pairings.round_number}: {pending} game(s) still "
                "without a result"
            )

        return success

    def _validate_result_entry(
        self,
        round_pairings: Optional[RoundPairings],
        winner_id: ContestantId,
        loser_id: ContestantId,
        arena: Arena,
    ) -> None:
        """Validate a result entry before recording.

        Raises:
            InvalidResultException: The report does not describe a game of
                the round in progress
            DuplicateResultException: The game already has a result
        """
        if round_pairings is None or round_pairings.is_released:
            raise InvalidResultException("No round is in progress")

        for contestant_id in (winner_id, loser_id):
            if contestant_id not in arena:
                raise InvalidResultException(f"Unknown contestant: {contestant_id}")

        if winner_id == loser_id:
            raise InvalidResultException("A contestant cannot play itself")

        pairing = round_pairings.find_pairing(winner_id, loser_id)
        if pairing is None:
            raise InvalidResultException(
                f"{arena[winner_id].name} and {arena[loser_id].name} are not paired "
                f"in round {round_pairings.round_number}"
            )

        for contestant_id in (winner_id, loser_id):
            game = arena[contestant_id].last_game
            if game is None or game.round_number != round_pairings.round_number:
                raise InvalidResultException(
                    f"{arena[contestant_id].name} has no game in round "
                    f"{round_pairings.round_number}"
                )
            if game.result is not GameResult.IN_PROGRESS:
                raise DuplicateResultException(
                    f"Result for {arena[winner_id].name} vs {arena[loser_id].name} "
                    "already recorded"
                )

    def _record_game_result(
        self,
        round_pairings: RoundPairings,
        winner_id: ContestantId,
        loser_id: ContestantId,
        arena: Arena,
    ) -> None:
        """Finalize the in-progress games of both contestants."""
        winner = arena[winner_id]
        loser = arena[loser_id]
        winner.last_game.result = GameResult.WIN
        loser.last_game.result = GameResult.LOSS

        logger.debug(
            f"Round {round_pairings.round_number}: {winner.name} beat {loser.name}"
        )

    def _release_if_complete(self, round_pairings: RoundPairings, arena: Arena) -> None:
        if round_pairings.all_terminal(arena):
            round_pairings.is_released = True
            logger.info(f"Round {round_pairings.round_number} complete")
