"""Random Tournament Generator (RTG) - Internal testing system for Swiss elimination.

This module plays complete elimination tournaments with generated contestants
and simulated results, validating every round the engine produces.
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

import json
import math
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from swisselim.constants import (
    DEFAULT_ALLOWED_LOSSES,
    DEFAULT_MAX_REPEAT_PAIRINGS,
    DEFAULT_SEARCH_BUDGET,
    SEED_PLACEMENT,
    SEED_RATING,
)
from swisselim.models.contestant import Contestant
from swisselim.models.pairing import Pairing
from swisselim.models.seed import PlacementSeed, RatingSeed
from swisselim.tournament.config import TournamentConfig
from swisselim.tournament.tournament import Tournament
from swisselim.type_hints import ContestantId, ResultReport
from swisselim.utils import setup_logger
from swisselim.validation.compliance import RoundValidator, ValidationReport

logger = setup_logger(__name__)


class RatingDistribution(Enum):
    """Rating distribution patterns for generated contestants."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"


class ResultPattern(Enum):
    """Result generation patterns for tournaments."""

    REALISTIC = "realistic"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_contestants: int
    allowed_losses: int = DEFAULT_ALLOWED_LOSSES
    max_rounds: Optional[int] = None
    rating_distribution: RatingDistribution = RatingDistribution.NORMAL
    rating_range: Tuple[int, int] = (800, 2800)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    seed_kind: str = SEED_RATING
    unrated_percentage: int = 0
    track_first_move_advantage: bool = True
    max_repeat_pairings: int = DEFAULT_MAX_REPEAT_PAIRINGS
    search_budget: int = DEFAULT_SEARCH_BUDGET
    validate_rounds: bool = True

    def tournament_config(self) -> TournamentConfig:
        return TournamentConfig(
            name=f"RTG {self.num_contestants} contestants",
            allowed_losses=self.allowed_losses,
            track_first_move_advantage=self.track_first_move_advantage,
            max_repeat_pairings=self.max_repeat_pairings,
            search_budget=self.search_budget,
        )


class ContestantFactory:
    """Factory for creating tournament contestants with a hidden strength.

    The strength drives the simulated results. Rating seeds expose it (unless
    the contestant is unrated); placement seeds rank contestants by it.
    """

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.strengths: Dict[ContestantId, int] = {}

    def create_contestants(self) -> List[Contestant]:
        """Create contestants based on configuration."""
        ratings = [self._generate_rating() for _ in range(self.config.num_contestants)]

        if self.config.seed_kind == SEED_PLACEMENT:
            contestants = self._placement_contestants(ratings)
        elif self.config.seed_kind == SEED_RATING:
            contestants = self._rated_contestants(ratings)
        else:
            raise ValueError(f"Unsupported seed kind: {self.config.seed_kind}")

        logger.info(
            "Created %s contestants with %s distribution",
            len(contestants),
            self.config.rating_distribution.value,
        )
        return contestants

    def _rated_contestants(self, ratings: List[int]) -> List[Contestant]:
        contestants = []
        for number, rating in enumerate(ratings, start=1):
            unrated = self.random.randint(1, 100) <= self.config.unrated_percentage
            seed = RatingSeed(
                rating=None if unrated else rating,
                tiebreak=self.random.getrandbits(64),
            )
            contestants.append(self._create(number, rating, seed))
        return contestants

    def _placement_contestants(self, ratings: List[int]) -> List[Contestant]:
        contestants = []
        ordered = sorted(ratings, reverse=True)
        for placement, rating in enumerate(ordered, start=1):
            seed = PlacementSeed(
                placement=placement, tiebreak=self.random.getrandbits(64)
            )
            contestants.append(self._create(placement, rating, seed))
        return contestants

    def _create(self, number: int, rating: int, seed) -> Contestant:
        contestant = Contestant(
            name=self._generate_name(number, rating),
            seed=seed,
            contestant_id=f"C{number:03d}",
        )
        self.strengths[contestant.id] = rating
        return contestant

    def _generate_rating(self) -> int:
        min_rating, max_rating = self.config.rating_range
        if self.config.rating_distribution == RatingDistribution.UNIFORM:
            return self.random.randint(min_rating, max_rating)
        if self.config.rating_distribution == RatingDistribution.NORMAL:
            mean = (min_rating + max_rating) / 2
            std_dev = (max_rating - min_rating) / 6
            rating = int(self.random.gauss(mean, std_dev))
            return max(min_rating, min(max_rating, rating))
        if self.config.rating_distribution == RatingDistribution.CLUB:
            base_ratings = [1000, 1200, 1400, 1600, 1800]
            base = self.random.choice(base_ratings)
            return self.random.randint(base - 100, base + 100)
        return self.random.randint(min_rating, max_rating)

    def _generate_name(self, number: int, rating: int) -> str:
        if rating < 1200:
            prefix = "Novice"
        elif rating < 1600:
            prefix = "Club"
        elif rating < 2000:
            prefix = "Expert"
        else:
            prefix = "Master"
        return f"{prefix}-{number:03d}"


class ResultSimulator:
    """Simulates game results for tournaments. Every game has a winner."""

    def __init__(self, config: RTGConfig, strengths: Dict[ContestantId, int]):
        self.config = config
        self.strengths = strengths
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate_pairing_result(self, pairing: Pairing) -> ResultReport:
        """Return ``(winner_id, loser_id)`` for one pairing."""
        first_id, second_id = pairing.first_id, pairing.second_id
        if self.config.result_pattern == ResultPattern.RANDOM:
            first_wins = self.random.random() < 0.5
        elif self.config.result_pattern == ResultPattern.PREDICTABLE:
            first_wins = self._predictable_result(first_id, second_id)
        else:
            first_wins = self._realistic_result(first_id, second_id)
        return (first_id, second_id) if first_wins else (second_id, first_id)

    def _realistic_result(
        self, first_id: ContestantId, second_id: ContestantId
    ) -> bool:
        rating_diff = self.strengths[first_id] - self.strengths[second_id]
        expected_value = math.erfc(-rating_diff * (7.0 / math.sqrt(2.0) / 2000.0)) / 2.0
        return self.random.random() < expected_value

    def _predictable_result(
        self, first_id: ContestantId, second_id: ContestantId
    ) -> bool:
        rating_diff = self.strengths[first_id] - self.strengths[second_id]
        win_prob = max(0.05, min(0.95, 0.5 + rating_diff / 200))
        return self.random.random() < win_prob


class RandomTournamentGenerator:
    """Main tournament generator orchestrating contestant creation and results."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.contestant_factory = ContestantFactory(config)
        self.validator = RoundValidator()

    def round_limit(self) -> int:
        """Rounds after which the run stops even if no winner is left.

        Every round with two or more contestants adds at least one loss, so
        ``num_contestants * allowed_losses + 1`` rounds always suffice.
        """
        natural_limit = self.config.num_contestants * self.config.allowed_losses + 1
        if self.config.max_rounds is None:
            return natural_limit
        return min(self.config.max_rounds, natural_limit)

    def generate_complete_tournament(self) -> Dict:
        """Play a complete tournament and collect every round."""
        logger.info(
            "Generating tournament: %s contestants, %s allowed losses",
            self.config.num_contestants,
            self.config.allowed_losses,
        )

        contestants = self.contestant_factory.create_contestants()
        simulator = ResultSimulator(self.config, self.contestant_factory.strengths)
        tournament = Tournament(self.config.tournament_config(), contestants)

        tournament_data = {
            "config": self.config,
            "tournament": tournament,
            "contestants": contestants,
            "rounds": [],
            "reports": [],
        }

        limit = self.round_limit()
        while not tournament.is_finished and tournament.round_number < limit:
            round_pairings = tournament.generate_round()

            if self.config.validate_rounds:
                report = self.validator.validate_round(tournament, round_pairings)
                tournament_data["reports"].append(report)
                if not report.is_compliant:
                    logger.warning(report.summary)

            results = [
                simulator.simulate_pairing_result(pairing)
                for pairing in round_pairings.pairings
            ]
            tournament.record_round_results(results)

            tournament_data["rounds"].append(
                {
                    "round_number": round_pairings.round_number,
                    "pairings": [pairing.ids for pairing in round_pairings.pairings],
                    "bye_id": round_pairings.bye_id,
                    "eliminated_ids": list(round_pairings.eliminated_ids),
                    "results": results,
                    "strong_criteria": round_pairings.strong_criteria,
                }
            )

        active = tournament.active_contestants
        tournament_data["winner_id"] = active[0].id if len(active) == 1 else None
        tournament_data["standings"] = tournament.get_standings()

        logger.info(
            "Tournament generation complete after %s rounds", tournament.round_number
        )
        return tournament_data

    def export_json_format(self, tournament_data: Dict) -> str:
        export_data = {
            "tournament_config": {
                "num_contestants": self.config.num_contestants,
                "allowed_losses": self.config.allowed_losses,
                "rating_distribution": self.config.rating_distribution.value,
                "result_pattern": self.config.result_pattern.value,
                "seed": self.config.seed,
                "seed_kind": self.config.seed_kind,
                "track_first_move_advantage": self.config.track_first_move_advantage,
                "max_repeat_pairings": self.config.max_repeat_pairings,
            },
            "contestants": [
                {
                    "id": contestant.id,
                    "name": contestant.name,
                    "seed": str(contestant.seed),
                    "strength": self.contestant_factory.strengths[contestant.id],
                }
                for contestant in tournament_data["contestants"]
            ],
            "rounds": [
                {
                    "round_number": round_data["round_number"],
                    "pairings": round_data["pairings"],
                    "bye_id": round_data["bye_id"],
                    "eliminated_ids": round_data["eliminated_ids"],
                    "results": round_data["results"],
                }
                for round_data in tournament_data["rounds"]
            ],
            "standings": [
                {
                    "rank": standing.rank,
                    "id": standing.contestant_id,
                    "wins": standing.win_count,
                    "losses": standing.loss_count,
                    "opponent_wins": standing.opponent_win_count,
                    "sonneborn_berger": standing.sonneborn_berger,
                    "eliminated": standing.eliminated,
                }
                for standing in tournament_data["standings"]
            ],
            "winner_id": tournament_data["winner_id"],
        }

        return json.dumps(export_data, indent=2)


def summarize_warnings(reports: List[ValidationReport]) -> Dict[str, int]:
    """Summarize quality warnings by criterion."""
    return dict(
        Counter(
            warning.criterion
            for report in reports
            for warning in report.quality_warnings
        )
    )


def summarize_violations(reports: List[ValidationReport]) -> Dict[str, int]:
    """Summarize absolute violations by criterion."""
    return dict(
        Counter(
            violation.criterion
            for report in reports
            for violation in report.violations
        )
    )


def create_small_tournament(
    num_contestants: int = 8, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small tournament for testing."""
    config = RTGConfig(
        num_contestants=num_contestants,
        allowed_losses=2,
        rating_distribution=RatingDistribution.NORMAL,
        result_pattern=ResultPattern.REALISTIC,
        seed=seed,
    )
    return RandomTournamentGenerator(config)
