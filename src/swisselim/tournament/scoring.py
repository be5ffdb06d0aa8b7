"""Scoring and ranking for Swiss elimination tournaments.

Every function here is pure: the values are recomputed from the current game
histories on each call and nothing is cached between calls.

Metrics:
- Win count: number of won games (byes included)
- Opponent win count (Buchholz-style): sum of the opponents' win counts,
  a bye counts the contestant's own win count
- Sonneborn-Berger: sum of the win counts of defeated opponents,
  a bye counts the contestant's own win count
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

import functools
from dataclasses import dataclass
from typing import Iterable, List

from swisselim.models.contestant import Contestant
from swisselim.models.game import Game, GameResult
from swisselim.type_hints import Arena, ContestantId


def win_count(contestant: Contestant) -> int:
    return contestant.win_count


def loss_count(contestant: Contestant) -> int:
    return contestant.loss_count


def _opponent_term(contestant: Contestant, game: Game, arena: Arena) -> int:
    """Win count credited for one game's opponent."""
    if game.opponent_id is None:
        return contestant.win_count
    return arena[game.opponent_id].win_count


def opponent_win_count(contestant: Contestant, arena: Arena) -> int:
    """Sum of the opponents' win counts over every game.

    Args:
        contestant: Contestant to score
        arena: All contestants of the tournament, for opponent lookups

    Returns:
        The opponent win count, 0 with no games
    """
    return sum(_opponent_term(contestant, game, arena) for game in contestant.games)


def sonneborn_berger(contestant: Contestant, arena: Arena) -> int:
    """Sum of the opponents' win counts over won games only."""
    return sum(
        _opponent_term(contestant, game, arena)
        for game in contestant.games
        if game.result is GameResult.WIN
    )


def compare_contestants(a: Contestant, b: Contestant, arena: Arena) -> int:
    """Compare two contestants for ranking order.

    Order: win count, opponent win count, Sonneborn-Berger, then seed.

    Returns:
        1 if a ranks higher, -1 if b ranks higher, 0 if equal
    """
    wins_a, wins_b = a.win_count, b.win_count
    if wins_a != wins_b:
        return 1 if wins_a > wins_b else -1

    owc_a, owc_b = opponent_win_count(a, arena), opponent_win_count(b, arena)
    if owc_a != owc_b:
        return 1 if owc_a > owc_b else -1

    sb_a, sb_b = sonneborn_berger(a, arena), sonneborn_berger(b, arena)
    if sb_a != sb_b:
        return 1 if sb_a > sb_b else -1

    if a.seed > b.seed:
        return 1
    if a.seed < b.seed:
        return -1
    return 0


def rank_contestants(
    contestants: Iterable[Contestant], arena: Arena
) -> List[Contestant]:
    """Sort contestants best first by the ranking key."""
    return sorted(
        contestants,
        key=functools.cmp_to_key(lambda a, b: compare_contestants(a, b, arena)),
        reverse=True,
    )


@dataclass(frozen=True)
class ContestantStanding:
    """Read-only snapshot of a contestant and its metrics."""

    rank: int
    contestant_id: ContestantId
    name: str
    seed: str
    win_count: int
    loss_count: int
    games_played: int
    opponent_win_count: int
    sonneborn_berger: int
    eliminated: bool


def build_standings(
    ranked: Iterable[Contestant],
    arena: Arena,
    eliminated: bool = False,
    start: int = 1,
) -> List[ContestantStanding]:
    """Snapshot ranked contestants for reporting, numbering ranks from ``start``."""
    return [
        ContestantStanding(
            rank=rank,
            contestant_id=contestant.id,
            name=contestant.name,
            seed=str(contestant.seed),
            win_count=contestant.win_count,
            loss_count=contestant.loss_count,
            games_played=contestant.games_played,
            opponent_win_count=opponent_win_count(contestant, arena),
            sonneborn_berger=sonneborn_berger(contestant, arena),
            eliminated=eliminated,
        )
        for rank, contestant in enumerate(ranked, start=start)
    ]
