"""Tournament management for Swiss elimination.

The Tournament class keeps the contestant arena and the round state; it
delegates elimination and pairing to the RoundManager and result reporting to
the ResultRecorder.
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

from swisselim.tournament.config import TournamentConfig
from swisselim.tournament.result_recorder import ResultRecorder
from swisselim.tournament.round_manager import RoundManager
from swisselim.tournament.scoring import ContestantStanding
from swisselim.tournament.tournament import Tournament, TournamentState

__all__ = [
    "Tournament",
    "TournamentState",
    "TournamentConfig",
    "ContestantStanding",
    "RoundManager",
    "ResultRecorder",
]
