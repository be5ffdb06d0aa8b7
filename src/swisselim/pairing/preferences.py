"""First-move preferences and first-mover allocation."""

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

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from swisselim.models.contestant import Contestant
from swisselim.models.game import FirstMoveAdvantage

FIRST = FirstMoveAdvantage.FIRST
LAST = FirstMoveAdvantage.LAST


class PreferenceStrength(IntEnum):
    """How strongly a contestant wants a given side."""

    NONE = 0
    MILD = 1
    STRONG = 2
    ABSOLUTE = 3


@dataclass(frozen=True)
class FirstMovePreference:
    side: Optional[FirstMoveAdvantage] = None
    strength: PreferenceStrength = PreferenceStrength.NONE


NO_PREFERENCE = FirstMovePreference()


def get_preference(contestant: Contestant) -> FirstMovePreference:
    """
    Determine a contestant's first-move preference from its history:
    - Absolute: balance beyond +1/-1, or the same side in the last two games
    - Strong: balance of exactly +1 or -1
    - Mild: balanced, prefer to alternate from the last game
    - None: no tracked games yet
    """
    history = contestant.advantage_history
    if not history:
        return NO_PREFERENCE

    balance = history.count(FIRST) - history.count(LAST)

    if abs(balance) > 1:
        side = LAST if balance > 0 else FIRST
        return FirstMovePreference(side, PreferenceStrength.ABSOLUTE)

    if len(history) >= 2 and history[-1] == history[-2]:
        return FirstMovePreference(history[-1].opposite(), PreferenceStrength.ABSOLUTE)

    if balance != 0:
        side = LAST if balance > 0 else FIRST
        return FirstMovePreference(side, PreferenceStrength.STRONG)

    return FirstMovePreference(history[-1].opposite(), PreferenceStrength.MILD)


def preference_conflict(
    pref_a: FirstMovePreference, pref_b: FirstMovePreference
) -> PreferenceStrength:
    """Strength of the preference that must be denied when a meets b.

    Two contestants wanting the same side cannot both be satisfied; the weaker
    of the two preferences is the one violated.
    """
    if pref_a.side is None or pref_b.side is None or pref_a.side != pref_b.side:
        return PreferenceStrength.NONE
    return min(pref_a.strength, pref_b.strength)


def assign_first_move(
    higher: Contestant, lower: Contestant
) -> Tuple[Contestant, Contestant]:
    """
    Allocate the first move between two contestants (descending priority):
    1. Grant both preferences when they are compatible
    2. Grant the stronger preference
    3. Grant the higher-ranked contestant's preference
    4. Otherwise the higher-ranked contestant moves first

    Args:
        higher: The higher-ranked contestant of the pairing
        lower: The lower-ranked contestant of the pairing

    Returns:
        (first_mover, second_mover)
    """
    pref_high = get_preference(higher)
    pref_low = get_preference(lower)

    def granting(contestant: Contestant, other: Contestant, side) -> Tuple:
        return (contestant, other) if side == FIRST else (other, contestant)

    if pref_high.side and pref_low.side and pref_high.side != pref_low.side:
        return granting(higher, lower, pref_high.side)

    if pref_high.strength > pref_low.strength:
        return granting(higher, lower, pref_high.side)
    if pref_low.strength > pref_high.strength:
        return granting(lower, higher, pref_low.side)

    if pref_high.side is not None:
        return granting(higher, lower, pref_high.side)

    return higher, lower
