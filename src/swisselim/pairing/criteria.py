"""Pairing-quality criteria. Lower values are always better."""

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

from dataclasses import astuple, dataclass


@dataclass(frozen=True, order=True)
class StrongPairingCriteria:
    """Criteria that must be fulfilled whenever possible.

    When any of these is above zero the pairing search tries another bye
    candidate, more downfloaters, etc. They are considered for the whole round,
    not only the current bracket.

    Attributes
    ----------
    bye_repeats : int
        Byes given to contestants that already had one.
    max_pairing_repeats : int
        Largest number of earlier meetings between the two sides of a pairing.
    pairing_repeats : int
        Pairings between contestants that met before.
    absolute_preference_violations : int
        Pairings where both sides hold the same absolute first-move preference.
    """

    bye_repeats: int = 0
    max_pairing_repeats: int = 0
    pairing_repeats: int = 0
    absolute_preference_violations: int = 0

    def __add__(self, other: "StrongPairingCriteria") -> "StrongPairingCriteria":
        if not isinstance(other, StrongPairingCriteria):
            return NotImplemented
        return StrongPairingCriteria(
            bye_repeats=self.bye_repeats + other.bye_repeats,
            max_pairing_repeats=max(
                self.max_pairing_repeats, other.max_pairing_repeats
            ),
            pairing_repeats=self.pairing_repeats + other.pairing_repeats,
            absolute_preference_violations=self.absolute_preference_violations
            + other.absolute_preference_violations,
        )

    def is_zero(self) -> bool:
        return not any(astuple(self))

    def is_acceptable(self, max_repeat_pairings: int) -> bool:
        """Whether no hard rule is broken given the allowed rematch count."""
        return (
            self.bye_repeats == 0
            and self.absolute_preference_violations == 0
            and self.max_pairing_repeats <= max_repeat_pairings
        )


@dataclass(frozen=True)
class WeakPairingCriteria:
    """Criteria fulfilled as well as possible for the current bracket.

    Most are measured on the current bracket only. ``next_unpaired_floaters``
    and ``next_sum_score_paired_floaters`` look one bracket ahead at the
    contestants floated down. Comparison is lexicographic in field order, the
    two score sums counting negatively since pairing higher scores is better.
    """

    outgoing_floaters: int = 0
    unpaired_floaters: int = 0
    sum_score_paired_floaters: int = 0
    next_unpaired_floaters: int = 0
    next_sum_score_paired_floaters: int = 0
    strong_preference_violations: int = 0
    weak_preference_violations: int = 0

    def sort_key(self) -> tuple:
        return (
            self.outgoing_floaters,
            self.unpaired_floaters,
            -self.sum_score_paired_floaters,
            self.next_unpaired_floaters,
            -self.next_sum_score_paired_floaters,
            self.strong_preference_violations,
            self.weak_preference_violations,
        )

    def __lt__(self, other: "WeakPairingCriteria") -> bool:
        if not isinstance(other, WeakPairingCriteria):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "WeakPairingCriteria") -> bool:
        if not isinstance(other, WeakPairingCriteria):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "WeakPairingCriteria") -> bool:
        if not isinstance(other, WeakPairingCriteria):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "WeakPairingCriteria") -> bool:
        if not isinstance(other, WeakPairingCriteria):
            return NotImplemented
        return self.sort_key() >= other.sort_key()
