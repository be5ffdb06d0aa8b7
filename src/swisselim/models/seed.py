"""Seed values used as the last-resort tie-break between contestants."""

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

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _random_tiebreak() -> int:
    return random.getrandbits(64)


class Seed(ABC):
    """A totally ordered seeding value.

    A *greater* seed is a *stronger* seed. Concrete seeds only need to provide
    :meth:`sort_key`; all comparison operators are derived from it. Seeds of
    different concrete types cannot be compared.
    """

    @abstractmethod
    def sort_key(self) -> Tuple:
        """Return a tuple where a larger value means a stronger seed."""

    def _comparable(self, other: object) -> bool:
        return isinstance(other, Seed) and type(other) is type(self)

    def __lt__(self, other: "Seed") -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "Seed") -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "Seed") -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "Seed") -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


@dataclass(frozen=True, eq=True, order=False)
class RatingSeed(Seed):
    """Seed from an optional numeric rating.

    Attributes
    ----------
    rating : int or None
        Rating of the contestant. Unrated contestants rank below rated ones.
    tiebreak : int
        Random value separating contestants with the same rating.
    """

    rating: Optional[int] = None
    tiebreak: int = field(default_factory=_random_tiebreak)

    def sort_key(self) -> Tuple:
        return (self.rating is not None, self.rating or 0, self.tiebreak)

    def __str__(self) -> str:
        return str(self.rating) if self.rating is not None else "unrated"


@dataclass(frozen=True, eq=True, order=False)
class PlacementSeed(Seed):
    """Seed from an optional prior placement, where 1 is the best.

    Attributes
    ----------
    placement : int or None
        Prior placement. Unplaced contestants rank last.
    tiebreak : int
        Random value separating contestants with the same placement.
    """

    placement: Optional[int] = None
    tiebreak: int = field(default_factory=_random_tiebreak)

    def sort_key(self) -> Tuple:
        placed = self.placement is not None
        return (placed, -self.placement if placed else 0, self.tiebreak)

    def __str__(self) -> str:
        return f"#{self.placement}" if self.placement is not None else "unplaced"
