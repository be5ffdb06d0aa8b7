"""Example script running an elimination tournament by hand.

It registers a small field, plays every round with results decided by
rating, and prints the pairings and the final standings. The same loop is
what a tournament director would drive from a user interface.
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

from swisselim import RatingSeed, Tournament, TournamentConfig

FIELD = [
    ("Ana", 2210),
    ("Bram", 2105),
    ("Chloe", 1980),
    ("Dmitri", 1875),
    ("Elif", 1790),
    ("Farid", 1720),
    ("Greta", 1655),
    ("Hugo", None),
    ("Ines", 1540),
]


def example_manual_tournament():
    """Example: driving a tournament round by round."""

    print("\n" + "=" * 70)
    print("EXAMPLE: Double elimination Swiss")
    print("=" * 70 + "\n")

    tournament = Tournament(TournamentConfig(name="Club night", allowed_losses=2))
    for name, rating in FIELD:
        tournament.register(name, RatingSeed(rating))

    while not tournament.is_finished:
        round_pairings = tournament.generate_round()
        print(f"Round {round_pairings.round_number}")

        for contestant_id in round_pairings.eliminated_ids:
            print(f"  out: {tournament.get_contestant(contestant_id).name}")

        for pairing in round_pairings.pairings:
            first = tournament.get_contestant(pairing.first_id)
            second = tournament.get_contestant(pairing.second_id)
            print(f"  {first.name:8} - {second.name}")

            # The stronger seed always wins in this example
            if first.seed > second.seed:
                tournament.record_result(first.id, second.id)
            else:
                tournament.record_result(second.id, first.id)

        if round_pairings.bye_id:
            print(f"  bye: {tournament.get_contestant(round_pairings.bye_id).name}")
        print()

    print("Final standings")
    for standing in tournament.get_standings():
        status = "eliminated" if standing.eliminated else "winner"
        print(
            f"  {standing.rank:2}. {standing.name:8} "
            f"W{standing.win_count} L{standing.loss_count} ({status})"
        )


if __name__ == "__main__":
    example_manual_tournament()
