import pytest

from swisselim.models.contestant import Contestant
from swisselim.models.game import FirstMoveAdvantage, Game, GameResult
from swisselim.models.seed import RatingSeed
from swisselim.tournament.config import TournamentConfig
from swisselim.tournament.tournament import Tournament


def make_contestant(contestant_id, rating, tiebreak=0):
    """Contestant named after its id with a deterministic seed."""
    return Contestant(
        name=contestant_id,
        seed=RatingSeed(rating=rating, tiebreak=tiebreak),
        contestant_id=contestant_id,
    )


def add_win(contestant, opponent, round_number, advantage=None):
    contestant.add_game(
        Game(round_number, GameResult.WIN, opponent_id=opponent.id, advantage=advantage)
    )


def add_loss(contestant, opponent, round_number, advantage=None):
    contestant.add_game(
        Game(round_number, GameResult.LOSS, opponent_id=opponent.id, advantage=advantage)
    )


def add_bye(contestant, round_number):
    contestant.add_game(Game(round_number, GameResult.WIN))


def play(winner, loser, round_number):
    """Record a finished game in both histories, winner moving first."""
    add_win(winner, loser, round_number, FirstMoveAdvantage.FIRST)
    add_loss(loser, winner, round_number, FirstMoveAdvantage.LAST)


def with_advantages(contestant, *sides):
    """Give a contestant a history of won games played on the given sides."""
    for round_number, side in enumerate(sides, start=1):
        contestant.add_game(
            Game(round_number, GameResult.WIN, opponent_id=f"x{round_number}", advantage=side)
        )
    return contestant


@pytest.fixture
def five_contestants():
    """A (strongest seed) to E (weakest seed)."""
    return [
        make_contestant("A", 2000),
        make_contestant("B", 1900),
        make_contestant("C", 1800),
        make_contestant("D", 1700),
        make_contestant("E", 1600),
    ]


@pytest.fixture
def make_tournament():
    def _make(contestants, **config):
        return Tournament(TournamentConfig(**config), contestants)

    return _make


def finish_round(tournament, winners):
    """Report every game of the round in progress, ``winners`` decide each pairing."""
    round_pairings = tournament.current_round_pairings
    results = []
    for pairing in round_pairings.pairings:
        if pairing.first_id in winners:
            results.append((pairing.first_id, pairing.second_id))
        else:
            results.append((pairing.second_id, pairing.first_id))
    assert tournament.record_round_results(results)
    return results
