from conftest import add_bye, make_contestant, play

from swisselim.models.game import Game, GameResult
from swisselim.tournament.scoring import (
    build_standings,
    compare_contestants,
    opponent_win_count,
    rank_contestants,
    sonneborn_berger,
)


def _arena(*contestants):
    return {c.id: c for c in contestants}


def test_metrics_are_zero_without_games():
    a = make_contestant("A", 1500)
    arena = _arena(a)
    assert opponent_win_count(a, arena) == 0
    assert sonneborn_berger(a, arena) == 0


def test_sonneborn_berger_counts_defeated_opponents_wins():
    a, b, c, d = (make_contestant(x, 1500) for x in "ABCD")
    play(a, b, 1)
    play(c, d, 1)
    play(a, c, 2)
    arena = _arena(a, b, c, d)

    # B has 0 wins, C has 1 win (against D)
    assert sonneborn_berger(a, arena) == 1
    assert opponent_win_count(a, arena) == 1
    assert sonneborn_berger(c, arena) == 0
    assert opponent_win_count(c, arena) == 2 + 0


def test_bye_counts_own_win_count():
    a, b = make_contestant("A", 1500), make_contestant("B", 1400)
    play(a, b, 1)
    add_bye(a, 2)
    arena = _arena(a, b)

    # Bye contributes A's own 2 wins, B contributes 0
    assert opponent_win_count(a, arena) == 2
    assert sonneborn_berger(a, arena) == 2


def test_in_progress_games_count_for_opponent_wins_only():
    a, b, c = (make_contestant(x, 1500) for x in "ABC")
    play(b, c, 1)
    a.add_game(Game(2, GameResult.IN_PROGRESS, opponent_id="B"))
    arena = _arena(a, b, c)

    assert opponent_win_count(a, arena) == 1
    assert sonneborn_berger(a, arena) == 0


def test_metrics_are_recomputed_after_new_results():
    a, b, c, d = (make_contestant(x, 1500) for x in "ABCD")
    play(a, b, 1)
    arena = _arena(a, b, c, d)
    assert sonneborn_berger(a, arena) == 0

    play(b, c, 2)
    assert sonneborn_berger(a, arena) == 1


def test_ranking_orders_by_wins_opponent_wins_and_sonneborn_berger():
    a = make_contestant("A", 1000)
    b = make_contestant("B", 2000)
    c = make_contestant("C", 1500)
    d = make_contestant("D", 1200)
    play(a, d, 1)  # A: 1 win, beat D (0 wins)
    play(c, b, 1)  # C: 1 win, beat B
    play(b, d, 2)  # B and C tie on opponent wins, B won against a winless D
    arena = _arena(a, b, c, d)

    ranked = rank_contestants(arena.values(), arena)
    assert [x.id for x in ranked] == ["C", "B", "A", "D"]


def test_seed_breaks_full_ties():
    strong = make_contestant("S", 2000)
    weak = make_contestant("W", 1000)
    arena = _arena(strong, weak)

    assert compare_contestants(strong, weak, arena) == 1
    assert compare_contestants(weak, strong, arena) == -1
    assert compare_contestants(strong, strong, arena) == 0
    assert rank_contestants([weak, strong], arena) == [strong, weak]


def test_standings_snapshot():
    a, b = make_contestant("A", 1500), make_contestant("B", 1400)
    play(a, b, 1)
    arena = _arena(a, b)

    standings = build_standings([a], arena, start=3)
    assert standings[0].rank == 3
    assert standings[0].win_count == 1
    assert standings[0].games_played == 1
    assert standings[0].eliminated is False
