import pytest

from swisselim.constants import DEFAULT_ALLOWED_LOSSES, DEFAULT_SEARCH_BUDGET
from swisselim.exceptions import InvalidConfigurationException
from swisselim.tournament import TournamentConfig


def test_defaults():
    config = TournamentConfig()
    assert config.allowed_losses == DEFAULT_ALLOWED_LOSSES
    assert config.max_repeat_pairings == 0
    assert config.track_first_move_advantage is True
    assert config.search_budget == DEFAULT_SEARCH_BUDGET


@pytest.mark.parametrize(
    "kwargs",
    [
        {"allowed_losses": 0},
        {"allowed_losses": -2},
        {"allowed_losses": 1.5},
        {"allowed_losses": True},
        {"max_repeat_pairings": -1},
        {"search_budget": 0},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(**kwargs)


def test_dict_round_trip_keeps_settings():
    config = TournamentConfig(
        name="Club night",
        allowed_losses=2,
        track_first_move_advantage=False,
        max_repeat_pairings=1,
        search_budget=500,
    )
    assert TournamentConfig.from_dict(config.to_dict()) == config


def test_from_dict_fills_missing_keys():
    config = TournamentConfig.from_dict({"allowed_losses": 5})
    assert config.allowed_losses == 5
    assert config.search_budget == DEFAULT_SEARCH_BUDGET
