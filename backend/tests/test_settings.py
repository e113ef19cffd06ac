import pytest

from pong.services.match import MatchSettings


def test_defaults():
    settings = MatchSettings()
    assert settings.board_width == 800
    assert settings.board_height == 600
    assert settings.winning_score == 11
    assert settings.tick_rate == 60
    assert settings.idle_broadcast_rate == 30
    assert settings.respawn_delay == 1.0
    assert settings.paddle_max_y == 500


def test_from_mapping_reads_config_keys():
    settings = MatchSettings.from_mapping({
        'BOARD_WIDTH': '1000',
        'WINNING_SCORE': 5,
        'TICK_RATE': 120,
        'SECRET_KEY': 'ignored',
    })
    assert settings.board_width == 1000.0
    assert settings.winning_score == 5
    assert settings.tick_interval == pytest.approx(1 / 120)
    # Untouched keys keep their defaults
    assert settings.paddle_height == 100


def test_unknown_keyword_rejected():
    with pytest.raises(TypeError):
        MatchSettings(board_depth=3)


@pytest.mark.parametrize('overrides', [
    {'tick_rate': 0},
    {'idle_broadcast_rate': -1},
    {'paddle_height': 700},
    {'winning_score': 0},
    {'respawn_delay': -0.5},
])
def test_invalid_settings(overrides):
    with pytest.raises(ValueError):
        MatchSettings(**overrides)


def test_to_dict_round_trips_attributes():
    data = MatchSettings(spin_factor=4).to_dict()
    assert data['spin_factor'] == 4.0
    assert 'tick_interval' not in data
