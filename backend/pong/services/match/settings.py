from typing import Any, Mapping


# config key -> (attribute, type, default)
_FIELDS = (
    ('BOARD_WIDTH', 'board_width', float, 800.0),
    ('BOARD_HEIGHT', 'board_height', float, 600.0),
    ('PADDLE_WIDTH', 'paddle_width', float, 10.0),
    ('PADDLE_HEIGHT', 'paddle_height', float, 100.0),
    ('PADDLE_OFFSET', 'paddle_offset', float, 20.0),
    ('PADDLE_SPEED', 'paddle_speed', float, 12.0),
    ('BALL_RADIUS', 'ball_radius', float, 8.0),
    ('WINNING_SCORE', 'winning_score', int, 11),
    ('SERVE_SPEED', 'serve_speed', float, 5.0),
    ('SERVE_VY_MAX', 'serve_vy_max', float, 3.0),
    ('SPIN_FACTOR', 'spin_factor', float, 10.0),
    ('TICK_RATE', 'tick_rate', int, 60),
    ('IDLE_BROADCAST_RATE', 'idle_broadcast_rate', int, 30),
    ('RESPAWN_DELAY_SEC', 'respawn_delay', float, 1.0),
    ('WALL_MARGIN', 'wall_margin', float, 8.0),
    ('PADDLE_MARGIN', 'paddle_margin', float, 8.0),
    ('SCORE_MARGIN', 'score_margin', float, 20.0),
)


class MatchSettings:
    """Tunable constants of a match.

    Built once from the Flask config and shared read-only by the physics,
    lifecycle and scheduler code. Keyword arguments use the attribute
    names (``board_width``, ``tick_rate`` ...), ``from_mapping`` uses the
    upper-case config keys.
    """

    def __init__(self, **overrides: Any):
        for _key, attr, cast, default in _FIELDS:
            value = overrides.pop(attr, default)
            setattr(self, attr, cast(value))
        if overrides:
            raise TypeError(f"unknown match settings: {', '.join(sorted(overrides))}")
        self._validate()

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> 'MatchSettings':
        values = {}
        for key, attr, _cast, _default in _FIELDS:
            if config.get(key) is not None:
                values[attr] = config[key]
        return cls(**values)

    def _validate(self) -> None:
        if self.board_width <= 0 or self.board_height <= 0:
            raise ValueError('board dimensions must be positive')
        if not 0 < self.paddle_height <= self.board_height:
            raise ValueError('paddle height must fit on the board')
        if self.tick_rate <= 0 or self.idle_broadcast_rate <= 0:
            raise ValueError('tick and idle broadcast rates must be positive')
        if self.winning_score < 1:
            raise ValueError('winning score must be at least 1')
        if self.respawn_delay < 0:
            raise ValueError('respawn delay cannot be negative')

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_rate

    @property
    def idle_interval(self) -> float:
        return 1.0 / self.idle_broadcast_rate

    @property
    def paddle_max_y(self) -> float:
        return self.board_height - self.paddle_height

    def to_dict(self) -> dict:
        return {attr: getattr(self, attr) for _key, attr, _cast, _default in _FIELDS}
