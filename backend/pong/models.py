from typing import List, Optional


# Match phases
LOBBY = 'lobby'
PLAYING = 'playing'
ENDED = 'ended'

SLOT_COUNT = 2


class Ball:
    def __init__(self, x: float = 0.0, y: float = 0.0, vx: float = 0.0, vy: float = 0.0):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy

    def center(self, settings) -> None:
        """Put the ball in the middle of the board, at rest."""
        self.x = settings.board_width / 2
        self.y = settings.board_height / 2
        self.vx = 0.0
        self.vy = 0.0

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
        }


class PaddleSlot:
    """One of the two competitive positions, 0 on the left and 1 on the right.

    Slots live as long as the match does; sessions are bound to and
    released from them as they come and go.
    """

    def __init__(self, index: int, y: float = 0.0):
        self.index = index
        self.sid: Optional[str] = None
        self.y = y
        self.score = 0
        self.ready = False

    @property
    def occupied(self) -> bool:
        return self.sid is not None

    def reset(self, y: float) -> None:
        self.score = 0
        self.ready = False
        self.y = y

    def to_dict(self):
        return {
            'slot': self.index,
            'occupied': self.occupied,
            'y': self.y,
            'score': self.score,
            'ready': self.ready,
        }


class MatchState:
    """The single shared record of the match. Serialized whole, never diffed."""

    def __init__(self, settings):
        self.settings = settings
        self.ball = Ball()
        self.ball.center(settings)
        self.slots: List[PaddleSlot] = [
            PaddleSlot(i, y=self.paddle_home) for i in range(SLOT_COUNT)
        ]
        self.phase = LOBBY
        self.winner: Optional[int] = None
        self.player_count = 0
        # Set between an out-of-bounds exit and the following serve
        self.scoring = False
        # Bumped on every match start so stale timers can tell they are stale
        self.match_id = 0

    @property
    def paddle_home(self) -> float:
        return (self.settings.board_height - self.settings.paddle_height) / 2

    @property
    def scores(self) -> List[int]:
        return [slot.score for slot in self.slots]

    def to_dict(self):
        return {
            'phase': self.phase,
            'winner': self.winner,
            'player_count': self.player_count,
            'match_id': self.match_id,
            'point_pause': self.scoring,
            'ball': self.ball.to_dict(),
            'paddles': [slot.to_dict() for slot in self.slots],
            'scores': self.scores,
        }
