"""Ball integration, wall and paddle reflection, and exit detection.

Everything here mutates the state it is given and returns plainly; timing,
scoring bookkeeping and phase changes live in the lifecycle module.
Coordinates grow rightwards and downwards, the ball position is its centre.
"""

import random
from typing import Optional, Sequence

from pong.models import Ball, MatchState, PaddleSlot
from .settings import MatchSettings


def clamp_paddle(y: float, settings: MatchSettings) -> float:
    return max(0.0, min(settings.paddle_max_y, float(y)))


def integrate(ball: Ball) -> None:
    ball.x += ball.vx
    ball.y += ball.vy


def reflect_walls(ball: Ball, settings: MatchSettings) -> bool:
    # Only flip when heading into the wall, otherwise a ball still inside the
    # margin on the next tick would flip back.
    if ball.y <= settings.wall_margin and ball.vy < 0:
        ball.vy = -ball.vy
        return True
    if ball.y >= settings.board_height - settings.wall_margin and ball.vy > 0:
        ball.vy = -ball.vy
        return True
    return False


def paddle_plane(index: int, settings: MatchSettings) -> float:
    """x of the face of the paddle that points into the board."""
    if index == 0:
        return settings.paddle_offset + settings.paddle_width
    return settings.board_width - settings.paddle_offset - settings.paddle_width


def _crossed_plane(ball: Ball, index: int, settings: MatchSettings) -> bool:
    plane = paddle_plane(index, settings)
    r = settings.ball_radius
    if index == 0:
        if ball.vx >= 0:
            return False
        edge = ball.x - r
        return edge <= plane < edge - ball.vx
    if ball.vx <= 0:
        return False
    edge = ball.x + r
    return edge - ball.vx < plane <= edge


def reflect_paddles(ball: Ball, slots: Sequence[PaddleSlot], settings: MatchSettings) -> Optional[int]:
    """Bounce the ball off a bound paddle it reached this tick.

    The vertical exit speed follows where the ball struck: the centre of the
    paddle sends it straight back, the ends add up to half of
    ``spin_factor`` upwards or downwards.
    """
    for slot in slots:
        if not slot.occupied:
            continue
        if not _crossed_plane(ball, slot.index, settings):
            continue
        top = slot.y - settings.paddle_margin
        bottom = slot.y + settings.paddle_height + settings.paddle_margin
        if not top <= ball.y <= bottom:
            continue
        ball.vx = -ball.vx
        offset = (ball.y - slot.y) / settings.paddle_height - 0.5
        ball.vy = offset * settings.spin_factor
        return slot.index
    return None


def detect_exit(ball: Ball, settings: MatchSettings) -> Optional[int]:
    """Slot that wins the point if the ball has left the board, else None."""
    if ball.x < -settings.score_margin:
        return 1
    if ball.x > settings.board_width + settings.score_margin:
        return 0
    return None


def serve(ball: Ball, settings: MatchSettings, rng: Optional[random.Random] = None) -> None:
    rng = rng or random
    ball.x = settings.board_width / 2
    ball.y = settings.board_height / 2
    ball.vx = settings.serve_speed if rng.random() < 0.5 else -settings.serve_speed
    ball.vy = rng.uniform(-settings.serve_vy_max, settings.serve_vy_max)


def step(state: MatchState, settings: MatchSettings) -> Optional[int]:
    """Advance the ball one tick. Returns the scoring slot, if any.

    No exit is reported while ``state.scoring`` is set, so a ball drifting
    further out during the point pause cannot score twice.
    """
    ball = state.ball
    integrate(ball)
    reflect_walls(ball, settings)
    reflect_paddles(ball, state.slots, settings)
    if state.scoring:
        return None
    return detect_exit(ball, settings)
