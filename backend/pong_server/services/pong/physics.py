"""Fixed-timestep ball physics.

``step`` is the only code that moves the ball or awards points. It must be
called with ``room.lock`` held.
"""

from typing import Optional

from .constants import (
    BOUNCE_ACCELERATION,
    CANVAS_H,
    CANVAS_W,
    LEFT_FACE_X,
    LEFT_MISS_X,
    MAX_BOUNCE_ANGLE,
    PADDLE_HEIGHT,
    RIGHT_FACE_X,
    RIGHT_MISS_X,
    SIDE_A,
    SIDE_B,
    SNAP_GAP,
    WALL_MARGIN,
)
from .room import Ball, PlayerSlot, Room


class TickResult:
    def __init__(self, scored: Optional[str] = None, bounced: Optional[str] = None,
                 match_over: bool = False):
        self.scored = scored
        self.bounced = bounced
        self.match_over = match_over


def bounce_angle(ball_y: float, paddle_y: float) -> float:
    """Map the strike offset from paddle centre (-1..1) onto -60..60 degrees."""
    half = PADDLE_HEIGHT / 2
    relative = (ball_y - (paddle_y + half)) / half
    return relative * MAX_BOUNCE_ANGLE


def _reflect_walls(ball: Ball) -> None:
    if ball.y - ball.radius <= WALL_MARGIN:
        ball.y = ball.radius + WALL_MARGIN
        ball.vy = -ball.vy
    if ball.y + ball.radius >= CANVAS_H - WALL_MARGIN:
        ball.y = CANVAS_H - ball.radius - WALL_MARGIN
        ball.vy = -ball.vy


def _in_reach(ball: Ball, paddle: PlayerSlot) -> bool:
    return paddle.paddle_y <= ball.y <= paddle.paddle_y + PADDLE_HEIGHT


def _hit(ball: Ball, paddle: PlayerSlot, direction: int) -> None:
    angle = bounce_angle(ball.y, paddle.paddle_y)
    ball.launch(direction, angle, ball.speed * BOUNCE_ACCELERATION)


def _check_left(room: Room) -> Optional[str]:
    """Resolve the A side; returns 'bounce', the scoring side, or None."""
    ball = room.ball
    paddle = room.player_a
    if paddle is None:
        return SIDE_B if ball.x - ball.radius <= 0 else None
    if ball.x - ball.radius > LEFT_FACE_X:
        return None
    if _in_reach(ball, paddle):
        _hit(ball, paddle, 1)
        ball.x = LEFT_FACE_X + ball.radius + SNAP_GAP
        return 'bounce'
    if ball.x < LEFT_MISS_X:
        return SIDE_B
    return None


def _check_right(room: Room) -> Optional[str]:
    ball = room.ball
    paddle = room.player_b
    if paddle is None:
        return SIDE_A if ball.x + ball.radius >= CANVAS_W else None
    if ball.x + ball.radius < RIGHT_FACE_X:
        return None
    if _in_reach(ball, paddle):
        _hit(ball, paddle, -1)
        ball.x = RIGHT_FACE_X - ball.radius - SNAP_GAP
        return 'bounce'
    if ball.x > RIGHT_MISS_X:
        return SIDE_A
    return None


def step(room: Room, dt: float) -> TickResult:
    """Advance a running room by ``dt`` seconds."""
    result = TickResult()
    if not room.running:
        return result

    ball = room.ball
    ball.x += ball.vx * dt
    ball.y += ball.vy * dt
    _reflect_walls(ball)

    for side, check in ((SIDE_A, _check_left), (SIDE_B, _check_right)):
        outcome = check(room)
        if outcome == 'bounce':
            result.bounced = side
        elif outcome is not None:
            result.scored = outcome
            room.award_point(outcome)
            result.match_over = room.is_finished
            break

    # Safety net: a finished match never keeps running
    if room.is_finished and room.running:
        room.halt()
        result.match_over = True
    return result
