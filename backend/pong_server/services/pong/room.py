"""Authoritative state of one pong match.

A room owns two fixed player slots (A and B), a set of spectators, the
ball and the scores. Every read or write must happen while holding
``room.lock``; the socket handlers and the ticker both take it.
"""

import math
import random
import threading
from typing import Dict, List, Optional

from .constants import (
    BALL_RADIUS,
    BALL_SERVE_SPEED,
    CANVAS_H,
    CANVAS_W,
    PADDLE_MAX_Y,
    PADDLE_MIN_Y,
    PADDLE_START_Y,
    PLAYER_SIDES,
    SERVE_JITTER,
    SIDE_A,
    SIDE_B,
    SPECTATOR,
    WIN_SCORE,
)

STATUS_IDLE = 'idle'
STATUS_READY = 'ready'
STATUS_PLAYING = 'playing'
STATUS_FINISHED = 'finished'


def clamp_paddle_y(y: float) -> float:
    return max(PADDLE_MIN_Y, min(PADDLE_MAX_Y, y))


class Ball:
    def __init__(self, speed: float = BALL_SERVE_SPEED, radius: float = BALL_RADIUS):
        self.radius = radius
        self.speed = speed
        self.x = CANVAS_W / 2
        self.y = CANVAS_H / 2
        self.vx = 0.0
        self.vy = 0.0

    def recenter(self) -> None:
        self.x = CANVAS_W / 2
        self.y = CANVAS_H / 2
        self.vx = 0.0
        self.vy = 0.0

    def launch(self, direction: int, angle: float, speed: float) -> None:
        """Set velocity from a heading; direction is +1 (rightwards) or -1."""
        self.speed = speed
        self.vx = direction * speed * math.cos(angle)
        self.vy = speed * math.sin(angle)

    @property
    def is_moving(self) -> bool:
        return self.vx != 0.0 or self.vy != 0.0

    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'r': self.radius}


class PlayerSlot:
    def __init__(self, sid: str, side: str, paddle_y: float = PADDLE_START_Y):
        self.sid = sid
        self.side = side
        self.paddle_y = paddle_y

    def to_dict(self):
        return {'id': self.sid, 'side': self.side, 'y': self.paddle_y}


class Room:
    def __init__(self, name: str, win_score: int = WIN_SCORE,
                 serve_speed: float = BALL_SERVE_SPEED, rng: Optional[random.Random] = None):
        self.name = name
        self.win_score = win_score
        self.serve_speed = serve_speed
        self.rng = rng or random.Random()
        self.lock = threading.RLock()

        self.slots: List[Optional[PlayerSlot]] = [None, None]
        self.spectators: Dict[str, PlayerSlot] = {}
        self.join_order: List[str] = []

        self.ball = Ball(speed=serve_speed)
        self.score_a = 0
        self.score_b = 0
        self.serving_side = SIDE_A
        self.running = False
        self.tick = 0

    # ---- queries ----

    @property
    def player_a(self) -> Optional[PlayerSlot]:
        return self.slots[0]

    @property
    def player_b(self) -> Optional[PlayerSlot]:
        return self.slots[1]

    @property
    def has_both_sides(self) -> bool:
        return self.slots[0] is not None and self.slots[1] is not None

    @property
    def is_finished(self) -> bool:
        return self.score_a >= self.win_score or self.score_b >= self.win_score

    @property
    def status(self) -> str:
        if self.running:
            return STATUS_PLAYING
        if self.is_finished:
            return STATUS_FINISHED
        if self.has_both_sides:
            return STATUS_READY
        return STATUS_IDLE

    @property
    def connection_count(self) -> int:
        return len(self.join_order) + len(self.spectators)

    def players(self) -> List[PlayerSlot]:
        """A, B, then spectators in arrival order."""
        active = [slot for slot in self.slots if slot is not None]
        return active + list(self.spectators.values())

    def find(self, sid: str) -> Optional[PlayerSlot]:
        for slot in self.slots:
            if slot is not None and slot.sid == sid:
                return slot
        return self.spectators.get(sid)

    def side_of(self, sid: str) -> Optional[str]:
        slot = self.find(sid)
        return slot.side if slot else None

    def can_start(self) -> bool:
        return not self.running and self.has_both_sides and not self.is_finished

    # ---- connection lifecycle ----

    def join(self, sid: str) -> str:
        """Seat a connection and return its side (A, B or S)."""
        existing = self.find(sid)
        if existing is not None:
            return existing.side
        for index, side in enumerate(PLAYER_SIDES):
            if self.slots[index] is None:
                self.slots[index] = PlayerSlot(sid, side)
                self.join_order.append(sid)
                return side
        self.spectators[sid] = PlayerSlot(sid, SPECTATOR)
        return SPECTATOR

    def leave(self, sid: str) -> Optional[str]:
        """Remove a connection; returns the side it held, or None if unknown.

        An active player leaving abandons the match: play halts and the room
        goes back to its initial scores and serve side.
        """
        if sid in self.spectators:
            del self.spectators[sid]
            return SPECTATOR
        for index, slot in enumerate(self.slots):
            if slot is not None and slot.sid == sid:
                self.slots[index] = None
                if sid in self.join_order:
                    self.join_order.remove(sid)
                self.reset_match()
                return slot.side
        return None

    # ---- input ----

    def set_paddle(self, sid: str, y: float) -> bool:
        slot = self.find(sid)
        if slot is None or slot.side not in PLAYER_SIDES:
            return False
        if math.isnan(y):
            return False
        slot.paddle_y = clamp_paddle_y(y)
        return True

    def start_match(self) -> bool:
        """Begin a fresh match with A serving, if the room is ready."""
        if not self.can_start():
            return False
        self.serving_side = SIDE_A
        self.running = True
        self.serve_ball()
        return True

    def serve(self) -> bool:
        """Put the ball in play from the current serving side."""
        if not self.can_start():
            return False
        self.running = True
        self.serve_ball()
        return True

    # ---- simulation helpers ----

    def serve_ball(self) -> None:
        angle = self.rng.uniform(-SERVE_JITTER, SERVE_JITTER)
        direction = 1 if self.serving_side == SIDE_A else -1
        self.ball.recenter()
        self.ball.launch(direction, angle, self.serve_speed)

    def halt(self) -> None:
        self.running = False
        self.ball.recenter()

    def reset_match(self) -> None:
        self.halt()
        self.score_a = 0
        self.score_b = 0
        self.serving_side = SIDE_A
        self.ball.speed = self.serve_speed

    def award_point(self, side: str) -> None:
        """Credit a point to ``side``; the loser of the point serves next."""
        if side == SIDE_A:
            self.score_a += 1
            self.serving_side = SIDE_B
        else:
            self.score_b += 1
            self.serving_side = SIDE_A
        self.ball.recenter()
        self.running = self.has_both_sides and not self.is_finished
        if self.running:
            self.serve_ball()

    # ---- serialization ----

    def snapshot(self):
        return {
            'ball': self.ball.to_dict(),
            'scoreA': self.score_a,
            'scoreB': self.score_b,
            'players': [p.to_dict() for p in self.players()],
            'running': self.running,
            'servingSide': self.serving_side,
            'tick': self.tick,
        }

    def summary(self):
        return {
            'name': self.name,
            'status': self.status,
            'running': self.running,
            'scoreA': self.score_a,
            'scoreB': self.score_b,
            'players': len(self.join_order),
            'spectators': len(self.spectators),
        }
