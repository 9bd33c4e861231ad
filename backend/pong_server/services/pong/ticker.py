import time

from pong_server import socketio
from .physics import step
from .protocol import StateSnapshot
from .registry import RoomRegistry


class Ticker:
    """Fixed-cadence physics loop shared by every room.

    - Runs as a Socket.IO background task, independent of client traffic
    - Steps each running room under its lock and broadcasts the snapshot
    - Disabled in TESTING; tests call ``tick_once`` directly
    """

    def __init__(self, app, registry: RoomRegistry, tick_hz: int = 60, namespace: str = '/'):
        self.app = app
        self.registry = registry
        self.period = 1.0 / tick_hz
        self.namespace = namespace
        self._running = False
        self._ticks = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self.app.logger.info(f"[tick-start] period={self.period * 1000:.2f}ms")
        socketio.start_background_task(self._loop)

    def stop(self) -> None:
        self._running = False

    def tick_once(self) -> int:
        """Advance every running room by one period; returns rooms stepped."""
        stepped = 0
        for room in self.registry.rooms():
            try:
                if self._step_room(room):
                    stepped += 1
            except Exception:
                self.app.logger.exception(f"[tick-error] room={room.name}")
        self._ticks += 1
        return stepped

    def _step_room(self, room) -> bool:
        with room.lock:
            if not room.running:
                return False
            result = step(room, self.period)
            room.tick += 1
            if result.scored:
                self.app.logger.info(
                    f"[room:{room.name}] point {result.scored} score={room.score_a}-{room.score_b}"
                )
            if result.match_over:
                winner = 'A' if room.score_a >= room.win_score else 'B'
                self.app.logger.info(f"[match-end] room={room.name} winner={winner}")
            snapshot = StateSnapshot.of(room)
            socketio.emit(snapshot.event, snapshot.payload(), to=room.name, namespace=self.namespace)
        return True

    def _loop(self) -> None:
        try:
            hb = int(self.app.config.get('TICK_HEARTBEAT_SEC', 0))
        except (TypeError, ValueError):
            hb = 0
        last_beat = time.monotonic()
        next_at = time.monotonic()
        while self._running:
            self.tick_once()
            now = time.monotonic()
            if hb > 0 and now - last_beat >= hb:
                last_beat = now
                self.app.logger.info(f"[tick-heartbeat] ticks={self._ticks} rooms={len(self.registry)}")
            next_at += self.period
            delay = next_at - time.monotonic()
            if delay > 0:
                socketio.sleep(delay)
            else:
                # Fell behind; resync
                next_at = time.monotonic()
                socketio.sleep(0)
        self.app.logger.info("[tick-stop]")
