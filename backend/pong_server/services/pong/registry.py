import random
import threading
from typing import Callable, Dict, List, Optional

from .room import Room

MAX_ROOM_NAME = 32


def normalize_room_name(raw: Optional[str], default: str) -> str:
    name = (raw or '').strip()[:MAX_ROOM_NAME]
    return name or default


class RoomRegistry:
    """Owns every room and remembers which room each connection is in.

    Rooms are created on first use and never removed. The registry lock
    only guards the two maps; room contents are guarded by each room's own
    lock.
    """

    def __init__(self, default_room: str = 'main', room_factory: Optional[Callable[[str], Room]] = None):
        self.default_room = default_room
        self._room_factory = room_factory or Room
        self._rooms: Dict[str, Room] = {}
        self._sid_to_room: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.get_or_create(default_room)

    def get_or_create(self, name: str) -> Room:
        with self._lock:
            room = self._rooms.get(name)
            if room is None:
                room = self._room_factory(name)
                self._rooms[name] = room
            return room

    def get(self, name: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(name)

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    # ---- connection bookkeeping ----

    def attach(self, sid: str, name: str) -> Room:
        room = self.get_or_create(name)
        with self._lock:
            self._sid_to_room[sid] = name
        return room

    def room_for(self, sid: str) -> Optional[Room]:
        with self._lock:
            name = self._sid_to_room.get(sid)
            return self._rooms.get(name) if name is not None else None

    def detach(self, sid: str) -> Optional[Room]:
        with self._lock:
            name = self._sid_to_room.pop(sid, None)
            return self._rooms.get(name) if name is not None else None


def make_registry(config) -> RoomRegistry:
    """Build a registry whose rooms use the app's match settings."""
    win_score = int(config.get('WIN_SCORE', 10))
    serve_speed = float(config.get('BALL_SERVE_SPEED', 360.0))
    seed = config.get('RANDOM_SEED')

    def factory(name: str) -> Room:
        rng = random.Random(seed) if seed is not None else None
        return Room(name, win_score=win_score, serve_speed=serve_speed, rng=rng)

    return RoomRegistry(default_room=config.get('DEFAULT_ROOM', 'main'), room_factory=factory)
