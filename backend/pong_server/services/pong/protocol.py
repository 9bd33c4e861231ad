"""Wire messages exchanged over Socket.IO.

Client events are decoded once at the boundary into one of a closed set of
message types. Anything unrecognised raises ``ProtocolError`` and the caller
drops it. Server events are built from the dataclasses below so the event
name and payload shape live in one place.

Client -> server:
- paddle: { y: number }
- serve: {}
- requestState: {}

Server -> client:
- assigned: { side: 'A'|'B'|'S' }
- gameStart: { servingSide: 'A'|'B' }
- state: { ball: {x, y, r}, scoreA, scoreB, players: [{id, side, y}], running, servingSide, tick }
- playerLeft: { id }
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union


class ProtocolError(ValueError):
    """A client message that cannot be decoded."""


# ---- client -> server ----

@dataclass(frozen=True)
class PaddleMove:
    y: float
    event: ClassVar[str] = 'paddle'


@dataclass(frozen=True)
class ServeRequest:
    event: ClassVar[str] = 'serve'


@dataclass(frozen=True)
class StateRequest:
    event: ClassVar[str] = 'requestState'


ClientMessage = Union[PaddleMove, ServeRequest, StateRequest]


def _decode_paddle(data: Any) -> PaddleMove:
    if not isinstance(data, dict) or 'y' not in data:
        raise ProtocolError('paddle requires {y: number}')
    y = data['y']
    # bool is an int subclass, but true/false is not a position
    if isinstance(y, bool) or not isinstance(y, (int, float)):
        raise ProtocolError(f'paddle y must be a number, got {type(y).__name__}')
    if math.isnan(y):
        raise ProtocolError('paddle y is NaN')
    return PaddleMove(y=float(y))


def _decode_empty(message_type):
    def decode(data: Any):
        if data is not None and not isinstance(data, dict):
            raise ProtocolError(f'{message_type.event} takes an object payload')
        return message_type()
    return decode


_DECODERS = {
    PaddleMove.event: _decode_paddle,
    ServeRequest.event: _decode_empty(ServeRequest),
    StateRequest.event: _decode_empty(StateRequest),
}

CLIENT_EVENTS = tuple(_DECODERS)


def decode_client_message(event: str, data: Any = None) -> ClientMessage:
    decoder = _DECODERS.get(event)
    if decoder is None:
        raise ProtocolError(f'unknown event {event!r}')
    return decoder(data)


# ---- server -> client ----

@dataclass(frozen=True)
class Assigned:
    side: str
    event: ClassVar[str] = 'assigned'

    def payload(self) -> Dict[str, Any]:
        return {'side': self.side}


@dataclass(frozen=True)
class GameStart:
    serving_side: str
    event: ClassVar[str] = 'gameStart'

    def payload(self) -> Dict[str, Any]:
        return {'servingSide': self.serving_side}


@dataclass(frozen=True)
class PlayerLeft:
    sid: str
    event: ClassVar[str] = 'playerLeft'

    def payload(self) -> Dict[str, Any]:
        return {'id': self.sid}


@dataclass(frozen=True)
class StateSnapshot:
    data: Dict[str, Any]
    event: ClassVar[str] = 'state'

    @classmethod
    def of(cls, room) -> 'StateSnapshot':
        return cls(data=room.snapshot())

    def payload(self) -> Dict[str, Any]:
        return self.data


ServerMessage = Union[Assigned, GameStart, PlayerLeft, StateSnapshot]
