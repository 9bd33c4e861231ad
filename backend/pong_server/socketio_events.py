from flask_socketio import join_room, emit
from pong_server import socketio
from flask import current_app, request
from pong_server.services.pong import get_registry
from pong_server.services.pong.constants import SPECTATOR
from pong_server.services.pong.protocol import (
    Assigned,
    GameStart,
    PaddleMove,
    PlayerLeft,
    ProtocolError,
    ServeRequest,
    StateRequest,
    StateSnapshot,
    decode_client_message,
)
from pong_server.services.pong.registry import normalize_room_name

NAMESPACE = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _send(message) -> None:
    emit(message.event, message.payload())


def _broadcast(message, room_name: str, skip_sid=None) -> None:
    socketio.emit(message.event, message.payload(), to=room_name, skip_sid=skip_sid, namespace=NAMESPACE)


def _log(room_name: str, text: str) -> None:
    current_app.logger.info(f"[room:{room_name}] {text}")


def handle_connect(auth=None):
    registry = get_registry(current_app)
    sid = _get_sid()
    name = normalize_room_name(request.args.get('room'), registry.default_room)
    join_room(name)
    room = registry.attach(sid, name)
    with room.lock:
        side = room.join(sid)
        _send(Assigned(side))
        if side == SPECTATOR:
            _log(name, f"Spectator joined ({sid})")
        else:
            _log(name, f"Player {side} joined ({sid})")
        if current_app.config.get('AUTO_START_MATCH', True) and room.start_match():
            _broadcast(GameStart(room.serving_side), name)
            _log(name, "Game started")


def handle_disconnect(reason=None):
    sid = _get_sid()
    room = get_registry(current_app).detach(sid)
    if room is None:
        return
    with room.lock:
        side = room.leave(sid)
        if side is None:
            return
        _log(room.name, f"Player disconnected ({sid}) side={side}")
        _broadcast(PlayerLeft(sid), room.name, skip_sid=sid)
        # Observers need to see the halted room without waiting for a tick
        _broadcast(StateSnapshot.of(room), room.name, skip_sid=sid)


def _dispatch(event: str, data) -> None:
    sid = _get_sid()
    try:
        message = decode_client_message(event, data)
    except ProtocolError as exc:
        current_app.logger.debug(f"[drop] sid={sid} event={event} reason={exc}")
        return
    room = get_registry(current_app).room_for(sid)
    if room is None:
        return
    with room.lock:
        if isinstance(message, PaddleMove):
            room.set_paddle(sid, message.y)
        elif isinstance(message, ServeRequest):
            if room.serve():
                _broadcast(GameStart(room.serving_side), room.name)
                _log(room.name, f"Serve by {room.side_of(sid)} ({sid})")
        elif isinstance(message, StateRequest):
            _send(StateSnapshot.of(room))


def handle_paddle(data=None):
    _dispatch(PaddleMove.event, data)


def handle_serve(data=None):
    _dispatch(ServeRequest.event, data)


def handle_request_state(data=None):
    _dispatch(StateRequest.event, data)


def handle_error(exc):
    event = getattr(request, 'event', None) or {}
    current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={event.get('message')}: {exc}")


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the default namespace."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event(PaddleMove.event, handle_paddle, namespace=NAMESPACE)
    socketio.on_event(ServeRequest.event, handle_serve, namespace=NAMESPACE)
    socketio.on_event(StateRequest.event, handle_request_state, namespace=NAMESPACE)
    socketio.on_error_default(handle_error)
