import pytest

from pong_server.services.pong.protocol import (
    Assigned,
    CLIENT_EVENTS,
    GameStart,
    PaddleMove,
    PlayerLeft,
    ProtocolError,
    ServeRequest,
    StateRequest,
    StateSnapshot,
    decode_client_message,
)


def test_client_events_are_closed():
    assert set(CLIENT_EVENTS) == {'paddle', 'serve', 'requestState'}


def test_decode_paddle():
    assert decode_client_message('paddle', {'y': 120}) == PaddleMove(y=120.0)
    assert decode_client_message('paddle', {'y': -3.5, 'extra': 1}) == PaddleMove(y=-3.5)


@pytest.mark.parametrize('payload', [
    None,
    42,
    'up',
    [],
    {},
    {'y': None},
    {'y': '100'},
    {'y': True},
    {'y': float('nan')},
])
def test_decode_paddle_rejects_malformed(payload):
    with pytest.raises(ProtocolError):
        decode_client_message('paddle', payload)


def test_decode_paddle_keeps_infinity_for_clamping():
    assert decode_client_message('paddle', {'y': float('inf')}).y == float('inf')


def test_decode_empty_payload_events():
    assert decode_client_message('serve') == ServeRequest()
    assert decode_client_message('serve', {}) == ServeRequest()
    assert decode_client_message('requestState', {'ignored': True}) == StateRequest()


def test_decode_empty_payload_rejects_non_objects():
    with pytest.raises(ProtocolError):
        decode_client_message('serve', 'now')


@pytest.mark.parametrize('event', ['click', 'state', '', 'PADDLE'])
def test_unknown_events_are_rejected(event):
    with pytest.raises(ProtocolError):
        decode_client_message(event, {'y': 1})


def test_server_messages():
    assert (Assigned('A').event, Assigned('A').payload()) == ('assigned', {'side': 'A'})
    assert (GameStart('B').event, GameStart('B').payload()) == ('gameStart', {'servingSide': 'B'})
    assert (PlayerLeft('abc').event, PlayerLeft('abc').payload()) == ('playerLeft', {'id': 'abc'})


def test_state_snapshot_wraps_room(full_room):
    message = StateSnapshot.of(full_room)
    assert message.event == 'state'
    assert message.payload() == full_room.snapshot()
