from flask import Blueprint, current_app, jsonify
from pong_server.services.pong import get_registry

rooms = Blueprint('rooms', __name__)

@rooms.route('/', methods=['GET'])
def list_rooms():
    """
    Summaries of every room: status, scores and head counts.
    """
    summaries = []
    for room in get_registry(current_app).rooms():
        with room.lock:
            summaries.append(room.summary())
    return jsonify(summaries), 200

@rooms.route('/<string:name>/state', methods=['GET'])
def room_state(name):
    """
    The same snapshot a client gets from requestState, over plain HTTP.
    """
    room = get_registry(current_app).get(name)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        return jsonify(room.snapshot()), 200
