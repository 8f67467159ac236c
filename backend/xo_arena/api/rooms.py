from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['xo_arena'].registry


@rooms.route('', methods=['GET'])
def count_rooms():
    return jsonify({'count': len(_registry())}), 200


@rooms.route('/<string:code>', methods=['GET'])
def get_room_state(code):
    """
    Returns the public summary of one room. Session ids are never exposed.
    """
    room = _registry().lookup(code)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        if room.is_closed:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify(room.to_dict()), 200
