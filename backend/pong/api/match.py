from flask import Blueprint, current_app, jsonify
from pong.services.match import physics

match_api = Blueprint('match', __name__)


def _match():
    return current_app.extensions['pong']['match']


@match_api.route('/state', methods=['GET'])
def get_match_state():
    """
    Returns the latest snapshot of the shared match.
    """
    return jsonify(_match().snapshot()), 200


@match_api.route('/settings', methods=['GET'])
def get_match_settings():
    """
    Returns board geometry, rules and rates so clients can lay out the board.
    """
    settings = _match().settings
    data = settings.to_dict()
    data['paddle_planes'] = [physics.paddle_plane(i, settings) for i in (0, 1)]
    return jsonify(data), 200
