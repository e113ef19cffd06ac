from flask import current_app, request
from flask_socketio import emit

from pong import NAMESPACE, socketio
from pong.services.match import Match


def _match() -> Match:
    return current_app.extensions['pong']['match']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    emit('connected', {'message': f'Connected to {NAMESPACE}'})
    _match().connect(_get_sid())


def handle_disconnect(reason=None):
    _match().disconnect(_get_sid())


def handle_move(data=None):
    direction = (data or {}).get('direction') if isinstance(data, dict) else data
    _match().move(_get_sid(), direction)


def handle_set_position(data=None):
    if not isinstance(data, dict) or 'y' not in data:
        return
    _match().set_position(_get_sid(), data['y'])


def handle_ready(data=None):
    ready = True
    if isinstance(data, dict) and 'ready' in data:
        ready = bool(data['ready'])
    _match().set_ready(_get_sid(), ready)


def handle_rematch(data=None):
    _match().rematch(_get_sid())


def handle_ping(data=None):
    emit('pong', data or {})


_HANDLERS = (
    ('connect', handle_connect),
    ('disconnect', handle_disconnect),
    ('move', handle_move),
    ('set_position', handle_set_position),
    ('ready', handle_ready),
    ('rematch', handle_rematch),
    ('ping', handle_ping),
)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    Handlers only queue intents; the match loop applies them.
    """
    for name, handler in _HANDLERS:
        socketio.on_event(name, handler, namespace=NAMESPACE)

    if testing:
        for name, handler in _HANDLERS:
            socketio.on_event(name, handler, namespace='/')
