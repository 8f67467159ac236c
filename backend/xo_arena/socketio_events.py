from typing import Iterable

from flask import current_app, request
from flask_socketio import emit

from xo_arena import socketio
from xo_arena.services.rooms import Outbound, SessionRouter


def _router() -> SessionRouter:
    return current_app.extensions['xo_arena']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _deliver(outbound: Iterable[Outbound]) -> None:
    """Send each message to exactly the sids it names."""
    for message in outbound:
        for sid in message.recipients:
            if message.has_payload:
                emit(message.event, message.payload, to=sid)
            else:
                emit(message.event, to=sid)


def handle_connect(auth=None):
    session = _router().connect(_get_sid())
    current_app.logger.debug(f"[connect] sid={session.sid}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    _deliver(_router().disconnect(sid))
    current_app.logger.debug(f"[disconnect] sid={sid} reason={reason}")


def handle_create_room(host_name=None):
    _deliver(_router().create_room(_get_sid(), host_name))


def handle_join_room(data=None):
    _deliver(_router().join_room(_get_sid(), data))


def handle_make_move(index=None):
    _deliver(_router().make_move(_get_sid(), index))


def handle_request_rematch(data=None):
    _deliver(_router().request_rematch(_get_sid()))


def handle_leave_room(data=None):
    _deliver(_router().leave_room(_get_sid()))


def handle_error(exc):
    # Logged and dropped; the connection and every other room keep going
    event = getattr(request, 'event', None)
    current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={event!r}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create-room', handle_create_room, namespace=namespace)
    socketio.on_event('join-room', handle_join_room, namespace=namespace)
    socketio.on_event('make-move', handle_make_move, namespace=namespace)
    socketio.on_event('request-rematch', handle_request_rematch, namespace=namespace)
    # Older clients emit play-again for the same thing
    socketio.on_event('play-again', handle_request_rematch, namespace=namespace)
    socketio.on_event('leave-room', handle_leave_room, namespace=namespace)
    socketio.on_error_default(handle_error)
