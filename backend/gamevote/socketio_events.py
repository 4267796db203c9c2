from flask import current_app
from flask_socketio import emit, join_room, leave_room

from gamevote import socketio
from gamevote.exceptions import StorageError
from gamevote.services.statistics import global_statistics

NAMESPACE = '/ws'
STATISTICS_ROOM = 'statistics'


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_subscribe_statistics(data=None):
    join_room(STATISTICS_ROOM)
    try:
        emit('statistics', global_statistics())
    except StorageError as exc:
        emit('error', {'message': exc.message})


def handle_unsubscribe_statistics(data=None):
    leave_room(STATISTICS_ROOM)
    emit('unsubscribed', {'room': STATISTICS_ROOM})


def handle_ping(data=None):
    emit('pong', data or {})


def broadcast_statistics() -> None:
    """Push the current statistics to every subscribed client."""
    try:
        stats = global_statistics()
    except StorageError as exc:
        # The vote itself is committed; subscribers catch up on their next read
        current_app.logger.warning(f"[stats-broadcast] skipped: {exc}")
        return
    socketio.emit('statistics_update', stats, to=STATISTICS_ROOM, namespace=NAMESPACE)


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('subscribe_statistics', handle_subscribe_statistics, namespace=NAMESPACE)
    socketio.on_event('unsubscribe_statistics', handle_unsubscribe_statistics, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
