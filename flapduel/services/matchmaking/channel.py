import logging
from typing import Any, Optional


class SocketIOChannel:
    """Adapter that lets the coordinator talk to clients through Flask-SocketIO.

    ``socketio.server`` is resolved on every call because ``init_app``
    replaces it.
    """

    def __init__(self, socketio, namespace: str = '/', logger=None):
        self.socketio = socketio
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)

    def emit(self, event: str, payload: Any = None, to: Optional[str] = None) -> None:
        args = () if payload is None else (payload,)
        # Use socketio.emit since this may be called from a background task
        self.socketio.emit(event, *args, to=to, namespace=self.namespace)

    def join(self, sid: str, room: str) -> None:
        self.socketio.server.enter_room(sid, room, namespace=self.namespace)

    def leave(self, sid: str, room: str) -> None:
        self.socketio.server.leave_room(sid, room, namespace=self.namespace)

    def schedule(self, delay: float, callback, *args):
        def _runner():
            if delay > 0:
                self.socketio.sleep(delay)
            try:
                callback(*args)
            except Exception:
                self.logger.exception(f"[timer-error] callback={getattr(callback, '__name__', callback)}")

        return self.socketio.start_background_task(_runner)
