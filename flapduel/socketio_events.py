from flask import current_app, request
from flapduel import socketio


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _bind(router, event: str):
    # connect passes the auth payload and disconnect a reason; both land in data
    def _handler(data=None):
        router.dispatch(_get_sid(), event, data)
    _handler.__name__ = f"handle_{event.replace('-', '_')}"
    return _handler


def _handle_error(exc):
    current_app.logger.exception(f"[socketio-error] sid={_get_sid()} {exc}")


def register_socketio_handlers(router, namespace: str = '/') -> None:
    """Register one Socket.IO handler per inbound event the router knows."""
    for event in router.event_names:
        socketio.on_event(event, _bind(router, event), namespace=namespace)
    socketio.on_error_default(_handle_error)
