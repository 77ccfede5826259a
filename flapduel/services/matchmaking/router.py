import logging
from typing import Any, Callable, Dict, Optional

from . import events


class RelayRouter:
    """Dispatch inbound client events by name onto the coordinator.

    A fault while handling one event is logged and swallowed here so the
    next event, and every other session, is still served.
    """

    def __init__(self, coordinator, logger=None):
        self.coordinator = coordinator
        self.logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[str, Callable[[str, Any], None]] = {
            events.CONNECT: self._on_connect,
            events.DISCONNECT: self._on_disconnect,
            events.READY: self._on_ready,
            events.DEATH: self._on_death,
        }
        for inbound in events.RELAYED:
            self._handlers[inbound] = self._relay_handler(inbound)

    @property
    def event_names(self):
        return list(self._handlers)

    def dispatch(self, sid: str, event: str, payload: Any = None) -> None:
        handler = self._handlers.get(event)
        if handler is None:
            self.logger.debug(f"[drop] sid={sid} event={event} reason=unknown event")
            return
        try:
            handler(sid, payload)
        except Exception:
            self.logger.exception(f"[dispatch-error] sid={sid} event={event}")

    def _on_connect(self, sid: str, payload: Any) -> None:
        self.logger.info(f"[connect] sid={sid}")
        self.coordinator.connect(sid)

    def _on_disconnect(self, sid: str, payload: Any) -> None:
        self.logger.info(f"[disconnect] sid={sid}")
        self.coordinator.disconnect(sid)

    def _on_ready(self, sid: str, payload: Any) -> None:
        self.coordinator.set_ready(sid)

    def _on_death(self, sid: str, payload: Any) -> None:
        data = payload if isinstance(payload, dict) else {}
        cause: Optional[str] = data.get('cause')
        if cause is not None and not isinstance(cause, str):
            cause = str(cause)
        score = data.get('score')
        if not isinstance(score, int) or isinstance(score, bool):
            score = None
        self.coordinator.report_death(sid, cause, score=score)

    def _relay_handler(self, inbound: str) -> Callable[[str, Any], None]:
        def _handler(sid: str, payload: Any) -> None:
            self.coordinator.relay(sid, inbound, payload)
        return _handler
