import logging
import random
import threading
import time
from typing import Any, Dict, List, Optional, Tuple

from . import events
from .session import Session, SessionMembership, SessionRegistry, new_session_id
from .waiting import Matchmaker


def tag_payload(payload: Any, player_number: int) -> Dict[str, Any]:
    """Copy a relayed payload and stamp the sender's player number on it."""
    if payload is None:
        body: Dict[str, Any] = {}
    elif isinstance(payload, dict):
        body = dict(payload)
    else:
        body = {'data': payload}
    # Stamped last so a client-supplied playerNumber never survives the relay
    body['playerNumber'] = player_number
    return body


class Coordinator:
    """Owns the waiting queue, live sessions and connection memberships.

    Every public method takes the same re-entrant lock, so handlers running
    on different Socket.IO worker threads and grace-delay timers observe one
    serialized stream of mutations.
    """

    def __init__(self, channel, grace_sec: float = 5.0, seed_max: int = 1000000,
                 rng: Optional[random.Random] = None, clock=time.monotonic, logger=None):
        self.channel = channel
        self.grace_sec = grace_sec
        self.seed_max = seed_max
        self.matchmaker = Matchmaker()
        self.registry = SessionRegistry()
        self._memberships: Dict[str, SessionMembership] = {}
        self._cleanup_deadlines: Dict[str, float] = {}
        self._rng = rng or random.Random()
        self._clock = clock
        self._lock = threading.RLock()
        self.logger = logger or logging.getLogger(__name__)

    # ---- lookups ----

    def membership(self, sid: str) -> Optional[SessionMembership]:
        with self._lock:
            return self._memberships.get(sid)

    def lookup(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self.registry.get(session_id)

    def is_waiting(self, sid: str) -> bool:
        with self._lock:
            return sid in self.matchmaker.queue

    def _context(self, sid: str) -> Tuple[Optional[SessionMembership], Optional[Session]]:
        membership = self._memberships.get(sid)
        if membership is None:
            return None, None
        return membership, self.registry.get(membership.session_id)

    def _drop(self, sid: str, event: str, reason: str) -> None:
        self.logger.debug(f"[drop] sid={sid} event={event} reason={reason}")

    # ---- matchmaking ----

    def connect(self, sid: str) -> List[Session]:
        with self._lock:
            self.enqueue(sid)
            return self.try_match()

    def enqueue(self, sid: str) -> bool:
        with self._lock:
            if sid in self._memberships:
                self._drop(sid, events.CONNECT, 'already in a session')
                return False
            if not self.matchmaker.enqueue(sid):
                return False
            self.channel.emit(events.SEARCHING, to=sid)
            self.logger.info(f"[queue] sid={sid} waiting={len(self.matchmaker.queue)}")
            return True

    def try_match(self) -> List[Session]:
        created = []
        with self._lock:
            for first, second in self.matchmaker.pairs():
                created.append(self._create_session(first, second))
        return created

    def _create_session(self, first: str, second: str) -> Session:
        session_id = new_session_id()
        while session_id in self.registry:
            session_id = new_session_id()
        session = Session(session_id, first, second, seed=self._rng.randrange(self.seed_max))
        self.registry.add(session)
        for number, slot in session.players.items():
            self._memberships[slot.sid] = SessionMembership(session.id, number)
            self.channel.join(slot.sid, session.room)
        self.logger.info(f"[match] session={session.id} p1={first} p2={second} seed={session.seed}")
        for number, slot in session.players.items():
            self.channel.emit(events.MATCHED, {'sessionId': session.id, 'playerNumber': number}, to=slot.sid)
        return session

    # ---- session lifecycle ----

    def set_ready(self, sid: str) -> bool:
        with self._lock:
            membership, session = self._context(sid)
            if session is None:
                self._drop(sid, events.READY, 'no session')
                return False
            if not session.set_ready(membership.player_number):
                return False
            # The shared broadcast never carries a player number
            self.channel.emit(events.STARTED, {'seed': session.seed}, to=session.room)
            for number, slot in session.players.items():
                self.channel.emit(events.PLAYER_ASSIGNMENT, {'playerNumber': number}, to=slot.sid)
            self.logger.info(f"[start] session={session.id} seed={session.seed}")
            return True

    def relay(self, sid: str, event: str, payload: Any = None) -> bool:
        with self._lock:
            outbound = events.RELAYED.get(event)
            if outbound is None:
                raise ValueError(f"{event!r} is not a relayed event")
            membership, session = self._context(sid)
            if session is None:
                self._drop(sid, event, 'no session')
                return False
            if session.is_over:
                self._drop(sid, event, 'session over')
                return False
            target = session.opponent_sid(membership.player_number)
            self.channel.emit(outbound, tag_payload(payload, membership.player_number), to=target)
            return True

    def report_death(self, sid: str, cause: Optional[str], score: Optional[int] = None) -> bool:
        with self._lock:
            membership, session = self._context(sid)
            if session is None:
                self._drop(sid, events.DEATH, 'no session')
                return False
            if not session.handle_death(membership.player_number, cause, score=score):
                self.logger.debug(
                    f"[death-ignored] session={session.id} player={membership.player_number} state={session.state.value}"
                )
                return False
            self.channel.emit(events.GAME_OVER, session.result(), to=session.room)
            self.logger.info(
                f"[game-over] session={session.id} winner={session.winner} loser={session.loser} cause={cause}"
            )
            self._schedule_cleanup(session.id)
            return True

    def _schedule_cleanup(self, session_id: str) -> None:
        deadline = self._clock() + self.grace_sec
        self._cleanup_deadlines[session_id] = deadline
        self.logger.info(f"[cleanup-set] session={session_id} delay={self.grace_sec}s")
        self.channel.schedule(self.grace_sec, self._cleanup_when_due, session_id, deadline)

    def _cleanup_when_due(self, session_id: str, deadline: float) -> None:
        with self._lock:
            if self._cleanup_deadlines.get(session_id) != deadline:
                self.logger.debug(f"[cleanup-skip] session={session_id} already removed")
                return
            self.cleanup(session_id)

    def cleanup(self, session_id: str) -> bool:
        """Detach both players and forget the session. Safe to call repeatedly."""
        with self._lock:
            self._cleanup_deadlines.pop(session_id, None)
            session = self.registry.remove(session_id)
            if session is None:
                return False
            for number, slot in session.players.items():
                self.channel.leave(slot.sid, session.room)
                if self._memberships.get(slot.sid) == SessionMembership(session.id, number):
                    del self._memberships[slot.sid]
            self.logger.info(f"[cleanup] session={session.id} state={session.state.value}")
            return True

    def disconnect(self, sid: str) -> None:
        with self._lock:
            if self.matchmaker.remove(sid):
                self.logger.info(f"[disconnect] sid={sid} left queue")
            membership, session = self._context(sid)
            if membership is None:
                return
            if session is None:
                del self._memberships[sid]
                return
            if session.is_over:
                # The grace timer still owns this session
                return
            self.channel.emit(events.OPPONENT_DISCONNECTED, to=session.opponent_sid(membership.player_number))
            self.logger.info(
                f"[disconnect] session={session.id} player={membership.player_number} state={session.state.value}"
            )
            self.cleanup(session.id)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'waiting': len(self.matchmaker.queue),
                'sessions': [session.to_dict() for session in self.registry],
            }
