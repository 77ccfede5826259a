import enum
import secrets
import time
from dataclasses import dataclass
from typing import Dict, Iterator, Optional


class SessionState(enum.Enum):
    FORMING = 'forming'
    STARTED = 'started'
    OVER = 'over'


@dataclass
class PlayerSlot:
    sid: str
    ready: bool = False
    alive: bool = True
    score: int = 0

    def to_dict(self):
        return {
            'sid': self.sid,
            'ready': self.ready,
            'alive': self.alive,
            'score': self.score,
        }


@dataclass(frozen=True)
class SessionMembership:
    """Which session a connection belongs to, and as which player."""

    session_id: str
    player_number: int


def new_session_id() -> str:
    return secrets.token_hex(8)


def opponent_of(player_number: int) -> int:
    return 2 if player_number == 1 else 1


class Session:
    """One two-player match.

    Holds no transport state: the coordinator reads the return values of
    ``set_ready`` and ``handle_death`` to decide what to announce.
    """

    def __init__(self, session_id: str, first_sid: str, second_sid: str, seed: int):
        if first_sid == second_sid:
            raise ValueError('a connection cannot be matched with itself')
        self.id = session_id
        self.players: Dict[int, PlayerSlot] = {
            1: PlayerSlot(sid=first_sid),
            2: PlayerSlot(sid=second_sid),
        }
        self.state = SessionState.FORMING
        self.seed = seed
        self.start_time: Optional[float] = None
        self.winner: Optional[int] = None
        self.loser: Optional[int] = None
        self.cause: Optional[str] = None

    @property
    def room(self) -> str:
        return f"session:{self.id}"

    @property
    def is_over(self) -> bool:
        return self.state is SessionState.OVER

    def sids(self) -> Iterator[str]:
        for number in (1, 2):
            yield self.players[number].sid

    def opponent_sid(self, player_number: int) -> str:
        return self.players[opponent_of(player_number)].sid

    def set_ready(self, player_number: int) -> bool:
        """Mark a player ready. Returns True only on the transition to STARTED."""
        if self.state is not SessionState.FORMING or player_number not in self.players:
            return False
        self.players[player_number].ready = True
        if all(slot.ready for slot in self.players.values()):
            self.state = SessionState.STARTED
            self.start_time = time.time()
            return True
        return False

    def handle_death(self, player_number: int, cause: Optional[str], score: Optional[int] = None) -> bool:
        """Resolve the match against ``player_number``.

        Only the first report while STARTED counts; returns False for every
        report that does not end the session.
        """
        if self.state is not SessionState.STARTED or player_number not in self.players:
            return False
        slot = self.players[player_number]
        slot.alive = False
        if score is not None:
            slot.score = score
        self.state = SessionState.OVER
        self.winner = opponent_of(player_number)
        self.loser = player_number
        self.cause = cause
        return True

    def result(self):
        return {'winner': self.winner, 'loser': self.loser, 'cause': self.cause}

    def to_dict(self):
        return {
            'id': self.id,
            'state': self.state.value,
            'seed': self.seed,
            'start_time': self.start_time,
            'winner': self.winner,
            'players': {str(n): slot.to_dict() for n, slot in self.players.items()},
        }


class SessionRegistry:
    """Live sessions by id."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def add(self, session: Session) -> None:
        if session.id in self._sessions:
            raise KeyError(f"session {session.id} already registered")
        self._sessions[session.id] = session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Optional[Session]:
        return self._sessions.pop(session_id, None)

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))
