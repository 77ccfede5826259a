"""Matchmaking domain services: FIFO pairing, sessions and relay.

Transport concerns stay behind the channel adapter so the queue, the
session state machine and the router can be exercised without a socket.
"""

from .channel import SocketIOChannel
from .coordinator import Coordinator
from .router import RelayRouter
from .session import Session, SessionMembership, SessionRegistry, SessionState
from .waiting import Matchmaker, WaitingQueue

__all__ = [
    'Coordinator',
    'Matchmaker',
    'RelayRouter',
    'Session',
    'SessionMembership',
    'SessionRegistry',
    'SessionState',
    'SocketIOChannel',
    'WaitingQueue',
]
