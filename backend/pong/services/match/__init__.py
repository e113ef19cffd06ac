"""Match domain services: sessions, physics, lifecycle and broadcast timers.

This package holds the authoritative game rules. It knows nothing about
Flask or Socket.IO; socket handlers and HTTP routes only enqueue intents
and read snapshots, keeping transport concerns separated from the
simulation.
"""

from .errors import MatchError, CapacityExceeded, InvalidIntent, UnknownSession
from .settings import MatchSettings
from .lifecycle import Match, Outbound
from .scheduler import BroadcastScheduler
