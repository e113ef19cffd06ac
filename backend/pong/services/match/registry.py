from typing import List, Optional, Sequence, Tuple

from pong.models import PaddleSlot
from .errors import CapacityExceeded, UnknownSession


class SessionRegistry:
    """Maps live sessions to paddle slots.

    Sessions are kept in join order. Slot ``i`` is always held by the
    ``i``-th live session; anyone past the last slot is a spectator and
    moves up when a player leaves.
    """

    def __init__(self, slots: Sequence[PaddleSlot]):
        self._slots = list(slots)
        self._sessions: List[str] = []

    @property
    def sessions(self) -> List[str]:
        return list(self._sessions)

    @property
    def live_count(self) -> int:
        return len(self._sessions)

    @property
    def bound_count(self) -> int:
        return sum(1 for slot in self._slots if slot.occupied)

    def is_live(self, sid: str) -> bool:
        return sid in self._sessions

    def connect(self, sid: str) -> int:
        """Register ``sid`` and bind it to the first free slot.

        Raises CapacityExceeded when every slot is taken; the session stays
        registered as a spectator in that case.
        """
        if sid in self._sessions:
            slot = self.resolve_slot(sid)
            if slot is None:
                raise CapacityExceeded(sid)
            return slot
        self._sessions.append(sid)
        for slot in self._slots:
            if not slot.occupied:
                slot.sid = sid
                return slot.index
        raise CapacityExceeded(sid)

    def disconnect(self, sid: str) -> Tuple[Optional[int], List[int]]:
        """Drop ``sid``; return the slot it held and the slots that were rebound."""
        if sid not in self._sessions:
            raise UnknownSession(sid)
        released = self._slot_of(sid)
        self._sessions.remove(sid)
        rebound = []
        for slot in self._slots:
            wanted = self._sessions[slot.index] if slot.index < len(self._sessions) else None
            if slot.sid != wanted:
                slot.sid = wanted
                rebound.append(slot.index)
        return released, rebound

    def resolve_slot(self, sid: str) -> Optional[int]:
        """Slot held by ``sid``, or None for a spectator."""
        if sid not in self._sessions:
            raise UnknownSession(sid)
        return self._slot_of(sid)

    def _slot_of(self, sid: str) -> Optional[int]:
        for slot in self._slots:
            if slot.sid == sid:
                return slot.index
        return None
