import logging
import random
import threading
from typing import Any, Dict, List, Optional

from .room import Room

logger = logging.getLogger(__name__)

# No 0/1/O/I so codes can be read aloud and typed without confusion
CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
CODE_LENGTH = 6


def normalize_code(raw: Any) -> Optional[str]:
    """Trim and upper-case a client supplied code; None if it isn't a string."""
    if not isinstance(raw, str):
        return None
    return raw.strip().upper()


class RoomRegistry:
    """
    Process-wide table of active rooms keyed by code.

    The table lock only guards the mapping itself. Per-match state is
    guarded by each room's own lock; code that needs both always takes the
    room lock first.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()
        self._rng = rng or random.SystemRandom()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code) -> bool:
        return self.lookup(code) is not None

    def create_room(self, host_sid: str, host_name: str) -> Room:
        with self._lock:
            code = self._fresh_code()
            room = Room(code, host_sid, host_name)
            self._rooms[code] = room
        logger.info(f"[room-created] code={code} sid={host_sid}")
        return room

    def lookup(self, code: Any) -> Optional[Room]:
        code = normalize_code(code)
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code)

    def delete(self, code: Any) -> None:
        code = normalize_code(code)
        with self._lock:
            removed = self._rooms.pop(code, None) if code else None
        if removed is not None:
            logger.info(f"[room-deleted] code={code}")

    def list_rooms(self) -> List[Dict[str, Any]]:
        with self._lock:
            rooms = list(self._rooms.values())
        summaries = []
        for room in rooms:
            with room.lock:
                summaries.append(room.to_dict())
        return summaries

    def _fresh_code(self) -> str:
        # Caller holds self._lock
        while True:
            code = ''.join(self._rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
            if code not in self._rooms:
                return code
