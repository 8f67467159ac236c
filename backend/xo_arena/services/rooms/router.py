import logging
import threading
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import RoomError, RoomFull, RoomNotFound
from .messages import ASSIGNED_SYMBOL, JOIN_ERROR, ROOM_CREATED, Outbound
from .registry import RoomRegistry, normalize_code
from .room import Room

logger = logging.getLogger(__name__)

DEFAULT_HOST_NAME = 'Player 1'
DEFAULT_GUEST_NAME = 'Player 2'
DEFAULT_NAME_MAX_LENGTH = 24


@dataclass
class Session:
    """The server's handle on one connected client."""
    sid: str
    room_code: Optional[str] = None


def clean_name(raw: Any, default: str, max_length: int = DEFAULT_NAME_MAX_LENGTH) -> str:
    if not isinstance(raw, str):
        return default
    name = raw.strip()[:max_length].strip()
    return name or default


class SessionRouter:
    """
    Resolves inbound commands to the caller's room and runs them there.

    Each command returns the list of Outbound messages produced; delivering
    them is the transport's job. Room operations always run while holding
    the room's lock.
    """

    def __init__(self, registry: Optional[RoomRegistry] = None,
                 name_max_length: int = DEFAULT_NAME_MAX_LENGTH):
        self.registry = registry if registry is not None else RoomRegistry()
        self.name_max_length = name_max_length
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    # ---- sessions ----

    def connect(self, sid: str) -> Session:
        with self._lock:
            session = self._sessions.get(sid)
            if session is None:
                session = self._sessions[sid] = Session(sid)
        return session

    def get_session(self, sid: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(sid)

    def disconnect(self, sid: str) -> List[Outbound]:
        """Leave the current room, if any, and forget the session."""
        outbound = self.leave_room(sid)
        with self._lock:
            self._sessions.pop(sid, None)
        return outbound

    @property
    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    # ---- commands ----

    def create_room(self, sid: str, host_name: Any = None) -> List[Outbound]:
        session = self.connect(sid)
        outbound = self.leave_room(sid)
        name = clean_name(host_name, DEFAULT_HOST_NAME, self.name_max_length)
        room = self.registry.create_room(sid, name)
        session.room_code = room.code
        symbol = room.players[0].symbol
        outbound.append(Outbound(ROOM_CREATED, {'code': room.code, 'symbol': symbol}, (sid,)))
        outbound.append(Outbound(ASSIGNED_SYMBOL, symbol, (sid,)))
        return outbound

    def join_room(self, sid: str, payload: Any) -> List[Outbound]:
        session = self.connect(sid)
        data = payload if isinstance(payload, dict) else {}
        code = normalize_code(data.get('code'))
        name = clean_name(data.get('playerName'), DEFAULT_GUEST_NAME, self.name_max_length)

        if code and code == session.room_code:
            return []

        room = self.registry.lookup(code)
        if room is None:
            return self._join_error(sid, code, RoomNotFound())

        old_room = self.registry.lookup(session.room_code) if session.room_code else None
        locked = sorted((r for r in (room, old_room) if r is not None), key=lambda r: r.code)

        # Both rooms stay locked from the capacity check through the join, so
        # a failed join never touches the room the caller is already in
        with ExitStack() as stack:
            for r in locked:
                stack.enter_context(r.lock)
            if room.is_closed:
                return self._join_error(sid, code, RoomNotFound())
            if len(room.players) >= 2:
                return self._join_error(sid, code, RoomFull())

            outbound = []
            if session.room_code is not None:
                session.room_code = None
                if old_room is not None:
                    outbound.extend(self._leave_locked(sid, old_room))
            try:
                outbound.extend(room.join(sid, name))
            except RoomError as exc:
                outbound.extend(self._join_error(sid, code, exc))
                return outbound
            session.room_code = room.code
        return outbound

    def make_move(self, sid: str, index: Any) -> List[Outbound]:
        room = self._current_room(sid)
        if room is None:
            return []
        with room.lock:
            return room.make_move(sid, index)

    def request_rematch(self, sid: str) -> List[Outbound]:
        room = self._current_room(sid)
        if room is None:
            return []
        with room.lock:
            return room.request_rematch(sid)

    def leave_room(self, sid: str) -> List[Outbound]:
        session = self.get_session(sid)
        if session is None or session.room_code is None:
            return []
        code, session.room_code = session.room_code, None

        room = self.registry.lookup(code)
        if room is None:
            return []
        with room.lock:
            return self._leave_locked(sid, room)

    # ---- helpers ----

    def _leave_locked(self, sid: str, room: Room) -> List[Outbound]:
        # Caller holds room.lock
        outbound = room.leave(sid)
        if room.is_empty:
            self.registry.delete(room.code)
        return outbound

    def _current_room(self, sid: str) -> Optional[Room]:
        session = self.get_session(sid)
        if session is None or session.room_code is None:
            return None
        return self.registry.lookup(session.room_code)

    def _join_error(self, sid: str, code: Optional[str], error: RoomError) -> List[Outbound]:
        logger.info(f"[join-error] code={code} sid={sid} reason={error.message!r}")
        return [Outbound(JOIN_ERROR, error.message, (sid,))]
