from dataclasses import dataclass
from typing import Any, Tuple

ROOM_CREATED = 'room-created'
ASSIGNED_SYMBOL = 'assigned-symbol'
GAME_START = 'game-start'
JOIN_ERROR = 'join-error'
MOVE_MADE = 'move-made'
OPPONENT_WANTS_REMATCH = 'opponent-wants-rematch'
NEW_ROUND = 'new-round'
OPPONENT_DISCONNECTED = 'opponent-disconnected'

# Sentinel for events that carry no payload at all
NO_PAYLOAD = object()


@dataclass(frozen=True)
class Outbound:
    """One message to deliver: event name, payload and the sids that get it."""
    event: str
    payload: Any
    recipients: Tuple[str, ...]

    @property
    def has_payload(self) -> bool:
        return self.payload is not NO_PAYLOAD
