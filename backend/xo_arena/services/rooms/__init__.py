"""Room domain services: board rules, rooms, the registry and the router.

This package holds the authoritative match logic. Nothing in here talks to
Socket.IO or Flask; every operation returns the messages it wants delivered
and the transport layer does the sending.
"""

from .errors import RoomError, RoomFull, RoomNotFound
from .messages import Outbound
from .registry import RoomRegistry
from .room import Room, RoomState
from .router import Session, SessionRouter

__all__ = [
    "Outbound",
    "Room",
    "RoomError",
    "RoomFull",
    "RoomNotFound",
    "RoomRegistry",
    "RoomState",
    "Session",
    "SessionRouter",
]
