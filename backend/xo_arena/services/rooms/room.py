import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from .board import (
    BOARD_SIZE, SYMBOL_A, SYMBOL_B, empty_board, find_winning_line, is_full, other_symbol,
)
from .errors import RoomFull, RoomNotFound
from .messages import (
    ASSIGNED_SYMBOL, GAME_START, MOVE_MADE, NEW_ROUND, NO_PAYLOAD,
    OPPONENT_DISCONNECTED, OPPONENT_WANTS_REMATCH, Outbound,
)

logger = logging.getLogger(__name__)

MAX_PLAYERS = 2


class RoomState(Enum):
    """Lifecycle state of a room."""
    WAITING = "waiting"          # One player, waiting for an opponent
    IN_PROGRESS = "in_progress"  # Two players, moves accepted
    ROUND_OVER = "round_over"    # Win or draw reached, board frozen
    CLOSED = "closed"            # Last player left, removed from the registry


@dataclass
class Player:
    sid: str
    name: str
    symbol: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'symbol': self.symbol}


class Room:
    """
    Authoritative state of one match.

    Every public operation validates, mutates and returns the list of
    messages to deliver. Callers must hold ``room.lock`` for the whole
    operation; the router does this for them.
    """

    def __init__(self, code: str, host_sid: str, host_name: str):
        self.code = code
        self.players: List[Player] = [Player(host_sid, host_name, SYMBOL_A)]
        self.board = empty_board()
        self.current_player = SYMBOL_A
        self.scores: Dict[str, int] = {SYMBOL_A: 0, SYMBOL_B: 0}
        self.round = 1
        self.rematch_votes: Set[str] = set()
        self.state = RoomState.WAITING
        self.lock = threading.RLock()

    # ---- queries ----

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def is_closed(self) -> bool:
        return self.state == RoomState.CLOSED

    def get_player(self, sid: str) -> Optional[Player]:
        for p in self.players:
            if p.sid == sid:
                return p
        return None

    def player_sids(self) -> tuple:
        return tuple(p.sid for p in self.players)

    def other_sids(self, sid: str) -> tuple:
        return tuple(p.sid for p in self.players if p.sid != sid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'state': self.state.value,
            'players': [p.to_dict() for p in self.players],
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'scores': dict(self.scores),
            'round': self.round,
        }

    # ---- operations ----

    def join(self, sid: str, name: str) -> List[Outbound]:
        if self.state == RoomState.CLOSED:
            raise RoomNotFound()
        if self.get_player(sid):
            return []
        if len(self.players) >= MAX_PLAYERS or self.state != RoomState.WAITING:
            raise RoomFull()

        symbol = other_symbol(self.players[0].symbol) if self.players else SYMBOL_A
        self.players.append(Player(sid, name, symbol))
        self.players.sort(key=lambda p: p.symbol != SYMBOL_A)
        self.state = RoomState.IN_PROGRESS
        logger.info(f"[room-join] code={self.code} sid={sid} symbol={symbol}")

        p1, p2 = self.players
        return [
            Outbound(GAME_START, {
                'p1Name': p1.name,
                'p2Name': p2.name,
                'board': list(self.board),
                'currentPlayer': self.current_player,
                'scores': dict(self.scores),
                'round': self.round,
            }, self.player_sids()),
            Outbound(ASSIGNED_SYMBOL, symbol, (sid,)),
        ]

    def make_move(self, sid: str, index: Any) -> List[Outbound]:
        if self.state != RoomState.IN_PROGRESS:
            return []
        player = self.get_player(sid)
        if not player:
            return []
        if not isinstance(index, int) or isinstance(index, bool):
            return []
        if not 0 <= index < BOARD_SIZE:
            return []
        if self.board[index] is not None:
            return []
        if player.symbol != self.current_player:
            logger.debug(f"[move-rejected] code={self.code} sid={sid} reason=not_your_turn")
            return []

        self.board[index] = player.symbol
        line = find_winning_line(self.board)
        winner = player.symbol if line else None
        draw = winner is None and is_full(self.board)

        if winner:
            self.scores[winner] += 1
            self.state = RoomState.ROUND_OVER
            logger.info(f"[round-over] code={self.code} round={self.round} winner={winner}")
        elif draw:
            self.state = RoomState.ROUND_OVER
            logger.info(f"[round-over] code={self.code} round={self.round} draw=True")
        else:
            self.current_player = other_symbol(self.current_player)

        return [Outbound(MOVE_MADE, {
            'index': index,
            'symbol': player.symbol,
            'board': list(self.board),
            'winner': winner,
            'draw': draw,
            'scores': dict(self.scores),
            'line': list(line) if line else None,
        }, self.player_sids())]

    def request_rematch(self, sid: str) -> List[Outbound]:
        if self.state != RoomState.ROUND_OVER or not self.get_player(sid):
            return []

        self.rematch_votes.add(sid)
        if len(self.players) == MAX_PLAYERS and self.rematch_votes == set(self.player_sids()):
            self._reset_board()
            self.round += 1
            self.state = RoomState.IN_PROGRESS
            logger.info(f"[new-round] code={self.code} round={self.round}")
            return [Outbound(NEW_ROUND, {
                'board': list(self.board),
                'currentPlayer': self.current_player,
                'round': self.round,
                'scores': dict(self.scores),
            }, self.player_sids())]

        return [Outbound(OPPONENT_WANTS_REMATCH, NO_PAYLOAD, self.other_sids(sid))]

    def leave(self, sid: str) -> List[Outbound]:
        if not self.get_player(sid):
            return []

        self.players = [p for p in self.players if p.sid != sid]
        self.rematch_votes.discard(sid)
        remaining = self.player_sids()

        if not remaining:
            self.state = RoomState.CLOSED
            logger.info(f"[room-closed] code={self.code}")
            return []

        # The next opponent starts a fresh board against whoever stayed
        self._reset_board()
        self.state = RoomState.WAITING
        logger.info(f"[room-leave] code={self.code} sid={sid} remaining={len(remaining)}")
        return [Outbound(OPPONENT_DISCONNECTED, NO_PAYLOAD, remaining)]

    def _reset_board(self) -> None:
        self.board = empty_board()
        self.current_player = SYMBOL_A
        self.rematch_votes.clear()
