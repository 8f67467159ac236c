from typing import List, Optional, Tuple

SYMBOL_A = 'X'
SYMBOL_B = 'O'
SYMBOLS = (SYMBOL_A, SYMBOL_B)
BOARD_SIZE = 9

# Rows, then columns, then diagonals
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

Board = List[Optional[str]]


def empty_board() -> Board:
    return [None] * BOARD_SIZE


def other_symbol(symbol: str) -> str:
    return SYMBOL_B if symbol == SYMBOL_A else SYMBOL_A


def find_winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """Return the first line holding three equal symbols, or None."""
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def check_winner(board: Board) -> Optional[str]:
    line = find_winning_line(board)
    return board[line[0]] if line else None


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def is_draw(board: Board) -> bool:
    """A full board with no winning line."""
    return is_full(board) and find_winning_line(board) is None
