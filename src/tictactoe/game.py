"""Core rules for console tic-tac-toe: board, move validation and win detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Player = str  # "X" or "O"

EMPTY = " "
PLAYERS: Tuple[Player, Player] = ("X", "O")
SIZE = 3

# Scan order matters: the opponent breaks ties by taking the first line found.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"


def to_index(row: int, col: int) -> int:
    return row * SIZE + col


def to_coordinate(index: int) -> Tuple[int, int]:
    return divmod(index, SIZE)


# ---------- Board ----------


@dataclass
class Board:
    # 'X', 'O', or ' ' (space) for empty, row-major
    cells: List[str] = field(default_factory=lambda: [EMPTY] * (SIZE * SIZE))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Board":
        """Build a board from a nested 3x3 grid such as ``[["X", " ", "O"], ...]``."""
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError("Board must be a 3x3 grid")
        cells: List[str] = []
        for row in rows:
            for cell in row:
                if cell not in (EMPTY, *PLAYERS):
                    raise ValueError(f"Unknown cell symbol {cell!r}")
                cells.append(cell)
        return cls(cells=cells)

    def get(self, row: int, col: int) -> str:
        return self.cells[to_index(row, col)]

    def set(self, row: int, col: int, player: Player) -> None:
        # Occupancy is the validator's job, not the board's.
        self.cells[to_index(row, col)] = player

    def all_cells(self) -> Tuple[str, ...]:
        return tuple(self.cells)

    def rows(self) -> List[Tuple[str, ...]]:
        return [tuple(self.cells[r * SIZE : (r + 1) * SIZE]) for r in range(SIZE)]

    def empty_cells(self) -> List[Tuple[int, int]]:
        """All empty (row, col) positions in row-major order."""
        return [to_coordinate(i) for i, c in enumerate(self.cells) if c == EMPTY]

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def marked_count(self) -> int:
        return sum(1 for c in self.cells if c != EMPTY)

    def copy(self) -> "Board":
        return Board(cells=self.cells.copy())


# ---------- Move validation ----------


def invalid_reason(board: Board, row: int, col: int) -> Optional[str]:
    """Explain why a move is rejected, or ``None`` when it is legal."""
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        return f"Position ({row}, {col}) is off the board"
    if board.get(row, col) != EMPTY:
        return f"Cell ({row}, {col}) is already occupied by {board.get(row, col)}"
    return None


def is_valid(board: Board, row: int, col: int) -> bool:
    return invalid_reason(board, row, col) is None


# ---------- Win detection ----------


@dataclass(frozen=True)
class Outcome:
    winner: Optional[Player] = None
    drawn: bool = False

    @property
    def terminal(self) -> bool:
        return self.winner is not None or self.drawn

    def announcement(self) -> str:
        if self.winner is not None:
            return f"{self.winner} wins!"
        if self.drawn:
            return "It's a draw."
        raise ValueError("Game is still in progress")


IN_PROGRESS = Outcome()


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    cells = board.cells
    for a, b, c in WINNING_LINES:
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return (a, b, c)
    return None


def winner(board: Board) -> Optional[Player]:
    line = winning_line(board)
    if line is None:
        return None
    return board.cells[line[0]]


def is_draw(board: Board) -> bool:
    return winner(board) is None and board.is_full()


def outcome(board: Board) -> Outcome:
    # A completed line wins even on a full board.
    w = winner(board)
    if w is not None:
        return Outcome(winner=w)
    if board.is_full():
        return Outcome(drawn=True)
    return IN_PROGRESS


# ---------- Turn control ----------


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    player: Player


@dataclass
class TurnController:
    """Alternates X and O on a single board until someone wins or it fills up."""

    board: Board = field(default_factory=Board)
    current_player: Player = "X"

    @property
    def outcome(self) -> Outcome:
        return outcome(self.board)

    @property
    def terminal(self) -> bool:
        return self.outcome.terminal

    @property
    def state(self) -> Tuple[str, object]:
        result = self.outcome
        if result.terminal:
            return ("terminal", result)
        return ("awaiting", self.current_player)

    @property
    def turns_played(self) -> int:
        return self.board.marked_count()

    def play_move(self, row: int, col: int) -> Outcome:
        """Apply a move for the current player and return the resulting outcome.

        Raises ``ValueError`` without touching any state when the game is over
        or the coordinate fails validation.
        """
        if self.terminal:
            raise ValueError("Game already finished")
        reason = invalid_reason(self.board, row, col)
        if reason is not None:
            raise ValueError(reason)

        move = Move(row=row, col=col, player=self.current_player)
        self.board.set(move.row, move.col, move.player)
        result = self.outcome
        logger.info("%s played (%d, %d)", move.player, move.row, move.col)

        if result.terminal:
            logger.info("Game over after %d turns: %s", self.turns_played, result)
        else:
            self.current_player = other(self.current_player)
        return result
