"""Greedy one-ply opponent: win if possible, otherwise block, otherwise first free cell."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .game import EMPTY, WINNING_LINES, Board, Player, other, to_coordinate

logger = logging.getLogger(__name__)


def _completing_cell(cells: List[str], player: Player) -> Optional[int]:
    """Empty cell of the first line holding two ``player`` marks and one gap."""
    for line in WINNING_LINES:
        trio = [cells[i] for i in line]
        if trio.count(player) == 2 and trio.count(EMPTY) == 1:
            return line[trio.index(EMPTY)]
    return None


def choose_move(
    board: Board, self_marker: Player, opponent_marker: Player
) -> Tuple[int, int]:
    """Pick a move for ``self_marker``.

    Priority is fixed: complete an own line, then block ``opponent_marker``,
    then take the first empty cell in row-major order. Lines are scanned
    rows, columns, down-diagonal, up-diagonal and the first hit wins.
    """
    return _choose(board, self_marker, opponent_marker)[0]


def _choose(
    board: Board, self_marker: Player, opponent_marker: Player
) -> Tuple[Tuple[int, int], str]:
    cells = board.cells

    idx = _completing_cell(cells, self_marker)
    if idx is not None:
        return to_coordinate(idx), "win"

    idx = _completing_cell(cells, opponent_marker)
    if idx is not None:
        return to_coordinate(idx), "block"

    empty = board.empty_cells()
    if not empty:
        raise RuntimeError("No valid moves available")
    return empty[0], "first empty"


@dataclass
class HeuristicOpponent:
    """Computer player. Holds nothing but its marker between turns."""

    player: Player = "O"

    @property
    def opponent(self) -> Player:
        return other(self.player)

    def choose(self, board: Board) -> Tuple[int, int]:
        move, rule = _choose(board, self.player, self.opponent)
        logger.debug("%s chose %s by rule %r", self.player, move, rule)
        return move
