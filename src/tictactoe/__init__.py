"""Console tic-tac-toe package exposing game rules, the heuristic opponent, and the text UI."""

from .ai import HeuristicOpponent, choose_move
from .game import Board, Outcome, TurnController, is_draw, is_valid, winner
from .ui import GameSession, GameSettings

__all__ = [
    "Board",
    "GameSession",
    "GameSettings",
    "HeuristicOpponent",
    "Outcome",
    "TurnController",
    "choose_move",
    "is_draw",
    "is_valid",
    "winner",
]
