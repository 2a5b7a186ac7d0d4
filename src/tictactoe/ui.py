"""Text console front end: settings, coordinate parsing, rendering and the play loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import HeuristicOpponent
from .game import SIZE, Board, Outcome, TurnController

logger = logging.getLogger(__name__)


COLUMN_LETTERS: Tuple[str, ...] = ("A", "B", "C")
LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ENV_AI = "TICTACTOE_AI"
ENV_LOG_LEVEL = "TICTACTOE_LOG_LEVEL"

TURN_PROMPT = (
    "{player} it's your turn! Pick your space using the grid system, "
    "letter first (e.g. A1, A2, etc.)."
)
INVALID_MOVE = "{text} is not a valid move, please try again! The space must be empty."


class GameSettings(BaseModel):
    """Everything the entry point lets a player configure."""

    model_config = ConfigDict(frozen=True)

    ai_opponent: bool = Field(
        default=False,
        description="Let the heuristic opponent play O",
    )
    log_level: str = Field(default="WARNING", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def ensure_known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(
                f"Unsupported log level {value!r}. "
                f"Choose one of {', '.join(LOG_LEVELS)}."
            )
        return normalized

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "GameSettings":
        values: Dict[str, str] = {}
        if environ.get(ENV_AI, "").strip():
            values["ai_opponent"] = environ[ENV_AI].strip()
        if environ.get(ENV_LOG_LEVEL, "").strip():
            values["log_level"] = environ[ENV_LOG_LEVEL]
        return cls.model_validate(values)


# ---------- Coordinates ----------


def parse_coordinate(text: str) -> Tuple[int, int]:
    """Map input like ``"b3"`` to ``(row, col)``.

    Never raises: anything unrecognised becomes ``-1`` so the move validator
    turns it away like any other off-board coordinate.
    """
    move = text.strip().upper()
    if len(move) != 2:
        return -1, -1
    letter, digit = move[0], move[1]
    col = COLUMN_LETTERS.index(letter) if letter in COLUMN_LETTERS else -1
    row = int(digit) - 1 if digit in "123" else -1
    return row, col


def format_coordinate(row: int, col: int) -> str:
    return f"{COLUMN_LETTERS[col]}{row + 1}"


def render_board(board: Board) -> str:
    separator = "  +" + "---+" * SIZE
    lines: List[str] = ["    " + "   ".join(COLUMN_LETTERS), separator]
    for number, row in enumerate(board.rows(), start=1):
        lines.append(f"{number} | " + " | ".join(row) + " |")
        lines.append(separator)
    return "\n".join(lines)


# ---------- Session ----------


@dataclass
class GameSession:
    """A single console game and, optionally, its computer opponent."""

    controller: TurnController = field(default_factory=TurnController)
    ai: Optional[HeuristicOpponent] = None
    read_line: Callable[[str], str] = field(default=input, repr=False)
    write: Callable[[str], None] = field(default=print, repr=False)

    @classmethod
    def from_settings(cls, settings: GameSettings, **io) -> "GameSession":
        ai = HeuristicOpponent(player="O") if settings.ai_opponent else None
        return cls(ai=ai, **io)

    def is_computer_turn(self) -> bool:
        return self.ai is not None and self.controller.current_player == self.ai.player

    def run(self) -> Outcome:
        controller = self.controller
        self.write(render_board(controller.board))

        while not controller.terminal:
            player = controller.current_player
            self.write(TURN_PROMPT.format(player=player))
            if self.is_computer_turn():
                row, col = self.ai.choose(controller.board)
                controller.play_move(row, col)
                self.write(f"{player} plays {format_coordinate(row, col)}.")
            else:
                self._play_human_move()
            self.write(render_board(controller.board))

        result = controller.outcome
        self.write(result.announcement())
        return result

    def _play_human_move(self) -> None:
        while True:
            text = self.read_line("> ")
            try:
                self.controller.play_move(*parse_coordinate(text))
            except ValueError as exc:
                logger.debug("Rejected input %r: %s", text, exc)
                self.write(INVALID_MOVE.format(text=text.strip()))
                continue
            return
