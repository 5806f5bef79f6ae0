"""
Move replay and navigation over an opening's main line and its variations.

The player never trusts incremental state when switching lines: entering or
leaving a variation resets the rules engine and replays the required prefix
from the initial position.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

import chess

logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised by the rules engine when a move cannot be played."""


class ChessRules:
    """Rules-engine boundary backed by a python-chess board."""

    def __init__(self, start_fen: str = chess.STARTING_FEN):
        self.start_fen = start_fen
        self.board = chess.Board(start_fen)

    def apply_move(self, notation: str) -> chess.Move:
        """Play a SAN move. Raises IllegalMoveError if it is not legal here."""
        try:
            return self.board.push_san(notation)
        except ValueError as e:
            raise IllegalMoveError(f"{notation!r}: {e}") from e

    def undo(self):
        self.board.pop()

    def reset(self):
        self.board.set_fen(self.start_fen)

    def current_position(self) -> str:
        return self.board.fen()


@dataclass
class VariationLine:
    """A named continuation diverging from the main line (startMove is 1-based)."""
    name: str
    start_move: int
    moves: list = field(default_factory=list)
    description: Optional[str] = None

    @classmethod
    def from_any(cls, obj) -> 'VariationLine':
        """Build from a VariationLine, a web.models.Variation, or an API dict."""
        if isinstance(obj, cls):
            return obj
        if isinstance(obj, dict):
            start = obj.get('startMove', obj.get('start_move'))
            return cls(
                name=obj.get('name', ''),
                start_move=int(start),
                moves=list(obj.get('moves') or []),
                description=obj.get('description'),
            )
        return cls(
            name=obj.name,
            start_move=int(obj.start_move),
            moves=list(obj.moves or []),
            description=getattr(obj, 'description', None),
        )


def move_number(index: int) -> int:
    """Full-move number for a 0-based ply index (0 -> 1, 1 -> 1, 2 -> 2)."""
    return index // 2 + 1


def is_white_move(index: int) -> bool:
    return index % 2 == 0


class PositionPlayer:
    """
    Steps through an opening's moves on a rules engine.

    State is a cursor into the active move list (the main line or an entered
    variation). While inside a variation the main-line cursor to return to is
    kept aside.

    Illegal moves are a recoverable skip: the move is logged and not played,
    but the cursor still advances so indices stay aligned with the stored
    list. Stepping back over a skipped move leaves the board untouched.
    Skipped indices of the active list are exposed through `skipped`.
    """

    def __init__(self, main_line: Sequence[str], variations: Sequence = (),
                 rules: ChessRules = None):
        self.main_line = list(main_line)
        self.variations = [VariationLine.from_any(v) for v in variations]
        self.rules = rules if rules is not None else ChessRules()
        self.rules.reset()

        self._active = self.main_line
        self._variation: Optional[VariationLine] = None
        self._saved_cursor: Optional[int] = None
        self._cursor = 0
        self._applied: list[bool] = []  # one flag per consumed move in the active list

    @classmethod
    def from_opening(cls, opening, rules: ChessRules = None) -> 'PositionPlayer':
        """Create a player for a web.models.Opening or an opening dict."""
        if isinstance(opening, dict):
            return cls(opening.get('moves') or [], opening.get('variations') or [], rules)
        return cls(opening.moves or [], opening.variations, rules)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def active_moves(self) -> list:
        return list(self._active)

    @property
    def in_variation(self) -> bool:
        return self._variation is not None

    @property
    def active_variation(self) -> Optional[VariationLine]:
        return self._variation

    @property
    def saved_cursor(self) -> Optional[int]:
        return self._saved_cursor

    @property
    def position(self) -> str:
        return self.rules.current_position()

    @property
    def skipped(self) -> list[int]:
        return [i for i, applied in enumerate(self._applied) if not applied]

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def step_forward(self) -> bool:
        """Play the move at the cursor. Returns False at the end of the list."""
        if self._cursor >= len(self._active):
            return False
        self._applied.append(self._play(self._active[self._cursor], self._cursor))
        self._cursor += 1
        return True

    def step_backward(self) -> bool:
        """Take back the last consumed move. Returns False at the start."""
        if self._cursor == 0:
            return False
        if self._applied.pop():
            self.rules.undo()
        self._cursor -= 1
        return True

    def reset(self):
        """Back to the initial position on the main line."""
        self._active = self.main_line
        self._variation = None
        self._saved_cursor = None
        self._rebuild(0)

    def go_to(self, index: int):
        """Replay the active list from scratch up to `index` (clamped)."""
        self._rebuild(max(0, min(index, len(self._active))))

    def enter_variation(self, variation):
        """
        Switch to a variation.

        Replays the first startMove - 1 main-line moves, then makes the
        variation's moves the active list with the cursor at 0. The main-line
        cursor is remembered only when leaving the main line, so hopping from
        one variation to another still returns to the original spot.
        """
        line = VariationLine.from_any(variation)
        if self._variation is None:
            self._saved_cursor = self._cursor
        self._variation = line
        self._active = line.moves
        self._rebuild(0)
        logger.debug("Entered variation %r at main-line move %d", line.name, self._branch_length())

    def exit_variation(self) -> bool:
        """Return to the main line at the cursor held before entry."""
        if self._variation is None:
            return False
        saved = self._saved_cursor or 0
        self._variation = None
        self._saved_cursor = None
        self._active = self.main_line
        self._rebuild(saved)
        return True

    def available_variations(self) -> list[VariationLine]:
        """Variations whose branch point has already been played on the main line."""
        if self._variation is not None:
            return []
        return [v for v in self.variations if v.start_move <= self._cursor]

    def move_list(self) -> list[dict]:
        """Rows describing the active list, numbered as plies of the whole game."""
        offset = self._branch_length() if self._variation is not None else 0
        skipped = set(self.skipped)
        rows = []
        for i, san in enumerate(self._active):
            ply = offset + i
            rows.append({
                'index': i,
                'move': san,
                'number': move_number(ply),
                'white': is_white_move(ply),
                'played': i < self._cursor,
                'current': i == self._cursor - 1,
                'skipped': i in skipped,
            })
        return rows

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _branch_length(self) -> int:
        if self._variation is None:
            return 0
        return max(0, min(self._variation.start_move - 1, len(self.main_line)))

    def _rebuild(self, cursor: int):
        self.rules.reset()
        if self._variation is not None:
            self._replay(self.main_line, self._branch_length(), 'main line')
        self._applied = self._replay(self._active, cursor, self._line_name())
        self._cursor = cursor

    def _line_name(self) -> str:
        return self._variation.name if self._variation is not None else 'main line'

    def _replay(self, moves: Sequence[str], count: int, line: str) -> list[bool]:
        return [self._play(moves[i], i, line) for i in range(count)]

    def _play(self, san: str, index: int, line: str = None) -> bool:
        try:
            self.rules.apply_move(san)
            return True
        except IllegalMoveError as e:
            logger.warning("Skipping illegal move %d in %s: %s",
                           index + 1, line or self._line_name(), e)
            return False
