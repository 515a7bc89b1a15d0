"""Move and move-history value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType
from rookery.core.types import Square, parse_square, require_square, square_name

if TYPE_CHECKING:
    from rookery.core.board import Board


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable (from, to) pair.

    Whether a move is legal depends on the board, the side to move and the
    previous move, never on the Move itself.
    """

    from_sq: Square
    to_sq: Square

    def __post_init__(self) -> None:
        require_square(self.from_sq)
        require_square(self.to_sq)

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def uci(self) -> str:
        """Long-algebraic notation, e.g. 'e2e4'."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse 'e2e4'-style text."""
        if len(text) != 4:
            raise ValueError(f"Invalid move text: {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:]))


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history shown to the player."""

    piece_type: PieceType
    from_label: str
    to_label: str
    color: Color

    def __str__(self) -> str:
        return f"{self.color} {self.piece_type.name.lower()} {self.from_label}-{self.to_label}"


def record_move(board: Board, move: Move) -> MoveRecord:
    """Describe *move* as played on *board* (the position before the move)."""
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")
    return MoveRecord(
        piece_type=piece.piece_type,
        from_label=square_name(move.from_sq),
        to_label=square_name(move.to_sq),
        color=piece.color,
    )
