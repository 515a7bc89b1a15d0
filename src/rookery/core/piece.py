"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import Color, PieceType

# Lowercase FEN letter per type; White's pieces print in uppercase.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# Unicode runs K, Q, R, B, N, P for each color.
_SYMBOL_ORDER = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)
_SYMBOLS: dict[Color, str] = {Color.WHITE: "♔♕♖♗♘♙", Color.BLACK: "♚♛♜♝♞♟"}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece as it stands on a board cell."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a FEN letter, e.g. ``'N'`` is a white knight."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self.color][_SYMBOL_ORDER.index(self.piece_type)]

    def is_(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type
