"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import ALL_SQUARES, Square, require_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    return sq[0] * 8 + sq[1]


class Board:
    """Immutable 64-square board plus castling rights.

    Every transformation returns a new ``Board``; instances can be shared
    freely between search branches.
    """

    __slots__ = ("_squares", "_castling", "_hash")

    def __init__(
        self,
        squares: Iterable[Piece | None] | None = None,
        castling: CastlingRights = CastlingRights.NONE,
    ) -> None:
        cells = tuple(squares) if squares is not None else (None,) * 64
        if len(cells) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(cells)}")
        self._squares: tuple[Piece | None, ...] = cells
        self._castling = CastlingRights(castling)
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(require_square(sq))]

    def piece_at(self, row: int, col: int) -> Piece | None:
        """Unchecked lookup for hot loops; callers guarantee the range."""
        return self._squares[row * 8 + col]

    @property
    def castling(self) -> CastlingRights:
        return self._castling

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, row-major."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied() if piece == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is missing."""
        target = Piece(color, PieceType.KING)
        try:
            idx = self._squares.index(target)
        except ValueError:
            return None
        return ALL_SQUARES[idx]

    def validate(self) -> None:
        """Raise ``ValueError`` if the placement is not a reachable one."""
        for color in Color:
            kings = self.pieces(color, PieceType.KING)
            if len(kings) > 1:
                raise ValueError(f"More than one {color} king on board")
            if len(self.all_pieces(color)) > 16:
                raise ValueError(f"More than 16 {color} pieces on board")
        for sq, piece in self.occupied():
            if piece.piece_type == PieceType.PAWN and sq[0] in (0, 7):
                raise ValueError(f"Pawn on back rank at {sq}")

    # -- Derivation ---------------------------------------------------------

    def replace(
        self,
        changes: Mapping[Square, Piece | None],
        castling: CastlingRights | None = None,
    ) -> Board:
        """New board with *changes* applied; ``self`` is left untouched."""
        cells = list(self._squares)
        for sq, piece in changes.items():
            cells[_index(require_square(sq))] = piece
        return Board(cells, self._castling if castling is None else castling)

    def with_castling(self, castling: CastlingRights) -> Board:
        return Board(self._squares, castling)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        cells: list[Piece | None] = [None] * 64
        for col, pt in enumerate(_BACK_RANK):
            cells[_index((0, col))] = Piece(Color.BLACK, pt)
            cells[_index((1, col))] = Piece(Color.BLACK, PieceType.PAWN)
            cells[_index((6, col))] = Piece(Color.WHITE, PieceType.PAWN)
            cells[_index((7, col))] = Piece(Color.WHITE, pt)
        return cls(cells, CastlingRights.ALL)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares and self._castling == other._castling

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self._squares, int(self._castling)))
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[row * 8 + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
