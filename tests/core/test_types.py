"""Tests for squares, pieces and moves."""

import pytest

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import Move, record_move
from rookery.core.piece import Piece
from rookery.core.types import make_square, parse_square, square_name


class TestSquares:
    def test_parse_uses_row_zero_for_rank_eight(self) -> None:
        assert parse_square("a8") == (0, 0)
        assert parse_square("h1") == (7, 7)
        assert parse_square("e2") == (6, 4)

    def test_square_name(self) -> None:
        assert square_name((6, 4)) == "e2"
        assert square_name((0, 7)) == "h8"

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "a0", "e22"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_make_square_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            make_square(8, 0)


class TestPiece:
    def test_fen_char_round_trip(self) -> None:
        for char in "PNBRQKpnbrqk":
            assert str(Piece.from_char(char)) == char

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_symbol(self) -> None:
        assert Piece(Color.BLACK, PieceType.KNIGHT).symbol == "♞"


class TestMove:
    def test_uci(self) -> None:
        move = Move(parse_square("e2"), parse_square("e4"))
        assert str(move) == "e2e4"
        assert Move.from_uci("e2e4") == move

    def test_rejects_off_board_square(self) -> None:
        with pytest.raises(ValueError):
            Move((6, 4), (6, 8))

    def test_from_uci_invalid(self) -> None:
        with pytest.raises(ValueError):
            Move.from_uci("e2e")


class TestMoveRecord:
    def test_record_describes_mover(self) -> None:
        record = record_move(Board.initial(), Move.from_uci("g1f3"))
        assert record.piece_type == PieceType.KNIGHT
        assert record.from_label == "g1"
        assert record.to_label == "f3"
        assert record.color == Color.WHITE
        assert str(record) == "white knight g1-f3"

    def test_record_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError, match="No piece on e4"):
            record_move(Board.initial(), Move.from_uci("e4e5"))
