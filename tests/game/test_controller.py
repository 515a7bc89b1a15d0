"""Tests for GameController — the orchestrator."""

import pytest

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import Move, MoveRecord
from rookery.core.rules import legal_moves
from rookery.core.types import parse_square
from rookery.engine.search import CancelCheck, Difficulty, SearchLimits, SearchResult
from rookery.game import AI_COLOR, GameController, GameMode, GamePhase, GameState


def _play(ctrl: GameController, *uci_moves: str) -> None:
    for text in uci_moves:
        ok = ctrl.submit_move(parse_square(text[:2]), parse_square(text[2:]))
        assert ok, text


class _FirstMoveEngine:
    def __init__(self) -> None:
        self.calls = 0

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits,
        last_move: Move | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del limits, is_cancelled
        self.calls += 1
        move = legal_moves(board, color, last_move)[0]
        return SearchResult(best_move=move, score=0, depth=1, nodes=1)


class TestNewGame:
    def test_defaults(self) -> None:
        ctrl = GameController()
        assert ctrl.mode == GameMode.PVP
        assert ctrl.difficulty == Difficulty.MEDIUM
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.board == Board.initial()

    def test_resets_state(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        ctrl.new_game(GameMode.AI, Difficulty.HARD)
        assert ctrl.state.move_history == []
        assert ctrl.state.last_move is None
        assert ctrl.mode == GameMode.AI
        assert ctrl.difficulty == Difficulty.HARD

    def test_custom_fen(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.board[parse_square("e4")] is not None

    def test_fen_in_ai_mode_with_black_to_move(self) -> None:
        ctrl = GameController(GameMode.AI)
        ctrl.new_game(fen="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1")
        assert ctrl.is_ai_turn
        assert ctrl.state.phase == GamePhase.THINKING

    def test_fen_already_stalemate(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert ctrl.state.status == "Stalemate!"
        assert ctrl.state.is_game_over

    def test_invalid_fen(self) -> None:
        with pytest.raises(ValueError):
            GameController().new_game(fen="KK6/8/8/8/8/8/8/8 w - - 0 1")


class TestSelect:
    def test_highlights_legal_targets(self) -> None:
        ctrl = GameController()
        targets = ctrl.select(parse_square("g1"))
        assert sorted(targets) == sorted([parse_square("f3"), parse_square("h3")])

    def test_opponent_piece_has_no_targets(self) -> None:
        ctrl = GameController()
        assert ctrl.select(parse_square("e7")) == []

    def test_nothing_on_ai_turn(self) -> None:
        ctrl = GameController(GameMode.AI, engine=_FirstMoveEngine())
        _play(ctrl, "e2e4")
        assert ctrl.select(parse_square("e7")) == []

    def test_off_board(self) -> None:
        with pytest.raises(ValueError):
            GameController().select((8, 0))


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = GameController()
        assert ctrl.submit_move(parse_square("e2"), parse_square("e4"))
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.last_move == Move.from_uci("e2e4")
        assert ctrl.state.status == ""

    def test_illegal_move_rejected(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit_move(parse_square("e2"), parse_square("e5"))
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.move_history == []

    def test_wrong_side_rejected(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit_move(parse_square("e7"), parse_square("e5"))

    def test_move_into_check_rejected(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not ctrl.submit_move(parse_square("e2"), parse_square("d3"))

    def test_off_board_destination_raises(self) -> None:
        ctrl = GameController()
        with pytest.raises(ValueError, match="out of range"):
            ctrl.submit_move((6, 4), (8, 4))
        assert ctrl.state.move_history == []

    def test_off_board_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            GameController().submit_move((-1, 4), (5, 4))

    def test_history_records(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "g8f6")
        history = ctrl.state.move_history
        assert history == [
            MoveRecord(PieceType.PAWN, "e2", "e4", Color.WHITE),
            MoveRecord(PieceType.KNIGHT, "g8", "f6", Color.BLACK),
        ]
        assert str(history[1]) == "black knight g8-f6"
        assert ctrl.state.ply_count == 2

    def test_en_passant_through_controller(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "a7a6", "e4e5", "d7d5", "e5d6")
        assert ctrl.state.board[parse_square("d5")] is None

    def test_callbacks(self) -> None:
        ctrl = GameController()
        seen: list[str] = []
        ctrl.events.on_move.append(lambda record, _state: seen.append(str(record)))
        _play(ctrl, "e2e4")
        assert seen == ["white pawn e2-e4"]


class TestStatus:
    def test_check(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "f7f6", "d1h5")
        assert ctrl.state.status == "black is in check!"
        assert not ctrl.state.is_game_over

    def test_fools_mate(self) -> None:
        ctrl = GameController()
        finished: list[GameState] = []
        ctrl.events.on_game_over.append(finished.append)

        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")

        assert ctrl.state.status == "Checkmate! black wins!"
        assert ctrl.state.winner == Color.BLACK
        assert ctrl.state.phase == GamePhase.GAME_OVER
        assert finished == [ctrl.state]

    def test_no_moves_after_game_over(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert not ctrl.submit_move(parse_square("a2"), parse_square("a3"))
        assert ctrl.select(parse_square("a2")) == []

    def test_stalemate(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="7k/8/5K2/6Q1/8/8/8/8 w - - 0 1")
        _play(ctrl, "g5g6")
        assert ctrl.state.status == "Stalemate!"
        assert ctrl.state.winner is None
        assert ctrl.state.is_game_over

    def test_check_cleared_after_reply(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "f7f6", "d1h5", "g7g6")
        assert ctrl.state.status == ""


class TestAiMode:
    def test_engine_plays_black(self) -> None:
        engine = _FirstMoveEngine()
        ctrl = GameController(GameMode.AI, Difficulty.EASY, engine=engine)
        assert not ctrl.is_ai_turn
        assert ctrl.request_ai_move() is None

        _play(ctrl, "d2d4")
        assert ctrl.is_ai_turn
        assert ctrl.state.phase == GamePhase.THINKING

        move = ctrl.request_ai_move()
        assert move is not None
        assert engine.calls == 1
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.move_history[-1].color == AI_COLOR

    def test_switching_mode_mid_game(self) -> None:
        ctrl = GameController(engine=_FirstMoveEngine())
        _play(ctrl, "d2d4")
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        ctrl.set_mode(GameMode.AI)
        assert ctrl.state.phase == GamePhase.THINKING

    def test_difficulty_setter(self) -> None:
        ctrl = GameController()
        ctrl.difficulty = Difficulty.HARD
        assert ctrl.difficulty == Difficulty.HARD


class TestWinningRate:
    def test_even_at_start(self) -> None:
        assert GameController().winning_rate() == 50.0

    def test_clamped_for_white(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="4k3/8/8/8/8/8/8/QQQQ1QQK w - - 0 1")
        assert ctrl.winning_rate() == 100.0

    def test_clamped_for_black(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="qqqq1qqk/8/8/8/8/8/8/4K3 w - - 0 1")
        assert ctrl.winning_rate() == 0.0

    def test_black_advantage(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")
        assert ctrl.winning_rate() < 50.0


class TestWinningLabel:
    def test_equal_at_start(self) -> None:
        assert GameController().winning_label() == "Equal position"

    def test_white_winning(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        assert ctrl.winning_label() == "White is winning"

    def test_black_winning(self) -> None:
        ctrl = GameController()
        ctrl.new_game(fen="rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")
        assert ctrl.winning_label() == "Black is winning"

    def test_small_edge_is_equal(self) -> None:
        # One pawn up sits inside the 48-52 band.
        ctrl = GameController()
        ctrl.new_game(fen="rnbqkbnr/pppppppp/8/8/8/8/PPPPPPP1/RNBQKBNR w Qkq - 0 1")
        assert ctrl.winning_label() == "Equal position"
