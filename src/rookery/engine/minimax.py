"""Pure-Python search: minimax with alpha-beta, quiescence and iterative deepening."""

from __future__ import annotations

import logging
from time import perf_counter

from rookery.core.apply import apply_move
from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import Move
from rookery.core.rules import has_legal_move, is_check, legal_moves
from rookery.engine.evaluation import PIECE_VALUES, evaluate
from rookery.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

INF_SCORE = 1_000_000_000
MATE_SCORE = 10_000_000
_MATE_THRESHOLD = MATE_SCORE - 1_000
QUIESCENCE_DEPTH = 3

_CAPTURE_BONUS = 100_000
_PROMOTION_BONUS = 50_000


def _never_cancelled() -> bool:
    return False


class MinimaxEngine(IEngine):
    """Minimax searcher for a fixed perspective color.

    The side whose move is being chosen is always the maximizing player;
    the opponent minimizes the same score. Boards are immutable, so every
    node works on its own board and nothing is undone.
    """

    __slots__ = ("_nodes", "_deadline", "_cancel_check", "_stoppable", "_aborted")

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stoppable = False
        self._aborted = False

    @property
    def nodes(self) -> int:
        return self._nodes

    # ── Public API ───────────────────────────────────────────────────────

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits,
        last_move: Move | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Iterative deepening until the depth limit, deadline or cancellation.

        Depth 1 always runs to completion so that a legal move is returned
        whenever one exists. A deeper iteration interrupted by the deadline
        is discarded.
        """
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._reset(limits, is_cancelled)
        root_moves = legal_moves(board, color, last_move)
        if not root_moves:
            score = -MATE_SCORE if is_check(board, color) else 0
            return SearchResult(None, score, 0, self._nodes)

        ordered_root = self._order_moves(board, root_moves)
        best_score, best_move = self._search_root(board, color, ordered_root, 1)
        completed_depth = 1
        _LOGGER.debug("depth 1: %s score=%d nodes=%d", best_move, best_score, self._nodes)

        self._stoppable = True
        for depth in range(2, limits.max_depth + 1):
            if abs(best_score) >= _MATE_THRESHOLD or self._should_stop():
                break

            score, move = self._search_root(board, color, ordered_root, depth)
            if self._aborted or move is None:
                break

            best_move = move
            best_score = score
            completed_depth = depth
            _LOGGER.debug(
                "depth %d: %s score=%d nodes=%d", depth, move, score, self._nodes
            )

            # Best move first in the next iteration.
            ordered_root = [move] + [m for m in ordered_root if m != move]

        return SearchResult(best_move, best_score, completed_depth, self._nodes)

    def get_best_move_at_depth(
        self,
        board: Board,
        color: Color,
        depth: int,
        last_move: Move | None = None,
    ) -> Move | None:
        """Best move for *color* from a single fixed-depth search (no clock)."""
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._reset(SearchLimits(max_depth=depth, time_limit_ms=None), None)
        moves = legal_moves(board, color, last_move)
        if not moves:
            return None
        _score, move = self._search_root(board, color, self._order_moves(board, moves), depth)
        return move

    # ── Tree search ──────────────────────────────────────────────────────

    def _search_root(
        self,
        board: Board,
        perspective: Color,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[int, Move | None]:
        best_score = -INF_SCORE
        best_move: Move | None = None
        alpha = -INF_SCORE
        beta = INF_SCORE

        for move in root_moves:
            child = apply_move(board, move.from_sq, move.to_sq)
            score = self.minimax(child, depth - 1, alpha, beta, False, perspective, move, ply=1)
            if self._aborted:
                break
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        return best_score, best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        perspective: Color,
        last_move: Move | None,
        ply: int = 0,
    ) -> int:
        """Alpha-beta value of *board* for *perspective*.

        *maximizing* is true when *perspective* is the side to move.
        """
        if self._should_stop():
            return 0

        self._nodes += 1
        if depth <= 0:
            return self.quiescence(
                board,
                alpha,
                beta,
                maximizing,
                perspective,
                last_move,
                QUIESCENCE_DEPTH,
                ply,
            )

        side = perspective if maximizing else perspective.opposite
        moves = legal_moves(board, side, last_move)
        if not moves:
            if is_check(board, side):
                # Prefer the quickest mate and the slowest loss.
                return -(MATE_SCORE - ply) if maximizing else MATE_SCORE - ply
            return 0

        if maximizing:
            best = -INF_SCORE
            for move in self._order_moves(board, moves):
                child = apply_move(board, move.from_sq, move.to_sq)
                score = self.minimax(
                    child, depth - 1, alpha, beta, False, perspective, move, ply + 1
                )
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha or self._aborted:
                    break
            return best

        best = INF_SCORE
        for move in self._order_moves(board, moves):
            child = apply_move(board, move.from_sq, move.to_sq)
            score = self.minimax(
                child, depth - 1, alpha, beta, True, perspective, move, ply + 1
            )
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha or self._aborted:
                break
        return best

    def quiescence(
        self,
        board: Board,
        alpha: int,
        beta: int,
        maximizing: bool,
        perspective: Color,
        last_move: Move | None,
        depth: int,
        ply: int = 0,
    ) -> int:
        """Resolve pending captures before trusting the static evaluation.

        A side that is checkmated here scores as a mate, not by stand-pat.
        """
        if self._should_stop():
            return 0

        self._nodes += 1
        side = perspective if maximizing else perspective.opposite
        if is_check(board, side) and not has_legal_move(board, side, last_move):
            return -(MATE_SCORE - ply) if maximizing else MATE_SCORE - ply

        stand_pat = evaluate(board, perspective)
        if depth <= 0:
            return stand_pat

        if maximizing:
            if stand_pat >= beta:
                return beta
            alpha = max(alpha, stand_pat)
        else:
            if stand_pat <= alpha:
                return alpha
            beta = min(beta, stand_pat)

        captures = legal_moves(board, side, last_move, captures_only=True)
        for move in self._order_moves(board, captures):
            child = apply_move(board, move.from_sq, move.to_sq)
            score = self.quiescence(
                child,
                alpha,
                beta,
                not maximizing,
                perspective,
                move,
                depth - 1,
                ply + 1,
            )
            if self._aborted:
                break
            if maximizing:
                if score >= beta:
                    return beta
                alpha = max(alpha, score)
            else:
                if score <= alpha:
                    return alpha
                beta = min(beta, score)

        return alpha if maximizing else beta

    # ── Helpers ──────────────────────────────────────────────────────────

    def _reset(self, limits: SearchLimits, is_cancelled: CancelCheck | None) -> None:
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._stoppable = False
        self._aborted = False
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

    def _should_stop(self) -> bool:
        if self._aborted:
            return True
        if not self._stoppable:
            return False
        if self._cancel_check() or (
            self._deadline is not None and perf_counter() >= self._deadline
        ):
            self._aborted = True
        return self._aborted

    def _order_moves(self, board: Board, moves: list[Move]) -> list[Move]:
        """Captures first (most valuable victim, least valuable attacker), then promotions."""
        return sorted(moves, key=lambda move: self._move_order_score(board, move), reverse=True)

    def _move_order_score(self, board: Board, move: Move) -> int:
        moving_piece = board[move.from_sq]
        if moving_piece is None:
            return -INF_SCORE

        score = 0
        target = board[move.to_sq]
        is_pawn = moving_piece.piece_type == PieceType.PAWN
        if target is not None:
            score += _CAPTURE_BONUS + 10 * PIECE_VALUES[target.piece_type]
            score -= PIECE_VALUES[moving_piece.piece_type]
        elif is_pawn and move.from_sq[1] != move.to_sq[1]:
            score += _CAPTURE_BONUS + 9 * PIECE_VALUES[PieceType.PAWN]

        if is_pawn and move.to_sq[0] in (0, 7):
            score += _PROMOTION_BONUS
        return score
