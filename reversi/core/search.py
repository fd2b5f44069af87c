import time
from typing import Optional, Tuple

from reversi.config import CONFIG
from reversi.core.board import Board, Player, apply_move, valid_moves
from reversi.core.evaluator import Evaluator
from reversi.core.utils import log_info

INF = 1000000

# Returned when the side to move has nothing to play
NO_MOVE = (-1, -1)


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth or CONFIG.search.depth
        self.nodes = 0

    def best_move(self, board: Board, depth: Optional[int] = None,
                  player: Player = Player.BLACK) -> Tuple[int, int, int]:
        """Minimax with alpha-beta, maximising for ``player``.

        Returns ``(x, y, score)``. When ``player`` has no legal move the
        coordinate is ``NO_MOVE`` and the score is the static evaluation.
        """
        depth = self.max_depth if depth is None else depth
        self.nodes = 0
        start_time = time.time()

        score, move = self._minimax(board, depth, -INF, INF, player, player, True)
        if move is None:
            move = NO_MOVE

        log_info(depth, player, move, score, self.nodes, time.time() - start_time)
        return move[0], move[1], score

    def _minimax(self, board: Board, depth: int, alpha: int, beta: int,
                 side: Player, root: Player, maximizing: bool):
        self.nodes += 1
        moves = valid_moves(board, side) if depth > 0 else []
        if not moves:
            return self.evaluator.score(board, root), None

        best_move = None
        if maximizing:
            best_score = -INF
            for x, y in moves:
                child, _ = apply_move(board, x, y, side)
                score, _ = self._minimax(child, depth - 1, alpha, beta, side.opponent(), root, False)
                if score > best_score:
                    best_score, best_move = score, (x, y)
                alpha = max(alpha, best_score)
                if beta <= alpha:
                    break
        else:
            best_score = INF
            for x, y in moves:
                child, _ = apply_move(board, x, y, side)
                score, _ = self._minimax(child, depth - 1, alpha, beta, side.opponent(), root, True)
                if score < best_score:
                    best_score, best_move = score, (x, y)
                beta = min(beta, best_score)
                if beta <= alpha:
                    break

        return best_score, best_move
