from reversi.config import CONFIG
from reversi.core.board import Board, Player


class Evaluator:
    def __init__(self, weights=None):
        self.cfg = CONFIG.eval
        self.weights = weights or self.cfg.weights

    def score(self, board: Board, player: Player) -> int:
        """Positional score of ``board`` from ``player``'s point of view."""
        opp = player.opponent()
        total = 0
        for y, row in enumerate(board.cells):
            w_row = self.weights[y]
            for x, cell in enumerate(row):
                if cell is player:
                    total += w_row[x]
                elif cell is opp:
                    total -= w_row[x]
        return total
