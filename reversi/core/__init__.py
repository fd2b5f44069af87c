"""Core engine components: board rules, evaluator and search."""

from .board import Board, Player, apply_move, count_stones, valid_moves
from .evaluator import Evaluator
from .search import SearchEngine, NO_MOVE
