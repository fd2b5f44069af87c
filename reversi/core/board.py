"""Immutable 8x8 Reversi board and the capture rules over it."""

from enum import Enum
from typing import Iterable, List, Optional, Tuple

BOARD_SIZE = 8

# (dx, dy), scanned in this order when flipping
DIRECTIONS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]

Square = Tuple[int, int]


class Player(Enum):
    BLACK = 1
    WHITE = 2

    def opponent(self) -> "Player":
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def symbol(self) -> str:
        return "B" if self is Player.BLACK else "W"


Cell = Optional[Player]
_SYMBOLS = {".": None, "B": Player.BLACK, "W": Player.WHITE}


class Board:
    """Row-major grid of cells, indexed ``cells[y][x]``. Never mutated."""

    __slots__ = ("cells",)

    def __init__(self, cells: Iterable[Iterable[Cell]]):
        rows = tuple(tuple(row) for row in cells)
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        object.__setattr__(self, "cells", rows)

    def __setattr__(self, name, value):
        raise AttributeError("Board is immutable")

    def __reduce__(self):
        return (Board, (self.cells,))

    @classmethod
    def empty(cls) -> "Board":
        return cls([[None] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def initial(cls) -> "Board":
        """Standard opening: White on (3,3),(4,4); Black on (3,4),(4,3)."""
        rows = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        rows[3][3] = Player.WHITE
        rows[4][4] = Player.WHITE
        rows[4][3] = Player.BLACK
        rows[3][4] = Player.BLACK
        return cls(rows)

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Board":
        """Parse 8 strings of ``B``, ``W`` or ``.``; top row is y=0."""
        try:
            return cls([[_SYMBOLS[ch] for ch in row.strip().upper()] for row in rows])
        except KeyError as e:
            raise ValueError(f"Unknown cell symbol: {e.args[0]!r}") from e

    def to_rows(self) -> List[str]:
        return ["".join(c.symbol if c else "." for c in row) for row in self.cells]

    def at(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def is_full(self) -> bool:
        return all(c is not None for row in self.cells for c in row)

    def stone_count(self) -> int:
        return sum(1 for row in self.cells for c in row if c is not None)

    def __eq__(self, other):
        return isinstance(other, Board) and self.cells == other.cells

    def __hash__(self):
        return hash(self.cells)

    def __repr__(self):
        return f"Board({self.to_rows()!r})"

    def __str__(self):
        lines = ["  " + " ".join("ABCDEFGH")]
        for y, row in enumerate(self.to_rows()):
            lines.append(f"{y + 1} " + " ".join(row))
        return "\n".join(lines)


def on_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def _captures(board: Board, x: int, y: int, dx: int, dy: int, player: Player) -> List[Square]:
    """Opponent run starting next to (x, y) in one direction, if bracketed by ``player``."""
    run = []
    opp = player.opponent()
    cx, cy = x + dx, y + dy
    while on_board(cx, cy) and board.cells[cy][cx] is opp:
        run.append((cx, cy))
        cx += dx
        cy += dy
    if run and on_board(cx, cy) and board.cells[cy][cx] is player:
        return run
    return []


def is_valid_move(board: Board, x: int, y: int, player: Player) -> bool:
    if not on_board(x, y) or board.cells[y][x] is not None:
        return False
    return any(_captures(board, x, y, dx, dy, player) for dx, dy in DIRECTIONS)


def valid_moves(board: Board, player: Player) -> List[Square]:
    """Legal destinations for ``player`` in row-major order."""
    return [
        (x, y)
        for y in range(BOARD_SIZE)
        for x in range(BOARD_SIZE)
        if is_valid_move(board, x, y, player)
    ]


def has_valid_move(board: Board, player: Player) -> bool:
    return any(
        is_valid_move(board, x, y, player)
        for y in range(BOARD_SIZE)
        for x in range(BOARD_SIZE)
    )


def apply_move(board: Board, x: int, y: int, player: Player) -> Tuple[Board, List[Square]]:
    """Place a stone and flip bracketed runs. The move is not re-validated."""
    rows = [list(row) for row in board.cells]
    rows[y][x] = player
    flipped: List[Square] = []
    for dx, dy in DIRECTIONS:
        for fx, fy in _captures(board, x, y, dx, dy, player):
            rows[fy][fx] = player
            flipped.append((fx, fy))
    return Board(rows), flipped


def count_stones(board: Board, player: Player) -> int:
    return sum(1 for row in board.cells for c in row if c is player)
