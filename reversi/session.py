"""GameSession — authoritative game state with a branching move history."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from reversi.config import CONFIG
from reversi.core.board import (
    Board,
    Player,
    Square,
    apply_move,
    count_stones,
    has_valid_move,
    is_valid_move,
    valid_moves,
)
from reversi.core.utils import square_name

logger = logging.getLogger(__name__)

# 64 squares minus the four opening stones
MAX_PLACEMENTS = 60


class Control(Enum):
    HUMAN = "human"
    COMPUTER = "computer"


# ── Move record ─────────────────────────────────────────────
@dataclass(frozen=True)
class MoveRecord:
    """One entry in the history: the position after a move or pass."""

    board: Board
    next_player: Player
    move: Optional[Square] = None
    by_computer: bool = False
    mover: Optional[Player] = None
    flipped: Tuple[Square, ...] = ()

    @property
    def is_pass(self) -> bool:
        return self.mover is not None and self.move is None

    def notation(self) -> str:
        coord = square_name(*self.move) if self.move else "PASS"
        return f"{self.mover.label} {coord}"


def initial_record() -> MoveRecord:
    return MoveRecord(board=Board.initial(), next_player=Player.BLACK)


def outcome(board: Board) -> Optional[str]:
    """Result text for a finished position, None while play continues."""
    black = count_stones(board, Player.BLACK)
    white = count_stones(board, Player.WHITE)
    finished = (
        black == 0
        or white == 0
        or not (has_valid_move(board, Player.BLACK) or has_valid_move(board, Player.WHITE))
    )
    if not finished:
        return None
    if black > white:
        return "Black wins"
    if white > black:
        return "White wins"
    return "Draw"


def parse_control(value) -> Control:
    if isinstance(value, Control):
        return value
    return Control(str(value).lower())


class GameSession:
    """Mutable session: history, cursor, controls and transient UI flags."""

    def __init__(self, black: Optional[Control] = None, white: Optional[Control] = None,
                 depth: Optional[int] = None):
        self.controls: Dict[Player, Control] = {
            Player.BLACK: parse_control(black or CONFIG.session.black),
            Player.WHITE: parse_control(white or CONFIG.session.white),
        }
        self.depth = CONFIG.clamp_depth(depth or CONFIG.search.depth)
        self.history: List[MoveRecord] = [initial_record()]
        self.cursor = 0
        self.generation = 0
        self.thinking = False
        self.hint: Optional[Square] = None
        self.hint_visible = False
        self.last_score: Optional[int] = None
        self._failure: Optional[str] = None
        self._result: Optional[str] = None

    # ── Queries ─────────────────────────────────────────────

    @property
    def current(self) -> MoveRecord:
        return self.history[self.cursor]

    @property
    def board(self) -> Board:
        return self.current.board

    @property
    def side_to_move(self) -> Player:
        return self.current.next_player

    @property
    def counts(self) -> Dict[Player, int]:
        return {p: count_stones(self.board, p) for p in Player}

    @property
    def result(self) -> Optional[str]:
        return self._failure or self._result

    @property
    def is_terminal(self) -> bool:
        return self.result is not None

    @property
    def at_tail(self) -> bool:
        return self.cursor == len(self.history) - 1

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < len(self.history) - 1

    @property
    def last_flipped(self) -> List[Square]:
        return list(self.current.flipped)

    @property
    def placements(self) -> int:
        """Stones placed since the opening position (informational)."""
        return self.board.stone_count() - 4

    def valid_moves(self) -> List[Square]:
        if self.is_terminal:
            return []
        return valid_moves(self.board, self.side_to_move)

    def control_of(self, player: Player) -> Control:
        return self.controls[player]

    def is_computer_turn(self) -> bool:
        return self.controls[self.side_to_move] is Control.COMPUTER

    def all_computer(self) -> bool:
        return all(c is Control.COMPUTER for c in self.controls.values())

    def ticket(self) -> Tuple[int, int, int, Player]:
        """Identity of the visible state; a search result is applied only if this still matches.

        ``generation`` changes on reset and whenever a move drops the redo branch,
        so an equal ticket always means the same board.
        """
        return (self.generation, self.cursor, len(self.history), self.side_to_move)

    def move_log(self) -> List[str]:
        return [rec.notation() for rec in self.history[1:self.cursor + 1]]

    # ── Transitions ─────────────────────────────────────────

    def apply_human_move(self, x: int, y: int) -> bool:
        if self.is_terminal or self.is_computer_turn():
            return False
        return self._play(x, y, by_computer=False)

    def apply_computer_move(self, x: int, y: int, score: Optional[int] = None) -> bool:
        if self.is_terminal or not self.is_computer_turn():
            return False
        if not self._play(x, y, by_computer=True):
            return False
        self.last_score = score
        return True

    def pass_turn(self) -> bool:
        """Hand the turn over when the side to move is stuck but the opponent is not."""
        if self.is_terminal:
            return False
        player = self.side_to_move
        if has_valid_move(self.board, player) or not has_valid_move(self.board, player.opponent()):
            return False
        logger.info("%s passes", player.label)
        self._append(
            MoveRecord(
                board=self.board,
                next_player=player.opponent(),
                by_computer=self.controls[player] is Control.COMPUTER,
                mover=player,
            )
        )
        return True

    def _play(self, x: int, y: int, by_computer: bool) -> bool:
        player = self.side_to_move
        if not is_valid_move(self.board, x, y, player):
            return False
        board, flipped = apply_move(self.board, x, y, player)
        logger.info(
            "%s %s plays %s, flips %d",
            player.label, "engine" if by_computer else "human",
            square_name(x, y), len(flipped),
        )
        self._append(
            MoveRecord(
                board=board,
                next_player=player.opponent(),
                move=(x, y),
                by_computer=by_computer,
                mover=player,
                flipped=tuple(flipped),
            )
        )
        return True

    def _append(self, record: MoveRecord):
        # A new move from a browsed position drops the redo branch
        if not self.at_tail:
            del self.history[self.cursor + 1:]
            self.generation += 1
        self.history.append(record)
        self.cursor = len(self.history) - 1
        self._after_transition()
        if self._result:
            logger.info("Game over: %s", self._result)

    def _after_transition(self):
        self._failure = None
        self.hint = None
        self.hint_visible = False
        self._result = outcome(self.board)

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        idx = self.cursor - 1
        if not self.all_computer():
            while idx > 0 and self._computer_to_move(idx):
                idx -= 1
        self.cursor = idx
        self._after_transition()
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        idx = self.cursor + 1
        last = len(self.history) - 1
        if not self.all_computer():
            while idx < last and self._computer_to_move(idx):
                idx += 1
        self.cursor = idx
        self._after_transition()
        return True

    def _computer_to_move(self, idx: int) -> bool:
        return self.controls[self.history[idx].next_player] is Control.COMPUTER

    def reset(self):
        self.history = [initial_record()]
        self.cursor = 0
        self.generation += 1
        self.last_score = None
        self._after_transition()

    def fail(self, text: str):
        """Mark the session terminal without touching the history."""
        logger.warning("Session stopped: %s", text)
        self._failure = text

    # ── Configuration ───────────────────────────────────────

    def set_control(self, player: Player, control: Control):
        self.controls[player] = parse_control(control)

    def set_depth(self, depth: int) -> int:
        self.depth = CONFIG.clamp_depth(depth)
        return self.depth
