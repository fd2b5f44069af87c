from typing import Dict, List, Optional

from reversi.core.board import Board, Player, Square
from reversi.orchestrator import SearchPool, TurnOrchestrator
from reversi.session import Control, GameSession


class Game:
    """Query and command surface used by the CLI and the REST API."""

    def __init__(self, black: Optional[Control] = None, white: Optional[Control] = None,
                 depth: Optional[int] = None, pool: Optional[SearchPool] = None):
        self.session = GameSession(black=black, white=white, depth=depth)
        self.turns = TurnOrchestrator(self.session, pool=pool)
        self.turns.step()

    # ── Queries ─────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.session.board

    @property
    def side_to_move(self) -> Player:
        return self.session.side_to_move

    @property
    def counts(self) -> Dict[Player, int]:
        return self.session.counts

    @property
    def result(self) -> Optional[str]:
        return self.session.result

    @property
    def valid_moves(self) -> List[Square]:
        return self.session.valid_moves()

    @property
    def last_flipped(self) -> List[Square]:
        return self.session.last_flipped

    @property
    def hint(self) -> Optional[Square]:
        return self.session.hint if self.session.hint_visible else None

    @property
    def can_undo(self) -> bool:
        return self.session.can_undo

    @property
    def can_redo(self) -> bool:
        return self.session.can_redo

    @property
    def thinking(self) -> bool:
        return self.session.thinking

    def move_log(self) -> List[str]:
        return self.session.move_log()

    # ── Commands ────────────────────────────────────────────

    def play(self, x: int, y: int) -> bool:
        ok = self.session.apply_human_move(x, y)
        if ok:
            self.turns.step()
        return ok

    def request_hint(self) -> bool:
        return self.turns.request_hint()

    def withdraw_hint(self):
        self.turns.withdraw_hint()

    def undo(self) -> bool:
        ok = self.session.undo()
        self.turns.step()
        return ok

    def redo(self) -> bool:
        ok = self.session.redo()
        self.turns.step()
        return ok

    def reset(self):
        self.session.reset()
        self.turns.step()

    def set_control(self, player: Player, control: Control):
        self.session.set_control(player, control)
        self.turns.step()

    def set_depth(self, depth: int) -> int:
        return self.session.set_depth(depth)

    def poll(self) -> bool:
        return self.turns.poll()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.turns.wait(timeout)
