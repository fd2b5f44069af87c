"""Turn orchestration: decides who moves next and runs engine searches."""

import logging
import os
from concurrent.futures import Future, ProcessPoolExecutor, wait
from typing import Optional, Tuple

from reversi.config import CONFIG
from reversi.core.board import Board, Player
from reversi.core.search import NO_MOVE, SearchEngine
from reversi.session import GameSession

logger = logging.getLogger(__name__)


# ── Engine process pool ─────────────────────────────────────
_worker_engine = None


def _init_worker(depth: int):
    """Initialize a SearchEngine in each worker process."""
    global _worker_engine
    _worker_engine = SearchEngine(depth=depth)


def _run_search(board: Board, player: Player, depth: Optional[int] = None) -> dict:
    """Run a blocking search and return best move + score. Without ``depth`` the
    worker engine's own depth is used."""
    x, y, score = _worker_engine.best_move(board, depth, player)
    return {"x": x, "y": y, "score": score}


class SearchPool:
    """ProcessPoolExecutor running searches off the owning thread."""

    def __init__(self, depth: Optional[int] = None, max_workers: Optional[int] = None):
        self.depth = depth or CONFIG.search.depth
        cores = os.cpu_count() or 2
        self.max_workers = max_workers or max(1, min(CONFIG.search.workers, cores - 1))
        self.pool: Optional[ProcessPoolExecutor] = None

    def start(self):
        self.pool = ProcessPoolExecutor(
            max_workers=self.max_workers,
            initializer=_init_worker,
            initargs=(self.depth,),
        )

    def submit(self, board: Board, player: Player, depth: Optional[int] = None) -> Optional[Future]:
        if self.pool:
            return self.pool.submit(_run_search, board, player, depth)
        return None

    def shutdown(self):
        if self.pool:
            self.pool.shutdown(wait=False, cancel_futures=True)
            self.pool = None


class TurnOrchestrator:
    """Fires computer turns and passes from the live end of the history.

    Without a pool every search runs inline. With a pool the search runs in a
    worker and its result is applied from ``poll()``, after checking that the
    session still shows the position the search was started for.
    """

    def __init__(self, session: GameSession, pool: Optional[SearchPool] = None,
                 engine: Optional[SearchEngine] = None):
        self.session = session
        self.pool = pool
        self.engine = engine or SearchEngine(depth=session.depth)
        self._future: Optional[Future] = None
        self._job: Optional[Tuple[str, tuple]] = None

    @property
    def busy(self) -> bool:
        return self._future is not None

    def step(self):
        """Advance automatic play until a human turn, a pending search or the end."""
        s = self.session
        while not (s.is_terminal or s.thinking or not s.at_tail):
            if not s.valid_moves():
                if not s.pass_turn():
                    return
                continue
            if not s.is_computer_turn():
                return
            self._start("move")

    def request_hint(self) -> bool:
        """Search the visible position for the side to move; no history change."""
        s = self.session
        if s.thinking or s.is_terminal or not s.valid_moves():
            return False
        self._start("hint")
        return True

    def withdraw_hint(self):
        self.session.hint = None
        self.session.hint_visible = False

    def _start(self, kind: str):
        s = self.session
        ticket = s.ticket()
        s.thinking = True
        if self.pool is None:
            x, y, score = self.engine.best_move(s.board, s.depth, s.side_to_move)
            self._finish(kind, ticket, {"x": x, "y": y, "score": score})
            return

        future = self.pool.submit(s.board, s.side_to_move, s.depth)
        if future is None:
            s.thinking = False
            s.fail("Engine unavailable")
            return
        self._future = future
        self._job = (kind, ticket)

    def poll(self) -> bool:
        """Consume a finished search, if any. Returns True when one was handled."""
        if not (self._future and self._future.done()):
            return False
        future, (kind, ticket) = self._future, self._job
        self._future, self._job = None, None
        try:
            res = future.result()
        except Exception as exc:
            logger.exception("Search worker failed")
            self.session.thinking = False
            self.session.fail(f"Engine error: {exc}")
            return True
        self._finish(kind, ticket, res)
        self.step()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no search is pending. False if ``timeout`` ran out first."""
        while self._future is not None:
            done, _ = wait([self._future], timeout=timeout)
            if not done:
                return False
            self.poll()
        return True

    def _finish(self, kind: str, ticket: tuple, res: dict):
        s = self.session
        s.thinking = False
        if ticket != s.ticket():
            logger.debug("Discarding stale %s result %s", kind, res)
            return

        move = (res["x"], res["y"])
        if kind == "hint":
            if move != NO_MOVE:
                s.hint = move
                s.hint_visible = True
            return

        if move == NO_MOVE:
            s.fail("No move found")
            return
        if not s.apply_computer_move(move[0], move[1], res["score"]):
            logger.debug("Engine move %s no longer applies", move)
