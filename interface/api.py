"""FastAPI REST interface for a single in-memory Reversi game."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from reversi.config import CONFIG
from reversi.core.board import Player
from reversi.core.utils import square_name
from reversi.log import setup_logging
from reversi.main import Game
from reversi.session import Control

setup_logging()

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game; searches run inline inside the request.
game = Game()
_game_lock = threading.Lock()


class MoveRequest(BaseModel):
    x: int
    y: int


class ControlRequest(BaseModel):
    player: str  # "black" | "white"
    control: Control


class DepthRequest(BaseModel):
    depth: int


def _square(sq) -> Optional[str]:
    return square_name(*sq) if sq else None


def _state() -> dict:
    counts = game.counts
    return {
        "board": game.board.to_rows(),
        "turn": game.side_to_move.label.lower(),
        "black": counts[Player.BLACK],
        "white": counts[Player.WHITE],
        "result": game.result,
        "is_game_over": game.result is not None,
        "legal_moves": [list(sq) for sq in game.valid_moves],
        "flipped": [list(sq) for sq in game.last_flipped],
        "hint": list(game.hint) if game.hint else None,
        "can_undo": game.can_undo,
        "can_redo": game.can_redo,
        "thinking": game.thinking,
        "depth": game.session.depth,
        "controls": {p.label.lower(): c.value for p, c in game.session.controls.items()},
    }


@app.get("/board")
def get_board():
    with _game_lock:
        return _state()


@app.get("/log")
def get_log():
    with _game_lock:
        return {"moves": game.move_log()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _game_lock:
        if game.result is not None:
            raise HTTPException(status_code=400, detail="Game is already over")
        if not game.play(req.x, req.y):
            raise HTTPException(status_code=400, detail=f"Illegal move: ({req.x}, {req.y})")
        return _state()


@app.post("/hint")
def request_hint():
    with _game_lock:
        if not game.request_hint():
            raise HTTPException(status_code=409, detail="No hint available")
        return {"hint": list(game.hint) if game.hint else None, "square": _square(game.hint)}


@app.delete("/hint")
def withdraw_hint():
    with _game_lock:
        game.withdraw_hint()
        return {"hint": None}


@app.post("/undo")
def undo():
    with _game_lock:
        game.undo()
        return _state()


@app.post("/redo")
def redo():
    with _game_lock:
        game.redo()
        return _state()


@app.post("/reset")
def reset_board():
    with _game_lock:
        game.reset()
        return _state()


@app.post("/control")
def set_control(req: ControlRequest):
    with _game_lock:
        try:
            player = Player[req.player.upper()]
        except KeyError:
            raise HTTPException(status_code=400, detail=f"Unknown player: {req.player}")
        game.set_control(player, req.control)
        return _state()


@app.post("/depth")
def set_depth(req: DepthRequest):
    with _game_lock:
        return {"depth": game.set_depth(req.depth)}
