import logging

from reversi.core.board import BOARD_SIZE

logger = logging.getLogger("reversi.search")

COLUMNS = "ABCDEFGH"


def square_name(x: int, y: int) -> str:
    """(2, 3) -> 'C4'."""
    return f"{COLUMNS[x]}{y + 1}"


def parse_square(text: str):
    """'c4' -> (2, 3); None when the text is not a board square."""
    text = text.strip().upper()
    if len(text) != 2 or text[0] not in COLUMNS or not text[1].isdigit():
        return None
    x, y = COLUMNS.index(text[0]), int(text[1]) - 1
    if not 0 <= y < BOARD_SIZE:
        return None
    return x, y


def log_info(depth, player, move, score, nodes, elapsed):
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    move_str = square_name(*move) if move[0] >= 0 else "none"
    logger.debug(
        "info depth %d side %s score %d nodes %d nps %d time %d best %s",
        depth, player.label, score, nodes, nps, int(elapsed * 1000), move_str,
    )
