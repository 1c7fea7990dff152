from falling_blocks.game import GameConfig, GameSession, ManualScheduler, PieceCatalog, TetrominoType
from falling_blocks.game.pieces import ActivePiece


def fill_row(board, y, identity=1, gap=None):
    """Occupy every cell of row ``y``, optionally leaving column ``gap`` empty."""
    for x in range(board.cols):
        if x != gap:
            board.set_cell(x, y, identity)


def make_session(seed=0, scheduler=None, **config):
    return GameSession(GameConfig(random_seed=seed, **config), scheduler=scheduler)


def place_piece(session, kind, x, y):
    """Swap the falling piece for ``kind`` at ``(x, y)``."""
    session.piece = ActivePiece(TetrominoType(kind), PieceCatalog.get(kind).shape, x, y)
    return session.piece


def timed_session(seed=0):
    scheduler = ManualScheduler()
    return make_session(seed, scheduler=scheduler), scheduler
