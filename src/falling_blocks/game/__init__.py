"""Game module for Falling Blocks.

Exports the simulation core and supporting classes:
- Board: Settled-block grid and line clearing
- PieceCatalog / ActivePiece: The seven shapes and the falling piece
- is_valid_placement / rotate_clockwise: Collision and rotation rules
- ScoringRules: Points per line and the drop-speed curve
- ManualScheduler: Cancellable repeating fall timer
- EventBus: Board-changed and session-ended notifications
- GameSession: Spawn, fall, lock, clear and restart state machine
"""

from .board import Board, OutOfRangeError
from .pieces import ActivePiece, CatalogEntry, PieceCatalog, TetrominoType, rotate_clockwise
from .collision import is_valid_placement, try_rotate
from .rules import ScoringRules
from .timer import ManualScheduler, ScheduledTask
from .events import (
    EVENT_BOARD_CHANGED,
    EVENT_DROP_INTERVAL_CHANGED,
    EVENT_LINES_CLEARED,
    EVENT_SESSION_ENDED,
    EventBus,
)
from .core import Action, GameConfig, GameSession, Phase

__all__ = [
    "Board",
    "OutOfRangeError",
    "ActivePiece",
    "CatalogEntry",
    "PieceCatalog",
    "TetrominoType",
    "rotate_clockwise",
    "is_valid_placement",
    "try_rotate",
    "ScoringRules",
    "ManualScheduler",
    "ScheduledTask",
    "EventBus",
    "EVENT_BOARD_CHANGED",
    "EVENT_DROP_INTERVAL_CHANGED",
    "EVENT_LINES_CLEARED",
    "EVENT_SESSION_ENDED",
    "Action",
    "GameConfig",
    "GameSession",
    "Phase",
]
