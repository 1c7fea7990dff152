from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .board import Board
from .collision import landing_y, piece_fits, try_move, try_rotate
from .events import (
    EVENT_BOARD_CHANGED,
    EVENT_DROP_INTERVAL_CHANGED,
    EVENT_LINES_CLEARED,
    EVENT_SESSION_ENDED,
    EventBus,
)
from .pieces import ActivePiece, PieceCatalog
from .rules import ScoringRules
from .timer import ManualScheduler, ScheduledTask

logger = logging.getLogger(__name__)

# Smallest board on which every catalog shape fits in every rotation
MIN_COLS = 4
MIN_ROWS = 4


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class Phase(Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    cols: int = 10
    rows: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.cols < MIN_COLS or self.rows < MIN_ROWS:
            raise ValueError(f"board must be at least {MIN_COLS}x{MIN_ROWS}, got {self.cols}x{self.rows}")
        # Non-negative so every locked cell lands on the board
        if not 0 <= self.spawn_y <= self.rows - MIN_ROWS:
            raise ValueError(f"spawn_y must be within 0..{self.rows - MIN_ROWS}, got {self.spawn_y}")


class GameSession:
    """Owns the board, the falling piece and the score of one running game.

    Renderers and input adapters hold a reference to the session, read its
    public attributes and call its commands. When a new piece cannot be
    placed the session emits ``EVENT_SESSION_ENDED`` and immediately starts
    over with an empty board.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler: Optional[ManualScheduler] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler = scheduler
        self.bus = bus or EventBus()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.cols, self.config.rows)
        self.piece: Optional[ActivePiece] = None
        self.phase = Phase.SPAWNING
        self.score = 0
        self.lines_cleared = 0
        self.pieces_spawned = 0
        self.drop_interval = self.rules.base_interval_ms
        self.game_over = False
        self.sessions_played = 0
        self.last_final_score: Optional[int] = None
        # Points earned over every session, used for per-step rewards
        self.points_total = 0
        self._fall_task: Optional[ScheduledTask] = None
        self.start_new_session()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def start_new_session(self) -> None:
        self.board.reset()
        self.score = 0
        self.lines_cleared = 0
        self.pieces_spawned = 0
        self.game_over = False
        self.drop_interval = self.rules.drop_interval_for(0)
        self.piece = None
        logger.debug("starting session %d", self.sessions_played + 1)
        self._spawn_piece()
        self._arm_fall_timer()
        self.bus.emit(EVENT_BOARD_CHANGED, reason="new_session")

    reset = start_new_session

    def stop(self) -> None:
        """Cancel the fall timer; the session then only moves on commands."""
        if self._fall_task is not None:
            self._fall_task.cancel()
            self._fall_task = None

    def _arm_fall_timer(self) -> None:
        if self.scheduler is None:
            return
        self.stop()
        self._fall_task = self.scheduler.call_every(self.drop_interval, self.tick)
        logger.debug("fall timer armed at %d ms", self.drop_interval)

    def _spawn_piece(self) -> bool:
        self.phase = Phase.SPAWNING
        entry = PieceCatalog.pick_random(self.rng)
        candidate = ActivePiece.spawn(entry, self.board.cols, self.config.spawn_y)
        if not piece_fits(self.board, candidate):
            self._end_session()
            return False
        self.piece = candidate
        self.pieces_spawned += 1
        self.phase = Phase.FALLING
        logger.debug("spawned %s at (%d, %d)", entry.kind.name, candidate.x, candidate.y)
        return True

    def _end_session(self) -> None:
        self.phase = Phase.GAME_OVER
        self.game_over = True
        self.last_final_score = self.score
        self.sessions_played += 1
        self.stop()
        logger.info("game over: score=%d lines=%d", self.score, self.lines_cleared)
        self.bus.emit(EVENT_SESSION_ENDED, score=self.score, lines=self.lines_cleared)
        self.start_new_session()

    # ------------------------------------------------------------------
    # Lock / clear
    # ------------------------------------------------------------------
    def _freeze(self) -> None:
        assert self.piece is not None
        self.phase = Phase.LOCKING
        for x, y in self.piece.cells():
            if y >= 0:
                self.board.set_cell(x, y, self.piece.identity)
        logger.debug("locked %s at (%d, %d)", self.piece.kind.name, self.piece.x, self.piece.y)
        self.piece = None

    def _clear_lines(self) -> Tuple[int, bool]:
        """Clear rows and apply score and speed. Returns (lines, interval changed)."""
        self.phase = Phase.CLEARING
        lines = self.board.clear_full_rows()
        if lines == 0:
            return 0, False
        gained = self.rules.score_for_lines(lines)
        self.score += gained
        self.points_total += gained
        self.lines_cleared += lines
        logger.info("cleared %d line(s), score=%d", lines, self.score)
        interval = self.rules.drop_interval_for(self.score)
        if interval == self.drop_interval:
            return lines, False
        self.drop_interval = interval
        logger.info("drop interval now %d ms", interval)
        self._arm_fall_timer()
        return lines, True

    def _lock_piece(self) -> int:
        self._freeze()
        lines, speed_changed = self._clear_lines()
        # Emitted only once the next piece is in play; a blocked spawn ends the session instead
        if self._spawn_piece():
            if lines:
                self.bus.emit(EVENT_LINES_CLEARED, lines=lines, score=self.score)
            if speed_changed:
                self.bus.emit(EVENT_DROP_INTERVAL_CHANGED, interval=self.drop_interval)
        return lines

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _shift(self, dx: int) -> bool:
        if self.phase is not Phase.FALLING or self.piece is None:
            return False
        moved = try_move(self.board, self.piece, dx, 0)
        if moved is None:
            return False
        self.piece = moved
        self.bus.emit(EVENT_BOARD_CHANGED, reason="move")
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def rotate(self) -> bool:
        if self.phase is not Phase.FALLING or self.piece is None:
            return False
        rotated = try_rotate(self.board, self.piece)
        if rotated is None:
            return False
        self.piece = rotated
        self.bus.emit(EVENT_BOARD_CHANGED, reason="rotate")
        return True

    def tick(self) -> bool:
        """One gravity step: fall a row, or lock when resting."""
        if self.phase is not Phase.FALLING or self.piece is None:
            return False
        moved = try_move(self.board, self.piece, 0, 1)
        if moved is not None:
            self.piece = moved
            self.bus.emit(EVENT_BOARD_CHANGED, reason="fall")
        else:
            self._lock_piece()
            self.bus.emit(EVENT_BOARD_CHANGED, reason="lock")
        return True

    soft_drop = tick

    def hard_drop(self) -> bool:
        if self.phase is not Phase.FALLING or self.piece is None:
            return False
        self.piece = self.piece.moved(0, landing_y(self.board, self.piece) - self.piece.y)
        self._lock_piece()
        self.bus.emit(EVENT_BOARD_CHANGED, reason="hard_drop")
        return True

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        sessions_before = self.sessions_played
        points_before = self.points_total

        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        obs = self.get_state()
        reward = self.points_total - points_before
        done = self.sessions_played != sessions_before
        info = {
            "score": self.score,
            "lines_cleared": self.lines_cleared,
            "drop_interval": self.drop_interval,
            "final_score": self.last_final_score if done else None,
        }
        return obs, reward, done, info

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board for observation
        state = self.board.clone_state()
        if self.piece is not None:
            for x, y in self.piece.cells():
                if self.board.is_inside(x, y):
                    # Negative marks the falling piece
                    state[y, x] = -self.piece.identity
        return state
