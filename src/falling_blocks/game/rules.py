from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 100
    base_interval_ms: int = 1000
    min_interval_ms: int = 100
    speedup_step_ms: int = 100
    points_per_level: int = 500

    def __post_init__(self) -> None:
        if self.min_interval_ms <= 0 or self.base_interval_ms < self.min_interval_ms:
            raise ValueError("intervals must satisfy 0 < min_interval_ms <= base_interval_ms")
        if self.points_per_level <= 0:
            raise ValueError("points_per_level must be positive")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line

    def drop_interval_for(self, score: int) -> int:
        # Always from the absolute score, never adjusted incrementally
        level = score // self.points_per_level
        return max(self.min_interval_ms, self.base_interval_ms - level * self.speedup_step_ms)
