from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameSession, PieceCatalog

EMPTY_COLOR = (20, 20, 26)
OUTLINE_COLOR = (255, 255, 255)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_COLOR
    c = pygame.Color(PieceCatalog.color_for(v))
    return c.r, c.g, c.b


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = cols * self.cell_size + self.margin * 3 + self.panel_width
        height = rows * self.cell_size + self.margin * 2
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                v = int(state[y, x])
                pygame.draw.rect(surf, _color_for_value(v), rect)
                if v != 0:
                    pygame.draw.rect(surf, OUTLINE_COLOR, rect, 1)
        return surf

    def draw(self, screen: pygame.Surface, session: GameSession, last_final_score: Optional[int] = None) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        state = session.get_state()
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))

        x_text = self.margin * 2 + state.shape[1] * self.cell_size
        info_lines = [
            f"Score: {session.score}",
            f"Lines: {session.lines_cleared}",
            f"Interval: {session.drop_interval} ms",
            "",
            "Move: Left/Right",
            "Rotate: Up",
            "Soft drop: Down",
            "Hard drop: Space",
            "New game: N",
        ]
        if last_final_score is not None:
            info_lines += ["", f"Last game: {last_final_score}"]
        for i, txt in enumerate(info_lines):
            img = self._font.render(txt, True, (230, 230, 230))
            screen.blit(img, (x_text, self.margin + i * 22))
        pygame.display.flip()
