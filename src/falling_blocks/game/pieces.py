from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    T = 2
    L = 3
    J = 4
    O = 5
    Z = 6
    S = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.setflags(write=False)
    return shape


def rotate_clockwise(shape: Shape) -> Shape:
    """Return ``shape`` turned a quarter clockwise.

    For an R x C input the result is C x R with
    ``result[i][j] == shape[R - 1 - j][i]``.
    """
    rotated = np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class CatalogEntry:
    kind: TetrominoType
    shape: Shape
    color: str

    @property
    def identity(self) -> int:
        return int(self.kind)


class PieceCatalog:
    """The seven playable shapes, each bound to one color."""

    ENTRIES: Tuple[CatalogEntry, ...] = (
        CatalogEntry(TetrominoType.I, _frozen([[1, 1, 1, 1]]), "#00ffff"),
        CatalogEntry(TetrominoType.T, _frozen([[1, 1, 1], [0, 1, 0]]), "#0000ff"),
        CatalogEntry(TetrominoType.L, _frozen([[1, 1, 1], [1, 0, 0]]), "#ffa500"),
        CatalogEntry(TetrominoType.J, _frozen([[1, 1, 1], [0, 0, 1]]), "#ffff00"),
        CatalogEntry(TetrominoType.O, _frozen([[1, 1], [1, 1]]), "#00ff00"),
        CatalogEntry(TetrominoType.Z, _frozen([[1, 1, 0], [0, 1, 1]]), "#800080"),
        CatalogEntry(TetrominoType.S, _frozen([[0, 1, 1], [1, 1, 0]]), "#ff0000"),
    )

    _BY_KIND: Dict[TetrominoType, CatalogEntry] = {e.kind: e for e in ENTRIES}

    @classmethod
    def get(cls, kind: TetrominoType) -> CatalogEntry:
        return cls._BY_KIND[TetrominoType(kind)]

    @classmethod
    def pick_random(cls, rng: random.Random) -> CatalogEntry:
        return rng.choice(cls.ENTRIES)

    @classmethod
    def color_for(cls, identity: int) -> str:
        return cls.get(TetrominoType(abs(int(identity)))).color


@dataclass(eq=False)
class ActivePiece:
    """The falling piece. Its shape is replaced, never edited."""

    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, entry: CatalogEntry, cols: int, spawn_y: int = 0) -> "ActivePiece":
        width = entry.shape.shape[1]
        return cls(entry.kind, entry.shape, cols // 2 - width // 2, spawn_y)

    @property
    def identity(self) -> int:
        return int(self.kind)

    @property
    def color(self) -> str:
        return PieceCatalog.get(self.kind).color

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.shape, self.x + dx, self.y + dy)

    def rotated(self) -> "ActivePiece":
        return ActivePiece(self.kind, rotate_clockwise(self.shape), self.x, self.y)

    def cells(self):
        """Yield board coordinates of the filled cells."""
        ys, xs = np.nonzero(self.shape)
        for cy, cx in zip(ys, xs):
            yield self.x + int(cx), self.y + int(cy)
