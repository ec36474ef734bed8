"""
Arena: the static grid a robot script runs against
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple

import numpy as np

from utils import Movement, Position


class CellKind(IntEnum):
    EMPTY = 0
    WALL = 1
    GOAL = 2
    HAZARD = 3
    FEATURE = 4


class FeatureKind(Enum):
    CONVEYOR = "conveyor"  # pushes the robot one cell after it lands
    SIGN = "sign"          # shows its text before the robot settles


@dataclass(frozen=True)
class Feature:
    kind: FeatureKind
    movement: Optional[Movement] = None
    text: str = ""


# Layout symbols
EMPTY_SYMBOL = '.'
WALL_SYMBOL = '#'
GOAL_SYMBOL = 'G'
HAZARD_SYMBOL = 'X'
START_SYMBOL = 'R'

CELL_SYMBOLS = {
    EMPTY_SYMBOL: CellKind.EMPTY,
    START_SYMBOL: CellKind.EMPTY,
    WALL_SYMBOL: CellKind.WALL,
    GOAL_SYMBOL: CellKind.GOAL,
    HAZARD_SYMBOL: CellKind.HAZARD,
}

CONVEYOR_SYMBOLS = {
    '>': Movement.RIGHT,
    '<': Movement.LEFT,
    '^': Movement.UP,
    'v': Movement.DOWN,
}


class ArenaParseError(ValueError):
    pass


class Arena:
    def __init__(self, cells, start: Position, features: Optional[Dict[Position, Feature]] = None):
        self.grid = np.array(cells, dtype=int)
        if self.grid.ndim != 2 or self.grid.size == 0:
            raise ValueError("arena cells must be a non-empty 2D grid")
        self.grid.flags.writeable = False
        self.start = Position(*start)
        self.features: Dict[Position, Feature] = dict(features or {})

        for pos in self.features:
            if self.cell_at(pos) != CellKind.FEATURE:
                raise ValueError(f"feature at {pos} is not on a feature cell")
        for row, col in np.argwhere(self.grid == CellKind.FEATURE):
            pos = Position(int(row), int(col))
            if pos not in self.features:
                raise ValueError(f"feature cell at {pos} has no feature")

    @property
    def bounds(self) -> Tuple[int, int]:
        rows, cols = self.grid.shape
        return rows, cols

    def in_bounds(self, pos: Position) -> bool:
        pos = Position(*pos)
        rows, cols = self.bounds
        return 0 <= pos.row < rows and 0 <= pos.col < cols

    def cell_at(self, pos: Position) -> CellKind:
        pos = Position(*pos)
        # Anything outside the grid behaves like a wall
        if not self.in_bounds(pos):
            return CellKind.WALL
        return CellKind(int(self.grid[pos.row, pos.col]))

    def feature_at(self, pos: Position) -> Optional[Feature]:
        return self.features.get(Position(*pos))

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self.grid == kind))


def parse_arena(layout: str, signs: Optional[Dict[str, str]] = None) -> Arena:
    """
    Build an Arena from a text layout.

    One character per cell: '.' empty, '#' wall, 'G' goal, 'X' hazard,
    'R' robot start, '>' '<' '^' 'v' conveyors. Characters listed in
    `signs` become sign cells showing the mapped text. Short rows are
    padded with walls.
    """
    signs = signs or {}
    lines = [line.rstrip() for line in layout.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ArenaParseError("empty arena layout")

    width = max(len(line) for line in lines)
    cells = np.full((len(lines), width), CellKind.WALL, dtype=int)
    features = {}
    start = None

    for row, line in enumerate(lines):
        for col, symbol in enumerate(line):
            pos = Position(row, col)
            if symbol in CELL_SYMBOLS:
                cells[row, col] = CELL_SYMBOLS[symbol]
            elif symbol in CONVEYOR_SYMBOLS:
                cells[row, col] = CellKind.FEATURE
                features[pos] = Feature(FeatureKind.CONVEYOR, movement=CONVEYOR_SYMBOLS[symbol])
            elif symbol in signs:
                cells[row, col] = CellKind.FEATURE
                features[pos] = Feature(FeatureKind.SIGN, text=signs[symbol])
            else:
                raise ArenaParseError(f"unknown symbol {symbol!r} at {pos}")

            if symbol == START_SYMBOL:
                if start is not None:
                    raise ArenaParseError(f"second start at {pos}, first at {start}")
                start = pos

    if start is None:
        raise ArenaParseError(f"arena has no start cell ({START_SYMBOL!r})")

    return Arena(cells, start, features)
