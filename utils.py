import re
from enum import Enum
from typing import NamedTuple


def strip_ansi(text):
    """Remove ANSI escape codes from text"""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    return ansi_escape.sub('', text)


class Position(NamedTuple):
    row: int
    col: int

    def __str__(self):
        return f"({self.row}, {self.col})"


class Movement(Enum):
    # (d_row, d_col): rows grow downwards, cols grow to the right
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def apply(self, position: Position) -> Position:
        d_row, d_col = self.value
        return Position(position.row + d_row, position.col + d_col)

    @classmethod
    def from_name(cls, name: str) -> 'Movement':
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown movement: {name!r}") from None
