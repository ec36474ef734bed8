"""
Text and graph views of an arena run
"""
from graphviz import Digraph

from grid import CellKind, FeatureKind
from utils import Movement, strip_ansi

RED = "\033[31m"
BLUE = "\033[34m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
RESET = "\033[0m"

CELL_CHARS = {
    CellKind.EMPTY: ('.', None),
    CellKind.WALL: ('#', None),
    CellKind.GOAL: ('G', GREEN),
    CellKind.HAZARD: ('X', RED),
}

CONVEYOR_CHARS = {
    Movement.RIGHT: '→',
    Movement.LEFT: '←',
    Movement.UP: '↑',
    Movement.DOWN: '↓',
}


def _paint(char, color, use_color):
    if color and use_color:
        return f'{color}{char}{RESET}'
    return char


def render_state(arena, state=None, color=True):
    """Draw the arena with the robot on it, one character per cell."""
    rows, cols = arena.bounds
    display_grid = []
    for i in range(rows):
        row = []
        for j in range(cols):
            kind = arena.cell_at((i, j))
            if kind == CellKind.FEATURE:
                feature = arena.feature_at((i, j))
                if feature.kind == FeatureKind.CONVEYOR:
                    row.append(_paint(CONVEYOR_CHARS[feature.movement], YELLOW, color))
                else:
                    row.append(_paint('S', YELLOW, color))
            else:
                char, cell_color = CELL_CHARS[kind]
                row.append(_paint(char, cell_color, color))
        display_grid.append(row)

    if state is not None and arena.in_bounds(state.position):
        robot_char = '*' if state.is_destroyed else 'R'
        display_grid[state.position.row][state.position.col] = _paint(robot_char, BLUE, color)

    header = '    ' + ''.join(f'{j % 10}' for j in range(cols))
    lines = [header]
    for i, row in enumerate(display_grid):
        lines.append(f'{i:2d}: {"".join(row)}')

    if state is not None and state.display_text:
        lines.append(f'    "{state.display_text}"')
    return '\n'.join(lines)


def render_plain(arena, state=None):
    return strip_ansi(render_state(arena, state, color=True))


def history_graph(history, name="robot_history"):
    """Chain of applied states as a graphviz digraph; rendering is up to the caller."""
    dot = Digraph(name, format="png")
    dot.attr(rankdir="LR")

    for index, state in enumerate(history):
        label = f"#{index} {state.source}\\n{state.position}"
        if state.display_text:
            # a lone backslash would escape the closing quote of the DOT label
            text = state.display_text.replace("\\", "\\\\")
            label += f"\\n{text}"
        if state.is_destroyed:
            dot.node(str(index), label, shape="box", style="filled", color="red")
        elif state.is_won:
            dot.node(str(index), label, shape="box", style="filled", color="lightgreen")
        else:
            dot.node(str(index), label, shape="box")

    for index in range(1, len(history)):
        dot.edge(str(index - 1), str(index))

    return dot
