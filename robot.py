"""
Robot engine: immutable robot states and the move/expand/apply loop
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from grid import Arena, CellKind
from utils import Movement, Position

logger = logging.getLogger(__name__)

DESTROYING_CELLS = (CellKind.WALL, CellKind.HAZARD)


@dataclass(frozen=True)
class RobotState:
    position: Position
    display_text: str = ""
    is_won: bool = False
    is_destroyed: bool = False
    # Diagnostics only: who produced this state. Not part of equality.
    source: str = field(default="Robot", compare=False)

    @classmethod
    def at(cls, position, arena: Arena, display_text: str = "", source: str = "Robot") -> 'RobotState':
        """Build the state for `position`, reading the flags off the arena cell."""
        position = Position(*position)
        cell = arena.cell_at(position)
        return cls(
            position=position,
            display_text=display_text,
            is_won=cell == CellKind.GOAL,
            is_destroyed=cell in DESTROYING_CELLS,
            source=source,
        )

    def move(self, movement: Movement, arena: Arena, source: str = "Robot") -> 'RobotState':
        return RobotState.at(movement.apply(self.position), arena, source=source)

    def display(self, text: str, source: str = "Robot") -> 'RobotState':
        return replace(self, display_text=text, source=source)

    def __str__(self):
        flags = []
        if self.is_won:
            flags.append("won")
        if self.is_destroyed:
            flags.append("destroyed")
        text = f", text={self.display_text!r}" if self.display_text else ""
        flag_str = f", {'+'.join(flags)}" if flags else ""
        return f"{self.source}@{self.position}{text}{flag_str}"


def format_history(history: Sequence[RobotState]) -> str:
    return " ->\n".join(f"({state})" for state in history)


class RobotError(Exception):
    pass


class RobotStateError(RobotError):
    """Command issued in a lifecycle state that does not allow it"""


class RobotTerminalError(RobotError):
    reason = "robot run ended"

    def __init__(self, state: RobotState, history: Sequence[RobotState]):
        self.state = state
        self.history = tuple(history)
        super().__init__(f"{self.reason}, state={state}, history:\n{format_history(self.history)}")


class RobotDestroyedError(RobotTerminalError):
    reason = "robot is destroyed"


class NotCompleteError(RobotTerminalError):
    reason = "level is not completed"


class RobotStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    WON = "won"
    DESTROYED = "destroyed"


class Robot:
    """
    Drives one robot through one script run.

    Every command produces a candidate state which is expanded through the
    mutations provider (before-effects first, then the state itself, then
    after-effects, recursively) and applied one state at a time. Applying a
    destroyed state raises RobotDestroyedError and drops the rest of the
    sequence.
    """

    def __init__(self, initial_state: RobotState, mutations_provider, arena: Arena,
                 apply_state: Optional[Callable[[RobotState], None]] = None):
        self.initial_state = initial_state
        self.mutations_provider = mutations_provider
        self.arena = arena
        self.apply_state = apply_state

        self._current_state: Optional[RobotState] = None
        self._history: List[RobotState] = []

    @property
    def current_state(self) -> Optional[RobotState]:
        return self._current_state

    @property
    def history(self) -> Tuple[RobotState, ...]:
        return tuple(self._history)

    @property
    def status(self) -> RobotStatus:
        state = self._current_state
        if state is None:
            return RobotStatus.IDLE
        if state.is_destroyed:
            return RobotStatus.DESTROYED
        if state.is_won:
            return RobotStatus.WON
        return RobotStatus.RUNNING

    def apply_initial_state(self):
        if self._current_state is not None:
            raise RobotStateError("initial state is already applied")
        # No mutation hooks for state #0
        self._apply(self.initial_state)

    # Commands

    def right(self, steps_count: int = 1):
        self._repeat(Movement.RIGHT, steps_count)

    def left(self, steps_count: int = 1):
        self._repeat(Movement.LEFT, steps_count)

    def up(self, steps_count: int = 1):
        self._repeat(Movement.UP, steps_count)

    def down(self, steps_count: int = 1):
        self._repeat(Movement.DOWN, steps_count)

    def move(self, movement: Movement):
        state = self._require_running()
        self._update_state(state.move(movement, self.arena))

    def display(self, text: str):
        state = self._require_running()
        self._update_state(state.display(str(text)))

    def require_won(self):
        state = self._require_started()
        if not state.is_won:
            logger.debug("Run incomplete at %s after %d states", state, len(self._history))
            raise NotCompleteError(state, self._history)

    # Expansion

    def expand(self, state: RobotState) -> List[RobotState]:
        """
        Linearize all chained effects of `state`.

        Before-effects are fully expanded ahead of the state, after-effects
        behind it. A hook returning an equal state ends that branch.
        Chains that never settle recurse until RecursionError.
        """
        states = []

        before = self.mutations_provider.before_move(state)
        if before != state:
            states.extend(self.expand(before))

        states.append(state)

        after = self.mutations_provider.after_move(state)
        if after != state:
            states.extend(self.expand(after))

        return states

    def _update_state(self, state: RobotState):
        states = self.expand(state)
        if len(states) > 1:
            logger.debug("Expanded %s into %d states", state, len(states))
        for expanded in states:
            self._apply(expanded)

    def _apply(self, state: RobotState):
        self._current_state = state
        self._history.append(state)
        logger.debug("Applied state #%d: %s", len(self._history) - 1, state)

        if self.apply_state is not None:
            self.apply_state(state)

        if state.is_destroyed:
            logger.debug("Robot destroyed at %s", state.position)
            raise RobotDestroyedError(state, self._history)

    def _repeat(self, movement: Movement, steps_count: int):
        if steps_count < 0:
            raise ValueError(f"steps_count must not be negative, got {steps_count}")
        for _ in range(steps_count):
            self.move(movement)

    def _require_started(self) -> RobotState:
        if self._current_state is None:
            raise RobotStateError("initial state is not applied yet")
        return self._current_state

    def _require_running(self) -> RobotState:
        state = self._require_started()
        if state.is_destroyed:
            # The run is over; report the same terminal condition again
            raise RobotDestroyedError(state, self._history)
        return state
