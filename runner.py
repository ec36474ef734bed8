"""
Runs a user script against an arena and reports the terminal outcome
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from grid import Arena
from mutations import ArenaMutationsProvider
from robot import NotCompleteError, Robot, RobotDestroyedError, RobotState, RobotTerminalError
from utils import Movement

logger = logging.getLogger(__name__)

# A user script: receives the robot handle and the arena
Script = Callable[[Robot, Arena], None]


class RunOutcome(Enum):
    WON = "won"
    DESTROYED = "destroyed"
    NOT_COMPLETE = "not_complete"


@dataclass(frozen=True)
class RunResult:
    outcome: RunOutcome
    state: RobotState
    history: Tuple[RobotState, ...]
    error: Optional[RobotTerminalError] = None

    @property
    def ok(self) -> bool:
        return self.outcome == RunOutcome.WON

    def raise_for_outcome(self):
        if self.error is not None:
            raise self.error


def run_robot(arena: Arena, script: Script, mutations_provider=None, apply_state=None) -> RunResult:
    """
    Execute `script` on a fresh robot placed at the arena start.

    Destruction and an unfinished level are returned as results; any other
    exception raised by the script propagates.
    """
    if mutations_provider is None:
        mutations_provider = ArenaMutationsProvider(arena)

    initial_state = RobotState.at(arena.start, arena, source="Initial")
    robot = Robot(initial_state, mutations_provider, arena, apply_state=apply_state)

    try:
        robot.apply_initial_state()
        script(robot, arena)
        robot.require_won()
    except RobotDestroyedError as e:
        logger.info("Run ended: robot destroyed after %d states", len(e.history))
        return RunResult(RunOutcome.DESTROYED, e.state, e.history, e)
    except NotCompleteError as e:
        logger.info("Run ended: level not completed after %d states", len(e.history))
        return RunResult(RunOutcome.NOT_COMPLETE, e.state, e.history, e)

    logger.info("Run ended: level completed after %d states", len(robot.history))
    return RunResult(RunOutcome.WON, robot.current_state, robot.history)


def parse_commands(text: str) -> Script:
    """
    Turn a command string such as "right 2, down; display done" into a script.

    Commands are separated by commas, semicolons or newlines. Movement
    commands take an optional step count; `display` takes the rest of the
    token as its text.
    """
    steps = []
    for token in re.split(r'[,;\n]', text):
        token = token.strip()
        if not token:
            continue
        name, _, arg = token.partition(' ')
        arg = arg.strip()

        if name.lower() == 'display':
            steps.append((None, arg))
            continue

        try:
            movement = Movement.from_name(name)
        except ValueError:
            raise ValueError(f"unknown command {name!r}") from None
        if not arg:
            count = 1
        elif arg.isdigit():
            count = int(arg)
        else:
            raise ValueError(f"bad step count in {token!r}")
        steps.append((movement, count))

    def script(robot, arena):
        for movement, arg in steps:
            if movement is None:
                robot.display(arg)
                continue
            for _ in range(arg):
                robot.move(movement)

    return script
