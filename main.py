import argparse
import logging
import sys

from levels import LEVELS, load_level
from render import history_graph, render_state
from runner import RunOutcome, parse_commands, run_robot


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a robot script against an arena level")
    parser.add_argument('--level', default='level1', choices=sorted(LEVELS))
    parser.add_argument('--moves', default='', help='e.g. "right 2, down"')
    parser.add_argument('--graph', metavar='PATH', help='write the state history graph (png) to PATH')
    parser.add_argument('--quiet', action='store_true', help='only print the outcome')
    parser.add_argument('--verbose', action='store_true', help='debug logging')
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    arena = load_level(args.level)
    try:
        script = parse_commands(args.moves)
    except ValueError as e:
        parser.error(str(e))

    def show(state):
        if not args.quiet:
            print(f"\n=== {state} ===")
            print(render_state(arena, state, color=sys.stdout.isatty()))

    result = run_robot(arena, script, apply_state=show)

    if args.graph:
        history_graph(result.history).render(args.graph, cleanup=True)

    if result.outcome == RunOutcome.WON:
        print(f"\nLevel completed in {len(result.history) - 1} states!")
    else:
        print(f"\nFAILED: {result.error}")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
