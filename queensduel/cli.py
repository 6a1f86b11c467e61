"""
Queens Duel CLI - Command-line interface for the engine.

Usage:
    queensduel solve <n> <regions> [--algorithm dp]     Solve a board
    queensduel play <n> <regions> [--p1 minimax --p2 greedy]
                                                        AI vs AI match
    queensduel serve [--host 0.0.0.0 --port 8000]       Run the HTTP API

<regions> is a comma-separated list of n² region ids in row-major
order, or @path to a JSON file holding that list.
"""

import argparse
import json
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Queens Duel - two-player region Queens engine",
        prog="queensduel",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("QUEENSDUEL_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Place N queens, one per region")
    solve_parser.add_argument("n", type=int, help="Board size")
    solve_parser.add_argument("regions", help="Region ids, comma-separated, or @file.json")
    solve_parser.add_argument(
        "--algorithm", "-a", default="dp",
        choices=["dp", "dnc", "greedy", "minimax"],
    )
    solve_parser.add_argument("--max-nodes", type=int, default=None, help="Search node budget")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a match between two strategies")
    play_parser.add_argument("n", type=int, help="Board size")
    play_parser.add_argument("regions", help="Region ids, comma-separated, or @file.json")
    play_parser.add_argument("--p1", default="minimax", help="Strategy for player 1")
    play_parser.add_argument("--p2", default="greedy", help="Strategy for player 2")
    play_parser.add_argument("--depth", type=int, default=6, help="Minimax depth limit")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def parse_regions(text):
    """Parse '0,0,1,...' or '@regions.json'."""
    if text.startswith("@"):
        with open(text[1:], "r", encoding="utf-8") as f:
            return [int(r) for r in json.load(f)]
    return [int(r) for r in text.replace(" ", "").split(",") if r]


def render_board(n, regions, queens):
    """Region ids per cell, queens shown as Q."""
    queens = set(queens)
    width = len(str(max(regions))) if regions else 1
    lines = []
    for row in range(n):
        cells = []
        for col in range(n):
            cell = row * n + col
            cells.append("Q".rjust(width) if cell in queens else str(regions[cell]).rjust(width))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def cmd_solve(args):
    """Solve a board and print the placement."""
    from .engine_core.context import SearchContext
    from .solvers import solve

    try:
        regions = parse_regions(args.regions)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read regions: {e}")
        sys.exit(1)

    solution = solve(args.n, regions, args.algorithm, SearchContext(max_nodes=args.max_nodes))
    print(solution.message)
    if solution.queen_positions and len(regions) == args.n * args.n:
        print(render_board(args.n, regions, solution.queen_positions))
    print(f"Nodes: {solution.stats.get('nodes', 0)}")
    if not solution.solved:
        sys.exit(1)


def cmd_play(args):
    """Play an AI vs AI match and print the move record."""
    from .bots.dispatcher import StrategyDispatcher
    from .engine_core.errors import InvalidBoardError
    from .engine_core.reducer import init_game
    from .session import GameLoop

    try:
        regions = parse_regions(args.regions)
        state = init_game(args.n, regions)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read regions: {e}")
        sys.exit(1)
    except InvalidBoardError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    loop = GameLoop(
        state,
        {1: args.p1, 2: args.p2},
        dispatcher=StrategyDispatcher(minimax_depth=args.depth),
    )
    match = loop.run()

    for turn in match.turns:
        where = turn.position if turn.position is not None else "-"
        print(f"{turn.ply + 1:>3}. P{turn.player} ({turn.algorithm}): {where}")
    print()
    print(render_board(args.n, regions, match.final_state.queen_positions))
    print()
    print(match.final_state.message)


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("queensduel.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
