"""Command-line interface for analysing a board snapshot."""

from __future__ import annotations

import argparse
from pathlib import Path

from busjam.agent.config import AgentConfig
from busjam.agent.cycle import MOVE, decide
from busjam.agent.io import load_board, load_game
from busjam.agent.logging import MLflowRunLogger, NullRunLogger, RunLogger
from busjam.agent.policies import get_policy
from busjam.core.config import SearchConfig
from busjam.core.render import build_prompt, format_position, render_candidate, render_grid
from busjam.core.snapshot import ExtractionQueue, GameSnapshot


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional argument list (defaults to sys.argv)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Rank the passengers of the current bus colour by move cost and recommend the next click."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--board", type=Path, help="Legend layout file (one row per line, row 0 first)")
    source.add_argument("--game", type=Path, help="JSON game snapshot")
    parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Bus colour to rank for (required with --board, overrides the snapshot with --game)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=3,
        help="Bus capacity used when --board is given",
    )
    parser.add_argument(
        "--max-blockers",
        type=int,
        choices=(0, 1, 2),
        default=2,
        help="Largest blocker set searched exhaustively before the column fallback",
    )
    parser.add_argument(
        "--no-adjacent",
        action="store_true",
        help="Do not prefer blockers touching the passenger in the single-blocker step",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Print the full game-state text sent to a decision service",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the grid and every candidate",
    )
    parser.add_argument(
        "--mlflow-experiment",
        type=str,
        default=None,
        help="Log the decision to this MLflow experiment (needs the tracking extra)",
    )
    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> GameSnapshot:
    if args.board is not None:
        if not args.target:
            raise SystemExit("--target is required with --board")
        board = load_board(args.board)
        return GameSnapshot(board=board, queue=ExtractionQueue(color=args.target, capacity=args.capacity))

    game = load_game(args.game)
    if args.target:
        capacity = game.queue.capacity if game.queue is not None else args.capacity
        filled = game.queue.filled if game.queue is not None else 0
        game = GameSnapshot(
            board=game.board,
            queue=ExtractionQueue(color=args.target, capacity=capacity, filled=filled),
            buffer=game.buffer,
            level_index=game.level_index,
        )
    return game


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the analysis CLI.

    Args:
        argv: Optional argument list (defaults to sys.argv)
    """
    args = parse_args(argv)
    game = _load(args)
    config = AgentConfig(
        search=SearchConfig(max_exact_blockers=args.max_blockers, prefer_adjacent=not args.no_adjacent),
    )

    logger: RunLogger = NullRunLogger()
    if args.mlflow_experiment:
        logger = MLflowRunLogger(experiment_name=args.mlflow_experiment, run_name="busjam-analyze")
        logger.log_params(config.to_params())

    try:
        decision, _ = decide(game, get_policy(config.policy), config=config, logger=logger)

        if args.prompt:
            text = build_prompt(game, decision.ranking)
            print(text)
            logger.log_text(text, "prompt.txt")
            return

        if args.verbose:
            print("\n".join(render_grid(game.board)))
            print()
            for result in decision.ranking:
                print(f"  {render_candidate(result)} ({result.method})")

        if decision.kind == MOVE:
            print(f"Next move: {format_position(decision.move)}")
        else:
            print(f"[{decision.kind}] {decision.reason}")
    finally:
        logger.close()


__all__ = ["main", "parse_args"]


if __name__ == "__main__":
    main()
