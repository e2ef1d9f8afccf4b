"""Main CLI entry point for bidirectional search."""

import sys
import argparse
import logging
from typing import List, Optional

from bidir_search.config.validators import VALID_ALGORITHMS, VALID_DOMAINS, VALID_PICKERS

from . import commands
from .utils import setup_logging


def _add_search_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that runs a search."""
    parser.add_argument(
        '--domain',
        choices=VALID_DOMAINS,
        default=None,
        help='State domain (default: from configuration)'
    )
    parser.add_argument('--eps', type=int, default=None, help='Cheapest move cost (default: 1)')
    parser.add_argument('--picker', choices=VALID_PICKERS, default=None,
                        help='GBFHS node selection strategy')
    parser.add_argument('--seed', type=int, default=None, help='Seed for random node selection')
    parser.add_argument('--max-expansions', type=int, default=None,
                        help='Stop after this many expansions')
    parser.add_argument('--time-limit', type=float, default=None,
                        help='Stop after this many seconds')
    parser.add_argument('--check-invariants', action='store_true',
                        help='Verify frontier bookkeeping after every expansion')

    # Domain parameters
    parser.add_argument('--size', type=int, default=None, help='Pancake count for random instances')
    parser.add_argument('--gap-x', type=int, default=None, help='Ignore gaps among the top X pancakes')
    parser.add_argument('--blind-backward', action='store_true',
                        help='Use h = 0 for the backward pancake search')
    parser.add_argument('--dim', type=int, default=None, help='Sliding-tile board width')
    parser.add_argument('--discount', type=int, default=None,
                        help='Ignore tiles below this value in the Manhattan heuristic')


def _add_instance_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--initial', '-i',
        type=str,
        required=True,
        help='Initial state, e.g. "2,1,3,4"'
    )
    parser.add_argument(
        '--goal', '-g',
        type=str,
        default=None,
        help='Goal state (default: sorted stack or solved board)'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='bidir-search',
        description='Bidirectional heuristic search (MMe, GBFHS) with an A* baseline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bidir-search solve -i 2,1,3,4                           # Solve a 3-pancake instance with MMe
  bidir-search solve --algorithm gbfhs --domain puzzle -i 1,2,3,4,5,6,7,0,8
  bidir-search crosscheck -i 3,1,2,4                      # Compare all algorithms
  bidir-search benchmark --size 8 --trials 20             # Random pancake benchmark
  bidir-search -c search.picker=round_robin config show   # Show configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        action='append',
        default=None,
        help='Configuration override (e.g., search.picker=round_robin); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results'
    )

    # Subcommands
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single instance',
        description='Find the optimal solution cost of one instance'
    )
    solve_parser.add_argument(
        '--algorithm', '-a',
        choices=VALID_ALGORITHMS,
        default='mme',
        help='Search algorithm (default: mme)'
    )
    _add_instance_arguments(solve_parser)
    _add_search_arguments(solve_parser)

    # Crosscheck command
    crosscheck_parser = subparsers.add_parser(
        'crosscheck',
        help='Solve one instance with several algorithms and compare costs',
        description='Run every algorithm on one instance; exit code 1 on disagreement'
    )
    crosscheck_parser.add_argument(
        '--algorithms',
        nargs='+',
        choices=VALID_ALGORITHMS,
        default=None,
        help='Algorithms to compare (default: experiment.algorithms)'
    )
    _add_instance_arguments(crosscheck_parser)
    _add_search_arguments(crosscheck_parser)

    # Benchmark command
    benchmark_parser = subparsers.add_parser(
        'benchmark',
        help='Run algorithms on a batch of instances',
        description='Generate or load instances, run each algorithm and summarize'
    )
    benchmark_parser.add_argument(
        '--algorithms',
        nargs='+',
        choices=VALID_ALGORITHMS,
        default=None,
        help='Algorithms to run (default: experiment.algorithms)'
    )
    benchmark_parser.add_argument('--trials', '-n', type=int, default=None,
                                  help='Number of generated instances')
    benchmark_parser.add_argument('--scramble-moves', type=int, default=None,
                                  help='Generate instances by scrambling the goal this many moves')
    benchmark_parser.add_argument('--experiment-seed', type=int, default=None,
                                  help='Seed for instance generation (default: 15780)')
    benchmark_parser.add_argument('--instances', type=str, default=None,
                                  help='JSON-lines file of instances instead of generated ones')
    benchmark_parser.add_argument('--format', choices=['json', 'jsonl', 'csv'], default='json',
                                  help='Output format for --output (default: json)')
    benchmark_parser.add_argument('--report-interval', type=int, default=10,
                                  help='Report progress every N instances')
    _add_search_arguments(benchmark_parser)

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate the search configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration (written as YAML with --output)'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'crosscheck':
            return commands.crosscheck_command(parsed_args)
        if parsed_args.command == 'benchmark':
            return commands.benchmark_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
