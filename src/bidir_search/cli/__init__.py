"""Command-line interface for bidirectional search.

This module provides CLI commands for solving single instances, cross-checking
algorithms and running benchmarks.
"""

from .main import main_cli
from .commands import solve_command, crosscheck_command, benchmark_command, config_command
from .utils import setup_logging

__all__ = [
    'main_cli',
    'solve_command',
    'crosscheck_command',
    'benchmark_command',
    'config_command',
    'setup_logging'
]
