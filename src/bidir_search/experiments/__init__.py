"""Benchmark harness: reproducible instances, trial runs and summaries."""

from .trials import (
    TrialRecord,
    AlgorithmSummary,
    generate_instances,
    run_trials,
    summarize_trials,
    run_benchmark
)

__all__ = [
    'TrialRecord',
    'AlgorithmSummary',
    'generate_instances',
    'run_trials',
    'summarize_trials',
    'run_benchmark'
]
