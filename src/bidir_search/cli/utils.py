"""CLI utility functions."""

import logging
import time
from typing import Any, Dict, Optional


def setup_logging(level: int = logging.INFO,
                 format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at INFO
    logging.getLogger('hydra').setLevel(logging.WARNING)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"


class ProgressReporter:
    """Progress reporting for benchmark runs."""

    def __init__(self, total_instances: int, report_interval: int = 10):
        """Initialize progress reporter.

        Args:
            total_instances: Total number of instances
            report_interval: Report progress every N instances
        """
        self.total_instances = total_instances
        self.report_interval = max(1, report_interval)
        self.completed = 0
        self.start_time = time.time()

    def update(self) -> None:
        """Mark one more instance as done."""
        self.completed += 1
        if (self.completed % self.report_interval == 0 or
            self.completed == self.total_instances):
            self._report_progress()

    def _report_progress(self) -> None:
        elapsed = time.time() - self.start_time
        rate = self.completed / elapsed if elapsed > 0 else 0
        remaining = self.total_instances - self.completed
        eta = remaining / rate if rate > 0 else 0
        percent = self.completed / self.total_instances * 100 if self.total_instances else 100.0

        print(f"Progress: {self.completed}/{self.total_instances} "
              f"({percent:.1f}%) | "
              f"Rate: {rate:.1f} instances/s | "
              f"ETA: {format_duration(eta)}")


def create_result_summary(result: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten one search result dictionary for display."""
    statistics = result.get('statistics') or {}
    return {
        'algorithm': result.get('algorithm'),
        'cost': result.get('cost'),
        'termination_reason': result.get('termination_reason'),
        'nodes_expanded': result.get('nodes_expanded', 0),
        'nodes_generated': result.get('nodes_generated', 0),
        'collisions': statistics.get('collisions', 0),
        'computation_time': result.get('computation_time', 0.0),
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print benchmark summary.

    Args:
        summary: Output of ``summarize_trials`` (optionally with domain info)
    """
    print("\n" + "="*60)
    print("BENCHMARK SUMMARY")
    print("="*60)

    domain = summary.get('domain')
    if domain:
        params = ", ".join(f"{k}={v}" for k, v in domain.items() if k != 'name')
        print(f"Domain:           {domain.get('name')} ({params})")
    print(f"Instances:        {summary['instances']}")
    print(f"Agreement rate:   {summary['agreement_rate']*100:.1f}%")
    if 'total_time' in summary:
        print(f"Total time:       {format_duration(summary['total_time'])}")

    print(f"\n{'Algorithm':<10} {'Solved':>7} {'Mean exp':>12} {'Median exp':>12} "
          f"{'Max exp':>10} {'Mean time':>10}")
    for name, stats in summary['algorithms'].items():
        print(f"{name:<10} {stats['solved']:>7} {stats['mean_expansions']:>12.1f} "
              f"{stats['median_expansions']:>12.1f} {stats['max_expansions']:>10} "
              f"{format_duration(stats['mean_time']):>10}")

    if summary['agreement_rate'] < 1.0:
        print("\n❌ Algorithms disagreed on at least one instance")
    else:
        print("\n✅ All algorithms agreed on every instance")
