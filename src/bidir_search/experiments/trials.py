"""Instance generation, trial execution and aggregation for benchmarks."""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from bidir_search.core.data_models import State
from bidir_search.domains.base import SearchDomain
from bidir_search.search.base import SearchConfig
from bidir_search.search.portfolio import create_searcher

logger = logging.getLogger(__name__)

Instance = Tuple[State, State]


def generate_instances(domain: SearchDomain,
                       count: int,
                       seed: Optional[int] = None,
                       scramble_moves: Optional[int] = None) -> List[Instance]:
    """Draw a reproducible list of (initial, goal) pairs.

    Args:
        domain: Domain to draw from
        count: Number of instances
        seed: Seed for numpy's ``default_rng``; the same seed gives the same list
        scramble_moves: If set, walk this many random moves back from the goal
            instead of drawing a uniformly random state

    Returns:
        List of (initial, goal) pairs
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    seed_sequence = np.random.default_rng(seed)
    instances = []
    for _ in range(count):
        rng = random.Random(int(seed_sequence.integers(0, 2**63 - 1)))
        if scramble_moves is None:
            instances.append(domain.random_instance(rng))
        else:
            _, goal = domain.random_instance(rng)
            instances.append(domain.scrambled_instance(goal, scramble_moves, rng))

    logger.info(f"Generated {count} {domain.name} instances (seed={seed}, scramble_moves={scramble_moves})")
    return instances


@dataclass
class TrialRecord:
    """One algorithm run on one instance."""
    instance_id: int
    algorithm: str
    initial: State
    goal: State
    cost: Any
    nodes_expanded: int
    nodes_generated: int
    computation_time: float
    termination_reason: str
    agree: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'instance_id': self.instance_id,
            'algorithm': self.algorithm,
            'initial': list(self.initial),
            'goal': list(self.goal),
            'cost': self.cost,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'agree': self.agree,
        }


def run_trials(algorithms: Sequence[str],
               domain: SearchDomain,
               instances: Iterable[Instance],
               config: Optional[SearchConfig] = None,
               progress=None) -> List[TrialRecord]:
    """Run every algorithm on every instance.

    Each instance's records are flagged ``agree=False`` when the completed runs
    report different costs.
    """
    config = config or SearchConfig()
    searchers = [create_searcher(name, config) for name in algorithms]
    records: List[TrialRecord] = []

    for instance_id, (initial, goal) in enumerate(instances):
        instance_records = []
        for searcher in searchers:
            result = searcher.search(domain, initial, goal)
            instance_records.append(TrialRecord(
                instance_id=instance_id,
                algorithm=searcher.name,
                initial=tuple(initial),
                goal=tuple(goal),
                cost=result.optimal_cost,
                nodes_expanded=result.nodes_expanded,
                nodes_generated=result.nodes_generated,
                computation_time=result.computation_time,
                termination_reason=result.termination_reason,
            ))

        completed = {r.cost for r in instance_records if r.termination_reason != 'budget_exhausted'}
        if len(completed) > 1:
            costs = {r.algorithm: r.cost for r in instance_records}
            logger.warning(f"Instance {instance_id}: algorithms disagree {costs}")
            for record in instance_records:
                record.agree = False

        records.extend(instance_records)
        if progress is not None:
            progress.update()

    return records


@dataclass
class AlgorithmSummary:
    """Aggregate statistics of one algorithm over a set of trials."""
    algorithm: str
    trials: int
    solved: int
    mean_expansions: float
    median_expansions: float
    max_expansions: int
    mean_time: float
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'algorithm': self.algorithm,
            'trials': self.trials,
            'solved': self.solved,
            'mean_expansions': self.mean_expansions,
            'median_expansions': self.median_expansions,
            'max_expansions': self.max_expansions,
            'mean_time': self.mean_time,
        }
        data.update(self.extra)
        return data


def summarize_trials(records: Sequence[TrialRecord]) -> Dict[str, Any]:
    """Aggregate trial records per algorithm.

    Returns:
        Dictionary with an ``algorithms`` mapping of per-algorithm summaries,
        the number of instances and the fraction of instances on which all
        algorithms agreed.
    """
    by_algorithm: Dict[str, List[TrialRecord]] = {}
    for record in records:
        by_algorithm.setdefault(record.algorithm, []).append(record)

    summaries = {}
    for algorithm, algorithm_records in by_algorithm.items():
        expansions = np.array([r.nodes_expanded for r in algorithm_records], dtype=np.int64)
        times = np.array([r.computation_time for r in algorithm_records], dtype=np.float64)
        summaries[algorithm] = AlgorithmSummary(
            algorithm=algorithm,
            trials=len(algorithm_records),
            solved=sum(1 for r in algorithm_records if r.termination_reason in ('solved', 'trivial')),
            mean_expansions=float(np.mean(expansions)),
            median_expansions=float(np.median(expansions)),
            max_expansions=int(np.max(expansions)),
            mean_time=float(np.mean(times)),
        )

    instance_agreement = {}
    for record in records:
        instance_agreement[record.instance_id] = instance_agreement.get(record.instance_id, True) and record.agree
    instances = len(instance_agreement)
    agreement_rate = (sum(instance_agreement.values()) / instances) if instances else 1.0

    return {
        'instances': instances,
        'agreement_rate': agreement_rate,
        'algorithms': {name: summary.to_dict() for name, summary in summaries.items()},
    }


def run_benchmark(algorithms: Sequence[str],
                  domain: SearchDomain,
                  count: int,
                  seed: Optional[int] = None,
                  scramble_moves: Optional[int] = None,
                  config: Optional[SearchConfig] = None,
                  progress=None) -> Dict[str, Any]:
    """Generate instances, run trials and summarize in one call."""
    start_time = time.perf_counter()
    instances = generate_instances(domain, count, seed=seed, scramble_moves=scramble_moves)
    records = run_trials(algorithms, domain, instances, config, progress=progress)
    summary = summarize_trials(records)
    summary['domain'] = {'name': domain.name, **domain.params()}
    summary['seed'] = seed
    summary['total_time'] = time.perf_counter() - start_time
    logger.info(f"Benchmark finished: {summary['instances']} instances, "
                f"agreement rate {summary['agreement_rate']:.2%}")
    return {'summary': summary, 'records': [r.to_dict() for r in records]}
