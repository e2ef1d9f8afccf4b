"""CLI command implementations."""

import json
import logging
import math
import time
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import DictConfig, OmegaConf

from bidir_search import __version__
from bidir_search.config import ConfigManager, load_config, validate_config, ConfigValidationError
from bidir_search.core.data_models import State
from bidir_search.domains import SearchDomain, PancakeDomain, SlidingTileDomain, create_domain
from bidir_search.experiments import generate_instances, run_trials, summarize_trials
from bidir_search.integration.io import (
    parse_state, save_results, save_records_jsonl, save_records_csv, load_instances
)
from bidir_search.search import SearchConfig, create_searcher, cross_check

from .utils import format_duration, ProgressReporter, create_result_summary, print_summary

logger = logging.getLogger(__name__)

# CLI flag -> configuration key
SEARCH_FLAGS = {
    'eps': 'search.eps',
    'picker': 'search.picker',
    'seed': 'search.seed',
    'max_expansions': 'search.max_expansions',
    'time_limit': 'search.max_computation_time',
}
DOMAIN_FLAGS = {
    'domain': 'domain.name',
    'size': 'domain.size',
    'gap_x': 'domain.gap_x',
    'dim': 'domain.dim',
    'discount': 'domain.discount',
}


def build_overrides(args) -> List[str]:
    """Translate explicit command line flags into Hydra overrides.

    Global ``--config`` overrides come last so they win over flags.
    """
    overrides = []
    for flags in (SEARCH_FLAGS, DOMAIN_FLAGS):
        for attr, key in flags.items():
            value = getattr(args, attr, None)
            if value is not None:
                overrides.append(f"{key}={value}")
    if getattr(args, 'blind_backward', False):
        overrides.append("domain.blind_backward=true")
    if getattr(args, 'check_invariants', False):
        overrides.append("search.check_invariants=true")
    if getattr(args, 'config', None):
        overrides.extend(args.config)
    return overrides


def load_run_config(args, extra: Optional[List[str]] = None) -> DictConfig:
    """Load the bundled configuration with flag and ``--config`` overrides."""
    overrides = build_overrides(args) + list(extra or [])
    logger.debug(f"Configuration overrides: {overrides}")
    return load_config(overrides=overrides)


def domain_from_config(cfg: DictConfig) -> SearchDomain:
    """Instantiate the domain described by the ``domain`` section."""
    domain_cfg = OmegaConf.to_container(cfg.domain, resolve=True)
    name = domain_cfg.pop('name')
    return create_domain(name, **domain_cfg)


def default_goal(domain: SearchDomain, initial: State) -> State:
    """Canonical goal for an initial state: sorted stack or solved board."""
    if isinstance(domain, PancakeDomain):
        return tuple(sorted(initial))
    if isinstance(domain, SlidingTileDomain):
        return domain.goal_state()
    raise ValueError(f"No default goal for domain {domain.name}; pass --goal")


def resolve_instance(args) -> Tuple[DictConfig, SearchDomain, State, State]:
    """Load configuration and parse the (initial, goal) pair from the arguments."""
    initial = parse_state(args.initial)
    extra = []
    # Board size follows the state length unless given explicitly
    if getattr(args, 'domain', None) == 'puzzle' and args.dim is None and initial:
        dim = math.isqrt(len(initial))
        if dim * dim == len(initial):
            extra.append(f"domain.dim={dim}")

    cfg = load_run_config(args, extra)
    domain = domain_from_config(cfg)
    goal = parse_state(args.goal) if args.goal else default_goal(domain, initial)
    return cfg, domain, initial, goal


def _emit(payload: Dict[str, Any], output: Optional[str]) -> None:
    if output:
        save_results(payload, output)
    else:
        print(json.dumps(payload, indent=2))


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when the run completed, 1 otherwise)
    """
    try:
        cfg, domain, initial, goal = resolve_instance(args)
        search_config = SearchConfig.from_config(cfg)
        searcher = create_searcher(args.algorithm, search_config)

        logger.info(f"Solving {domain.name} instance {initial} -> {goal} with {args.algorithm}")
        start_time = time.perf_counter()
        result = searcher.search(domain, initial, goal)
        total_time = time.perf_counter() - start_time

        payload = result.to_dict()
        payload.update({
            'domain': {'name': domain.name, **domain.params()},
            'initial': list(initial),
            'goal': list(goal),
            'config': search_config.to_dict(),
            'version': __version__,
            'total_time': total_time,
        })
        _emit(payload, args.output)

        if not args.quiet:
            summary = create_result_summary(payload)
            print(f"\nAlgorithm: {summary['algorithm']}")
            print(f"Cost: {summary['cost']} ({summary['termination_reason']})")
            print(f"Nodes expanded: {summary['nodes_expanded']}")
            print(f"Nodes generated: {summary['nodes_generated']}")
            print(f"Computation time: {format_duration(summary['computation_time'])}")

        return 0 if result.termination_reason != 'budget_exhausted' else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def crosscheck_command(args) -> int:
    """Handle crosscheck command: exit code 0 only when all algorithms agree."""
    try:
        cfg, domain, initial, goal = resolve_instance(args)
        search_config = SearchConfig.from_config(cfg)
        algorithms = args.algorithms or list(cfg.experiment.algorithms)

        report = cross_check(domain, initial, goal, algorithms=algorithms, config=search_config)
        payload = report.to_dict()
        payload.update({'initial': list(initial), 'goal': list(goal)})
        _emit(payload, args.output)

        if not args.quiet:
            print("\nCosts: " + ", ".join(f"{name}={cost}" for name, cost in report.costs.items()))
            if report.agree:
                print("✅ All algorithms agree")
            else:
                print("❌ Algorithms disagree")

        return 0 if report.agree else 1

    except Exception as e:
        logger.error(f"Crosscheck command failed: {e}")
        return 1


def benchmark_command(args) -> int:
    """Handle benchmark command.

    Instances come from ``--instances`` (JSON lines) or are generated from the
    experiment seed. Records go to ``--output`` in the chosen format.
    """
    try:
        extra = []
        if args.trials is not None:
            extra.append(f"experiment.trials={args.trials}")
        if args.scramble_moves is not None:
            extra.append(f"experiment.scramble_moves={args.scramble_moves}")
        if args.experiment_seed is not None:
            extra.append(f"experiment.seed={args.experiment_seed}")
        if args.algorithms:
            extra.append(f"experiment.algorithms=[{','.join(args.algorithms)}]")

        cfg = load_run_config(args, extra)
        domain = domain_from_config(cfg)
        search_config = SearchConfig.from_config(cfg)
        experiment = cfg.experiment

        if args.instances:
            instances = load_instances(args.instances)
            logger.info(f"Loaded {len(instances)} instances from {args.instances}")
        else:
            instances = generate_instances(domain, int(experiment.trials),
                                           seed=experiment.seed,
                                           scramble_moves=experiment.scramble_moves)

        progress = None if args.quiet else ProgressReporter(len(instances), args.report_interval)
        start_time = time.perf_counter()
        records = run_trials(list(experiment.algorithms), domain, instances, search_config,
                             progress=progress)
        summary = summarize_trials(records)
        summary['domain'] = {'name': domain.name, **domain.params()}
        summary['seed'] = experiment.seed
        summary['total_time'] = time.perf_counter() - start_time

        output = args.output or experiment.get('output')
        if output:
            rows = [record.to_dict() for record in records]
            if args.format == 'jsonl':
                save_records_jsonl(rows, output)
            elif args.format == 'csv':
                save_records_csv(rows, output)
            else:
                save_results({'summary': summary, 'records': rows}, output)

        if args.quiet:
            print(json.dumps(summary, indent=2))
        else:
            print_summary(summary)

        return 0 if summary['agreement_rate'] == 1.0 else 1

    except Exception as e:
        logger.error(f"Benchmark command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        overrides = list(args.config or [])
        if args.config_action == 'show':
            manager = ConfigManager()
            config = manager.load_config(overrides=overrides)
            if args.output:
                manager.save_config(args.output)
                if not args.quiet:
                    print(f"Configuration written to {args.output}")
                return 0
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=overrides, validate=False)
                validate_config(config)
                print("✅ Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"❌ Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
