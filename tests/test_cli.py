"""Tests for CLI interface."""

import csv
import json

import pytest
from omegaconf import OmegaConf

from bidir_search.cli.main import main_cli, create_parser
from bidir_search.cli.commands import build_overrides, default_goal
from bidir_search.cli.utils import (
    format_duration, ProgressReporter, create_result_summary, print_summary
)
from bidir_search.domains import PancakeDomain, SlidingTileDomain, ExplicitGraphDomain


class TestCLIParser:
    """Test CLI argument parsing."""

    def test_create_parser(self):
        """Test parser creation."""
        parser = create_parser()
        assert parser.prog == 'bidir-search'

    def test_solve_command_parsing(self):
        """Test solve command parsing."""
        parser = create_parser()

        args = parser.parse_args(['solve', '-i', '2,1,3,4'])
        assert args.command == 'solve'
        assert args.initial == '2,1,3,4'
        assert args.algorithm == 'mme'
        assert args.goal is None
        assert args.eps is None

        args = parser.parse_args([
            'solve', '--algorithm', 'gbfhs', '--initial', '2,1,3,4', '--goal', '1,2,3,4',
            '--picker', 'round_robin', '--seed', '3', '--gap-x', '1', '--blind-backward'
        ])
        assert args.algorithm == 'gbfhs'
        assert args.picker == 'round_robin'
        assert args.seed == 3
        assert args.gap_x == 1
        assert args.blind_backward

    def test_initial_is_required(self):
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(['solve'])

    def test_invalid_choice(self):
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(['solve', '-i', '1,2', '--algorithm', 'bfs'])

    def test_benchmark_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['benchmark', '--trials', '5', '--algorithms', 'mme', 'astar',
                                  '--format', 'csv'])
        assert args.trials == 5
        assert args.algorithms == ['mme', 'astar']
        assert args.format == 'csv'

    def test_global_options(self):
        parser = create_parser()
        args = parser.parse_args(['-vv', '-c', 'search.eps=1', '-c', 'domain.size=5',
                                  '-o', 'out.json', 'config', 'show'])
        assert args.verbose == 2
        assert args.config == ['search.eps=1', 'domain.size=5']
        assert args.output == 'out.json'
        assert args.config_action == 'show'


class TestOverrides:
    """Test translation of flags into configuration overrides."""

    def test_only_given_flags(self):
        args = create_parser().parse_args(['solve', '-i', '2,1,3,4', '--eps', '1', '--dim', '4'])
        assert build_overrides(args) == ['search.eps=1', 'domain.dim=4']

    def test_switches_and_global_overrides(self):
        args = create_parser().parse_args([
            '-c', 'search.picker=forward_first', 'solve', '-i', '2,1,3,4',
            '--blind-backward', '--check-invariants'
        ])
        assert build_overrides(args) == [
            'domain.blind_backward=true',
            'search.check_invariants=true',
            'search.picker=forward_first',
        ]

    def test_default_goal(self):
        assert default_goal(PancakeDomain(), (3, 1, 2, 4)) == (1, 2, 3, 4)
        assert default_goal(SlidingTileDomain(dim=2), (1, 2, 0, 3)) == (1, 2, 3, 0)
        with pytest.raises(ValueError):
            default_goal(ExplicitGraphDomain(edges=[(1, 2)]), 1)


class TestCLICommands:
    """Test running commands end to end."""

    def test_no_command(self):
        assert main_cli([]) == 1

    def test_solve(self, tmp_path):
        output = tmp_path / "result.json"
        exit_code = main_cli(['-q', '-o', str(output), 'solve', '-i', '2,1,3,4', '-g', '1,2,3,4'])
        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data['cost'] == 1
        assert data['nodes_expanded'] == 1
        assert data['domain']['name'] == 'pancake'

    def test_solve_puzzle_infers_dim(self, tmp_path):
        output = tmp_path / "result.json"
        exit_code = main_cli(['-q', '-o', str(output), 'solve', '--algorithm', 'gbfhs',
                              '--domain', 'puzzle', '-i', '1,2,0,3'])
        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data['cost'] == 1
        assert data['goal'] == [1, 2, 3, 0]
        assert data['domain']['dim'] == 2

    def test_solve_unsolvable(self, tmp_path):
        output = tmp_path / "result.json"
        exit_code = main_cli(['-q', '-o', str(output), 'solve', '--domain', 'puzzle',
                              '-i', '2,1,3,0', '-g', '1,2,3,0'])
        assert exit_code == 0
        assert json.loads(output.read_text())['cost'] == 'unsolvable'

    def test_solve_budget_exhausted(self, tmp_path):
        output = tmp_path / "result.json"
        exit_code = main_cli(['-q', '-o', str(output), 'solve', '-i', '2,4,1,5,3,6',
                              '--max-expansions', '1'])
        assert exit_code == 1
        assert json.loads(output.read_text())['termination_reason'] == 'budget_exhausted'

    def test_solve_invalid_state(self):
        assert main_cli(['-q', 'solve', '-i', '1,1,3,4', '-g', '1,2,3,4']) == 1

    def test_solve_prints_json(self, capsys):
        assert main_cli(['solve', '-i', '3,1,2,4']) == 0
        captured = capsys.readouterr()
        assert '"cost": 2' in captured.out
        assert "Nodes expanded" in captured.out

    def test_crosscheck(self, tmp_path):
        output = tmp_path / "report.json"
        exit_code = main_cli(['-q', '-o', str(output), 'crosscheck', '-i', '3,5,1,4,2,6'])
        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data['agree'] is True
        assert set(data['costs']) == {'mme', 'gbfhs', 'astar'}

    def test_benchmark_csv(self, tmp_path):
        output = tmp_path / "records.csv"
        exit_code = main_cli(['-q', '-o', str(output), 'benchmark', '--size', '4',
                              '--trials', '3', '--algorithms', 'mme', 'astar', '--format', 'csv'])
        assert exit_code == 0
        with open(output, newline='') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 6

    def test_benchmark_from_instances(self, tmp_path, capsys):
        instances = tmp_path / "instances.jsonl"
        instances.write_text('{"initial": [2, 1, 3, 4], "goal": [1, 2, 3, 4]}\n')
        exit_code = main_cli(['benchmark', '--instances', str(instances), '--report-interval', '1'])
        assert exit_code == 0
        captured = capsys.readouterr()
        assert "BENCHMARK SUMMARY" in captured.out

    def test_config_show(self, capsys):
        assert main_cli(['config', 'show']) == 0
        captured = capsys.readouterr()
        assert "picker: uniform_random" in captured.out

    def test_config_show_to_file(self, tmp_path, capsys):
        """With --output the composed configuration is written as YAML."""
        target = tmp_path / "run.yaml"
        assert main_cli(['-c', 'search.picker=round_robin', '-o', str(target), 'config', 'show']) == 0
        saved = OmegaConf.load(target)
        assert saved.search.picker == "round_robin"
        assert saved.domain.name == "pancake"
        assert "written to" in capsys.readouterr().out

    def test_config_validate(self, capsys):
        assert main_cli(['config', 'validate']) == 0
        assert main_cli(['-c', 'search.eps=0', 'config', 'validate']) == 1
        captured = capsys.readouterr()
        assert "validation failed" in captured.out

    def test_keyboard_interrupt(self, monkeypatch):
        from bidir_search.cli import commands

        def interrupted(args):
            raise KeyboardInterrupt

        monkeypatch.setattr(commands, 'config_command', interrupted)
        assert main_cli(['config', 'show']) == 130


class TestCLIUtils:
    """Test CLI utility functions."""

    def test_format_duration(self):
        assert format_duration(0.0005) == "500.0µs"
        assert format_duration(0.25) == "250.0ms"
        assert format_duration(2.5) == "2.50s"
        assert format_duration(125) == "2m 5.0s"
        assert format_duration(3725) == "1h 2m 5.0s"

    def test_progress_reporter(self, capsys):
        reporter = ProgressReporter(total_instances=4, report_interval=2)
        for _ in range(4):
            reporter.update()
        captured = capsys.readouterr()
        assert captured.out.count("Progress:") == 2
        assert "4/4" in captured.out

    def test_create_result_summary(self):
        summary = create_result_summary({
            'algorithm': 'mme', 'cost': 3, 'termination_reason': 'solved',
            'nodes_expanded': 5, 'statistics': {'collisions': 2},
        })
        assert summary['collisions'] == 2
        assert summary['nodes_generated'] == 0

    def test_print_summary(self, capsys):
        print_summary({
            'instances': 2,
            'agreement_rate': 0.5,
            'algorithms': {'mme': {'solved': 2, 'mean_expansions': 3.0, 'median_expansions': 3.0,
                                   'max_expansions': 4, 'mean_time': 0.01}},
        })
        captured = capsys.readouterr()
        assert "Agreement rate:   50.0%" in captured.out
        assert "disagreed" in captured.out
