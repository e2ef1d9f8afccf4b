"""File input/output for instances and experiment results."""

from .io import parse_state, save_results, save_records_jsonl, save_records_csv, load_instances

__all__ = [
    'parse_state',
    'save_results',
    'save_records_jsonl',
    'save_records_csv',
    'load_instances'
]
