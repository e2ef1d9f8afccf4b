"""Loading instances and persisting search results."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Instance = Tuple[Tuple[Any, ...], Tuple[Any, ...]]


def parse_state(raw: str) -> Tuple[int, ...]:
    """Parse '2,1,3,4' or '2 1 3 4' into a tuple of ints."""
    if raw is None:
        return ()
    raw = str(raw).strip()
    if raw == "":
        return ()
    tokens = raw.replace(",", " ").split()
    try:
        return tuple(int(tok) for tok in tokens)
    except ValueError as e:
        raise ValueError(f"Invalid state {raw!r}: {e}")


def _to_serializable(obj: Any) -> Any:
    """Convert numpy values, tuples and dataclass-like objects for JSON."""
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if hasattr(obj, 'to_dict'):
        return _to_serializable(obj.to_dict())
    if isinstance(obj, dict):
        return {str(k): _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(item) for item in obj]
    return obj


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to a JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    serializable_results = _to_serializable(results)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(serializable_results, f, indent=2, sort_keys=True)
        else:
            json.dump(serializable_results, f)
    logger.info(f"Results saved to {output_path}")


def save_records_jsonl(records: Iterable[Dict[str, Any]], output_path: Union[str, Path]) -> int:
    """Write one JSON object per line; returns the number of records written."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(output_path, 'w') as f:
        for record in records:
            f.write(json.dumps(_to_serializable(record)) + "\n")
            count += 1
    logger.info(f"Wrote {count} records to {output_path}")
    return count


def save_records_csv(records: List[Dict[str, Any]], output_path: Union[str, Path]) -> int:
    """Write flat records to CSV; states are joined with commas inside a cell."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        output_path.write_text("")
        return 0

    fieldnames: List[str] = []
    for record in records:
        for key in record:
            if key not in fieldnames:
                fieldnames.append(key)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for record in records:
            row = {}
            for key, value in record.items():
                if isinstance(value, (list, tuple)):
                    value = ",".join(str(v) for v in value)
                row[key] = _to_serializable(value)
            writer.writerow(row)
    logger.info(f"Wrote {len(records)} records to {output_path}")
    return len(records)


def load_instances(input_path: Union[str, Path]) -> List[Instance]:
    """Load (initial, goal) pairs from a JSON-lines file.

    Each line holds an object with ``initial`` and ``goal`` lists. Blank lines
    are ignored.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a line is not a valid instance
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Instance file not found: {input_path}")

    instances: List[Instance] = []
    with open(input_path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                instances.append((tuple(data['initial']), tuple(data['goal'])))
            except (json.JSONDecodeError, KeyError, TypeError) as e:
                raise ValueError(f"Invalid instance on line {line_no} of {input_path}: {e}")
    return instances
