"""State domains searched by the bidirectional engines.

Each domain exposes successor generation, a direction-aware admissible
heuristic and state equality; ``Problem`` binds a domain to one query.
"""

from typing import Any

from .base import SearchDomain, Problem
from .pancake import PancakeDomain, flip, gap_count
from .puzzle import SlidingTileDomain, inversion_count
from .graph import ExplicitGraphDomain

DOMAINS = {
    PancakeDomain.name: PancakeDomain,
    SlidingTileDomain.name: SlidingTileDomain,
}


def create_domain(name: str, **params: Any) -> SearchDomain:
    """Create a named domain, ignoring parameters it does not take.

    Args:
        name: 'pancake' or 'puzzle'
        **params: Domain parameters (size, gap_x, blind_backward, dim, discount)

    Returns:
        Configured domain
    """
    if name == PancakeDomain.name:
        return PancakeDomain(
            size=int(params['size']) if params.get('size') else None,
            gap_x=int(params.get('gap_x', 0) or 0),
            blind_backward=bool(params.get('blind_backward', False)),
        )
    if name == SlidingTileDomain.name:
        return SlidingTileDomain(
            dim=int(params.get('dim', 3) or 3),
            discount=int(params.get('discount', 0) or 0),
        )
    raise ValueError(f"Unknown domain: {name} (expected one of {sorted(DOMAINS)})")


__all__ = [
    'SearchDomain',
    'Problem',
    'PancakeDomain',
    'SlidingTileDomain',
    'ExplicitGraphDomain',
    'flip',
    'gap_count',
    'inversion_count',
    'DOMAINS',
    'create_domain'
]
