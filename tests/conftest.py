"""Shared fixtures for the bidirectional search tests."""

import pytest

from bidir_search.domains import PancakeDomain, SlidingTileDomain, ExplicitGraphDomain
from bidir_search.search import SearchConfig


@pytest.fixture
def pancake():
    """Full GAP heuristic pancake domain."""
    return PancakeDomain()


@pytest.fixture
def puzzle():
    """3x3 sliding-tile domain."""
    return SlidingTileDomain(dim=3)


@pytest.fixture
def two_component_graph():
    """Two disconnected paths: a-b-c and x-y."""
    return ExplicitGraphDomain(edges=[('a', 'b'), ('b', 'c'), ('x', 'y')])


@pytest.fixture
def deterministic_config():
    """Reproducible configuration with invariant checks enabled."""
    return SearchConfig(picker='round_robin', seed=0, check_invariants=True)
