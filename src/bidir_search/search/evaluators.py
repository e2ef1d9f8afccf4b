"""Priority and eligibility evaluators for MMe and GBFHS.

These are pure functions of the frontier contents and the heuristic; the
engines decide what to do with the numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from bidir_search.core.data_models import Direction, INFINITY, State, check_direction
from bidir_search.core.exceptions import SearchInvariantError
from bidir_search.domains.base import Problem

from .frontier import Frontier


def priority(g: int, h: int, eps: int) -> int:
    """MMe priority ``pr_D(n) = max(f_D(n), 2 * g_D(n) + eps)``."""
    return max(g + h, 2 * g + eps)


@dataclass
class ScanResult:
    """Minima over one open set and the node MMe would expand next."""
    node: State
    prmin: float
    fmin: float
    gmin: float


def scan(frontier: Frontier, problem: Problem, eps: int) -> ScanResult:
    """Scan the open set of ``frontier`` for ``prmin``, ``fmin`` and ``gmin``.

    The returned node has ``pr == prmin``; among ties the first one seen with
    the strictly smallest ``g`` wins, which is deterministic because the open
    set iterates in insertion order.
    """
    direction = check_direction(frontier.direction)
    if not frontier.open:
        raise SearchInvariantError(f"cannot scan an empty {direction} frontier")

    prmin = fmin = gmin = INFINITY
    best_node = None
    best_g = INFINITY
    for state in frontier.open:
        g = frontier.g[state]
        h = problem.h(state, direction)
        pr = priority(g, h, eps)
        if pr < prmin or (pr == prmin and g < best_g):
            best_node = state
            prmin = pr
            best_g = g
        fmin = min(fmin, g + h)
        gmin = min(gmin, g)
    return ScanResult(node=best_node, prmin=prmin, fmin=fmin, gmin=gmin)


def is_expandable(g: int, h: int, f_lim: int, g_lim: int) -> bool:
    """GBFHS eligibility: ``f_D(n) <= fLim`` and ``g_D(n) < gLim_D``."""
    return g + h <= f_lim and g < g_lim


def is_node_expandable(frontier: Frontier, problem: Problem, state: State,
                       f_lim: int, g_lim: int) -> bool:
    direction = check_direction(frontier.direction)
    return is_expandable(frontier.g[state], problem.h(state, direction), f_lim, g_lim)


def split(g_lim_sum: int, g_lim_f: int, g_lim_b: int) -> Tuple[int, int]:
    """Raise ``(gLim_F, gLim_B)`` so they sum to ``g_lim_sum``.

    The excess is halved with integer division; the forward side gets the
    floor and the backward side the remainder. Neither limit decreases.
    """
    excess = g_lim_sum - g_lim_f - g_lim_b
    if excess < 0:
        raise SearchInvariantError(
            f"g-limit sum {g_lim_sum} is below current limits {g_lim_f} + {g_lim_b}"
        )
    delta_f = excess // 2
    new_f = g_lim_f + delta_f
    new_b = g_lim_b + excess - delta_f
    if new_f + new_b != g_lim_sum or new_f < g_lim_f or new_b < g_lim_b:
        raise SearchInvariantError(
            f"split({g_lim_sum}, {g_lim_f}, {g_lim_b}) produced ({new_f}, {new_b})"
        )
    return new_f, new_b


def select_direction(forward: ScanResult, backward: ScanResult) -> Direction:
    """Direction whose priority attains ``C = min(prmin_F, prmin_B)``; forward on ties."""
    if forward.prmin <= backward.prmin:
        return Direction.FORWARD
    return Direction.BACKWARD
