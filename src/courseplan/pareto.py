from __future__ import annotations

import logging
from typing import List, Sequence

from .models import EvaluatedSchedule

logger = logging.getLogger(__name__)


def dominates(a: EvaluatedSchedule, b: EvaluatedSchedule) -> bool:
    """
    True when `a` is no worse than `b` on every metric (all minimized) and
    strictly better on at least one. Identical metrics do not dominate.
    """
    better = False
    for mine, theirs in zip(a.metrics, b.metrics):
        if mine > theirs:
            return False
        if mine < theirs:
            better = True
    return better


def prune_dominated(evaluated: Sequence[EvaluatedSchedule]) -> List[EvaluatedSchedule]:
    """
    Drop every schedule dominated by some other schedule in the input.

    Every pair is compared against the original list (one pass, not repeated
    until stable). Schedules with equal metrics are all kept, and survivors
    keep their input order.
    """
    n = len(evaluated)
    dominated = [False] * n

    for i in range(n):
        for j in range(n):
            if i != j and not dominated[j] and dominates(evaluated[i], evaluated[j]):
                dominated[j] = True

    kept = [ev for ev, out in zip(evaluated, dominated) if not out]

    pruned = n - len(kept)
    if n:
        logger.info("Pruned %d of %d schedules (%.1f%%)", pruned, n, pruned / n * 100.0)
    return kept
