#!/usr/bin/env python3
"""
Reachability exploration.

Breadth-first search over markings. From every explored marking, each
enabled transition is fired on its own copy of that marking, so the search
follows every branch (unlike the validator, which follows one path).

The search stops after ``max_reachable_states`` explored markings. For nets
with large or unbounded state spaces the count is therefore a lower bound,
and the result says so through ``reached_max_limit``.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set

from petrisim.config import DEFAULT_CONFIG, EngineConfig
from petrisim.core.evaluator import evaluate_all
from petrisim.core.firing import fire_transition
from petrisim.core.mapper import state_signature
from petrisim.core.specs import Net

logger = logging.getLogger(__name__)


@dataclass
class ReachabilityReport:
    """Raw outcome of a reachability search."""
    reachable_states: List[str] = field(default_factory=list)  # signatures in discovery order
    explored_count: int = 0
    reached_limit: bool = False

    @property
    def reachable_count(self) -> int:
        return len(self.reachable_states)

    @property
    def details(self) -> str:
        suffix = " (limited by safety threshold)" if self.reached_limit else ""
        return f"Found {self.reachable_count} reachable states{suffix}"


class ReachabilityExplorer:
    """Bounded BFS over the markings reachable from a starting net."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def _successors(self, state: Net) -> List[Net]:
        """One successor per transition enabled in ``state``."""
        successors = []
        for transition in evaluate_all(state.transitions, state.arcs, state.places):
            successor = state.copy()
            fire_transition(transition, successor.arcs, successor.places)
            successors.append(successor)
        return successors

    def explore(self, net: Net) -> ReachabilityReport:
        """
        Explore from ``net`` without modifying it.

        Returns:
            ReachabilityReport with every distinct signature seen, the number
            of markings expanded, and whether the cap cut the search short
        """
        limit = self.config.max_reachable_states
        report = ReachabilityReport()
        seen: Set[str] = set()
        queue: Deque[Net] = deque([net.copy()])

        while queue and report.explored_count < limit:
            state = queue.popleft()
            signature = state_signature(state)
            if signature in seen:
                continue

            seen.add(signature)
            report.reachable_states.append(signature)
            report.explored_count += 1
            queue.extend(self._successors(state))

        report.reached_limit = report.explored_count >= limit
        logger.debug(
            "[reach] explored=%d reachable=%d limit_hit=%s pending=%d",
            report.explored_count, report.reachable_count, report.reached_limit, len(queue),
        )
        return report
