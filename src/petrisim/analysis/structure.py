#!/usr/bin/env python3
"""
Stateless analyses over net structure and the current marking.

None of these are exact Petri net properties:

- liveness looks at the current marking only (a deadlock here means nothing
  is enabled right now, not that the net is dead from every reachable state)
- boundedness counts which places were configured with a capacity; it does
  not check that firing respects any bound
- the incidence matrix and structural counts ignore the marking entirely
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Set

from petrisim.core.evaluator import evaluate_all
from petrisim.core.specs import BidirectionalArc, InhibitorArc, Net, RegularArc

logger = logging.getLogger(__name__)


# ============================================================================
# Liveness
# ============================================================================

@dataclass
class LivenessReport:
    has_deadlock: bool
    enabled_count: int
    details: str


def check_liveness(net: Net) -> LivenessReport:
    """Single-marking approximation of liveness. Resets ``enabled`` flags."""
    enabled = evaluate_all(net.transitions, net.arcs, net.places)

    if not enabled and net.transitions:
        logger.debug("[liveness] deadlock across %d transitions", len(net.transitions))
        return LivenessReport(True, 0, "DEADLOCK DETECTED: No transitions are currently enabled.")

    return LivenessReport(
        False,
        len(enabled),
        f"Currently {len(enabled)} transitions are enabled. "
        "Full liveness analysis requires reachability graph exploration.",
    )


# ============================================================================
# Boundedness
# ============================================================================

@dataclass
class BoundednessReport:
    bounded_count: int
    unbounded_count: int

    @property
    def details(self) -> str:
        return (
            f"Found {self.bounded_count} bounded places and {self.unbounded_count} unbounded places. "
            "Unbounded places can potentially accumulate infinite tokens."
        )


def count_bounded_places(net: Net) -> BoundednessReport:
    bounded = sum(1 for p in net.places.values() if p.bounded)
    return BoundednessReport(bounded, len(net.places) - bounded)


# ============================================================================
# Incidence Matrix
# ============================================================================

@dataclass
class IncidenceMatrix:
    """Rows follow ``place_ids``, columns follow ``transition_ids``."""
    place_ids: List[str]
    transition_ids: List[str]
    rows: List[List[int]]

    def entry(self, place_id: str, transition_id: str) -> int:
        return self.rows[self.place_ids.index(place_id)][self.transition_ids.index(transition_id)]

    @property
    def details(self) -> str:
        return f"Incidence matrix computed: {len(self.place_ids)} places × {len(self.transition_ids)} transitions"


def incidence_matrix(net: Net) -> IncidenceMatrix:
    """
    Production minus consumption for every (place, transition) pair.

    Regular arcs count -1 at their source place and +1 at their target
    place. A bidirectional arc adds both, so it nets to zero. Inhibitor arcs
    contribute nothing. Which endpoint is the place is decided by membership
    in the net's places and transitions; a bidirectional arc that does not
    fit place -> transition is tried the other way round.
    """
    place_ids = list(net.places)
    transition_ids = [t.id for t in net.transitions]
    place_index = {pid: i for i, pid in enumerate(place_ids)}
    transition_index = {}
    for j, tid in enumerate(transition_ids):
        transition_index.setdefault(tid, j)
    rows = [[0] * len(transition_ids) for _ in place_ids]

    for arc in net.arcs.values():
        if isinstance(arc, BidirectionalArc):
            for place_id, trans_id in ((arc.incoming_id, arc.outgoing_id), (arc.outgoing_id, arc.incoming_id)):
                if place_id in place_index and trans_id in transition_index:
                    i, j = place_index[place_id], transition_index[trans_id]
                    rows[i][j] -= 1
                    rows[i][j] += 1
                    break
        elif isinstance(arc, RegularArc):
            if arc.incoming_id in place_index and arc.outgoing_id in transition_index:
                rows[place_index[arc.incoming_id]][transition_index[arc.outgoing_id]] -= 1
            if arc.outgoing_id in place_index and arc.incoming_id in transition_index:
                rows[place_index[arc.outgoing_id]][transition_index[arc.incoming_id]] += 1

    return IncidenceMatrix(place_ids, transition_ids, rows)


# ============================================================================
# Structure
# ============================================================================

@dataclass
class StructureReport:
    regular_arcs: int
    inhibitor_arcs: int
    bidirectional_arcs: int
    isolated_places: int
    isolated_transitions: int

    @property
    def details(self) -> str:
        return (
            f"Structural analysis: {self.regular_arcs} regular, {self.inhibitor_arcs} inhibitor, "
            f"{self.bidirectional_arcs} bidirectional arcs. "
            f"{self.isolated_places} isolated places, {self.isolated_transitions} isolated transitions."
        )


def analyze_structure(net: Net) -> StructureReport:
    """
    Arc counts per kind and elements no arc touches.

    An arc endpoint that is a known place marks that place as connected;
    any other endpoint is taken to be a transition id.
    """
    arcs = list(net.arcs.values())
    connected_places: Set[str] = set()
    connected_transitions: Set[str] = set()

    for arc in arcs:
        for endpoint in (arc.incoming_id, arc.outgoing_id):
            if endpoint in net.places:
                connected_places.add(endpoint)
            else:
                connected_transitions.add(endpoint)

    return StructureReport(
        regular_arcs=sum(1 for a in arcs if isinstance(a, RegularArc)),
        inhibitor_arcs=sum(1 for a in arcs if isinstance(a, InhibitorArc)),
        bidirectional_arcs=sum(1 for a in arcs if isinstance(a, BidirectionalArc)),
        isolated_places=sum(1 for pid in net.places if pid not in connected_places),
        isolated_transitions=sum(1 for t in net.transitions if t.id not in connected_transitions),
    )
