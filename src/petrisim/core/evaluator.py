#!/usr/bin/env python3
"""
Transition enablement.

A transition is enabled when, in order:

1. no inhibitor arc feeding it comes from a place holding tokens,
2. every place joined to it by a bidirectional arc holds at least one token,
3. every input place holds as many tokens as its incoming regular and
   place-to-transition bidirectional arcs require,
4. firing would not push any bounded output place past its capacity.

Arc ids the net does not know, and arcs whose place end is unknown, are
ignored rather than reported.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterator, Mapping

from .specs import AnyArc, BidirectionalArc, InhibitorArc, Place, RegularArc, Transition

logger = logging.getLogger(__name__)


def _incident_arcs(transition: Transition, arcs: Mapping[str, AnyArc]) -> Iterator[AnyArc]:
    for arc_id in transition.arc_ids:
        arc = arcs.get(arc_id)
        if arc is None:
            continue
        yield arc


def _inhibited(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> bool:
    for arc in _incident_arcs(transition, arcs):
        if isinstance(arc, InhibitorArc) and arc.outgoing_id == transition.id:
            place = places.get(arc.incoming_id)
            if place is not None and place.tokens > 0:
                return True
    return False


def _bidirectional_satisfied(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> bool:
    for arc in _incident_arcs(transition, arcs):
        if isinstance(arc, BidirectionalArc) and arc.touches(transition.id):
            place = places.get(arc.other_end(transition.id))
            if place is not None and place.tokens < 1:
                return False
    return True


def required_tokens(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> Dict[str, int]:
    """Tokens each input place must hold for ``transition`` to fire."""
    required: Dict[str, int] = defaultdict(int)
    for arc in _incident_arcs(transition, arcs):
        if isinstance(arc, (RegularArc, BidirectionalArc)) and arc.outgoing_id == transition.id:
            if arc.incoming_id in places:
                required[arc.incoming_id] += 1
    return dict(required)


def token_delta(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> Dict[str, int]:
    """
    Net change per place if ``transition`` fired. Bidirectional arcs take one
    token and return it, so they never show up here.
    """
    delta: Dict[str, int] = defaultdict(int)
    for arc in _incident_arcs(transition, arcs):
        if not isinstance(arc, RegularArc):
            continue
        if arc.incoming_id == transition.id and arc.outgoing_id in places:
            delta[arc.outgoing_id] += 1
        elif arc.outgoing_id == transition.id and arc.incoming_id in places:
            delta[arc.incoming_id] -= 1
    return dict(delta)


def _capacity_respected(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> bool:
    for place_id, change in token_delta(transition, arcs, places).items():
        place = places[place_id]
        if change > 0 and place.bounded and place.capacity is not None:
            if place.tokens + change > place.capacity:
                return False
    return True


def evaluate_transition(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]) -> bool:
    """
    Decide whether ``transition`` can fire under the current marking.

    Writes the answer to ``transition.enabled`` and returns it. The marking
    is only read, so evaluating twice without firing gives the same answer.

    Args:
        transition: The transition to evaluate
        arcs: Arcs of the net keyed by id
        places: Places of the net keyed by id

    Returns:
        True if the transition is enabled
    """
    enabled = (
        not _inhibited(transition, arcs, places)
        and _bidirectional_satisfied(transition, arcs, places)
        and all(
            places[place_id].tokens >= count
            for place_id, count in required_tokens(transition, arcs, places).items()
        )
        and _capacity_respected(transition, arcs, places)
    )
    transition.enabled = enabled
    logger.debug("[eval] %s enabled=%s", transition.id, enabled)
    return enabled


def evaluate_all(transitions, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]):
    """Evaluate every transition against the same marking; return the enabled ones."""
    return [t for t in transitions if evaluate_transition(t, arcs, places)]
