#!/usr/bin/env python3
"""
Token firing.

Moves tokens for one transition. Only places connected through the
transition's own arcs change, and no ``enabled`` flag is touched; deciding
what may fire next is the evaluator's job.
"""

import logging
from typing import Mapping

from .specs import AnyArc, BidirectionalArc, Place, RegularArc, Transition

logger = logging.getLogger(__name__)


def fire_transition(transition: Transition, arcs: Mapping[str, AnyArc], places: Mapping[str, Place]):
    """
    Fire ``transition`` against ``places`` in place.

    - Regular place -> transition: one token leaves the source (never below 0)
    - Regular transition -> place: one token lands in the target
    - Bidirectional: the connected place gives up a token and gets it back
    - Inhibitor: nothing
    """
    logger.debug("[fire] %s", transition.id)
    for arc_id in transition.arc_ids:
        arc = arcs.get(arc_id)
        if arc is None:
            continue

        if isinstance(arc, RegularArc):
            if arc.outgoing_id == transition.id:
                source = places.get(arc.incoming_id)
                if source is not None:
                    source.remove_token()
            elif arc.incoming_id == transition.id:
                target = places.get(arc.outgoing_id)
                if target is not None:
                    target.add_token()

        elif isinstance(arc, BidirectionalArc) and arc.touches(transition.id):
            place = places.get(arc.other_end(transition.id))
            if place is not None:
                place.remove_token()
                place.add_token()
