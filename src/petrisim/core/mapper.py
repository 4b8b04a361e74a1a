#!/usr/bin/env python3
"""
Description <-> domain mapping.

Every engine entry point starts by turning a NetDescription into a fresh Net
and ends by turning the Net back into a description. Arc type strings are
checked here, so a bad type fails before any evaluation happens.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from petrisim.exceptions import InvalidArgumentError
from petrisim.models import (
    ArcDescription,
    NetDescription,
    PlaceDescription,
    TransitionDescription,
)
from .specs import AnyArc, ArcKind, Net, Place, Transition, make_arc

logger = logging.getLogger(__name__)


def arc_kind(type_name: str, arc_id: Optional[str] = None) -> ArcKind:
    """Resolve a wire arc type (``REGULAR``, ``INHIBITOR``, ``BIDIRECTIONAL``)."""
    try:
        return ArcKind(type_name)
    except ValueError:
        raise InvalidArgumentError(
            f"Unsupported arc type {type_name!r} for arc {arc_id!r}"
        ) from None


def place_from_description(desc: PlaceDescription) -> Place:
    return Place(desc.id, desc.tokens, desc.bounded, desc.capacity)


def transition_from_description(desc: TransitionDescription) -> Transition:
    return Transition(desc.id, desc.enabled, list(desc.arc_ids))


def arc_from_description(desc: ArcDescription) -> AnyArc:
    return make_arc(arc_kind(desc.type, desc.id), desc.id, desc.incoming_id, desc.outgoing_id)


def map_places(descriptions: Iterable[PlaceDescription]) -> Dict[str, Place]:
    places: Dict[str, Place] = {}
    for desc in descriptions:
        if desc.id in places:
            raise InvalidArgumentError(f"Duplicate place id: {desc.id}")
        places[desc.id] = place_from_description(desc)
    return places


def map_arcs(descriptions: Iterable[ArcDescription]) -> Dict[str, AnyArc]:
    arcs: Dict[str, AnyArc] = {}
    for desc in descriptions:
        if desc.id in arcs:
            raise InvalidArgumentError(f"Duplicate arc id: {desc.id}")
        arcs[desc.id] = arc_from_description(desc)
    return arcs


def to_domain(description: NetDescription) -> Net:
    """Build a Net owned by the caller from a description."""
    # Arcs first so a bad arc type is reported before anything else
    arcs = map_arcs(description.arcs)
    net = Net(
        places=map_places(description.places),
        transitions=[transition_from_description(t) for t in description.transitions],
        arcs=arcs,
        deterministic_mode=description.deterministic_mode,
        selected_transition_id=description.selected_transition_id,
    )
    logger.debug(
        "[map] net with %d places, %d transitions, %d arcs",
        len(net.places), len(net.transitions), len(net.arcs),
    )
    return net


def to_description(net: Net, template: Optional[NetDescription] = None) -> NetDescription:
    """
    Serialize a Net.

    Args:
        net: The domain net to serialize
        template: Description the net came from. Its ``deterministicMode`` and
            ``selectedTransitionId`` are carried over; without a template the
            net's own values are used.
    """
    if template is not None:
        deterministic_mode = template.deterministic_mode
        selected = template.selected_transition_id
    else:
        deterministic_mode = net.deterministic_mode
        selected = net.selected_transition_id

    return NetDescription(
        places=[
            PlaceDescription(id=p.id, tokens=p.tokens, bounded=p.bounded, capacity=p.capacity)
            for p in net.places.values()
        ],
        transitions=[
            TransitionDescription(id=t.id, enabled=t.enabled, arc_ids=list(t.arc_ids))
            for t in net.transitions
        ],
        arcs=[
            ArcDescription(id=a.id, type=a.kind.value, incoming_id=a.incoming_id, outgoing_id=a.outgoing_id)
            for a in net.arcs.values()
        ],
        deterministic_mode=deterministic_mode,
        selected_transition_id=selected,
    )


def state_signature(net: Net) -> str:
    """
    Canonical string for a marking: ``placeId:tokens`` pairs sorted by place
    id and joined with commas. Two nets with equal signatures are the same
    state regardless of transition flags or arc structure.
    """
    return ",".join(f"{pid}:{net.places[pid].tokens}" for pid in sorted(net.places))


def marking_signature(marking: Dict[str, int]) -> str:
    """Same format as state_signature, from a plain ``{place_id: tokens}`` map."""
    return ",".join(f"{pid}:{marking[pid]}" for pid in sorted(marking))


def transition_ids(transitions: Iterable[Transition]) -> List[str]:
    return [t.id for t in transitions]
