#!/usr/bin/env python3
"""
Mermaid diagram formatting for Petri nets.

Turns a net description into a Mermaid flowchart so a net can be pasted into
a Markdown document or an issue and inspected.

Usage:
    from petrisim.common.mermaid import to_mermaid

    print(to_mermaid(net))

Places render as circles labelled with their tokens (and capacity when
bounded), transitions as boxes, and each arc kind gets its own edge style:

    regular         p1 --> t1
    inhibitor       p1 --o t1
    bidirectional   p1 <--> t1
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from petrisim.core.mapper import arc_kind
from petrisim.core.specs import ArcKind
from petrisim.models import NetDescription

_UNSAFE = re.compile(r'[^A-Za-z0-9_]')

ARC_EDGES: Dict[ArcKind, str] = {
    ArcKind.REGULAR: "-->",
    ArcKind.INHIBITOR: "--o",
    ArcKind.BIDIRECTIONAL: "<-->",
}

ENABLED_CLASS = "enabled"


def node_id(prefix: str, element_id: str) -> str:
    """
    Mermaid-safe node id. The prefix keeps a place and a transition that
    share an id apart.

    Example:
        >>> node_id("P", "input-1")
        'P_input_1'
    """
    return f"{prefix}_{_UNSAFE.sub('_', element_id)}"


def format_place_node(place_id: str, tokens: int, capacity: Optional[int] = None) -> str:
    """
    Format a place as a circle.

    Example:
        >>> format_place_node("p1", 2)
        '    P_p1(("p1<br/>2"))'
        >>> format_place_node("p1", 1, capacity=3)
        '    P_p1(("p1<br/>1/3"))'
    """
    count = f"{tokens}/{capacity}" if capacity is not None else f"{tokens}"
    return f'    {node_id("P", place_id)}(("{place_id}<br/>{count}"))'


def format_transition_node(transition_id: str, enabled: bool = False) -> str:
    """
    Format a transition as a box; enabled ones get the ``enabled`` class.

    Example:
        >>> format_transition_node("t1", enabled=True)
        '    T_t1["t1"]:::enabled'
    """
    node = f'    {node_id("T", transition_id)}["{transition_id}"]'
    if enabled:
        node = f"{node}:::{ENABLED_CLASS}"
    return node


def format_arc(from_id: str, to_id: str, kind: ArcKind) -> str:
    """
    Format an arc between two already-formatted node ids.

    Example:
        >>> format_arc("P_p1", "T_t1", ArcKind.INHIBITOR)
        '    P_p1 --o T_t1'
    """
    return f"    {from_id} {ARC_EDGES[kind]} {to_id}"


def format_comment(text: str) -> str:
    return f"    %% {text}"


def to_mermaid(net: NetDescription, direction: str = "LR") -> str:
    """
    Render ``net`` as a Mermaid flowchart.

    Arc endpoints that are neither a known place nor a known transition are
    drawn as transitions, so a partially specified net still renders.

    Raises:
        InvalidArgumentError: an arc has an unknown type
    """
    place_ids = {p.id for p in net.places}
    lines: List[str] = [f"graph {direction}"]

    for place in net.places:
        capacity = place.capacity if place.bounded else None
        lines.append(format_place_node(place.id, place.tokens, capacity))

    for transition in net.transitions:
        lines.append(format_transition_node(transition.id, transition.enabled))

    def endpoint(element_id: str) -> str:
        return node_id("P" if element_id in place_ids else "T", element_id)

    for arc in net.arcs:
        kind = arc_kind(arc.type, arc.id)
        lines.append(format_arc(endpoint(arc.incoming_id), endpoint(arc.outgoing_id), kind))

    if any(t.enabled for t in net.transitions):
        lines.append(format_comment("enabled transitions"))
        lines.append(f"    classDef {ENABLED_CLASS} stroke-width:3px")

    return "\n".join(lines)
