#!/usr/bin/env python3
"""
Petrisim - Domain Layer

Places, transitions and arcs as the engine sees them. A Net is rebuilt from a
description on every call, mutated only inside that call, and serialized back
out; nothing here is shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class ArcKind(Enum):
    """Closed set of arc semantics. Values are the wire strings."""
    REGULAR = "REGULAR"  # consume at source, produce at target
    INHIBITOR = "INHIBITOR"  # block while the source place holds tokens
    BIDIRECTIONAL = "BIDIRECTIONAL"  # require a token and give it back


class Place:
    """
    A token holder with an optional capacity.

    The constructor normalizes its inputs so the invariant
    ``0 <= tokens <= capacity`` (capacity only when bounded) always holds:
    negative tokens become 0, an unbounded place forgets its capacity, a
    bounded place with no usable capacity gets 0, and surplus tokens are cut.
    """

    __slots__ = ('id', 'bounded', 'capacity', '_tokens')

    def __init__(self, id: str, tokens: int = 0, bounded: bool = False, capacity: Optional[int] = None):
        self.id = id
        self.bounded = bool(bounded)
        if self.bounded:
            self.capacity: Optional[int] = capacity if capacity is not None and capacity >= 0 else 0
        else:
            self.capacity = None
        self._tokens = 0
        self.set_tokens(tokens)

    @property
    def tokens(self) -> int:
        return self._tokens

    @property
    def is_full(self) -> bool:
        return self.bounded and self.capacity is not None and self._tokens >= self.capacity

    def set_tokens(self, tokens: int):
        """Overwrite the token count, clamped into ``[0, capacity]``."""
        tokens = max(0, tokens)
        if self.bounded and self.capacity is not None:
            tokens = min(tokens, self.capacity)
        self._tokens = tokens

    def add_token(self):
        """Add one token. A full bounded place stays as it is."""
        if not self.is_full:
            self._tokens += 1

    def remove_token(self):
        """Remove one token, never going below zero."""
        if self._tokens > 0:
            self._tokens -= 1

    def copy(self) -> 'Place':
        return Place(self.id, self._tokens, self.bounded, self.capacity)

    def __eq__(self, other):
        if not isinstance(other, Place):
            return NotImplemented
        return (self.id, self._tokens, self.bounded, self.capacity) == \
            (other.id, other._tokens, other.bounded, other.capacity)

    def __repr__(self):
        cap = f", capacity={self.capacity}" if self.bounded else ""
        return f"Place({self.id!r}, tokens={self._tokens}{cap})"


@dataclass
class Transition:
    """An action node. ``enabled`` is recomputed by the evaluator on every call."""
    id: str
    enabled: bool = False
    arc_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Arc:
    """
    Directed connection, flow runs ``incoming_id -> outgoing_id``.

    One endpoint is a place id and the other a transition id. Only the three
    variants below are ever instantiated.
    """
    id: str
    incoming_id: str
    outgoing_id: str

    kind = None  # overridden by each variant

    def touches(self, node_id: str) -> bool:
        return self.incoming_id == node_id or self.outgoing_id == node_id

    def other_end(self, node_id: str) -> str:
        """The endpoint that is not ``node_id``."""
        return self.outgoing_id if self.incoming_id == node_id else self.incoming_id


@dataclass(frozen=True)
class RegularArc(Arc):
    kind = ArcKind.REGULAR


@dataclass(frozen=True)
class InhibitorArc(Arc):
    kind = ArcKind.INHIBITOR


@dataclass(frozen=True)
class BidirectionalArc(Arc):
    kind = ArcKind.BIDIRECTIONAL


AnyArc = Union[RegularArc, InhibitorArc, BidirectionalArc]

ARC_TYPES: Dict[ArcKind, type] = {
    ArcKind.REGULAR: RegularArc,
    ArcKind.INHIBITOR: InhibitorArc,
    ArcKind.BIDIRECTIONAL: BidirectionalArc,
}


def make_arc(kind: ArcKind, id: str, incoming_id: str, outgoing_id: str) -> AnyArc:
    return ARC_TYPES[kind](id=id, incoming_id=incoming_id, outgoing_id=outgoing_id)


@dataclass
class Net:
    """
    A net owned by a single call.

    ``places`` and ``arcs`` are keyed by id and keep insertion order, which
    is also the row order of the incidence matrix.
    """
    places: Dict[str, Place] = field(default_factory=dict)
    transitions: List[Transition] = field(default_factory=list)
    arcs: Dict[str, AnyArc] = field(default_factory=dict)
    deterministic_mode: Optional[bool] = None
    selected_transition_id: Optional[str] = None

    @property
    def is_deterministic(self) -> bool:
        return self.deterministic_mode is True

    def transition(self, transition_id: str) -> Optional[Transition]:
        for t in self.transitions:
            if t.id == transition_id:
                return t
        return None

    def marking(self) -> Dict[str, int]:
        return {pid: p.tokens for pid, p in self.places.items()}

    def total_tokens(self) -> int:
        return sum(p.tokens for p in self.places.values())

    def enabled_transitions(self) -> List[Transition]:
        return [t for t in self.transitions if t.enabled]

    def copy(self) -> 'Net':
        """Independent deep copy; arcs are immutable and shared."""
        return Net(
            places={pid: p.copy() for pid, p in self.places.items()},
            transitions=[Transition(t.id, t.enabled, list(t.arc_ids)) for t in self.transitions],
            arcs=dict(self.arcs),
            deterministic_mode=self.deterministic_mode,
            selected_transition_id=self.selected_transition_id,
        )
