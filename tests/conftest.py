"""Pytest configuration and shared net builders for petrisim tests"""

from typing import Iterable, Optional, Sequence, Tuple

import pytest

from petrisim.core.mapper import to_domain
from petrisim.models import NetDescription


def describe(
    places: Iterable[tuple] = (),
    transitions: Iterable[str] = (),
    arcs: Iterable[Tuple[str, str, str, str]] = (),
    deterministic: Optional[bool] = None,
) -> NetDescription:
    """Build a NetDescription from compact tuples.

    places: ``(id, tokens)`` or ``(id, tokens, capacity)``; a capacity makes
        the place bounded
    transitions: transition ids; each gets the ids of every arc touching it
    arcs: ``(id, type, incoming_id, outgoing_id)``
    """
    arcs = list(arcs)
    place_list = []
    for entry_tuple in places:
        pid, tokens, *rest = entry_tuple
        entry = {"id": pid, "tokens": tokens}
        if rest:
            entry.update(bounded=True, capacity=rest[0])
        place_list.append(entry)

    return NetDescription.model_validate({
        "places": place_list,
        "transitions": [
            {"id": tid, "enabled": False, "arcIds": [a[0] for a in arcs if tid in (a[2], a[3])]}
            for tid in transitions
        ],
        "arcs": [
            {"id": aid, "type": kind, "incomingId": src, "outgoingId": dst}
            for aid, kind, src, dst in arcs
        ],
        "deterministicMode": deterministic,
    })


class PickIndex:
    """Random source stub that always picks the same position."""

    def __init__(self, index: int):
        self.index = index
        self.calls = 0

    def choice(self, seq: Sequence):
        self.calls += 1
        return seq[self.index]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_net():
    """Factory for NetDescriptions, see ``describe``."""
    return describe


@pytest.fixture
def make_domain():
    """Factory for domain Nets, same arguments as ``describe``."""
    def _make(*args, **kwargs):
        return to_domain(describe(*args, **kwargs))
    return _make


@pytest.fixture
def pick_first():
    return PickIndex(0)


@pytest.fixture
def pick_last():
    return PickIndex(-1)


@pytest.fixture
def chain_net():
    """p1(1) -> t1 -> p2(0)"""
    return describe(
        places=[("p1", 1), ("p2", 0)],
        transitions=["t1"],
        arcs=[("a1", "REGULAR", "p1", "t1"), ("a2", "REGULAR", "t1", "p2")],
    )


@pytest.fixture
def choice_net():
    """p1(1) feeds both t1 -> p2 and t2 -> p3."""
    return describe(
        places=[("p1", 1), ("p2", 0), ("p3", 0)],
        transitions=["t1", "t2"],
        arcs=[
            ("a1", "REGULAR", "p1", "t1"),
            ("a2", "REGULAR", "t1", "p2"),
            ("a3", "REGULAR", "p1", "t2"),
            ("a4", "REGULAR", "t2", "p3"),
        ],
    )


@pytest.fixture
def cycle_net():
    """p1(1) -> t1 -> p2 -> t2 -> p1"""
    return describe(
        places=[("p1", 1), ("p2", 0)],
        transitions=["t1", "t2"],
        arcs=[
            ("a1", "REGULAR", "p1", "t1"),
            ("a2", "REGULAR", "t1", "p2"),
            ("a3", "REGULAR", "p2", "t2"),
            ("a4", "REGULAR", "t2", "p1"),
        ],
    )
