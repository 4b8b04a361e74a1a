#!/usr/bin/env python3
"""
Tests for description <-> domain mapping and state signatures.
"""

import pytest

from petrisim.core.mapper import (
    arc_kind,
    marking_signature,
    state_signature,
    to_description,
    to_domain,
)
from petrisim.core.specs import ArcKind, BidirectionalArc, InhibitorArc, RegularArc
from petrisim.exceptions import InvalidArgumentError, PetriNetError


# ==================================================================================
# Arc types
# ==================================================================================


def test_arc_kind_accepts_wire_names():
    assert arc_kind("REGULAR") is ArcKind.REGULAR
    assert arc_kind("INHIBITOR") is ArcKind.INHIBITOR
    assert arc_kind("BIDIRECTIONAL") is ArcKind.BIDIRECTIONAL


def test_arc_kind_rejects_unknown_type():
    with pytest.raises(InvalidArgumentError, match="Unsupported arc type"):
        arc_kind("RESET", "a9")


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        arc_kind("regular")
    assert issubclass(InvalidArgumentError, PetriNetError)


# ==================================================================================
# to_domain
# ==================================================================================


def test_to_domain_builds_arc_variants(make_net):
    desc = make_net(
        places=[("p1", 1), ("p2", 0), ("p3", 1)],
        transitions=["t1"],
        arcs=[
            ("a1", "REGULAR", "p1", "t1"),
            ("a2", "INHIBITOR", "p2", "t1"),
            ("a3", "BIDIRECTIONAL", "p3", "t1"),
        ],
    )
    net = to_domain(desc)

    assert isinstance(net.arcs["a1"], RegularArc)
    assert isinstance(net.arcs["a2"], InhibitorArc)
    assert isinstance(net.arcs["a3"], BidirectionalArc)
    assert list(net.places) == ["p1", "p2", "p3"]
    assert net.transitions[0].arc_ids == ["a1", "a2", "a3"]


def test_to_domain_unknown_arc_type_raises(make_net):
    desc = make_net(places=[("p1", 1)], transitions=["t1"], arcs=[("a1", "WEIGHTED", "p1", "t1")])
    with pytest.raises(InvalidArgumentError):
        to_domain(desc)


def test_to_domain_duplicate_place_raises(make_net):
    desc = make_net(places=[("p1", 1), ("p1", 2)])
    with pytest.raises(InvalidArgumentError, match="Duplicate place id"):
        to_domain(desc)


def test_to_domain_duplicate_arc_raises(make_net):
    desc = make_net(
        places=[("p1", 1)],
        transitions=["t1"],
        arcs=[("a1", "REGULAR", "p1", "t1"), ("a1", "REGULAR", "t1", "p1")],
    )
    with pytest.raises(InvalidArgumentError, match="Duplicate arc id"):
        to_domain(desc)


def test_to_domain_normalizes_places(make_net):
    net = to_domain(make_net(places=[("p1", 7, 3), ("p2", -2)]))
    assert net.places["p1"].tokens == 3
    assert net.places["p2"].tokens == 0


def test_to_domain_does_not_alias_description(chain_net):
    net = to_domain(chain_net)
    net.places["p1"].remove_token()
    net.transitions[0].arc_ids.clear()
    assert chain_net.place("p1").tokens == 1
    assert chain_net.transition("t1").arc_ids == ["a1", "a2"]


# ==================================================================================
# to_description
# ==================================================================================


def test_round_trip_keeps_structure(make_net):
    desc = make_net(
        places=[("p1", 1, 2), ("p2", 0)],
        transitions=["t1"],
        arcs=[("a1", "REGULAR", "p1", "t1"), ("a2", "INHIBITOR", "p2", "t1")],
        deterministic=True,
    )
    back = to_description(to_domain(desc), desc)
    assert back == desc


def test_template_mode_wins_over_net(chain_net):
    net = to_domain(chain_net)
    net.deterministic_mode = True
    assert to_description(net, chain_net).deterministic_mode is None
    assert to_description(net).deterministic_mode is True


# ==================================================================================
# Signatures
# ==================================================================================


def test_state_signature_sorted_by_place_id(make_net):
    net = to_domain(make_net(places=[("b", 2), ("a", 0), ("c", 1)]))
    assert state_signature(net) == "a:0,b:2,c:1"


def test_state_signature_ignores_transition_flags(chain_net):
    net = to_domain(chain_net)
    before = state_signature(net)
    net.transitions[0].enabled = True
    assert state_signature(net) == before


def test_marking_signature_matches_state_signature(chain_net):
    net = to_domain(chain_net)
    assert marking_signature(net.marking()) == state_signature(net)


def test_empty_net_signature():
    assert marking_signature({}) == ""
