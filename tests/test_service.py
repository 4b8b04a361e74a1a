#!/usr/bin/env python3
"""
Tests for the description-level engine facade.
"""

import pytest

import petrisim
from petrisim import (
    AnalysisResult,
    EngineConfig,
    InvalidArgumentError,
    NetDescription,
    PetriNetEngine,
    StepPhase,
    ValidationRequest,
)


# ==================================================================================
# Simulation
# ==================================================================================


class TestProcess:

    def test_process_returns_new_description(self, chain_net):
        after = petrisim.process(chain_net)
        assert isinstance(after, NetDescription)
        assert after.tokens() == {"p1": 0, "p2": 1}
        assert after.enabled_transition_ids() == ["t1"]

    def test_process_leaves_input_alone(self, chain_net):
        petrisim.process(chain_net)
        assert chain_net.tokens() == {"p1": 1, "p2": 0}
        assert chain_net.enabled_transition_ids() == []

    def test_process_keeps_mode_and_selection(self, make_net):
        net = make_net(places=[("p1", 1)], transitions=["t1"], arcs=[("a1", "REGULAR", "p1", "t1")],
                       deterministic=True)
        net.selected_transition_id = "t1"
        after = petrisim.process(net)
        assert after.deterministic_mode is True
        assert after.selected_transition_id == "t1"

    def test_process_deterministic_conflict(self, make_net):
        net = make_net(
            places=[("p1", 1), ("p2", 0), ("p3", 0)],
            transitions=["t1", "t2"],
            arcs=[("a1", "REGULAR", "p1", "t1"), ("a2", "REGULAR", "t1", "p2"),
                  ("a3", "REGULAR", "p1", "t2"), ("a4", "REGULAR", "t2", "p3")],
            deterministic=True,
        )
        after = petrisim.process(net)
        assert after.tokens() == {"p1": 1, "p2": 0, "p3": 0}
        assert after.enabled_transition_ids() == ["t1", "t2"]

    def test_process_uses_injected_rng(self, choice_net, pick_first):
        after = petrisim.process(choice_net, rng=pick_first)
        assert after.tokens() == {"p1": 0, "p2": 1, "p3": 0}

    def test_process_unknown_arc_type(self, make_net):
        net = make_net(places=[("p1", 1)], transitions=["t1"], arcs=[("a1", "RESET", "p1", "t1")])
        with pytest.raises(InvalidArgumentError):
            petrisim.process(net)

    def test_step_reports_phase(self, chain_net):
        outcome = PetriNetEngine().step(chain_net)
        assert outcome.phase is StepPhase.READY
        assert outcome.fired_id == "t1"
        assert not outcome.is_conflict


class TestResolveConflict:

    def test_resolve_by_argument(self, choice_net):
        after = petrisim.resolve_conflict(choice_net, "t1")
        assert after.tokens() == {"p1": 0, "p2": 1, "p3": 0}
        assert after.enabled_transition_ids() == []

    def test_resolve_falls_back_to_selected_transition(self, choice_net):
        choice_net.selected_transition_id = "t2"
        after = petrisim.resolve_conflict(choice_net)
        assert after.tokens() == {"p1": 0, "p2": 0, "p3": 1}
        assert after.selected_transition_id == "t2"

    def test_resolve_without_selection_raises(self, choice_net):
        with pytest.raises(InvalidArgumentError):
            petrisim.resolve_conflict(choice_net)

    def test_resolve_unknown_transition_raises(self, choice_net):
        with pytest.raises(InvalidArgumentError, match="Selected transition not found"):
            petrisim.resolve_conflict(choice_net, "nope")

    def test_conflict_round_trip(self, make_net):
        net = make_net(
            places=[("p1", 1), ("p2", 0), ("p3", 0)],
            transitions=["t1", "t2"],
            arcs=[("a1", "REGULAR", "p1", "t1"), ("a2", "REGULAR", "t1", "p2"),
                  ("a3", "REGULAR", "p1", "t2"), ("a4", "REGULAR", "t2", "p3")],
            deterministic=True,
        )
        engine = PetriNetEngine()
        outcome = engine.step(net)
        assert outcome.is_conflict

        resolved = engine.resolve(outcome.net, outcome.enabled_ids[1])
        assert resolved.is_terminal
        assert resolved.net.tokens() == {"p1": 0, "p2": 0, "p3": 1}


# ==================================================================================
# Analysis
# ==================================================================================


def test_reachable_states_result(chain_net):
    result = petrisim.analyze_reachable_states(chain_net)
    assert isinstance(result, AnalysisResult)
    assert result.analysis_type == "Reachable States"
    assert result.reachable_states_count == 2
    assert result.explored_states_count == 2
    assert result.reached_max_limit is False
    assert result.reachable_states == ["p1:1,p2:0", "p1:0,p2:1"]


def test_reachable_states_with_config(make_net):
    net = make_net(places=[("p1", 0)], transitions=["gen"], arcs=[("a1", "REGULAR", "gen", "p1")])
    result = petrisim.analyze_reachable_states(net, EngineConfig(max_reachable_states=5))
    assert result.reachable_states_count == 5
    assert result.reached_max_limit


def test_liveness_result(make_net):
    net = make_net(places=[("p1", 0)], transitions=["t1"], arcs=[("a1", "REGULAR", "p1", "t1")])
    result = petrisim.analyze_liveness(net)
    assert result.analysis_type == "Liveness Analysis"
    assert result.has_deadlock
    assert result.enabled_transitions_count == 0


def test_boundedness_result(make_net):
    result = petrisim.analyze_boundedness(make_net(places=[("p1", 0, 1), ("p2", 0)]))
    assert result.analysis_type == "Boundedness Analysis"
    assert (result.bounded_places_count, result.unbounded_places_count) == (1, 1)


def test_incidence_matrix_result(cycle_net):
    result = petrisim.compute_incidence_matrix(cycle_net)
    assert result.analysis_type == "Incidence Matrix"
    assert result.incidence_matrix == [[-1, 1], [1, -1]]
    assert result.place_ids == ["p1", "p2"]
    assert result.transition_ids == ["t1", "t2"]


def test_structural_result(chain_net):
    result = petrisim.perform_structural_analysis(chain_net)
    assert result.analysis_type == "Structural Analysis"
    assert result.regular_arcs_count == 2
    assert result.isolated_places_count == 0


def test_analysis_result_wire_keys(chain_net):
    data = petrisim.analyze_liveness(chain_net).to_dict()
    assert data["analysisType"] == "Liveness Analysis"
    assert data["enabledTransitionsCount"] == 1
    assert "incidenceMatrix" not in data


# ==================================================================================
# Validation
# ==================================================================================


def test_validate_with_mappings(chain_net):
    result = petrisim.validate(chain_net, {"p1": 1}, {"p2": 1})
    assert result.valid


def test_validate_request_uses_its_own_configs(chain_net):
    request = ValidationRequest.model_validate({
        **chain_net.to_dict(),
        "inputConfigs": [{"placeId": "p1", "tokens": 1}],
        "expectedOutputs": [{"placeId": "p2", "tokens": 1}],
    })
    result = PetriNetEngine().validate(request)
    assert result.valid
    assert result.to_dict()["outputMatches"] == {"p2": True}


def test_validate_with_config(cycle_net):
    result = petrisim.validate(cycle_net, {"p1": 1}, {}, config=EngineConfig(max_validation_iterations=1))
    assert not result.valid
    assert "maximum allowed number of iterations (1)" in result.message
