#!/usr/bin/env python3
"""
Petrisim Engine Facade

Entry points that take and return net descriptions. Each call maps the
description to a fresh domain net, runs one component on it, and maps the
result back; no state survives between calls.

Invalid-argument errors (unknown arc types, duplicate ids, unknown conflict
choices) propagate to the caller. Mapping them to a transport-level error is
the boundary layer's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from petrisim.analysis.reachability import ReachabilityExplorer
from petrisim.analysis.structure import (
    analyze_structure,
    check_liveness,
    count_bounded_places,
    incidence_matrix,
)
from petrisim.config import DEFAULT_CONFIG, EngineConfig
from petrisim.core.mapper import to_description, to_domain
from petrisim.core.runtime import RandomSource, StepOutcome, StepPhase, StepProcessor
from petrisim.exceptions import InvalidArgumentError
from petrisim.models import AnalysisResult, NetDescription, ValidationRequest, ValidationResult
from petrisim.validation import Validator

logger = logging.getLogger(__name__)


@dataclass
class DescribedOutcome:
    """Like StepOutcome, with the net serialized back to a description."""
    phase: StepPhase
    net: NetDescription
    enabled_ids: List[str] = field(default_factory=list)
    fired_id: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: StepOutcome, template: NetDescription) -> 'DescribedOutcome':
        return cls(
            phase=outcome.phase,
            net=to_description(outcome.net, template),
            enabled_ids=list(outcome.enabled_ids),
            fired_id=outcome.fired_id,
        )

    @property
    def is_conflict(self) -> bool:
        return self.phase is StepPhase.CONFLICT

    @property
    def is_terminal(self) -> bool:
        return self.phase is StepPhase.TERMINAL


class PetriNetEngine:
    """
    Simulation, analysis and validation over net descriptions.

    Args:
        config: Safety limits; defaults to DEFAULT_CONFIG
        rng: Source for the random pick in non-deterministic steps
    """

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[RandomSource] = None):
        self.config = config or DEFAULT_CONFIG
        self.processor = StepProcessor(rng)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self, description: NetDescription) -> DescribedOutcome:
        """Run one step and report the protocol phase along with the new net."""
        outcome = self.processor.step(to_domain(description))
        return DescribedOutcome.from_outcome(outcome, description)

    def process(self, description: NetDescription) -> NetDescription:
        """One simulation step; see StepProcessor.step."""
        return self.step(description).net

    def resolve(self, description: NetDescription, selected_id: Optional[str] = None) -> DescribedOutcome:
        selected_id = selected_id if selected_id is not None else description.selected_transition_id
        if selected_id is None:
            raise InvalidArgumentError("No transition selected to resolve the conflict")
        outcome = self.processor.resolve(to_domain(description), selected_id)
        return DescribedOutcome.from_outcome(outcome, description)

    def resolve_conflict(self, description: NetDescription, selected_id: Optional[str] = None) -> NetDescription:
        """
        Fire the chosen transition of a conflict and re-evaluate.

        ``selected_id`` falls back to the description's
        ``selectedTransitionId``.

        Raises:
            InvalidArgumentError: no selection, or it matches no transition
        """
        return self.resolve(description, selected_id).net

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze_reachable_states(self, description: NetDescription) -> AnalysisResult:
        report = ReachabilityExplorer(self.config).explore(to_domain(description))
        return AnalysisResult(
            analysis_type="Reachable States",
            details=report.details,
            reachable_states_count=report.reachable_count,
            explored_states_count=report.explored_count,
            reached_max_limit=report.reached_limit,
            reachable_states=list(report.reachable_states),
        )

    def analyze_liveness(self, description: NetDescription) -> AnalysisResult:
        report = check_liveness(to_domain(description))
        return AnalysisResult(
            analysis_type="Liveness Analysis",
            details=report.details,
            has_deadlock=report.has_deadlock,
            enabled_transitions_count=report.enabled_count,
        )

    def analyze_boundedness(self, description: NetDescription) -> AnalysisResult:
        report = count_bounded_places(to_domain(description))
        return AnalysisResult(
            analysis_type="Boundedness Analysis",
            details=report.details,
            bounded_places_count=report.bounded_count,
            unbounded_places_count=report.unbounded_count,
        )

    def compute_incidence_matrix(self, description: NetDescription) -> AnalysisResult:
        matrix = incidence_matrix(to_domain(description))
        return AnalysisResult(
            analysis_type="Incidence Matrix",
            details=matrix.details,
            incidence_matrix=matrix.rows,
            place_ids=matrix.place_ids,
            transition_ids=matrix.transition_ids,
        )

    def perform_structural_analysis(self, description: NetDescription) -> AnalysisResult:
        report = analyze_structure(to_domain(description))
        return AnalysisResult(
            analysis_type="Structural Analysis",
            details=report.details,
            regular_arcs_count=report.regular_arcs,
            inhibitor_arcs_count=report.inhibitor_arcs,
            bidirectional_arcs_count=report.bidirectional_arcs,
            isolated_places_count=report.isolated_places,
            isolated_transitions_count=report.isolated_transitions,
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(
        self,
        description: NetDescription,
        inputs: Optional[Mapping[str, int]] = None,
        expected_outputs: Optional[Mapping[str, int]] = None,
    ) -> ValidationResult:
        """
        Validate a net. A ValidationRequest supplies its own inputs and
        expectations; explicit arguments take precedence over them.
        """
        if isinstance(description, ValidationRequest):
            inputs = description.inputs() if inputs is None else inputs
            expected_outputs = description.expectations() if expected_outputs is None else expected_outputs
        validator = Validator(self.config, self.processor)
        return validator.validate(to_domain(description), inputs or {}, expected_outputs or {})


# ============================================================================
# Module-level entry points
# ============================================================================
# Each builds a throwaway engine, so nothing is shared between calls.

def process(description: NetDescription, rng: Optional[RandomSource] = None) -> NetDescription:
    return PetriNetEngine(rng=rng).process(description)


def resolve_conflict(description: NetDescription, selected_id: Optional[str] = None) -> NetDescription:
    return PetriNetEngine().resolve_conflict(description, selected_id)


def analyze_reachable_states(description: NetDescription, config: Optional[EngineConfig] = None) -> AnalysisResult:
    return PetriNetEngine(config).analyze_reachable_states(description)


def analyze_liveness(description: NetDescription) -> AnalysisResult:
    return PetriNetEngine().analyze_liveness(description)


def analyze_boundedness(description: NetDescription) -> AnalysisResult:
    return PetriNetEngine().analyze_boundedness(description)


def compute_incidence_matrix(description: NetDescription) -> AnalysisResult:
    return PetriNetEngine().compute_incidence_matrix(description)


def perform_structural_analysis(description: NetDescription) -> AnalysisResult:
    return PetriNetEngine().perform_structural_analysis(description)


def validate(
    description: NetDescription,
    inputs: Optional[Mapping[str, int]] = None,
    expected_outputs: Optional[Mapping[str, int]] = None,
    config: Optional[EngineConfig] = None,
) -> ValidationResult:
    return PetriNetEngine(config).validate(description, inputs, expected_outputs)
