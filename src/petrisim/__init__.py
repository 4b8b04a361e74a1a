#!/usr/bin/env python3
"""
Petrisim - Petri net simulation and analysis

Steps, analyzes and validates Petri nets with regular, inhibitor and
bidirectional arcs and optional place capacities.

Usage:
    from petrisim import NetDescription, process, validate

    net = NetDescription.model_validate({
        "places": [{"id": "p1", "tokens": 1}, {"id": "p2"}],
        "transitions": [{"id": "t1", "arcIds": ["a1", "a2"]}],
        "arcs": [
            {"id": "a1", "type": "REGULAR", "incomingId": "p1", "outgoingId": "t1"},
            {"id": "a2", "type": "REGULAR", "incomingId": "t1", "outgoingId": "p2"},
        ],
    })
    after = process(net)                     # p1=0, p2=1
    result = validate(net, {"p1": 1}, {"p2": 1})
    assert result.valid

Every call works on its own copy of the net; nothing is kept between calls.
"""

import logging

from petrisim.config import EngineConfig, DEFAULT_CONFIG
from petrisim.exceptions import PetriNetError, InvalidArgumentError
from petrisim.models import (
    PlaceDescription,
    TransitionDescription,
    ArcDescription,
    NetDescription,
    PlaceConfig,
    ValidationRequest,
    AnalysisResult,
    ValidationResult,
)
from petrisim.core.runtime import RandomSource, StepPhase
from petrisim.service import (
    PetriNetEngine,
    DescribedOutcome,
    process,
    resolve_conflict,
    analyze_reachable_states,
    analyze_liveness,
    analyze_boundedness,
    compute_incidence_matrix,
    perform_structural_analysis,
    validate,
)

# Library should not configure root logging; be quiet by default
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Configuration and errors
    "EngineConfig",
    "DEFAULT_CONFIG",
    "PetriNetError",
    "InvalidArgumentError",

    # Descriptions
    "PlaceDescription",
    "TransitionDescription",
    "ArcDescription",
    "NetDescription",
    "PlaceConfig",
    "ValidationRequest",
    "AnalysisResult",
    "ValidationResult",

    # Engine
    "RandomSource",
    "StepPhase",
    "PetriNetEngine",
    "DescribedOutcome",
    "process",
    "resolve_conflict",
    "analyze_reachable_states",
    "analyze_liveness",
    "analyze_boundedness",
    "compute_incidence_matrix",
    "perform_structural_analysis",
    "validate",
]
