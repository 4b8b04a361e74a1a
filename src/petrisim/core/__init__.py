#!/usr/bin/env python3
"""
petrisim.core - Petri net domain model and stepping engine

Domain objects, enablement evaluation, token firing, and the single-step /
conflict-resolution protocol.
"""

from .specs import (
    ArcKind,
    Place,
    Transition,
    Arc,
    RegularArc,
    InhibitorArc,
    BidirectionalArc,
    Net,
    make_arc,
)

from .mapper import (
    to_domain,
    to_description,
    state_signature,
)

from .evaluator import (
    evaluate_transition,
    evaluate_all,
)

from .firing import fire_transition

from .runtime import (
    RandomSource,
    StepPhase,
    StepOutcome,
    StepProcessor,
)

__all__ = [
    # Domain
    'ArcKind',
    'Place',
    'Transition',
    'Arc',
    'RegularArc',
    'InhibitorArc',
    'BidirectionalArc',
    'Net',
    'make_arc',

    # Mapping
    'to_domain',
    'to_description',
    'state_signature',

    # Engine
    'evaluate_transition',
    'evaluate_all',
    'fire_transition',

    # Stepping
    'RandomSource',
    'StepPhase',
    'StepOutcome',
    'StepProcessor',
]
