#!/usr/bin/env python3
"""
Petrisim Boundary Models

Pydantic models describing a Petri net and the results produced from it.
These are what callers marshal in and out of the engine; the engine itself
works on the domain objects in petrisim.core.specs.

JSON uses camelCase keys (``arcIds``, ``incomingId``, ``deterministicMode``).
Either the alias or the Python field name is accepted on input.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DescriptionModel(BaseModel):
    """Base for every boundary model: camelCase aliases, name population allowed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary using wire (camelCase) keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


# ============================================================================
# Net Description
# ============================================================================

class PlaceDescription(DescriptionModel):
    id: str
    tokens: int = 0
    bounded: bool = False
    capacity: Optional[int] = None


class TransitionDescription(DescriptionModel):
    id: str
    enabled: bool = False
    arc_ids: List[str] = Field(default_factory=list)


class ArcDescription(DescriptionModel):
    """
    An arc as it appears on the wire.

    ``type`` is kept as a plain string; the mapper turns it into an ArcKind
    and rejects anything it does not recognize.
    """
    id: str
    type: str
    incoming_id: str
    outgoing_id: str


class NetDescription(DescriptionModel):
    """A complete net: structure, marking, and stepping mode."""
    places: List[PlaceDescription] = Field(default_factory=list)
    transitions: List[TransitionDescription] = Field(default_factory=list)
    arcs: List[ArcDescription] = Field(default_factory=list)
    deterministic_mode: Optional[bool] = None
    selected_transition_id: Optional[str] = None

    def place(self, place_id: str) -> Optional[PlaceDescription]:
        for p in self.places:
            if p.id == place_id:
                return p
        return None

    def transition(self, transition_id: str) -> Optional[TransitionDescription]:
        for t in self.transitions:
            if t.id == transition_id:
                return t
        return None

    def tokens(self) -> Dict[str, int]:
        """Current marking as ``{place_id: tokens}``."""
        return {p.id: p.tokens for p in self.places}

    def enabled_transition_ids(self) -> List[str]:
        return [t.id for t in self.transitions if t.enabled]


# ============================================================================
# Validation Request
# ============================================================================

class PlaceConfig(DescriptionModel):
    """Token count for one place, used for validator inputs and expectations."""
    place_id: str
    tokens: int = 0


class ValidationRequest(NetDescription):
    """A net plus the inputs to seed it with and the outputs it should reach."""
    input_configs: List[PlaceConfig] = Field(default_factory=list)
    expected_outputs: List[PlaceConfig] = Field(default_factory=list)

    def inputs(self) -> Dict[str, int]:
        return {c.place_id: c.tokens for c in self.input_configs}

    def expectations(self) -> Dict[str, int]:
        return {c.place_id: c.tokens for c in self.expected_outputs}

    def net(self) -> NetDescription:
        """The request's net without the validator-specific fields."""
        return NetDescription.model_validate(
            self.model_dump(exclude={'input_configs', 'expected_outputs'})
        )


# ============================================================================
# Results
# ============================================================================

class AnalysisResult(DescriptionModel):
    """
    Outcome of one analysis. Only the fields relevant to ``analysis_type``
    are filled in; the rest keep their defaults.
    """
    analysis_type: str
    details: str = ""

    # Liveness
    has_deadlock: bool = False
    enabled_transitions_count: int = 0

    # Reachability
    reachable_states_count: int = 0
    explored_states_count: int = 0
    reached_max_limit: bool = False
    reachable_states: Optional[List[str]] = None

    # Boundedness
    bounded_places_count: int = 0
    unbounded_places_count: int = 0

    # Incidence matrix (rows follow place_ids, columns follow transition_ids)
    incidence_matrix: Optional[List[List[int]]] = None
    place_ids: Optional[List[str]] = None
    transition_ids: Optional[List[str]] = None

    # Structure
    regular_arcs_count: int = 0
    inhibitor_arcs_count: int = 0
    bidirectional_arcs_count: int = 0
    isolated_places_count: int = 0
    isolated_transitions_count: int = 0


class ValidationResult(DescriptionModel):
    valid: bool
    message: str
    conflicting_transitions: Optional[List[str]] = None
    final_state: Optional[NetDescription] = None
    output_matches: Optional[Dict[str, bool]] = None
