#!/usr/bin/env python3
"""
Petrisim Validation Driver

Runs a net from a given set of input tokens until it stops, then checks the
final marking against expected token counts. The run is forced into
deterministic mode, so any point where more than one transition could fire
is reported as a conflict rather than resolved at random.

Two caps guarantee termination: a marking seen twice ends the run as an
infinite loop, and so does exceeding ``max_validation_iterations`` steps.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Set

from petrisim.config import DEFAULT_CONFIG, EngineConfig
from petrisim.core.mapper import state_signature, to_description
from petrisim.core.runtime import StepPhase, StepProcessor
from petrisim.core.specs import Net
from petrisim.models import ValidationResult

logger = logging.getLogger(__name__)


class Validator:
    """
    Certifies that a net reaches an expected final marking.

    Example:
        validator = Validator()
        result = validator.validate(net, inputs={"p1": 1}, expected_outputs={"p2": 1})
        assert result.valid
    """

    def __init__(self, config: Optional[EngineConfig] = None, processor: Optional[StepProcessor] = None):
        self.config = config or DEFAULT_CONFIG
        self.processor = processor or StepProcessor()

    def prepare(self, net: Net, inputs: Mapping[str, int]) -> Net:
        """Copy ``net``, force deterministic mode, zero it and apply ``inputs``."""
        prepared = net.copy()
        prepared.deterministic_mode = True
        for place in prepared.places.values():
            place.set_tokens(0)
        for place_id, tokens in inputs.items():
            place = prepared.places.get(place_id)
            if place is None:
                logger.debug("[validate] ignoring input for unknown place %s", place_id)
                continue
            place.set_tokens(tokens)
        return prepared

    def validate(
        self,
        net: Net,
        inputs: Mapping[str, int],
        expected_outputs: Mapping[str, int],
    ) -> ValidationResult:
        """
        Validate ``net``; the caller's net is never modified.

        Args:
            net: Net to validate
            inputs: Initial tokens by place id; every other place starts empty
            expected_outputs: Tokens expected by place id once nothing can
                fire. Places not listed are not checked.
        """
        current = self.prepare(net, inputs)

        if current.total_tokens() == 0:
            return ValidationResult(
                valid=False,
                message=(
                    "Validation failed: No initial tokens provided in the input configuration. "
                    "The simulation requires at least one token to start."
                ),
                final_state=to_description(current),
            )

        return self._run(current, expected_outputs)

    def _run(self, current: Net, expected_outputs: Mapping[str, int]) -> ValidationResult:
        max_iterations = self.config.max_validation_iterations
        seen: Set[str] = set()
        iterations = 0

        while True:
            signature = state_signature(current)

            if signature in seen:
                logger.debug("[validate] loop at %s after %d steps", signature, iterations)
                return ValidationResult(
                    valid=False,
                    message=(
                        "Validation failed: Infinite loop detected. The simulation encountered the same "
                        f"token distribution multiple times. Repeated state signature: [{signature}]"
                    ),
                    final_state=to_description(current),
                )
            seen.add(signature)

            iterations += 1
            if iterations > max_iterations:
                return ValidationResult(
                    valid=False,
                    message=(
                        "Validation failed: Simulation exceeded the maximum allowed number of iterations "
                        f"({max_iterations}). This often indicates a potential infinite loop or an "
                        "unexpectedly long execution."
                    ),
                    final_state=to_description(current),
                )

            outcome = self.processor.step(current)

            if outcome.phase is StepPhase.CONFLICT:
                logger.debug("[validate] conflict between %s", outcome.enabled_ids)
                return ValidationResult(
                    valid=False,
                    message=(
                        "Validation failed: conflict detected with multiple enabled transitions. "
                        "There can only be one enabled transition at a time."
                    ),
                    conflicting_transitions=list(outcome.enabled_ids),
                    final_state=to_description(outcome.net),
                )

            if outcome.phase is StepPhase.TERMINAL:
                return self._compare(outcome.net, expected_outputs)

            current = outcome.net

    def _compare(self, final: Net, expected_outputs: Mapping[str, int]) -> ValidationResult:
        matches: Dict[str, bool] = {}
        problems = []

        for place_id, expected in expected_outputs.items():
            place = final.places.get(place_id)
            if place is None:
                matches[place_id] = False
                problems.append(f"Place {place_id} not found.")
                continue

            matches[place_id] = place.tokens == expected
            if not matches[place_id]:
                problems.append(f"Place {place_id} has {place.tokens} tokens, expected {expected}.")

        valid = not problems
        if valid:
            message = "Validation successful: all output places match expected token counts"
        else:
            message = "Validation failed: " + " ".join(problems)

        return ValidationResult(
            valid=valid,
            message=message,
            final_state=to_description(final),
            output_matches=matches,
        )
