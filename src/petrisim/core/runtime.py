#!/usr/bin/env python3
"""
Petrisim - Stepping Layer

Single-step processing and conflict resolution.

A step evaluates every transition against the same marking and then fires at
most one of them. In deterministic mode a step that finds several enabled
transitions fires nothing and reports a conflict instead; the caller picks
one and hands it to ``resolve``. The exchange is a small resumable protocol:

    READY --step--> CONFLICT(ids) --resolve(choice)--> CONFLICT(ids') | READY | TERMINAL

Nothing is remembered between calls. The caller carries the state by passing
the returned net back in.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from petrisim.exceptions import InvalidArgumentError
from .evaluator import evaluate_all
from .firing import fire_transition
from .specs import Net, Transition

logger = logging.getLogger(__name__)

T = TypeVar('T')


@runtime_checkable
class RandomSource(Protocol):
    """
    Where the random transition pick comes from.

    ``random.Random`` satisfies this protocol; tests pass stubs that always
    choose a known element.
    """
    def choice(self, seq: Sequence[T]) -> T:
        ...


class StepPhase(Enum):
    """Where the stepping protocol stands after a call."""
    READY = auto()  # a transition fired; stepping may continue
    CONFLICT = auto()  # several transitions enabled, waiting for a choice
    TERMINAL = auto()  # nothing enabled


@dataclass
class StepOutcome:
    """
    Result of one step or one conflict resolution.

    Attributes:
        phase: Protocol state after the call
        net: The net after the call (same object that was passed in)
        enabled_ids: Transitions flagged enabled in ``net``
        fired_id: Transition that fired during the call, if any
    """
    phase: StepPhase
    net: Net
    enabled_ids: List[str] = field(default_factory=list)
    fired_id: Optional[str] = None

    @property
    def is_conflict(self) -> bool:
        return self.phase is StepPhase.CONFLICT

    @property
    def is_terminal(self) -> bool:
        return self.phase is StepPhase.TERMINAL


class StepProcessor:
    """Advances a net by a single firing. Mutates the Net it is given."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def _select(self, enabled: List[Transition]) -> Transition:
        if len(enabled) == 1:
            return enabled[0]
        return self.rng.choice(enabled)

    def step(self, net: Net) -> StepOutcome:
        """
        Evaluate all transitions and fire at most one.

        - deterministic mode with several enabled: no firing, CONFLICT with
          exactly those transitions flagged
        - one enabled, or several outside deterministic mode: fire it (or a
          random one), flag only that transition, READY
        - none enabled: marking untouched, TERMINAL
        """
        enabled = evaluate_all(net.transitions, net.arcs, net.places)
        enabled_ids = [t.id for t in enabled]
        logger.debug("[step] enabled=%s deterministic=%s", enabled_ids, net.deterministic_mode)

        if net.is_deterministic and len(enabled) > 1:
            logger.debug("[step] conflict between %s", enabled_ids)
            return StepOutcome(StepPhase.CONFLICT, net, enabled_ids)

        if not enabled:
            return StepOutcome(StepPhase.TERMINAL, net, [])

        selected = self._select(enabled)
        for t in net.transitions:
            t.enabled = t.id == selected.id
        fire_transition(selected, net.arcs, net.places)
        return StepOutcome(StepPhase.READY, net, [selected.id], fired_id=selected.id)

    def resolve(self, net: Net, selected_id: str) -> StepOutcome:
        """
        Fire the transition the caller chose to settle a conflict.

        Exactly one firing happens. Afterwards every transition is evaluated
        against the new marking; several enabled in deterministic mode is a
        new CONFLICT, none is TERMINAL, anything else READY. Further firings
        are left to the next call.

        Raises:
            InvalidArgumentError: ``selected_id`` names no transition of ``net``
        """
        selected = net.transition(selected_id)
        if selected is None:
            raise InvalidArgumentError(f"Selected transition not found: {selected_id}")

        for t in net.transitions:
            t.enabled = False

        logger.debug("[resolve] firing %s", selected_id)
        fire_transition(selected, net.arcs, net.places)

        enabled = evaluate_all(net.transitions, net.arcs, net.places)
        enabled_ids = [t.id for t in enabled]

        if not enabled:
            phase = StepPhase.TERMINAL
        elif net.is_deterministic and len(enabled) > 1:
            phase = StepPhase.CONFLICT
        else:
            phase = StepPhase.READY
        logger.debug("[resolve] %s -> %s enabled=%s", selected_id, phase.name, enabled_ids)
        return StepOutcome(phase, net, enabled_ids, fired_id=selected_id)
