#!/usr/bin/env python3
"""
Engine configuration.

Safety bounds for the reachability explorer and the validation driver.
General Petri net reachability is unbounded, so these caps are the only
thing that stops a run.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """
    Limits shared by the analysis and validation components.

    Attributes:
        max_reachable_states: Explored-state cap for reachability BFS
        max_validation_iterations: Step cap for the validation loop
    """
    max_reachable_states: int = 1000
    max_validation_iterations: int = 1000

    def __post_init__(self):
        if self.max_reachable_states < 1:
            raise ValueError("max_reachable_states must be at least 1")
        if self.max_validation_iterations < 1:
            raise ValueError("max_validation_iterations must be at least 1")


DEFAULT_CONFIG = EngineConfig()
