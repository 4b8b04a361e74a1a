#!/usr/bin/env python3
"""
Petrisim exceptions.

All Petrisim exceptions inherit from PetriNetError for easy catching.
Validation failures are not exceptions; they come back as ValidationResult.
"""


class PetriNetError(Exception):
    """Base exception for all Petrisim errors."""


class InvalidArgumentError(PetriNetError, ValueError):
    """A caller handed the engine something it cannot interpret.

    Raised for unknown arc types, duplicate place/arc ids, and conflict
    resolution requests naming a transition that does not exist.
    """
