"""
Shared helpers for Petrisim that sit outside the engine itself.
"""

from petrisim.common.mermaid import (
    format_place_node,
    format_transition_node,
    format_arc,
    format_comment,
    to_mermaid,
)

__all__ = [
    "format_place_node",
    "format_transition_node",
    "format_arc",
    "format_comment",
    "to_mermaid",
]
