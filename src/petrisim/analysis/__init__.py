"""
petrisim.analysis - bounded and structural analyses of Petri nets
"""

from .reachability import ReachabilityExplorer, ReachabilityReport
from .structure import (
    LivenessReport,
    BoundednessReport,
    IncidenceMatrix,
    StructureReport,
    check_liveness,
    count_bounded_places,
    incidence_matrix,
    analyze_structure,
)

__all__ = [
    'ReachabilityExplorer',
    'ReachabilityReport',
    'LivenessReport',
    'BoundednessReport',
    'IncidenceMatrix',
    'StructureReport',
    'check_liveness',
    'count_bounded_places',
    'incidence_matrix',
    'analyze_structure',
]
