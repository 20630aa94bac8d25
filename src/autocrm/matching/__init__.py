"""
Motor de matching.

Combina filtros hard y score ponderado para encontrar
los vehículos del stock más relevantes para cada búsqueda.
"""

from autocrm.matching.engine import (
    MatchingEngine,
    MatchResult,
    SearchMatch,
    match_vehicles_to_search,
    score_vehicle_against_search,
)

__all__ = [
    "MatchingEngine",
    "MatchResult",
    "SearchMatch",
    "match_vehicles_to_search",
    "score_vehicle_against_search",
]
