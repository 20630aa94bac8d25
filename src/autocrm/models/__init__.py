"""
Modelos de datos del sistema.

Snapshots de solo lectura de las filas del backend:
- Vehicle: stock de la concesionaria
- SearchCriteria: búsqueda de un cliente
"""

from autocrm.models.vehicle import Vehicle, VehicleStatus
from autocrm.models.search import SearchCriteria

__all__ = [
    "Vehicle",
    "VehicleStatus",
    "SearchCriteria",
]
