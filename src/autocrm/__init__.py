"""
CRM de concesionaria: matching entre búsquedas de clientes y stock de vehículos.
"""

__version__ = "0.1.0"
