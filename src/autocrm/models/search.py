"""
Modelo de Búsqueda de cliente.

Representa una fila de `search_requests`: lo que el cliente pidió
(marca, rango de años, rango de precio y texto libre).
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from autocrm.models.fields import to_optional_float, to_optional_int


class SearchCriteria(BaseModel):
    """
    Criterios de búsqueda de un cliente.

    Los rangos no se validan entre sí: un rango invertido (year_min > year_max)
    se acepta y el motor lo tolera.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identificación
    id: Optional[str] = Field(None, description="UUID de la búsqueda")
    client_id: Optional[str] = Field(None, description="FK al cliente")

    # Texto libre
    title: Optional[str] = Field(None, description="Ej: 'SUV hasta 8M'")
    description: Optional[str] = Field(None, description="Detalle libre del pedido")

    # Filtros
    brand: Optional[str] = Field(None, description="Marca buscada")
    year_min: Optional[int] = Field(None, description="Año mínimo")
    year_max: Optional[int] = Field(None, description="Año máximo")
    price_min: Optional[float] = Field(None, description="Precio mínimo")
    price_max: Optional[float] = Field(None, description="Precio máximo")

    # Metadatos
    created_at: Optional[str] = None

    @field_validator("id", "client_id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("year_min", "year_max", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> Optional[int]:
        return to_optional_int(value)

    @field_validator("price_min", "price_max", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Optional[float]:
        price = to_optional_float(value)
        if price is not None and price < 0:
            return None
        return price

    @property
    def has_year_range(self) -> bool:
        return self.year_min is not None or self.year_max is not None

    @property
    def has_price_range(self) -> bool:
        return self.price_min is not None or self.price_max is not None
