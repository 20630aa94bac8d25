"""
Modelo de Vehículo en stock.

Snapshot inmutable de una fila de la tabla `vehicles`. Todos los campos
salvo el id son opcionales: el motor de matching tolera datos incompletos.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from autocrm.models.fields import to_optional_float, to_optional_int


class VehicleStatus:
    """Estados de stock que no se ofrecen (el backend admite otros valores)."""

    SOLD = "sold"
    DELETED = "deleted"


class Vehicle(BaseModel):
    """Vehículo del CRM tal como lo devuelve el backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identificación
    id: str = Field(..., description="UUID o código del vehículo")
    stock_code: Optional[str] = Field(None, description="Código interno de stock")

    # Descripción
    brand: Optional[str] = Field(None, description="Marca: Toyota, Volkswagen...")
    model: Optional[str] = Field(None, description="Modelo: Corolla, T-Cross...")
    version: Optional[str] = Field(None, description="Versión / trim")
    title: Optional[str] = Field(None, description="Título libre de la publicación")

    # Atributos numéricos
    year: Optional[int] = Field(None, description="Año del modelo")
    km: Optional[int] = Field(None, description="Kilometraje")
    price: Optional[float] = Field(None, ge=0, description="Precio (sin moneda)")

    # Atributos opcionales
    color: Optional[str] = None
    transmission: Optional[str] = None
    engine: Optional[str] = None

    # Estado
    status: Optional[str] = Field(None, description="available, reserved, sold, deleted")
    created_at: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        # Los ids numéricos de tablas viejas se aceptan como texto
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("year", "km", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> Optional[int]:
        return to_optional_int(value)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Optional[float]:
        price = to_optional_float(value)
        if price is not None and price < 0:
            return None
        return price
