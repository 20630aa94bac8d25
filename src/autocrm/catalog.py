"""
Frontera entre los datos del backend y el motor de matching.

Convierte filas crudas (dicts) en modelos inmutables. Las filas inválidas
se descartan con un warning: el motor nunca recibe datos mal tipados.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError

from autocrm.models import SearchCriteria, Vehicle

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogError(ValueError):
    """No se pudo leer un archivo de registros."""


def _parse_records(
    records: Optional[Iterable[Any]],
    model: type[ModelT],
) -> list[ModelT]:
    if records is None:
        return []

    parsed = []
    for index, record in enumerate(records):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(
                "Registro inválido descartado",
                model=model.__name__,
                record_index=index,
                error=str(e),
            )
    return parsed


def parse_vehicles(records: Optional[Iterable[Any]]) -> list[Vehicle]:
    """Convierte filas de `vehicles` en Vehicle."""
    return _parse_records(records, Vehicle)


def parse_searches(records: Optional[Iterable[Any]]) -> list[SearchCriteria]:
    """Convierte filas de `search_requests` en SearchCriteria."""
    return _parse_records(records, SearchCriteria)


def load_records(path: Union[str, Path]) -> list[Any]:
    """
    Lee un archivo JSON de registros.

    Acepta una lista de registros o un objeto con clave "data"
    (el formato de respuesta del backend).

    Raises:
        CatalogError: si el archivo no se puede leer o no es JSON válido
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Archivo no encontrado: {path}") from None
    except json.JSONDecodeError as e:
        raise CatalogError(f"JSON inválido en {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogError(f"El archivo {path} no está en UTF-8: {e}") from e
    except OSError as e:
        raise CatalogError(f"No se pudo leer {path}: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("data")
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise CatalogError(f"Se esperaba una lista de registros en {path}")
    return payload
