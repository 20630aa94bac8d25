"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from autocrm.models import VehicleStatus

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> autocrm/ -> src/ -> raíz del proyecto
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching
    match_base_min_score: int = Field(
        60,
        ge=0,
        le=100,
        description="Score mínimo cuando la búsqueda define marca, año y precio",
    )
    excluded_vehicle_statuses: list[str] = Field(
        default_factory=lambda: [VehicleStatus.SOLD, VehicleStatus.DELETED],
        description="Estados de stock que nunca se ofrecen en un match",
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()
