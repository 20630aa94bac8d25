"""
Motor de matching entre búsquedas de clientes y stock de vehículos.

Implementa:
- Score: puntaje 0-100 por marca, texto libre, año y precio
- Filtro Hard: descarta vehículos fuera de marca/año/precio con tolerancia
- Score mínimo dinámico: según cuántos filtros define la búsqueda

Todas las funciones de scoring son puras: no mutan sus entradas ni hacen I/O.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from autocrm.config import Settings, get_settings
from autocrm.matching.text import (
    extract_search_keywords,
    normalize_basic,
    normalize_brand,
    normalize_loose,
)
from autocrm.models import SearchCriteria, Vehicle

logger = structlog.get_logger()


# ---- Pesos del score ----

# Marca (hasta 30)
BRAND_EXACT_POINTS = 25
BRAND_SIMILAR_POINTS = 15

# Modelo / texto libre (hasta 35): 1 keyword => 28, 2 o más => 35
KEYWORD_BASE_POINTS = 20
KEYWORD_HIT_POINTS = 8
KEYWORD_MAX_POINTS = 35

# Año (hasta 25 con rango cerrado, 22 con rango abierto)
YEAR_IN_RANGE_POINTS = 25
YEAR_NEAR_RANGE_POINTS = 15
YEAR_OPEN_BOUND_POINTS = 22
YEAR_NEAR_OPEN_BOUND_POINTS = 12
YEAR_TOLERANCE = 1

# Precio (hasta 20)
PRICE_IN_RANGE_POINTS = 20
PRICE_NEAR_RANGE_POINTS = 10
PRICE_NEAR_TOLERANCE = 0.15

MIN_SCORE = 0
MAX_SCORE = 100

# ---- Filtros hard ----

# Precio: hasta 15% por debajo del mínimo / por encima del máximo
PRICE_FILTER_MIN_FACTOR = 0.85
PRICE_FILTER_MAX_FACTOR = 1.15

# ---- Score mínimo dinámico ----

DEFAULT_BASE_MIN_SCORE = 60

# Cantidad de filtros definidos (marca, año, precio) -> score mínimo.
# Con los 3 filtros se usa el base_min_score recibido.
MIN_SCORE_BY_CONSTRAINTS: dict[int, int] = {
    0: 20,
    1: 45,
    2: 55,
}


@dataclass
class MatchResult:
    """Resultado de matching de un vehículo contra una búsqueda."""

    vehicle: Vehicle
    score: int  # 0 a 100
    reasons: list[str] = field(default_factory=list)


@dataclass
class SearchMatch:
    """Búsqueda de cliente que matchea con un vehículo dado."""

    search: SearchCriteria
    result: MatchResult

    @property
    def score(self) -> int:
        return self.result.score


def _score_brand(v_brand: str, s_brand: str, reasons: list[str]) -> int:
    if not (s_brand and v_brand):
        return 0
    if v_brand == s_brand:
        reasons.append("Misma marca")
        return BRAND_EXACT_POINTS
    if s_brand in v_brand or v_brand in s_brand:
        reasons.append("Marca similar")
        return BRAND_SIMILAR_POINTS
    # Sin penalización: la exclusión la hace el filtro hard
    reasons.append("Marca distinta a la buscada")
    return 0


def _score_keywords(
    vehicle: Vehicle,
    keywords: list[str],
    brand_matched: bool,
    reasons: list[str],
) -> int:
    if not keywords:
        return 0
    if not (vehicle.brand or vehicle.model or vehicle.title):
        return 0

    vehicle_text = normalize_loose(
        f"{vehicle.brand or ''} {vehicle.model or ''} {vehicle.title or ''}"
    )

    hits = 0
    for keyword in keywords:
        loose = normalize_loose(keyword)
        if loose and loose in vehicle_text:
            hits += 1

    if hits > 0:
        reasons.append(f"Coincidencia de modelo / texto ({hits} palabra(s) clave)")
        return min(KEYWORD_MAX_POINTS, KEYWORD_BASE_POINTS + hits * KEYWORD_HIT_POINTS)

    if brand_matched:
        reasons.append("Misma marca pero modelo no explícito en la búsqueda")
    return 0


def _score_year(
    year: Optional[int],
    year_min: Optional[int],
    year_max: Optional[int],
    reasons: list[str],
) -> int:
    if year is None:
        return 0

    if year_min is not None and year_max is not None:
        if year_min <= year <= year_max:
            reasons.append(f"Año dentro del rango {year_min}-{year_max}")
            return YEAR_IN_RANGE_POINTS
        below = year_min - YEAR_TOLERANCE <= year < year_min
        above = year_max < year <= year_max + YEAR_TOLERANCE
        if below or above:
            reasons.append(f"Año cercano al rango {year_min}-{year_max}")
            return YEAR_NEAR_RANGE_POINTS
        return 0

    if year_min is not None:
        if year >= year_min:
            reasons.append(f"Año mayor o igual a {year_min}")
            return YEAR_OPEN_BOUND_POINTS
        if year == year_min - YEAR_TOLERANCE:
            reasons.append(f"Año cercano a {year_min}")
            return YEAR_NEAR_OPEN_BOUND_POINTS
        return 0

    if year_max is not None:
        if year <= year_max:
            reasons.append(f"Año menor o igual a {year_max}")
            return YEAR_OPEN_BOUND_POINTS
        if year == year_max + YEAR_TOLERANCE:
            reasons.append(f"Año cercano a {year_max}")
            return YEAR_NEAR_OPEN_BOUND_POINTS

    return 0


def _score_price(
    price: Optional[float],
    price_min: Optional[float],
    price_max: Optional[float],
    reasons: list[str],
) -> int:
    if price is None or (price_min is None and price_max is None):
        return 0

    low = price_min if price_min is not None else 0.0
    high = price_max if price_max is not None else math.inf

    if low <= price <= high:
        reasons.append("Precio dentro del rango buscado")
        return PRICE_IN_RANGE_POINTS

    # Fuera de rango: puntaje parcial si está cerca del centro del rango
    if math.isfinite(high):
        center = (low + high) / 2
    else:
        center = low or price
    if abs(price - center) <= center * PRICE_NEAR_TOLERANCE:
        reasons.append("Precio cercano al rango buscado")
        return PRICE_NEAR_RANGE_POINTS
    return 0


def score_vehicle_against_search(
    vehicle: Vehicle,
    search: Optional[SearchCriteria],
) -> MatchResult:
    """
    Calcula el score de un vehículo contra una búsqueda.

    Ponderación:
    - Marca: hasta 30
    - Modelo / texto: hasta 35
    - Año: hasta 25
    - Precio: hasta 20

    Returns:
        MatchResult con score en [0, 100] y los motivos en orden
        marca -> texto -> año -> precio
    """
    search = search or SearchCriteria()
    reasons: list[str] = []

    v_brand = normalize_brand(vehicle.brand)
    s_brand = normalize_brand(search.brand)

    score = _score_brand(v_brand, s_brand, reasons)
    score += _score_keywords(
        vehicle,
        extract_search_keywords(search),
        brand_matched=bool(s_brand) and v_brand == s_brand,
        reasons=reasons,
    )
    score += _score_year(vehicle.year, search.year_min, search.year_max, reasons)
    score += _score_price(vehicle.price, search.price_min, search.price_max, reasons)

    final_score = max(MIN_SCORE, min(MAX_SCORE, round(score)))
    return MatchResult(vehicle=vehicle, score=int(final_score), reasons=reasons)


def passes_hard_filters(vehicle: Vehicle, search: Optional[SearchCriteria]) -> bool:
    """
    Filtros excluyentes previos al score.

    Un vehículo sin el dato filtrado (sin año, sin precio, sin marca)
    nunca se descarta por ese filtro.
    """
    search = search or SearchCriteria()

    s_brand = normalize_brand(search.brand)
    v_brand = normalize_brand(vehicle.brand)
    if s_brand and v_brand and v_brand != s_brand:
        return False

    # Año con ±1 de tolerancia
    if vehicle.year is not None and search.has_year_range:
        if search.year_min is not None and vehicle.year < search.year_min - YEAR_TOLERANCE:
            return False
        if search.year_max is not None and vehicle.year > search.year_max + YEAR_TOLERANCE:
            return False

    # Precio con ±15% de tolerancia
    if vehicle.price is not None and search.has_price_range:
        if (
            search.price_min is not None
            and vehicle.price < search.price_min * PRICE_FILTER_MIN_FACTOR
        ):
            return False
        if (
            search.price_max is not None
            and vehicle.price > search.price_max * PRICE_FILTER_MAX_FACTOR
        ):
            return False

    return True


def count_constraints(search: Optional[SearchCriteria]) -> int:
    """Cuántos de {marca, rango de año, rango de precio} define la búsqueda."""
    if search is None:
        return 0
    return sum(
        [
            bool(normalize_brand(search.brand)),
            search.has_year_range,
            search.has_price_range,
        ]
    )


def effective_min_score(
    constraint_count: int,
    base_min_score: int = DEFAULT_BASE_MIN_SCORE,
) -> int:
    """
    Score mínimo según lo "apretada" que está la búsqueda.

    Una búsqueda de solo texto necesita una vara baja para que cualquier
    coincidencia parcial aparezca; con 3 filtros se usa base_min_score.
    """
    return MIN_SCORE_BY_CONSTRAINTS.get(constraint_count, base_min_score)


def match_vehicles_to_search(
    vehicles: Optional[Iterable[Vehicle]],
    search: Optional[SearchCriteria],
    base_min_score: int = DEFAULT_BASE_MIN_SCORE,
) -> list[MatchResult]:
    """
    Matchea una lista de vehículos contra una búsqueda.

    Args:
        vehicles: Stock a evaluar
        search: Búsqueda del cliente (None equivale a búsqueda vacía)
        base_min_score: Score mínimo cuando hay marca, año y precio

    Returns:
        Lista de MatchResult ordenada por score descendente. Los empates
        conservan el orden original del stock.
    """
    if not vehicles:
        return []

    search = search or SearchCriteria()
    min_score = effective_min_score(count_constraints(search), base_min_score)

    candidates = [v for v in vehicles if passes_hard_filters(v, search)]
    scored = [score_vehicle_against_search(v, search) for v in candidates]
    results = [r for r in scored if r.score >= min_score]

    # sorted() es estable también con reverse=True
    results = sorted(results, key=lambda r: r.score, reverse=True)

    logger.debug(
        "Matching de stock",
        search_id=search.id,
        candidates=len(candidates),
        above_threshold=len(results),
        min_score=min_score,
    )

    return results


class MatchingEngine:
    """
    Servicio de matching con la configuración de la aplicación.

    Flujo:
    1. Descartar vehículos con estado no ofrecible (vendido, borrado)
    2. Aplicar filtros hard
    3. Calcular score y filtrar por score mínimo dinámico
    4. Ordenar por score
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._excluded_statuses = {
            normalize_basic(status) for status in self.settings.excluded_vehicle_statuses
        }

    def is_offerable(self, vehicle: Vehicle) -> bool:
        """Un vehículo sin estado se considera disponible."""
        return normalize_basic(vehicle.status) not in self._excluded_statuses

    def find_vehicles_for_search(
        self,
        vehicles: Optional[Iterable[Vehicle]],
        search: Optional[SearchCriteria],
    ) -> list[MatchResult]:
        """
        Encuentra vehículos del stock que matchean con una búsqueda.

        Returns:
            Lista de MatchResult ordenados por score
        """
        stock = [v for v in (vehicles or []) if self.is_offerable(v)]
        if not stock:
            logger.info("No hay vehículos ofrecibles en stock")
            return []

        results = match_vehicles_to_search(
            stock, search, base_min_score=self.settings.match_base_min_score
        )

        logger.info(
            "Matches encontrados",
            search_id=search.id if search else None,
            stock=len(stock),
            matches=len(results),
        )
        return results

    def find_searches_for_vehicle(
        self,
        vehicle: Vehicle,
        searches: Optional[Iterable[SearchCriteria]],
    ) -> list[SearchMatch]:
        """
        Encuentra búsquedas de clientes que un vehículo satisface.

        Aplica a cada búsqueda las mismas reglas que find_vehicles_for_search.

        Returns:
            Lista de SearchMatch ordenados por score
        """
        if not self.is_offerable(vehicle):
            logger.info(
                "Vehículo no ofrecible, se omite matching",
                vehicle_id=vehicle.id,
                status=vehicle.status,
            )
            return []

        matches = []
        for search in searches or []:
            if not passes_hard_filters(vehicle, search):
                continue
            result = score_vehicle_against_search(vehicle, search)
            min_score = effective_min_score(
                count_constraints(search), self.settings.match_base_min_score
            )
            if result.score >= min_score:
                matches.append(SearchMatch(search=search, result=result))

        matches = sorted(matches, key=lambda m: m.score, reverse=True)

        logger.info(
            "Búsquedas encontradas para vehículo",
            vehicle_id=vehicle.id,
            matches=len(matches),
        )
        return matches
