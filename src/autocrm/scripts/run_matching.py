"""
Script para ejecutar el matching entre stock y búsquedas de clientes.

Lee el stock y las búsquedas desde archivos JSON (exportados del backend)
e imprime los matches ordenados por score.

Uso:
    python -m autocrm.scripts.run_matching --vehicles stock.json --searches busquedas.json
    python -m autocrm.scripts.run_matching --vehicles stock.json --searches busquedas.json --search-id <uuid>
    python -m autocrm.scripts.run_matching --vehicles stock.json --searches busquedas.json --vehicle-id <id>
"""

import argparse
import json
import logging
import sys
from typing import Optional

import structlog

from autocrm.catalog import CatalogError, load_records, parse_searches, parse_vehicles
from autocrm.config import get_settings
from autocrm.matching import MatchingEngine, MatchResult, SearchMatch

logger = structlog.get_logger()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _score_arg(value: str) -> int:
    try:
        score = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"score inválido: {value}") from None
    if not 0 <= score <= 100:
        raise argparse.ArgumentTypeError(f"el score debe estar entre 0 y 100: {score}")
    return score


def _vehicle_payload(match: MatchResult) -> dict:
    vehicle = match.vehicle
    return {
        "id": vehicle.id,
        "brand": vehicle.brand,
        "model": vehicle.model,
        "year": vehicle.year,
        "price": vehicle.price,
        "score": match.score,
        "reasons": match.reasons,
    }


def _search_payload(match: SearchMatch) -> dict:
    search = match.search
    return {
        "id": search.id,
        "client_id": search.client_id,
        "title": search.title,
        "score": match.score,
        "reasons": match.result.reasons,
    }


def run(
    vehicles_path: str,
    searches_path: str,
    search_id: Optional[str] = None,
    vehicle_id: Optional[str] = None,
    min_score: Optional[int] = None,
) -> int:
    settings = get_settings()
    if min_score is not None:
        settings = settings.model_copy(update={"match_base_min_score": min_score})

    vehicles = parse_vehicles(load_records(vehicles_path))
    searches = parse_searches(load_records(searches_path))
    engine = MatchingEngine(settings)

    if vehicle_id is not None:
        vehicle = next((v for v in vehicles if v.id == vehicle_id), None)
        if vehicle is None:
            logger.error("Vehículo no encontrado", vehicle_id=vehicle_id)
            return 1
        matches = engine.find_searches_for_vehicle(vehicle, searches)
        output = [_search_payload(m) for m in matches]
    else:
        if search_id is not None:
            search = next((s for s in searches if s.id == search_id), None)
        else:
            search = searches[0] if searches else None
        if search is None:
            logger.error("Búsqueda no encontrada", search_id=search_id)
            return 1
        results = engine.find_vehicles_for_search(vehicles, search)
        output = [_vehicle_payload(r) for r in results]

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point del script."""
    parser = argparse.ArgumentParser(
        description="Matchea el stock de vehículos con búsquedas de clientes"
    )
    parser.add_argument(
        "--vehicles",
        required=True,
        help="Archivo JSON con el stock de vehículos",
    )
    parser.add_argument(
        "--searches",
        required=True,
        help="Archivo JSON con las búsquedas de clientes",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--search-id",
        help="Búsqueda a matchear contra el stock (por defecto la primera)",
    )
    target.add_argument(
        "--vehicle-id",
        help="Modo inverso: búsquedas que matchean con este vehículo",
    )
    parser.add_argument(
        "--min-score",
        type=_score_arg,
        help="Score mínimo con los 3 filtros definidos (pisa la configuración)",
    )

    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        return run(
            vehicles_path=args.vehicles,
            searches_path=args.searches,
            search_id=args.search_id,
            vehicle_id=args.vehicle_id,
            min_score=args.min_score,
        )
    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        return 130
    except CatalogError as e:
        logger.error("Error leyendo datos", error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
