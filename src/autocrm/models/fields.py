"""
Coerción de campos numéricos opcionales.

Las filas del backend llegan con tipos laxos: números como strings, NaN,
strings vacíos. Todo lo que no sea un número finito se considera ausente.
"""

import math
from typing import Any, Optional


def to_optional_float(value: Any) -> Optional[float]:
    """Convierte a float finito o None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_optional_int(value: Any) -> Optional[int]:
    """Convierte a int o None. Valores no enteros (2019.5) se descartan."""
    number = to_optional_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)
