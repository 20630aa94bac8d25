import pytest
from pydantic import ValidationError

from autocrm.models import SearchCriteria, Vehicle


def test_vehicle_only_requires_id():
    vehicle = Vehicle(id="v1")
    assert vehicle.brand is None
    assert vehicle.year is None
    assert vehicle.price is None


def test_vehicle_non_finite_numbers_are_absent():
    vehicle = Vehicle(id="v1", price=float("nan"), year=float("inf"))
    assert vehicle.price is None
    assert vehicle.year is None


def test_vehicle_numeric_strings_are_coerced():
    vehicle = Vehicle(id="v1", year="2019", price="8000000", km=" 45000 ")
    assert vehicle.year == 2019
    assert vehicle.price == 8_000_000
    assert vehicle.km == 45000


@pytest.mark.parametrize("raw", ["", "abc", True, 2019.5, None])
def test_vehicle_invalid_year_is_absent(raw):
    assert Vehicle(id="v1", year=raw).year is None


def test_negative_price_is_absent():
    assert Vehicle(id="v1", price=-1).price is None
    assert SearchCriteria(price_min=-100).price_min is None


def test_extra_backend_columns_are_ignored():
    vehicle = Vehicle.model_validate(
        {"id": 12, "brand": "Fiat", "owner_notes": "algo", "status": "available"}
    )
    assert vehicle.id == "12"
    assert vehicle.brand == "Fiat"
    assert not hasattr(vehicle, "owner_notes")


def test_vehicle_is_immutable():
    vehicle = Vehicle(id="v1", brand="Fiat")
    with pytest.raises(ValidationError):
        vehicle.brand = "Ford"


def test_search_ranges_are_not_cross_validated():
    search = SearchCriteria(year_min=2020, year_max=2018, price_min=9, price_max=1)
    assert search.year_min == 2020
    assert search.year_max == 2018
    assert search.has_year_range
    assert search.has_price_range


def test_search_range_flags():
    assert not SearchCriteria().has_year_range
    assert not SearchCriteria().has_price_range
    assert SearchCriteria(year_max=2020).has_year_range
    assert SearchCriteria(price_min=0).has_price_range
    assert not SearchCriteria(price_max=float("nan")).has_price_range


def test_huge_integers_are_absent():
    assert Vehicle(id="v1", price=10**400, year=10**400).price is None
    assert Vehicle(id="v1", year=10**400).year is None
    assert SearchCriteria(price_max=10**400).price_max is None
