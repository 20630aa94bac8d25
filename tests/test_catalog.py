import json

import pytest

from autocrm.catalog import CatalogError, load_records, parse_searches, parse_vehicles


def test_parse_none_is_empty():
    assert parse_vehicles(None) == []
    assert parse_searches(None) == []


def test_invalid_rows_are_skipped():
    vehicles = parse_vehicles(
        [
            {"id": "v1", "brand": "Fiat", "price": "NaN"},
            {"brand": "sin id"},
            "no es un registro",
            {"id": "v2", "year": "2020"},
        ]
    )
    assert [v.id for v in vehicles] == ["v1", "v2"]
    assert vehicles[0].price is None
    assert vehicles[1].year == 2020


def test_parse_searches_from_backend_rows():
    searches = parse_searches(
        [{"id": "s1", "client_id": "c1", "brand": "Toyota", "year_min": None, "extra": 1}]
    )
    assert searches[0].brand == "Toyota"
    assert searches[0].year_min is None


def test_load_records_from_list(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps([{"id": "v1"}]), encoding="utf-8")
    assert load_records(path) == [{"id": "v1"}]


def test_load_records_from_response_envelope(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps({"data": [{"id": "v1"}], "count": 1}), encoding="utf-8")
    assert load_records(str(path)) == [{"id": "v1"}]


def test_load_records_with_null_data(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps({"data": None}), encoding="utf-8")
    assert load_records(path) == []


def test_load_records_missing_file(tmp_path):
    with pytest.raises(CatalogError, match="no encontrado"):
        load_records(tmp_path / "missing.json")


def test_load_records_invalid_json(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="JSON inválido"):
        load_records(path)


def test_load_records_rejects_non_list(tmp_path):
    path = tmp_path / "stock.json"
    path.write_text(json.dumps({"data": {"id": "v1"}}), encoding="utf-8")
    with pytest.raises(CatalogError):
        load_records(path)


def test_huge_numbers_do_not_break_the_batch():
    vehicles = parse_vehicles([{"id": "v1", "year": 10**400}, {"id": "v2"}])
    assert [v.id for v in vehicles] == ["v1", "v2"]
    assert vehicles[0].year is None


def test_load_records_invalid_utf8(tmp_path):
    path = tmp_path / "stock.json"
    path.write_bytes(b"\xff\xfe[]")
    with pytest.raises(CatalogError, match="UTF-8"):
        load_records(path)


def test_load_records_directory(tmp_path):
    with pytest.raises(CatalogError, match="No se pudo leer"):
        load_records(tmp_path)
