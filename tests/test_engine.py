from autocrm.matching import MatchingEngine
from autocrm.models import SearchCriteria, Vehicle


def _toyota(**kwargs):
    data = {"id": "v1", "brand": "Toyota", "year": 2019, "price": 8_000_000}
    data.update(kwargs)
    return Vehicle(**data)


def _full_search(**kwargs):
    data = {
        "id": "s1",
        "brand": "Toyota",
        "year_min": 2018,
        "year_max": 2020,
        "price_min": 7_000_000,
        "price_max": 9_000_000,
    }
    data.update(kwargs)
    return SearchCriteria(**data)


def test_find_vehicles_skips_sold_and_deleted(settings):
    engine = MatchingEngine(settings)
    vehicles = [
        _toyota(id="sold", status="SOLD"),
        _toyota(id="deleted", status="deleted"),
        _toyota(id="available", status="available"),
        _toyota(id="no-status"),
    ]

    results = engine.find_vehicles_for_search(vehicles, _full_search())

    assert [r.vehicle.id for r in results] == ["available", "no-status"]


def test_find_vehicles_with_nothing_offerable(settings):
    engine = MatchingEngine(settings)
    assert engine.find_vehicles_for_search([_toyota(status="sold")], _full_search()) == []
    assert engine.find_vehicles_for_search(None, _full_search()) == []


def test_base_min_score_comes_from_settings(settings):
    strict = settings.model_copy(update={"match_base_min_score": 75})
    assert MatchingEngine(strict).find_vehicles_for_search([_toyota()], _full_search()) == []
    assert len(MatchingEngine(settings).find_vehicles_for_search([_toyota()], _full_search())) == 1


def test_find_searches_for_vehicle_ranks_searches(settings):
    engine = MatchingEngine(settings)
    searches = [
        SearchCriteria(id="free-text", title="busca toyota"),
        SearchCriteria(id="other-brand", brand="Ford"),
        _full_search(id="full"),
        SearchCriteria(id="empty"),
    ]

    matches = engine.find_searches_for_vehicle(_toyota(), searches)

    assert [m.search.id for m in matches] == ["full", "free-text"]
    assert [m.score for m in matches] == [70, 28]
    assert matches[0].result.reasons[0] == "Misma marca"


def test_find_searches_for_unavailable_vehicle(settings):
    engine = MatchingEngine(settings)
    assert engine.find_searches_for_vehicle(_toyota(status="sold"), [_full_search()]) == []


def test_find_searches_without_searches(settings):
    assert MatchingEngine(settings).find_searches_for_vehicle(_toyota(), None) == []


def test_custom_excluded_statuses(settings):
    custom = settings.model_copy(update={"excluded_vehicle_statuses": ["reserved"]})
    engine = MatchingEngine(custom)
    assert not engine.is_offerable(_toyota(status="Reserved"))
    assert engine.is_offerable(_toyota(status="sold"))
