import pytest

from autocrm.config import Settings


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        match_base_min_score=60,
        excluded_vehicle_statuses=["sold", "deleted"],
        log_level="INFO",
    )
