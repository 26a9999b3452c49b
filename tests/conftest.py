import pytest

from splitcalc.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Reload settings around every test so env changes never leak."""
    for var in (
        "SPLITCALC_EXPORT_FILENAME",
        "SPLITCALC_SHARER_SEPARATOR",
        "SPLITCALC_CURRENCY_SYMBOL",
        "SPLITCALC_DISPLAY_PRECISION",
        "SPLITCALC_PERSON_REMOVAL_POLICY",
        "SPLITCALC_LOG_LEVEL",
        "SPLITCALC_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
