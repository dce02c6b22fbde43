"""
Shared fixtures for biscuit tests.
"""

from datetime import datetime, timezone

import pytest

from biscuit import cookies

# 2024-01-01T00:00:00Z
FIXED_NOW: int = int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def fixed_clock(monkeypatch: pytest.MonkeyPatch) -> int:
    """Pin the wall clock used to resolve ``Expires`` attributes."""
    monkeypatch.setattr(cookies.time, "time", lambda: float(FIXED_NOW))
    return FIXED_NOW


def utc_timestamp(*args: int) -> int:
    """Unix timestamp of a UTC calendar date."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def french_time_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make ``%a``/``%b`` in ``strptime`` use French names, as under ``fr_FR``."""
    import _strptime

    locale_time = _strptime.LocaleTime()
    locale_time.a_weekday = ["lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim."]
    locale_time.f_weekday = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]
    locale_time.a_month = [
        "", "janv.", "févr.", "mars", "avr.", "mai", "juin",
        "juil.", "août", "sept.", "oct.", "nov.", "déc.",
    ]
    locale_time.f_month = [
        "", "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ]
    monkeypatch.setattr(_strptime, "_TimeRE_cache", _strptime.TimeRE(locale_time))
    monkeypatch.setattr(_strptime, "_regex_cache", {})
