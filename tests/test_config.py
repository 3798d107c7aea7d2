from __future__ import annotations

from datetime import timezone

import pytest

from cupdesk.api.utils import now_local
from cupdesk.core.config import Settings


def test_default_timezone_is_utc():
    assert Settings().local_timezone() is timezone.utc
    assert now_local().tzinfo is timezone.utc


def test_invalid_settings_are_rejected():
    with pytest.raises(ValueError):
        Settings(timezone="Nowhere/Atlantis")
    with pytest.raises(ValueError):
        Settings(default_plan="2weeks")
    with pytest.raises(ValueError):
        Settings(default_page_size=50, max_page_size=20)
