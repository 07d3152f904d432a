from __future__ import annotations

from collections.abc import Generator

import pytest
from stub_client import StubNetworkClient

from privnet.config import get_settings


@pytest.fixture()
def stub_client() -> StubNetworkClient:
    return StubNetworkClient()


@pytest.fixture()
def clear_settings_cache() -> Generator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
