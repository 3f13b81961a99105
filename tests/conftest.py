"""Shared fixtures for the OUI lookup tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from oui_lookup.core.cache import JsonVendorCache, RawTextCache
from oui_lookup.core.exceptions import RegistryFetchError
from oui_lookup.core.vendor_store import VendorStore
from oui_lookup.services.lookup_service import LookupService


DATA_DIR = Path(__file__).parent / "data"


class StubFetcher:
    """Fetcher double returning canned registry text."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch(self, url=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def registry_text() -> str:
    return (DATA_DIR / "oui_sample.txt").read_text(encoding="utf-8")


@pytest.fixture
def fetcher(registry_text):
    return StubFetcher(registry_text)


@pytest.fixture
def failing_fetcher():
    return StubFetcher(error=RegistryFetchError("network unreachable"))


@pytest.fixture
def json_cache(tmp_path):
    return JsonVendorCache(str(tmp_path / "vendors.json"))


@pytest.fixture
def raw_cache(tmp_path):
    return RawTextCache(str(tmp_path / "oui.txt"))


@pytest.fixture
def service(fetcher, json_cache):
    return LookupService(store=VendorStore(), fetcher=fetcher, cache=json_cache)
