"""Tests for the REST API."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from oui_lookup.core.config import Config
from oui_lookup.core.exceptions import RegistryFetchError
from oui_lookup.core.vendor_store import VendorStore
from oui_lookup.services.lookup_service import LookupService
from oui_lookup.web.api import create_app

from conftest import StubFetcher


@pytest.fixture
def client(service):
    return TestClient(create_app(Config(), service=service))


class TestLookupEndpoint:
    def test_vendor(self, client):
        response = client.get("/api/lookup/30:23:03:3A:F3:55")
        assert response.status_code == 200
        body = response.json()
        assert body["result"] == "vendor"
        assert body["organization"] == "Belkin International Inc."
        assert body["company_id"] == "302303"

    def test_private(self, client):
        response = client.get("/api/lookup/02-00-00-00-00-01")
        assert response.json() == {"result": "private", "mac": "02:00:00", "organization": "Private"}

    def test_invalid(self, client):
        response = client.get("/api/lookup/30:23:03:3A:F3")
        assert response.json() == {"result": "no_match"}

    def test_load_failure(self, client, fetcher):
        fetcher.error = RegistryFetchError("offline")
        response = client.get("/api/lookup/30:23:03:3A:F3:55")
        assert response.status_code == 503


class TestUpdateEndpoint:
    def test_update(self, client):
        response = client.post("/api/update")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "records": 5}

    def test_update_failure(self, client, fetcher):
        fetcher.error = RegistryFetchError("offline")
        response = client.post("/api/update")
        assert response.status_code == 502


class TestStatusEndpoint:
    def test_status_before_and_after_load(self, client):
        body = client.get("/api/status").json()
        assert body["loaded"] is False
        assert body["records"] == 0
        assert body["loaded_at"] is None
        assert body["skipped_entries"] == 0

        client.post("/api/update")
        body = client.get("/api/status").json()
        assert body["loaded"] is True
        assert body["records"] == 5
        assert body["cache_backend"] == "json"

    def test_status_reports_skipped_entries(self, json_cache, registry_text):
        broken = registry_text.replace("302303     (base 16)", "302303 (base 16)")
        service = LookupService(VendorStore(), StubFetcher(broken), json_cache)
        client = TestClient(create_app(Config(), service=service))
        client.post("/api/update")
        body = client.get("/api/status").json()
        assert body["records"] == 4
        assert body["skipped_entries"] == 1
