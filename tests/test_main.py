"""Tests for the command line interface."""
from __future__ import annotations

import json

import pytest
import yaml

from oui_lookup import main as cli
from oui_lookup.core.exceptions import RegistryFetchError

from conftest import StubFetcher


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "cache": {
            "json_path": str(tmp_path / "vendors.json"),
            "raw_path": str(tmp_path / "oui.txt"),
        },
    }))
    return path


@pytest.fixture
def stub_fetcher(monkeypatch, registry_text):
    stub = StubFetcher(registry_text)
    monkeypatch.setattr(
        "oui_lookup.services.lookup_service.RegistryFetcher",
        lambda **kwargs: stub,
    )
    return stub


class TestCli:
    def test_lookup(self, config_file, stub_fetcher, capsys):
        code = cli.main(["-c", str(config_file), "lookup", "30:23:03:3A:F3:55", "bogus"])
        assert code == 0
        out = capsys.readouterr().out
        assert "30:23:03:3A:F3:55: Belkin International Inc. (30:23:03)" in out
        assert "    Playa Vista    null  90094" in out
        assert "bogus: no match" in out

    def test_lookup_json(self, config_file, stub_fetcher, capsys):
        cli.main(["-c", str(config_file), "lookup", "--json", "02:00:00:00:00:01"])
        line = capsys.readouterr().out.strip()
        assert json.loads(line) == {
            "input": "02:00:00:00:00:01", "result": "private",
            "mac": "02:00:00", "organization": "Private",
        }
        assert stub_fetcher.calls == 0

    def test_update(self, config_file, stub_fetcher, capsys, tmp_path):
        assert cli.main(["-c", str(config_file), "update"]) == 0
        assert "Installed 5 vendor records" in capsys.readouterr().out
        assert (tmp_path / "vendors.json").exists()
        assert (tmp_path / "oui.txt").exists()

    def test_update_failure_exit_code(self, config_file, stub_fetcher):
        stub_fetcher.error = RegistryFetchError("offline")
        assert cli.main(["-c", str(config_file), "update"]) == 1

    def test_generate_config(self, tmp_path, capsys):
        target = tmp_path / "conf" / "config.yaml"
        assert cli.main(["-c", str(target), "--generate-config"]) == 0
        assert yaml.safe_load(target.read_text())["cache"]["backend"] == "json"

    def test_no_command(self, config_file):
        assert cli.main(["-c", str(config_file)]) == 1
