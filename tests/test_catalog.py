"""Tests for the NASA NeoWs catalog lookups (HTTP stubbed)."""
import pytest
import requests

import catalog
from catalog import fetch_neo, neo_diameter_m, neo_to_parameters, neo_velocity_km_s

NEO = {
    "id": "3542519",
    "name": "(2010 PK9)",
    "estimated_diameter": {
        "meters": {"estimated_diameter_min": 100.0, "estimated_diameter_max": 300.0},
    },
    "close_approach_data": [
        {"relative_velocity": {"kilometers_per_second": "17.5"}},
    ],
}


class _Response:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class TestFetchNeo:

    def test_success(self, monkeypatch):
        calls = {}

        def fake_get(url, params=None, timeout=None):
            calls.update(url=url, params=params, timeout=timeout)
            return _Response(200, NEO)

        monkeypatch.setattr(catalog.requests, "get", fake_get)
        assert fetch_neo("3542519", api_key="KEY", timeout=5) == NEO
        assert calls['url'].endswith("/neo/3542519")
        assert calls['params'] == {"api_key": "KEY"}
        assert calls['timeout'] == 5

    def test_not_found(self, monkeypatch):
        monkeypatch.setattr(catalog.requests, "get", lambda *a, **kw: _Response(404))
        assert fetch_neo("0") is None

    def test_network_error(self, monkeypatch):
        def fake_get(*args, **kwargs):
            raise requests.ConnectionError("offline")

        monkeypatch.setattr(catalog.requests, "get", fake_get)
        assert fetch_neo("3542519") is None


class TestNeoToParameters:

    def test_mean_diameter_and_velocity(self):
        params = neo_to_parameters(NEO)
        assert params.diameter_m == pytest.approx(200.0)
        assert params.velocity_km_s == pytest.approx(17.5)
        assert params.density_kg_m3 == 3000.0
        assert params.angle_deg == 45.0

    def test_single_diameter_bound(self):
        neo = {"estimated_diameter": {"meters": {"estimated_diameter_max": 80.0}}}
        assert neo_diameter_m(neo) == 80.0

    def test_missing_fields_use_defaults(self):
        assert neo_diameter_m({}) == 0.0
        assert neo_velocity_km_s({}) == catalog.DEFAULT_VELOCITY_KM_S
        bad = {"close_approach_data": [{"relative_velocity": {"kilometers_per_second": "n/a"}}]}
        assert neo_velocity_km_s(bad) == catalog.DEFAULT_VELOCITY_KM_S
