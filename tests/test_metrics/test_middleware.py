"""Tests for Prometheus metrics middleware and the engine metrics collector."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry, generate_latest

from qrmint.metrics.collector import EngineMetrics, MetricsCollector
from qrmint.metrics.middleware import PrometheusMiddleware


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def app(registry) -> FastAPI:
    app = FastAPI()
    app.add_middleware(PrometheusMiddleware, registry=registry)

    @app.get("/items/{item_id}")
    async def get_item(item_id: str) -> dict:
        return {"id": item_id}

    return app


class TestPrometheusMiddleware:
    def test_counts_by_route_template(self, app, registry) -> None:
        client = TestClient(app)
        client.get("/items/a")
        client.get("/items/b")

        value = registry.get_sample_value(
            "http_request_total",
            {"method": "GET", "route": "/items/{item_id}", "status_code": "200", "app": "qrmint"},
        )
        assert value == 2.0

    def test_raw_values_not_used_as_labels(self, app, registry) -> None:
        TestClient(app).get("/items/secret-wallet")
        assert b"secret-wallet" not in generate_latest(registry)

    def test_unmatched_route(self, app, registry) -> None:
        TestClient(app).get("/nope")
        value = registry.get_sample_value(
            "http_request_total",
            {"method": "GET", "route": "unmatched", "status_code": "404", "app": "qrmint"},
        )
        assert value == 1.0

    def test_records_duration(self, app, registry) -> None:
        TestClient(app).get("/items/a")
        count = registry.get_sample_value(
            "http_request_duration_seconds_count",
            {"method": "GET", "route": "/items/{item_id}", "app": "qrmint"},
        )
        assert count == 1.0


class TestEngineMetrics:
    def test_private_registries(self) -> None:
        a = EngineMetrics()
        b = EngineMetrics()
        assert a.registry is not b.registry

    def test_shared_collector(self, registry) -> None:
        metrics = EngineMetrics(MetricsCollector(registry))
        assert metrics.registry is registry

    def test_record_created(self) -> None:
        metrics = EngineMetrics()
        metrics.record_created()
        assert metrics.registry.get_sample_value("qrmint_qr_codes_created_total") == 1.0

    def test_record_conflict(self) -> None:
        metrics = EngineMetrics()
        metrics.record_conflict("url")
        metrics.record_conflict("url")
        assert (
            metrics.registry.get_sample_value("qrmint_qr_code_conflicts_total", {"check": "url"})
            == 2.0
        )

    def test_track_create_observes_on_error(self) -> None:
        metrics = EngineMetrics()
        with pytest.raises(ValueError, match="boom"), metrics.track_create_qr_code():
            raise ValueError("boom")
        assert metrics.registry.get_sample_value("qrmint_create_qr_code_histogram_count") == 1.0

    def test_track_get(self) -> None:
        metrics = EngineMetrics()
        with metrics.track_get_qr_code():
            pass
        assert metrics.registry.get_sample_value("qrmint_get_qr_code_histogram_count") == 1.0
