"""Metrics collector — Prometheus counters and histograms.

- ``qrmint_qr_codes_created_total`` counter
- ``qrmint_qr_code_conflicts_total`` counter-vec (``check`` label)
- ``qrmint_create_qr_code_histogram``
- ``qrmint_get_qr_code_histogram``
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Histogram

if TYPE_CHECKING:
    from collections.abc import Iterator


_PREFIX = "qrmint"


class MetricsCollector:
    """Low-level Prometheus collector that owns the registry.

    Use :class:`EngineMetrics` for the high-level tracking interface.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._registry

    def histogram(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Histogram:
        """Register and return a Histogram."""
        return Histogram(name, doc, labels, registry=self._registry)

    def counter(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Counter:
        """Register and return a Counter."""
        return Counter(name, doc, labels, registry=self._registry)


class EngineMetrics:
    """High-level gateway metrics.

    All histograms track operation duration in seconds.
    """

    def __init__(self, collector: MetricsCollector | None = None) -> None:
        self._collector = collector or MetricsCollector()

        self._created = self._collector.counter(
            f"{_PREFIX}_qr_codes_created",
            "QR payment records created",
        )
        self._conflicts = self._collector.counter(
            f"{_PREFIX}_qr_code_conflicts",
            "Create requests rejected as duplicates",
            ("check",),
        )
        self._create = self._collector.histogram(
            f"{_PREFIX}_create_qr_code_histogram",
            "Duration of create QR code operations",
        )
        self._get = self._collector.histogram(
            f"{_PREFIX}_get_qr_code_histogram",
            "Duration of QR code lookups",
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._collector.registry

    def record_created(self) -> None:
        self._created.inc()

    def record_conflict(self, check: str) -> None:
        """Count a duplicate rejection; ``check`` is ``wallet_url`` or ``url``."""
        self._conflicts.labels(check=check).inc()

    @contextmanager
    def track_create_qr_code(self) -> Iterator[None]:
        """Track the duration of a create operation."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._create.observe(time.monotonic() - start)

    @contextmanager
    def track_get_qr_code(self) -> Iterator[None]:
        """Track the duration of a lookup."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._get.observe(time.monotonic() - start)
