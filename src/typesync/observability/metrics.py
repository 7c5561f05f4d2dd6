"""Metrics hook protocol and no-op default implementation.

typesync emits a handful of counters and timings while building actions.
By default a :class:`NoopMetricsHook` is used so there is zero overhead.
Callers can supply any object satisfying the :class:`MetricsHook` protocol
to route metrics to StatsD, Prometheus or similar.

Emitted metric names:

* ``typesync.actions_total``       -- counter, tagged with ``action``
* ``typesync.build_duration_ms``   -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict whose keys and values are
    strings.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
