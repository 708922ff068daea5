from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Protocol, cast

from offline_auth_contracts import StoreEvent, StoreEventEmitter

AttributeValue = str | bool | int


class StoreTracer(Protocol):
    def start_as_current_span(
        self, name: str, attributes: Mapping[str, AttributeValue] | None = None
    ) -> AbstractContextManager[Any]: ...


def store_event_attributes(event: StoreEvent) -> dict[str, AttributeValue]:
    """Span attributes for a store event. The token is never part of an event."""
    attributes: dict[str, AttributeValue] = {
        "offline_auth.storage_path": event.storage_path,
        "offline_auth.emitted_at_epoch_s": event.emitted_at_epoch_s,
    }
    if event.user_id is not None:
        attributes["offline_auth.user_id"] = event.user_id
    if event.file_removed is not None:
        attributes["offline_auth.file_removed"] = event.file_removed
    return attributes


class OpenTelemetryStoreEventEmitter(StoreEventEmitter):
    """Records each store outcome as a short ``offline_auth.<event>`` span."""

    def __init__(self, tracer: StoreTracer | None = None) -> None:
        self._tracer = tracer if tracer is not None else _opentelemetry_tracer()

    def emit(self, event: StoreEvent) -> None:
        span_name = f"offline_auth.{event.event_type.value}"
        with self._tracer.start_as_current_span(
            span_name, attributes=store_event_attributes(event)
        ):
            pass


def _opentelemetry_tracer() -> StoreTracer:
    try:
        from opentelemetry import trace
    except ImportError as exc:
        raise RuntimeError(
            "Store telemetry needs 'opentelemetry-api' "
            "(pip install offline-auth[telemetry]) or an explicit tracer."
        ) from exc
    return cast(StoreTracer, trace.get_tracer(__name__))


@dataclass
class CompositeStoreEventEmitter:
    emitters: tuple[StoreEventEmitter, ...]

    def emit(self, event: StoreEvent) -> None:
        for emitter in self.emitters:
            emitter.emit(event)
