from __future__ import annotations

from typing import Protocol

from offline_auth_contracts.models import StoreEvent


class StoreEventEmitter(Protocol):
    def emit(self, event: StoreEvent) -> None: ...
