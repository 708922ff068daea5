from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from offline_auth.errors import OfflineAuthError
from offline_auth.store import OfflineCredentialStore
from offline_auth_contracts import StoreEventEmitter

if TYPE_CHECKING:
    from offline_auth.config import OfflineAuthConfig


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    data: dict[str, object] | None = None
    error: str | None = None
    error_kind: str | None = None

    @classmethod
    def failure(cls, exc: OfflineAuthError) -> CommandResult:
        return cls(ok=False, error=str(exc), error_kind=exc.kind)


class OfflineAuthCommands:
    """Command handlers the desktop shell invokes.

    Store failures come back as messages on a ``CommandResult`` so the UI layer
    can show them without catching exceptions. Programming errors still raise.
    """

    def __init__(self, store: OfflineCredentialStore) -> None:
        self._store = store

    @classmethod
    def from_config(
        cls,
        config: OfflineAuthConfig,
        event_emitter: StoreEventEmitter | None = None,
    ) -> OfflineAuthCommands:
        return cls(store=config.build_store(event_emitter=event_emitter))

    @property
    def store(self) -> OfflineCredentialStore:
        return self._store

    def save_offline_auth(self, user_id: str, auth_token: str) -> CommandResult:
        try:
            self._store.save(user_id, auth_token)
        except OfflineAuthError as exc:
            return CommandResult.failure(exc)
        return CommandResult(ok=True)

    def load_offline_auth(self) -> CommandResult:
        try:
            record = self._store.load()
        except OfflineAuthError as exc:
            return CommandResult.failure(exc)
        return CommandResult(ok=True, data=record.to_payload())
