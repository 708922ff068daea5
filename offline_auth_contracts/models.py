from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StoreEventType(str, Enum):
    SAVED = "saved"
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    CORRUPT = "corrupt"
    EXPIRED = "expired"


@dataclass(frozen=True)
class CredentialRecord:
    user_id: str
    auth_token: str
    issued_at: int

    def to_payload(self) -> dict[str, object]:
        # "timestamp" is the on-disk tag for issued_at.
        return {
            "user_id": self.user_id,
            "auth_token": self.auth_token,
            "timestamp": self.issued_at,
        }

    def age_seconds(self, now_epoch_s: int) -> int:
        return now_epoch_s - self.issued_at


@dataclass(frozen=True)
class StoreEvent:
    event_type: StoreEventType
    storage_path: str
    emitted_at_epoch_s: int
    user_id: str | None = None
    file_removed: bool | None = None
