from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from offline_auth.errors import (
    CorruptRecordError,
    ExpiredError,
    NotFoundError,
    SerializationError,
    StorageUnavailableError,
)
from offline_auth_contracts import (
    CredentialRecord,
    StoreEvent,
    StoreEventEmitter,
    StoreEventType,
)

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "offline_auth.json"
DEFAULT_MAX_AGE_SECONDS = 30 * 24 * 60 * 60

# Signed 64-bit epoch seconds, the range the desktop shell writes.
_MIN_TIMESTAMP = -(2**63)
_MAX_TIMESTAMP = 2**63 - 1


def resolve_storage_path(
    base_dir: str | os.PathLike[str], file_name: str = DEFAULT_FILE_NAME
) -> Path:
    """Ensure ``base_dir`` exists and return the credential file path inside it."""
    directory = Path(base_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create offline auth directory %s: %s", directory, exc)
        raise StorageUnavailableError(f"Failed to create directory: {exc}") from exc
    return directory / file_name


def parse_record(raw: bytes) -> CredentialRecord:
    """Decode the on-disk document. Raises ``ValueError`` on any schema mismatch."""
    try:
        loaded = json.loads(raw.decode("utf-8"))
    except RecursionError as exc:
        raise ValueError("document is nested too deeply") from exc
    if not isinstance(loaded, dict):
        raise ValueError("expected a JSON object")
    user_id = loaded.get("user_id")
    auth_token = loaded.get("auth_token")
    timestamp = loaded.get("timestamp")
    if not isinstance(user_id, str):
        raise ValueError("missing or invalid field 'user_id'")
    if not isinstance(auth_token, str):
        raise ValueError("missing or invalid field 'auth_token'")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValueError("missing or invalid field 'timestamp'")
    if not _MIN_TIMESTAMP <= timestamp <= _MAX_TIMESTAMP:
        raise ValueError("field 'timestamp' is out of range")
    return CredentialRecord(user_id=user_id, auth_token=auth_token, issued_at=timestamp)


@dataclass(frozen=True)
class StoreStatus:
    storage_path: str
    present: bool
    fresh: bool = False
    corrupt: bool = False
    user_id: str | None = None
    issued_at: int | None = None
    age_seconds: int | None = None
    expires_at: int | None = None


class OfflineCredentialStore:
    """Single-file offline credential persistence for a desktop shell.

    One record lives at ``<base_dir>/offline_auth.json``. ``save`` overwrites it,
    ``load`` returns it while fresh and deletes it once it is older than
    ``max_age_seconds``. The token is stored in cleartext; the file mode is
    narrowed to 0600 where the platform allows it. Callers serialize access.
    """

    def __init__(
        self,
        base_dir: str | os.PathLike[str],
        file_name: str = DEFAULT_FILE_NAME,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        event_emitter: StoreEventEmitter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_age_seconds <= 0:
            raise ValueError("max_age_seconds must be > 0")
        self._base_dir = Path(base_dir)
        self._file_name = file_name
        self._max_age_seconds = max_age_seconds
        self._event_emitter = event_emitter
        self._clock = clock

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def max_age_seconds(self) -> int:
        return self._max_age_seconds

    def storage_path(self) -> Path:
        return resolve_storage_path(self._base_dir, self._file_name)

    def save(self, user_id: str, auth_token: str) -> CredentialRecord:
        file_path = self.storage_path()
        record = CredentialRecord(user_id=user_id, auth_token=auth_token, issued_at=self._now())
        content = self._serialize(record)
        try:
            file_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write offline credential file %s: %s", file_path, exc)
            raise StorageUnavailableError(f"Failed to write file: {exc}") from exc
        self._chmod_file_safe(file_path)
        logger.info("Saved offline credential for user %s to %s", record.user_id, file_path)
        self._emit(StoreEventType.SAVED, file_path, user_id=record.user_id)
        return record

    def load(self) -> CredentialRecord:
        file_path = self.storage_path()
        raw = self._read_bytes(file_path)
        if raw is None:
            logger.debug("No offline credential at %s", file_path)
            self._emit(StoreEventType.NOT_FOUND, file_path)
            raise NotFoundError("No offline login data found.")
        try:
            record = parse_record(raw)
        except ValueError as exc:
            # Left on disk for inspection.
            logger.error("Failed to parse offline credential file %s: %s", file_path, exc)
            self._emit(StoreEventType.CORRUPT, file_path)
            raise CorruptRecordError(f"Failed to parse data: {exc}") from exc

        if self._is_expired(record, self._now()):
            removed = self._remove_expired(file_path)
            self._emit(
                StoreEventType.EXPIRED,
                file_path,
                user_id=record.user_id,
                file_removed=removed,
            )
            raise ExpiredError("Offline token expired. Must log in online.")

        logger.debug("Loaded offline credential for user %s", record.user_id)
        self._emit(StoreEventType.LOADED, file_path, user_id=record.user_id)
        return record

    def status(self) -> StoreStatus:
        """Describe the stored credential without modifying it."""
        file_path = self.storage_path()
        raw = self._read_bytes(file_path)
        if raw is None:
            return StoreStatus(storage_path=str(file_path), present=False)
        try:
            record = parse_record(raw)
        except ValueError:
            return StoreStatus(storage_path=str(file_path), present=True, corrupt=True)
        now = self._now()
        return StoreStatus(
            storage_path=str(file_path),
            present=True,
            fresh=not self._is_expired(record, now),
            user_id=record.user_id,
            issued_at=record.issued_at,
            age_seconds=record.age_seconds(now),
            expires_at=record.issued_at + self._max_age_seconds,
        )

    def _is_expired(self, record: CredentialRecord, now_epoch_s: int) -> bool:
        return record.age_seconds(now_epoch_s) > self._max_age_seconds

    def _serialize(self, record: CredentialRecord) -> str:
        if not isinstance(record.user_id, str) or not isinstance(record.auth_token, str):
            logger.error("Failed to serialize offline credential: fields must be strings")
            raise SerializationError(
                "Failed to serialize data: user_id and auth_token must be strings"
            )
        try:
            return json.dumps(record.to_payload())
        except (TypeError, ValueError) as exc:
            logger.error("Failed to serialize offline credential: %s", exc)
            raise SerializationError(f"Failed to serialize data: {exc}") from exc

    def _read_bytes(self, file_path: Path) -> bytes | None:
        try:
            return file_path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Failed to read offline credential file %s: %s", file_path, exc)
            raise StorageUnavailableError(f"Failed to read file: {exc}") from exc

    def _remove_expired(self, file_path: Path) -> bool:
        try:
            file_path.unlink()
        except OSError as exc:
            logger.error("Failed to remove expired offline credential file %s: %s", file_path, exc)
            return False
        logger.info("Removed expired offline credential file %s", file_path)
        return True

    def _chmod_file_safe(self, file_path: Path) -> None:
        try:
            os.chmod(file_path, 0o600)
        except OSError as exc:
            logger.debug("Could not restrict permissions on %s: %s", file_path, exc)

    def _emit(
        self,
        event_type: StoreEventType,
        file_path: Path,
        user_id: str | None = None,
        file_removed: bool | None = None,
    ) -> None:
        if self._event_emitter is None:
            return
        self._event_emitter.emit(
            StoreEvent(
                event_type=event_type,
                storage_path=str(file_path),
                emitted_at_epoch_s=self._now(),
                user_id=user_id,
                file_removed=file_removed,
            )
        )

    def _now(self) -> int:
        return int(self._clock())
