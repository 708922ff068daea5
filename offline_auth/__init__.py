from offline_auth.commands import CommandResult, OfflineAuthCommands
from offline_auth.config import ConfigError, OfflineAuthConfig
from offline_auth.errors import (
    CorruptRecordError,
    ExpiredError,
    NotFoundError,
    OfflineAuthError,
    SerializationError,
    StorageUnavailableError,
)
from offline_auth.store import (
    DEFAULT_FILE_NAME,
    DEFAULT_MAX_AGE_SECONDS,
    OfflineCredentialStore,
    StoreStatus,
    resolve_storage_path,
)
from offline_auth.telemetry import CompositeStoreEventEmitter, OpenTelemetryStoreEventEmitter
from offline_auth_contracts import CredentialRecord, StoreEvent, StoreEventType

__all__ = [
    "CommandResult",
    "CompositeStoreEventEmitter",
    "ConfigError",
    "CorruptRecordError",
    "CredentialRecord",
    "DEFAULT_FILE_NAME",
    "DEFAULT_MAX_AGE_SECONDS",
    "ExpiredError",
    "NotFoundError",
    "OfflineAuthCommands",
    "OfflineAuthConfig",
    "OfflineAuthError",
    "OfflineCredentialStore",
    "OpenTelemetryStoreEventEmitter",
    "SerializationError",
    "StorageUnavailableError",
    "StoreEvent",
    "StoreEventType",
    "StoreStatus",
    "resolve_storage_path",
]
