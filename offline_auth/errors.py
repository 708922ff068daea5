from __future__ import annotations


class OfflineAuthError(RuntimeError):
    """Base class for failures surfaced by the offline credential store."""

    kind = "offline_auth_error"


class StorageUnavailableError(OfflineAuthError):
    kind = "storage_unavailable"


class SerializationError(OfflineAuthError):
    kind = "serialization_error"


class NotFoundError(OfflineAuthError):
    """No credential has been stored yet. Callers fall back to online login."""

    kind = "not_found"


class CorruptRecordError(OfflineAuthError):
    kind = "corrupt_record"


class ExpiredError(OfflineAuthError):
    kind = "expired"
