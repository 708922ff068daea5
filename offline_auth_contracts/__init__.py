from offline_auth_contracts.models import CredentialRecord, StoreEvent, StoreEventType
from offline_auth_contracts.protocols import StoreEventEmitter

__all__ = [
    "CredentialRecord",
    "StoreEvent",
    "StoreEventEmitter",
    "StoreEventType",
]
