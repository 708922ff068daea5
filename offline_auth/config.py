from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from offline_auth.store import (
    DEFAULT_FILE_NAME,
    DEFAULT_MAX_AGE_SECONDS,
    OfflineCredentialStore,
)
from offline_auth_contracts import StoreEventEmitter


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class OfflineAuthConfig:
    """Startup configuration handed over by the host shell."""

    data_dir: str
    file_name: str = DEFAULT_FILE_NAME
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> OfflineAuthConfig:
        data_dir = payload.get("data_dir")
        if not isinstance(data_dir, str) or data_dir.strip() == "":
            raise ConfigError("data_dir is required.")
        file_name = payload.get("file_name", DEFAULT_FILE_NAME)
        if not isinstance(file_name, str) or file_name.strip() == "":
            raise ConfigError("file_name must be a non-empty string.")
        max_age_seconds = payload.get("max_age_seconds", DEFAULT_MAX_AGE_SECONDS)
        if isinstance(max_age_seconds, bool) or not isinstance(max_age_seconds, int):
            raise ConfigError("max_age_seconds must be an integer.")
        if max_age_seconds <= 0:
            raise ConfigError("max_age_seconds must be > 0.")
        return cls(data_dir=data_dir, file_name=file_name, max_age_seconds=max_age_seconds)

    @classmethod
    def from_file(cls, config_path: str) -> OfflineAuthConfig:
        path = Path(config_path)
        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() in {".yaml", ".yml"}:
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:  # pragma: no cover - env-dependent
                raise RuntimeError(
                    "YAML config files require PyYAML. Install with: pip install pyyaml"
                ) from exc
            try:
                loaded = yaml.safe_load(raw)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Config file is not valid YAML: {exc}") from exc
        else:
            try:
                loaded = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Config file is not valid JSON: {exc}") from exc

        if not isinstance(loaded, dict):
            raise ConfigError("Config file must deserialize to an object.")
        return cls.from_mapping(loaded)

    def build_store(self, event_emitter: StoreEventEmitter | None = None) -> OfflineCredentialStore:
        return OfflineCredentialStore(
            base_dir=self.data_dir,
            file_name=self.file_name,
            max_age_seconds=self.max_age_seconds,
            event_emitter=event_emitter,
        )
