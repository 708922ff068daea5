from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import asdict

from offline_auth.config import ConfigError, OfflineAuthConfig
from offline_auth.errors import OfflineAuthError
from offline_auth.store import OfflineCredentialStore

_REDACTED = "[REDACTED]"


def _print_json(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _build_store(args: argparse.Namespace) -> OfflineCredentialStore:
    if args.config is not None:
        return OfflineAuthConfig.from_file(args.config).build_store()
    return OfflineAuthConfig.from_mapping({"data_dir": args.data_dir}).build_store()


def _run(
    args: argparse.Namespace,
    handler: Callable[[OfflineCredentialStore, argparse.Namespace], int],
) -> int:
    try:
        store = _build_store(args)
    except (ConfigError, OSError, ValueError) as exc:
        print(f"Config load failed: {exc}", file=sys.stderr)
        return 2
    try:
        return handler(store, args)
    except OfflineAuthError as exc:
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1


def _save(store: OfflineCredentialStore, args: argparse.Namespace) -> int:
    record = store.save(args.user_id, args.token)
    _print_json(
        {
            "saved": True,
            "storage_path": str(store.storage_path()),
            "issued_at": record.issued_at,
        }
    )
    return 0


def _load(store: OfflineCredentialStore, args: argparse.Namespace) -> int:
    payload = store.load().to_payload()
    if not args.show_token:
        payload["auth_token"] = _REDACTED
    _print_json(payload)
    return 0


def _status(store: OfflineCredentialStore, args: argparse.Namespace) -> int:
    _print_json(asdict(store.status()))
    return 0


def _cmd_save(args: argparse.Namespace) -> int:
    return _run(args, _save)


def _cmd_load(args: argparse.Namespace) -> int:
    return _run(args, _load)


def _cmd_status(args: argparse.Namespace) -> int:
    return _run(args, _status)


def _add_location_args(parser: argparse.ArgumentParser) -> None:
    location = parser.add_mutually_exclusive_group(required=True)
    location.add_argument("--data-dir", help="Application data directory")
    location.add_argument("--config", help="JSON or YAML config file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="offline-auth credential store CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    save_parser = subparsers.add_parser("save", help="Store an offline credential")
    _add_location_args(save_parser)
    save_parser.add_argument("--user-id", required=True)
    save_parser.add_argument("--token", required=True)
    save_parser.set_defaults(func=_cmd_save)

    load_parser = subparsers.add_parser("load", help="Load and validate the stored credential")
    _add_location_args(load_parser)
    load_parser.add_argument(
        "--show-token", action="store_true", help="Print the token instead of redacting it"
    )
    load_parser.set_defaults(func=_cmd_load)

    status_parser = subparsers.add_parser("status", help="Inspect the stored credential")
    _add_location_args(status_parser)
    status_parser.set_defaults(func=_cmd_status)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    exit_code = args.func(args)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
