from __future__ import annotations

import argparse
import json
import logging

from offline_auth import OfflineAuthCommands, OfflineAuthConfig


def run(data_dir: str, user_id: str, auth_token: str) -> dict[str, object]:
    """Startup flow of a desktop shell: try the offline credential, fall back to online login."""
    commands = OfflineAuthCommands.from_config(OfflineAuthConfig(data_dir=data_dir))
    offline = commands.load_offline_auth()
    if offline.ok and offline.data is not None:
        return {"mode": "offline", "user_id": offline.data["user_id"]}

    # Online login would happen here; persist its result for the next offline start.
    saved = commands.save_offline_auth(user_id, auth_token)
    return {
        "mode": "online",
        "offline_error": offline.error_kind,
        "credential_saved": saved.ok,
        "save_error": saved.error,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline login flow for a desktop shell.")
    parser.add_argument("--data-dir", default=".offline-auth-demo")
    parser.add_argument("--user-id", default="demo-user")
    parser.add_argument("--token", default="demo-token")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    payload = run(data_dir=args.data_dir, user_id=args.user_id, auth_token=args.token)
    print(json.dumps(payload, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
