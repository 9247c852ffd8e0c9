"""Persistence of bridge usernames obtained by pairing."""

import json
import logging
import os
from typing import Any, Dict, Optional


class CredentialStore:
    """JSON file mapping bridge addresses to paired usernames.

    File layout::

        {"bridges": {"192.168.1.2": {"username": "..."}}}
    """

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)
        self.logger = logging.getLogger(__name__)

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.warning(f"Ignoring unreadable credentials file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_username(self, address: str) -> Optional[str]:
        """Return the stored username for a bridge address, if any."""
        bridges = self._load().get("bridges", {})
        return bridges.get(address, {}).get("username")

    def save_username(self, address: str, username: str) -> None:
        """Store the username for a bridge address, keeping other bridges."""
        data = self._load()
        data.setdefault("bridges", {})[address] = {"username": username}

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        self.logger.info(f"Saved bridge credentials for {address} to {self.path}")
