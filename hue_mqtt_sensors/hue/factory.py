"""Factory function for creating Hue hub clients."""

import logging
import socket
from typing import TYPE_CHECKING

from .base import BaseHueClient
from .credentials import CredentialStore
from .exceptions import HubConnectionError
from .local_client import LocalHueClient, discover_bridges, register_user
from .remote_client import RemoteHueClient

if TYPE_CHECKING:
    from ..config import HueConfig


def create_hue_client(config: "HueConfig") -> BaseHueClient:
    """Create the hub client selected by the configured auth mode.

    Remote mode connects with the configured tokens. Local mode resolves the
    bridge address (configured, else the first discovered bridge) and the
    username (configured, else stored, else paired and stored).

    Args:
        config: Hue configuration (use AppConfig.from_env().hue)

    Returns:
        LocalHueClient or RemoteHueClient instance

    Raises:
        HubError: If discovery or pairing fails
    """
    from ..config import AuthMode

    logger = logging.getLogger(__name__)

    if config.auth_mode == AuthMode.REMOTE:
        logger.info("Creating Remote API client")
        return RemoteHueClient(
            access_token=config.access_token,
            refresh_token=config.refresh_token,
            bridge_username=config.bridge_username,
            client_id=config.client_id,
            client_secret=config.client_secret,
            timeout=config.timeout,
        )

    address = config.bridge_address
    if not address:
        bridges = discover_bridges(timeout=config.timeout)
        if not bridges:
            raise HubConnectionError("No Hue bridge found on the local network")
        address = bridges[0]["internalipaddress"]
        logger.info(f"Using discovered bridge at {address}")

    username = config.bridge_username
    if not username:
        store = CredentialStore(config.credentials_path)
        username = store.get_username(address)
        if username:
            logger.info(f"Using stored credentials for bridge at {address}")
        else:
            logger.info(f"No credentials for bridge at {address}, pairing")
            username = register_user(
                address, f"{config.app_name}#{socket.gethostname()}"[:40], timeout=config.timeout
            )
            store.save_username(address, username)

    logger.info(f"Creating Local API client for {address}")
    return LocalHueClient(address=address, username=username, timeout=config.timeout)
