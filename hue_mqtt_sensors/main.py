"""Main application entry point."""

import logging
import sys
import threading

import uvicorn

from .config import AppConfig
from .http_api import create_app
from .logger import configure_logging
from .mqtt import HueSensorsMQTTBridge

logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    try:
        config = AppConfig.from_env()

        # Configure logging globally (once)
        configure_logging(config)
        logger.info("Configuration loaded successfully")

        # Creating the bridge connects to the hub (and pairs on first local run)
        mqtt_bridge = HueSensorsMQTTBridge(config)

        if config.http_enabled:
            app = create_app(mqtt_bridge)
            http_thread = threading.Thread(
                target=uvicorn.run,
                args=(app,),
                kwargs={"host": "0.0.0.0", "port": config.http_port, "log_level": "info"},
                daemon=True,
            )
            http_thread.start()
            logger.info(f"HTTP API server started on port {config.http_port}")

        # Blocks until stopped
        mqtt_bridge.start()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return
    except Exception as e:
        logger.error(f"Error starting application: {e}", exc_info=True)
        raise

    if mqtt_bridge.fatal_error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
