"""Entry point: resolve the Docker daemon transport and check it responds."""

import logging
import os

from docker_transport.settings import Settings
from docker_transport.transport import create_transport


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Resolve the transport from the process environment and ping the daemon."""
    _configure_logging()
    logger = logging.getLogger("docker-transport")
    settings = Settings.load()
    transport = create_transport(
        os.environ.get,
        settings.docker_configuration(),
        timeout=settings.api_timeout,
    )

    try:
        logger.info("Using Docker daemon at %s", transport.host.url)
        response = transport.get("/_ping")
        logger.info("Docker daemon ping: %s", response.text.strip())
    except Exception:
        logger.exception("Docker daemon check failed.")
        raise
    finally:
        transport.close()


if __name__ == "__main__":
    main()
