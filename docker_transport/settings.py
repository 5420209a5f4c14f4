"""Environment-driven runtime configuration for the transport entry point."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from docker_transport.configuration import DockerConfiguration
from docker_transport.transport import DEFAULT_TIMEOUT


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    api_timeout: float = DEFAULT_TIMEOUT
    registry_username: str | None = None
    registry_password: str | None = None
    registry_url: str | None = None
    registry_email: str | None = None

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally. The ``DOCKER_HOST`` family is not read
        here; transports resolve those through their own environment lookup.
        """
        load_dotenv()

        api_timeout_raw = os.getenv("DOCKER_API_TIMEOUT", "").strip() or str(DEFAULT_TIMEOUT)
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ValueError("DOCKER_API_TIMEOUT must be a numeric value.") from exc
        if api_timeout <= 0:
            raise ValueError("DOCKER_API_TIMEOUT must be greater than zero.")

        registry_username = os.getenv("DOCKER_REGISTRY_USERNAME", "").strip() or None
        registry_password = os.getenv("DOCKER_REGISTRY_PASSWORD", "") or None
        if registry_username and not registry_password:
            raise ValueError(
                "DOCKER_REGISTRY_PASSWORD is required when DOCKER_REGISTRY_USERNAME is set."
            )

        return cls(
            api_timeout=api_timeout,
            registry_username=registry_username,
            registry_password=registry_password,
            registry_url=os.getenv("DOCKER_REGISTRY_URL", "").strip() or None,
            registry_email=os.getenv("DOCKER_REGISTRY_EMAIL", "").strip() or None,
        )

    def docker_configuration(self) -> DockerConfiguration:
        if self.registry_username and self.registry_password:
            return DockerConfiguration.with_registry_user_authentication(
                self.registry_username,
                self.registry_password,
                self.registry_url,
                self.registry_email,
            )
        return DockerConfiguration.with_defaults()
