"""Daemon configuration passed through to the API client unchanged."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DockerRegistryAuthentication:
    """Registry user credentials. Header encoding is left to the API client."""

    username: str
    password: str = field(repr=False)
    url: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class DockerConfiguration:
    """Container for daemon-level options supplied by the caller."""

    registry_authentication: DockerRegistryAuthentication | None = None

    @classmethod
    def with_defaults(cls) -> "DockerConfiguration":
        return cls()

    @classmethod
    def with_registry_user_authentication(
        cls,
        username: str,
        password: str,
        url: str | None = None,
        email: str | None = None,
    ) -> "DockerConfiguration":
        """Build a configuration carrying registry user authentication."""
        return cls(
            registry_authentication=DockerRegistryAuthentication(
                username=username,
                password=password,
                url=url,
                email=email,
            )
        )

    @property
    def has_registry_authentication(self) -> bool:
        return self.registry_authentication is not None
