"""
HTTP transports for reaching a Docker-compatible daemon.

The remote transport is resolved purely from an injected environment lookup so
callers (and tests) never have to touch the real process environment. The
local transport talks to the daemon's unix socket.
"""

import json
import logging
import os
import ssl
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

import httpx

from docker_transport.configuration import DockerConfiguration
from docker_transport.ssl_context import DefaultSslContextFactory, SslContextFactory

logger = logging.getLogger(__name__)

EnvironmentLookup = Callable[[str], str | None]

DOCKER_HOST = "DOCKER_HOST"
DOCKER_TLS_VERIFY = "DOCKER_TLS_VERIFY"
DOCKER_CERT_PATH = "DOCKER_CERT_PATH"

DEFAULT_TIMEOUT = 60.0
DEFAULT_SOCKET_PATH = "/var/run/docker.sock"

NETWORK_SCHEMES = ("tcp", "http", "https")
LOCAL_PREFIXES = ("unix://", "npipe://")
UNIX_PREFIX = "unix://"

# Ports used when DOCKER_HOST omits one.
DEFAULT_PORTS = {"http": 80, "https": 443}
DOCKER_PORT = 2375
DOCKER_TLS_PORT = 2376
MAX_PORT = 65535

MAX_ERROR_SNIPPET = 512


class DockerConfigurationError(ValueError):
    """Raised when the environment describes an unusable daemon transport."""


class DockerTransportError(RuntimeError):
    """Represents failures when communicating with the daemon."""


class DockerEngineError(DockerTransportError):
    """The daemon answered with an HTTP error status."""

    def __init__(self, message: str, *, status_code: int, daemon_message: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.daemon_message = daemon_message


@dataclass(frozen=True, slots=True)
class HostDescriptor:
    """Resolved scheme, hostname and port of the daemon endpoint."""

    scheme: str
    hostname: str
    port: int

    @property
    def url(self) -> str:
        hostname = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        return f"{self.scheme}://{hostname}:{self.port}"


LOCAL_HOST = HostDescriptor(scheme="http", hostname="localhost", port=80)


@dataclass(frozen=True, slots=True)
class HttpTransport:
    """
    A resolved daemon endpoint plus the client used to reach it.

    The request helpers are thin wrappers: no retries, no pooling policy, and
    no interpretation of the daemon API beyond surfacing error responses.
    """

    host: HostDescriptor
    client: httpx.Client = field(repr=False)
    configuration: DockerConfiguration
    ssl_context: ssl.SSLContext | None = field(default=None, repr=False)

    @property
    def is_secure(self) -> bool:
        return self.ssl_context is not None

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self._request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self._request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self._request("DELETE", path, **kwargs)

    def close(self) -> None:
        """Close the underlying HTTP resources."""
        self.client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue a single request and map failures onto transport errors."""

        def _transport_error(message: str, *, exc: Exception | None = None) -> DockerTransportError:
            logger.error(
                message,
                extra={"method": method, "path": path, "daemon": self.host.url},
                exc_info=exc,
            )
            return DockerTransportError(message)

        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise _transport_error(
                f"Docker daemon request timed out ({method} {path}).",
                exc=exc,
            ) from exc
        except httpx.RequestError as exc:
            raise _transport_error(
                f"Docker daemon request failed ({method} {path}): {exc!s}",
                exc=exc,
            ) from exc

        if response.is_error:
            daemon_message = _daemon_message(response)
            logger.warning(
                "Docker daemon responded with error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "content": daemon_message,
                },
            )
            raise DockerEngineError(
                f"Docker daemon error ({response.status_code}) during {method} {path}: "
                f"{daemon_message or 'no body provided.'}",
                status_code=response.status_code,
                daemon_message=daemon_message,
            )

        return response


class RemoteTransport(HttpTransport):
    """Transport for a daemon reached over TCP, optionally with TLS."""

    @classmethod
    def create_if_possible(
        cls,
        environment: EnvironmentLookup,
        configuration: DockerConfiguration,
        ssl_context_factory: SslContextFactory | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "RemoteTransport | None":
        """
        Resolve a remote transport from ``DOCKER_*`` variables.

        Returns ``None`` when ``DOCKER_HOST`` is unset or names a local path.
        Raises ``DockerConfigurationError`` when TLS is requested without
        ``DOCKER_CERT_PATH``; SSL context factory errors propagate unchanged.
        """
        docker_host = _lookup(environment, DOCKER_HOST)
        if docker_host is None:
            logger.debug("DOCKER_HOST not set; remote transport not applicable")
            return None
        if _is_local_reference(docker_host):
            logger.debug(
                "DOCKER_HOST names a local path; remote transport not applicable",
                extra={"docker_host": docker_host},
            )
            return None

        scheme, hostname, port = _parse_network_address(docker_host)

        secure = _lookup(environment, DOCKER_TLS_VERIFY) is not None
        ssl_context = None
        if secure:
            cert_path = _lookup(environment, DOCKER_CERT_PATH)
            if cert_path is None:
                raise DockerConfigurationError(
                    f"Docker host TLS verification requires trust material location "
                    f"to be specified with {DOCKER_CERT_PATH}."
                )
            factory = ssl_context_factory if ssl_context_factory is not None else DefaultSslContextFactory()
            ssl_context = factory.for_directory(cert_path)

        if port is None:
            if scheme == "tcp":
                port = DOCKER_TLS_PORT if secure else DOCKER_PORT
            else:
                port = DEFAULT_PORTS[scheme]

        host = HostDescriptor(scheme="https" if secure else "http", hostname=hostname, port=port)
        client_options: dict[str, Any] = {"base_url": host.url, "timeout": timeout}
        if ssl_context is not None:
            client_options["verify"] = ssl_context

        logger.info(
            "Resolved remote Docker host",
            extra={"scheme": host.scheme, "hostname": host.hostname, "port": host.port},
        )
        return cls(
            host=host,
            client=httpx.Client(**client_options),
            configuration=configuration,
            ssl_context=ssl_context,
        )


class LocalTransport(HttpTransport):
    """Transport for a daemon listening on a unix domain socket."""

    @classmethod
    def create_if_possible(
        cls,
        environment: EnvironmentLookup,
        configuration: DockerConfiguration,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "LocalTransport | None":
        socket_path = _local_socket_path(_lookup(environment, DOCKER_HOST))
        if socket_path is None:
            return None
        logger.info("Resolved local Docker socket", extra={"socket_path": socket_path})
        return cls(
            host=LOCAL_HOST,
            client=httpx.Client(
                transport=httpx.HTTPTransport(uds=socket_path),
                base_url=LOCAL_HOST.url,
                timeout=timeout,
            ),
            configuration=configuration,
        )


def create_transport(
    environment: EnvironmentLookup,
    configuration: DockerConfiguration,
    ssl_context_factory: SslContextFactory | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> HttpTransport:
    """Try the remote transport, then the local one, and return the first that applies."""
    candidates: list[Callable[[], HttpTransport | None]] = [
        partial(
            RemoteTransport.create_if_possible,
            environment,
            configuration,
            ssl_context_factory,
            timeout=timeout,
        ),
        partial(LocalTransport.create_if_possible, environment, configuration, timeout=timeout),
    ]
    for candidate in candidates:
        transport = candidate()
        if transport is not None:
            return transport
    raise DockerTransportError(
        f"No Docker transport is available for {DOCKER_HOST}={environment(DOCKER_HOST)!r}."
    )


def _lookup(environment: EnvironmentLookup, name: str) -> str | None:
    """Empty values count as absent."""
    value = environment(name)
    return value if value else None


def _is_local_reference(docker_host: str) -> bool:
    if docker_host.startswith(LOCAL_PREFIXES) or os.path.isabs(docker_host):
        return True
    try:
        return Path(docker_host).exists()
    except (OSError, ValueError):
        return False


def _local_socket_path(docker_host: str | None) -> str | None:
    if docker_host is None:
        return DEFAULT_SOCKET_PATH
    if docker_host.startswith(UNIX_PREFIX):
        return docker_host[len(UNIX_PREFIX):] or None
    if docker_host.startswith(LOCAL_PREFIXES):
        # named pipes have no httpx transport
        return None
    if _is_local_reference(docker_host):
        return docker_host
    return None


def _parse_network_address(docker_host: str) -> tuple[str, str, int | None]:
    candidate = docker_host if "://" in docker_host else f"tcp://{docker_host}"
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise DockerConfigurationError(
            f"{DOCKER_HOST} value '{docker_host}' is not a valid daemon address."
        ) from exc
    if url.scheme not in NETWORK_SCHEMES:
        raise DockerConfigurationError(
            f"{DOCKER_HOST} scheme '{url.scheme}' is not supported; "
            f"expected one of {', '.join(NETWORK_SCHEMES)}."
        )
    if not url.host:
        raise DockerConfigurationError(
            f"{DOCKER_HOST} value '{docker_host}' does not include a hostname."
        )
    if url.port is not None and not 0 < url.port <= MAX_PORT:
        raise DockerConfigurationError(
            f"{DOCKER_HOST} port {url.port} is out of range in '{docker_host}'."
        )
    return url.scheme, url.host, url.port


def _daemon_message(response: httpx.Response) -> str | None:
    """Prefer the daemon's JSON ``message`` field, fall back to the raw body."""
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    snippet = response.text.strip()
    if len(snippet) > MAX_ERROR_SNIPPET:
        snippet = f"{snippet[:MAX_ERROR_SNIPPET]}..."
    return snippet or None
