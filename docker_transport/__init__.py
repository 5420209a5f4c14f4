"""
Transport selection for talking to a Docker-compatible daemon.

The remote transport is resolved from ``DOCKER_HOST``/``DOCKER_TLS_VERIFY``/
``DOCKER_CERT_PATH``; the local socket transport is the fallback.
"""

from docker_transport.configuration import DockerConfiguration, DockerRegistryAuthentication
from docker_transport.ssl_context import (
    DefaultSslContextFactory,
    DockerCertificateError,
    SslContextFactory,
)
from docker_transport.transport import (
    DockerConfigurationError,
    DockerEngineError,
    DockerTransportError,
    HostDescriptor,
    LocalTransport,
    RemoteTransport,
    create_transport,
)

__all__ = [
    "DefaultSslContextFactory",
    "DockerCertificateError",
    "DockerConfiguration",
    "DockerConfigurationError",
    "DockerEngineError",
    "DockerRegistryAuthentication",
    "DockerTransportError",
    "HostDescriptor",
    "LocalTransport",
    "RemoteTransport",
    "SslContextFactory",
    "create_transport",
]
