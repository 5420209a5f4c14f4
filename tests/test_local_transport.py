from pathlib import Path

import pytest

from docker_transport.configuration import DockerConfiguration
from docker_transport.transport import (
    DockerTransportError,
    LocalTransport,
    RemoteTransport,
    create_transport,
)
from tests.helpers import StubSslContextFactory


def _local(environment: dict[str, str]) -> LocalTransport | None:
    transport = LocalTransport.create_if_possible(environment.get, DockerConfiguration.with_defaults())
    if transport is not None:
        transport.close()
    return transport


def test_docker_host_not_set_uses_default_socket() -> None:
    transport = _local({})
    assert transport is not None
    assert transport.host.url == "http://localhost:80"
    assert not transport.is_secure


def test_unix_address_is_accepted() -> None:
    assert _local({"DOCKER_HOST": "unix:///run/user/1000/docker.sock"}) is not None


def test_existing_socket_file_is_accepted(tmp_path: Path) -> None:
    socket_file = tmp_path / "docker.sock"
    socket_file.touch()
    assert _local({"DOCKER_HOST": str(socket_file)}) is not None


def test_network_address_is_declined() -> None:
    assert _local({"DOCKER_HOST": "tcp://192.168.1.2:2376"}) is None


def test_named_pipe_is_declined() -> None:
    assert _local({"DOCKER_HOST": "npipe:////./pipe/docker_engine"}) is None


def test_create_transport_prefers_remote_for_network_address() -> None:
    environment = {"DOCKER_HOST": "tcp://192.168.1.2:2376"}
    with create_transport(environment.get, DockerConfiguration.with_defaults()) as transport:
        assert isinstance(transport, RemoteTransport)
        assert transport.host.url == "http://192.168.1.2:2376"


def test_create_transport_passes_ssl_context_factory_through() -> None:
    environment = {
        "DOCKER_HOST": "tcp://192.168.1.2:2376",
        "DOCKER_TLS_VERIFY": "1",
        "DOCKER_CERT_PATH": "/test-cert-path",
    }
    with create_transport(
        environment.get, DockerConfiguration.with_defaults(), StubSslContextFactory()
    ) as transport:
        assert transport.host.scheme == "https"


def test_create_transport_falls_back_to_local_socket() -> None:
    with create_transport({}.get, DockerConfiguration.with_defaults()) as transport:
        assert isinstance(transport, LocalTransport)


def test_create_transport_fails_when_no_candidate_applies() -> None:
    environment = {"DOCKER_HOST": "npipe:////./pipe/docker_engine"}
    with pytest.raises(DockerTransportError) as exc:
        create_transport(environment.get, DockerConfiguration.with_defaults())
    assert "npipe" in str(exc.value)
