"""SSL context construction from a Docker certificate directory."""

import logging
import ssl
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

CA_FILE = "ca.pem"
CERT_FILE = "cert.pem"
KEY_FILE = "key.pem"


class DockerCertificateError(ValueError):
    """Raised when the certificate directory is missing required material."""


class SslContextFactory(Protocol):
    """Builds an SSL context from the files in a certificate directory."""

    def for_directory(self, path: str) -> ssl.SSLContext: ...


class DefaultSslContextFactory:
    """
    Load client TLS material the way the docker CLI lays it out.

    ``cert.pem`` and ``key.pem`` are required. ``ca.pem`` is trusted when
    present, otherwise the system trust store is used.
    """

    def for_directory(self, path: str) -> ssl.SSLContext:
        if not path or not path.strip():
            raise DockerCertificateError("Certificate directory must not be empty.")
        directory = Path(path)
        if not directory.is_dir():
            raise DockerCertificateError(f"Certificate directory '{directory}' does not exist.")

        cert_path = _require_file(directory, CERT_FILE)
        key_path = _require_file(directory, KEY_FILE)
        ca_path = directory / CA_FILE

        cafile = str(ca_path) if ca_path.is_file() else None
        logger.debug(
            "Loading Docker TLS material",
            extra={"cert_path": str(directory), "custom_ca": cafile is not None},
        )
        context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH, cafile=cafile)
        context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))
        return context


def _require_file(directory: Path, name: str) -> Path:
    candidate = directory / name
    if not candidate.is_file():
        raise DockerCertificateError(
            f"Certificate file '{name}' does not exist in '{directory}'."
        )
    return candidate
