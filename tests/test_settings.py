import pytest

from docker_transport import settings as settings_module
from docker_transport.settings import Settings

SETTINGS_VARIABLES = (
    "DOCKER_API_TIMEOUT",
    "DOCKER_REGISTRY_USERNAME",
    "DOCKER_REGISTRY_PASSWORD",
    "DOCKER_REGISTRY_URL",
    "DOCKER_REGISTRY_EMAIL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: False)
    for name in SETTINGS_VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.load()
    assert settings.api_timeout == 60.0
    assert not settings.docker_configuration().has_registry_authentication


def test_timeout_is_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCKER_API_TIMEOUT", "12.5")
    assert Settings.load().api_timeout == 12.5


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("DOCKER_API_TIMEOUT", value)
    with pytest.raises(ValueError) as exc:
        Settings.load()
    assert "DOCKER_API_TIMEOUT" in str(exc.value)


def test_registry_user_authentication(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCKER_REGISTRY_USERNAME", "user")
    monkeypatch.setenv("DOCKER_REGISTRY_PASSWORD", "secret")
    monkeypatch.setenv("DOCKER_REGISTRY_URL", "http://docker.example.com")
    monkeypatch.setenv("DOCKER_REGISTRY_EMAIL", "docker@example.com")
    authentication = Settings.load().docker_configuration().registry_authentication
    assert authentication is not None
    assert authentication.username == "user"
    assert authentication.password == "secret"
    assert authentication.url == "http://docker.example.com"
    assert authentication.email == "docker@example.com"
    assert "secret" not in repr(authentication)


def test_username_without_password_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCKER_REGISTRY_USERNAME", "user")
    with pytest.raises(ValueError) as exc:
        Settings.load()
    assert "DOCKER_REGISTRY_PASSWORD" in str(exc.value)
