import pytest

from quest2go.core import config
from quest2go.core.config import Settings, validate_runtime_config
from quest2go.core.errors import ConfigError


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'load_dotenv', lambda: False)
    for name in ('APP_ENV', 'JWT_SECRET', 'COOKIE_SECURE', 'CORS_ORIGINS', 'BCRYPT_ROUNDS', 'LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('JWT_SECRET', 's3cret')

    settings = Settings.from_env()

    assert settings.jwt_secret == 's3cret'
    assert settings.session_ttl_seconds == 86400
    assert settings.session_cookie_name == 'token'
    assert settings.bcrypt_rounds == 10
    assert settings.cookie_secure is False
    assert settings.cors_origins == ('http://localhost:3000',)


def test_cookie_secure_defaults_on_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('APP_ENV', 'production')

    assert Settings.from_env().cookie_secure is True


def test_cookie_secure_can_be_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('COOKIE_SECURE', 'off')

    assert Settings.from_env().cookie_secure is False


def test_cors_origins_are_split_on_commas(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('CORS_ORIGINS', 'https://a.example, https://b.example,')

    assert Settings.from_env().cors_origins == ('https://a.example', 'https://b.example')


def test_validate_runtime_config_requires_secret() -> None:
    with pytest.raises(ConfigError):
        validate_runtime_config(Settings(jwt_secret=''))


def test_validate_runtime_config_accepts_configured_secret() -> None:
    validate_runtime_config(Settings(jwt_secret='s3cret'))


def test_settings_are_hashable() -> None:
    settings = Settings(jwt_secret='s3cret')

    assert hash(settings) == hash(Settings(jwt_secret='s3cret'))
    assert {settings: 'cached'}[Settings(jwt_secret='s3cret')] == 'cached'
