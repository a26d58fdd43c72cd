"""
Settings loading from the environment.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("JWT_SECRET", "PORT", "BCRYPT_ROUNDS", "TOKEN_EXPIRE_MINUTES", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.jwt_secret is None
    assert settings.port == 8000
    assert settings.bcrypt_rounds == 10
    assert settings.token_expire_minutes == 60
    assert settings.cors_origin_list == ["*"]


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.jwt_secret == "s3cret"
    assert settings.port == 9000
    assert settings.cors_origin_list == ["http://a.example", "http://b.example"]
    assert settings.log_level == "DEBUG"


def test_blank_secret_counts_as_missing(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "")
    assert Settings(_env_file=None).jwt_secret is None


@pytest.mark.parametrize("name", ["PORT", "BCRYPT_ROUNDS", "TOKEN_EXPIRE_MINUTES"])
def test_non_numeric_value_is_a_validation_error(monkeypatch, name):
    monkeypatch.setenv(name, "ten")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
