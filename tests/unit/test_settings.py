"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from src.config.settings import Settings


def test_defaults(monkeypatch):
    for name in ("CV_CONTAINER", "CV_BLOB_NAME", "TURNSTILE_SECRET", "BLOBCONNECTIONSTRING"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.cv_container == "resume"
    assert settings.cv_blob_name == "[CV]Mariano-Rodriguez.pdf"
    assert settings.turnstile_timeout == 10.0
    assert settings.turnstile_verify_url == "https://challenges.cloudflare.com/turnstile/v0/siteverify"
    assert settings.turnstile_send_remote_ip is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TURNSTILE_SECRET", "s3cret")
    monkeypatch.setenv("CV_CONTAINER", "docs")
    monkeypatch.setenv("CV_BLOB_NAME", "cv.pdf")
    monkeypatch.setenv("BlobConnectionString", "UseDevelopmentStorage=true")
    settings = Settings(_env_file=None)
    assert settings.turnstile_secret == "s3cret"
    assert settings.cv_container == "docs"
    assert settings.cv_blob_name == "cv.pdf"
    assert settings.blob_connection_string == "UseDevelopmentStorage=true"


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_log_level_invalid():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, turnstile_timeout=timeout)
