import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    """Tests for Settings."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "LOG_LEVEL", "PAYMENT_STORE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 5000
        assert settings.log_level == "INFO"
        assert settings.payment_store == "memory"

    @pytest.mark.unit
    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert Settings(_env_file=None).log_level == "WARNING"

    @pytest.mark.unit
    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "log_level" in str(exc_info.value)

    @pytest.mark.unit
    def test_redis_url_includes_password(self):
        settings = Settings(
            _env_file=None,
            redis_host="cache",
            redis_port=6380,
            redis_password="pw",
            redis_db=2,
        )
        assert settings.redis_url == "redis://:pw@cache:6380/2"

    @pytest.mark.unit
    def test_secret_not_in_repr(self):
        settings = Settings(_env_file=None, merchant_secret="s3cr3t-value")
        assert "s3cr3t-value" not in repr(settings)
