"""Tests for application configuration."""
import pytest

from core.config import Settings


class TestCorsOriginsParsing:
    """Tests for CORS origins parsing from environment variables."""

    def test_parse_single_origin_string(self) -> None:
        """Single origin string is parsed correctly."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
            CORS_ORIGINS="http://localhost:5173",
        )
        assert settings.cors_origins == ["http://localhost:5173"]

    def test_parse_multiple_origins_comma_separated(self) -> None:
        """Multiple comma-separated origins are parsed correctly."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
            CORS_ORIGINS="http://localhost:5173,https://example.com",
        )
        assert settings.cors_origins == [
            "http://localhost:5173",
            "https://example.com",
        ]

    def test_parse_origins_with_whitespace(self) -> None:
        """Whitespace around origins is stripped."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
            CORS_ORIGINS="  http://localhost:5173 , https://example.com  ",
        )
        assert settings.cors_origins == [
            "http://localhost:5173",
            "https://example.com",
        ]

    def test_parse_empty_string(self) -> None:
        """Empty string results in empty list."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
            CORS_ORIGINS="",
        )
        assert settings.cors_origins == []

    def test_parse_trailing_comma(self) -> None:
        """Trailing comma is handled (empty entries filtered)."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
            CORS_ORIGINS="http://localhost:5173,",
        )
        assert settings.cors_origins == ["http://localhost:5173"]

    def test_default_cors_origins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default CORS origins is localhost:5173."""
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        settings = Settings(
            _env_file=None,
            database_url="postgresql://test",
        )
        assert settings.cors_origins == ["http://localhost:5173"]


class TestDefaults:
    """Defaults that shape authentication behavior."""

    def test__password_check_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PASSWORD_CHECK_ENABLED", raising=False)
        settings = Settings(_env_file=None, database_url="postgresql://test")
        assert settings.password_check_enabled is False

    def test__password_check_read_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASSWORD_CHECK_ENABLED", "true")
        settings = Settings(_env_file=None, database_url="postgresql://test")
        assert settings.password_check_enabled is True

    def test__session_cookie_secure_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SESSION_COOKIE_SECURE", raising=False)
        settings = Settings(_env_file=None, database_url="postgresql://test")
        assert settings.session_cookie_secure is True


class TestCookieSecurityValidation:
    """Tests for the guard against insecure cookies with a production database."""

    def test__insecure_cookie_allowed_with_localhost_database(self) -> None:
        """SESSION_COOKIE_SECURE can be disabled with localhost database."""
        settings = Settings(
            _env_file=None,
            database_url="postgresql://localhost:5432/test",
            SESSION_COOKIE_SECURE="false",
        )
        assert settings.session_cookie_secure is False

    def test__insecure_cookie_allowed_with_127_0_0_1_database(self) -> None:
        settings = Settings(
            _env_file=None,
            database_url="postgresql://127.0.0.1:5432/test",
            SESSION_COOKIE_SECURE="false",
        )
        assert settings.session_cookie_secure is False

    def test__insecure_cookie_allowed_with_ipv6_localhost(self) -> None:
        settings = Settings(
            _env_file=None,
            database_url="postgresql://[::1]:5432/test",
            SESSION_COOKIE_SECURE="false",
        )
        assert settings.session_cookie_secure is False

    def test__insecure_cookie_allowed_with_sqlite(self) -> None:
        """SQLite databases are always local."""
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///./linkshelf.db",
            SESSION_COOKIE_SECURE="false",
        )
        assert settings.session_cookie_secure is False

    def test__insecure_cookie_blocked_with_production_database(self) -> None:
        with pytest.raises(
            ValueError,
            match="SESSION_COOKIE_SECURE cannot be disabled with a non-local database",
        ):
            Settings(
                _env_file=None,
                database_url="postgresql://prod-db.railway.app:5432/bookmarks",
                SESSION_COOKIE_SECURE="false",
            )

    def test__insecure_cookie_blocked_with_remote_ip_address(self) -> None:
        with pytest.raises(
            ValueError,
            match="SESSION_COOKIE_SECURE cannot be disabled with a non-local database",
        ):
            Settings(
                _env_file=None,
                database_url="postgresql://192.168.1.100:5432/test",
                SESSION_COOKIE_SECURE="false",
            )

    def test__secure_cookie_allows_production_database(self) -> None:
        settings = Settings(
            _env_file=None,
            database_url="postgresql://prod-db.railway.app:5432/bookmarks",
            SESSION_COOKIE_SECURE="true",
        )
        assert settings.session_cookie_secure is True

    def test__insecure_cookie_blocked_with_empty_hostname(self) -> None:
        """A database URL with no hostname is treated as remote (fail-safe behavior)."""
        with pytest.raises(
            ValueError,
            match="SESSION_COOKIE_SECURE cannot be disabled with a non-local database",
        ):
            Settings(
                _env_file=None,
                database_url="postgresql:///database",
                SESSION_COOKIE_SECURE="false",
            )
