"""Tests for settings and logging setup."""

import logging

import pytest

from tackboard.config import Settings
from tackboard.logging import setup_logging
from tackboard.repositories import StaticIdentity


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Defaults select the filesystem backend and ignore policy."""
        for name in ("TACKBOARD_BACKEND", "TACKBOARD_MUTATION_POLICY", "TACKBOARD_USER"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()
        assert settings.backend == "filesystem"
        assert settings.mutation_policy == "ignore"
        assert settings.user is None

    def test_env_prefix(self, monkeypatch):
        """TACKBOARD_* environment variables are read."""
        monkeypatch.setenv("TACKBOARD_BACKEND", "http")
        monkeypatch.setenv("TACKBOARD_MUTATION_POLICY", "queue")
        settings = Settings()
        assert settings.backend == "http"
        assert settings.mutation_policy == "queue"

    def test_invalid_policy(self):
        """Unknown policies are rejected."""
        with pytest.raises(ValueError):
            Settings(mutation_policy="race")


class TestIdentity:
    """Tests for StaticIdentity."""

    def test_explicit_user(self):
        """An explicit user id wins."""
        assert StaticIdentity.from_environment("alice").current_user_id() == "alice"

    def test_empty_user_is_unauthenticated(self):
        """Empty ids count as signed out."""
        assert StaticIdentity("").current_user_id() is None

    @pytest.mark.parametrize("error", [OSError("no tty"), KeyError("getpwuid(): uid not found")])
    def test_missing_login_name(self, monkeypatch, error):
        """No login name means signed out rather than a crash."""

        def getuser():
            raise error

        monkeypatch.setattr("getpass.getuser", getuser)
        assert StaticIdentity.from_environment().current_user_id() is None


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def reset_logger(self):
        logger = logging.getLogger("tackboard")
        handlers = list(logger.handlers)
        yield
        for handler in logger.handlers[:]:
            if handler not in handlers:
                handler.close()
                logger.removeHandler(handler)

    def test_silent_by_default(self):
        """verbose=0 without a file adds no handlers."""
        before = list(logging.getLogger("tackboard").handlers)
        setup_logging(0, None)
        assert logging.getLogger("tackboard").handlers == before

    def test_file_logging(self, tmp_path):
        """A log file is created and written."""
        log_file = tmp_path / "logs" / "tackboard.log"
        setup_logging(0, log_file)
        logging.getLogger("tackboard.test").info("hello")
        for handler in logging.getLogger("tackboard").handlers:
            handler.flush()
        assert "hello" in log_file.read_text()

    def test_debug_level(self):
        """-vv enables DEBUG."""
        setup_logging(2)
        assert logging.getLogger("tackboard").level == logging.DEBUG

    def test_banner_names_backend_and_policy(self, tmp_path):
        """The startup banner records where the board lives and the policy."""
        log_file = tmp_path / "tackboard.log"
        settings = Settings(backend="http", api_url="http://board.test", mutation_policy="queue")
        setup_logging(0, log_file, settings)
        for handler in logging.getLogger("tackboard").handlers:
            handler.flush()

        text = log_file.read_text()
        assert "backend=http (http://board.test)" in text
        assert "policy=queue" in text

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Calling setup twice leaves one stderr handler."""
        setup_logging(1)
        count = len(logging.getLogger("tackboard").handlers)
        setup_logging(1)
        assert len(logging.getLogger("tackboard").handlers) == count
