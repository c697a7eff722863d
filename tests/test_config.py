"""Tests for environment configuration."""
import pytest

from eva.config import ClientSettings, Settings
from eva.errors import ConfigurationError

ENV_VARS = [
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "HOST",
    "PORT",
    "EVA_TIMEOUT_S",
    "EVA_MAX_OUTPUT_TOKENS",
    "EVA_CORS_ORIGINS",
    "EVA_API_URL",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, no_dotenv):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_missing_key_fails_fast(self, clean_env):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            Settings.from_env()

    def test_blank_key_fails_fast(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "   ")
        with pytest.raises(ConfigurationError):
            Settings.from_env()

    def test_defaults(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "key")
        settings = Settings.from_env()

        assert settings.api_key == "key"
        assert settings.port == 3001
        assert settings.model == "gemini-2.5-flash"
        assert settings.max_output_tokens == 300
        assert settings.timeout_s == 30.0
        assert settings.cors_origins == ("*",)

    def test_overrides(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "key")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("GEMINI_MODEL", "gemini-2.5-pro")
        clean_env.setenv("EVA_TIMEOUT_S", "2.5")
        clean_env.setenv("EVA_CORS_ORIGINS", "http://a.test, http://b.test")
        settings = Settings.from_env()

        assert settings.port == 8080
        assert settings.model == "gemini-2.5-pro"
        assert settings.timeout_s == 2.5
        assert settings.cors_origins == ("http://a.test", "http://b.test")

    @pytest.mark.parametrize("name,value", [("PORT", "abc"), ("EVA_TIMEOUT_S", "soon"), ("EVA_TIMEOUT_S", "0")])
    def test_malformed_values(self, clean_env, name, value):
        clean_env.setenv("GEMINI_API_KEY", "key")
        clean_env.setenv(name, value)
        with pytest.raises(ConfigurationError, match=name):
            Settings.from_env()


class TestClientSettings:

    def test_defaults(self, clean_env):
        settings = ClientSettings.from_env()
        assert settings.api_url == "http://localhost:3001"

    def test_does_not_need_credential(self, clean_env):
        clean_env.setenv("EVA_API_URL", "http://eva.test")
        assert ClientSettings.from_env().api_url == "http://eva.test"


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        import logging

        from eva.log import NOISY_LOGGERS

        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        library_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        for name, library_level in library_levels.items():
            logging.getLogger(name).setLevel(library_level)

    @pytest.mark.parametrize("level", ["info", "warning"])
    def test_client_libraries_quieted(self, level):
        import logging

        from eva.log import NOISY_LOGGERS, setup_logging

        setup_logging(level)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert not logging.getLogger("httpx").isEnabledFor(logging.INFO)

    def test_client_libraries_verbose_at_debug(self):
        import logging

        from eva.log import setup_logging

        setup_logging("info")
        setup_logging("debug")

        assert logging.getLogger("httpx").level == logging.NOTSET
        assert logging.getLogger("google_genai").isEnabledFor(logging.DEBUG)

    def test_error_level_applies_to_client_libraries(self):
        import logging

        from eva.log import setup_logging

        setup_logging("error")
        assert logging.getLogger("httpcore").level == logging.ERROR

    def test_installs_single_stdout_handler(self):
        import logging
        import sys

        from eva.log import setup_logging

        setup_logging("debug")
        setup_logging("debug")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stdout

    def test_unknown_level_falls_back_to_info(self):
        import logging

        from eva.log import setup_logging

        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO
