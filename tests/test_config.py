import logging
import pytest

from crypto_mcp_client.core import ClientSettings, ConfigurationError, get_logger, setup_logging
from crypto_mcp_client.core.config import DEFAULT_MODEL, DEFAULT_SERVER_URL


def test_defaults_from_empty_environment() -> None:
    settings = ClientSettings.from_env(dotenv=False)

    assert settings.server_url == DEFAULT_SERVER_URL
    assert settings.provider == "anthropic"
    assert settings.model == DEFAULT_MODEL
    assert settings.max_tokens == 1000
    assert settings.api_key is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRYPTO_MCP_SERVER_URL", "http://tools.internal:9000/")
    monkeypatch.setenv("CRYPTO_MCP_MAX_TOKENS", "2048")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

    settings = ClientSettings.from_env(dotenv=False)

    assert settings.server_url == "http://tools.internal:9000"
    assert settings.max_tokens == 2048
    assert settings.require_api_key() == "sk-ant-test"


def test_browser_style_key_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REACT_APP_ANTHROPIC_API_KEY", "sk-ant-browser")

    assert ClientSettings.from_env(dotenv=False).anthropic_api_key == "sk-ant-browser"


def test_openai_provider_uses_openai_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRYPTO_MCP_PROVIDER", "OpenAI")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

    settings = ClientSettings.from_env(dotenv=False)

    assert settings.provider == "openai"
    assert settings.require_api_key() == "sk-test"


def test_missing_key_is_reported() -> None:
    with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY is not set"):
        ClientSettings().require_api_key()

    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY is not set"):
        ClientSettings(provider="openai").require_api_key()


@pytest.mark.parametrize(
    "name, value",
    [("CRYPTO_MCP_MAX_TOKENS", "lots"), ("CRYPTO_MCP_MAX_TOKENS", "0"), ("CRYPTO_MCP_PROVIDER", "gemini")],
)
def test_invalid_values_raise_configuration_error(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError, match="Invalid client configuration"):
        ClientSettings.from_env(dotenv=False)


def test_loggers_live_under_package_logger() -> None:
    assert get_logger().name == "crypto_mcp_client"
    assert get_logger("dashboard").name == "crypto_mcp_client.dashboard"
    assert get_logger("crypto_mcp_client.core.driver").name == "crypto_mcp_client.core.driver"


def test_setup_logging_adds_one_handler() -> None:
    logger = logging.getLogger("crypto_mcp_client")
    original_handlers = list(logger.handlers)
    original_level = logger.level
    try:
        setup_logging("debug")
        setup_logging(logging.INFO)

        stream_handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(stream_handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers = original_handlers
        logger.setLevel(original_level)
