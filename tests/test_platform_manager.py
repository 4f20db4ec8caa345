import logging

import pytest

from jenkins_shared.errors import ConfigError
from jenkins_shared.platform_manager import create_logger, get_parameters, read_secret_file


def test_get_parameters_reads_uppercase_env(monkeypatch) -> None:
    monkeypatch.setenv("JENKINS_URL", "http://ci:8080")
    monkeypatch.delenv("JENKINS_MCP_USER", raising=False)

    params = get_parameters(["jenkins_url", "jenkins_mcp_user"], {"jenkins_mcp_user": "mcp"})

    assert params == {"jenkins_url": "http://ci:8080", "jenkins_mcp_user": "mcp"}


def test_get_parameters_empty_value_uses_default(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "")

    assert get_parameters("log_level", {"log_level": "INFO"}) == {"log_level": "INFO"}


def test_get_parameters_without_default_is_none(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert get_parameters("openai_api_key") == {"openai_api_key": None}


def test_read_secret_file_trims(tmp_path) -> None:
    path = tmp_path / "token"
    path.write_text("\n  abc123  \n", encoding="utf-8")

    assert read_secret_file(path) == "abc123"


def test_read_secret_file_rejects_empty(tmp_path) -> None:
    path = tmp_path / "token"
    path.write_text("   \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="empty"):
        read_secret_file(path)


def test_create_logger_does_not_duplicate_handlers(tmp_path) -> None:
    first = create_logger(logger_name="jenkins-test", logs_dir=tmp_path)
    second = create_logger(logger_name="jenkins-test", log_level="DEBUG", logs_dir=tmp_path)

    assert first is second
    assert len(second.handlers) == 2
    assert second.level == logging.DEBUG
    assert (tmp_path / "jenkins-test.log").exists()
