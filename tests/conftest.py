import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Loggers are created at import time; keep their files out of the working tree
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="jenkins-mcp-logs-"))

from jenkins_agent.app import config as agent_config  # noqa: E402
from jenkins_mcp.app import config as mcp_config  # noqa: E402
from jenkins_mcp.clients.jenkins_client import JenkinsClient  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings():
    mcp_config.config.reset()
    agent_config.config.reset()
    yield
    mcp_config.config.reset()
    agent_config.config.reset()


@pytest.fixture
def token_file(tmp_path: Path) -> Path:
    path = tmp_path / "mcp-user.token"
    path.write_text("  secret-token\n", encoding="utf-8")
    return path


def make_response(status_code: int = 200, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    return resp


@pytest.fixture
def http_session() -> Mock:
    session = Mock()
    session.request.return_value = make_response(200, "")
    return session


@pytest.fixture
def jenkins(http_session: Mock) -> JenkinsClient:
    return JenkinsClient("http://jenkins:8080/jenkins/", "mcp-user", "secret", session=http_session)
