from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from jenkins_mcp.app.config import JenkinsSettings
from jenkins_shared.errors import UpstreamError
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-mcp")


def _job_path(job_name: str) -> str:
    return f"/job/{quote(job_name, safe='')}"


class JenkinsClient:
    """
    Minimal Jenkins REST client.

    Each method issues exactly one HTTP request. Non-2xx responses and transport
    failures raise UpstreamError immediately; nothing is retried or cached.
    """

    def __init__(
        self,
        base_url: str,
        user: str = "",
        token: str = "",
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

        # Basic auth only when both halves of the credential are present
        self.auth: tuple[str, str] | None = (user, token) if user and token else None

    def _request(self, method: str, path: str, params: dict[str, str] | None = None) -> str:
        """Send one request to Jenkins and return the response body as text."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, params=params or None, auth=self.auth)
        except requests.RequestException as e:
            raise UpstreamError(None, f"request to {url} failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise UpstreamError(resp.status_code, resp.text)
        return resp.text

    def trigger_job(self, job_name: str, params: dict[str, str] | None = None) -> None:
        """Start a build, using buildWithParameters when parameters are given."""
        path = f"{_job_path(job_name)}/build"
        if params:
            path = f"{_job_path(job_name)}/buildWithParameters"

        logger.debug(f"Triggering job at path: {path} with params: {params}")
        self._request("POST", path, params)

    def last_build(self, job_name: str) -> str:
        """Return the raw JSON document describing the latest build."""
        return self._request("GET", f"{_job_path(job_name)}/lastBuild/api/json")

    def console_text(self, job_name: str, build_number: int) -> str:
        """Return the full console output of a build."""
        return self._request("GET", f"{_job_path(job_name)}/{build_number}/consoleText")


def build_jenkins_client(settings: JenkinsSettings, **kwargs: Any) -> JenkinsClient:
    return JenkinsClient(
        base_url=settings.jenkins_url,
        user=settings.jenkins_user,
        token=settings.jenkins_token,
        **kwargs,
    )
