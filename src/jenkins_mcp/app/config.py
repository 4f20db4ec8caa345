from dataclasses import dataclass

from jenkins_shared.errors import ConfigError
from jenkins_shared.platform_manager import get_parameters, read_secret_file

# Constants
SERVER_NAME = "jenkins-mcp"
SERVER_VERSION = "1.0.0"
MAX_CONSOLE_LOG_CHARS = 100_000
TRUNCATION_MARKER = "\n...(truncated)"

DEFAULTS = {
    "jenkins_url": "http://jenkins:8080/jenkins",
    "jenkins_mcp_user": "",
    "jenkins_token_file": "/var/jenkins_home/secrets/mcp-user.token",
    "mcp_server_host": "0.0.0.0",
    "mcp_server_port": "8081",
    "log_level": "INFO",
}


@dataclass(frozen=True)
class JenkinsSettings:
    """Gateway configuration settings loaded from the environment."""

    # Jenkins access
    jenkins_url: str
    jenkins_user: str
    jenkins_token: str

    # Server settings
    host: str
    port: int
    log_level: str


class Config:
    """Singleton configuration manager for the Jenkins MCP gateway."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> JenkinsSettings:
        """Get gateway settings, loading from the environment if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Forget cached settings so the next call reloads them."""
        self._settings = None

    def _load_settings(self) -> JenkinsSettings:
        """Load settings from environment variables and the mounted token file."""
        params = get_parameters(
            [
                "jenkins_url",
                "jenkins_mcp_user",
                "jenkins_token_file",
                "mcp_server_host",
                "mcp_server_port",
                "log_level",
            ],
            DEFAULTS,
        )

        token_file = params["jenkins_token_file"] or ""
        if not token_file:
            raise ConfigError("JENKINS_TOKEN_FILE is not set")
        token = read_secret_file(token_file)

        port_param = params["mcp_server_port"] or ""
        try:
            port = int(port_param)
        except ValueError as e:
            raise ConfigError(f"MCP_SERVER_PORT is not a number: {port_param}") from e

        settings = JenkinsSettings(
            jenkins_url=(params["jenkins_url"] or "").rstrip("/"),
            jenkins_user=params["jenkins_mcp_user"] or "",
            jenkins_token=token,
            host=params["mcp_server_host"] or "",
            port=port,
            log_level=params["log_level"] or "INFO",
        )

        self._validate_settings(settings)

        return settings

    def _validate_settings(self, settings: JenkinsSettings) -> None:
        """Validate that all required settings have valid values."""
        required_fields = ["jenkins_url", "jenkins_token", "host"]

        for field in required_fields:
            if not getattr(settings, field):
                raise ConfigError(f"Configuration value is invalid: {field.upper()}")

        if not settings.jenkins_url.startswith(("http://", "https://")):
            raise ConfigError(f"JENKINS_URL must be an http(s) URL: {settings.jenkins_url}")


# Create singleton instance
config = Config()


def get_settings() -> JenkinsSettings:
    """Get gateway settings from the singleton config."""
    return config.get_settings()
