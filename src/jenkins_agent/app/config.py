from dataclasses import dataclass

from jenkins_shared.errors import ConfigError
from jenkins_shared.platform_manager import get_parameters

# Constants that don't change
CLIENT_NAME = "jenkins-llm-bridge"
CLIENT_VERSION = "0.1"
DIRECTIVE_PREFIX = "TOOL:"
CHAT_TEMPERATURE = 0.2
ANALYSIS_MAX_OUTPUT_TOKENS = 500

DEFAULTS = {
    "mcp_server_url": "http://localhost:8081/sse",
    "openai_chat_model": "gpt-4",
    "openai_analysis_model": "gpt-4o-mini",
    "log_level": "INFO",
}


@dataclass(frozen=True)
class AgentSettings:
    """Agent configuration settings loaded from the environment."""

    openai_api_key: str
    mcp_server_url: str
    chat_model: str
    analysis_model: str
    log_level: str


class Config:
    """Singleton configuration manager for the Jenkins agent."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> AgentSettings:
        """Get agent settings, loading from the environment if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Forget cached settings so the next call reloads them."""
        self._settings = None

    def _load_settings(self) -> AgentSettings:
        params = get_parameters(
            [
                "openai_api_key",
                "mcp_server_url",
                "openai_chat_model",
                "openai_analysis_model",
                "log_level",
            ],
            DEFAULTS,
        )

        settings = AgentSettings(
            openai_api_key=params["openai_api_key"] or "",
            mcp_server_url=params["mcp_server_url"] or "",
            chat_model=params["openai_chat_model"] or "",
            analysis_model=params["openai_analysis_model"] or "",
            log_level=params["log_level"] or "INFO",
        )

        self._validate_settings(settings)

        return settings

    def _validate_settings(self, settings: AgentSettings) -> None:
        """Validate that all required settings have valid values."""
        required_fields = ["openai_api_key", "mcp_server_url", "chat_model", "analysis_model"]

        for field in required_fields:
            if not getattr(settings, field):
                raise ConfigError(f"Configuration value is invalid: {field.upper()}")


# Create singleton instance
config = Config()


def get_settings() -> AgentSettings:
    """Get agent settings from the singleton config."""
    return config.get_settings()
