import logging
import os
from pathlib import Path

from jenkins_shared.errors import ConfigError


def create_logger(
    log_level: str = "INFO",
    logger_name: str = "jenkins-mcp",
    logs_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Create a logger that outputs to console and optionally to a file.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance and its log file.
        logs_dir (str | Path | None): Directory for log files. If None, uses LOGS_DIR from the
            environment, falling back to ./logs.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logs_dir = Path(logs_dir or os.getenv("LOGS_DIR", "logs"))

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.handlers:  # Prevent handler duplication
        # Console handler (stderr) - always add this
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(logs_dir / f"{logger_name}.log")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError:
            # If file logging fails, just continue with console logging
            pass

    return logger


def get_parameters(
    param_names: list[str] | str,
    defaults: dict[str, str] | None = None,
) -> dict[str, str | None]:
    """
    Read parameters from environment variables.

    Parameters are stored in the environment in uppercase but returned with lowercase keys.
    A parameter that is unset (or set to an empty string) takes its value from `defaults`,
    or None when no default exists.

    Args:
        param_names: Parameter name or list of names (case-insensitive).
        defaults: Fallback values keyed by lowercase parameter name.

    Returns:
        dict[str, str | None]: Parameter values keyed by lowercase name.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    defaults = defaults or {}
    result: dict[str, str | None] = {}
    for param_name in param_names:
        key = param_name.lower()
        result[key] = os.getenv(param_name.upper()) or defaults.get(key)
    return result


def read_secret_file(path: str | Path) -> str:
    """
    Read a mounted secret file and return its trimmed contents.

    Raises:
        ConfigError: If the file cannot be read or is empty.
    """
    try:
        secret = Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read secret file {path}: {e}") from e

    if not secret:
        raise ConfigError(f"Secret file {path} is empty")
    return secret
