"""Loading ``config.yaml`` with shell-style environment placeholders."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.catalog.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return os.getenv(name, default)

    if ":?" in expression:
        name, message = expression.split(":?", 1)
    else:
        name, message = expression, "not set"

    value = os.getenv(name)
    if value is None:
        raise ValueError(f"Required environment variable {name}: {message}")
    return value


def substitute_env_vars(text: str) -> str:
    """Expand environment placeholders in ``text``.

    ``${NAME}`` and ``${NAME:?message}`` must be set; ``${NAME:-default}``
    falls back to ``default``.

    Raises:
        ValueError: if a required variable is missing
    """
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def apply_environment_overrides(env_mode: str) -> None:
    """Promote ``<ENV>_NAME`` variables to ``NAME`` for the active environment.

    With ``APP_ENVIRONMENT=test``, ``TEST_DATABASE_URL`` becomes ``DATABASE_URL``.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    if promoted:
        logger.info("Applying {} overrides for {}", sorted(promoted), env_mode)
    os.environ.update(promoted)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path``, expand placeholders and validate the ``config`` section.

    A missing file yields the built-in defaults.

    Raises:
        ValueError: on missing required variables, unparsable YAML or
            values that fail validation
    """
    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    apply_environment_overrides(env_mode)

    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()

    logger.debug("Loading {} for the {} environment", file_path, env_mode)
    try:
        document = yaml.safe_load(substitute_env_vars(file_path.read_text()))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {file_path}: {e}") from e
    if not isinstance(document, dict):
        raise ValueError(f"{file_path} does not contain a configuration mapping")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e

    return config
