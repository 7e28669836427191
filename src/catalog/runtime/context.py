"""The active application configuration, held in a ``ContextVar``.

The configuration file is read once at import time. Tests and tools layer
partial overrides on top with ``with_context``.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_templated_yaml
from src.catalog.runtime.config.settings import EnvironmentVariables

# Derived values that are recomputed from the fields they depend on
_COMPUTED_FIELDS = {"database": {"is_sqlite", "connection_string"}}

# Values from .env feed the ${VAR} placeholders; real environment variables win
load_dotenv(override=False)


@dataclass(frozen=True)
class AppContext:
    """Application-wide state visible to the current execution context."""

    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "catalog_app_context",
    default=AppContext(config=load_templated_yaml(Path(EnvironmentVariables().config_file))),
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Make ``context`` current; the returned token restores the previous one."""
    return _app_context.set(context)


def get_config() -> ConfigData:
    """Shortcut for ``get_context().config``."""
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration of the current context."""
    set_context(replace(get_context(), config=config))


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Collect only the fields a caller actually passed, at any depth.

    A nested model given without any explicit fields of its own is kept whole.
    """
    explicit: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def overlay_config(base: ConfigData, overrides: ConfigData) -> ConfigData:
    """Return ``base`` with every explicitly set field of ``overrides`` applied."""
    merged = _deep_merge(base.model_dump(exclude=_COMPUTED_FIELDS), _explicit_fields(overrides))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily apply a partial configuration override.

    Example:
        with with_context(ConfigData(catalog=CatalogConfig(per_page=10))):
            assert get_config().catalog.per_page == 10
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override).__name__}"
        )

    current = get_context()
    token = set_context(replace(current, config=overlay_config(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)
