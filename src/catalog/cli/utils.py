"""Shared utilities for CLI commands."""

from functools import lru_cache

from rich.console import Console

from src.catalog.core.services import DbSessionService

console = Console()


@lru_cache(maxsize=1)
def get_database_service() -> DbSessionService:
    """Database service shared by all commands of one invocation."""
    return DbSessionService()
