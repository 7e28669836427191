"""Test configuration: point the application at the test config before it is imported."""

import os
from pathlib import Path

os.environ["CATALOG_CONFIG_FILE"] = str(Path(__file__).parent / "config.test.yaml")
os.environ["APP_ENVIRONMENT"] = "test"

from tests.fixtures import *  # noqa: E402,F401,F403
