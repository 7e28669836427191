"""Command line interface tests against the in-memory test database."""

import random
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.catalog.cli import app
from src.catalog.cli.product_commands import fake_product
from src.catalog.cli.utils import get_database_service
from src.catalog.core.policies import ValidProduct, validate_product

runner = CliRunner()


@pytest.fixture(autouse=True)
def database():
    """Each test gets its own in-memory database with the schema created."""
    get_database_service.cache_clear()
    result = runner.invoke(app, ["db", "init"])
    assert result.exit_code == 0, result.output
    yield
    get_database_service().dispose()
    get_database_service.cache_clear()


class TestUserCommands:
    def test_add_and_list_users(self):
        result = runner.invoke(app, ["users", "add", "Ada", "Lovelace", "--admin"])

        assert result.exit_code == 0, result.output
        assert "Created admin Ada Lovelace" in result.output

        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0, result.output
        assert "Lovelace" in result.output
        assert "Found 1 users" in result.output

    def test_list_without_users(self):
        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output


class TestProductCommands:
    def test_seed_then_list(self):
        result = runner.invoke(app, ["products", "seed", "3", "--seed", "1"])

        assert result.exit_code == 0, result.output
        assert "Created 3 products (3 in total)" in result.output

        result = runner.invoke(app, ["products", "list"])

        assert result.exit_code == 0, result.output
        assert "page 1 of 1" in result.output

    def test_list_empty_catalog(self):
        result = runner.invoke(app, ["products", "list"])

        assert result.exit_code == 0
        assert "No products found" in result.output

    def test_list_page_past_the_end(self):
        runner.invoke(app, ["products", "seed", "6", "--seed", "1"])

        result = runner.invoke(app, ["products", "list", "--page", "3"])

        assert result.exit_code == 0
        assert "No products found" in result.output

    def test_fake_products_pass_validation(self):
        rng = random.Random(7)
        for _ in range(20):
            assert isinstance(validate_product(fake_product(rng)), ValidProduct)


class TestDbCommands:
    def test_reset_requires_confirmation(self):
        result = runner.invoke(app, ["db", "reset"], input="n\n")

        assert result.exit_code == 1
        assert "Aborted" in result.output

    def test_forced_reset_clears_data(self):
        runner.invoke(app, ["products", "seed", "2"])

        result = runner.invoke(app, ["db", "reset", "--force"])

        assert result.exit_code == 0, result.output
        result = runner.invoke(app, ["products", "list"])
        assert "No products found" in result.output


class TestServeCommand:
    def test_serve_uses_configured_host(self):
        with patch("src.catalog.cli.serve_command.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--port", "9000"])

        assert result.exit_code == 0, result.output
        run.assert_called_once()
        _, kwargs = run.call_args
        assert kwargs["host"] == "localhost"
        assert kwargs["port"] == 9000
        assert kwargs["access_log"] is False
