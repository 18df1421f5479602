"""
Tests for the Typer CLI.
"""

import pytest
from typer.testing import CliRunner

from userapi import __version__
from userapi.cli import app
from userapi.core.env_file import read_env_file


# Wide terminal so rich does not wrap messages
runner = CliRunner(env={"COLUMNS": "200"})

ENV_VARS = [
    "DB_TYPE", "DB_HOST", "DB_PORT", "DB_USERNAME", "DB_PASSWORD",
    "DB_DATABASE", "DB_URL", "DB_SYNCHRONIZE", "PORT", "HOST", "API_KEY",
]


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    """A .env pointing at a throwaway sqlite file."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / ".env"
    path.write_text(f"DB_TYPE=sqlite\nDB_DATABASE={tmp_path / 'cli.db'}\nPORT=3000\n")
    return str(path)


def invoke(*args):
    return runner.invoke(app, list(args))


def text(result):
    """Command output with line wrapping collapsed."""
    return " ".join(result.output.split())


class TestBasics:
    """Tests for top-level options."""

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self):
        result = invoke("--help")
        assert result.exit_code == 0
        for command in ("init", "serve", "config", "db", "user"):
            assert command in result.output


class TestInit:
    """Tests for `init`."""

    def test_init_writes_env_file(self, tmp_path):
        path = tmp_path / ".env"
        result = invoke("init", "--path", str(path))
        assert result.exit_code == 0
        values = read_env_file(path)
        assert values["DB_TYPE"] == "sqlite"
        assert values["PORT"] == "3000"

    def test_init_postgres(self, tmp_path):
        path = tmp_path / ".env"
        result = invoke("init", "--path", str(path), "--db-type", "postgres", "--port", "8080")
        assert result.exit_code == 0
        values = read_env_file(path)
        assert values["DB_TYPE"] == "postgres"
        assert values["DB_PORT"] == "5432"
        assert values["PORT"] == "8080"

    def test_init_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("PORT=1\n")
        result = invoke("init", "--path", str(path))
        assert result.exit_code == 1
        assert "already exists" in text(result)
        assert path.read_text() == "PORT=1\n"

        result = invoke("init", "--path", str(path), "--force")
        assert result.exit_code == 0
        assert read_env_file(path)["DB_TYPE"] == "sqlite"


class TestConfig:
    """Tests for `config`."""

    def test_config_valid(self, env_file):
        result = invoke("config", "--env-file", env_file)
        assert result.exit_code == 0
        assert "sqlite" in result.output

    def test_config_reports_problems(self, tmp_path, monkeypatch):
        for var in ENV_VARS:
            monkeypatch.delenv(var, raising=False)
        path = tmp_path / ".env"
        path.write_text("DB_TYPE=mysql\nDB_HOST=\n")
        result = invoke("config", "--env-file", str(path))
        assert result.exit_code == 1
        assert "DB_HOST" in result.output

    def test_config_invalid_value(self, tmp_path, monkeypatch):
        for var in ENV_VARS:
            monkeypatch.delenv(var, raising=False)
        path = tmp_path / ".env"
        path.write_text("PORT=not-a-port\n")
        result = invoke("config", "--env-file", str(path))
        assert result.exit_code == 1
        assert "Invalid configuration" in text(result)


class TestDbCommands:
    """Tests for `db create` / `db drop`."""

    def test_create_and_drop(self, env_file, tmp_path):
        result = invoke("db", "create", "--env-file", env_file)
        assert result.exit_code == 0
        assert (tmp_path / "cli.db").exists()

        result = invoke("db", "drop", "--env-file", env_file, "--yes")
        assert result.exit_code == 0
        assert "Tables dropped" in text(result)

    def test_drop_asks_for_confirmation(self, env_file):
        result = runner.invoke(app, ["db", "drop", "--env-file", env_file], input="n\n")
        assert result.exit_code != 0


class TestUserCommands:
    """Tests for `user` CRUD commands."""

    def test_user_lifecycle(self, env_file):
        result = invoke("user", "add", "Ada Lovelace", "Ada@Example.com", "--env-file", env_file)
        assert result.exit_code == 0, result.output
        assert "User 1 created" in text(result)

        result = invoke("user", "list", "--env-file", env_file)
        assert result.exit_code == 0
        assert "ada@example.com" in result.output
        assert "Showing 1 of 1" in text(result)

        result = invoke("user", "update", "1", "--name", "Ada King", "--env-file", env_file)
        assert result.exit_code == 0
        assert "Ada King" in text(result)

        result = invoke("user", "show", "1", "--env-file", env_file)
        assert result.exit_code == 0
        assert "Ada King" in text(result)

        result = invoke("user", "remove", "1", "--yes", "--env-file", env_file)
        assert result.exit_code == 0
        assert "User 1 deleted" in text(result)

        result = invoke("user", "remove", "1", "--yes", "--env-file", env_file)
        assert result.exit_code == 1
        assert "User not found" in text(result)

    def test_list_empty(self, env_file):
        result = invoke("user", "list", "--env-file", env_file)
        assert result.exit_code == 0
        assert "No users found" in text(result)

    def test_add_invalid_email(self, env_file):
        result = invoke("user", "add", "Ada", "not-an-email", "--env-file", env_file)
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_add_duplicate(self, env_file):
        invoke("user", "add", "Ada", "ada@example.com", "--env-file", env_file)
        result = invoke("user", "add", "Ada", "ADA@example.com", "--env-file", env_file)
        assert result.exit_code == 1
        assert "already registered" in text(result)

    def test_update_requires_a_field(self, env_file):
        result = invoke("user", "update", "1", "--env-file", env_file)
        assert result.exit_code == 1
        assert "At least one" in text(result)

    def test_update_missing_user(self, env_file):
        result = invoke("user", "update", "42", "--name", "Nobody", "--env-file", env_file)
        assert result.exit_code == 1
        assert "User not found" in text(result)
