"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

import gitly.config
from gitly.config import DEFAULT_CONFIG_FILE, Config, configuration, get_bool_env, resolve_config_file

VALID_CONFIG = """
server:
  host: "127.0.0.1"
  port: 9000
logging:
  log_level: "info"
  file_log_level: "debug"
  file_log_dir: "logs"
  file_log_max_files: 2
  file_log_file_size_mb: 1
app:
  name: "Gitly API"
  version: "2.0.0"
  debug: true
"""


def test_project_config_is_loaded() -> None:
    assert configuration.app.name == "Gitly API"
    assert configuration.app.version == "1.0.0"
    assert configuration.app.debug is False


def test_load_from_file(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(VALID_CONFIG)

    config = Config.load_from_file(path)

    assert config.server.port == 9000
    assert config.logging.log_level == "INFO"
    assert config.logging.file_log_level == "DEBUG"
    assert config.app.version == "2.0.0"
    assert config.app.debug is True


def test_app_section_is_optional(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(VALID_CONFIG.split("app:")[0])

    config = Config.load_from_file(path)

    assert config.app.name == "Gitly API"
    assert config.app.debug is False


def test_missing_file_is_reported(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(tmp_path / "absent.yml")


def test_unknown_log_level_is_rejected(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text(VALID_CONFIG.replace('"info"', '"chatty"'))

    with pytest.raises(ValidationError):
        Config.load_from_file(path)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False), ("", False)],
)
def test_get_bool_env(monkeypatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("APP_DEBUG", raw)

    assert get_bool_env("APP_DEBUG", default=not expected) is expected


def test_get_bool_env_default_and_garbage(monkeypatch) -> None:
    monkeypatch.delenv("APP_DEBUG", raising=False)
    assert get_bool_env("APP_DEBUG", default=True) is True

    monkeypatch.setenv("APP_DEBUG", "maybe")
    with pytest.raises(ValueError):
        get_bool_env("APP_DEBUG", default=False)


def test_default_config_ships_inside_the_package(monkeypatch) -> None:
    monkeypatch.delenv("GITLY_CONFIG_FILE", raising=False)

    config_file = resolve_config_file()

    assert config_file == DEFAULT_CONFIG_FILE
    assert config_file.parent == Path(gitly.config.__file__).parent
    assert config_file.is_file()


def test_config_file_can_be_overridden(monkeypatch, tmp_path) -> None:
    path = tmp_path / "custom.yml"
    path.write_text(VALID_CONFIG)
    monkeypatch.setenv("GITLY_CONFIG_FILE", str(path))

    assert Config.load_from_file(resolve_config_file()).server.port == 9000


def test_relative_log_dir_resolves_against_working_directory(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.yml"
    path.write_text(VALID_CONFIG)

    log_dir = Config.load_from_file(path).logging.resolved_log_dir

    assert log_dir == (tmp_path / "logs").resolve()
    assert log_dir.is_dir()
