"""
Tests for settings resolution and logging setup.
"""
import json
import logging
import os

from intellotask import logging_config
from intellotask.config import DEFAULT_KEY_PREFIX, Settings, ensure_storage_directory


def test_defaults(monkeypatch):
    monkeypatch.delenv("INTELLOTASK_STORAGE_PATH", raising=False)
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "file"
    assert os.path.isabs(settings.storage_path)
    assert settings.storage_path.endswith("data")
    assert settings.key_prefix == DEFAULT_KEY_PREFIX
    assert settings.reset_corrupt_collections is False


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("INTELLOTASK_STORAGE_PATH", str(tmp_path))
    monkeypatch.setenv("INTELLOTASK_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("INTELLOTASK_RESET_CORRUPT_COLLECTIONS", "true")
    monkeypatch.setenv("INTELLOTASK_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.storage_path == str(tmp_path)
    assert settings.storage_backend == "memory"
    assert settings.reset_corrupt_collections is True
    assert settings.log_level == "DEBUG"


def test_relative_storage_path_made_absolute():
    settings = Settings(_env_file=None, storage_path="some/dir")
    assert settings.storage_path == os.path.abspath("some/dir")


def test_collection_key():
    settings = Settings(_env_file=None, key_prefix="test_")
    assert settings.collection_key("tasks") == "test_tasks"


def test_ensure_storage_directory(tmp_path):
    target = tmp_path / "nested" / "data"
    assert ensure_storage_directory(str(target)) == str(target)
    assert target.is_dir()


def test_configure_logging_replaces_own_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    settings = Settings(_env_file=None, log_format="json")
    try:
        logging_config.configure_logging(settings, level="WARNING")
        logging_config.configure_logging(settings, level="WARNING")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, logging_config.JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(logging_config._handler)
        logging_config._handler = None


def test_json_formatter():
    record = logging.LogRecord("intellotask.test", logging.INFO, __file__, 1, "saved %s", ("tasks",), None)
    payload = json.loads(logging_config.JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "intellotask.test"
    assert payload["message"] == "saved tasks"
