from pathlib import Path

import pytest
import yaml

from discuss_digest.services.config_manager import ConfigManager, ConfigValidationError

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "digest.yaml"


@pytest.fixture
def valid_config_file(tmp_path):
    config_content = {
        "feed": {"page_size": 50, "scan_full_page_on_boundary": False},
        "checkpoint": {
            "path": str(tmp_path / "last_processed_timestamp.txt"),
            "initial_lookback": "48h",
        },
        "report": {"output_dir": str(tmp_path / "reports")},
        "email": {
            "enabled": True,
            "api_key": "${DIGEST_TEST_SENDGRID_KEY}",
            "from_email": "digest@example.com",
            "to_emails": ["me@example.com"],
        },
    }
    config_file = tmp_path / "digest.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_content, f)
    return config_file


def test_load_valid_config(valid_config_file, monkeypatch):
    monkeypatch.setenv("DIGEST_TEST_SENDGRID_KEY", "SG.from-env")
    manager = ConfigManager(config_path=str(valid_config_file))

    config = manager.load_config()

    assert config.feed.page_size == 50
    assert config.feed.scan_full_page_on_boundary is False
    assert config.checkpoint.initial_lookback == "48h"
    assert config.email.resolved_api_key == "SG.from-env"
    assert config.display.timezone_name == "IST"


def test_unset_variable_left_unresolved(valid_config_file, monkeypatch):
    monkeypatch.delenv("DIGEST_TEST_SENDGRID_KEY", raising=False)

    config = ConfigManager(config_path=str(valid_config_file)).load_config()

    assert config.email.api_key == "${DIGEST_TEST_SENDGRID_KEY}"
    assert config.email.resolved_api_key is None


def test_config_is_cached(valid_config_file):
    manager = ConfigManager(config_path=str(valid_config_file))
    assert manager.load_config() is manager.load_config()


def test_load_missing_config():
    manager = ConfigManager(config_path="nonexistent.yaml")
    with pytest.raises(FileNotFoundError):
        manager.load_config()


def test_empty_file_uses_defaults(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    config = ConfigManager(config_path=str(config_file)).load_config()

    assert config.feed.page_size == 100


def test_non_mapping_root(tmp_path):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ConfigValidationError, match="mapping"):
        ConfigManager(config_path=str(config_file)).load_config()


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("feed: [unclosed\n")

    with pytest.raises(ConfigValidationError):
        ConfigManager(config_path=str(config_file)).load_config()


def test_invalid_values(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("feed:\n  page_size: 500\n")

    with pytest.raises(ConfigValidationError, match="Invalid configuration"):
        ConfigManager(config_path=str(config_file)).load_config()


def test_shipped_example_config_is_valid():
    config = ConfigManager(config_path=str(EXAMPLE_CONFIG)).load_config()
    assert config.feed.page_size == 100
    assert config.email.enabled is False
