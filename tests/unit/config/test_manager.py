"""Tests for configuration manager functionality."""

import tempfile
from pathlib import Path

import pytest
import yaml

from src.chronoshift.config.manager import ConfigManager
from src.chronoshift.config.schema import DEFAULT_TIMEZONES, ChronoshiftConfig
from src.chronoshift.utils.core.exceptions import ConfigurationError, ErrorCategory
from tests.utils.test_helpers import create_temp_config_file


class TestConfigManager:
    """Test cases for ConfigManager functionality."""

    def test_load_config_success(self, base_config: ChronoshiftConfig) -> None:
        """Test successful configuration loading."""
        config_data: dict[str, object] = {
            "timezones": {
                "default_timezones": base_config.timezones.default_timezones,
                "local_timezone": base_config.timezones.local_timezone,
            },
            "storage": {"file_name": "zones.json"},
            "logging": {"level": "DEBUG"},
        }

        with create_temp_config_file(config_data) as temp_config_file:
            config = ConfigManager.load_config(temp_config_file)

            assert isinstance(config, ChronoshiftConfig)
            assert config.timezones.default_timezones == ["UTC", "Asia/Tokyo"]
            assert config.timezones.local_timezone == "America/New_York"
            assert config.storage.file_name == "zones.json"
            assert config.storage.key == "datetime-converter-timezones"
            assert config.logging.level == "DEBUG"

    def test_load_config_file_not_found(self) -> None:
        """Test that a missing file yields defaults."""
        config = ConfigManager.load_config(Path("/non/existent/config.yml"))

        assert config.timezones.default_timezones == DEFAULT_TIMEZONES
        assert config.timezones.local_timezone is None
        assert config.logging.level == "INFO"

    def test_load_config_empty_file(self) -> None:
        """Test that an empty file yields defaults."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
            empty_path = Path(f.name)

        try:
            config = ConfigManager.load_config(empty_path)
            assert config == ChronoshiftConfig()
        finally:
            empty_path.unlink(missing_ok=True)

    def test_load_config_invalid_yaml(self) -> None:
        """Test loading config with invalid YAML syntax."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
            _ = f.write("invalid: yaml: content: [")
            invalid_yaml_path = Path(f.name)

        try:
            with pytest.raises(ConfigurationError) as exc_info:
                _ = ConfigManager.load_config(invalid_yaml_path)
            assert isinstance(exc_info.value.__cause__, yaml.YAMLError)
            assert exc_info.value.category == ErrorCategory.CONFIGURATION
        finally:
            invalid_yaml_path.unlink(missing_ok=True)

    def test_load_config_not_a_dictionary(self) -> None:
        """Test that a top-level list is rejected."""
        with create_temp_config_file(["UTC"]) as temp_config_file:
            with pytest.raises(ConfigurationError, match="YAML dictionary"):
                _ = ConfigManager.load_config(temp_config_file)

    def test_load_config_unknown_timezone(self) -> None:
        """Test that an unknown default zone fails validation."""
        config_data = {"timezones": {"default_timezones": ["UTC", "Mars/Olympus_Mons"]}}

        with create_temp_config_file(config_data) as temp_config_file:
            with pytest.raises(ConfigurationError, match="Mars/Olympus_Mons"):
                _ = ConfigManager.load_config(temp_config_file)

    def test_save_and_load_round_trip(self, tmp_path: Path, base_config: ChronoshiftConfig) -> None:
        """Test that a saved configuration loads back unchanged."""
        config_path = tmp_path / "config.yml"

        ConfigManager.save_config(base_config, config_path)

        assert ConfigManager.load_config(config_path) == base_config
        assert not [p for p in tmp_path.iterdir() if p.suffix == ".tmp"]

    def test_save_config_missing_directory(self, base_config: ChronoshiftConfig) -> None:
        """Test that saving into a missing directory raises OSError."""
        with pytest.raises(OSError, match="Failed to save configuration"):
            ConfigManager.save_config(base_config, Path("/non/existent/dir/config.yml"))

