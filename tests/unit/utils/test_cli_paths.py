"""Unit tests for the global path configuration."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.chronoshift.utils.cli.paths import PathConfig, get_path_config


@pytest.fixture
def restore_paths() -> Generator[PathConfig, None, None]:
    """Restore the global paths after a test changes them."""
    path_config = get_path_config()
    original = (path_config.config_file, path_config.data_folder, path_config.log_folder)
    yield path_config
    path_config.set_paths(*original)


class TestPathConfig:
    """Test the PathConfig singleton."""

    def test_singleton(self) -> None:
        """Test that every construction returns the global instance."""
        assert PathConfig() is PathConfig()
        assert PathConfig() is get_path_config()

    def test_set_paths(self, tmp_path: Path, restore_paths: PathConfig) -> None:
        """Test that paths can be replaced at startup."""
        restore_paths.set_paths(
            config_file=tmp_path / "config.yml",
            data_folder=tmp_path / "data",
            log_folder=tmp_path / "logs",
        )

        assert get_path_config().config_file == tmp_path / "config.yml"
        assert get_path_config().data_folder == tmp_path / "data"
        assert get_path_config().log_folder == tmp_path / "logs"

    def test_storage_path(self, tmp_path: Path, restore_paths: PathConfig) -> None:
        """Test that the store lives in the data folder."""
        restore_paths.set_paths(tmp_path / "config.yml", tmp_path / "data", tmp_path / "logs")

        assert restore_paths.get_storage_path("zones.json") == tmp_path / "data" / "zones.json"
