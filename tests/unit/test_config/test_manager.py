"""
Unit tests for configuration loading and the configuration singleton.
"""

import logging
import tomllib

import pytest

from spark_helper.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_main_config,
    load_toml_file,
    set_config_path,
)
from spark_helper.validation import ValidationError


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the configuration singleton."""

    def test_get_config_loads_file(self, config_file):
        set_config_path(config_file)

        config = get_config()

        assert config.monitor.report_title == "Processing of whatever"
        assert config.storage.backend == "memory"
        assert is_config_loaded()

    def test_get_config_is_cached(self, config_file):
        set_config_path(config_file)

        assert get_config() is get_config()

    def test_clear_config_cache(self, config_file):
        set_config_path(config_file)
        first = get_config()

        clear_config_cache()

        assert not is_config_loaded()
        assert get_config() is not first

    def test_get_config_info(self, config_file):
        set_config_path(config_file)
        get_config()

        info = get_config_info()

        assert info["config_loaded"] is True
        assert info["config_path"] == str(config_file)
        assert info["storage_backend"] == "memory"
        assert info["log_folder"] == "logs/whatever"

    def test_missing_config_file(self, temp_dir):
        set_config_path(temp_dir / "missing.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_invalid_config_values(self, temp_dir):
        config_path = temp_dir / "config.toml"
        config_path.write_text('[storage]\nbackend = "s3"\n')
        set_config_path(config_path)

        with pytest.raises(ValidationError):
            get_config()

    def test_default_config_file_is_valid(self):
        config = get_config()

        assert config.storage.backend == "local"
        assert config.monitor.purge_window == 7


@pytest.mark.unit
class TestLoader:
    """Test cases for TOML loading."""

    def test_malformed_toml(self, temp_dir):
        config_path = temp_dir / "config.toml"
        config_path.write_text("[monitor\n")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_file(config_path)

    def test_main_config_sections_default_to_empty(self, temp_dir):
        config_path = temp_dir / "config.toml"
        config_path.write_text('[monitor]\nreport_title = "My Job"\n')

        assert load_main_config(config_path) == {
            "monitor": {"report_title": "My Job"},
            "storage": {},
        }

    def test_unknown_section_is_ignored(self, temp_dir, caplog):
        config_path = temp_dir / "config.toml"
        config_path.write_text('[monitr]\nreport_title = "My Job"\n')

        with caplog.at_level(logging.WARNING):
            config_data = load_main_config(config_path)

        assert "monitr" not in config_data
        assert "Ignoring unknown entry 'monitr'" in caplog.text

    def test_section_must_be_a_table(self, temp_dir):
        config_path = temp_dir / "config.toml"
        config_path.write_text('storage = "hdfs"\n')

        with pytest.raises(ValidationError) as exc_info:
            load_main_config(config_path)

        assert exc_info.value.field_name == "storage"
