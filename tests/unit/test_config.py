"""Tests for depman configuration management."""

import json
import logging
import os

import pytest

from depman_cli.config import (
    get_config,
    get_lockfile_filename,
    get_log_level,
    get_manifest_filename,
    set_log_level,
    update_config,
)


class TestConfig:
    """Test configuration file handling."""

    @pytest.fixture(autouse=True)
    def _config_dir(self, isolated_config):
        self.config_dir = str(isolated_config)

    def test_config_file_created_with_defaults(self):
        config = get_config()
        assert config["manifest_file"] == "depman.yml"
        assert config["lockfile"] == "depman.lock"
        assert os.path.exists(os.path.join(self.config_dir, "config.json"))

    def test_default_filenames(self):
        assert get_manifest_filename() == "depman.yml"
        assert get_lockfile_filename() == "depman.lock"

    def test_update_config_persists(self):
        update_config({"manifest_file": "graph.yml"})
        assert get_manifest_filename() == "graph.yml"
        with open(os.path.join(self.config_dir, "config.json")) as f:
            assert json.load(f)["manifest_file"] == "graph.yml"

    def test_missing_keys_fall_back_to_defaults(self):
        with open(os.path.join(self.config_dir, "config.json"), "w") as f:
            json.dump({"lockfile": "state.lock"}, f)
        assert get_lockfile_filename() == "state.lock"
        assert get_manifest_filename() == "depman.yml"

    def test_corrupt_config_uses_defaults(self):
        with open(os.path.join(self.config_dir, "config.json"), "w") as f:
            f.write("{not json")
        assert get_config()["lockfile"] == "depman.lock"


class TestLogLevelConfig:
    """Test log level configuration."""

    def test_default_log_level_is_warning(self):
        assert get_log_level() == logging.WARNING

    def test_set_log_level(self):
        set_log_level("debug")
        assert get_log_level() == logging.DEBUG
        assert get_config()["log_level"] == "DEBUG"

    def test_set_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            set_log_level("loud")

    def test_unknown_stored_level_falls_back(self):
        update_config({"log_level": "chatty"})
        assert get_log_level() == logging.WARNING
