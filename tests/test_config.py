"""Tests for ConfigManager and logging setup."""

import logging

import pytest

from photo_albums.config.config import ConfigManager, DEFAULT_CONFIG
from photo_albums.logging_setup import setup_logging


class TestConfigManager:
    def test_default_config(self):
        cm = ConfigManager()
        assert cm.get("storage.data_file") == "data/users.dat"
        assert cm.get("stock.album_name") == "stock"
        assert cm.get("file_scanning.supported_formats") == [
            "bmp", "gif", "jpg", "jpeg", "png",
        ]

    def test_get_dotted_key(self):
        cm = ConfigManager()
        assert cm.get("storage.autosave") is True
        assert cm.get("nonexistent.key") is None
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_set_dotted_key(self):
        cm = ConfigManager()
        cm.set("storage.data_file", "elsewhere/users.dat")
        assert cm.get("storage.data_file") == "elsewhere/users.dat"

    def test_set_creates_nested_keys(self):
        cm = ConfigManager()
        cm.set("new.nested.key", "value")
        assert cm.get("new.nested.key") == "value"

    def test_save_and_load(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        cm = ConfigManager()
        cm.set("logging.level", "DEBUG")
        cm.save(config_path)

        cm2 = ConfigManager(config_path)
        assert cm2.get("logging.level") == "DEBUG"
        # Defaults should still be present
        assert cm2.get("storage.data_file") == "data/users.dat"

    def test_load_merges_with_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stock:\n  photo_dir: /srv/stock\n")

        cm = ConfigManager(config_path)
        assert cm.get("stock.photo_dir") == "/srv/stock"
        assert cm.get("stock.album_name") == "stock"

    def test_load_rejects_non_mapping(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            ConfigManager(config_path)

    def test_reset(self):
        cm = ConfigManager()
        cm.set("storage.autosave", False)
        cm.reset()
        assert cm.get("storage.autosave") is True

    def test_defaults_not_mutated(self):
        cm = ConfigManager()
        cm.set("storage.data_file", "changed.dat")
        assert DEFAULT_CONFIG["storage"]["data_file"] == "data/users.dat"

    def test_no_path_raises(self):
        cm = ConfigManager()
        with pytest.raises(ValueError):
            cm.load()
        with pytest.raises(ValueError):
            cm.save()


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)

    def test_level_from_config(self):
        cm = ConfigManager()
        cm.set("logging.level", "warning")
        setup_logging(cm)
        assert logging.getLogger().level == logging.WARNING

    def test_verbose_overrides_level(self):
        setup_logging(ConfigManager(), verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_log_to_file(self, tmp_path):
        log_file = tmp_path / "albums.log"
        cm = ConfigManager()
        cm.set("logging.log_to_file", True)
        cm.set("logging.log_file", str(log_file))
        setup_logging(cm)
        logging.getLogger("photo_albums.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
