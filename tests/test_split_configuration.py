"""Tests for SplitConfiguration.

Covers root validation, cross-category key uniqueness, routing of
get/set/has/undefine to the owning category, unsaved-category tracking, and
the best-effort load/save that isolates failures to a single category.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from splitconf import (
    Category,
    CategoryFailure,
    Color,
    ConfigurationError,
    DuplicateKeyError,
    InvalidCategoryError,
    KeyNotFoundError,
    ParseError,
    RootError,
    SplitConfiguration,
    StoreStateError,
)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_creates_missing_root(self, root):
        SplitConfiguration(root)
        assert root.is_dir()

    def test_creates_nested_root(self, tmp_path):
        root = tmp_path / "a" / "b"
        SplitConfiguration(root)
        assert root.is_dir()

    def test_accepts_existing_root(self, tmp_path):
        cfg = SplitConfiguration(tmp_path)
        assert cfg.root == tmp_path

    def test_accepts_str_root(self, tmp_path):
        cfg = SplitConfiguration(str(tmp_path))
        assert cfg.root == tmp_path

    @pytest.mark.parametrize("root", [None, ""])
    def test_empty_root(self, root):
        with pytest.raises(ConfigurationError) as exc_info:
            SplitConfiguration(root)
        assert exc_info.value.reason is RootError.INVALID_ROOT

    def test_root_is_a_file(self, tmp_path):
        path = tmp_path / "settings"
        path.write_text("")
        with pytest.raises(ConfigurationError) as exc_info:
            SplitConfiguration(path)
        assert exc_info.value.reason is RootError.INVALID_ROOT

    def test_create_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigurationError) as exc_info:
            SplitConfiguration(blocker / "config")
        assert exc_info.value.reason is RootError.DIRECTORY_CREATE_FAILED
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_one_store_per_category(self, root):
        cfg = SplitConfiguration(root)
        for category in Category.values():
            assert cfg.configuration(category).path == root / category.path

    def test_does_not_create_category_files(self, root):
        SplitConfiguration(root)
        assert list(root.iterdir()) == []

    def test_nothing_unsaved_after_construction(self, root):
        assert SplitConfiguration(root).get_unsaved_categories() == []

    def test_root_without_read_write_access(self, tmp_path, monkeypatch):
        monkeypatch.setattr("splitconf.split.os.access", lambda path, mode: False)
        with pytest.raises(ConfigurationError) as exc_info:
            SplitConfiguration(tmp_path)
        assert exc_info.value.reason is RootError.INVALID_ROOT


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


class TestDefine:
    def test_distinct_keys_in_different_categories(self, config):
        assert config.has("volume")
        assert config.has("fontColor")
        assert config.category_of("volume") is Category.SETTING
        assert config.category_of("fontColor") is Category.THEME

    def test_duplicate_across_categories(self, config):
        with pytest.raises(DuplicateKeyError):
            config.define(Category.THEME, int, "volume", 10)

    def test_duplicate_in_same_category(self, config):
        with pytest.raises(DuplicateKeyError):
            config.define(Category.SETTING, int, "volume", 10)

    def test_failed_duplicate_does_not_define(self, config):
        with pytest.raises(DuplicateKeyError):
            config.define(Category.THEME, int, "volume", 10)
        assert not config.configuration(Category.THEME).has("volume")

    def test_invalid_category(self, config):
        with pytest.raises(InvalidCategoryError):
            config.define("settings.cfg", int, "speed", 1)

    def test_redefine_after_undefine_in_other_category(self, config):
        config.undefine("volume")
        config.define(Category.THEME, int, "volume", 10)
        assert config.category_of("volume") is Category.THEME

    def test_define_marks_category_unsaved(self, root):
        cfg = SplitConfiguration(root)
        cfg.define(Category.THEME, Color, "background", Color("#000000"))
        assert cfg.get_unsaved_categories() == [Category.THEME]


class TestHas:
    def test_true_when_only_one_category_defines_key(self, root):
        cfg = SplitConfiguration(root)
        cfg.define(Category.SETTING, int, "volume", 50)
        assert cfg.has("volume") is True
        assert not cfg.configuration(Category.THEME).has("volume")

    def test_false_for_unknown(self, config):
        assert config.has("speed") is False


class TestUndefine:
    def test_undefine_then_has(self, config):
        config.undefine("fontColor")
        assert config.has("fontColor") is False
        assert config.category_of("fontColor") is None

    def test_undefine_unknown_is_noop(self, config):
        config.undefine("speed")
        assert config.has("volume")


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class TestValues:
    def test_get_default(self, config):
        assert config.get("volume") == 50
        assert config.get("fontColor") == "black"

    def test_set_then_get(self, config):
        config.set("volume", 80)
        config.set("fontColor", "white")
        assert config.get("volume") == 80
        assert config.get("fontColor") == "white"

    def test_set_none(self, config):
        config.set("fontColor", None)
        assert config.get("fontColor") is None

    def test_get_unknown(self, config):
        with pytest.raises(KeyNotFoundError):
            config.get("speed")

    def test_set_unknown(self, config):
        with pytest.raises(KeyNotFoundError):
            config.set("speed", 1)

    def test_key_not_found_is_a_key_error(self, config):
        with pytest.raises(KeyError):
            config.get("speed")

    def test_set_marks_only_owner_unsaved(self, config):
        config.save()
        config.set("fontColor", "white")
        assert config.get_unsaved_categories() == [Category.THEME]


# ---------------------------------------------------------------------------
# Save / load
# ---------------------------------------------------------------------------


class TestSave:
    def test_save_writes_one_file_per_category(self, root, config):
        assert config.save() == []
        assert (root / "settings.cfg").read_text() == "volume=50\n"
        assert (root / "theme.cfg").read_text() == "fontColor=black\n"

    def test_save_clears_unsaved(self, config):
        assert config.get_unsaved_categories() == [Category.SETTING, Category.THEME]
        config.save()
        assert config.get_unsaved_categories() == []

    def test_failed_category_stays_unsaved(self, root, config):
        (root / "theme.cfg").mkdir()
        failures = config.save()
        assert [f.category for f in failures] == [Category.THEME]
        assert failures[0].operation == "save"
        assert isinstance(failures[0].error, OSError)
        assert (root / "settings.cfg").read_text() == "volume=50\n"
        assert config.get_unsaved_categories() == [Category.THEME]

    def test_failure_callback_receives_notice(self, root):
        notices: list[CategoryFailure] = []
        cfg = SplitConfiguration(root, on_failure=notices.append)
        cfg.define(Category.THEME, str, "fontColor", "black")
        (root / "theme.cfg").mkdir()
        cfg.save()
        assert len(notices) == 1
        assert notices[0].path == root / "theme.cfg"
        assert notices[0].message.startswith(f"Failed to save {root / 'theme.cfg'}")


class TestLoad:
    def test_round_trip(self, root, config):
        config.set("volume", 75)
        config.set("fontColor", "white")
        config.save()

        fresh = SplitConfiguration(root)
        fresh.define(Category.SETTING, int, "volume", 50)
        fresh.define(Category.THEME, str, "fontColor", "black")
        assert fresh.load() == []
        assert fresh.get("volume") == 75
        assert fresh.get("fontColor") == "white"
        assert fresh.get_unsaved_categories() == []

    def test_empty_root_scenario(self, tmp_path):
        root = tmp_path / "llanfair"
        cfg = SplitConfiguration(root)
        cfg.define(Category.SETTING, int, "volume", 50)
        cfg.define(Category.THEME, str, "fontColor", "black")
        cfg.save()
        assert "volume=50" in (root / "settings.cfg").read_text()
        assert "fontColor=black" in (root / "theme.cfg").read_text()

        again = SplitConfiguration(root)
        again.define(Category.SETTING, int, "volume", 0)
        again.define(Category.THEME, str, "fontColor", "")
        again.load()
        assert again.get("volume") == 50
        assert again.get("fontColor") == "black"

    def test_corrupt_category_does_not_block_others(self, root, config):
        (root / "settings.cfg").write_text("volume=75\n")
        (root / "theme.cfg").write_text("this is not a property line\n")

        failures = config.load()

        assert config.get("volume") == 75
        assert config.get("fontColor") == "black"
        assert [f.category for f in failures] == [Category.THEME]
        assert isinstance(failures[0].error, ParseError)
        assert failures[0].operation == "load"

    def test_unreadable_category_does_not_block_others(self, root, config):
        (root / "settings.cfg").mkdir()
        (root / "theme.cfg").write_text("fontColor=white\n")
        failures = config.load()
        assert [f.category for f in failures] == [Category.SETTING]
        assert isinstance(failures[0].error, OSError)
        assert config.get("fontColor") == "white"

    def test_category_without_definitions_reports_state_error(self, root):
        cfg = SplitConfiguration(root)
        cfg.define(Category.SETTING, int, "volume", 50)
        failures = cfg.load()
        assert [f.category for f in failures] == [Category.THEME]
        assert isinstance(failures[0].error, StoreStateError)

    def test_missing_files_keep_defaults(self, config):
        assert config.load() == []
        assert config.get("volume") == 50
        assert config.get_unsaved_categories() == [Category.SETTING, Category.THEME]

    def test_load_failures_are_logged(self, root, config, caplog):
        (root / "theme.cfg").write_text("garbage\n")
        with caplog.at_level("ERROR", logger="splitconf"):
            config.load()
        assert "Failed to load" in caplog.text
        assert "theme.cfg" in caplog.text

    def test_undefined_keys_in_file_are_discarded(self, root, config):
        (root / "settings.cfg").write_text("volume=20\nspeed=3\n")
        config.load()
        assert not config.has("speed")
        assert config.get("volume") == 20

    def test_non_utf8_category_does_not_block_others(self, root, config):
        (root / "settings.cfg").write_bytes(b"volume=\xff\xfe\n")
        (root / "theme.cfg").write_text("fontColor=white\n")

        failures = config.load()

        assert [f.category for f in failures] == [Category.SETTING]
        assert isinstance(failures[0].error, ParseError)
        assert config.get("volume") == 50
        assert config.get("fontColor") == "white"


class TestSaveLogging:
    def test_clean_categories_are_not_reported_as_written(
        self, root, config, caplog
    ):
        config.save()
        config.set("fontColor", "white")
        with caplog.at_level("INFO", logger="splitconf"):
            config.save()
        writes = [
            r.getMessage()
            for r in caplog.records
            if r.getMessage().startswith("Writing")
        ]
        assert writes == [f"Writing {root / 'theme.cfg'}"]
