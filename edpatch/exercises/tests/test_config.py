from pathlib import Path

import pytest

from edpatch.exercises.config import WorkspaceConfig, load_config
from edpatch.exercises.exceptions import InvalidConfigError


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("EDPATCH_STRICT_PATCH", raising=False)
        config = load_config(tmp_path)
        assert config == WorkspaceConfig()
        assert config.exercise_suffix == ".wat"
        assert config.companion_suffixes == [".ts"]
        assert "{name}" in config.test_command

    def test_yaml_overrides(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("EDPATCH_STRICT_PATCH", raising=False)
        (tmp_path / "edpatch.yaml").write_text(
            "exercises_dir: src\n"
            "exercise_suffix: .wast\n"
            "test_command: [make, test, '{name}']\n"
            "test_timeout_sec: 5\n",
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.exercises_dir == "src"
        assert config.exercise_suffix == ".wast"
        assert config.test_command == ["make", "test", "{name}"]
        assert config.test_timeout_sec == 5

    def test_empty_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("EDPATCH_STRICT_PATCH", raising=False)
        (tmp_path / "edpatch.yaml").write_text("", encoding="utf-8")
        assert load_config(tmp_path) == WorkspaceConfig()

    def test_unknown_key_rejected(self, tmp_path: Path):
        config_path = tmp_path / "edpatch.yaml"
        config_path.write_text("patches: nope\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config(tmp_path)
        assert "edpatch.yaml" in str(excinfo.value)
        assert excinfo.value.config_path == config_path

    def test_non_mapping_rejected(self, tmp_path: Path):
        (tmp_path / "edpatch.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config(tmp_path)
        assert "mapping" in str(excinfo.value)

    def test_suffix_needs_dot(self, tmp_path: Path):
        (tmp_path / "edpatch.yaml").write_text("exercise_suffix: wat\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_config(tmp_path)

    def test_companion_suffix_needs_dot(self, tmp_path: Path):
        (tmp_path / "edpatch.yaml").write_text("companion_suffixes: [ts]\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_config(tmp_path)

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("no", False)])
    def test_strict_env_override(self, tmp_path: Path, monkeypatch, value: str, expected: bool):
        (tmp_path / "edpatch.yaml").write_text("strict_patch: false\n", encoding="utf-8")
        monkeypatch.setenv("EDPATCH_STRICT_PATCH", value)
        assert load_config(tmp_path).strict_patch is expected

    def test_empty_env_is_ignored(self, tmp_path: Path, monkeypatch):
        (tmp_path / "edpatch.yaml").write_text("strict_patch: true\n", encoding="utf-8")
        monkeypatch.setenv("EDPATCH_STRICT_PATCH", "")
        assert load_config(tmp_path).strict_patch is True

    @pytest.mark.parametrize("value", ["''", ".", "./", "..", "../cache", "build/../..", "/tmp/cache"])
    def test_cache_dir_must_stay_inside_root(self, tmp_path: Path, value: str):
        """ci-check deletes the cache directory, so it may not be the root or outside it."""
        (tmp_path / "edpatch.yaml").write_text(f"cache_dir: {value}\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config(tmp_path)
        assert "cache_dir" in str(excinfo.value)

    @pytest.mark.parametrize("value", ["exercises", "patch"])
    def test_cache_dir_may_not_hold_exercises_or_patches(self, tmp_path: Path, value: str):
        (tmp_path / "edpatch.yaml").write_text(f"cache_dir: {value}\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_config(tmp_path)

    def test_nested_cache_dir_accepted(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("EDPATCH_STRICT_PATCH", raising=False)
        (tmp_path / "edpatch.yaml").write_text("cache_dir: build/.cache\n", encoding="utf-8")
        assert load_config(tmp_path).cache_dir == "build/.cache"
