"""Tests for BuildContext and TargetPlatform."""

import dataclasses
from pathlib import Path

import pytest

from modrules.build.build_context import BuildContext, TargetPlatform


class TestTargetPlatform:
    """Tests for TargetPlatform.parse()"""

    def test_parse_exact(self):
        assert TargetPlatform.parse("Win64") is TargetPlatform.WIN64

    def test_parse_case_insensitive(self):
        assert TargetPlatform.parse("win64") is TargetPlatform.WIN64
        assert TargetPlatform.parse(" LINUX ") is TargetPlatform.LINUX

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown target platform"):
            TargetPlatform.parse("Amiga")

    def test_str_is_identifier(self):
        assert str(TargetPlatform.MAC) == "Mac"


class TestBuildContext:
    """Tests for BuildContext creation and lookups."""

    def test_create_snapshots_environment(self, tmp_path):
        env = {"NDI_RUNTIME_DIR_V4": "/opt/ndi"}
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, env)
        env["NDI_RUNTIME_DIR_V4"] = "/changed"
        assert context.get_env("NDI_RUNTIME_DIR_V4") == "/opt/ndi"

    def test_get_env_empty_is_none(self, tmp_path):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {"NDI_RUNTIME_DIR_V4": ""})
        assert context.get_env("NDI_RUNTIME_DIR_V4") is None

    def test_module_root_coerced_to_path(self, tmp_path):
        context = BuildContext.create(TargetPlatform.LINUX, True, str(tmp_path), {})
        assert isinstance(context.module_root, Path)
        assert context.module_root == tmp_path

    def test_context_is_frozen(self, tmp_path):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {})
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.is_editor_build = True  # type: ignore[misc]

    def test_with_editor_keeps_everything_else(self, tmp_path):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {"A": "1"})
        editor = context.with_editor(True)
        assert editor.is_editor_build is True
        assert context.is_editor_build is False
        assert editor.platform is context.platform
        assert editor.module_root == context.module_root
        assert editor.get_env("A") == "1"

    def test_relative_module_root_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        context = BuildContext.create(TargetPlatform.WIN64, False, Path("Source") / "Core", {})
        assert context.module_root.is_absolute()
        assert context.module_root == tmp_path / "Source" / "Core"
