"""Tests for merge() and ModuleConfiguration."""

import json
from pathlib import Path

from modrules.build.build_context import BuildContext, TargetPlatform
from modrules.build.dependency_set import DependencySet
from modrules.build.module_configuration import merge
from modrules.build.third_party import ThirdPartyLinkage


def _deps(root: Path) -> DependencySet:
    return DependencySet(
        public_modules=("Engine", "Core"),
        private_modules=("Renderer",),
        private_include_path_modules=(),
        public_include_paths=(root / "Public",),
        private_include_paths=(root / "Private",),
    )


def _linkage(root: Path) -> ThirdPartyLinkage:
    sdk = root / "ThirdParty" / "NDI"
    return ThirdPartyLinkage(
        available=True,
        sdk_include_path=sdk / "Includes",
        static_libraries=(sdk / "Libraries" / "Win64" / "Processing.NDI.Lib.x64.lib",),
        delay_loaded_libraries=("Processing.NDI.Lib.x64.dll",),
        runtime_search_paths=(root / "runtime",),
        feature_defines=("NDI_SDK_ENABLED",),
    )


class TestMerge:
    def test_sdk_include_follows_module_includes(self, tmp_path, ndi_rules):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {})
        config = merge(_deps(tmp_path), _linkage(tmp_path), context, ndi_rules)
        assert config.public_include_paths == (
            tmp_path / "Public",
            tmp_path / "ThirdParty" / "NDI" / "Includes",
        )
        assert config.private_include_paths == (tmp_path / "Private",)
        assert config.public_definitions == ("NDI_SDK_ENABLED",)
        assert config.public_delay_load_libraries == ("Processing.NDI.Lib.x64.dll",)
        assert config.sdk_available is True

    def test_no_sdk_leaves_linkage_empty(self, tmp_path, ndi_rules):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {})
        config = merge(_deps(tmp_path), ThirdPartyLinkage.unavailable(), context, ndi_rules)
        assert config.public_include_paths == (tmp_path / "Public",)
        assert config.public_additional_libraries == ()
        assert config.public_delay_load_libraries == ()
        assert config.public_runtime_library_paths == ()
        assert config.public_definitions == ()
        assert config.sdk_available is False

    def test_editor_addendum_only_for_editor_builds(self, tmp_path, ndi_rules):
        runtime = merge(_deps(tmp_path), ThirdPartyLinkage.unavailable(), BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {}), ndi_rules)
        editor = merge(_deps(tmp_path), ThirdPartyLinkage.unavailable(), BuildContext.create(TargetPlatform.WIN64, True, tmp_path, {}), ndi_rules)
        assert runtime.editor_dependency_modules == ()
        assert editor.editor_dependency_modules == ("NDIIO",)

    def test_no_addendum_configured(self, tmp_path, editor_rules):
        context = BuildContext.create(TargetPlatform.WIN64, True, tmp_path, {})
        config = merge(_deps(tmp_path), ThirdPartyLinkage.unavailable(), context, editor_rules)
        assert config.editor_dependency_modules == ()

    def test_module_settings_passed_through(self, tmp_path, ndi_rules):
        context = BuildContext.create(TargetPlatform.WIN64, False, tmp_path, {})
        config = merge(_deps(tmp_path), ThirdPartyLinkage.unavailable(), context, ndi_rules)
        assert config.module_name == "NDIIO"
        assert config.enforce_iwyu is True
        assert config.pch_usage == "UseExplicitOrSharedPCHs"

    def test_to_dict_is_json_serializable(self, tmp_path, ndi_rules):
        context = BuildContext.create(TargetPlatform.WIN64, True, tmp_path, {})
        config = merge(_deps(tmp_path), _linkage(tmp_path), context, ndi_rules)
        data = json.loads(json.dumps(config.to_dict()))
        assert data["platform"] == "Win64"
        assert data["is_editor_build"] is True
        assert data["public_include_paths"][0] == str(tmp_path / "Public")
        assert data["editor_dependency_modules"] == ["NDIIO"]
        assert data["sdk_available"] is True
