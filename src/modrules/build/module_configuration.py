"""Module Configuration - the terminal artifact of a resolution pass.

``merge`` combines a DependencySet and a ThirdPartyLinkage into the record
handed to the host build tool. It is a structural merge: the only decision
it makes is the editor dependency addendum.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..module_configs import ModuleRulesModel
from .build_context import BuildContext, TargetPlatform
from .dependency_set import DependencySet
from .third_party import ThirdPartyLinkage


@dataclass(frozen=True)
class ModuleConfiguration:
    """Everything the host build tool needs to compile and link one module.

    Field names follow the host's module rules vocabulary
    (PublicIncludePaths, PublicAdditionalLibraries, PublicDelayLoadDLLs, ...).
    """

    module_name: str
    platform: TargetPlatform
    is_editor_build: bool

    public_include_paths: tuple[Path, ...]
    private_include_paths: tuple[Path, ...]
    public_dependency_modules: tuple[str, ...]
    private_dependency_modules: tuple[str, ...]
    private_include_path_modules: tuple[str, ...]
    editor_dependency_modules: tuple[str, ...]

    public_additional_libraries: tuple[Path, ...]
    public_delay_load_libraries: tuple[str, ...]
    public_runtime_library_paths: tuple[Path, ...]
    public_definitions: tuple[str, ...]
    sdk_available: bool

    enforce_iwyu: bool
    pch_usage: str

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable view; list order matches tuple order."""
        return {
            "module_name": self.module_name,
            "platform": self.platform.value,
            "is_editor_build": self.is_editor_build,
            "enforce_iwyu": self.enforce_iwyu,
            "pch_usage": self.pch_usage,
            "public_include_paths": [str(p) for p in self.public_include_paths],
            "private_include_paths": [str(p) for p in self.private_include_paths],
            "public_dependency_modules": list(self.public_dependency_modules),
            "private_dependency_modules": list(self.private_dependency_modules),
            "private_include_path_modules": list(self.private_include_path_modules),
            "editor_dependency_modules": list(self.editor_dependency_modules),
            "public_additional_libraries": [str(p) for p in self.public_additional_libraries],
            "public_delay_load_libraries": list(self.public_delay_load_libraries),
            "public_runtime_library_paths": [str(p) for p in self.public_runtime_library_paths],
            "public_definitions": list(self.public_definitions),
            "sdk_available": self.sdk_available,
        }


def merge(
    dependency_set: DependencySet,
    linkage: ThirdPartyLinkage,
    context: BuildContext,
    rules: ModuleRulesModel,
) -> ModuleConfiguration:
    """
    Merge dependency declarations and SDK linkage into a ModuleConfiguration.

    The SDK include path (if any) is appended after the module's own public
    include paths. For editor builds the rules' editor dependency addendum is
    added to editor_dependency_modules.

    Args:
        dependency_set: Output of DependencySetBuilder.build
        linkage: Output of ThirdPartyLinkageResolver.resolve
        context: Build context of this resolution pass
        rules: Rules of the module being resolved

    Returns:
        ModuleConfiguration with stable ordering
    """
    public_include_paths = list(dependency_set.public_include_paths)
    if linkage.sdk_include_path is not None and linkage.sdk_include_path not in public_include_paths:
        public_include_paths.append(linkage.sdk_include_path)

    editor_dependency_modules: tuple[str, ...] = ()
    if context.is_editor_build and rules.editor_dependency_addendum:
        editor_dependency_modules = (rules.editor_dependency_addendum,)

    return ModuleConfiguration(
        module_name=rules.name,
        platform=context.platform,
        is_editor_build=context.is_editor_build,
        public_include_paths=tuple(public_include_paths),
        private_include_paths=dependency_set.private_include_paths,
        public_dependency_modules=dependency_set.public_modules,
        private_dependency_modules=dependency_set.private_modules,
        private_include_path_modules=dependency_set.private_include_path_modules,
        editor_dependency_modules=editor_dependency_modules,
        public_additional_libraries=linkage.static_libraries,
        public_delay_load_libraries=linkage.delay_loaded_libraries,
        public_runtime_library_paths=linkage.runtime_search_paths,
        public_definitions=linkage.feature_defines,
        sdk_available=linkage.available,
        enforce_iwyu=rules.enforce_iwyu,
        pch_usage=rules.pch_usage,
    )
