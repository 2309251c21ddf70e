"""
Type-safe module rules models.

Every rules file (NDIIO.json, NDIIOEditor.json, ...) is parsed into these
frozen dataclasses, so the resolver never works with raw dict.get() lookups.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _names(data: Dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Field '{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class SdkPlatformRules:
    """Per-platform library layout of a third-party SDK.

    Attributes:
        library_dir: Library directory relative to the SDK root (e.g. "Libraries/Win64")
        static_libraries: Import/static library file names inside library_dir
        delay_load_libraries: Dynamic library names loaded on first call, not at startup
    """

    library_dir: str
    static_libraries: tuple[str, ...] = ()
    delay_load_libraries: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SdkPlatformRules":
        try:
            library_dir = data["library_dir"]
        except KeyError as e:
            raise ValueError(f"Missing required field in SDK platform rules: {e}")
        return cls(
            library_dir=library_dir,
            static_libraries=_names(data, "static_libraries"),
            delay_load_libraries=_names(data, "delay_load_libraries"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "library_dir": self.library_dir,
            "static_libraries": list(self.static_libraries),
            "delay_load_libraries": list(self.delay_load_libraries),
        }


@dataclass(frozen=True)
class ThirdPartySdkRules:
    """
    Optional third-party SDK bundled with a module.

    Attributes:
        name: SDK display name (e.g. "NDI")
        sdk_dir: SDK root relative to the module root (e.g. "ThirdParty/NDI")
        includes_dir: Header directory relative to the SDK root
        runtime_env_var: Environment variable naming the runtime directory
        feature_define: Preprocessor define set when the SDK is linked
        platforms: Library layout keyed by platform identifier ("Win64", ...)
    """

    name: str
    sdk_dir: str
    runtime_env_var: str
    feature_define: str
    includes_dir: str = "Includes"
    platforms: Dict[str, SdkPlatformRules] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThirdPartySdkRules":
        try:
            name = data["name"]
            sdk_dir = data["sdk_dir"]
            runtime_env_var = data["runtime_env_var"]
            feature_define = data["feature_define"]
        except KeyError as e:
            raise ValueError(f"Missing required field in third-party rules: {e}")

        platforms = {platform: SdkPlatformRules.from_dict(rules) for platform, rules in data.get("platforms", {}).items()}

        return cls(
            name=name,
            sdk_dir=sdk_dir,
            runtime_env_var=runtime_env_var,
            feature_define=feature_define,
            includes_dir=data.get("includes_dir", "Includes"),
            platforms=platforms,
        )

    def for_platform(self, platform: str) -> Optional[SdkPlatformRules]:
        """Library layout for a platform, or None if the SDK does not support it."""
        return self.platforms.get(platform)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sdk_dir": self.sdk_dir,
            "includes_dir": self.includes_dir,
            "runtime_env_var": self.runtime_env_var,
            "feature_define": self.feature_define,
            "platforms": {platform: rules.to_dict() for platform, rules in self.platforms.items()},
        }


@dataclass(frozen=True)
class EditorRules:
    """Additions applied only when building the editor flavor."""

    private_include_path_modules: tuple[str, ...] = ()
    private_dependencies: tuple[str, ...] = ()
    private_include_dirs: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorRules":
        return cls(
            private_include_path_modules=_names(data, "private_include_path_modules"),
            private_dependencies=_names(data, "private_dependencies"),
            private_include_dirs=_names(data, "private_include_dirs"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "private_include_path_modules": list(self.private_include_path_modules),
            "private_dependencies": list(self.private_dependencies),
            "private_include_dirs": list(self.private_include_dirs),
        }


@dataclass(frozen=True)
class ModuleRulesModel:
    """
    Type-safe module rules.

    Attributes:
        name: Module name as known to the host build tool (e.g. "NDIIO")
        description: Human-readable description
        public_dependencies: Modules always visible to dependents
        private_dependencies: Modules always linked privately
        public_include_dir: Module-relative public header directory
        private_include_dir: Module-relative private header directory
        private_include_dir_editor_only: Register private_include_dir only for editor builds
        editor: Editor-only additions
        editor_dependency_addendum: Module name appended for editor builds so the
            editor companion can see this module (None for no addendum)
        enforce_iwyu: Include-what-you-use enforcement flag passed to the host
        pch_usage: Precompiled header mode passed to the host
        third_party: Optional SDK rules
    """

    name: str
    description: str = ""
    public_dependencies: tuple[str, ...] = ()
    private_dependencies: tuple[str, ...] = ()
    public_include_dir: str = "Public"
    private_include_dir: str = "Private"
    private_include_dir_editor_only: bool = False
    editor: EditorRules = field(default_factory=EditorRules)
    editor_dependency_addendum: Optional[str] = None
    enforce_iwyu: bool = True
    pch_usage: str = "UseExplicitOrSharedPCHs"
    third_party: Optional[ThirdPartySdkRules] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModuleRulesModel":
        """
        Parse module rules from a dictionary.

        Args:
            data: Raw rules dictionary from JSON

        Returns:
            Type-safe ModuleRulesModel instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        try:
            name = data["name"]
        except KeyError as e:
            raise ValueError(f"Missing required field in module rules: {e}")

        third_party_data = data.get("third_party")
        third_party = ThirdPartySdkRules.from_dict(third_party_data) if third_party_data else None

        return cls(
            name=name,
            description=data.get("description", ""),
            public_dependencies=_names(data, "public_dependencies"),
            private_dependencies=_names(data, "private_dependencies"),
            public_include_dir=data.get("public_include_dir", "Public"),
            private_include_dir=data.get("private_include_dir", "Private"),
            private_include_dir_editor_only=bool(data.get("private_include_dir_editor_only", False)),
            editor=EditorRules.from_dict(data.get("editor") or {}),
            editor_dependency_addendum=data.get("editor_dependency_addendum"),
            enforce_iwyu=bool(data.get("enforce_iwyu", True)),
            pch_usage=data.get("pch_usage", "UseExplicitOrSharedPCHs"),
            third_party=third_party,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert back to dictionary format.

        Returns:
            Dictionary representation compatible with JSON serialization
        """
        return {
            "name": self.name,
            "description": self.description,
            "enforce_iwyu": self.enforce_iwyu,
            "pch_usage": self.pch_usage,
            "public_include_dir": self.public_include_dir,
            "private_include_dir": self.private_include_dir,
            "public_dependencies": list(self.public_dependencies),
            "private_dependencies": list(self.private_dependencies),
            "private_include_dir_editor_only": self.private_include_dir_editor_only,
            "editor": self.editor.to_dict(),
            "editor_dependency_addendum": self.editor_dependency_addendum,
            "third_party": self.third_party.to_dict() if self.third_party else None,
        }
