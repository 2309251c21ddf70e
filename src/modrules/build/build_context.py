"""Build Context - the immutable description of one resolution pass.

This module defines:
- TargetPlatform: Host platform identifiers understood by module rules
- BuildContext: Target platform, editor flag, module root and environment

Design:
    The invoking build tool creates one BuildContext per resolution pass and
    hands it to every component. No component reads os.environ or keeps the
    context after the pass; everything ambient is captured here so tests can
    substitute a fake environment.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from ..env import lookup, snapshot_environment


class TargetPlatform(Enum):
    """Target platform enum for type-safe platform selection."""

    WIN64 = "Win64"
    WIN32 = "Win32"
    LINUX = "Linux"
    MAC = "Mac"
    ANDROID = "Android"
    IOS = "IOS"

    def __str__(self) -> str:
        """Return the identifier used in rules files and on the command line."""
        return self.value

    @classmethod
    def parse(cls, name: str) -> "TargetPlatform":
        """Parse a platform identifier case-insensitively.

        Raises:
            ValueError: If the name is not a known platform
        """
        for platform in cls:
            if platform.value.lower() == name.strip().lower():
                return platform
        known = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown target platform '{name}' (expected one of: {known})")


@dataclass(frozen=True)
class BuildContext:
    """Immutable build request for a single module.

    Attributes:
        platform: Target platform of the build
        is_editor_build: Whether the editor flavor is being built
        module_root: Directory containing the module's rules (e.g. Source/Core)
        environment: Read-only environment snapshot taken at creation time
    """

    platform: TargetPlatform
    is_editor_build: bool
    module_root: Path
    environment: Mapping[str, str]

    @classmethod
    def create(
        cls,
        platform: TargetPlatform,
        is_editor_build: bool,
        module_root: Path,
        environment: Optional[Mapping[str, str]] = None,
    ) -> "BuildContext":
        """Create a BuildContext, snapshotting the environment.

        Args:
            platform: Target platform
            is_editor_build: Editor build flag
            module_root: Module directory, made absolute without resolving links
            environment: Environment to snapshot (defaults to os.environ)

        Returns:
            Frozen BuildContext for one resolution pass
        """
        return cls(
            platform=platform,
            is_editor_build=is_editor_build,
            module_root=Path(os.path.abspath(module_root)),
            environment=snapshot_environment(environment),
        )

    def get_env(self, name: str) -> Optional[str]:
        """Environment variable value, or None if unset or empty."""
        return lookup(self.environment, name)

    def with_editor(self, is_editor_build: bool) -> "BuildContext":
        """Same request with a different build flavor."""
        return BuildContext(
            platform=self.platform,
            is_editor_build=is_editor_build,
            module_root=self.module_root,
            environment=self.environment,
        )
