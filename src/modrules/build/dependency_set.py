"""Dependency Set Builder.

Assembles the dependency module names and include paths of a module for one
build context:

1. Base public modules, plus ``<module>/Public`` if that directory exists
2. Base private modules, plus ``<module>/Private`` if that directory exists
3. Editor builds only: editor private modules, the private-include-path
   module list, and any extra editor include directories

Directory checks gate path registration, never module names. Whether a
dependency module is actually present is the host build tool's concern.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..module_configs import ModuleRulesModel
from .build_context import BuildContext
from .path_prober import FileSystemProber, PathProber, join

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencySet:
    """Ordered, duplicate-free dependency declarations of one module.

    Attributes:
        public_modules: Modules whose headers dependents also see
        private_modules: Modules linked privately by this module
        private_include_path_modules: Modules searched for private includes only (editor)
        public_include_paths: Public include directories, in precedence order
        private_include_paths: Private include directories, in precedence order
    """

    public_modules: tuple[str, ...] = ()
    private_modules: tuple[str, ...] = ()
    private_include_path_modules: tuple[str, ...] = ()
    public_include_paths: tuple[Path, ...] = ()
    private_include_paths: tuple[Path, ...] = ()

    def issuperset(self, other: "DependencySet") -> bool:
        """True if every entry of ``other`` is also declared here."""
        pairs = (
            (self.public_modules, other.public_modules),
            (self.private_modules, other.private_modules),
            (self.private_include_path_modules, other.private_include_path_modules),
            (self.public_include_paths, other.public_include_paths),
            (self.private_include_paths, other.private_include_paths),
        )
        return all(set(theirs) <= set(ours) for ours, theirs in pairs)


class DependencySetBuilder:
    """Builds the DependencySet of a module from its rules."""

    def __init__(self, prober: Optional[PathProber] = None):
        self.prober = prober if prober is not None else FileSystemProber()

    def build(self, context: BuildContext, rules: ModuleRulesModel) -> DependencySet:
        """
        Build the dependency set for ``rules`` under ``context``.

        Args:
            context: Build context of this resolution pass
            rules: Module rules to apply

        Returns:
            DependencySet with stable ordering
        """
        root = context.module_root
        # dicts keep insertion order and drop repeated keys
        public_modules: dict[str, None] = {}
        private_modules: dict[str, None] = {}
        include_path_modules: dict[str, None] = {}
        public_paths: dict[Path, None] = {}
        private_paths: dict[Path, None] = {}

        # Public
        public_modules.update(dict.fromkeys(rules.public_dependencies))
        if self.prober.is_dir(root, rules.public_include_dir):
            public_paths[join(root, rules.public_include_dir)] = None

        # Private
        private_modules.update(dict.fromkeys(rules.private_dependencies))
        has_private_dir = self.prober.is_dir(root, rules.private_include_dir)
        if has_private_dir and (context.is_editor_build or not rules.private_include_dir_editor_only):
            private_paths[join(root, rules.private_include_dir)] = None

        # Editor
        if context.is_editor_build:
            include_path_modules.update(dict.fromkeys(rules.editor.private_include_path_modules))
            private_modules.update(dict.fromkeys(rules.editor.private_dependencies))
            if has_private_dir:
                for relative in rules.editor.private_include_dirs:
                    private_paths[join(root, relative)] = None

        dependency_set = DependencySet(
            public_modules=tuple(public_modules),
            private_modules=tuple(private_modules),
            private_include_path_modules=tuple(include_path_modules),
            public_include_paths=tuple(public_paths),
            private_include_paths=tuple(private_paths),
        )
        logger.debug(
            f"{rules.name}: {len(dependency_set.public_modules)} public / "
            f"{len(dependency_set.private_modules)} private modules, "
            f"{len(dependency_set.public_include_paths)} public / "
            f"{len(dependency_set.private_include_paths)} private include paths"
        )
        return dependency_set
