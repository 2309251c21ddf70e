"""Module Resolver - one resolution pass from context to configuration.

Runs the Dependency Set Builder and the Third-Party Linkage Resolver over the
same BuildContext and PathProber, then merges their outputs. Nothing is kept
between passes: the filesystem and environment may change from one build to
the next.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional

from ..module_configs import ModuleRulesModel, load_rules
from ..output import TimedLogger, log, log_details
from .build_context import BuildContext, TargetPlatform
from .dependency_set import DependencySetBuilder
from .module_configuration import ModuleConfiguration, merge
from .path_prober import FileSystemProber, PathProber
from .third_party import ThirdPartyLinkageResolver

logger = logging.getLogger(__name__)

TOTAL_PHASES = 3


class ModuleResolver:
    """Resolves ModuleConfiguration for a module's rules.

    Example usage:
        resolver = ModuleResolver()
        context = BuildContext.create(TargetPlatform.WIN64, False, Path("Source/Core"))
        config = resolver.resolve(context, load_rules("NDIIO"))
    """

    def __init__(self, prober: Optional[PathProber] = None):
        self.prober = prober if prober is not None else FileSystemProber()
        self.dependency_builder = DependencySetBuilder(self.prober)
        self.linkage_resolver = ThirdPartyLinkageResolver(self.prober)

    def resolve(self, context: BuildContext, rules: ModuleRulesModel) -> ModuleConfiguration:
        flavor = "editor" if context.is_editor_build else "runtime"
        log(f"Resolving module: {rules.name} ({context.platform}, {flavor})", verbose_only=True)
        logger.debug(f"Resolving {rules.name} in {context.module_root}")

        with TimedLogger("Building dependency set", phase=(1, TOTAL_PHASES), verbose_only=True) as timed:
            dependency_set = self.dependency_builder.build(context, rules)
            log_details("Public include", dependency_set.public_include_paths, verbose_only=True)
            log_details("Private include", dependency_set.private_include_paths, verbose_only=True)
            timed.detail(f"{len(dependency_set.public_modules)} public, {len(dependency_set.private_modules)} private modules")

        with TimedLogger("Resolving third-party SDK", phase=(2, TOTAL_PHASES), verbose_only=True) as timed:
            linkage = self.linkage_resolver.resolve(context, rules.third_party)
            if rules.third_party is None:
                timed.detail("No third-party SDK")
            else:
                timed.detail(f"{rules.third_party.name} SDK: {'enabled' if linkage.available else 'not available'}")
                if linkage.sdk_include_path is not None:
                    timed.detail(f"SDK include: {linkage.sdk_include_path}")

        with TimedLogger("Merging module configuration", phase=(3, TOTAL_PHASES), verbose_only=True):
            return merge(dependency_set, linkage, context, rules)


def resolve_module(
    module_name: str,
    platform: TargetPlatform,
    is_editor_build: bool,
    module_root: Path,
    environment: Optional[Mapping[str, str]] = None,
    prober: Optional[PathProber] = None,
) -> ModuleConfiguration:
    """Load rules for ``module_name`` and resolve them in a fresh context.

    Raises:
        ModuleRulesNotFoundError: If no rules exist for module_name
    """
    rules = load_rules(module_name)
    context = BuildContext.create(
        platform=platform,
        is_editor_build=is_editor_build,
        module_root=module_root,
        environment=environment,
    )
    return ModuleResolver(prober).resolve(context, rules)
