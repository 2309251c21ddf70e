"""Resolution pipeline: context, probes, dependency sets, SDK linkage."""

from .build_context import BuildContext, TargetPlatform
from .dependency_set import DependencySet, DependencySetBuilder
from .module_configuration import ModuleConfiguration, merge
from .module_resolver import ModuleResolver, resolve_module
from .path_prober import FileSystemProber, PathProber, ProbeResult
from .third_party import ThirdPartyLinkage, ThirdPartyLinkageResolver

__all__ = [
    "BuildContext",
    "DependencySet",
    "DependencySetBuilder",
    "FileSystemProber",
    "ModuleConfiguration",
    "ModuleResolver",
    "PathProber",
    "ProbeResult",
    "TargetPlatform",
    "ThirdPartyLinkage",
    "ThirdPartyLinkageResolver",
    "merge",
    "resolve_module",
]
