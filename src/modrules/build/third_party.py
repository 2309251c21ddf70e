"""Third-Party Linkage Resolver.

Decides whether an optional native SDK is usable for a build and, if so,
which libraries, delay-loaded DLLs, runtime search paths and feature define
to emit.

Pipeline:
    1. Platform check - platforms missing from the SDK rules short-circuit
    2. Runtime root - read from the SDK's environment variable; unset or
       empty means the whole SDK is unavailable
    3. Probes - headers dir, library dir, runtime dir and each static
       library file are all probed before any decision is made
    4. Gate - library dir, runtime dir and every library file must exist;
       otherwise nothing link-related is emitted

The SDK header directory is registered whenever it exists, independently of
the gate: headers can be present while libraries are not, and dependents
must be able to see that difference.

There is no failure path. Every negative outcome degrades to "SDK absent" so
building without the SDK always works.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..module_configs import ThirdPartySdkRules
from .build_context import BuildContext
from .path_prober import FileSystemProber, PathProber, ProbeResult, join, probe_dir, probe_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThirdPartyLinkage:
    """Link-time contribution of an optional SDK.

    When ``available`` is False, the library, delay-load, runtime path and
    define collections are always empty. ``sdk_include_path`` is exempt: it
    follows the headers directory alone.
    """

    available: bool = False
    sdk_include_path: Optional[Path] = None
    static_libraries: tuple[Path, ...] = ()
    delay_loaded_libraries: tuple[str, ...] = ()
    runtime_search_paths: tuple[Path, ...] = ()
    feature_defines: tuple[str, ...] = ()

    @classmethod
    def unavailable(cls, sdk_include_path: Optional[Path] = None) -> "ThirdPartyLinkage":
        return cls(available=False, sdk_include_path=sdk_include_path)


@dataclass(frozen=True)
class SdkProbes:
    """All filesystem probes for one SDK, reconciled before the gate."""

    sdk_root: Path
    includes: ProbeResult
    library_dir: ProbeResult
    runtime_root: ProbeResult
    static_libraries: tuple[ProbeResult, ...]

    @property
    def gate_open(self) -> bool:
        return self.library_dir.exists and self.runtime_root.exists and all(lib.exists for lib in self.static_libraries)

    def missing(self) -> list[Path]:
        """Paths that keep the gate closed."""
        checks = [self.library_dir, self.runtime_root, *self.static_libraries]
        return [probe.path for probe in checks if not probe.exists]


def full_path(path: Path) -> Path:
    """Absolute, normalized path without resolving symlinks."""
    return Path(os.path.abspath(path))


class ThirdPartyLinkageResolver:
    """Resolves the ThirdPartyLinkage of a module's optional SDK."""

    def __init__(self, prober: Optional[PathProber] = None):
        self.prober = prober if prober is not None else FileSystemProber()

    def probe(self, sdk_root: Path, runtime_root: Path, library_dir: str, static_libraries: tuple[str, ...], includes_dir: str) -> SdkProbes:
        """Run every probe the gate depends on."""
        return SdkProbes(
            sdk_root=sdk_root,
            includes=probe_dir(self.prober, sdk_root, includes_dir),
            library_dir=probe_dir(self.prober, sdk_root, library_dir),
            runtime_root=probe_dir(self.prober, runtime_root),
            static_libraries=tuple(probe_file(self.prober, sdk_root, library_dir, name) for name in static_libraries),
        )

    def resolve(self, context: BuildContext, sdk: Optional[ThirdPartySdkRules]) -> ThirdPartyLinkage:
        """
        Resolve SDK linkage for a build context.

        Args:
            context: Build context of this resolution pass
            sdk: SDK rules of the module, or None if it has no SDK

        Returns:
            ThirdPartyLinkage; never raises for missing SDK pieces
        """
        if sdk is None:
            return ThirdPartyLinkage.unavailable()

        platform_rules = sdk.for_platform(context.platform.value)
        if platform_rules is None:
            logger.info(f"{sdk.name} SDK not supported on {context.platform}, building without it")
            return ThirdPartyLinkage.unavailable()

        runtime_value = context.get_env(sdk.runtime_env_var)
        if runtime_value is None:
            logger.info(f"{sdk.runtime_env_var} is not set, building without the {sdk.name} SDK")
            return ThirdPartyLinkage.unavailable()

        sdk_root = full_path(join(context.module_root, sdk.sdk_dir))
        runtime_root = full_path(Path(runtime_value))
        probes = self.probe(
            sdk_root=sdk_root,
            runtime_root=runtime_root,
            library_dir=platform_rules.library_dir,
            static_libraries=platform_rules.static_libraries,
            includes_dir=sdk.includes_dir,
        )

        sdk_include_path = probes.includes.path if probes.includes.exists else None

        if not probes.gate_open:
            missing = ", ".join(str(p) for p in probes.missing())
            logger.info(f"{sdk.name} SDK incomplete (missing: {missing}), building without it")
            return ThirdPartyLinkage.unavailable(sdk_include_path=sdk_include_path)

        logger.info(f"{sdk.name} SDK enabled (runtime: {runtime_root})")
        return ThirdPartyLinkage(
            available=True,
            sdk_include_path=sdk_include_path,
            static_libraries=tuple(lib.path for lib in probes.static_libraries),
            delay_loaded_libraries=platform_rules.delay_load_libraries,
            runtime_search_paths=(runtime_root,),
            feature_defines=(sdk.feature_define,),
        )
