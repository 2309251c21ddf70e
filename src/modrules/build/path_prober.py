"""Filesystem existence checks used during resolution.

Absence is an expected outcome here, not a failure: every query answers
True/False and never raises for missing or inaccessible paths. Nothing is
cached, since an SDK can be installed or removed between two builds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single existence check."""

    path: Path
    exists: bool


class PathProber(Protocol):
    """Read-only existence queries relative to a root directory."""

    def exists(self, root: PathLike, *segments: PathLike) -> bool: ...

    def is_dir(self, root: PathLike, *segments: PathLike) -> bool: ...

    def is_file(self, root: PathLike, *segments: PathLike) -> bool: ...

    def probe(self, root: PathLike, *segments: PathLike) -> ProbeResult: ...

def join(root: PathLike, *segments: PathLike) -> Path:
    """Join segments onto root, accepting either slash style in segments."""
    path = Path(root)
    for segment in segments:
        for part in str(segment).replace("\\", "/").split("/"):
            if part:
                path = path / part
    return path


class FileSystemProber:
    """PathProber backed by the real filesystem."""

    def _check(self, kind: str, path: Path) -> bool:
        try:
            if kind == "dir":
                found = path.is_dir()
            elif kind == "file":
                found = path.is_file()
            else:
                found = path.exists()
        except (OSError, ValueError) as e:
            logger.debug(f"Probe {kind} {path} failed: {e}")
            return False
        logger.debug(f"Probe {kind} {path}: {'found' if found else 'missing'}")
        return found

    def exists(self, root: PathLike, *segments: PathLike) -> bool:
        return self._check("any", join(root, *segments))

    def is_dir(self, root: PathLike, *segments: PathLike) -> bool:
        return self._check("dir", join(root, *segments))

    def is_file(self, root: PathLike, *segments: PathLike) -> bool:
        return self._check("file", join(root, *segments))

    def probe(self, root: PathLike, *segments: PathLike) -> ProbeResult:
        path = join(root, *segments)
        return ProbeResult(path=path, exists=self._check("any", path))


def probe_dir(prober: PathProber, root: PathLike, *segments: PathLike) -> ProbeResult:
    """Directory probe through any PathProber implementation."""
    return ProbeResult(path=join(root, *segments), exists=prober.is_dir(root, *segments))


def probe_file(prober: PathProber, root: PathLike, *segments: PathLike) -> ProbeResult:
    """File probe through any PathProber implementation."""
    return ProbeResult(path=join(root, *segments), exists=prober.is_file(root, *segments))
