"""Environment snapshot for a resolution pass.

A resolution pass never reads ``os.environ`` directly. The environment is
copied once into an immutable mapping when the BuildContext is created, so
every lookup during the pass sees the same values and tests can substitute
a plain dict instead of mutating the real process environment.

On Windows, environment variable names are case-insensitive; the snapshot
upper-cases keys there and lookups do the same.
"""

import os
import sys
from types import MappingProxyType
from typing import Mapping, Optional


def _case_insensitive() -> bool:
    return sys.platform == "win32"


def snapshot_environment(environ: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Return a read-only copy of ``environ`` (defaults to os.environ).

    On Windows the keys are upper-cased so lookups match the way the OS
    resolves variable names.
    """
    source = os.environ if environ is None else environ
    if _case_insensitive():
        env = {k.upper(): v for k, v in source.items()}
    else:
        env = dict(source)
    return MappingProxyType(env)


def lookup(environment: Mapping[str, str], name: str) -> Optional[str]:
    """Look up ``name`` in a snapshot.

    Returns None when the variable is unset or set to an empty string; both
    mean "not configured" to the resolver.
    """
    key = name.upper() if _case_insensitive() else name
    value = environment.get(key)
    if not value:
        return None
    return value
