"""Module rules loader.

This module provides access to the JSON rules files describing each plugin
module (dependency modules, include directories, editor additions and the
optional third-party SDK). Uses importlib.resources for proper package data
access when installed as a wheel.

Rules are organized by vendor:
    ndi/      - NDI IO plugin (NDIIO runtime module, NDIIOEditor companion)

The manifest.json file contains metadata about all available rules.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

from .module_rules_model import EditorRules, ModuleRulesModel, SdkPlatformRules, ThirdPartySdkRules

__all__ = [
    "EditorRules",
    "ModuleRulesModel",
    "ModuleRulesNotFoundError",
    "SdkPlatformRules",
    "ThirdPartySdkRules",
    "list_available_rules",
    "load_manifest",
    "load_raw_rules",
    "load_rules",
]

# Vendor directories to search
VENDOR_DIRS = ["ndi"]


class ModuleRulesNotFoundError(LookupError):
    """Raised when no rules file exists for a module name."""


def load_manifest() -> dict[str, Any] | None:
    """Load the module rules manifest.

    Returns:
        The manifest dictionary if found, None otherwise.
    """
    try:
        manifest_file = resources.files(__package__).joinpath("manifest.json")
        if manifest_file.is_file():
            with manifest_file.open("r", encoding="utf-8") as f:
                return json.load(f)
    except (FileNotFoundError, TypeError):
        pass

    return None


def load_raw_rules(module_name: str) -> dict[str, Any] | None:
    """Load the raw rules dictionary for a module.

    Searches all vendor subdirectories for ``<module_name>.json``.

    Returns:
        The rules dictionary if found, None otherwise.
    """
    if not module_name:
        return None

    rules_name = f"{module_name}.json"
    pkg_files = resources.files(__package__)

    for vendor in VENDOR_DIRS:
        try:
            rules_file = pkg_files.joinpath(vendor).joinpath(rules_name)
            if rules_file.is_file():
                with rules_file.open("r", encoding="utf-8") as f:
                    return json.load(f)
        except (FileNotFoundError, TypeError, AttributeError):
            continue

    return None


def load_rules(module_name: str) -> ModuleRulesModel:
    """Load and parse the rules for a module.

    Raises:
        ModuleRulesNotFoundError: If no rules file exists for the module
        ValueError: If the rules file is malformed
    """
    data = load_raw_rules(module_name)
    if data is None:
        available = ", ".join(list_available_rules()) or "none"
        raise ModuleRulesNotFoundError(f"No module rules for '{module_name}' (available: {available})")
    return ModuleRulesModel.from_dict(data)


def list_available_rules() -> list[str]:
    """List all module names that have a rules file, sorted."""
    names = []
    pkg_files = resources.files(__package__)

    for vendor in VENDOR_DIRS:
        try:
            for f in pkg_files.joinpath(vendor).iterdir():
                if f.name.endswith(".json") and f.is_file():
                    names.append(f.name[:-5])  # Remove .json extension
        except (TypeError, AttributeError, FileNotFoundError):
            continue

    return sorted(names)
