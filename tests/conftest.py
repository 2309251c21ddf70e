"""Pytest configuration and fixtures for modrules tests.

Filesystem fixtures lay out a plugin module the way the host expects it:

    <tmp>/Source/Core/Public
    <tmp>/Source/Core/Private
    <tmp>/Source/Core/ThirdParty/NDI/Includes
    <tmp>/Source/Core/ThirdParty/NDI/Libraries/Win64/Processing.NDI.Lib.x64.lib
    <tmp>/runtime                                   (NDI_RUNTIME_DIR_V4)
"""

import pytest

from modrules import output
from modrules.module_configs import load_rules
from sdk_layout import RUNTIME_VAR


@pytest.fixture(autouse=True)
def _quiet_output(monkeypatch):
    """Keep the global output state from leaking between tests."""
    monkeypatch.setattr(output, "_output_stream", None)
    output.set_verbose(False)
    yield
    output.set_verbose(False)


@pytest.fixture
def ndi_rules():
    return load_rules("NDIIO")


@pytest.fixture
def editor_rules():
    return load_rules("NDIIOEditor")


@pytest.fixture
def module_root(tmp_path):
    """Core module directory with Public and Private folders."""
    root = tmp_path / "Source" / "Core"
    (root / "Public").mkdir(parents=True)
    (root / "Private").mkdir()
    return root


@pytest.fixture
def runtime_dir(tmp_path):
    path = tmp_path / "runtime"
    path.mkdir()
    return path


@pytest.fixture
def sdk_env(runtime_dir):
    """Environment with the runtime variable pointing at an existing directory."""
    return {RUNTIME_VAR: str(runtime_dir), "PATH": "/usr/bin"}
