"""
Command-line interface for modrules.

This module provides the `modrules` CLI tool for inspecting how a plugin
module resolves for a given platform and build flavor.
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from modrules import __version__
from modrules.build import ModuleConfiguration, TargetPlatform, resolve_module
from modrules.module_configs import list_available_rules, load_manifest
from modrules.output import init_timer, log_header, set_verbose

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ResolveArgs:
    """Arguments for the resolve command."""

    module_root: Path
    module: str = "NDIIO"
    platform: str = "Win64"
    editor: bool = False
    as_json: bool = False
    verbose: bool = False


_log_handler: Optional[logging.Handler] = None


def setup_logging(verbose: bool) -> None:
    """Send modrules logging to stderr; DEBUG when verbose, WARNING otherwise.

    Repeated calls replace the handler installed by the previous call, so an
    in-process caller running main() several times gets each line once.
    """
    global _log_handler
    logger = logging.getLogger("modrules")
    if _log_handler is not None:
        logger.removeHandler(_log_handler)

    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(_log_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _error(message: str) -> None:
    print(f"\033[1;31m✗ Error: {message}\033[0m")


def render_configuration(config: ModuleConfiguration, console: Console) -> None:
    """Print a configuration as a two-column rich table."""
    flavor = "editor" if config.is_editor_build else "runtime"
    table = Table(title=f"{config.module_name} ({config.platform}, {flavor})", show_lines=False)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    for key, value in config.to_dict().items():
        if key in ("module_name", "platform", "is_editor_build"):
            continue
        if isinstance(value, list):
            text = "\n".join(value) if value else "-"
        else:
            text = str(value)
        table.add_row(key, text)

    console.print(table)


def resolve_command(args: ResolveArgs) -> None:
    """Resolve and print the configuration of a module.

    Examples:
        modrules resolve Plugins/NDIIOPlugin/Source/Core
        modrules resolve . -m NDIIOEditor --editor
        modrules resolve . -p Linux --json
    """
    try:
        platform = TargetPlatform.parse(args.platform)
        config = resolve_module(
            module_name=args.module,
            platform=platform,
            is_editor_build=args.editor,
            module_root=args.module_root,
        )
    except (ValueError, LookupError) as e:
        _error(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        print()
        print("\033[1;33m✗ Resolution interrupted\033[0m")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        print()
        print("\033[1;31m✗ Unexpected error\033[0m")
        print(f"{type(e).__name__}: {e}")
        if args.verbose:
            import traceback

            print()
            print("Traceback:")
            print(traceback.format_exc())
        sys.exit(1)

    if args.as_json:
        print(json.dumps(config.to_dict(), indent=2))
    else:
        render_configuration(config, Console())
    sys.exit(0)


def list_command() -> None:
    """List module names that have rules."""
    manifest = load_manifest() or {}
    if manifest.get("description"):
        print(manifest["description"])
    for name in list_available_rules():
        print(f"  {name}")
    sys.exit(0)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """modrules - resolve module dependencies and optional SDK linkage."""
    parser = argparse.ArgumentParser(
        prog="modrules",
        description="Resolve plugin module dependencies and optional SDK linkage",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"modrules {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve the configuration of a module",
    )
    resolve_parser.add_argument(
        "module_root",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Module directory (default: current directory)",
    )
    resolve_parser.add_argument(
        "-m",
        "--module",
        default="NDIIO",
        help="Module rules to apply (default: NDIIO)",
    )
    resolve_parser.add_argument(
        "-p",
        "--platform",
        default="Win64",
        help="Target platform (default: Win64)",
    )
    resolve_parser.add_argument(
        "--editor",
        action="store_true",
        help="Resolve the editor build flavor",
    )
    resolve_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the configuration as JSON",
    )
    resolve_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show resolution phases and probe details",
    )

    subparsers.add_parser(
        "list",
        help="List modules with available rules",
    )

    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    if parsed_args.command == "list":
        list_command()

    if not parsed_args.module_root.is_dir():
        _error(f"Path is not a directory: {parsed_args.module_root}")
        sys.exit(2)

    args = ResolveArgs(
        module_root=parsed_args.module_root,
        module=parsed_args.module,
        platform=parsed_args.platform,
        editor=parsed_args.editor,
        as_json=parsed_args.as_json,
        verbose=parsed_args.verbose,
    )

    if args.verbose and not args.as_json:
        setup_logging(verbose=True)
        set_verbose(True)
        init_timer(sys.stderr)
        log_header("modrules", __version__)

    resolve_command(args)


if __name__ == "__main__":
    main()
