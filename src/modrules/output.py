"""
Centralized user-facing output for modrules.

All output is prefixed with elapsed time since program launch in MM:SS.cc
format (minutes:seconds.centiseconds), so a resolution pass can be audited
from the console.

Example output:
    00:00.01 modrules v0.3.0
    00:00.02 Resolving module: NDIIO (Win64, editor)
    00:00.02 [1/3] Building dependency set...
    00:00.03       Public include: D:\\Plugins\\NDIIOPlugin\\Source\\Core\\Public
    00:00.03 [2/3] Resolving third-party SDK...

Usage:
    from modrules.output import log, log_phase, log_detail, set_verbose

    set_verbose(True)
    log_phase(1, 3, "Building dependency set...", verbose_only=True)
    log_detail("Public include: ...", verbose_only=True)

Library code logs diagnostics through the ``logging`` module; this module is
only for the progress lines a user asked to see.
"""

import sys
import time
from types import TracebackType
from typing import Iterable, Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = False


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the program timer.

    Call this at program startup to set the reference time for all timestamps.
    If not called explicitly, it will be called automatically on first log.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, verbose-only messages are printed as well.
    """
    global _verbose
    _verbose = verbose


def get_elapsed() -> float:
    """Elapsed seconds since timer initialization."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """
    Format the current elapsed time as MM:SS.cc.

    Returns:
        Formatted timestamp string
    """
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    # Resolve sys.stdout lazily so pytest's capture replacement is honoured
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(f"{format_timestamp()} {message}\n")
    stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """
    Log a resolution phase message.

    Format: [N/M] message
    """
    if verbose_only and not _verbose:
        return
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log a detail message (indented).

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_details(label: str, values: Iterable[object], verbose_only: bool = False) -> None:
    """Log one indented ``label: value`` line per value."""
    for value in values:
        log_detail(f"{label}: {value}", verbose_only=verbose_only)


def log_header(title: str, version: str) -> None:
    """Log the program header (e.g. ``modrules v0.3.0``)."""
    _print(f"{title} v{version}")


class TimedLogger:
    """
    Context manager for logging with elapsed time tracking.

    Usage:
        with TimedLogger("Resolving third-party SDK", phase=(2, 3)) as timed:
            timed.detail("SDK root: ...")
        # Automatically logs completion time
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        if self.phase:
            log_phase(self.phase[0], self.phase[1], f"{self.operation}...", self.verbose_only)
        else:
            log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        elapsed = time.time() - self.start_time
        if exc_type is None:
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=self.verbose_only)
        return None

    def detail(self, message: str) -> None:
        """Log a detail message within this operation."""
        log_detail(message, verbose_only=self.verbose_only)
