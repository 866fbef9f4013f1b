"""Centralized log path management for coursefork."""

from pathlib import Path

import platformdirs


def get_log_dir() -> Path:
    """Get the system-appropriate log directory for coursefork.

    Returns:
        Path to the log directory (created if it doesn't exist)
        - Windows: %LOCALAPPDATA%/coursefork/Logs
        - macOS: ~/Library/Logs/coursefork
        - Linux: ~/.local/state/coursefork/log
    """
    log_dir = Path(platformdirs.user_log_dir("coursefork", appauthor=False))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_main_log_path() -> Path:
    return get_log_dir() / "coursefork.log"
