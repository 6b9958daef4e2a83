"""Filesystem path helpers for textseq."""
from __future__ import annotations

import sys
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "TextSeq"
_LINUX_APP_NAME = "textseq"


def runtime_config_dir() -> Path:
    """Return the per-user configuration directory."""
    if sys.platform in {"win32", "darwin"}:
        dirs = PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    else:
        dirs = PlatformDirs(appname=_LINUX_APP_NAME, appauthor=None, roaming=False)
    return Path(dirs.user_config_path)


def default_config_path() -> Path:
    return runtime_config_dir() / "config.yaml"


def local_config_path() -> Path:
    return Path.cwd() / ".textseq" / "config.yaml"
