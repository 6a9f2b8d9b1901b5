from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _package_version() -> str:
    try:
        return importlib.metadata.version("bufed")
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _git_commit() -> Optional[str]:
    # Only meaningful when running from a source checkout
    here = Path(__file__).resolve().parent
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(here),
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    commit = _git_commit()
    version = _package_version()
    return f"bufed {version} ({commit})" if commit else f"bufed {version}"
