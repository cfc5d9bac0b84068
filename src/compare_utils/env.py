"""
Environment loading helpers.

Settings are read from:
- Existing environment variables
- .env.local or .env files in the working directory (if present)

Values already set in the environment always win over the files.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_loaded = False


def load_env_files(root: Optional[Path] = None, force: bool = False) -> None:
    """Load .env.local then .env from ``root`` (default: cwd), once per process."""
    global _loaded
    if _loaded and not force:
        return
    root = root or Path.cwd()
    for fname in (".env.local", ".env"):
        fpath = root / fname
        if fpath.exists():
            load_dotenv(dotenv_path=str(fpath), override=False)
    _loaded = True


def env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else default


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
