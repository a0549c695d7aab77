"""
Locating external executables.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path


def find_tool(name: str, env_var: str | None = None) -> str:
    """Resolve the executable to run for ``name``.

    Lookup order: the ``env_var`` override, the active virtualenv's
    script directory, then PATH. Falls back to the bare name so the
    caller's subprocess call reports the missing tool.
    """
    if env_var:
        override = os.environ.get(env_var)
        if override:
            return override

    scripts = "Scripts" if sys.platform == "win32" else "bin"
    exe = f"{name}.exe" if sys.platform == "win32" else name
    candidate = Path(sys.prefix) / scripts / exe
    if candidate.exists():
        return str(candidate)

    return shutil.which(name) or name
