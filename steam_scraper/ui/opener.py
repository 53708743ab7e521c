from __future__ import annotations

import logging
import os
import subprocess
import sys

logger = logging.getLogger(__name__)


def open_path(path: str) -> bool:
    """
    Hand a file to the platform's default application without waiting for it.
    Returns False when the file is missing or no launcher could be started.
    """
    if not os.path.exists(path):
        logger.warning("Cannot open %s: file does not exist", path)
        return False
    try:
        if sys.platform.startswith("win"):
            os.startfile(path)  # type: ignore[attr-defined]
        elif sys.platform == "darwin":
            subprocess.Popen(["open", path])
        else:
            subprocess.Popen(["xdg-open", path], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as exc:
        logger.warning("Error opening file %s: %r", path, exc)
        return False
    return True
