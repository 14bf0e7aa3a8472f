"""
PowerShell invocation helper shared by the Windows adapters.
"""

import logging
import platform
import subprocess  # nosec B404
from typing import Optional

logger = logging.getLogger(__name__)

# Output is read back as UTF-8 whatever the console code page is
UTF8_PREAMBLE = "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "


def run_powershell(
    script: str, timeout: int = 60
) -> Optional[subprocess.CompletedProcess]:
    """
    Run a PowerShell script block and return the completed process.

    Returns None when PowerShell is unavailable or the script timed out, so
    callers can treat it the same as a failed query.
    """
    try:
        return subprocess.run(  # nosec B603, B607
            [
                "powershell",
                "-NoProfile",
                "-NonInteractive",
                "-Command",
                UTF8_PREAMBLE + script,
            ],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
            creationflags=(
                subprocess.CREATE_NO_WINDOW if platform.system() == "Windows" else 0
            ),
        )
    except subprocess.TimeoutExpired:
        logger.warning("PowerShell command timed out after %d seconds", timeout)
    except (FileNotFoundError, OSError) as error:
        logger.warning("Unable to run PowerShell: %s", error)
    return None


def quote(value: str) -> str:
    """Quote a value as a single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"
