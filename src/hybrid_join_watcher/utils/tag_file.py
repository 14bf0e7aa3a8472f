"""
Tag file support.

Deployment tooling detects that the watcher has been installed by the
presence of a tag file, so it is written once at the start of every run.
"""

import logging
import os

from src.i18n import _

logger = logging.getLogger(__name__)

TAG_CONTENT = "Installed"


def write_tag_file(path: str) -> bool:
    """Create the tag file and its parent directory. Returns False on failure."""
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as tag:
            tag.write(TAG_CONTENT)
    except OSError as error:
        logger.error(_("Unable to write tag file %s: %s"), path, error)
        return False

    logger.debug("Tag file written to %s", path)
    return True
