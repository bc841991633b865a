"""Hardlink creation for planned links.

Creating a link is idempotent: an existing target is reported, never
replaced. Failures are logged and reported per link so one bad file never
stops the rest of a run. Handles Windows long paths and dry runs.
"""

import errno
import logging
import os
import sys
from pathlib import Path

from linkgnome.models.core import Link, LinkStatus

logger = logging.getLogger(__name__)

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths
DIR_MODE = 0o755


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def create_link(link: Link, *, dry_run: bool = False) -> LinkStatus:
    """Hardlink ``link.source`` to ``link.target``.

    Missing parent directories of the target are created first.

    Args:
        link: The planned link.
        dry_run: If True, only report what would be done.

    Returns:
        EXISTS if the target is already present, PLANNED on a dry run,
        CREATED on success and FAILED if any filesystem call failed.

    Example:
        >>> from pathlib import Path
        >>> src = Path('a.mkv')
        >>> src.write_text('x')
        >>> create_link(Link(source=src, target=Path('lib/a.mkv')))
        <LinkStatus.CREATED: 'created'>
        >>> create_link(Link(source=src, target=Path('lib/a.mkv')))
        <LinkStatus.EXISTS: 'exists'>
    """
    if os.path.lexists(link.target):
        logger.info("link exists: %s", link.target)
        return LinkStatus.EXISTS
    if dry_run:
        logger.info("[dry run] would link %s -> %s", link.source, link.target)
        return LinkStatus.PLANNED

    try:
        link.target.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        logger.error("cannot create directory %s: %s", link.target.parent, e)
        return LinkStatus.FAILED

    try:
        os.link(_win_long_path(link.source), _win_long_path(link.target))
    except FileExistsError:
        # Created by someone else since the existence check.
        return LinkStatus.EXISTS
    except OSError as e:
        if e.errno == errno.EXDEV:
            logger.error(
                "cannot link %s -> %s: source and target are on different filesystems",
                link.source,
                link.target,
            )
        else:
            logger.error("cannot link %s -> %s: %s", link.source, link.target, e)
        return LinkStatus.FAILED
    logger.debug("linked %s -> %s", link.source, link.target)
    return LinkStatus.CREATED
