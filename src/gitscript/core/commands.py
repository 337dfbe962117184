"""Command functionality for gitscript."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .dispatcher import FetchDispatcher
from .repository import FetchOutcome
from .walker import TraversalError, is_git_repo, walk

logger = logging.getLogger(__name__)


def find_repositories(root: str, junk_names: Optional[Iterable[str]] = None) -> List[str]:
    """Find Git working directories under ``root``.

    Nested repositories are reported as well as their parents.

    Raises:
        TraversalError: If the walk fails for a reason other than permissions.
    """
    try:
        return [
            entry.path
            for entry in walk(root, junk_names)
            if entry.is_dir and is_git_repo(entry.path)
        ]
    except TraversalError as e:
        logger.critical("Error walking the path %r: %s", root, e)
        raise


def fetch_repositories(
    root: str,
    junk_names: Optional[Iterable[str]] = None,
    dispatcher: Optional[FetchDispatcher] = None,
) -> List[FetchOutcome]:
    """Fetch every Git repository under ``root`` concurrently.

    Repositories are dispatched as soon as the walk finds them. Fetches that
    were already started are always waited for, whatever ends the walk.

    Args:
        root: Directory to scan.
        junk_names: Entry names to ignore during the walk.
        dispatcher: Dispatcher to use; a fresh one is created if omitted.

    Returns:
        One FetchOutcome per repository found.

    Raises:
        TraversalError: If the walk fails for a reason other than permissions.
    """
    if dispatcher is None:
        dispatcher = FetchDispatcher()

    try:
        for entry in walk(root, junk_names):
            if entry.is_dir and is_git_repo(entry.path):
                logger.debug("Found git repository at %s", entry.path)
                dispatcher.dispatch(entry.path)
    except TraversalError as e:
        logger.critical("Error walking the path %r: %s", root, e)
        raise
    finally:
        outcomes = dispatcher.wait()

    logger.debug(
        "Fetched %d repositories (%d failed)",
        len(outcomes),
        sum(1 for o in outcomes if not o.success),
    )
    return outcomes
