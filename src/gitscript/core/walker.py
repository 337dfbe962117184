"""Directory traversal for gitscript.

This module walks a filesystem tree depth-first and yields every entry it
visits, so callers can decide which directories are Git working trees.
Junk entries (filesystem metadata artifacts such as ``.DS_Store``) are
dropped before they are yielded or descended into.

Example:
    ```python
    from gitscript.core.walker import is_git_repo, walk

    for entry in walk("~/source"):
        if entry.is_dir and is_git_repo(entry.path):
            print(entry.path)
    ```
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_JUNK_FILES = (".DS_Store", "._DS_Store")


class TraversalError(RuntimeError):
    """Raised when the walk hits an error other than a permission error."""

    def __init__(self, path: str, error: OSError):
        super().__init__(f"{path}: {error}")
        self.path = path
        self.error = error


@dataclass(frozen=True)
class FileSystemEntry:
    """A single node visited by :func:`walk`."""

    path: str
    name: str
    is_dir: bool


def is_junk(name: str, junk_names: Iterable[str] = DEFAULT_JUNK_FILES) -> bool:
    """Check if a file name is in the junk set (case-insensitive)."""
    folded = name.casefold()
    return any(folded == junk.casefold() for junk in junk_names)


def is_git_repo(path: str) -> bool:
    """Check if a directory contains an entry named ``.git``.

    Only existence is checked: ``.git`` may be a directory, a file (worktrees
    and submodules) or even a dangling link.
    """
    return os.path.lexists(os.path.join(path, ".git"))


def walk(root: str, junk_names: Optional[Iterable[str]] = None) -> Iterator[FileSystemEntry]:
    """Walk the tree rooted at ``root`` depth-first.

    Each directory is yielded before its children, and children are visited
    in name order. The root is resolved through symlinks; links below it are
    reported as plain entries and never followed.

    Args:
        root: Directory to start from. The root itself is the first entry.
        junk_names: Names to skip entirely. Defaults to ``DEFAULT_JUNK_FILES``.

    Yields:
        FileSystemEntry for every reachable, non-junk node.

    Raises:
        TraversalError: On any ``OSError`` except ``PermissionError``.
            Permission errors are logged and the affected subtree is skipped.
    """
    junk = tuple(DEFAULT_JUNK_FILES if junk_names is None else junk_names)
    root = os.fspath(root)

    try:
        st = os.stat(root)
    except PermissionError as e:
        logger.warning("Skipping %s: %s", root, e)
        return
    except OSError as e:
        raise TraversalError(root, e) from e

    name = os.path.basename(os.path.normpath(root)) or root
    if is_junk(name, junk):
        return

    is_dir = stat.S_ISDIR(st.st_mode)
    yield FileSystemEntry(path=root, name=name, is_dir=is_dir)
    if is_dir:
        yield from _walk_children(root, junk)


def _walk_children(top: str, junk: Tuple[str, ...]) -> Iterator[FileSystemEntry]:
    """Yield the entries below ``top``, recursing into real directories."""
    try:
        with os.scandir(top) as it:
            children = sorted(it, key=lambda e: e.name)
    except PermissionError as e:
        logger.warning("Skipping %s: %s", top, e)
        return
    except OSError as e:
        raise TraversalError(top, e) from e

    for child in children:
        if is_junk(child.name, junk):
            continue

        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except PermissionError as e:
            logger.warning("Skipping %s: %s", child.path, e)
            continue
        except OSError as e:
            raise TraversalError(child.path, e) from e

        yield FileSystemEntry(path=child.path, name=child.name, is_dir=is_dir)
        if is_dir:
            yield from _walk_children(child.path, junk)
