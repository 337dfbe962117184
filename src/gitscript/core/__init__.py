"""Core functionality for gitscript."""

from .commands import fetch_repositories, find_repositories
from .config import Config
from .dispatcher import CompletionBarrier, FetchDispatcher
from .repository import FetchError, FetchOutcome, GitRepository
from .walker import FileSystemEntry, TraversalError, is_git_repo, is_junk, walk

__all__ = [
    "CompletionBarrier",
    "Config",
    "FetchDispatcher",
    "FetchError",
    "FetchOutcome",
    "FileSystemEntry",
    "GitRepository",
    "TraversalError",
    "fetch_repositories",
    "find_repositories",
    "is_git_repo",
    "is_junk",
    "walk",
]
