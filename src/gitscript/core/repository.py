"""Repository functionality for gitscript."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Union


class FetchError(RuntimeError):
    """Raised when ``git fetch`` fails or cannot be started.

    Attributes:
        path (str): Repository the fetch ran in.
        error (str): Exit status or launch failure description.
        stderr (str): Diagnostic text captured from Git.
    """

    def __init__(self, path: str, error: str, stderr: str = ""):
        super().__init__(f"Git fetch failed in {path}: {error}")
        self.path = path
        self.error = error
        self.stderr = stderr


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single fetch attempt."""

    path: str
    success: bool
    error: str = ""
    stderr: str = ""

    @classmethod
    def ok(cls, path: str) -> "FetchOutcome":
        return cls(path=path, success=True)

    @classmethod
    def failed(cls, path: str, error: str, stderr: str = "") -> "FetchOutcome":
        return cls(path=path, success=False, error=error, stderr=stderr)


class GitRepository:
    """Represents a Git working directory found during a scan.

    This class wraps the Git command line for the one operation gitscript
    needs: updating remote-tracking refs with ``git fetch``. The working tree
    itself is never touched.

    Attributes:
        path (Path): Path to the working directory.
        name (str): Directory name of the repository.
        git_command (str): Git executable to run.
    """

    def __init__(self, path: Union[str, Path], git_command: str = "git"):
        """Initialize repository."""
        self.path = Path(path)
        self.name = self.path.name
        self.git_command = git_command

    def __str__(self) -> str:
        """Return string representation."""
        return f"GitRepository({self.path})"

    def __repr__(self) -> str:
        """Return string representation."""
        return self.__str__()

    def fetch(self) -> None:
        """Fetch from the repository's configured remotes.

        Runs ``git fetch`` with the repository as working directory. Standard
        output is discarded and standard error is captured for diagnostics;
        bytes that are not valid UTF-8 are replaced rather than rejected.

        Raises:
            FetchError: If Git exits with a non-zero status or cannot be
                        started at all.
        """
        try:
            subprocess.run(
                [self.git_command, "fetch"],
                cwd=self.path,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise FetchError(
                str(self.path), f"exit status {e.returncode}", (e.stderr or "").strip()
            ) from e
        except OSError as e:
            raise FetchError(str(self.path), str(e)) from e
