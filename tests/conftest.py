"""Test configuration."""

from __future__ import annotations

import logging
import subprocess
import sys
import threading
from pathlib import Path
from typing import Dict, Generator, Iterable, List, Optional, Tuple

import pytest


def make_tree(
    root: Path,
    repos: Iterable[str] = (),
    dirs: Iterable[str] = (),
    files: Iterable[str] = (),
) -> Path:
    """Create directories, fake repositories and files below ``root``.

    A repository is just a directory with an empty ``.git`` directory inside,
    which is all the scanner looks for.
    """
    for rel in dirs:
        (root / rel).mkdir(parents=True, exist_ok=True)
    for rel in repos:
        (root / rel / ".git").mkdir(parents=True, exist_ok=True)
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return root


class FakeGit:
    """Stand-in for ``subprocess.run`` that records each fetch.

    Fetches succeed unless a failure is registered for the working directory.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[List[str], str]] = []
        self.failures: Dict[str, Tuple[int, str]] = {}
        self.launch_error: Optional[OSError] = None
        self.release = threading.Event()
        self.release.set()
        self._lock = threading.Lock()

    def fail(self, path: Path, returncode: int = 1, stderr: str = "") -> None:
        self.failures[str(path)] = (returncode, stderr)

    @property
    def cwds(self) -> List[str]:
        with self._lock:
            return [cwd for _, cwd in self.calls]

    def run(self, args, cwd=None, check=False, **kwargs):  # type: ignore[no-untyped-def]
        with self._lock:
            self.calls.append((list(args), str(cwd)))
        self.release.wait(timeout=10)
        if self.launch_error is not None:
            raise self.launch_error
        returncode, stderr = self.failures.get(str(cwd), (0, ""))
        if check and returncode:
            raise subprocess.CalledProcessError(returncode, args, output=None, stderr=stderr)
        return subprocess.CompletedProcess(args, returncode, None, stderr)


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    """Replace the git subprocess with a recording fake."""
    fake = FakeGit()
    monkeypatch.setattr("gitscript.core.repository.subprocess.run", fake.run)
    return fake


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty directory to scan."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging after each test."""
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    level = root_logger.level
    excepthook = sys.excepthook
    yield
    sys.excepthook = excepthook
    for handler in list(root_logger.handlers):
        if handler not in before:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
