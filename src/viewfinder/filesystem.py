"""Existence checkers: answer "does this virtual path exist?".

Virtual paths are app-relative (``~/Views/Home/Index.html``) or rooted
(``/Views/Home/Index.html``).  Both forms are resolved against the
application root.

Two implementations ship with viewfinder:

- ``FileSystemChecker`` probes a real directory on disk.
- ``VirtualFileSystem`` is an in-memory set of paths, handy for tests
  and for hosts that serve templates from a database or an archive.

Both are safe for concurrent use by many lookups.
"""

import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from viewfinder.context import ViewContext


class ExistenceChecker(Protocol):
    """Protocol for template existence checks.

    Implementations may block on I/O; the engine calls them
    synchronously and never retries a negative answer.
    """

    def exists(self, path: str, context: ViewContext | None) -> bool: ...


def relative_part(virtual_path: str) -> str:
    """Strip the ``~/`` or ``/`` anchor from a virtual path."""
    if virtual_path.startswith("~"):
        virtual_path = virtual_path[1:]
    return virtual_path.lstrip("/")


class FileSystemChecker:
    """Existence checker backed by a directory on disk.

    Security: resolves symlinks and verifies the final path is within
    the configured root, so ``~/../secrets.txt`` never reports True.

    Usage::

        checker = FileSystemChecker("./site")
        checker.exists("~/Views/Home/Index.html", context)
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def to_file_path(self, virtual_path: str) -> Path | None:
        """Map *virtual_path* onto the root, or ``None`` if it escapes it or is unusable."""
        relative = relative_part(virtual_path)
        try:
            file_path = (self._root / relative).resolve() if relative else self._root
        except (OSError, ValueError):
            # Embedded NUL bytes, over-long names, symlink loops
            return None
        if not file_path.is_relative_to(self._root):
            return None
        return file_path

    def exists(self, path: str, context: ViewContext | None = None) -> bool:
        file_path = self.to_file_path(path)
        if file_path is None:
            return False
        try:
            return file_path.is_file()
        except (OSError, ValueError):
            return False


class VirtualFileSystem:
    """In-memory existence checker.

    Paths are compared exactly as given, so register them in the same
    form the location formats produce (``~/Views/...``).  Counts every
    probe, which makes cache behaviour observable.
    """

    __slots__ = ("_lock", "_paths", "_probes")

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._paths: set[str] = set(paths)
        self._probes = 0

    def add(self, path: str) -> None:
        with self._lock:
            self._paths.add(path)

    def discard(self, path: str) -> None:
        with self._lock:
            self._paths.discard(path)

    @property
    def probe_count(self) -> int:
        """Number of ``exists()`` calls served so far."""
        with self._lock:
            return self._probes

    def exists(self, path: str, context: ViewContext | None = None) -> bool:
        with self._lock:
            self._probes += 1
            return path in self._paths

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
