"""Project traversal that collects candidate component files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .errors import RootNotFoundError, RootUnreadableError, SubdirectoryUnreadableError
from .logging import get_logger

EXCLUDED_DIRS = frozenset({"node_modules", ".next", ".git", "dist"})

SOURCE_EXTENSIONS = (".ts", ".tsx")

logger = get_logger("locator")


def resolve_root(root: str | os.PathLike[str]) -> Path:
    """Return the absolute project root, raising when it cannot be scanned."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise RootNotFoundError(f"Project path not found: {root}", root_path)
    if not root_path.is_dir():
        raise RootUnreadableError(f"Project path is not a directory: {root}", root_path)
    return root_path


class FileLocator:
    """Walks a project root depth-first and yields recognised source files."""

    def __init__(
        self,
        exclude_dirs: Iterable[str] | None = None,
        extensions: Sequence[str] | None = None,
        *,
        follow_symlinks: bool = True,
        skip_unreadable: bool = False,
    ) -> None:
        self.exclude_dirs = EXCLUDED_DIRS.union(exclude_dirs or ())
        self.extensions = tuple(extensions) if extensions else SOURCE_EXTENSIONS
        self.follow_symlinks = follow_symlinks
        self.skip_unreadable = skip_unreadable

    def locate(self, root: str | os.PathLike[str]) -> List[Path]:
        """Return every candidate file under ``root`` in directory listing order."""
        return list(self.iter_files(root))

    def iter_files(self, root: str | os.PathLike[str]) -> Iterator[Path]:
        root_path = resolve_root(root)
        visited = {os.path.realpath(root_path)}

        def _on_error(exc: OSError) -> None:
            failed = Path(exc.filename) if exc.filename else root_path
            if failed == root_path:
                raise RootUnreadableError(
                    f"Cannot list project directory {failed}: {exc.strerror or exc}", failed
                ) from exc
            if self.skip_unreadable:
                logger.warning("Skipping unreadable directory %s: %s", failed, exc.strerror or exc)
                return
            raise SubdirectoryUnreadableError(
                f"Cannot list directory {failed}: {exc.strerror or exc}", failed
            ) from exc

        for dirpath, dirnames, filenames in os.walk(
            root_path, onerror=_on_error, followlinks=self.follow_symlinks
        ):
            current_dir = Path(dirpath)

            kept = []
            for name in dirnames:
                if name in self.exclude_dirs:
                    logger.debug("Skipping excluded directory %s", current_dir / name)
                    continue
                if self.follow_symlinks:
                    # Unfollowed links are never descended, so only track real paths here.
                    real = os.path.realpath(current_dir / name)
                    if real in visited:
                        logger.debug("Skipping already visited directory %s", current_dir / name)
                        continue
                    visited.add(real)
                kept.append(name)
            dirnames[:] = kept

            for filename in filenames:
                if filename in self.exclude_dirs:
                    continue
                if filename.endswith(self.extensions):
                    yield current_dir / filename


def locate(
    root: str | os.PathLike[str],
    *,
    exclude_dirs: Iterable[str] | None = None,
    extensions: Sequence[str] | None = None,
    follow_symlinks: bool = True,
    skip_unreadable: bool = False,
) -> List[Path]:
    """Enumerate candidate source files under ``root``."""
    locator = FileLocator(
        exclude_dirs,
        extensions,
        follow_symlinks=follow_symlinks,
        skip_unreadable=skip_unreadable,
    )
    return locator.locate(root)


__all__ = ["EXCLUDED_DIRS", "FileLocator", "SOURCE_EXTENSIONS", "locate", "resolve_root"]
