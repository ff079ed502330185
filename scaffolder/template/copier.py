"""Verbatim recursive copy of a template tree.

Names are copied unresolved; placeholder substitution happens afterwards in
the working copy. Existing files are never overwritten.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from scaffolder.exceptions import (
    ScaffoldIOError,
    TemplateNotFoundError,
    wrap_os_error,
)


logger = logging.getLogger(__name__)


class TreeCopier:
    """Duplicates a directory tree byte-for-byte."""

    def copy(self, source_dir: Union[str, Path], destination_dir: Union[str, Path]) -> int:
        """Copy ``source_dir`` into ``destination_dir``.

        Args:
            source_dir: Existing directory to duplicate
            destination_dir: Target directory (created with ancestors if absent)

        Returns:
            Number of files copied

        Raises:
            TemplateNotFoundError: If source_dir is not an existing directory
            ScaffoldIOError: If a target file already exists or a copy fails
        """
        source = Path(source_dir)
        destination = Path(destination_dir)

        if not source.is_dir():
            raise TemplateNotFoundError(f"Source directory not found: {source}", source)

        return self._copy_directory(source, destination)

    def _copy_directory(self, source: Path, destination: Path) -> int:
        try:
            destination.mkdir(parents=True, exist_ok=True)
            entries = sorted(source.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise wrap_os_error(e, f"Failed to prepare {destination}", destination) from e

        copied = 0
        subdirs = []

        for entry in entries:
            if entry.is_dir():
                subdirs.append(entry)
            elif entry.is_file():
                self._copy_file(entry, destination / entry.name)
                copied += 1
            else:
                logger.debug(f"Skipping non-regular entry: {entry}")

        for subdir in subdirs:
            copied += self._copy_directory(subdir, destination / subdir.name)

        return copied

    def _copy_file(self, source: Path, target: Path):
        if target.exists() or target.is_symlink():
            raise ScaffoldIOError(f"File already exists: {target}", target)

        try:
            shutil.copy2(source, target)
        except OSError as e:
            raise wrap_os_error(e, f"Failed to copy {source} to {target}", target) from e

        logger.debug(f"Copied {source} -> {target}")


def copy_tree(source_dir: Union[str, Path], destination_dir: Union[str, Path]) -> int:
    """Copy a template tree verbatim.

    Args:
        source_dir: Existing directory to duplicate
        destination_dir: Target directory

    Returns:
        Number of files copied
    """
    return TreeCopier().copy(source_dir, destination_dir)
