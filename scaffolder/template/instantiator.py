"""Template instantiation.

Copies a template tree to its destination and resolves placeholders in the
working copy. Per call:
- Paths are validated before anything on disk changes
- The copy is verbatim; renames happen afterwards in a post-order walk
- Designated files (README.md) optionally get their content resolved
- A directory whose rename is refused for lack of permission keeps its
  unresolved name; every other failure aborts without rollback
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

from scaffolder.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    ProjectExistsError,
    ScaffoldIOError,
    TemplateNotFoundError,
    wrap_os_error,
)
from scaffolder.variables.substitution import TextSubstitutor
from .copier import TreeCopier


logger = logging.getLogger(__name__)

CONTENT_FILENAMES = ("README.md",)


class TemplateInstantiator:
    """Creates a project from a template directory."""

    def __init__(
        self,
        mapping: Mapping[str, str],
        replace_readme_content: bool = True,
        substitutor: Optional[TextSubstitutor] = None,
        copier: Optional[TreeCopier] = None,
        content_filenames: Iterable[str] = CONTENT_FILENAMES
    ):
        """Initialize instantiator.

        Args:
            mapping: Resolved placeholder mapping, built once for the whole run
            replace_readme_content: Resolve placeholders inside designated files
            substitutor: Text substitutor (default TextSubstitutor())
            copier: Tree copier (default TreeCopier())
            content_filenames: Names (case-insensitive) whose content is resolved
        """
        self.mapping = mapping
        self.replace_readme_content = replace_readme_content
        self.substitutor = substitutor or TextSubstitutor()
        self.copier = copier or TreeCopier()
        self.content_filenames = {name.casefold() for name in content_filenames}

        self.files_renamed = 0
        self.directories_renamed = 0
        self.contents_rewritten = 0
        self.skipped_directories: List[Path] = []

    def resolve(self, text: str) -> str:
        """Substitute placeholders in ``text`` with this run's mapping."""
        return self.substitutor.substitute(text, self.mapping)

    def resolve_destination(self, resolved_source_path: Union[str, Path],
                            unresolved_target_base_path: Union[str, Path]) -> Path:
        """Compute the project folder a run would create, without touching disk."""
        source_text = str(resolved_source_path).strip()
        target_text = str(unresolved_target_base_path).strip()
        if not source_text:
            raise InvalidInputError("Template path must not be empty")
        if not target_text:
            raise InvalidInputError("Target base path must not be empty")

        source = Path(source_text)
        project_name = self.resolve(source.resolve().name)
        self._check_name(project_name, source)

        target_base = Path(self.resolve(target_text)).expanduser()
        return target_base / project_name

    def create_project(self, resolved_source_path: Union[str, Path],
                       unresolved_target_base_path: Union[str, Path]) -> Path:
        """Instantiate the template.

        Args:
            resolved_source_path: Template root directory (placeholders already resolved)
            unresolved_target_base_path: Parent folder for the new project; may
                contain placeholders

        Returns:
            Path of the created project folder

        Raises:
            InvalidInputError: Blank path, or destination inside the template
            TemplateNotFoundError: Template root is not an existing directory
            ProjectExistsError: Project folder already exists
            ScaffoldIOError: Copy, rename, read or write failure
        """
        self.files_renamed = 0
        self.directories_renamed = 0
        self.contents_rewritten = 0
        self.skipped_directories = []

        source = Path(str(resolved_source_path).strip())
        if str(resolved_source_path).strip() and not source.is_dir():
            raise TemplateNotFoundError(f"Template path does not exist: {source}", source)

        destination = self.resolve_destination(resolved_source_path, unresolved_target_base_path)

        # Also covers a destination that is the template root itself
        if destination.exists():
            raise ProjectExistsError(f"Target project folder already exists: {destination}", destination)

        if destination.resolve().is_relative_to(source.resolve()):
            raise InvalidInputError(
                f"Destination '{destination}' is inside template '{source}'", destination
            )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise wrap_os_error(e, f"Failed to create target directory {destination.parent}",
                                destination.parent) from e

        logger.info(f"Creating project {destination} from template {source}")

        copied = self.copier.copy(source, destination)
        logger.debug(f"Copied {copied} files")

        self._process_directory(destination, is_root=True)

        logger.info(
            f"Project created: {destination} "
            f"({self.files_renamed} files renamed, {self.directories_renamed} directories renamed, "
            f"{self.contents_rewritten} files rewritten)"
        )
        return destination

    def _process_directory(self, directory: Path, is_root: bool = False):
        """Post-order: subdirectories, then files, then the directory itself."""
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise wrap_os_error(e, f"Failed to list {directory}", directory) from e

        for entry in entries:
            if entry.is_dir():
                self._process_directory(entry)

        for entry in entries:
            if entry.is_file():
                self._process_file(entry)

        # The project root was named when the destination was computed
        if not is_root:
            self._rename_directory(directory)

    def _process_file(self, path: Path):
        new_name = self.resolve(path.name)
        if new_name != path.name:
            self._check_name(new_name, path)
            target = path.parent / new_name
            self._move(path, target)
            self.files_renamed += 1
            path = target

        if self.replace_readme_content and new_name.casefold() in self.content_filenames:
            self._rewrite_content(path)

    def _rename_directory(self, directory: Path):
        new_name = self.resolve(directory.name)
        if new_name == directory.name:
            return

        self._check_name(new_name, directory)
        try:
            self._move(directory, directory.parent / new_name)
        except AccessDeniedError as e:
            logger.warning(f"Access denied renaming {directory}, keeping its name: {e}")
            self.skipped_directories.append(directory)
            return
        self.directories_renamed += 1

    def _move(self, source: Path, target: Path):
        if target.exists() and not self._same_entry(source, target):
            raise ScaffoldIOError(f"Cannot rename {source}: {target} already exists", target)

        try:
            source.rename(target)
        except OSError as e:
            raise wrap_os_error(e, f"Failed to rename {source} to {target}", source) from e

        logger.debug(f"Renamed {source} -> {target}")

    def _rewrite_content(self, path: Path):
        try:
            with open(path, 'r', encoding='utf-8-sig', newline='') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise ScaffoldIOError(f"Cannot read {path} as UTF-8: {e}", path) from e
        except OSError as e:
            raise wrap_os_error(e, f"Failed to read {path}", path) from e

        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(self.resolve(content))
        except OSError as e:
            raise wrap_os_error(e, f"Failed to write {path}", path) from e

        self.contents_rewritten += 1
        logger.debug(f"Resolved placeholders in {path}")

    @staticmethod
    def _same_entry(source: Path, target: Path) -> bool:
        # Case-only rename on a case-insensitive filesystem
        try:
            return os.path.samefile(source, target)
        except OSError:
            return False

    @staticmethod
    def _check_name(name: str, origin: Path):
        invalid = (not name or name in ('.', '..') or '/' in name
                   or (os.altsep is not None and os.altsep in name) or os.sep in name)
        if invalid:
            raise InvalidInputError(f"Resolved name {name!r} for {origin} is not a valid file name", origin)


def create_project(
    mapping: Mapping[str, str],
    resolved_source_path: Union[str, Path],
    unresolved_target_base_path: Union[str, Path],
    replace_readme_content: bool = True
) -> Path:
    """Create a project from a template.

    Args:
        mapping: Resolved placeholder mapping
        resolved_source_path: Template root directory
        unresolved_target_base_path: Parent folder, may contain placeholders
        replace_readme_content: Resolve placeholders inside README.md files

    Returns:
        Path of the created project folder
    """
    instantiator = TemplateInstantiator(mapping, replace_readme_content)
    return instantiator.create_project(resolved_source_path, unresolved_target_base_path)
