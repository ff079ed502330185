"""Scaffolder exceptions."""

import errno
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union
from pathlib import Path


class ErrorKind(str, Enum):
    """Classification of engine failures."""
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    ALREADY_EXISTS = "already_exists"
    IO_ERROR = "io_error"
    ACCESS_DENIED = "access_denied"


class ScaffoldError(Exception):
    """Base class for every error raised by the template engine.

    Carries a structural ``kind`` so callers can branch on the failure type
    instead of inspecting the message, plus the path involved (if any) and
    the exit code the CLI maps the failure to.
    """

    kind = ErrorKind.IO_ERROR
    exit_code = 1

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        super().__init__(message)


class TemplateNotFoundError(ScaffoldError):
    """Source template or source directory is missing."""
    kind = ErrorKind.NOT_FOUND


class InvalidInputError(ScaffoldError):
    """Blank required path, malformed placeholder key or missing value."""
    kind = ErrorKind.INVALID_INPUT
    exit_code = 2


class ProjectExistsError(ScaffoldError):
    """Destination project folder already exists."""
    kind = ErrorKind.ALREADY_EXISTS


class ScaffoldIOError(ScaffoldError):
    """Copy, move, read or write failure."""
    kind = ErrorKind.IO_ERROR


class AccessDeniedError(ScaffoldIOError):
    """Operation refused by the operating system for lack of permission."""
    kind = ErrorKind.ACCESS_DENIED


def classify_os_error(exc: OSError) -> ErrorKind:
    """Map an OSError raised by a copy, move, read or write to an ErrorKind.

    Uses the exception type and errno only. Missing entries and name
    collisions met mid-operation are plain I/O failures; NOT_FOUND and
    ALREADY_EXISTS belong to the explicit source and destination checks.
    """
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return ErrorKind.ACCESS_DENIED
    return ErrorKind.IO_ERROR


def wrap_os_error(exc: OSError, message: str,
                  path: Optional[Union[str, Path]] = None) -> ScaffoldIOError:
    """Build the ScaffoldIOError (or AccessDeniedError) matching ``exc``.

    The caller is expected to ``raise wrap_os_error(...) from exc``.
    """
    if classify_os_error(exc) is ErrorKind.ACCESS_DENIED:
        return AccessDeniedError(f"{message}: {exc}", path)
    return ScaffoldIOError(f"{message}: {exc}", path)


@dataclass
class ValidationError:
    """Single settings validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class SettingsValidationError(Exception):
    """Raised when persisted settings fail validation.

    Collects every problem found in one pass so the CLI can print them all
    and map to the validation exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error: {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
