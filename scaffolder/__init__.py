"""Create projects by copying a template tree and resolving %placeholder% tokens."""

from .exceptions import (
    AccessDeniedError,
    ErrorKind,
    InvalidInputError,
    ProjectExistsError,
    ScaffoldError,
    ScaffoldIOError,
    SettingsValidationError,
    TemplateNotFoundError,
)
from .template import TemplateInstantiator, TreeCopier, create_project
from .variables import TextSubstitutor, VariableMapping, VariableResolver, substitute

__version__ = "0.1.0"

__all__ = [
    'AccessDeniedError',
    'ErrorKind',
    'InvalidInputError',
    'ProjectExistsError',
    'ScaffoldError',
    'ScaffoldIOError',
    'SettingsValidationError',
    'TemplateNotFoundError',
    'TemplateInstantiator',
    'TreeCopier',
    'create_project',
    'TextSubstitutor',
    'VariableMapping',
    'VariableResolver',
    'substitute',
]
