"""Template copy and instantiation."""

from .copier import TreeCopier, copy_tree
from .instantiator import CONTENT_FILENAMES, TemplateInstantiator, create_project

__all__ = [
    'TreeCopier',
    'copy_tree',
    'CONTENT_FILENAMES',
    'TemplateInstantiator',
    'create_project',
]
