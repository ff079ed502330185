"""CLI command handlers."""

from .create import create_project_command
from .config import config_command
from .presets import list_presets

__all__ = ['create_project_command', 'config_command', 'list_presets']
