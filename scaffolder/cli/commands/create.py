"""Create command implementation."""

import dataclasses
import logging
from argparse import Namespace
from pathlib import Path
from typing import Callable, Dict
import yaml

from scaffolder.exceptions import ScaffoldError, SettingsValidationError
from scaffolder.session import build_invocation
from scaffolder.settings import Settings, load_or_create_settings, load_settings


logger = logging.getLogger(__name__)


def parse_values(args: Namespace) -> Dict[str, str]:
    """Parse placeholder values from --values-file and --set (--set wins)."""
    values: Dict[str, str] = {}

    if getattr(args, 'values_file', None):
        values_file = Path(args.values_file)
        if not values_file.exists():
            raise FileNotFoundError(f"Values file not found: {values_file}")

        with open(values_file, 'r', encoding='utf-8') as f:
            file_values = yaml.safe_load(f)
        if file_values is None:
            file_values = {}
        if not isinstance(file_values, dict):
            raise ValueError(f"Values file must contain an object, got {type(file_values).__name__}")

        for key, value in file_values.items():
            values[str(key)] = "" if value is None else str(value)

    for item in getattr(args, 'set', None) or []:
        if '=' not in item:
            raise ValueError(f"Invalid value format: {item}. Expected KEY=VALUE")
        key, value = item.split('=', 1)
        if not key:
            raise ValueError(f"Invalid KEY in pair: {item}")
        values[key] = value

    return values


def load_command_settings(args: Namespace) -> Settings:
    """Load settings from --config, or the default location (created if missing)."""
    if getattr(args, 'config', None):
        return load_settings(args.config)
    return load_or_create_settings()


def apply_overrides(settings: Settings, args: Namespace) -> Settings:
    """Apply --template/--target/--[no-]replace-readme for this run only."""
    changes = {}
    if getattr(args, 'template', None):
        changes['template_path'] = args.template
    if getattr(args, 'target', None):
        changes['target_base_path'] = args.target
    if getattr(args, 'replace_readme', None) is not None:
        changes['replace_readme_content'] = args.replace_readme
    return dataclasses.replace(settings, **changes) if changes else settings


def prompt_missing_values(settings: Settings, values: Dict[str, str],
                          ask: Callable[[str], str] = input) -> Dict[str, str]:
    """Ask for every configured placeholder without a non-blank value."""
    answered = dict(values)
    for placeholder in settings.user_placeholders:
        existing = [v for k, v in answered.items()
                    if settings.find_placeholder(k) is placeholder and v.strip()]
        if not existing:
            answered[placeholder.key] = ask(f"{placeholder.label}: ")
    return answered


def create_project_command(args: Namespace) -> int:
    """Create a project from the configured template.

    Returns 0 on success, 2 on invalid input or settings, 1 otherwise.
    """
    try:
        settings = apply_overrides(load_command_settings(args), args)
        values = parse_values(args)
        if getattr(args, 'prompt', False):
            values = prompt_missing_values(settings, values)

        invocation = build_invocation(settings, values)

        if getattr(args, 'dry_run', False):
            destination = invocation.destination()
            logger.info(f"[DRY RUN] Would create project at: {destination}")
            print(destination)
            return 0

        destination = invocation.run()
        print(f"Project created: {destination}")
        return 0

    except SettingsValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.path}: {error.message}" if error.path
                         else f"Validation error: {error.message}")
        return e.exit_code
    except ScaffoldError as e:
        logger.error(f"Create failed: {e}")
        return e.exit_code
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
