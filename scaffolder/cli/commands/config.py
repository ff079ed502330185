"""Config command implementation."""

import dataclasses
import logging
from argparse import Namespace
from pathlib import Path
import yaml

from scaffolder.exceptions import SettingsValidationError
from scaffolder.settings import (
    UserPlaceholder,
    default_config_path,
    default_settings,
    load_or_create_settings,
    load_settings,
    save_settings,
)


logger = logging.getLogger(__name__)


def _config_path(args: Namespace) -> Path:
    return Path(args.config) if getattr(args, 'config', None) else default_config_path()


def init_config(args: Namespace) -> int:
    path = _config_path(args)
    if path.exists() and not args.force:
        logger.error(f"Settings file already exists: {path} (use --force to overwrite)")
        return 1
    save_settings(default_settings(), path)
    print(f"Wrote default settings to {path}")
    return 0


def show_config(args: Namespace) -> int:
    settings = load_or_create_settings(_config_path(args))
    print(yaml.safe_dump(settings.to_dict(), allow_unicode=True, sort_keys=False), end='')
    return 0


def validate_config(args: Namespace) -> int:
    path = _config_path(args)
    load_settings(path)
    print(f"Settings are valid: {path}")
    return 0


def set_config(args: Namespace) -> int:
    path = _config_path(args)
    settings = load_or_create_settings(path)

    changes = {}
    if args.template is not None:
        changes['template_path'] = args.template.strip()
    if args.target is not None:
        changes['target_base_path'] = args.target.strip()
    if args.replace_readme is not None:
        changes['replace_readme_content'] = args.replace_readme

    if not changes:
        logger.error("Nothing to set: pass --template, --target or --[no-]replace-readme")
        return 2

    save_settings(dataclasses.replace(settings, **changes), path)
    print(f"Updated {', '.join(changes)} in {path}")
    return 0


def add_placeholder(args: Namespace) -> int:
    path = _config_path(args)
    settings = load_or_create_settings(path)
    placeholders = list(settings.user_placeholders)
    placeholders.append(UserPlaceholder(key=args.key.strip(), label=args.label.strip()))

    save_settings(dataclasses.replace(settings, user_placeholders=placeholders), path)
    print(f"Added placeholder %{args.key.strip()}%")
    return 0


def remove_placeholder(args: Namespace) -> int:
    path = _config_path(args)
    settings = load_or_create_settings(path)
    placeholder = settings.find_placeholder(args.key)
    if placeholder is None:
        logger.error(f"No such placeholder: {args.key}")
        return 1

    placeholders = [p for p in settings.user_placeholders if p is not placeholder]
    save_settings(dataclasses.replace(settings, user_placeholders=placeholders), path)
    print(f"Removed placeholder {placeholder.token}")
    return 0


def print_config_path(args: Namespace) -> int:
    print(_config_path(args))
    return 0


HANDLERS = {
    'init': init_config,
    'show': show_config,
    'validate': validate_config,
    'set': set_config,
    'add-placeholder': add_placeholder,
    'remove-placeholder': remove_placeholder,
    'path': print_config_path,
}


def config_command(args: Namespace) -> int:
    """Dispatch ``scaffold config <subcommand>``."""
    handler = HANDLERS.get(getattr(args, 'config_command', None))
    if handler is None:
        logger.error(f"Unknown config command. Choose one of: {', '.join(HANDLERS)}")
        return 1

    try:
        return handler(args)
    except SettingsValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.path}: {error.message}" if error.path
                         else f"Validation error: {error.message}")
        return e.exit_code
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to access settings: {e}")
        return 1
