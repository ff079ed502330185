"""Main CLI entry point for scaffolder."""

import argparse
import logging
import sys
from typing import Optional

from .commands import config_command, create_project_command, list_presets


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        '--config',
        type=str,
        help='Path to settings file (default: $SCAFFOLD_CONFIG or ~/.config/scaffolder/config.yaml)'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def _add_readme_toggle(parser: argparse.ArgumentParser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        '--replace-readme',
        dest='replace_readme',
        action='store_true',
        default=None,
        help='Resolve placeholders inside README.md files'
    )
    group.add_argument(
        '--no-replace-readme',
        dest='replace_readme',
        action='store_false',
        help='Leave README.md content untouched'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the scaffold CLI."""
    parser = argparse.ArgumentParser(
        prog='scaffold',
        description='Create projects from placeholder templates'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Create command
    create_parser_ = subparsers.add_parser('create', help='Create a project from the template')
    _add_common_arguments(create_parser_)
    create_parser_.add_argument(
        '--set',
        action='append',
        metavar='KEY=VALUE',
        help='Placeholder value (can be specified multiple times)'
    )
    create_parser_.add_argument(
        '--values-file',
        type=str,
        help='Path to YAML/JSON file containing placeholder values'
    )
    create_parser_.add_argument(
        '--template',
        type=str,
        help='Override the configured template path'
    )
    create_parser_.add_argument(
        '--target',
        type=str,
        help='Override the configured target base path'
    )
    _add_readme_toggle(create_parser_)
    create_parser_.add_argument(
        '--prompt',
        action='store_true',
        help='Ask for missing placeholder values interactively'
    )
    create_parser_.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate and print the destination without creating anything'
    )

    # Config command
    config_parser = subparsers.add_parser('config', help='Manage settings')
    config_sub = config_parser.add_subparsers(dest='config_command', help='Config commands')

    init_parser = config_sub.add_parser('init', help='Write default settings')
    _add_common_arguments(init_parser)
    init_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite an existing settings file'
    )

    for name, help_text in (('show', 'Print current settings'),
                            ('validate', 'Validate the settings file'),
                            ('path', 'Print the settings file location')):
        sub = config_sub.add_parser(name, help=help_text)
        _add_common_arguments(sub)

    set_parser = config_sub.add_parser('set', help='Update paths and toggles')
    _add_common_arguments(set_parser)
    set_parser.add_argument('--template', type=str, help='Template root path (may contain presets)')
    set_parser.add_argument('--target', type=str, help='Target base path (may contain placeholders)')
    _add_readme_toggle(set_parser)

    add_parser = config_sub.add_parser('add-placeholder', help='Add a user placeholder')
    _add_common_arguments(add_parser)
    add_parser.add_argument('key', type=str, help='Placeholder key without % delimiters')
    add_parser.add_argument('label', type=str, help='Label shown when asking for the value')

    remove_parser = config_sub.add_parser('remove-placeholder', help='Remove a user placeholder')
    _add_common_arguments(remove_parser)
    remove_parser.add_argument('key', type=str, help='Placeholder key to remove')

    # Presets command
    presets_parser = subparsers.add_parser('presets', help='List built-in placeholders')
    _add_common_arguments(presets_parser)

    return parser


def configure_logging(args: argparse.Namespace):
    """Set up logging from --log-level/--verbose/--quiet."""
    level_name = getattr(args, 'log_level', 'warn')
    log_level = getattr(logging, level_name.upper())
    if getattr(args, 'verbose', False):
        log_level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    configure_logging(parsed_args)

    if parsed_args.command == 'create':
        return create_project_command(parsed_args)
    elif parsed_args.command == 'config':
        return config_command(parsed_args)
    elif parsed_args.command == 'presets':
        return list_presets(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
