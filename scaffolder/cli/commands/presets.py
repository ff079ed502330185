"""Presets command: list built-in placeholders with their current values."""

from argparse import Namespace

from scaffolder.variables import VariableResolver


def list_presets(args: Namespace) -> int:
    resolver = VariableResolver()
    mapping = resolver.preset_mapping()

    width = max(len(preset.token) for preset in resolver.presets)
    for preset in resolver.presets:
        print(f"{preset.token:<{width}}  {mapping[preset.token]:<38}  {preset.description}")
    return 0
