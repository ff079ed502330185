"""
Variable resolution.
Builds the preset mapping for the current instant and merges user values on top.
"""

from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional, Set, Tuple, Union

from .mapping import VariableMapping
from .presets import PRESET_VARIABLES, PresetVariable


class VariableResolver:
    """
    Supplies built-in placeholders and merges them with user-defined ones.

    The preset catalog is read-only; a resolver holds a reference to it and a
    clock. Nothing is cached: every ``preset_mapping()`` call reads the clock
    again and regenerates identifiers such as ``%guid%``.
    """

    def __init__(
        self,
        presets: Tuple[PresetVariable, ...] = PRESET_VARIABLES,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Args:
            presets: Catalog of built-in placeholders, in substitution order
            clock: Returns the evaluation instant (local time by default)
        """
        self.presets = tuple(presets)
        self.clock = clock

    def preset_keys(self) -> Set[str]:
        """Return every built-in token, lower-cased for collision checks."""
        return {preset.token.casefold() for preset in self.presets}

    def preset_mapping(self) -> VariableMapping:
        """Evaluate every preset against a single instant."""
        now = self.clock()
        return VariableMapping((preset.token, preset.evaluate(now)) for preset in self.presets)

    def merged_mapping(
        self,
        preset: Mapping[str, str],
        user_defined: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]] = None
    ) -> VariableMapping:
        """
        Overlay user-defined entries onto preset entries.

        Args:
            preset: Preset mapping (usually from ``preset_mapping()``)
            user_defined: User values keyed by bare key or ``%key%`` token,
                in configuration order

        Returns:
            Mapping with preset entries first and user entries appended; a
            user entry that collides with a preset overrides its value.
        """
        if user_defined is None:
            user_items = []
        elif isinstance(user_defined, Mapping):
            user_items = list(user_defined.items())
        else:
            user_items = list(user_defined)

        entries = list(preset.items())
        entries.extend((VariableMapping.token(key), value) for key, value in user_items)
        return VariableMapping(entries)

    def build(self, user_defined=None) -> VariableMapping:
        """Shortcut for ``merged_mapping(preset_mapping(), user_defined)``."""
        return self.merged_mapping(self.preset_mapping(), user_defined)
