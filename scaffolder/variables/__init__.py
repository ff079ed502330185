"""
Placeholder variables: preset catalog, mapping, resolution and substitution.
"""

from .mapping import VariableMapping
from .presets import PRESET_VARIABLES, PresetVariable
from .resolver import VariableResolver
from .substitution import TextSubstitutor, substitute

__all__ = [
    'VariableMapping',
    'PRESET_VARIABLES',
    'PresetVariable',
    'VariableResolver',
    'TextSubstitutor',
    'substitute',
]
