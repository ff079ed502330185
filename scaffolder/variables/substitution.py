"""
Placeholder substitution.
Replaces %token% occurrences in strings using a VariableMapping.
"""

import re
from typing import Mapping, Optional


class TextSubstitutor:
    """
    Applies a variable mapping to arbitrary text.

    Entries are applied one after another in mapping-iteration order, each as
    a global, case-insensitive, literal replacement. Because the passes
    accumulate, a value that contains a token processed later is expanded
    too. Existing templates rely on that, so this must not become a single
    combined-pattern pass.
    """

    def substitute(self, text: Optional[str], mapping: Optional[Mapping[str, str]]) -> Optional[str]:
        """
        Substitute every mapping key found in ``text``.

        Args:
            text: Input string; empty or None is returned unchanged
            mapping: Token -> value table

        Returns:
            Text with all tokens replaced
        """
        if not text or not mapping:
            return text

        result = text
        for key, value in mapping.items():
            result = self._replace(result, key, value)
        return result

    @staticmethod
    def _replace(text: str, key: str, value: str) -> str:
        if not key:
            return text
        pattern = re.compile(re.escape(key), re.IGNORECASE)
        # Callable replacement keeps backslashes in the value literal
        return pattern.sub(lambda match: value, text)


_default = TextSubstitutor()


def substitute(text: Optional[str], mapping: Optional[Mapping[str, str]]) -> Optional[str]:
    """Module-level convenience wrapper around ``TextSubstitutor.substitute``."""
    return _default.substitute(text, mapping)
