"""Case-insensitive, ordered, read-only placeholder mapping."""

import re
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from scaffolder.exceptions import InvalidInputError


class VariableMapping(Mapping):
    """
    Token -> value table used for one substitution pass.

    Keys are compared case-insensitively; iteration yields the keys as they
    were first inserted, in insertion order. A key written twice keeps its
    first position and takes the last value. Instances have no mutation API.
    """

    DELIMITER = "%"
    TOKEN_PATTERN = re.compile(r'%[^%\s\x00-\x1f\x7f]+%')

    def __init__(self, entries: Optional[Union[Mapping, Iterable[Tuple[str, str]]]] = None):
        self._entries: Dict[str, Tuple[str, str]] = {}
        if entries is None:
            return
        items = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in items:
            self._set(key, value)

    @classmethod
    def token(cls, key: str) -> str:
        """Wrap a bare identifier in delimiters; wrapped tokens pass through."""
        if cls.TOKEN_PATTERN.fullmatch(key):
            return key
        return f"{cls.DELIMITER}{key}{cls.DELIMITER}"

    def _set(self, key: str, value: str):
        if not isinstance(key, str) or not self.TOKEN_PATTERN.fullmatch(key):
            raise InvalidInputError(
                f"Invalid placeholder token {key!r}: expected a non-empty name wrapped in '%'"
            )
        folded = key.casefold()
        if folded in self._entries:
            key = self._entries[folded][0]
        self._entries[folded] = (key, "" if value is None else str(value))

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._entries[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        for key, _ in self._entries.values():
            yield key

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"VariableMapping({dict(self.items())!r})"
