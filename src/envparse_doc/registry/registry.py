"""Registry of declarations for one scan unit, keyed by variable name."""

import builtins
from typing import Optional

from ..parser.declarations import Declaration


class Registry:
    """Declarations of one scan unit (the root tree or one dependency package).

    Keys are unique. put() overwrites an existing entry (last write wins) but
    keeps the key's original insertion slot, so unsorted iteration follows the
    order in which keys were first discovered.
    """

    def __init__(self):
        self._entries: dict[str, Declaration] = {}

    def put(self, declaration: Declaration) -> None:
        """Store a declaration, replacing any earlier one with the same key."""
        self._entries[declaration.key] = declaration

    def put_all(self, declarations: list[Declaration]) -> None:
        for declaration in declarations:
            self.put(declaration)

    def get(self, key: str) -> Optional[Declaration]:
        """Find a declaration by key."""
        return self._entries.get(key)

    def entries(self, sorted: bool = False) -> dict[str, Declaration]:
        """Current mapping of key -> declaration.

        Args:
            sorted: Order keys lexicographically instead of by insertion
        """
        if sorted:
            return {key: self._entries[key] for key in builtins.sorted(self._entries)}
        return dict(self._entries)

    def keys(self, sorted: bool = False) -> list[str]:
        return list(self.entries(sorted=sorted))

    def to_dict(self, sorted: bool = False) -> dict[str, dict]:
        """Convert entries to JSON-ready dicts."""
        return {key: decl.to_dict() for key, decl in self.entries(sorted=sorted).items()}

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

