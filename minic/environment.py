from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from .types import Value


class Environment:
    """A scope mapping identifiers to values, linked to its enclosing scope.

    Closures keep a reference to the scope they were defined in, so one
    Environment may be shared by several function values and by an active
    call. Writes made through one holder are visible to all of them.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, 'Value'] = {}

    def get(self, name: str) -> Optional['Value']:
        """Look `name` up here, then in each enclosing scope; None if unbound."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def set(self, name: str, value: 'Value') -> 'Value':
        # Always binds in this scope; an outer binding of the same name is
        # shadowed, never updated.
        self.values[name] = value
        return value

    def contains(self, name: str) -> bool:
        return name in self.values

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.values)}>"
