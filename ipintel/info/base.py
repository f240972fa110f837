"""
Base class for read-only views over nested API data.

Each view wraps one mapping from the raw payload (or from the static country
table) and exposes its fields through explicit properties. Missing fields
resolve to a default, never an error.
"""

from typing import Any, Dict, Mapping, Optional


class InfoView:
    """Read-only view over a nested mapping."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        """
        Initialize the view.

        Args:
            data: Nested mapping from the API payload
        """
        self._data: Dict[str, Any] = dict(data or {})

    def _get(self, key: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` when it is missing or null."""
        value = self._data.get(key)
        return default if value is None else value

    def _get_str(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return None if value is None else str(value)

    def _get_bool(self, key: str) -> bool:
        return bool(self._data.get(key, False))

    def _get_int(self, key: str) -> int:
        try:
            return int(self._data.get(key) or 0)
        except (TypeError, ValueError):
            return 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the wrapped mapping."""
        return dict(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InfoView) or type(other) is not type(self):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"
