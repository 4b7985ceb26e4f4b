"""Service for managing the lobby of participants waiting for a round."""

from __future__ import annotations


class LobbyManager:
    """Ordered set of display names, unique and case-sensitive."""

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def register(self, display_name: str) -> bool:
        """Add a participant. Returns False if the name was already waiting."""
        if display_name in self._names:
            return False
        self._names[display_name] = None
        return True

    def remove(self, display_name: str) -> bool:
        """Drop a participant. Returns False if the name was not waiting."""
        if display_name not in self._names:
            return False
        del self._names[display_name]
        return True

    def get_names(self) -> list[str]:
        return list(self._names)

    def count(self) -> int:
        return len(self._names)

    def __contains__(self, display_name: str) -> bool:
        return display_name in self._names

    def clear(self) -> None:
        self._names.clear()
