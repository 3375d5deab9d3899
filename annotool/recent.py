"""Most-recently-used list of values (usually file paths) kept in a settings store."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from typing import Any

DEFAULT_MAX_ENTRIES = 15


class RecentList:
    """A bounded most-recent-first list stored under one key of ``settings``.

    Several lists may share one settings store; each reads the store afresh,
    so instances using the same key see each other's changes.
    """

    def __init__(
        self,
        key: str,
        settings: MutableMapping[str, Any] | None = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        is_file_list: bool = True,
    ) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must not be negative")
        self.key = key
        self.settings: MutableMapping[str, Any] = settings if settings is not None else {}
        self.max_entries = max_entries
        self.is_file_list = is_file_list

    def add(self, value: str) -> None:
        """Move ``value`` to the front, dropping duplicates and the oldest entries."""
        if self.is_file_list:
            if not value:
                return
            if os.path.isabs(value):
                value = os.path.abspath(value)

        values = [v for v in self.values() if v != value]
        values.insert(0, value)
        self.settings[self.key] = values[: self.max_entries]

    def values(self) -> list[str]:
        """All values stored under the key, most recent first."""
        stored = self.settings.get(self.key)
        if stored is None:
            return []
        if isinstance(stored, str):
            return [stored]
        return [str(v) for v in stored]

    def entries(self) -> list[tuple[str, str]]:
        """Menu entries ``("&1 value", value)`` for the visible values."""
        return [
            (f"&{number} {value}", value)
            for number, value in enumerate(self.values()[: self.max_entries], start=1)
        ]

    @property
    def enabled(self) -> bool:
        """Whether there is anything to show."""
        return bool(self.entries())