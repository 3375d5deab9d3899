"""Numeric label properties that can be shared between labels through a database."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class SharedPropertyDefinition:
    """Links a label property to a database entry through ``db = a * value + b``."""

    name: str = ""
    a: float = 1.0
    b: float = 0.0

    def to_database_value(self, value: float) -> float:
        return self.a * value + self.b

    def from_database_value(self, value: float) -> float:
        return (value - self.b) / self.a

    def is_identity(self) -> bool:
        return self.a == 1.0 and self.b == 0.0


@dataclass
class SharedValue:
    """A value stored in the database, shared by every connected property."""

    value: float = 0.0
    # how the value was changed last time (e.g. which side of a box stayed fixed)
    iparam: int = 0
    # incremented on every change
    update_counter: int = 0


class PropertyDatabase:
    """Named shared values plus a counter that grows with every modification."""

    _instance: ClassVar[PropertyDatabase | None] = None

    def __init__(self) -> None:
        self.state_index = 0
        self._properties: dict[str, SharedValue] = {}

    @classmethod
    def instance(cls) -> PropertyDatabase:
        """Return the process-wide database."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def modify(self) -> None:
        self.state_index += 1

    def clear(self) -> None:
        self._properties.clear()

    def current_value(self, name: str, default_value: float) -> float:
        shared = self._properties.get(name)
        return shared.value if shared is not None else default_value

    def shared_value(self, name: str, init_value: float, inject_init_value: bool) -> SharedValue:
        """Return the shared value called ``name``, creating it from ``init_value``.

        If it already exists and ``inject_init_value`` is true, ``init_value``
        overwrites the stored value.
        """
        shared = self._properties.get(name)
        if shared is None:
            shared = SharedValue(value=init_value)
            self._properties[name] = shared
        elif inject_init_value:
            shared.value = init_value
            shared.iparam = 0
            shared.update_counter += 1
            self.modify()
        return shared


class LabelProperty:
    """A label's numeric property, optionally bound to a shared database value."""

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)
        self._shared: SharedValue | None = None
        self._definition: SharedPropertyDefinition | None = None
        self._database: PropertyDatabase | None = None
        self._update_counter = 0

    @property
    def definition(self) -> SharedPropertyDefinition | None:
        return self._definition

    @property
    def is_shared(self) -> bool:
        return self._shared is not None

    @property
    def iparam(self) -> int:
        return self._shared.iparam if self._shared is not None else 0

    def connect(
        self,
        definition: SharedPropertyDefinition | None,
        inject_my_value: bool,
        database: PropertyDatabase | None = None,
    ) -> None:
        """Bind to the shared value named by ``definition``; ``None`` unbinds."""
        self._shared = None
        self._definition = definition
        self._database = database if database is not None else PropertyDatabase.instance()
        if definition is not None:
            self._shared = self._database.shared_value(
                definition.name,
                definition.to_database_value(self._value),
                inject_my_value,
            )

    def disconnect(self) -> None:
        self._shared = None
        self._definition = None

    def set(self, value: float, iparam: int = 0) -> None:
        self._value = float(value)
        if self._shared is not None and self._definition is not None:
            self._shared.value = self._definition.to_database_value(self._value)
            self._shared.iparam = iparam
            self._shared.update_counter += 1
            self._update_counter = self._shared.update_counter
            if self._database is not None:
                self._database.modify()

    def get(self) -> float:
        if self._shared is not None and self._definition is not None:
            self._value = self._definition.from_database_value(self._shared.value)
        return self._value

    def pull_update(self) -> int:
        """Return 1 if the shared value changed since the last call, else 0."""
        if self._shared is not None and self._shared.update_counter != self._update_counter:
            self._update_counter = self._shared.update_counter
            return 1
        return 0