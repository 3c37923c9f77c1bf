"""Typed configuration values and the in-memory store."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class StringValue:
    value: str
    kind: Literal["string"] = "string"


@dataclass(frozen=True)
class IntValue:
    value: int
    kind: Literal["int"] = "int"


@dataclass(frozen=True)
class BoolValue:
    value: bool
    kind: Literal["bool"] = "bool"


ConfigValue = StringValue | IntValue | BoolValue


def format_value(value: ConfigValue) -> str:
    """Render a value the way a user would type it."""
    match value:
        case BoolValue(value=b):
            return "true" if b else "false"
        case IntValue(value=i):
            return str(i)
        case StringValue(value=s):
            return s


class ConfigStore:
    """Mapping of setting name to typed value.

    Single writer: only setters mutate the store. Nothing is persisted.
    """

    def __init__(self) -> None:
        self._values: dict[str, ConfigValue] = {}

    def put(self, name: str, value: ConfigValue) -> None:
        self._values[name] = value

    def get(self, name: str, default: ConfigValue | None = None) -> ConfigValue | None:
        return self._values.get(name, default)

    def __getitem__(self, name: str) -> ConfigValue:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def items(self):
        return self._values.items()

    def to_dict(self) -> dict[str, str | int | bool]:
        """Return plain python values keyed by setting name."""
        return {name: value.value for name, value in self._values.items()}
