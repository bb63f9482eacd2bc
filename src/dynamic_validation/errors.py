"""Per-record error collection.

Every record carries one ErrorCollection. Static class-level steps and
dynamically added validators append to the same collection during a
validation pass.
"""

import re
from collections.abc import Iterator

from dynamic_validation.types import ValidationError

BASE = "base"


class ErrorCollection:
    """Validation messages keyed by field name.

    Indexing returns the live message list for a field, so validators can
    either call ``errors.add("name", "is blank")`` or append directly with
    ``errors["name"].append("is blank")``.
    """

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, field: str | None, message: str) -> None:
        """Append a message for a field (None records a record-level message)."""
        self[field].append(message)

    def __getitem__(self, field: str | None) -> list[str]:
        return self._messages.setdefault(field or BASE, [])

    def get(self, field: str | None) -> list[str]:
        """Return a copy of the messages for a field without creating it."""
        return list(self._messages.get(field or BASE, []))

    def fields(self) -> list[str]:
        """Fields that currently have at least one message, in insertion order."""
        return [name for name, messages in self._messages.items() if messages]

    def clear(self) -> None:
        self._messages.clear()

    def is_empty(self) -> bool:
        return not any(self._messages.values())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __contains__(self, field: object) -> bool:
        return bool(self._messages.get(field or BASE))  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for name, messages in list(self._messages.items()):
            for message in messages:
                yield name, message

    def __repr__(self) -> str:
        return f"ErrorCollection({self.to_dict()!r})"

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self._messages.items() if messages}

    def to_list(self) -> list[ValidationError]:
        return [ValidationError(field=name, message=message) for name, message in self]

    def full_messages(self) -> list[str]:
        """Messages prefixed with a humanized field name.

        Record-level messages are returned as-is.
        """
        result = []
        for name, message in self:
            if name == BASE:
                result.append(message)
            else:
                result.append(f"{_humanize(name)} {message}")
        return result


def _humanize(name: str) -> str:
    """Convert snake_case or camelCase to a capitalized phrase."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name).replace("_", " ")
    spaced = spaced.strip().lower()
    return spaced[:1].upper() + spaced[1:]
