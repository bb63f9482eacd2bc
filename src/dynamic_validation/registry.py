"""Validator registries.

Provides:
- ValidatorRegistry: the per-record, ordered set of dynamically added validators
- ValidatorCatalog: named validator classes, so configuration can refer to
  validators by name
"""

import importlib
import logging
from collections.abc import Callable, Iterator
from typing import Any

from dynamic_validation.types import ValidatorEntry

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Ordered mapping from validator identity to its registered entry.

    Each record owns exactly one registry. Identities are unique: registering
    an identity again replaces its entry but keeps its original position, so
    execution order stays the order in which identities were first added.

    Not thread-safe. A record shared between threads needs external locking
    around add/delete and validation.
    """

    def __init__(self) -> None:
        self._entries: dict[Any, ValidatorEntry] = {}

    def register(self, identity: Any, entry: ValidatorEntry) -> None:
        """Insert or overwrite the entry for an identity."""
        if identity in self._entries:
            logger.debug("Replacing validator %r", identity)
        self._entries[identity] = entry

    def unregister(self, identity: Any) -> None:
        """Remove the entry for an identity. Unknown identities are ignored."""
        if self._entries.pop(identity, None) is not None:
            logger.debug("Removed validator %r", identity)

    def entries(self) -> list[tuple[Any, ValidatorEntry]]:
        """Snapshot of (identity, entry) pairs in registration order."""
        return list(self._entries.items())

    def identities(self) -> list[Any]:
        return list(self._entries)

    def get(self, identity: Any) -> ValidatorEntry | None:
        return self._entries.get(identity)

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> "ValidatorRegistry":
        duplicate = ValidatorRegistry()
        duplicate._entries = dict(self._entries)
        return duplicate

    def __iter__(self) -> Iterator[tuple[Any, ValidatorEntry]]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __repr__(self) -> str:
        return f"ValidatorRegistry({self.identities()!r})"


class ValidatorCatalog:
    """Catalog of validator classes by name.

    Validators referenced by name (from YAML or from ``add_validators("name")``)
    must be registered here first, either explicitly or through the
    ``@validator`` decorator.

    Example:
        ValidatorCatalog.register("minimumNumber", MinimumNumberValidator)

        # Later, resolve from configuration
        validator_cls = ValidatorCatalog.get("minimumNumber")
    """

    _validators: dict[str, type] = {}

    @classmethod
    def register(cls, name: str, validator_class: type) -> None:
        """Register a validator class by name.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Unique identifier for the validator (e.g., "minimumNumber")
            validator_class: Class whose instances implement validate(record)
        """
        if name in cls._validators:
            return  # Already registered, no-op
        cls._validators[name] = validator_class

    @classmethod
    def register_path(cls, name: str, dotted_path: str) -> type:
        """Import ``package.module.ClassName`` and register it under name.

        Raises:
            ValueError: If the path is malformed or the attribute is missing
            ImportError: If the module cannot be imported
        """
        module_name, _, attr = dotted_path.rpartition(".")
        if not module_name or not attr:
            raise ValueError(
                f"Validator path '{dotted_path}' must be of the form 'module.ClassName'"
            )

        module = importlib.import_module(module_name)
        try:
            validator_class = getattr(module, attr)
        except AttributeError:
            raise ValueError(
                f"Module '{module_name}' has no validator named '{attr}'"
            ) from None

        cls.register(name, validator_class)
        return validator_class

    @classmethod
    def get(cls, name: str) -> type:
        """Get a registered validator class by name.

        Raises:
            ValueError: If validator is not registered
        """
        if name not in cls._validators:
            raise ValueError(
                f"Validator '{name}' is not registered. "
                "Available validators: " + (", ".join(cls.list_registered()) or "none")
            )
        return cls._validators[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a validator is registered."""
        return name in cls._validators

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered validator names."""
        return sorted(cls._validators.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._validators.clear()


def validator(name: str) -> Callable[[type], type]:
    """Decorator to register a validator class in the catalog.

    Usage:
        @validator("minimumNumber")
        class MinimumNumberValidator(Validator):
            ...
    """

    def decorator(validator_class: type) -> type:
        ValidatorCatalog.register(name, validator_class)
        return validator_class

    return decorator
