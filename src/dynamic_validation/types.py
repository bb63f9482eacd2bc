"""Core types for dynamic validation.

This module defines the types shared by the registry, the contract checks
and the host validation pipeline:
- ValidatorUnit: anything exposing a single-argument validate(record)
- ValidatorEntry: a registered unit, tagged as object-based or block-based
- ValidationError: a flat (field, message) view of a recorded error
- ValidatorDefinition: the declarative form read from configuration
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ValidatorUnit(Protocol):
    """Protocol that all validator units must implement.

    A unit inspects the record and appends zero or more messages to
    ``record.errors``. It returns nothing; the record's error collection
    is the only output.
    """

    def validate(self, record: Any) -> None:
        """Validate the record, appending any problems to ``record.errors``."""
        ...


class ValidatorKind(Enum):
    """How a registered unit was supplied."""

    OBJECT = "object"  # A validator class constructed with options
    BLOCK = "block"  # An inline callable wrapped in a BlockValidator


@dataclass
class ValidatorEntry:
    """A validator unit held by a registry.

    Attributes:
        kind: OBJECT or BLOCK
        unit: The constructed unit whose validate(record) gets called
        options: Options the unit was constructed with
    """

    kind: ValidatorKind
    unit: ValidatorUnit
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationError:
    """A single recorded validation message.

    Attributes:
        field: Field name the message relates to ("base" for record-level)
        message: Human-readable message
    """

    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
        }


@dataclass
class ValidatorDefinition:
    """Declarative definition of a dynamic validator (from YAML or JSON).

    Gets resolved to a validator class through the ValidatorCatalog when it
    is added to a record.

    Attributes:
        type: Catalog name of the validator (e.g., "minimumNumber")
        params: Options passed to the validator's constructor
    """

    type: str
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidatorDefinition":
        """Create ValidatorDefinition from YAML/JSON dict.

        Raises:
            ValueError: If the "type" key is missing
        """
        if "type" not in data:
            raise ValueError(f"Validator definition {data!r} is missing required key 'type'")
        return cls(
            type=data["type"],
            params=dict(data.get("params") or {}),
        )
