"""Base validator classes.

Object-based validators subclass Validator and override validate(record).
Inline callables are wrapped in a BlockValidator so they satisfy the same
contract and run through the same dispatch.
"""

from collections.abc import Callable, Mapping
from typing import Any

from dynamic_validation.contract import ContractViolation


class Validator:
    """Base class for object-based validators.

    Subclasses receive their registration options as ``self.options`` and
    should override the `validate` method.

    Example:
        class MinimumNumberValidator(Validator):
            def validate(self, record):
                minimum = self.options["minimum"]
                if record.number <= minimum:
                    record.errors.add("number", f"must be greater than {minimum}")
    """

    def __init__(self, options: Mapping[str, Any] | None = None):
        self.options = dict(options or {})

    def validate(self, record: Any) -> None:
        """Validate the record. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement validate()")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"


class BlockValidator(Validator):
    """Wraps an inline callable so it can be registered like a validator.

    Options must carry the callable under the "block" key. Every wrapper is
    a separate instance, so several blocks added to the same record all run.
    """

    def __init__(self, options: Mapping[str, Any] | None = None):
        super().__init__(options)
        if "block" not in self.options:
            raise ContractViolation(type(self).__name__)
        self.block: Callable[[Any], Any] = self.options["block"]

    def validate(self, record: Any) -> None:
        self.block(record)

    def __repr__(self) -> str:
        name = getattr(self.block, "__qualname__", repr(self.block))
        return f"BlockValidator({name})"
