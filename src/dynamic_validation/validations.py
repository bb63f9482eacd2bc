"""Class-level validation pipeline for record types.

Record classes subclass Validations and declare their static validation
steps at class level. Every record carries its own ErrorCollection, which
is cleared and refilled on each validation pass.

Usage:
    class Contact(Validations):
        def __init__(self, name):
            self.name = name

        @validation_step
        def name_present(self):
            if not self.name:
                self.errors.add("name", "can't be blank")

    Contact.validates_with(EmailValidator, field="email")

    contact = Contact("")
    contact.is_valid()  # False
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dynamic_validation.contract import DynamicValidationError, build_unit
from dynamic_validation.errors import ErrorCollection

logger = logging.getLogger(__name__)

_STEP_MARKER = "__validation_step__"


class RecordInvalid(DynamicValidationError):
    """Raised by validate_or_raise() when a record fails validation."""

    def __init__(self, record: Any):
        self.record = record
        self.errors = record.errors
        details = "; ".join(self.errors.full_messages())
        super().__init__(f"Validation failed: {details}")


@dataclass(frozen=True)
class ValidationStep:
    """One step of a class-level validation pipeline.

    Attributes:
        name: Label used in logs and for introspection
        fn: Called with the record being validated
        deferred: Deferred steps run after all static steps
        method: Calls a record method of the same name
    """

    name: str
    fn: Callable[[Any], None]
    deferred: bool = False
    method: bool = False

    def __call__(self, record: Any) -> None:
        self.fn(record)


def validation_step(method: Callable) -> Callable:
    """Mark a record method as a static validation step.

    Marked methods run in definition order, after the steps inherited
    from base classes.
    """
    setattr(method, _STEP_MARKER, True)
    return method


def _method_step(attr: str) -> ValidationStep:
    # Resolve by name at call time so subclasses can override the method
    return ValidationStep(name=attr, fn=lambda record: getattr(record, attr)(), method=True)


class Validations:
    """Base class providing errors, static validation steps and is_valid()."""

    _own_validation_steps: list[ValidationStep] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # An overridden step method keeps its inherited slot
        inherited = {step.name for step in cls.validation_steps() if step.method}
        cls._own_validation_steps = [
            _method_step(attr)
            for attr, value in cls.__dict__.items()
            if getattr(value, _STEP_MARKER, False) and attr not in inherited
        ]

    def __new__(cls, *args: Any, **kwargs: Any):
        record = super().__new__(cls)
        record._init_validation_state()
        return record

    def _init_validation_state(self) -> None:
        self._errors = ErrorCollection()

    def _copy_validation_state(self, source: "Validations") -> None:
        self._errors = ErrorCollection()
        for field, message in source.errors:
            self._errors.add(field, message)

    def __copy__(self):
        cls = type(self)
        duplicate = cls.__new__(cls)
        duplicate.__dict__.update(self.__dict__)
        duplicate._copy_validation_state(self)
        return duplicate

    # -------------------------------------------------------------------------
    # Class-level pipeline
    # -------------------------------------------------------------------------

    @classmethod
    def add_validation_step(
        cls,
        fn: Callable[[Any], None],
        name: str | None = None,
        deferred: bool = False,
    ) -> ValidationStep:
        """Append a step to this class's pipeline.

        Args:
            fn: Called with the record being validated
            name: Label for the step (defaults to the function name)
            deferred: Run after every static step

        Returns:
            The registered ValidationStep
        """
        step = ValidationStep(
            name=name or getattr(fn, "__name__", repr(fn)),
            fn=fn,
            deferred=deferred,
        )
        cls._own_validation_steps.append(step)
        return step

    @classmethod
    def validates_with(cls, validator_class: type, **options: Any) -> ValidationStep:
        """Add an object-based validator to this class's pipeline.

        The validator is constructed once with the options and shared by all
        records of the class.

        Raises:
            ContractViolation: If the validator does not implement validate(record)
        """
        unit = build_unit(validator_class, options)
        return cls.add_validation_step(unit.validate, name=validator_class.__name__)

    @classmethod
    def validation_steps(cls) -> list[ValidationStep]:
        """All steps for this class in execution order.

        Inherited steps come first (most basic class first), then the class's
        own. Deferred steps follow every static step.
        """
        steps: list[ValidationStep] = []
        seen: set[int] = set()
        for klass in reversed(cls.__mro__):
            for step in klass.__dict__.get("_own_validation_steps", ()):
                if id(step) not in seen:
                    seen.add(id(step))
                    steps.append(step)
        return [s for s in steps if not s.deferred] + [s for s in steps if s.deferred]

    # -------------------------------------------------------------------------
    # Running validations
    # -------------------------------------------------------------------------

    @property
    def errors(self) -> ErrorCollection:
        return self._errors

    def run_validations(self) -> bool:
        """Clear errors, run every pipeline step and report validity.

        Exceptions raised by a step propagate to the caller.
        """
        self._errors.clear()
        for step in self.validation_steps():
            step(self)

        logger.debug(
            "Validated %s: %d error(s)", type(self).__name__, len(self._errors)
        )
        return self._errors.is_empty()

    def is_valid(self) -> bool:
        return self.run_validations()

    validate = is_valid

    def is_invalid(self) -> bool:
        return not self.run_validations()

    def validate_or_raise(self) -> None:
        """Run validations, raising RecordInvalid if any errors were added."""
        if not self.run_validations():
            raise RecordInvalid(self)
