"""Per-record dynamic validators.

Lets a single record attach extra validators at runtime on top of the
static steps its class declares, without affecting other records of the
same class.

Usage:
    class Order(DynamicValidation):
        def __init__(self, quantity):
            self.quantity = quantity

    order = Order(quantity=5)
    order.add_validator(MinimumQuantityValidator, minimum=7)

    def even_quantity(record):
        if record.quantity % 2:
            record.errors.add("quantity", "must be even")

    order.add_validator(block=even_quantity)
    order.is_valid()  # False
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from dynamic_validation.contract import build_unit, validator_name
from dynamic_validation.registry import ValidatorCatalog, ValidatorRegistry
from dynamic_validation.types import ValidatorDefinition, ValidatorEntry, ValidatorKind
from dynamic_validation.validations import Validations
from dynamic_validation.validators import BlockValidator

logger = logging.getLogger(__name__)


class DynamicValidation(Validations):
    """Record capability for adding validators to a single instance.

    Subclassing attaches one deferred step to the class pipeline. The step
    is shared by every record of the class but always reads the registry of
    the record being validated, so validators added to one record never run
    for another.
    """

    def _init_validation_state(self) -> None:
        super()._init_validation_state()
        self._dynamic_validators = ValidatorRegistry()

    def _copy_validation_state(self, source: Validations) -> None:
        super()._copy_validation_state(source)
        self._dynamic_validators = source.dynamic_validators.copy()

    @property
    def dynamic_validators(self) -> ValidatorRegistry:
        return self._dynamic_validators

    def add_validators(
        self,
        *validators: Any,
        block: Callable[[Any], Any] | None = None,
        **options: Any,
    ) -> None:
        """Add validators to this record only.

        Args:
            *validators: Validator classes or ValidatorCatalog names. A trailing
                mapping is taken as options shared by every validator in the call.
            block: Inline callable receiving the record; always added as a new,
                separate validator
            **options: Options shared by every validator in the call (win over
                keys in a trailing mapping)

        Raises:
            ContractViolation: If any validator does not implement
                validate(record). Nothing from the call is registered.
            ValueError: If a name is not registered in the ValidatorCatalog
        """
        refs = list(validators)
        shared: dict[str, Any] = {}
        if refs and isinstance(refs[-1], Mapping):
            shared.update(refs.pop())
        shared.update(options)

        # Check every validator before registering any of them
        entries = [self._build_entry(ref, shared) for ref in refs]

        for identity, entry in entries:
            self._dynamic_validators.register(identity, entry)
            logger.debug(
                "Added validator %s to %s", validator_name(identity), type(self).__name__
            )

        if block is not None:
            unit = BlockValidator({"block": block})
            self._dynamic_validators.register(
                unit, ValidatorEntry(kind=ValidatorKind.BLOCK, unit=unit, options=unit.options)
            )
            logger.debug("Added %r to %s", unit, type(self).__name__)

    add_validator = add_validators

    def add_validator_definitions(
        self,
        definitions: Iterable[ValidatorDefinition | Mapping[str, Any]],
    ) -> None:
        """Add validators described by definitions (e.g., loaded from YAML).

        Each definition is resolved through the ValidatorCatalog. All of them
        are checked before any is registered.
        """
        resolved = [
            d if isinstance(d, ValidatorDefinition) else ValidatorDefinition.from_dict(dict(d))
            for d in definitions
        ]
        entries = [self._build_entry(d.type, d.params) for d in resolved]
        for identity, entry in entries:
            self._dynamic_validators.register(identity, entry)

    def delete_validator(self, validator: Any) -> None:
        """Remove a validator from this record.

        Accepts a validator class, a ValidatorCatalog name, or the
        BlockValidator wrapping a block. Unknown validators are ignored.
        """
        if isinstance(validator, str):
            if not ValidatorCatalog.is_registered(validator):
                return
            validator = ValidatorCatalog.get(validator)
        self._dynamic_validators.unregister(validator)

    def block_validators(self) -> list[BlockValidator]:
        """BlockValidator wrappers added to this record, in order."""
        return [
            entry.unit
            for _, entry in self._dynamic_validators
            if entry.kind is ValidatorKind.BLOCK
        ]

    def run_dynamic_validations(self) -> None:
        """Run this record's dynamic validators against it.

        Errors are appended to the record's shared error collection. Running
        never changes which validators are registered.
        """
        for _, entry in self._dynamic_validators:
            entry.unit.validate(self)

    def _build_entry(
        self, ref: Any, options: Mapping[str, Any]
    ) -> tuple[type, ValidatorEntry]:
        name = validator_name(ref)
        validator_class = ValidatorCatalog.get(ref) if isinstance(ref, str) else ref
        unit = build_unit(validator_class, options, name=name)
        return validator_class, ValidatorEntry(
            kind=ValidatorKind.OBJECT, unit=unit, options=dict(options)
        )


DynamicValidation.add_validation_step(
    lambda record: record.run_dynamic_validations(),
    name="dynamic_validators",
    deferred=True,
)
