"""Runtime, per-record validators.

Records declare static validation steps at class level through
Validations. Subclassing DynamicValidation additionally lets a single
record attach validators at runtime that never affect other records:
- Object validators: classes constructed with options, implementing validate(record)
- Block validators: inline callables receiving the record
- Named validators: classes registered in the ValidatorCatalog, usable from YAML

Usage:
    from dynamic_validation import DynamicValidation, Validator

    class Order(DynamicValidation):
        def __init__(self, quantity):
            self.quantity = quantity

    class MinimumQuantityValidator(Validator):
        def validate(self, record):
            minimum = self.options["minimum"]
            if record.quantity <= minimum:
                record.errors.add("quantity", f"must be greater than {minimum}")

    order = Order(quantity=5)
    order.add_validator(MinimumQuantityValidator, minimum=7)
    order.is_valid()  # False
"""

from dynamic_validation.config import (
    ConfigError,
    ValidatorConfig,
    ValidatorFile,
    configure_from_env,
    load_validator_file,
)
from dynamic_validation.contract import (
    ContractViolation,
    DynamicValidationError,
    build_unit,
    check_contract,
)
from dynamic_validation.dynamic import DynamicValidation
from dynamic_validation.errors import BASE, ErrorCollection
from dynamic_validation.registry import ValidatorCatalog, ValidatorRegistry, validator
from dynamic_validation.types import (
    ValidationError,
    ValidatorDefinition,
    ValidatorEntry,
    ValidatorKind,
    ValidatorUnit,
)
from dynamic_validation.validations import (
    RecordInvalid,
    ValidationStep,
    Validations,
    validation_step,
)
from dynamic_validation.validators import BlockValidator, Validator

__version__ = "0.1.0"

__all__ = [
    # Types
    "ValidationError",
    "ValidatorDefinition",
    "ValidatorEntry",
    "ValidatorKind",
    "ValidatorUnit",
    # Errors
    "BASE",
    "ConfigError",
    "ContractViolation",
    "DynamicValidationError",
    "ErrorCollection",
    "RecordInvalid",
    # Validators
    "BlockValidator",
    "Validator",
    "build_unit",
    "check_contract",
    # Registries
    "ValidatorCatalog",
    "ValidatorRegistry",
    "validator",
    # Records
    "DynamicValidation",
    "ValidationStep",
    "Validations",
    "validation_step",
    # Configuration
    "ValidatorConfig",
    "ValidatorFile",
    "configure_from_env",
    "load_validator_file",
]
