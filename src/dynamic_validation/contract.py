"""Validator contract checks.

Validator units are supplied at runtime, often from configuration, so
their shape is checked when they are registered rather than when a
validation pass first calls them. A unit must expose a ``validate``
method taking exactly one positional argument: the record.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from dynamic_validation.types import ValidatorUnit

logger = logging.getLogger(__name__)


class DynamicValidationError(Exception):
    """Base class for errors raised by this package."""


class ContractViolation(DynamicValidationError, NotImplementedError):
    """A validator does not implement ``validate(record)``.

    Raised at registration time; the offending validator is never
    registered or invoked.
    """

    def __init__(self, name: str):
        super().__init__(f"{name} must implement a validate(record) method.")
        self.validator_name = name


def validator_name(ref: Any) -> str:
    """Name of a validator reference as the caller supplied it."""
    if isinstance(ref, str):
        return ref
    return getattr(ref, "__name__", None) or type(ref).__name__


def build_unit(
    ref: Any,
    options: Mapping[str, Any] | None = None,
    name: str | None = None,
) -> ValidatorUnit:
    """Construct a validator class with options and check its contract.

    Args:
        ref: The validator class
        options: Options passed to the constructor as a single dict
        name: Display name for errors (defaults to the class name)

    Returns:
        The constructed unit

    Raises:
        ContractViolation: If ref is not a class or its instances do not
            expose a single-argument validate method
    """
    name = name or validator_name(ref)
    if not inspect.isclass(ref):
        raise ContractViolation(name)

    unit = ref(dict(options or {}))
    check_contract(unit, name)
    return unit


def check_contract(unit: Any, name: str | None = None) -> None:
    """Ensure a constructed unit exposes ``validate(record)``.

    Raises:
        ContractViolation: If validate is missing, not callable, or does not
            accept exactly one positional argument
    """
    validate = getattr(unit, "validate", None)
    if callable(validate) and _takes_single_argument(validate):
        return

    name = name or validator_name(type(unit))
    logger.debug("Rejecting validator %s: validate(record) contract not met", name)
    raise ContractViolation(name)


def _takes_single_argument(fn: Any) -> bool:
    """True if fn takes exactly one required positional parameter and nothing else."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False

    params = list(signature.parameters.values())
    if len(params) != 1:
        return False

    param = params[0]
    return (
        param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
    )
