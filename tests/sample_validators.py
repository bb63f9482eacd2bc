"""Validators and record types shared by the test suite.

Also importable by dotted path ("sample_validators.CustomNumberValidator")
for configuration tests.
"""

from dynamic_validation import DynamicValidation, Validator


class Widget(DynamicValidation):
    """A record with no static validation steps."""

    def __init__(self, number: int = 0, name: str = ""):
        self.number = number
        self.name = name


class MyValidator(Validator):
    def validate(self, record):
        record.errors["name"].append("SomeError")


class MyOtherValidator(Validator):
    def validate(self, record):
        record.errors["field"].append("SomeOtherError")


class BadValidatorA(Validator):
    calls = 0

    def validate(self, too, many, args):
        BadValidatorA.calls += 1


class OptionalArgValidator(Validator):
    def validate(self, record, strict=False):
        record.errors.add("base", "should never run")


class NoValidateValidator:
    def __init__(self, options):
        self.options = options


class CustomNumberValidator(Validator):
    def __init__(self, options):
        self.options = options

    def validate(self, record):
        if record.number <= self.options["minimum"]:
            record.errors.add("number", f"must be greater than {self.options['minimum']}")


class ExplodingValidator(Validator):
    def validate(self, record):
        raise RuntimeError("validator blew up")
