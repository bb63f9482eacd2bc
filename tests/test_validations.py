"""Tests for the class-level validation pipeline and the error collection."""

import logging

import pytest

from dynamic_validation import (
    BASE,
    ContractViolation,
    ErrorCollection,
    RecordInvalid,
    ValidationError,
    Validations,
    validation_step,
)

from sample_validators import BadValidatorA, CustomNumberValidator, MyValidator


class Contact(Validations):
    def __init__(self, first_name="", number=0):
        self.first_name = first_name
        self.number = number

    @validation_step
    def first_name_present(self):
        if not self.first_name:
            self.errors.add("first_name", "can't be blank")


# =============================================================================
# ErrorCollection
# =============================================================================


class TestErrorCollection:
    def test_add_and_index(self):
        errors = ErrorCollection()
        errors.add("name", "is blank")
        errors["name"].append("is short")
        assert errors["name"] == ["is blank", "is short"]
        assert len(errors) == 2

    def test_none_field_is_base(self):
        errors = ErrorCollection()
        errors.add(None, "record is locked")
        assert errors[BASE] == ["record is locked"]
        assert None in errors
        assert BASE in errors

    def test_indexing_does_not_make_invalid(self):
        errors = ErrorCollection()
        assert errors["untouched"] == []
        assert errors.is_empty()
        assert not errors
        assert "untouched" not in errors
        assert errors.fields() == []

    def test_get_does_not_create(self):
        errors = ErrorCollection()
        errors.get("name").append("ignored")
        assert errors.is_empty()

    def test_iteration_in_insertion_order(self):
        errors = ErrorCollection()
        errors.add("b", "one")
        errors.add("a", "two")
        errors.add("b", "three")
        assert list(errors) == [("b", "one"), ("b", "three"), ("a", "two")]

    def test_to_list(self):
        errors = ErrorCollection()
        errors.add("name", "is blank")
        assert errors.to_list() == [ValidationError(field="name", message="is blank")]
        assert errors.to_list()[0].to_dict() == {"field": "name", "message": "is blank"}

    def test_full_messages(self):
        errors = ErrorCollection()
        errors.add("first_name", "can't be blank")
        errors.add("lastName", "is too long")
        errors.add(None, "Record is locked")
        assert errors.full_messages() == [
            "First name can't be blank",
            "Last name is too long",
            "Record is locked",
        ]

    def test_clear(self):
        errors = ErrorCollection()
        errors.add("name", "is blank")
        errors.clear()
        assert errors.to_dict() == {}


# =============================================================================
# Validations
# =============================================================================


class TestValidations:
    def test_valid_record(self):
        assert Contact(first_name="Ada").is_valid()

    def test_invalid_record(self):
        contact = Contact()
        assert not contact.is_valid()
        assert contact.is_invalid()
        assert contact.errors["first_name"] == ["can't be blank"]

    def test_validate_alias(self):
        assert Contact(first_name="Ada").validate() is True

    def test_errors_reset_each_pass(self):
        contact = Contact()
        contact.is_valid()
        contact.first_name = "Ada"
        assert contact.is_valid()
        assert contact.errors.is_empty()

    def test_errors_exist_before_validation(self):
        assert Contact().errors.is_empty()

    def test_validate_or_raise(self):
        contact = Contact()
        with pytest.raises(RecordInvalid, match="Validation failed: First name can't be blank") as exc_info:
            contact.validate_or_raise()
        assert exc_info.value.record is contact

    def test_validate_or_raise_valid(self):
        Contact(first_name="Ada").validate_or_raise()

    def test_step_exceptions_propagate(self):
        class Fragile(Validations):
            pass

        def explode(record):
            raise KeyError("missing")

        Fragile.add_validation_step(explode)
        with pytest.raises(KeyError):
            Fragile().is_valid()

    def test_logs_pass(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="dynamic_validation.validations"):
            Contact().is_valid()
        assert "Validated Contact: 1 error(s)" in caplog.text


class TestValidatesWith:
    def test_static_validator_applies_to_all_records(self):
        class Counter(Validations):
            def __init__(self, number):
                self.number = number

        Counter.validates_with(CustomNumberValidator, minimum=3)
        assert not Counter(2).is_valid()
        assert Counter(4).is_valid()

    def test_contract_checked(self):
        class Counter(Validations):
            pass

        with pytest.raises(ContractViolation, match="BadValidatorA"):
            Counter.validates_with(BadValidatorA)
        assert Counter.validation_steps() == []


class TestStepInheritance:
    def test_subclass_inherits_steps(self):
        class Customer(Contact):
            pass

        assert [s.name for s in Customer.validation_steps()] == ["first_name_present"]

    def test_subclass_steps_do_not_leak_to_parent(self):
        class Customer(Contact):
            pass

        Customer.validates_with(MyValidator)
        assert [s.name for s in Contact.validation_steps()] == ["first_name_present"]
        assert [s.name for s in Customer.validation_steps()] == ["first_name_present", "MyValidator"]

    def test_overridden_step_runs_once(self):
        class Customer(Contact):
            @validation_step
            def first_name_present(self):
                if not self.first_name:
                    self.errors.add("first_name", "is required")

        customer = Customer()
        customer.is_valid()
        assert customer.errors["first_name"] == ["is required"]

    def test_deferred_steps_last(self):
        class Ordered(Validations):
            pass

        Ordered.add_validation_step(lambda r: r.errors.add("late", "x"), name="late", deferred=True)
        Ordered.add_validation_step(lambda r: r.errors.add("early", "x"), name="early")
        assert [s.name for s in Ordered.validation_steps()] == ["early", "late"]

    def test_function_step_does_not_hide_child_method(self):
        def check_email(record):
            record.errors.add("email", "from function")

        class Account(Validations):
            pass

        Account.add_validation_step(check_email)

        class Member(Account):
            @validation_step
            def check_email(self):
                self.errors.add("email", "from method")

        member = Member()
        member.is_valid()
        assert member.errors["email"] == ["from function", "from method"]

    def test_same_function_added_twice_runs_twice(self):
        def flag(record):
            record.errors.add("base", "flagged")

        class Flagged(Validations):
            pass

        Flagged.add_validation_step(flag)
        Flagged.add_validation_step(flag)

        class Child(Flagged):
            pass

        Child.add_validation_step(flag)

        assert len(Flagged.validation_steps()) == 2
        child = Child()
        child.is_valid()
        assert child.errors["base"] == ["flagged", "flagged", "flagged"]
