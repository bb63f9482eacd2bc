import pytest

from dynamic_validation import ValidatorCatalog

from sample_validators import Widget


@pytest.fixture(autouse=True)
def clear_catalog():
    """Clear the validator catalog before and after each test."""
    ValidatorCatalog.clear()
    yield
    ValidatorCatalog.clear()


@pytest.fixture
def widget():
    return Widget()
