import pytest

from capstore.exceptions import InvalidConfig, ValidationError
from capstore.utils.validation import validate_capacity, validate_key, validate_value


def test_validate_key_accepts_strings():
    validate_key("a")
    validate_key(" spaced key ")
    validate_key("")


@pytest.mark.parametrize("key,message", [
    (None, "Key must be a string"),
    (42, "Key must be a string"),
    (["a"], "Key must be a string"),
])
def test_validate_key_rejects(key, message):
    with pytest.raises(ValidationError, match=message):
        validate_key(key)


def test_validate_value():
    validate_value("")
    validate_value("value")
    with pytest.raises(ValidationError, match="Value must be a string"):
        validate_value(None)


@pytest.mark.parametrize("capacity", [1, 2, 10_000])
def test_validate_capacity_accepts_positive_ints(capacity):
    validate_capacity(capacity)


@pytest.mark.parametrize("capacity", [0, -1, 1.5, "3", True, None])
def test_validate_capacity_rejects(capacity):
    with pytest.raises(InvalidConfig):
        validate_capacity(capacity)
