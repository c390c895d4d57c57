"""
Unit-tests for utility functions
"""
import pytest
from x690.types import ObjectIdentifier

from printsnmp.exc import InvalidResponseId
from printsnmp.util import (
    comes_before,
    get_request_id,
    has_prefix,
    validate_response_id,
)

OID = ObjectIdentifier


@pytest.mark.parametrize(
    "oid, prefix, expected",
    [
        ("1.3.6.1.2.1.43", "1.3.6.1.2.1.43", True),
        ("1.3.6.1.2.1.43.5.1.1.17.1", "1.3.6.1.2.1.43", True),
        ("1.3.6.1.2.1.44", "1.3.6.1.2.1.43", False),
        ("1.3.6.1.2.1.430", "1.3.6.1.2.1.43", False),
        ("1.3.6.1.2.1", "1.3.6.1.2.1.43", False),
    ],
)
def test_has_prefix(oid, prefix, expected):
    assert has_prefix(OID(oid), OID(prefix)) is expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ("1.3.6.1.2.1.43.5", "1.3.6.1.2.1.43.6", True),
        ("1.3.6.1.2.1.43.9", "1.3.6.1.2.1.43.10", True),
        ("1.3.6.1.2.1.43", "1.3.6.1.2.1.43.1", True),
        ("1.3.6.1.2.1.43.1", "1.3.6.1.2.1.43", False),
        ("1.3.6.1.2.1.43.5", "1.3.6.1.2.1.43.5", False),
    ],
)
def test_comes_before(left, right, expected):
    assert comes_before(OID(left), OID(right)) is expected


def test_validate_response_id():
    validate_response_id(123, 123)
    with pytest.raises(InvalidResponseId):
        validate_response_id(123, 124)


def test_get_request_id():
    result = get_request_id()
    assert 1 <= result < 2 ** 31
