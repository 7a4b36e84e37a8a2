import uuid

import pytest

from agent_lab.services.common import InvalidInputError, coerce_uuid, optional_int, optional_uuid


def test_coerce_uuid():
    value = uuid.uuid4()
    assert coerce_uuid(value) is value
    assert coerce_uuid(str(value)) == value


def test_coerce_uuid_rejects_malformed():
    with pytest.raises(InvalidInputError, match="Invalid UUID 'abc'"):
        coerce_uuid("abc")


@pytest.mark.parametrize("raw", [None, "", "nope"])
def test_optional_uuid_absent(raw):
    assert optional_uuid(raw) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("3", 3), ("0", 0), (" ", None), (None, None), ("x", None)],
)
def test_optional_int(raw, expected):
    assert optional_int(raw) == expected
