"""Unit tests for AdminAllowList."""
import pytest

from core.domain.value_objects import AdminAllowList


def test_parses_comma_separated_ids():
    admins = AdminAllowList.from_csv(" 111, 222 ,,333 ")

    assert admins.is_admin(111)
    assert admins.is_admin(333)
    assert list(admins) == [111, 222, 333]
    assert len(admins) == 3


def test_membership_is_exact_integer_match():
    admins = AdminAllowList.of([12345])

    assert not admins.is_admin(1234)
    assert not admins.is_admin(123456)
    assert not admins.is_admin(None)


@pytest.mark.parametrize("raw", [None, "", " , "])
def test_empty_configuration_allows_nobody(raw):
    admins = AdminAllowList.from_csv(raw)

    assert len(admins) == 0
    assert not admins.is_admin(0)


def test_invalid_entry_fails_loudly():
    with pytest.raises(ValueError, match="abc"):
        AdminAllowList.from_csv("111,abc")
