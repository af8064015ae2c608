import pytest

from visindigo.version import Branch, Version


def test_defaults():
    v = Version()
    assert v.get_version_string() == "0.1.0"
    assert v.branch is Branch.UNKNOWN


def test_round_trip():
    assert Version.from_string("1.2.3").get_version_string() == "1.2.3"


def test_short_string_is_padded():
    assert Version.from_string("4") == Version(4, 0, 0)


def test_invalid_parts_become_zero():
    assert Version.from_string("x.2.y") == Version(0, 2, 0)


def test_extra_parts_ignored():
    assert Version.from_string("1.2.3.9") == Version(1, 2, 3)


@pytest.mark.parametrize(
    "newer, older",
    [((2, 0, 0), (1, 9, 9)), ((1, 3, 0), (1, 2, 9)), ((1, 2, 4), (1, 2, 3))],
)
def test_ordering(newer, older):
    a, b = Version(*newer), Version(*older)
    assert a.is_newer_than(b) and a > b
    assert b.is_older_than(a) and b < a
    assert not b.is_newer_than(a)


def test_equal_versions_neither_newer_nor_older():
    a, b = Version(1, 2, 3), Version(1, 2, 3, build=7)
    assert not a.is_newer_than(b)
    assert not a.is_older_than(b)


def test_same_version_matches_any_component():
    assert Version(1, 0, 0).is_same_version(Version(1, 5, 5, 3, Branch.ALPHA))
    assert not Version(1, 0, 0, 1, Branch.BETA).is_same_version(Version(2, 3, 4, 5, Branch.RELEASE))


def test_same_version_matches_on_branch_alone():
    a = Version(1, 2, 3, 4, Branch.BETA)
    assert a.is_same_version(Version(9, 9, 9, 9, Branch.BETA))
    assert not a.is_same_version(Version(9, 9, 9, 9, Branch.RELEASE))