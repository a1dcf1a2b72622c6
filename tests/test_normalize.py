import pytest

from property_reconciler.normalize import as_flag, as_float, as_int, dig, first


@pytest.mark.parametrize(
    "value,expected",
    [
        (1840, 1840.0),
        ("40.677432", 40.677432),
        ("$1,275,000", 1275000.0),
        ("  12.5 ", 12.5),
        ("", None),
        ("n/a", None),
        ("1_000", None),
        ("1e400", None),
        ("nan", None),
        (10**400, None),
        (True, None),
        ([1], None),
    ],
)
def test_as_float(value, expected):
    assert as_float(value) == expected


def test_as_int_rounds_and_rejects_overflow():
    assert as_int("2.6") == 3
    assert as_int(10**400) is None


def test_as_flag():
    assert as_flag("Y") is True
    assert as_flag("n") is False
    assert as_flag("?") is None
    assert as_flag(None) is None


def test_dig_tolerates_wrong_shapes():
    node = {"market": {"saleHistory": [{"saleAmt": 1}]}}
    assert dig(node, "market", "saleHistory", 0, "saleAmt") == 1
    assert dig(node, "market", "saleHistory", 3, "saleAmt") is None
    assert dig(node, "market", "saleHistory", "saleAmt") is None
    assert dig("oops", "market") is None


def test_first_skips_empty_strings_but_keeps_false():
    assert first(None, "", "x") == "x"
    assert first(None, False, "x") is False
    assert first() is None
