import pytest

from utils.validation_utils import all_present, is_blank, password_fits_bcrypt, validate_mobile


@pytest.mark.parametrize("mobile", ["9876543210", "0000000000", "0123456789"])
def test_valid_mobiles(mobile):
    assert validate_mobile(mobile)


@pytest.mark.parametrize(
    "mobile",
    [
        "",
        "12345",
        "12345678901",
        "12345abcde",
        " 9876543210",
        "9876543210 ",
        "9876543210\n",
        "98765-43210",
        "٩٨٧٦٥٤٣٢١٠",
        None,
        9876543210,
    ],
)
def test_invalid_mobiles(mobile):
    assert not validate_mobile(mobile)


def test_blank_values():
    assert is_blank(None)
    assert is_blank("")
    assert not is_blank(" ")
    assert not is_blank("x")


def test_all_present():
    assert all_present("a", "b", "c")
    assert not all_present("a", "", "c")
    assert not all_present("a", None)


def test_password_byte_limit_counts_utf8_bytes():
    assert password_fits_bcrypt("a" * 72)
    assert not password_fits_bcrypt("a" * 73)
    # 36 two-byte characters is exactly 72 bytes
    assert password_fits_bcrypt("é" * 36)
    assert not password_fits_bcrypt("é" * 37)
