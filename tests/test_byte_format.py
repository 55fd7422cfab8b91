import pytest

from server_status_gui.services.byte_format import format_bytes


@pytest.mark.parametrize(
    "n,expected",
    [
        (0, "0 B"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (5 * 1024 * 1024, "5.0 MiB"),
        (2 * 1024**3, "2.0 GiB"),
        (3 * 1024**4 + 1024**4 // 2, "3.5 TiB"),
        (1024**2 - 1, "1.0 MiB"),
        (1024**3 - 1, "1.0 GiB"),
    ],
)
def test_binary_units(n, expected):
    assert format_bytes(n) == expected


def test_precision():
    assert format_bytes(1024 + 256, precision=2) == "1.25 KiB"
    assert format_bytes(1536, precision=0) == "2 KiB"


def test_rounding_carry_respects_precision():
    # 1023.96 KiB stays in KiB when two decimals can show it
    assert format_bytes(1024 * 1024 - 41, precision=2) == "1023.96 KiB"
    assert format_bytes(999_999, si=True) == "1.0 MB"


def test_si_units():
    assert format_bytes(999, si=True) == "999 B"
    assert format_bytes(1000, si=True) == "1.0 kB"
    assert format_bytes(2_500_000_000, si=True) == "2.5 GB"


def test_largest_unit_caps_scaling():
    assert format_bytes(1024**7).endswith(" EiB")


def test_negative_is_rejected():
    with pytest.raises(ValueError):
        format_bytes(-1)
