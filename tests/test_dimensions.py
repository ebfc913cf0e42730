import pytest

from cabinet_quote.dimensions import parse_dimensions
from cabinet_quote.models import ACCESSORY, BASE, HARDWARE, TALL, UNKNOWN, VANITY, WALL


@pytest.mark.parametrize(
    "code, cabinet_type, width, height, depth",
    [
        ("W3030", WALL, 30.0, 30.0, 12.0),
        ("W36", WALL, 36.0, 30.0, 12.0),
        ("WDC2430", WALL, 24.0, 30.0, 12.0),
        ("B30", BASE, 30.0, 34.5, 24.0),
        ("SB36", BASE, 36.0, 34.5, 24.0),
        ("BBC42", BASE, 42.0, 34.5, 24.0),
        ("U2484", TALL, 24.0, 84.0, 24.0),
        ("T18", TALL, 18.0, 84.0, 24.0),
        ("RR96", TALL, 3.0, 96.0, 24.0),
        ("BF3", ACCESSORY, 3.0, 0.0, 0.0),
        ("DWR", ACCESSORY, 3.0, 0.0, 0.0),
        ("TK8", ACCESSORY, 8.0, 0.0, 0.0),
        ("VSB30", VANITY, 30.0, 34.5, 21.0),
        ("V24", VANITY, 24.0, 34.5, 21.0),
        ("HINGESOFTCLOSE", HARDWARE, 0.0, 0.0, 0.0),
        ("GEN12", ACCESSORY, 12.0, 0.0, 0.0),
        ("XYZ", UNKNOWN, 0.0, 0.0, 0.0),
    ],
)
def test_parse_dimensions(code: str, cabinet_type: str, width: float, height: float, depth: float) -> None:
    dims = parse_dimensions(code)

    assert dims is not None
    assert (dims.type, dims.width, dims.height, dims.depth) == (cabinet_type, width, height, depth)
    assert dims.code == code


def test_parse_dimensions_empty_code_returns_none() -> None:
    assert parse_dimensions("") is None
    assert parse_dimensions(None) is None


def test_parse_dimensions_caps_long_digit_runs() -> None:
    dims = parse_dimensions("X" + "9" * 400)

    assert dims.type == ACCESSORY
    assert dims.width == 9999.0
