import pytest

from lsedit_core.lsp import PositionEncodingKind


def test_compute_code_units_len():
    from lsedit_core.code_units import compute_code_units_len
    from lsedit_core.code_units import compute_utf16_code_units_len

    s = "a😃b"
    assert compute_utf16_code_units_len(s) == 4
    assert compute_code_units_len(s, PositionEncodingKind.UTF16) == 4
    assert compute_code_units_len(s, PositionEncodingKind.UTF8) == 6
    assert compute_code_units_len(s, PositionEncodingKind.UTF32) == 3
    assert compute_code_units_len("abc", PositionEncodingKind.UTF8) == 3


@pytest.mark.parametrize(
    "encoding, col, expected",
    [
        (PositionEncodingKind.UTF16, 3, 2),
        (PositionEncodingKind.UTF8, 5, 2),
        (PositionEncodingKind.UTF32, 2, 2),
        (PositionEncodingKind.UTF16, 4, 3),
        (PositionEncodingKind.UTF8, 6, 3),
    ],
)
def test_convert_code_units_to_python_col(encoding, col, expected):
    from lsedit_core.code_units import convert_code_units_to_python_col

    assert convert_code_units_to_python_col("a😃b", col, encoding) == expected


def test_convert_code_units_to_python_col_errors():
    from lsedit_core.code_units import convert_code_units_to_python_col

    with pytest.raises(ValueError):
        # Between the surrogate pair.
        convert_code_units_to_python_col("a😃b", 2, PositionEncodingKind.UTF16)

    with pytest.raises(ValueError):
        convert_code_units_to_python_col("a😃b", 3, PositionEncodingKind.UTF8)

    with pytest.raises(ValueError):
        convert_code_units_to_python_col("a😃b", 5, PositionEncodingKind.UTF16)

    with pytest.raises(ValueError):
        convert_code_units_to_python_col("abc", 4, PositionEncodingKind.UTF16)

    with pytest.raises(ValueError):
        convert_code_units_to_python_col("abc", -1, PositionEncodingKind.UTF16)
