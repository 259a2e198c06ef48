"""
This module exists to make conversions of columns from/to the client.

By default the language server spec expects characters above the utf-16 range
to occupy 2 chars, so, something as:

a😃

logically (in python unicode) has 2 chars, but for the spec it needs to have
3 chars (or 5 if the client negotiated utf-8 positions), so, we need to convert
back and forth all columns to account for this discrepancy.
"""
from lsedit_core.lsp import PositionEncodingKind


def compute_utf16_code_units_len(s: str) -> int:
    if s.isascii():
        return len(s)

    tot = 0
    for c in s:
        tot += 1 if ord(c) < 65536 else 2
    return tot


def _char_code_units(c: str, encoding: str) -> int:
    if encoding == PositionEncodingKind.UTF16:
        return 1 if ord(c) < 65536 else 2

    if encoding == PositionEncodingKind.UTF8:
        return len(c.encode("utf-8"))

    return 1


def compute_code_units_len(s: str, encoding: str) -> int:
    """
    :param encoding:
        One of the `PositionEncodingKind` values.
    """
    if s.isascii() or encoding == PositionEncodingKind.UTF32:
        return len(s)

    if encoding == PositionEncodingKind.UTF16:
        return compute_utf16_code_units_len(s)

    return len(s.encode("utf-8"))


def convert_code_units_to_python_col(s: str, col: int, encoding: str) -> int:
    """
    Converts a column expressed in client code units to a python column.

    :raises ValueError:
        If the column is past the end of the line or if it falls in the middle
        of a character (i.e.: between the 2 code units of a surrogate pair).
    """
    if col < 0:
        raise ValueError(f"Column {col} is negative.")

    if s.isascii() or encoding == PositionEncodingKind.UTF32:
        if col > len(s):
            raise ValueError(f"Column {col} is beyond the end of the line.")
        return col

    tot = 0
    for i, c in enumerate(s):
        if tot == col:
            return i
        tot += _char_code_units(c, encoding)
        if tot > col:
            raise ValueError(f"Column {col} is in the middle of a character.")

    if tot == col:
        return len(s)
    raise ValueError(f"Column {col} is beyond the end of the line.")
