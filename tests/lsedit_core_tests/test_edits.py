import random

import pytest

from lsedit_core.edits import (
    Edit,
    OutOfBoundsError,
    OverlappingEditsError,
    apply,
    apply_bytes,
    is_sorted,
    patch,
    sort_edits,
    validate,
)


def _sample_edits():
    return [
        Edit(0, 0, "#"),
        Edit(2, 4, ""),
        Edit(4, 4, "ins"),
        Edit(5, 8, "replaced"),
        Edit(10, 10, "!"),
    ]


def test_validate_order_independent():
    src = "0123456789"
    edits = _sample_edits()
    expected_edits, expected_size = validate(src, edits)
    expected = patch(src, expected_edits, expected_size)

    rnd = random.Random(0)
    for _ in range(20):
        shuffled = edits[:]
        rnd.shuffle(shuffled)
        found_edits, found_size = validate(src, shuffled)
        assert list(found_edits) == list(expected_edits)
        assert found_size == expected_size
        assert patch(src, found_edits, found_size) == expected


def test_size_law():
    src = "0123456789"
    edits = _sample_edits()
    _, size = validate(src, edits)
    expected = len(src) + sum(len(e.new) - (e.end - e.start) for e in edits)
    assert size == expected
    assert len(apply(src, edits)) == expected


def test_validate_with_length_only():
    edits, size = validate(10, [Edit(8, 10, "abc"), Edit(0, 1, "")])
    assert list(edits) == [Edit(0, 1, ""), Edit(8, 10, "abc")]
    assert size == 10


def test_no_op():
    assert apply("some text", []) == "some text"
    assert apply_bytes(b"some text", []) == b"some text"
    assert apply("", []) == ""


def test_overlapping_edits():
    with pytest.raises(OverlappingEditsError):
        validate("0123456789", [Edit(2, 5, "a"), Edit(4, 6, "b")])

    # Order in which they're given doesn't matter.
    with pytest.raises(OverlappingEditsError):
        apply("0123456789", [Edit(4, 6, "b"), Edit(2, 5, "a")])


def test_out_of_bounds():
    with pytest.raises(OutOfBoundsError):
        validate(b"0123456789", [Edit(0, 100, "")])

    with pytest.raises(OutOfBoundsError):
        validate("0123456789", [Edit(-1, 2, "")])

    with pytest.raises(OutOfBoundsError):
        validate("0123456789", [Edit(5, 3, "")])


def test_edit_touching_end_is_valid():
    assert apply("0123456789", [Edit(10, 10, "X")]) == "0123456789X"
    assert apply("0123456789", [Edit(0, 10, "")]) == ""


def test_adjacent_edits_are_not_overlapping():
    assert apply("0123456789", [Edit(2, 5, "a"), Edit(5, 6, "b")]) == "01ab6789"


def test_insertions_at_same_offset_keep_order():
    assert apply("ab", [Edit(1, 1, "X"), Edit(1, 1, "Y")]) == "aXYb"
    assert apply("ab", [Edit(1, 1, "Y"), Edit(1, 1, "X")]) == "aYXb"


def test_insertion_before_replacement_at_same_start():
    # (start, end) ordering: the insertion sorts before the replacement.
    assert apply("abc", [Edit(1, 2, "B"), Edit(1, 1, "X")]) == "aXBc"


def test_package_main():
    assert apply("package main", [Edit(0, 7, "package")]) == "package main"
    assert apply("package main", [Edit(8, 12, "test")]) == "package test"


def test_apply_bytes_uses_utf8():
    src = "ação".encode("utf-8")
    # "ç" occupies bytes [1, 3).
    assert apply_bytes(src, [Edit(1, 3, "c")]).decode("utf-8") == "acão"

    edits, size = validate(src, [Edit(0, 1, "á")])
    assert size == len(src) + 1
    assert patch(src, edits, size).decode("utf-8") == "áção"

    # With a str, offsets are code points.
    assert apply("ação", [Edit(1, 2, "c")]) == "acão"


def test_patch_wrong_size():
    src = "0123456789"
    edits, size = validate(src, [Edit(0, 1, "abc")])
    with pytest.raises(AssertionError):
        patch(src, edits, size + 1)


def test_sort_edits():
    edits = [Edit(3, 4, "a"), Edit(1, 1, "b"), Edit(1, 1, "c"), Edit(0, 2, "d")]
    assert not is_sorted(edits)
    sorted_edits = sort_edits(edits)
    assert sorted_edits == [
        Edit(0, 2, "d"),
        Edit(1, 1, "b"),
        Edit(1, 1, "c"),
        Edit(3, 4, "a"),
    ]
    assert is_sorted(sorted_edits)
    # The original is untouched.
    assert edits[0] == Edit(3, 4, "a")


def test_validate_logs_with_debug_edits(debug_options):
    import io
    from lsedit_core.lsedit_log import configure_logger

    s = io.StringIO()
    with configure_logger("", 2, s):
        validate("abc", [Edit(0, 1, "X")])
    assert "Validated: Edit(0, 1, 'X')" in s.getvalue()
