"""
Byte-range edits and the patch engine which applies them.

An `Edit` replaces `[start, end)` of some buffer snapshot with `new`. Offsets
index code points when the buffer is a `str` and bytes when it's `bytes` (in
which case the replacement is encoded as utf-8).

The work is split in 2 steps so that a validated sequence may be used to build
more than one output:

    edits, size = validate(src, edits)
    out = patch(src, edits, size)

`apply` and `apply_bytes` do both steps at once.
"""
from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

from lsedit_core.lsedit_log import get_logger
from lsedit_core.options import BaseOptions
from lsedit_core.protocols import Buffer

log = get_logger(__name__)


class EditsError(Exception):
    pass


class OutOfBoundsError(EditsError):
    pass


class OverlappingEditsError(EditsError):
    pass


class Edit(NamedTuple):
    start: int
    end: int
    new: str

    def __str__(self):
        return f"Edit({self.start}, {self.end}, {self.new!r})"


def _edit_key(edit: Edit) -> Tuple[int, int]:
    return edit.start, edit.end


def is_sorted(edits: Sequence[Edit]) -> bool:
    for i in range(1, len(edits)):
        if _edit_key(edits[i]) < _edit_key(edits[i - 1]):
            return False
    return True


def sort_edits(edits: Iterable[Edit]) -> List[Edit]:
    """
    :return:
        A new list with the edits ordered by (start, end). The sort is stable:
        edits with the same start and end (i.e.: many insertions at the same
        offset) keep the order in which they were given.
    """
    return sorted(edits, key=_edit_key)


def _replacement_len(edit: Edit, as_bytes: bool) -> int:
    if as_bytes:
        return len(edit.new.encode("utf-8"))
    return len(edit.new)


def validate(
    src: Union[Buffer, int], edits: Sequence[Edit]
) -> Tuple[Sequence[Edit], int]:
    """
    Checks that the edits are consistent with the source buffer.

    :param src:
        The buffer the edits were computed against (or just its length, in
        which case replacements are measured as `str`).

    :return:
        The edits in (start, end) order and the size of the patched output.

    :raises OutOfBoundsError:
        If some edit is not inside `[0, len(src)]` or has `start > end`.

    :raises OverlappingEditsError:
        If some edit starts before the previous one (in sorted order) ends.
    """
    if isinstance(src, int):
        src_len = src
        as_bytes = False
    else:
        src_len = len(src)
        as_bytes = isinstance(src, bytes)

    if not is_sorted(edits):
        edits = sort_edits(edits)

    debug_edits = BaseOptions.DEBUG_EDITS
    size = src_len
    last_end = 0
    for edit in edits:
        if edit.start < 0 or edit.start > edit.end or edit.end > src_len:
            raise OutOfBoundsError(
                f"{edit} is out of bounds (buffer length: {src_len})."
            )
        if edit.start < last_end:
            raise OverlappingEditsError(
                f"{edit} overlaps with a previous edit ending at: {last_end}."
            )
        if debug_edits:
            log.debug("Validated: %s", edit)
        size += _replacement_len(edit, as_bytes) + edit.start - edit.end
        last_end = edit.end

    return edits, size


def patch(src: Buffer, edits: Sequence[Edit], size: int) -> Buffer:
    """
    Applies edits which were already checked by `validate` (this function
    doesn't check them again).

    :param size:
        The size computed by `validate` for these edits.
    """
    as_bytes = isinstance(src, bytes)
    out: list = []
    last_end = 0
    for edit in edits:
        if last_end < edit.start:
            out.append(src[last_end : edit.start])
        out.append(edit.new.encode("utf-8") if as_bytes else edit.new)
        last_end = edit.end
    out.append(src[last_end:])

    result = (b"" if as_bytes else "").join(out)
    if len(result) != size:
        raise AssertionError(
            f"Wrong size after patching. Expected: {size}. Found: {len(result)}."
        )
    return result


def apply(src: str, edits: Sequence[Edit]) -> str:
    """
    Applies the edits to the given string and returns the result.

    Edits are applied in order of start offset; edits with the same start
    offset are applied in the order they were provided.
    """
    edits, size = validate(src, edits)
    return patch(src, edits, size)


def apply_bytes(src: bytes, edits: Sequence[Edit]) -> bytes:
    """
    Same as `apply` but works with byte offsets over a utf-8 encoded buffer.
    """
    edits, size = validate(src, edits)
    return patch(src, edits, size)
