"""
Conversions between `Edit` (byte offsets) and protocol text edits
(line/character ranges).

https://microsoft.github.io/language-server-protocol/specifications/lsp/3.17/specification/#textEditArray
"""
from typing import List, Optional, Sequence, Tuple

from lsedit_core.edits import Edit, apply_bytes, sort_edits
from lsedit_core.lsedit_log import get_logger
from lsedit_core.lsp import TextEditTypedDict
from lsedit_core.mapper import MappingError
from lsedit_core.protocols import IMapper

log = get_logger(__name__)


def text_edits_from_edits(
    mapper: IMapper, edits: Sequence[Edit]
) -> List[TextEditTypedDict]:
    """
    Converts edits to protocol text edits (the result is never None).

    Note: the protocol doesn't require the text edits to be sorted (that's
    the receiver's concern), but some clients have historically relied on
    the textual order, so, the result is always sorted by (start, end).
    """
    result: List[TextEditTypedDict] = []
    for i, edit in enumerate(sort_edits(edits)):
        try:
            text_range = mapper.offset_range(edit.start, edit.end)
        except MappingError as e:
            raise MappingError(f"Unable to convert edit {i} ({edit}): {e}") from e

        result.append({"range": text_range, "newText": edit.new})
    return result


def text_edits_to_edits(
    mapper: IMapper, text_edits: Optional[Sequence[TextEditTypedDict]]
) -> Optional[List[Edit]]:
    """
    Converts protocol text edits to edits (keeping the given order).

    :return:
        None if `text_edits` is None.
    """
    if text_edits is None:
        return None

    result: List[Edit] = []
    for i, text_edit in enumerate(text_edits):
        try:
            start, end = mapper.range_offsets(text_edit["range"])
        except MappingError as e:
            raise MappingError(
                f"Unable to convert text edit {i} ({text_edit}): {e}"
            ) from e

        result.append(Edit(start, end, text_edit["newText"]))
    return result


def apply_text_edits(
    mapper: IMapper, text_edits: Sequence[TextEditTypedDict]
) -> Tuple[bytes, List[Edit]]:
    """
    Applies the protocol text edits to the contents of the mapper.

    :return:
        The patched contents and the text edits converted to `Edit`.
    """
    edits = text_edits_to_edits(mapper, text_edits) or []
    log.debug("Applying %s edit(s) to %s", len(edits), mapper)
    return apply_bytes(mapper.content, edits), edits
