"""
The Mapper translates between byte offsets of a document snapshot and the
line/character positions used by the protocol.

The content is kept as utf-8 bytes (so, offsets are byte offsets) and the
`character` of positions is expressed in the negotiated position encoding
(utf-16 code units unless configured otherwise).

Lines are separated by `\\n`, `\\r\\n` or `\\r`. A document ending with a line
break has a last (empty) line after it.
"""
import bisect
import re
import threading
from typing import Dict, List, Optional, Tuple, Union

from lsedit_core.basic import implements
from lsedit_core.code_units import (
    compute_code_units_len,
    convert_code_units_to_python_col,
)
from lsedit_core.edits import EditsError
from lsedit_core.lsedit_log import get_logger
from lsedit_core.lsp import PositionEncodingKind, PositionTypedDict, RangeTypedDict
from lsedit_core.protocols import IConfig, IMapper

log = get_logger(__name__)

_RE_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


class MappingError(EditsError):
    pass


class Mapper(object):
    """
    Note: the mapper is immutable (a new one must be created for each document
    snapshot). Caches are computed lazily and may be computed more than once if
    accessed from multiple threads, which is harmless.
    """

    def __init__(
        self,
        content: Union[str, bytes],
        uri: Optional[str] = None,
        position_encoding: str = PositionEncodingKind.UTF16,
    ):
        if isinstance(content, str):
            content = content.encode("utf-8")

        if position_encoding not in PositionEncodingKind.ALL:
            raise ValueError(
                f"Unexpected position encoding: {position_encoding!r}. Expected one of: {PositionEncodingKind.ALL}"
            )

        self._content: bytes = content
        self.uri = uri
        self.position_encoding = position_encoding

        self._line_starts: Optional[List[int]] = None
        self._line_ends: Optional[List[int]] = None
        self._line_text_cache: Dict[int, str] = {}
        self._lock = threading.Lock()

    def __str__(self):
        return f"Mapper({self.uri or '<no uri>'}, {len(self._content)} bytes, {self.position_encoding})"

    __repr__ = __str__

    @property
    def content(self) -> bytes:
        return self._content

    def _compute_lines(self) -> Tuple[List[int], List[int]]:
        line_starts = self._line_starts
        line_ends = self._line_ends
        if line_starts is None or line_ends is None:
            # line_ends contains the offset where the line contents end (i.e.:
            # the position of the line break).
            line_starts = [0]
            line_ends = []
            for match in _RE_LINE_BREAK.finditer(self._content):
                line_ends.append(match.start())
                line_starts.append(match.end())
            line_ends.append(len(self._content))

            self._line_ends = line_ends
            self._line_starts = line_starts
        return line_starts, line_ends

    def get_line_count(self) -> int:
        return len(self._compute_lines()[0])

    def _get_line_text(self, line: int) -> str:
        try:
            return self._line_text_cache[line]
        except KeyError:
            pass

        line_starts, line_ends = self._compute_lines()
        contents = self._content[line_starts[line] : line_ends[line]]
        try:
            text = contents.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MappingError(
                f"Line {line} of {self.uri or 'the document'} is not valid utf-8: {e}"
            ) from e

        with self._lock:
            self._line_text_cache[line] = text
        return text

    @implements(IMapper.offset_position)
    def offset_position(self, offset: int) -> PositionTypedDict:
        content_len = len(self._content)
        if offset < 0 or offset > content_len:
            raise MappingError(
                f"Offset {offset} is out of range [0, {content_len}] for {self.uri or 'the document'}."
            )

        line_starts, line_ends = self._compute_lines()
        line = bisect.bisect_right(line_starts, offset) - 1
        line_start = line_starts[line]
        if offset > line_ends[line]:
            raise MappingError(
                f"Offset {offset} is in the middle of the line break of line {line}."
            )

        try:
            text = self._content[line_start:offset].decode("utf-8")
        except UnicodeDecodeError as e:
            raise MappingError(
                f"Offset {offset} is not at a utf-8 character boundary."
            ) from e

        return {
            "line": line,
            "character": compute_code_units_len(text, self.position_encoding),
        }

    @implements(IMapper.position_offset)
    def position_offset(self, position: PositionTypedDict) -> int:
        line = position["line"]
        character = position["character"]

        line_count = self.get_line_count()
        if line < 0 or line >= line_count:
            raise MappingError(
                f"Line {line} is out of range [0, {line_count - 1}] for {self.uri or 'the document'}."
            )

        text = self._get_line_text(line)
        try:
            col = convert_code_units_to_python_col(
                text, character, self.position_encoding
            )
        except ValueError as e:
            raise MappingError(f"Invalid position {line}:{character}: {e}") from e

        line_starts, _line_ends = self._compute_lines()
        return line_starts[line] + len(text[:col].encode("utf-8"))

    @implements(IMapper.offset_range)
    def offset_range(self, start: int, end: int) -> RangeTypedDict:
        if start > end:
            raise MappingError(f"Invalid offsets: start ({start}) > end ({end}).")

        return {"start": self.offset_position(start), "end": self.offset_position(end)}

    @implements(IMapper.range_offsets)
    def range_offsets(self, range: RangeTypedDict) -> Tuple[int, int]:
        start = self.position_offset(range["start"])
        end = self.position_offset(range["end"])
        if start > end:
            raise MappingError(
                f"Invalid range: start ({range['start']}) is after end ({range['end']})."
            )
        return start, end

    def __typecheckself__(self) -> None:
        from lsedit_core.protocols import check_implements

        _: IMapper = check_implements(self)


def create_mapper(
    content: Union[str, bytes],
    uri: Optional[str] = None,
    config: Optional[IConfig] = None,
) -> Mapper:
    """
    Creates a mapper using the position encoding from the given config
    (`lsedit.positionEncoding`), defaulting to utf-16.
    """
    from lsedit_core.config import OPTION_POSITION_ENCODING

    position_encoding = PositionEncodingKind.UTF16
    if config is not None:
        position_encoding = config.get_setting(
            OPTION_POSITION_ENCODING, str, PositionEncodingKind.UTF16
        )
        if position_encoding not in PositionEncodingKind.ALL:
            log.info(
                "Unexpected %s: %s (using %s).",
                OPTION_POSITION_ENCODING,
                position_encoding,
                PositionEncodingKind.UTF16,
            )
            position_encoding = PositionEncodingKind.UTF16

    return Mapper(content, uri=uri, position_encoding=position_encoding)
