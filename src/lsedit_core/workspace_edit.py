"""
Helpers to deal with the edits inside a `TextDocumentEdit` (which may be plain
`TextEdit`s or `AnnotatedTextEdit`s) and to build `WorkspaceEdit`s.
"""
from typing import Iterable, List, Optional, Tuple, Union

from lsedit_core.edits import Edit
from lsedit_core.lsp import (
    AnnotatedTextEditTypedDict,
    CompletionItemTypedDict,
    CreateFileTypedDict,
    DeleteFileTypedDict,
    DocumentChangeTypedDict,
    RenameFileTypedDict,
    ResourceOperationKind,
    TextDocumentEditTypedDict,
    TextEditTypedDict,
    WorkspaceEditTypedDict,
)
from lsedit_core.position_converter import apply_text_edits
from lsedit_core.protocols import IMapper


class EditElemKind(object):
    TEXT_EDIT = "textEdit"
    ANNOTATED_TEXT_EDIT = "annotatedTextEdit"


class TextDocumentEditElem(object):
    """
    One element of `TextDocumentEdit.edits`: either a plain text edit or an
    annotated text edit (as identified by `kind`).
    """

    __slots__ = ["kind", "value"]

    def __init__(
        self,
        kind: str,
        value: Union[TextEditTypedDict, AnnotatedTextEditTypedDict],
    ):
        self.kind = kind
        self.value = value

    @classmethod
    def from_dict(cls, dct) -> "TextDocumentEditElem":
        if "annotationId" in dct:
            return cls(EditElemKind.ANNOTATED_TEXT_EDIT, dct)
        return cls(EditElemKind.TEXT_EDIT, dct)

    def to_dict(self) -> Union[TextEditTypedDict, AnnotatedTextEditTypedDict]:
        return self.value

    def __eq__(self, other):
        return (
            isinstance(other, TextDocumentEditElem)
            and self.kind == other.kind
            and self.value == other.value
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return f"TextDocumentEditElem({self.kind!r}, {self.value!r})"


def as_text_edits(edits: Iterable[TextDocumentEditElem]) -> List[TextEditTypedDict]:
    """
    Converts elements which may be annotated text edits to plain text edits.
    """
    result: List[TextEditTypedDict] = []
    for elem in edits:
        if elem.kind == EditElemKind.ANNOTATED_TEXT_EDIT:
            result.append(
                {"range": elem.value["range"], "newText": elem.value["newText"]}
            )
        elif elem.kind == EditElemKind.TEXT_EDIT:
            result.append(elem.value)
        else:
            raise AssertionError(
                f"Unexpected kind: {elem.kind!r}, expected {EditElemKind.ANNOTATED_TEXT_EDIT!r} or {EditElemKind.TEXT_EDIT!r}."
            )
    return result


def as_annotated_text_edits(
    text_edits: Optional[Iterable[TextEditTypedDict]],
) -> List[TextDocumentEditElem]:
    """
    Wraps text edits as (unannotated) `TextDocumentEdit` elements.

    Note: returns an empty list for None (so that it's serialized as `[]` and
    not as `null`).
    """
    if text_edits is None:
        return []

    return [
        TextDocumentEditElem(
            EditElemKind.TEXT_EDIT,
            {"range": text_edit["range"], "newText": text_edit["newText"]},
        )
        for text_edit in text_edits
    ]


def new_workspace_edit(*changes: DocumentChangeTypedDict) -> WorkspaceEditTypedDict:
    """
    Constructs a WorkspaceEdit from a list of document changes.

    Any `changeAnnotations` must be added after.
    """
    return {"documentChanges": list(changes)}


def document_change_edit(
    uri: str, version: Optional[int], text_edits: Optional[Iterable[TextEditTypedDict]]
) -> TextDocumentEditTypedDict:
    return {
        "textDocument": {"uri": uri, "version": version},
        "edits": [elem.to_dict() for elem in as_annotated_text_edits(text_edits)],
    }


def document_change_create(uri: str) -> CreateFileTypedDict:
    return {"kind": ResourceOperationKind.Create, "uri": uri}


def document_change_rename(src: str, dst: str) -> RenameFileTypedDict:
    return {"kind": ResourceOperationKind.Rename, "oldUri": src, "newUri": dst}


def document_change_delete(uri: str) -> DeleteFileTypedDict:
    return {"kind": ResourceOperationKind.Delete, "uri": uri}


def select_completion_text_edit(
    item: CompletionItemTypedDict, use_replace_mode: bool
) -> TextEditTypedDict:
    """
    :return:
        The text edit of the completion item (when it has an InsertReplaceEdit
        the range used is chosen according to `use_replace_mode`).

    :raises ValueError:
        If the completion item has no text edit or it has an unexpected shape.
    """
    text_edit = item.get("textEdit")
    if not text_edit:
        raise ValueError(f"Completion item without textEdit: {item.get('label')!r}")

    if "range" in text_edit:
        # Old style completion item.
        return {"range": text_edit["range"], "newText": text_edit["newText"]}

    if "insert" in text_edit and "replace" in text_edit:
        return {
            "range": text_edit["replace"] if use_replace_mode else text_edit["insert"],
            "newText": text_edit["newText"],
        }

    raise ValueError(f"Unsupported edit type: {text_edit}")


def get_text_document_edit_elems(
    text_document_edit: TextDocumentEditTypedDict,
) -> List[TextDocumentEditElem]:
    return [TextDocumentEditElem.from_dict(dct) for dct in text_document_edit["edits"]]


def apply_text_document_edit(
    mapper: IMapper, text_document_edit: TextDocumentEditTypedDict
) -> Tuple[bytes, List[Edit]]:
    """
    Applies the edits of a `TextDocumentEdit` (annotations are ignored) to the
    contents of the given mapper.

    Note: it's up to the caller to check that the mapper was created for the
    document version referenced in `textDocument`.
    """
    text_edits = as_text_edits(get_text_document_edit_elems(text_document_edit))
    return apply_text_edits(mapper, text_edits)
