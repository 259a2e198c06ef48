import pytest

from lsedit_core.workspace_edit import (
    EditElemKind,
    TextDocumentEditElem,
    apply_text_document_edit,
    as_annotated_text_edits,
    as_text_edits,
    document_change_create,
    document_change_delete,
    document_change_edit,
    document_change_rename,
    get_text_document_edit_elems,
    new_workspace_edit,
    select_completion_text_edit,
)


def _range(line, start_char, end_char):
    return {
        "start": {"line": line, "character": start_char},
        "end": {"line": line, "character": end_char},
    }


def test_as_text_edits():
    elems = [
        TextDocumentEditElem(
            EditElemKind.TEXT_EDIT, {"range": _range(0, 0, 1), "newText": "a"}
        ),
        TextDocumentEditElem(
            EditElemKind.ANNOTATED_TEXT_EDIT,
            {"range": _range(0, 2, 3), "newText": "b", "annotationId": "rename"},
        ),
    ]
    assert as_text_edits(elems) == [
        {"range": _range(0, 0, 1), "newText": "a"},
        {"range": _range(0, 2, 3), "newText": "b"},
    ]
    assert as_text_edits([]) == []


def test_as_text_edits_unknown_kind():
    with pytest.raises(AssertionError):
        as_text_edits(
            [TextDocumentEditElem("snippetEdit", {"range": _range(0, 0, 0)})]
        )


def test_as_annotated_text_edits():
    assert as_annotated_text_edits(None) == []
    elems = as_annotated_text_edits([{"range": _range(1, 0, 2), "newText": "x"}])
    assert elems == [
        TextDocumentEditElem(
            EditElemKind.TEXT_EDIT, {"range": _range(1, 0, 2), "newText": "x"}
        )
    ]
    assert as_text_edits(elems) == [{"range": _range(1, 0, 2), "newText": "x"}]


def test_from_dict():
    elems = get_text_document_edit_elems(
        {
            "textDocument": {"uri": "file:///a.txt", "version": 1},
            "edits": [
                {"range": _range(0, 0, 1), "newText": "a"},
                {"range": _range(0, 1, 2), "newText": "b", "annotationId": "id"},
            ],
        }
    )
    assert [elem.kind for elem in elems] == [
        EditElemKind.TEXT_EDIT,
        EditElemKind.ANNOTATED_TEXT_EDIT,
    ]
    assert elems[1].to_dict()["annotationId"] == "id"


def test_builders():
    edit = new_workspace_edit(
        document_change_create("file:///new.txt"),
        document_change_edit(
            "file:///new.txt", None, [{"range": _range(0, 0, 0), "newText": "hi"}]
        ),
        document_change_rename("file:///a.txt", "file:///b.txt"),
        document_change_delete("file:///c.txt"),
    )
    assert edit == {
        "documentChanges": [
            {"kind": "create", "uri": "file:///new.txt"},
            {
                "textDocument": {"uri": "file:///new.txt", "version": None},
                "edits": [{"range": _range(0, 0, 0), "newText": "hi"}],
            },
            {"kind": "rename", "oldUri": "file:///a.txt", "newUri": "file:///b.txt"},
            {"kind": "delete", "uri": "file:///c.txt"},
        ]
    }

    assert document_change_edit("file:///a.txt", 2, None)["edits"] == []


def test_select_completion_text_edit():
    insert_replace = {
        "label": "foo",
        "textEdit": {
            "newText": "foo",
            "insert": _range(0, 0, 2),
            "replace": _range(0, 0, 5),
        },
    }
    assert select_completion_text_edit(insert_replace, False) == {
        "range": _range(0, 0, 2),
        "newText": "foo",
    }
    assert select_completion_text_edit(insert_replace, True) == {
        "range": _range(0, 0, 5),
        "newText": "foo",
    }

    plain = {"label": "bar", "textEdit": {"range": _range(0, 0, 1), "newText": "bar"}}
    assert select_completion_text_edit(plain, True) == {
        "range": _range(0, 0, 1),
        "newText": "bar",
    }

    with pytest.raises(ValueError):
        select_completion_text_edit({"label": "no edit"}, False)

    with pytest.raises(ValueError):
        select_completion_text_edit(
            {"label": "bad", "textEdit": {"newText": "bad"}}, False
        )


def test_apply_text_document_edit():
    from lsedit_core.mapper import Mapper

    mapper = Mapper("package main\n", uri="file:///main.go")
    contents, edits = apply_text_document_edit(
        mapper,
        {
            "textDocument": {"uri": "file:///main.go", "version": 3},
            "edits": [
                {"range": _range(0, 8, 12), "newText": "test", "annotationId": "a"},
                {"range": _range(0, 0, 0), "newText": "// header\n"},
            ],
        },
    )
    assert contents == b"// header\npackage test\n"
    assert len(edits) == 2
