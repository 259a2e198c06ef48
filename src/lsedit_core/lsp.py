# Original work Copyright 2017 Palantir Technologies, Inc. (MIT)
# See ThirdPartyNotices.txt in the project root for license information.
# All modifications Copyright (c) Robocorp Technologies Inc.
# All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License")
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http: // www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Language Server Protocol constants and the data shapes used by text edits.

https://microsoft.github.io/language-server-protocol/specifications/lsp/3.17/specification/#textEdit
https://microsoft.github.io/language-server-protocol/specifications/lsp/3.17/specification/#workspaceEdit
"""
from __future__ import annotations
from typing import List, Union, Optional, Any, Dict, Sequence, TypedDict

from lsedit_core.protocols import IEndPoint, IFuture


class PositionEncodingKind(object):
    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF32 = "utf-32"

    ALL = (UTF8, UTF16, UTF32)


class ResourceOperationKind(object):
    Create = "create"
    Rename = "rename"
    Delete = "delete"


class ErrorCodes(object):
    # JSON-RPC
    ParseError = -32700
    InvalidRequest = -32600
    MethodNotFound = -32601
    InvalidParams = -32602
    InternalError = -32603

    # LSP
    ServerNotInitialized = -32002
    UnknownErrorCode = -32001
    RequestFailed = -32803
    ServerCancelled = -32802
    ContentModified = -32801
    RequestCancelled = -32800


class _Base(object):
    def __getitem__(self, name):
        return getattr(self, name)

    def get(self, name, default=None):
        try:
            return getattr(self, name)
        except AttributeError:
            return default

    def to_dict(self):
        new_dict = {}
        for key, value in self.__dict__.items():
            if hasattr(value, "to_dict"):
                value = value.to_dict()
            if value.__class__ in (list, tuple):
                value = [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
            if value is not None:
                new_dict[key] = value
        return new_dict

    def __repr__(self):
        import json

        return json.dumps(self.to_dict(), indent=4)


class Position(_Base):
    def __init__(self, line: int = 0, character: int = 0):
        self.line: int = line
        self.character: int = character

    def __getitem__(self, name):
        # provide tuple-access, not just dict access.
        if name == 0:
            return self.line
        if name == 1:
            return self.character
        return getattr(self, name)

    def __eq__(self, other):
        return (
            isinstance(other, Position)
            and self.line == other.line
            and self.character == other.character
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __lt__(self, other):
        return (self.line, self.character) < (other.line, other.character)

    def __le__(self, other):
        return (self.line, self.character) <= (other.line, other.character)

    def __gt__(self, other):
        return (self.line, self.character) > (other.line, other.character)

    def __ge__(self, other):
        return (self.line, self.character) >= (other.line, other.character)


class Range(_Base):
    def __init__(self, start, end):
        self.start: Position = (
            Position(*start) if start.__class__ in (list, tuple) else start
        )
        self.end: Position = Position(*end) if end.__class__ in (list, tuple) else end

    def __eq__(self, other):
        return (
            isinstance(other, Range)
            and self.start == other.start
            and self.end == other.end
        )

    def __ne__(self, other):
        return not (self == other)

    @classmethod
    def create_from_range_typed_dict(cls, dct: RangeTypedDict) -> "Range":
        start = Position(dct["start"]["line"], dct["start"]["character"])
        end = Position(dct["end"]["line"], dct["end"]["character"])
        return Range(start, end)

    def is_inside(self, another_range: "Range") -> bool:
        return self.start >= another_range.start and self.end <= another_range.end


class TextEdit(_Base):
    def __init__(self, range, newText):
        """
        :param Range range:
        :param str newText:
        """
        self.range = range
        self.newText = newText


class PositionTypedDict(TypedDict):
    # Line position in a document (zero-based).
    line: int

    # Character offset on a line in a document (zero-based). The meaning of
    # this offset is determined by the negotiated `PositionEncodingKind`
    # (UTF-16 code units by default).
    character: int


class RangeTypedDict(TypedDict):
    start: PositionTypedDict
    end: PositionTypedDict


class TextEditTypedDict(TypedDict):
    range: RangeTypedDict
    newText: str


class AnnotatedTextEditTypedDict(TypedDict):
    range: RangeTypedDict
    newText: str
    annotationId: str  # ChangeAnnotationIdentifier


class InsertReplaceEditTypedDict(TypedDict):
    newText: str

    # The range if the insert is requested.
    insert: RangeTypedDict

    # The range if the replace is requested.
    replace: RangeTypedDict


class ChangeAnnotationTypedDict(TypedDict, total=False):
    # A human-readable string describing the actual change.
    label: str

    # A flag which indicates that user confirmation is needed before applying
    # the change.
    needsConfirmation: Optional[bool]

    # A human-readable string which is rendered less prominent in the user
    # interface.
    description: Optional[str]


class TextDocumentIdentifierTypedDict(TypedDict):
    uri: str


class OptionalVersionedTextDocumentIdentifierTypedDict(TypedDict):
    uri: str
    version: Optional[int]


class TextDocumentEditTypedDict(TypedDict):
    textDocument: OptionalVersionedTextDocumentIdentifierTypedDict
    edits: List[Union[TextEditTypedDict, AnnotatedTextEditTypedDict]]


class CreateFileOptions(TypedDict, total=False):
    overwrite: Optional[bool]
    ignoreIfExists: Optional[bool]


class CreateFileTypedDict(TypedDict, total=False):
    kind: str  # "create"

    uri: str  # DocumentUri

    options: Optional[CreateFileOptions]

    annotationId: str  # Optional[ChangeAnnotationIdentifier]


class RenameFileOptions(TypedDict, total=False):
    overwrite: Optional[bool]
    ignoreIfExists: Optional[bool]


class RenameFileTypedDict(TypedDict, total=False):
    kind: str  # "rename"

    oldUri: str  # DocumentUri

    newUri: str  # DocumentUri

    options: Optional[RenameFileOptions]

    annotationId: str  # Optional[ChangeAnnotationIdentifier]


class DeleteFileOptions(TypedDict, total=False):
    recursive: Optional[bool]
    ignoreIfNotExists: Optional[bool]


class DeleteFileTypedDict(TypedDict, total=False):
    kind: str  # "delete"

    uri: str  # DocumentUri

    options: Optional[DeleteFileOptions]

    annotationId: str  # Optional[ChangeAnnotationIdentifier]


DocumentChangeTypedDict = Union[
    TextDocumentEditTypedDict,
    CreateFileTypedDict,
    RenameFileTypedDict,
    DeleteFileTypedDict,
]


class WorkspaceEditTypedDict(TypedDict, total=False):
    # Changes to existing docs.
    changes: Dict[str, List[TextEditTypedDict]]

    # Changes + resources changes (rename, delete, create)
    # Requires workspace.workspaceEdit.documentChanges client capability
    documentChanges: Sequence[DocumentChangeTypedDict]

    # Changes with descriptions
    # Requires workspace.changeAnnotationSupport client capability
    changeAnnotations: Dict[str, ChangeAnnotationTypedDict]


class WorkspaceEditParamsTypedDict(TypedDict, total=False):
    label: Optional[str]
    edit: WorkspaceEditTypedDict


class CompletionItemTypedDict(TypedDict, total=False):
    # The label of this completion item. By default also the text that is
    # inserted when selecting this completion.
    label: str

    # The kind of this completion item (CompletionItemKind).
    kind: int

    # An edit which is applied to a document when selecting this completion.
    #
    # @since 3.16.0 additional type `InsertReplaceEdit`
    textEdit: Optional[Union[TextEditTypedDict, InsertReplaceEditTypedDict]]

    # Edits must not overlap (including the same insert position) with the
    # main edit nor with themselves.
    additionalTextEdits: Optional[List[TextEditTypedDict]]

    insertText: Optional[str]

    data: Optional[Any]


class CancelParamsTypedDict(TypedDict):
    # The request id to cancel.
    id: Union[int, str]


class ResponseErrorTypedDict(TypedDict, total=False):
    code: int
    message: str
    data: Any  # Optional


class ResponseTypedDict(TypedDict, total=False):
    id: Union[int, str, None]
    result: Any  # Optional
    error: ResponseErrorTypedDict  # Optional


class ApplyWorkspaceEditResultTypedDict(TypedDict, total=False):
    applied: bool
    failureReason: Optional[str]
    failedChange: Optional[int]


class LSPMessages(object):
    M_APPLY_EDIT = "workspace/applyEdit"

    def __init__(self, endpoint: IEndPoint):
        self._endpoint = endpoint

    @property
    def endpoint(self) -> IEndPoint:
        return self._endpoint

    def apply_edit_args(self, edit_args: WorkspaceEditParamsTypedDict) -> IFuture:
        return self._endpoint.request(self.M_APPLY_EDIT, params=edit_args)

    def apply_edit(
        self, edit: WorkspaceEditTypedDict, label: Optional[str] = None
    ) -> IFuture:
        edit_args: WorkspaceEditParamsTypedDict = {"edit": edit}
        if label:
            edit_args["label"] = label
        return self.apply_edit_args(edit_args)
