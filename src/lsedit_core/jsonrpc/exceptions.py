# Original work Copyright 2018 Palantir Technologies, Inc. (MIT)
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
import traceback
from typing import Any, Dict, Optional


class JsonRpcException(Exception):
    MESSAGE: Optional[str] = None
    CODE: Optional[int] = None

    def __init__(self, message=None, code=None, data=None):
        super(JsonRpcException, self).__init__()
        self.message = message or self.MESSAGE
        self.code = code or self.CODE
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        exception_dict: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.data is not None:
            exception_dict["data"] = self.data
        return exception_dict

    def __eq__(self, other):
        return (
            isinstance(other, self.__class__)
            and self.code == other.code
            and self.message == other.message
        )

    def __hash__(self):
        return hash((self.code, self.message))

    def __str__(self):
        return f"{self.message} (code: {self.code})"

    @staticmethod
    def from_dict(error: dict) -> "JsonRpcException":
        for exc_class in _CLIENT_ERRORS:
            if exc_class.supports_code(error["code"]):
                return exc_class(
                    code=error["code"],
                    message=error.get("message"),
                    data=error.get("data"),
                )
        return JsonRpcException(
            code=error["code"], message=error.get("message"), data=error.get("data")
        )


class JsonRpcParseError(JsonRpcException):
    CODE = -32700
    MESSAGE = "Parse Error"

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcInvalidRequest(JsonRpcException):
    CODE = -32600
    MESSAGE = "Invalid Request"

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcMethodNotFound(JsonRpcException):
    CODE = -32601
    MESSAGE = "Method Not Found"

    @classmethod
    def of(cls, method):
        return cls(message=cls.MESSAGE + ": " + method)

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcInvalidParams(JsonRpcException):
    CODE = -32602
    MESSAGE = "Invalid Params"

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcInternalError(JsonRpcException):
    CODE = -32603
    MESSAGE = "Internal Error"

    @classmethod
    def of(cls, exc_info):
        exc_type, exc_value, exc_tb = exc_info
        return cls(
            message="".join(
                traceback.format_exception_only(exc_type, exc_value)
            ).strip(),
            data={"traceback": traceback.format_tb(exc_tb)},
        )

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcRequestCancelled(JsonRpcException):
    CODE = -32800
    MESSAGE = "JSON RPC cancelled"

    @classmethod
    def supports_code(cls, code):
        return code == cls.CODE


class JsonRpcServerError(JsonRpcException):
    @classmethod
    def supports_code(cls, code):
        return -32099 <= code <= -32000


_CLIENT_ERRORS = [
    JsonRpcParseError,
    JsonRpcInvalidRequest,
    JsonRpcMethodNotFound,
    JsonRpcInvalidParams,
    JsonRpcInternalError,
    JsonRpcRequestCancelled,
    JsonRpcServerError,
]
