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
import datetime

import pytest

from lsedit_core.jsonrpc.streams import encode_message, unmarshal_params


def test_encode_message():
    encoded = encode_message(
        {"id": "hello", "method": "method", "params": {}}, sort_keys=True
    )
    assert encoded == (
        b"Content-Length: 49\r\n"
        b"\r\n"
        b'{"id": "hello", "method": "method", "params": {}}'
    )


def test_encode_message_length_in_bytes():
    encoded = encode_message({"text": "ação"}, sort_keys=True)
    body = '{"text": "a\\u00e7\\u00e3o"}'.encode("utf-8")
    assert encoded == b"Content-Length: %d\r\n\r\n" % len(body) + body

    encoded = encode_message({"text": "ação"}, ensure_ascii=False)
    body = '{"text": "ação"}'.encode("utf-8")
    # The length is in bytes, not chars.
    assert encoded == b"Content-Length: 18\r\n\r\n" + body


def test_encode_message_bad_message():
    with pytest.raises(ValueError) as e:
        encode_message({"value": object()})
    assert "Unable to serialize" in str(e.value)

    # A datetime isn't serializable either.
    with pytest.raises(ValueError):
        encode_message(
            datetime.datetime(year=2019, month=1, day=1, hour=1, minute=1, second=1)
        )


def test_unmarshal_params():
    assert unmarshal_params(None) is None
    assert unmarshal_params("") is None
    assert unmarshal_params("null") is None
    assert unmarshal_params(" null ") is None
    assert unmarshal_params('{"id": 1}') == {"id": 1}
    assert unmarshal_params("[1, 2]") == [1, 2]
