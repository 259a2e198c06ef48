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
import json
from typing import Any, Optional


def encode_message(message, **json_dumps_args) -> bytes:
    """
    :return:
        The message serialized as json and framed with its `Content-Length`
        header.

    :raises ValueError:
        If the message can't be serialized to json.
    """
    try:
        body = json.dumps(message, **json_dumps_args)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Unable to serialize message to json: {e}") from e

    as_bytes = body.encode("utf-8")
    content_len_as_str = "Content-Length: %s\r\n\r\n" % len(as_bytes)
    return content_len_as_str.encode("ascii") + as_bytes


def unmarshal_params(raw: Optional[str]) -> Any:
    """
    Decodes the raw json for the params of a message.

    An empty payload or an explicit `null` decodes to None.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not raw or raw == "null":
        return None
    return json.loads(raw)
