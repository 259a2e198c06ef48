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
from lsedit_core.lsedit_log import get_logger
from lsedit_core.basic import implements
from lsedit_core.protocols import IConfig, Sentinel
from typing import Any, FrozenSet


log = get_logger(__name__)

# The encoding used for the `character` of positions exchanged with the client
# (one of `lsedit_core.lsp.PositionEncodingKind`).
OPTION_POSITION_ENCODING = "lsedit.positionEncoding"

ALL_LSEDIT_OPTIONS: FrozenSet[str] = frozenset((OPTION_POSITION_ENCODING,))


def flatten_keys(d: dict, parent_key="", all_options=frozenset(), result_dict=None):
    if result_dict is None:
        result_dict = {}

    for k, v in d.items():
        new_key = parent_key + "." + k if parent_key else k

        if new_key not in all_options and isinstance(v, dict):
            flatten_keys(v, new_key, all_options, result_dict)
            continue

        result_dict[new_key] = v
    return result_dict


class Config(object):
    ALL_OPTIONS: FrozenSet[str] = ALL_LSEDIT_OPTIONS

    def __init__(self, all_options: FrozenSet[str] = frozenset()):
        if all_options:
            self.ALL_OPTIONS = all_options

        self._settings: dict = {}
        self._override_settings: dict = {}
        self._full_settings: dict = {}

    @implements(IConfig.get_setting)
    def get_setting(self, key, expected_type, default=Sentinel.SENTINEL) -> Any:
        try:
            s = self._full_settings[key]
            if not isinstance(s, expected_type):
                if isinstance(expected_type, tuple):
                    # Don't try to make a cast if a tuple of classes was passed.
                    if default is not Sentinel.SENTINEL:
                        return default

                    raise KeyError(
                        "Expected %s to be a setting of type: %s. Found: %s"
                        % (key, expected_type, type(s))
                    )

                try:
                    if expected_type in (list, tuple):
                        if expected_type == list and isinstance(s, tuple):
                            return expected_type(s)

                        if expected_type == tuple and isinstance(s, list):
                            return expected_type(s)

                        # Don't try to make a cast for list or tuple (we don't
                        # want a string to end up being a list of chars).
                        if default is not Sentinel.SENTINEL:
                            return default

                        raise KeyError(
                            "Expected %s to be a setting of type: %s. Found: %s"
                            % (key, expected_type, type(s))
                        )

                    # Check if we can cast it...
                    return expected_type(s)
                except (TypeError, ValueError):
                    if default is not Sentinel.SENTINEL:
                        return default

                    raise KeyError(
                        "Expected %s to be a setting of type: %s. Found: %s"
                        % (key, expected_type, type(s))
                    )
        except KeyError:
            if default is not Sentinel.SENTINEL:
                return default
            raise
        return s

    def _update_full_settings(self):
        full_settings = self._settings.copy()
        full_settings.update(self._override_settings)
        self._full_settings = full_settings
        log.debug("Updated settings to %s", full_settings)

    @implements(IConfig.update)
    def update(self, settings: dict):
        self._settings = flatten_keys(settings, all_options=self.ALL_OPTIONS)
        self._update_full_settings()

    @implements(IConfig.set_override_settings)
    def set_override_settings(self, override_settings):
        self._override_settings = flatten_keys(
            override_settings, all_options=self.ALL_OPTIONS
        )
        self._update_full_settings()

    @implements(IConfig.update_override_settings)
    def update_override_settings(self, override_settings):
        settings = flatten_keys(override_settings, all_options=self.ALL_OPTIONS)
        override = self._override_settings.copy()
        override.update(settings)
        self._override_settings = override
        self._update_full_settings()

    @implements(IConfig.get_full_settings)
    def get_full_settings(self):
        return self._full_settings

    def __typecheckself__(self) -> None:
        from lsedit_core.protocols import check_implements

        _: IConfig = check_implements(self)
