import os
from typing import Optional

import pytest

from lsedit_core.options import USE_TIMEOUTS, NO_TIMEOUT

TIMEOUT: Optional[float]
_curr_pytest_timeout = os.getenv("PYTEST_TIMEOUT")
if _curr_pytest_timeout:
    TIMEOUT = float(_curr_pytest_timeout) / 3.0
else:
    TIMEOUT = 20
if not USE_TIMEOUTS:
    TIMEOUT = NO_TIMEOUT  # i.e.: None


def wait_for_test_condition(condition, msg=None, timeout=TIMEOUT, sleep=1 / 20.0):
    from lsedit_core.basic import wait_for_condition as w

    return w(condition, msg=msg, timeout=timeout, sleep=sleep)


@pytest.fixture(autouse=True)
def config_logger():
    from lsedit_core.lsedit_log import configure_logger

    with configure_logger("test", 2, None):
        yield


@pytest.fixture
def debug_options():
    """
    Enables the debug options for edits and messages during the test.
    """
    from lsedit_core.options import BaseOptions

    initial = BaseOptions.DEBUG_EDITS, BaseOptions.DEBUG_MESSAGES
    BaseOptions.DEBUG_EDITS = True
    BaseOptions.DEBUG_MESSAGES = True
    try:
        yield BaseOptions
    finally:
        BaseOptions.DEBUG_EDITS, BaseOptions.DEBUG_MESSAGES = initial
