import io

import pytest


def test_log_and_silence_errors():
    from lsedit_core.basic import log_and_silence_errors
    from lsedit_core.lsedit_log import configure_logger, get_logger

    log = get_logger("test_basic")

    @log_and_silence_errors(log, return_on_error="error")
    def raise_error():
        raise RuntimeError("Some failure")

    s = io.StringIO()
    with configure_logger("", 0, s):
        assert raise_error() == "error"
    assert "Some failure" in s.getvalue()


def test_log_and_silence_errors_keeps_cancellation():
    from lsedit_core.basic import log_and_silence_errors
    from lsedit_core.jsonrpc.exceptions import JsonRpcRequestCancelled
    from lsedit_core.lsedit_log import get_logger

    @log_and_silence_errors(get_logger("test_basic"))
    def cancelled():
        raise JsonRpcRequestCancelled()

    with pytest.raises(JsonRpcRequestCancelled):
        cancelled()


def test_implements():
    from lsedit_core.basic import implements
    from lsedit_core.protocols import IMonitor

    with pytest.raises(AssertionError):

        class _Monitor(object):
            @implements(IMonitor.cancel)
            def is_cancelled(self):
                pass


def test_wait_for_condition():
    from lsedit_core.basic import wait_for_condition

    wait_for_condition(lambda: True)

    with pytest.raises(TimeoutError) as e:
        wait_for_condition(lambda: False, msg="Not there", timeout=0.1, sleep=0.01)
    assert "Not there" in str(e.value)
