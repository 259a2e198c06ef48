import pytest

from lsedit_core.jsonrpc.context import CallContext, detach
from lsedit_core.jsonrpc.exceptions import JsonRpcRequestCancelled


def test_call_context_cancel():
    ctx = CallContext({"trace": "abc"})
    assert not ctx.is_cancelled()
    ctx.check_cancelled()

    ctx.cancel()
    assert ctx.is_cancelled()
    with pytest.raises(JsonRpcRequestCancelled):
        ctx.check_cancelled()


def test_call_context_values_are_read_only():
    values = {"trace": "abc"}
    ctx = CallContext(values)
    values["trace"] = "changed"
    assert ctx.values["trace"] == "abc"

    with pytest.raises(TypeError):
        ctx.values["trace"] = "other"


def test_detach():
    ctx = CallContext({"trace": "abc"})
    ctx.cancel()

    detached = detach(ctx)
    assert dict(detached.values) == {"trace": "abc"}
    assert not detached.is_cancelled()
    detached.check_cancelled()

    # Can't be cancelled.
    detached.cancel()
    assert not detached.is_cancelled()

    assert dict(detach(None).values) == {}
    assert "cancelled=False" in repr(detached)
