"""
A call context carries ambient values (i.e.: a trace id) along with the
cancellation of the caller.

A detached context keeps the values but is never cancelled. It's used to send
the `$/cancelRequest` notification when the caller is cancelled (sending it
with the original context would be refused as it's already cancelled).
"""
from typing import Any, Dict, Optional
from types import MappingProxyType

from lsedit_core.jsonrpc.monitor import Monitor
from lsedit_core.protocols import ICallContext, IMonitor


class CallContext(object):
    __slots__ = ["_values", "_monitor"]

    def __init__(
        self, values: Optional[Dict[str, Any]] = None, monitor: Optional[IMonitor] = None
    ):
        self._values = MappingProxyType(dict(values or {}))
        self._monitor = monitor if monitor is not None else Monitor()

    @property
    def values(self):
        return self._values

    @property
    def monitor(self) -> IMonitor:
        return self._monitor

    def is_cancelled(self) -> bool:
        return self._monitor.is_cancelled()

    def check_cancelled(self) -> None:
        self._monitor.check_cancelled()

    def cancel(self) -> None:
        self._monitor.cancel()

    def __repr__(self):
        return f"CallContext({dict(self._values)!r}, cancelled={self.is_cancelled()})"

    def __typecheckself__(self) -> None:
        from lsedit_core.protocols import check_implements

        _: ICallContext = check_implements(self)


class _NeverCancelledMonitor(object):
    def cancel(self) -> None:
        pass

    def is_cancelled(self) -> bool:
        return False

    def check_cancelled(self) -> None:
        pass

    def __typecheckself__(self) -> None:
        from lsedit_core.protocols import check_implements

        _: IMonitor = check_implements(self)


def detach(ctx: Optional[ICallContext]) -> CallContext:
    """
    :return:
        A context with the values of the given context which isn't affected by
        its cancellation (and which can't be cancelled itself).
    """
    values = dict(ctx.values) if ctx is not None else {}
    return CallContext(values, monitor=_NeverCancelledMonitor())
