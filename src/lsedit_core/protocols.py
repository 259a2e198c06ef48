from typing import (
    Dict,
    Any,
    Generic,
    Callable,
    Optional,
    Tuple,
    Union,
    Protocol,
)
from typing import TypeVar
import typing

from enum import Enum


if typing.TYPE_CHECKING:
    # This would lead to a circular import, so, do it only when type-checking.
    from lsedit_core.lsp import PositionTypedDict
    from lsedit_core.lsp import RangeTypedDict


T = TypeVar("T")
Y = TypeVar("Y", covariant=True)


class Sentinel(Enum):
    SENTINEL = 0
    USE_DEFAULT_TIMEOUT = 1


def check_implements(x: T) -> T:
    """
    Helper to check if a class implements some protocol.

    :important: It must be the last method in a class due to
                https://github.com/python/mypy/issues/9266

        Example:

    def __typecheckself__(self) -> None:
        _: IExpectedProtocol = check_implements(self)

    Mypy should complain if `self` is not implementing the IExpectedProtocol.
    """
    return x


class IFuture(Generic[Y], Protocol):
    def result(self, timeout: typing.Optional[float] = None) -> Y:
        """Return the result of the call that the future represents.

        Args:
            timeout: The number of seconds to wait for the result if the future
                isn't done. If None, then there is no limit on the wait time.

        Returns:
            The result of the call that the future represents.

        Raises:
            CancelledError: If the future was cancelled.
            TimeoutError: If the future didn't finish executing before the given
                timeout.
            Exception: If the call raised then that exception will be raised.
        """

    def add_done_callback(self, fn: Callable[["IFuture"], Any]):
        """Attaches a callable that will be called when the future finishes.

        Args:
            fn: A callable that will be called with this future as its only
                argument when the future completes or is cancelled.
        """


class IMonitor(Protocol):
    def cancel(self) -> None:
        pass

    def is_cancelled(self) -> bool:
        pass

    def check_cancelled(self) -> None:
        """
        raises JsonRpcRequestCancelled if cancelled.
        """


class ICallContext(Protocol):
    """
    The context of a call: ambient values (read-only) plus a cancellation
    signal.
    """

    @property
    def values(self) -> Dict[str, Any]:
        pass

    def is_cancelled(self) -> bool:
        pass

    def check_cancelled(self) -> None:
        """
        raises JsonRpcRequestCancelled if cancelled.
        """


class IEndPoint(Protocol):
    def notify(
        self, method: str, params: Any = None, ctx: Optional[ICallContext] = None
    ):
        """Send a JSON RPC notification to the client.

        Args:
            method (str): The method name of the notification to send
            params (any): The payload of the notification
            ctx: If given and already cancelled the notification is not sent.
        """

    def request(
        self, method: str, params=None, ctx: Optional[ICallContext] = None
    ) -> IFuture:
        """Send a JSON RPC request to the client.

        Args:
            method (str): The method name of the message to send
            params (any): The payload of the message

        Returns:
            Future that will resolve once a response has been received
        """

    def consume(self, message: Dict):
        """Consume a JSON RPC message from the client.

        Args:
            message (dict): The JSON RPC message sent by the client
        """


class IMapper(Protocol):
    """
    Translates between byte offsets of a document snapshot and protocol
    line/character positions.
    """

    @property
    def content(self) -> bytes:
        pass

    def offset_position(self, offset: int) -> "PositionTypedDict":
        pass

    def position_offset(self, position: "PositionTypedDict") -> int:
        pass

    def offset_range(self, start: int, end: int) -> "RangeTypedDict":
        """
        :raises MappingError:
            If some offset cannot be resolved.
        """

    def range_offsets(self, range: "RangeTypedDict") -> Tuple[int, int]:
        """
        :raises MappingError:
            If some position cannot be resolved.
        """


class IConfig(Protocol):
    def get_setting(
        self, key: str, expected_type: Any, default=Sentinel.SENTINEL
    ) -> Any:
        """
        :param key:
            The setting to be gotten (i.e.: lsedit.positionEncoding)

        :param expected_type:
            The type which we're expecting.

        :param default:
            If some default is given instead of raising an error, the default
            will be returned.

        :raises KeyError:
            If the setting could not be found (or could not be converted to the
            expected type) and no default was given.
        """

    def update(self, settings: dict) -> None:
        """Recursively merge the given settings into the current settings."""

    def get_full_settings(self) -> dict:
        pass

    def set_override_settings(self, override_settings: dict) -> None:
        """
        Used to override settings with the given values (which must not be
        overridden by the client).
        """

    def update_override_settings(self, override_settings: dict) -> None:
        """
        Used to update the override settings with the given values.
        """


class ILog(Protocol):
    def critical(self, msg: str = "", *args: Any):
        pass

    def info(self, msg: str = "", *args: Any):
        pass

    def warn(self, msg: str = "", *args: Any):
        pass

    def warning(self, msg: str = "", *args: Any):
        pass

    def debug(self, msg: str = "", *args: Any):
        pass

    def exception(self, msg: str = "", *args: Any):
        pass

    def error(self, msg: str = "", *args: Any):
        pass


# The content of a buffer (patches are applied on one of those).
Buffer = Union[str, bytes]
