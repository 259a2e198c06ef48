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
import sys
import time
import uuid
from concurrent import futures

from lsedit_core.lsedit_log import get_logger
from .exceptions import (
    JsonRpcException,
    JsonRpcRequestCancelled,
    JsonRpcInternalError,
    JsonRpcMethodNotFound,
)
from lsedit_core.basic import implements, log_and_silence_errors
from lsedit_core.jsonrpc.context import detach
from lsedit_core.jsonrpc.monitor import Monitor
from lsedit_core.options import BaseOptions, CANCEL_POLL_INTERVAL
from lsedit_core.protocols import ICallContext, IEndPoint, IFuture
from typing import Any, Dict, Optional

log = get_logger(__name__)
JSONRPC_VERSION = "2.0"
CANCEL_METHOD = "$/cancelRequest"


def require_monitor(func):
    """
    To be used as a decorator.
    """
    func.__require_monitor__ = True
    return func


def _params_for_log(params):
    if BaseOptions.DEBUG_MESSAGES:
        return params
    return "<params hidden: set LSEDIT_DEBUG_MESSAGES=1 to show>"


class Endpoint(object):
    def __init__(self, dispatcher, consumer, id_generator=lambda: str(uuid.uuid4())):
        """A JSON RPC endpoint for managing messages sent to/from the client.

        Args:
            dispatcher (dict): A dictionary of method name to handler function.
                The handler functions should return either the result or a callable that will be used to asynchronously
                compute the result.
            consumer (fn): A function that consumes JSON RPC message dicts and sends them to the client.
            id_generator (fn, optional): A function used to generate request IDs.
                Defaults to the string value of :func:`uuid.uuid4`.
        """
        import os

        self._dispatcher = dispatcher
        self._consumer = consumer
        self._id_generator = id_generator

        self._client_request_futures: Dict[Any, futures.Future] = {}
        self._server_request_futures: Dict[Any, futures.Future] = {}

        # i.e.: 5 to 15 workers.
        max_workers = min(15, (os.cpu_count() or 1) + 4)
        self._executor_service = futures.ThreadPoolExecutor(max_workers=max_workers)

    def shutdown(self):
        self._executor_service.shutdown(wait=False)

    @implements(IEndPoint.notify)
    def notify(self, method: str, params=None, ctx: Optional[ICallContext] = None):
        if ctx is not None and ctx.is_cancelled():
            # Note: to notify on a cancelled context it must be detached first.
            raise JsonRpcRequestCancelled(
                message=f"Unable to send {method} notification: context cancelled."
            )

        log.debug("Sending notification: %s %s", method, _params_for_log(params))

        message = {"jsonrpc": JSONRPC_VERSION, "method": method}
        if params is not None:
            message["params"] = params

        self._consumer(message)

    @implements(IEndPoint.request)
    def request(
        self, method: str, params=None, ctx: Optional[ICallContext] = None
    ) -> IFuture:
        msg_id = self._id_generator()
        log.debug(
            "Sending request with id %s: %s %s", msg_id, method, _params_for_log(params)
        )

        message = {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "method": method}
        if params is not None:
            message["params"] = params

        request_future: Any = futures.Future()
        request_future.request_id = msg_id
        request_future.add_done_callback(self._cancel_callback(msg_id, ctx))

        self._server_request_futures[msg_id] = request_future
        self._consumer(message)

        return request_future

    def call(
        self,
        ctx: ICallContext,
        method: str,
        params=None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Sends a request and waits for its result.

        If the given context is cancelled while waiting for the response, a
        `$/cancelRequest` is sent to the other side (best-effort: failures
        to send it are just logged) and `JsonRpcRequestCancelled` is raised.

        :raises TimeoutError:
            If a timeout is given and the response doesn't arrive in time.
        """
        ctx.check_cancelled()

        request_future: Any = self.request(method, params, ctx=ctx)
        msg_id = request_future.request_id
        initial_time = time.time()

        while True:
            try:
                return request_future.result(timeout=CANCEL_POLL_INTERVAL)
            except futures.TimeoutError:
                pass

            if ctx.is_cancelled():
                log.debug("Caller cancelled while waiting for: %s (%s)", msg_id, method)
                self._cancel_pending_request(msg_id)

                # Either raises JsonRpcRequestCancelled or provides the result
                # if it arrived in the meanwhile.
                return request_future.result()

            if timeout is not None and time.time() - initial_time > timeout:
                if self._server_request_futures.pop(msg_id, None) is not None:
                    raise TimeoutError(
                        f"Request {msg_id} ({method}) did not complete in {timeout} seconds."
                    )
                return request_future.result()

    def _cancel_pending_request(self, request_id) -> bool:
        request_future = self._server_request_futures.pop(request_id, None)
        if request_future is None:
            # The response was already received.
            return False
        request_future.set_exception(JsonRpcRequestCancelled())
        return True

    def _cancel_callback(self, request_id, ctx: Optional[ICallContext]):
        """Construct a cancellation callback for the given request ID."""

        def callback(future):
            if future.cancelled():
                raise AssertionError(
                    "Futures should not be cancelled. Use future.set_exception(JsonRpcRequestCancelled()) instead."
                )

            if getattr(future, "__answered__", False):
                # The other side already answered (i.e.: with a cancelled error).
                return

            exc = future.exception()
            if isinstance(exc, JsonRpcRequestCancelled):
                # The original context is cancelled at this point, so, notify
                # with the detached one.
                self._send_cancel_notification(detach(ctx), request_id)

        return callback

    @log_and_silence_errors(log)
    def _send_cancel_notification(self, ctx: ICallContext, request_id) -> None:
        log.debug("Sending cancel for request: %s (ctx: %s)", request_id, ctx)
        self.notify(CANCEL_METHOD, {"id": request_id}, ctx=ctx)

    @implements(IEndPoint.consume)
    def consume(self, message):
        if "jsonrpc" not in message or message["jsonrpc"] != JSONRPC_VERSION:
            log.warning("Unknown message type %s", message)
            return

        if "id" not in message:
            log.debug("Handling notification from client %s", message.get("method"))
            self._handle_notification(message["method"], message.get("params"))
        elif "method" not in message:
            log.debug("Handling response from client %s", message["id"])
            self._handle_response(
                message["id"], message.get("result"), message.get("error")
            )
        else:
            try:
                log.debug(
                    "Handling request from client %s: %s",
                    message["id"],
                    message["method"],
                )
                self._handle_request(
                    message["id"], message["method"], message.get("params")
                )
            except JsonRpcException as e:
                log.exception("Failed to handle request %s", message["id"])
                self._consumer(
                    {
                        "jsonrpc": JSONRPC_VERSION,
                        "id": message["id"],
                        "error": e.to_dict(),
                    }
                )
            except Exception:  # pylint: disable=broad-except
                log.exception("Failed to handle request %s", message["id"])
                self._consumer(
                    {
                        "jsonrpc": JSONRPC_VERSION,
                        "id": message["id"],
                        "error": JsonRpcInternalError.of(sys.exc_info()).to_dict(),
                    }
                )

    def _handle_notification(self, method, params):
        """Handle a notification from the client."""
        if method == CANCEL_METHOD:
            self._handle_cancel_notification(params["id"])
            return

        try:
            handler = self._dispatcher[method]
        except KeyError:
            log.warning("Ignoring notification for unknown method %s", method)
            return

        try:
            handler_result = handler(params)
        except Exception:  # pylint: disable=broad-except
            log.exception("Failed to handle notification %s", method)
            return

        if callable(handler_result):
            log.debug("Executing async notification handler %s", handler_result)
            notification_future = self._executor_service.submit(handler_result)
            notification_future.add_done_callback(
                self._notification_callback(method)
            )

    @staticmethod
    def _notification_callback(method):
        """Construct a notification callback for the given method."""

        def callback(future):
            try:
                future.result()
                log.debug("Successfully handled async notification %s", method)
            except Exception:  # pylint: disable=broad-except
                log.exception("Failed to handle async notification %s", method)

        return callback

    def _handle_cancel_notification(self, msg_id):
        """Handle a cancel notification from the client."""
        request_future = self._client_request_futures.pop(msg_id, None)

        if not request_future:
            log.warning(
                "Received cancel notification for unknown message id %s", msg_id
            )
            return

        monitor: Optional[Monitor] = getattr(request_future, "__monitor__", None)
        if monitor is not None:
            monitor.cancel()

        # Will only work if the request hasn't started executing
        if request_future.cancel():
            log.debug("Cancelled request with id %s", msg_id)

    @staticmethod
    def _call_handler(handler_result, monitor: Monitor, kwargs):
        # A request cancelled before being started isn't even executed.
        monitor.check_cancelled()
        return handler_result(**kwargs)

    def _handle_request(self, msg_id, method, params):
        """Handle a request from the client."""
        initial_time = time.time()
        try:
            handler = self._dispatcher[method]
        except KeyError:
            raise JsonRpcMethodNotFound.of(method)

        handler_result = handler(params)

        if callable(handler_result):
            kwargs = {}
            monitor = Monitor(f"Message: id: {msg_id}, method: {method}")
            if getattr(handler_result, "__require_monitor__", False):
                kwargs["monitor"] = monitor
            log.debug("Executing async request handler %s", handler_result)

            request_future: Any = self._executor_service.submit(
                self._call_handler, handler_result, monitor, kwargs
            )
            request_future.__monitor__ = monitor
            self._client_request_futures[msg_id] = request_future
            request_future.add_done_callback(self._request_callback(msg_id))
        elif isinstance(handler_result, futures.Future):
            log.debug("Request handler is already a future %s", handler_result)
            self._client_request_futures[msg_id] = handler_result
            handler_result.add_done_callback(self._request_callback(msg_id))
        else:
            log.debug(
                "Got result from synchronous request handler (in %.2fs): %s",
                time.time() - initial_time,
                handler_result,
            )
            self._consumer(
                {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "result": handler_result}
            )

    def _request_callback(self, request_id):
        """Construct a request callback for the given request ID."""

        def callback(future):
            # Remove the future from the client requests map
            self._client_request_futures.pop(request_id, None)

            message: Dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": request_id}
            try:
                if future.cancelled():
                    raise JsonRpcRequestCancelled()

                message["result"] = future.result()
            except JsonRpcRequestCancelled as e:
                log.debug("Cancelled request: %s", request_id)
                message["error"] = e.to_dict()
            except JsonRpcException as e:
                log.exception("Failed to handle request %s", request_id)
                message["error"] = e.to_dict()
            except Exception:  # pylint: disable=broad-except
                log.exception("Failed to handle request %s", request_id)
                message["error"] = JsonRpcInternalError.of(sys.exc_info()).to_dict()

            self._consumer(message)

        return callback

    def _handle_response(self, msg_id, result=None, error=None):
        """Handle a response from the client."""
        request_future = self._server_request_futures.pop(msg_id, None)

        if not request_future:
            log.warning("Received response to unknown message id %s", msg_id)
            return

        if error is not None:
            log.debug("Received error response to message %s: %s", msg_id, error)
            request_future.__answered__ = True
            request_future.set_exception(JsonRpcException.from_dict(error))
        else:
            log.debug("Received result for message %s: %s", msg_id, result)
            request_future.set_result(result)

    def __typecheckself__(self) -> None:
        from lsedit_core.protocols import check_implements

        _: IEndPoint = check_implements(self)
