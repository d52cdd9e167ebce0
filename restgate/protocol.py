import asyncio
import functools
import logging
from http import HTTPStatus
from typing import Optional

import httptools

from .abc import AbstractDispatcher
from .exc import HTTPException
from .req import Request
from .resp import Response

logger = logging.getLogger(__name__)


class HttpProtocol(asyncio.Protocol):
    __slots__ = ('dispatcher', 'loop', 'parser', 'transport', 'task',
                 'request_timeout', 'reader', 'timeout', 'url', 'headers')

    """
    Minimal HTTP/1.x server protocol: one request per connection, handed to
    a dispatcher as soon as the headers are in. The dispatcher fills in a
    Response which is written once it returns, then the connection closes.

    :param loop: event loop
    :param dispatcher: dispatcher strategy
    :param request_timeout: Max length of a request cycle in secs (def: 15s)
    """
    def __init__(self, loop: asyncio.AbstractEventLoop,
                 dispatcher: AbstractDispatcher, *, request_timeout: int = 15):
        assert isinstance(dispatcher, AbstractDispatcher), dispatcher

        self.dispatcher = dispatcher
        self.loop = loop

        self.parser = None
        self.transport = None
        self.task = None  # in-flight dispatch
        self.request_timeout = request_timeout

        self.reader = None  # request content reader
        self.timeout = None  # call length limit

        # request info
        self.url = None
        self.headers = None

    # ===========================
    # asyncio.Protocol callbacks
    # ===========================
    def connection_made(self, transport: asyncio.Transport) -> None:
        self.transport = transport
        self.parser = httptools.HttpRequestParser(self)
        self.reader = asyncio.StreamReader(loop=self.loop)

        self.start_timeout()

    def connection_lost(self, exc: Optional[Exception]) -> None:
        self.cancel_timeout()
        if self.task is not None and not self.task.done():
            self.task.cancel()

    def data_received(self, data: bytes) -> None:
        try:
            self.parser.feed_data(data)
        except httptools.HttpParserError as exc:
            logger.debug('unparseable request: %s', exc)
            self.write_bare(HTTPStatus.BAD_REQUEST)

    # ===========================
    # httptools parser callbacks
    # ===========================
    def on_message_begin(self) -> None:
        self.url = None
        self.headers = []

    def on_header(self, name: bytes, value: bytes) -> None:
        self.headers.append((name, value))

    def on_url(self, url: bytes) -> None:
        self.url = url.decode('latin-1')

    def on_headers_complete(self) -> None:
        request = Request(self.parser.get_method(),
                          self.parser.get_http_version(),
                          self.headers, self.reader, self.url)
        response = Response()
        self.task = self.loop.create_task(
            self.dispatcher.dispatch(request, response))
        self.task.add_done_callback(functools.partial(
            self.handle_task_complete, request=request, response=response))

    def on_body(self, body: bytes) -> None:
        self.reader.feed_data(body)

    def on_message_complete(self) -> None:
        self.reader.feed_eof()

    # ================================
    # ours
    # ================================
    def start_timeout(self) -> None:
        """
        Start the request timeout task, triggering on_timeout_elapsed if the
        request time exceeds the time set.
        :return:
        """
        self.timeout = self.loop.call_later(self.request_timeout,
                                            self.on_timeout_elapsed)

    def cancel_timeout(self) -> None:
        """
        Cancel the request timeout task.
        :return:
        """
        if self.timeout:
            self.timeout.cancel()

    def on_timeout_elapsed(self) -> None:
        """
        Callback to handle connection timeouts
        :return:
        """
        logger.warning('request duration timeout (%ss), closing connection',
                       self.request_timeout)
        self.transport.close()

    def write_bare(self, status: HTTPStatus) -> None:
        """
        Answer with a body-less status and close, used when there is no
        parsed request to respond to.
        """
        if self.transport.is_closing():
            return
        self.transport.write(Response(status).encode('1.1', 'GET'))
        self.transport.close()

    def handle_task_complete(self, task: asyncio.Task, request: Request,
                             response: Response) -> None:
        """
        Handle the cleanup after a dispatcher completed its job.

        :param task: Completed task
        :param request: Request
        :param response: Response the dispatcher filled in
        :return: None
        """
        # There isn't really anything we can do with the transport once it's
        # shut or shutting down.
        if self.transport.is_closing():
            return

        try:
            if task.cancelled():
                return
            f = self.handle_task_error if task.exception()\
                else self.handle_task_ok
            f(task, request, response)
        finally:
            self.transport.close()

    def handle_task_ok(self, task: asyncio.Task, request: Request,
                       response: Response) -> None:
        """
        Write the response of a successfully completed dispatch.

        :param task: Completed task, task.exception() is None
        :param request: Original request
        :param response: Response filled in by the dispatcher
        :return: None
        """
        try:
            data = response.encode(request.version, request.method)
        except Exception:  # noqa: BLE001
            logger.exception('unable to encode %s %s response',
                             request.method, request.url)
            data = Response(HTTPStatus.INTERNAL_SERVER_ERROR).encode(
                request.version, request.method)
        self.transport.write(data)

    def handle_task_error(self, task: asyncio.Task, request: Request,
                          response: Response) -> None:
        """
        Handle the non-successful execution of a dispatch. Whatever the
        dispatcher put into the response is discarded.

        :param task: Completed task, task.exception() is not None
        :param request: Original request
        :param response: Response filled in by the dispatcher (unused)
        :return: None
        """
        exc = task.exception()
        if isinstance(exc, HTTPException):
            logger.info('%s %s failed with %d: %s', request.method,
                        request.url, exc.status.value, exc)
            error = Response(exc.status, body=str(exc).encode())
        else:
            logger.error('%s %s raised', request.method, request.url,
                         exc_info=exc)
            error = Response(HTTPStatus.INTERNAL_SERVER_ERROR)

        self.transport.write(error.encode(request.version, request.method))
