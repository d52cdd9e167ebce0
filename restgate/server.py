import asyncio
import logging
from signal import SIGINT, SIGTERM
from typing import Callable

import uvloop

from .abc import AbstractDispatcher
from .protocol import HttpProtocol

logger = logging.getLogger(__name__)

DispatcherFactory = Callable[[], AbstractDispatcher]


def serve(dispatcher_factory: DispatcherFactory, host: str = '0.0.0.0',
          port: int = 8080, *, reuse_port: bool = False,
          request_timeout: int = 15) -> None:
    """
    Run a uvloop event loop serving HttpProtocol until SIGINT/SIGTERM.

    :param dispatcher_factory: called once per connection for a dispatcher
    :param host: interface to bind
    :param port: port to bind
    :param reuse_port: bind with SO_REUSEPORT, for several processes
        sharing one port
    :param request_timeout: Max length of a request cycle in secs
    """
    loop = uvloop.new_event_loop()
    asyncio.set_event_loop(loop)

    def proto_factory():
        return HttpProtocol(loop, dispatcher=dispatcher_factory(),
                            request_timeout=request_timeout)

    srv_coro = loop.create_server(proto_factory, host, port,
                                  reuse_port=reuse_port)
    srv = loop.run_until_complete(srv_coro)
    logger.info('Listening on: %s', srv.sockets[0].getsockname())
    loop.add_signal_handler(SIGINT, loop.stop)
    loop.add_signal_handler(SIGTERM, loop.stop)

    try:
        loop.run_forever()
    except KeyboardInterrupt:
        pass
    finally:
        srv.close()
        loop.run_until_complete(srv.wait_closed())
        loop.close()
