from .abc import AbstractDispatcher, AbstractResource
from .dispatcher import ResourceDispatcher, handle
from .protocol import HttpProtocol
from .req import Request
from .resource import Defaults
from .resp import Response
from .server import serve


__all__ = ('AbstractDispatcher', 'AbstractResource', 'Defaults',
           'HttpProtocol', 'Request', 'ResourceDispatcher', 'Response',
           'handle', 'serve')
