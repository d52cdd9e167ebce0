import asyncio
from typing import List, Optional, Tuple

from restgate.abc import AbstractResource
from restgate.dispatcher import handle
from restgate.req import Request
from restgate.resource import Defaults


def make_request(method: str, url: str = '/', *,
                 headers: Optional[List[Tuple[str, str]]] = None,
                 body: bytes = b'') -> Request:
    """Build a Request whose content stream is already complete."""
    reader = asyncio.StreamReader()
    if body:
        reader.feed_data(body)
    reader.feed_eof()
    raw_headers = [(k.encode(), v.encode()) for k, v in headers or ()]
    return Request(method.encode(), '1.1', raw_headers, reader, url)


class RecordingResource(AbstractResource):
    """Answers every verb with a canned result and records each call."""

    def __init__(self, status=200, headers=None, payload='ok'):
        self.result = (status, headers or {}, payload)
        self.calls = []

    def _record(self, name, params, headers):
        self.calls.append((name, params, headers))
        return self.result

    def head(self, params, headers):
        return self._record('head', params, headers)

    def get(self, params, headers):
        return self._record('get', params, headers)

    def post(self, params, headers):
        return self._record('post', params, headers)

    def put(self, params, headers):
        return self._record('put', params, headers)

    def patch(self, params, headers):
        return self._record('patch', params, headers)

    def delete(self, params, headers):
        return self._record('delete', params, headers)


class ItemsResource(Defaults):
    """Only POST is supported, everything else falls back to 405."""

    def post(self, params, headers):
        return 201, {'Location': ['/items/42']}, {'id': 42}


def items_dispatcher():
    """Module level so it can be handed to a worker process."""
    return handle(ItemsResource())
