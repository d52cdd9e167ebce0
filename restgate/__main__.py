import itertools
import logging
import threading
from http import HTTPStatus

from restgate.dispatcher import handle
from restgate.resource import JSON_CONTENT_TYPE, Defaults
from restgate.server import serve


class ItemsResource(Defaults):
    """In-memory item store: GET lists or fetches by ?id=, POST creates."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._items = {}

    def get(self, params, headers):
        with self._lock:
            if 'id' not in params:
                return 200, {'Content-Type': [JSON_CONTENT_TYPE]}, \
                    list(self._items.values())
            item = self._items.get(params['id'])
        if item is None:
            status = HTTPStatus.NOT_FOUND
            return status.value, {'Content-Type': [JSON_CONTENT_TYPE]}, \
                status.phrase
        return 200, {'Content-Type': [JSON_CONTENT_TYPE]}, item

    def post(self, params, headers):
        with self._lock:
            item_id = next(self._ids)
            item = {'id': item_id, 'name': params.get('name', '')}
            self._items[str(item_id)] = item
        return 201, {'Content-Type': [JSON_CONTENT_TYPE],
                     'Location': ['/items?id=%d' % item_id]}, item


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    resource = ItemsResource()
    serve(lambda: handle(resource))
