import json
import logging
from http import HTTPStatus
from typing import Any, Iterator, Tuple

from multidict import MultiMapping

from .abc import AbstractDispatcher, AbstractResource, HeaderSpec, Result
from .exc import FormParseError, PayloadSerializationError
from .form import parse_form
from .req import Request
from .resp import Response

logger = logging.getLogger(__name__)

# Verbs with a matching (lowercase) operation on AbstractResource
RESOURCE_METHODS = frozenset(('HEAD', 'GET', 'POST', 'PUT', 'PATCH',
                              'DELETE'))


def serialize(payload: Any) -> bytes:
    """
    Compact JSON encoding of a resource payload.

    :raises PayloadSerializationError: for unsupported types, circular
        references and non-finite floats
    """
    try:
        return json.dumps(payload, separators=(',', ':'),
                          allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as exc:
        raise PayloadSerializationError(str(exc)) from exc


def iter_headers(headers: HeaderSpec) -> Iterator[Tuple[str, str]]:
    """Flatten the headers returned by an operation into name/value pairs."""
    if isinstance(headers, MultiMapping):
        yield from headers.items()
        return
    for name, values in headers.items():
        if isinstance(values, str):
            yield name, values
        else:
            for value in values:
                yield name, value


class ResourceDispatcher(AbstractDispatcher):
    """
    Dispatcher that hands every request to the operation of an
    AbstractResource matching the request method and writes the JSON
    encoded result into the response.
    """
    __slots__ = ('_resource',)

    def __init__(self, resource: AbstractResource):
        assert isinstance(resource, AbstractResource), resource
        self._resource = resource

    @property
    def resource(self) -> AbstractResource:
        return self._resource

    def invoke(self, method: str, params, headers) -> Result:
        """
        Run the operation for ``method``. Anything outside RESOURCE_METHODS
        is answered with a bare 405 without touching the resource.
        """
        if method not in RESOURCE_METHODS:
            return HTTPStatus.METHOD_NOT_ALLOWED.value, {}, ''
        operation = getattr(self._resource, method.lower())
        return operation(params, headers)

    async def dispatch(self, request: Request, response: Response) -> None:
        try:
            params = await parse_form(request)
        except FormParseError as exc:
            logger.debug('malformed form data: %s', exc)
            response.status = exc.status.value
            response.body = b''
            return

        status, headers, payload = self.invoke(request.method, params,
                                               request.headers)

        try:
            body = serialize(payload)
        except PayloadSerializationError as exc:
            logger.debug('unable to serialize %s response: %s',
                         request.method, exc)
            response.status = exc.status.value
            response.body = b''
            return

        for name, value in iter_headers(headers):
            response.headers.add(name, value)
        response.status = int(status)
        response.body = body


def handle(resource: AbstractResource) -> ResourceDispatcher:
    """
    Wrap ``resource`` into a dispatcher usable by HttpProtocol.

    :param resource: the resource implementation
    :return: ResourceDispatcher
    """
    return ResourceDispatcher(resource)
