import abc
from typing import Any, Mapping, Tuple, Union

from multidict import CIMultiDictProxy, MultiDictProxy

from restgate.req import Request
from restgate.resp import Response

# What a resource operation may hand back as headers: name -> [values],
# name -> value, or a multidict.
HeaderSpec = Union[Mapping[str, Any], CIMultiDictProxy]
Result = Tuple[int, HeaderSpec, Any]


class AbstractDispatcher(metaclass=abc.ABCMeta):
    """
    Definition of a dispatcher, the translation from a parsed HTTP request
    into the response the server writes back.
    """
    @abc.abstractmethod
    async def dispatch(self, request: Request, response: Response) -> None:
        raise NotImplementedError


class AbstractResource(metaclass=abc.ABCMeta):
    """
    A RESTful resource: one operation per supported HTTP verb.

    Every operation receives the parsed form parameters and the request
    headers, and returns ``(status, headers, payload)`` where payload is
    anything :func:`json.dumps` accepts.
    """
    @abc.abstractmethod
    def head(self, params: MultiDictProxy,
             headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, params: MultiDictProxy,
            headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError

    @abc.abstractmethod
    def post(self, params: MultiDictProxy,
             headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError

    @abc.abstractmethod
    def put(self, params: MultiDictProxy,
            headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError

    @abc.abstractmethod
    def patch(self, params: MultiDictProxy,
              headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, params: MultiDictProxy,
               headers: CIMultiDictProxy) -> Result:
        raise NotImplementedError
