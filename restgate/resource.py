from http import HTTPStatus

from multidict import CIMultiDictProxy, MultiDictProxy

from .abc import AbstractResource, Result

JSON_CONTENT_TYPE = 'application/json; charset=UTF-8'


def method_not_allowed() -> Result:
    status = HTTPStatus.METHOD_NOT_ALLOWED
    return (status.value, {'Content-Type': [JSON_CONTENT_TYPE]},
            status.phrase)


class Defaults(AbstractResource):
    """
    Resource answering every verb with 405. Subclass it and override only
    the verbs the resource actually supports.
    """
    def head(self, params: MultiDictProxy,
             headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()

    def get(self, params: MultiDictProxy,
            headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()

    def post(self, params: MultiDictProxy,
             headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()

    def put(self, params: MultiDictProxy,
            headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()

    def patch(self, params: MultiDictProxy,
              headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()

    def delete(self, params: MultiDictProxy,
               headers: CIMultiDictProxy) -> Result:
        return method_not_allowed()
