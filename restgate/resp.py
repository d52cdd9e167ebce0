import re
from http import HTTPStatus
from typing import Optional

from multidict import CIMultiDict

DEFAULT_CONTENT_TYPE = 'text/plain; charset=utf-8'

_TOKEN = re.compile(r"[!#$%&'*+.^_`|~0-9A-Za-z-]+")
_NEWLINE = re.compile(r'[\r\n]')


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ''


def body_allowed(method: str, status: int) -> bool:
    """HEAD responses and 1xx/204/304 statuses never carry a body."""
    if method == 'HEAD':
        return False
    return not (100 <= status < 200 or status in (204, 304))


def header_value(value) -> bytes:
    """
    Wire form of a header value: line breaks become spaces so a value can
    never start a new header line, text goes out as UTF-8.
    """
    return _NEWLINE.sub(' ', str(value)).encode('utf-8')


class Response:
    __slots__ = ('status', 'headers', 'body')

    def __init__(self, status: int = HTTPStatus.OK,
                 headers: Optional[CIMultiDict] = None, body: bytes = b''):
        """
        Mutable HTTP response filled in by a dispatcher and written by the
        protocol once the dispatcher returns.

        :param status: Status code
        :param headers: Pre-set headers, dispatchers only ever add to these
        :param body: Response content
        """
        self.status = int(status)
        self.headers = CIMultiDict() if headers is None else headers
        self.body = body

    def encode(self, version: str, method: str) -> bytes:
        """
        Serialize to the wire. Framing headers are filled in when absent,
        the body is dropped where HTTP forbids one.

        :param version: HTTP version of the request, e.g. '1.1'
        :param method: Request method
        :return: bytes
        """
        headers = CIMultiDict(self.headers)
        send_body = body_allowed(method, self.status)
        if self.body and 'Content-Type' not in headers:
            headers['Content-Type'] = DEFAULT_CONTENT_TYPE
        if 'Content-Length' not in headers and \
                not 100 <= self.status < 200 and self.status != 204:
            headers['Content-Length'] = str(len(self.body))
        headers.setdefault('Connection', 'close')

        buf = bytearray(b'HTTP/%b %d %b\r\n' % (
            version.encode(), self.status, _reason(self.status).encode()))
        for k, v in headers.items():
            if not _TOKEN.fullmatch(k):
                continue
            buf.extend(b'%b: %b\r\n' % (k.encode(), header_value(v)))
        buf.extend(b'\r\n')
        if send_body:
            buf.extend(self.body)
        return bytes(buf)
