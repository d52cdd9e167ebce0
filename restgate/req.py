import asyncio
from typing import List, Optional, Tuple

import httptools
from multidict import CIMultiDict, CIMultiDictProxy


class Request:
    __slots__ = ('_method', '_version', '_headers', '_content', '_url',
                 '_parsed_url')

    def __init__(self, method: bytes, version: str,
                 headers: List[Tuple[bytes, bytes]],
                 content: asyncio.StreamReader, url: str):
        """
        Model of an HTTP Request, likely unbuffered.

        :param method: Request METHOD, as delivered by the parser
        :param version: HTTP Version
        :param headers: List of Tuples, raw name/value pairs in wire order
        :param content: Raw stream reader
        :param url: Target URL (path and query string), the wire bytes
            decoded as latin-1
        """
        self._method = method.decode('ascii').upper()
        self._version = version
        self._headers = CIMultiDictProxy(CIMultiDict(
            (k.decode('latin-1'), v.decode('latin-1')) for k, v in headers
        ))
        self._content = content
        self._url = url
        self._parsed_url = None

    @property
    def method(self) -> str:
        return self._method

    @property
    def version(self) -> str:
        return self._version

    @property
    def headers(self) -> CIMultiDictProxy:
        return self._headers

    @property
    def content(self) -> asyncio.StreamReader:
        """The raw content reader, note this can only be read once."""
        return self._content

    @property
    def url(self) -> str:
        return self._url

    @property
    def path(self) -> str:
        path = self._parse_url().path
        return path.decode('utf-8', 'replace') if path else '/'

    @property
    def query_string(self) -> str:
        query = self._parse_url().query
        return query.decode('utf-8', 'replace') if query else ''

    @property
    def content_type(self) -> Optional[str]:
        return self._headers.get('Content-Type')

    def _parse_url(self):
        """
        Lazily split the target URL. Raises
        httptools.HttpParserInvalidURLError for unparseable targets.
        """
        if self._parsed_url is None:
            self._parsed_url = httptools.parse_url(self._url.encode('latin-1'))
        return self._parsed_url
