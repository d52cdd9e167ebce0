import logging
import re
from typing import Iterator, Tuple
from urllib.parse import unquote_plus

import httptools
from multidict import MultiDict, MultiDictProxy

from .exc import FormParseError
from .req import Request

logger = logging.getLogger(__name__)

# Upper bound on a urlencoded body we are willing to buffer (10 MiB)
MAX_FORM_BYTES = 10 << 20

FORM_METHODS = frozenset(('POST', 'PUT', 'PATCH'))
FORM_MEDIA_TYPE = 'application/x-www-form-urlencoded'

_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
_MEDIA_TYPE = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+/"
                         r"[!#$%&'*+.^_`|~0-9A-Za-z-]+$")


def _unescape(value: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise FormParseError('invalid URL escape in {!r}'.format(value))
    return unquote_plus(value)


def parse_pairs(data: str) -> Iterator[Tuple[str, str]]:
    """
    Split urlencoded form data into decoded (key, value) pairs, keeping
    their order. Blank segments are skipped and a key without ``=`` gets
    an empty value.

    :raises FormParseError: on a malformed escape or a ``;`` separator
    """
    for segment in data.split('&'):
        if not segment:
            continue
        if ';' in segment:
            raise FormParseError('invalid semicolon separator in query')
        key, _, value = segment.partition('=')
        yield _unescape(key), _unescape(value)


def media_type(content_type: str) -> str:
    """
    Return the lowercased ``type/subtype`` part of a Content-Type value.

    :raises FormParseError: when it is not a valid media type
    """
    mtype = content_type.split(';', 1)[0].strip().lower()
    if not _MEDIA_TYPE.match(mtype):
        raise FormParseError('invalid media type: {!r}'.format(content_type))
    return mtype


async def _read_form_body(request: Request) -> str:
    content_type = request.content_type
    if content_type is None:
        # No declared type means an opaque octet stream
        return ''
    if media_type(content_type) != FORM_MEDIA_TYPE:
        return ''

    body = bytearray()
    while len(body) <= MAX_FORM_BYTES:
        chunk = await request.content.read(MAX_FORM_BYTES + 1 - len(body))
        if not chunk:
            break
        body.extend(chunk)
    if len(body) > MAX_FORM_BYTES:
        raise FormParseError('form body too large')
    return body.decode('utf-8', 'replace')


async def parse_form(request: Request) -> MultiDictProxy:
    """
    Collect form parameters from the request body (POST, PUT and PATCH
    with a urlencoded body) followed by the query string.

    :param request: Request
    :return: read-only multi-dict of str -> str
    :raises FormParseError: if either part is malformed
    """
    form = MultiDict()
    if request.method in FORM_METHODS:
        form.extend(list(parse_pairs(await _read_form_body(request))))

    try:
        query = request.query_string
    except httptools.HttpParserInvalidURLError as exc:
        raise FormParseError('invalid request target') from exc
    form.extend(list(parse_pairs(query)))

    logger.debug('parsed %d form value(s) for %s %s',
                 len(form), request.method, request.url)
    return MultiDictProxy(form)
