import pytest

from restgate.exc import FormParseError, HTTPBadRequestException
from restgate.form import MAX_FORM_BYTES, media_type, parse_form, parse_pairs

FORM = [('Content-Type', 'application/x-www-form-urlencoded')]


def test_parse_pairs_decodes_and_keeps_order():
    assert list(parse_pairs('b=2&a=x+y&a=%2F&&flag')) == [
        ('b', '2'), ('a', 'x y'), ('a', '/'), ('flag', '')]


@pytest.mark.parametrize('data', ['a=%', 'a=%g1', 'a=%1', '%zz=1', 'a=1;b=2'])
def test_parse_pairs_rejects_malformed(data):
    with pytest.raises(FormParseError):
        list(parse_pairs(data))


def test_form_parse_error_is_bad_request():
    assert issubclass(FormParseError, HTTPBadRequestException)
    assert FormParseError('x').status.value == 400


@pytest.mark.parametrize('content_type, expected', [
    ('application/x-www-form-urlencoded', 'application/x-www-form-urlencoded'),
    ('Application/X-WWW-Form-Urlencoded; charset=utf-8',
     'application/x-www-form-urlencoded'),
    ('text/plain', 'text/plain'),
])
def test_media_type(content_type, expected):
    assert media_type(content_type) == expected


@pytest.mark.parametrize('content_type', ['', 'json', 'a/b/c', '/plain'])
def test_media_type_rejects_invalid(content_type):
    with pytest.raises(FormParseError):
        media_type(content_type)


@pytest.mark.asyncio
async def test_body_values_precede_query(request_factory):
    request = request_factory('POST', '/items?name=q&page=2', headers=FORM,
                              body=b'name=b1&name=b2')

    form = await parse_form(request)

    assert form.getall('name') == ['b1', 'b2', 'q']
    assert form['page'] == '2'


@pytest.mark.asyncio
@pytest.mark.parametrize('method', ['GET', 'HEAD', 'DELETE'])
async def test_body_ignored_for_bodyless_verbs(method, request_factory):
    request = request_factory(method, '/?a=1', headers=FORM, body=b'b=2')

    form = await parse_form(request)

    assert dict(form) == {'a': '1'}


@pytest.mark.asyncio
async def test_body_ignored_without_form_content_type(request_factory):
    request = request_factory('POST', '/', body=b'a=%zz')
    assert len(await parse_form(request)) == 0

    request = request_factory('PATCH', '/',
                              headers=[('Content-Type', 'application/json')],
                              body=b'{"a": 1}')
    assert len(await parse_form(request)) == 0


@pytest.mark.asyncio
async def test_invalid_content_type_is_rejected(request_factory):
    request = request_factory('PUT', '/', headers=[('Content-Type', 'bogus')],
                              body=b'a=1')

    with pytest.raises(FormParseError):
        await parse_form(request)


@pytest.mark.asyncio
async def test_oversized_body_is_rejected(request_factory):
    request = request_factory('POST', '/', headers=FORM,
                              body=b'a=' + b'x' * MAX_FORM_BYTES)

    with pytest.raises(FormParseError):
        await parse_form(request)
