from http import HTTPStatus


class HTTPException(Exception):
    __status__ = HTTPStatus.INTERNAL_SERVER_ERROR

    @property
    def status(self) -> HTTPStatus:
        return self.__status__


# ==============================
# 4xx
# ==============================
class HTTPBadRequestException(HTTPException):
    __status__ = HTTPStatus.BAD_REQUEST


class FormParseError(HTTPBadRequestException):
    """The query string or request body is not valid form data."""


# ==============================
# 5xx
# ==============================
class HTTPInternalServerErrorException(HTTPException):
    __status__ = HTTPStatus.INTERNAL_SERVER_ERROR


class PayloadSerializationError(HTTPInternalServerErrorException):
    """A resource returned a payload that cannot be encoded as JSON."""
