import socket

import httpx

from webclient.status import Status, http_response_code_status, register_error_type


def httpx_error_status(error: Exception) -> Status:
    # See https://www.python-httpx.org/exceptions/
    match error:
        case httpx.HTTPStatusError():
            return httpx_response_status(error.response)
        case httpx.InvalidURL():
            return Status.INVALID_ARGUMENT
        case httpx.UnsupportedProtocol():
            return Status.INVALID_ARGUMENT
        case httpx.TimeoutException():
            return Status.TIMEOUT
        case httpx.ConnectError():
            if _caused_by(error, socket.gaierror):
                return Status.DNS_ERROR
            return Status.TCP_ERROR
        case httpx.ProtocolError():
            return Status.HTTP_ERROR
        case httpx.TooManyRedirects():
            return Status.PERMANENT_ERROR

    return Status.TEMPORARY_ERROR


def httpx_response_status(response: httpx.Response) -> Status:
    return http_response_code_status(response.status_code)


def _caused_by(error: BaseException, cls) -> bool:
    seen = set()
    cause = error.__cause__ or error.__context__
    while cause is not None and id(cause) not in seen:
        if isinstance(cause, cls):
            return True
        seen.add(id(cause))
        cause = cause.__cause__ or cause.__context__
    return False


# Register base exceptions.
register_error_type(httpx.HTTPError, httpx_error_status)
register_error_type(httpx.InvalidURL, httpx_error_status)
