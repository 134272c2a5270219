import enum
import ssl
from typing import Callable, Dict, Type, Union


@enum.unique
class Status(int, enum.Enum):
    """Enumeration of the possible outcomes of a request."""

    UNSPECIFIED = 0
    OK = 1
    TIMEOUT = 2
    THROTTLED = 3
    INVALID_ARGUMENT = 4
    INVALID_RESPONSE = 5
    TEMPORARY_ERROR = 6
    PERMANENT_ERROR = 7
    DNS_ERROR = 8
    TCP_ERROR = 9
    TLS_ERROR = 10
    HTTP_ERROR = 11
    UNAUTHENTICATED = 12
    PERMISSION_DENIED = 13
    NOT_FOUND = 14

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name


Status.UNSPECIFIED.__doc__ = "Status not specified (default)"
Status.OK.__doc__ = "Request completed with a 2xx response"
Status.TIMEOUT.__doc__ = "Request timed out"
Status.THROTTLED.__doc__ = "Server asked the client to slow down"
Status.INVALID_ARGUMENT.__doc__ = "Request could not be built from the input"
Status.INVALID_RESPONSE.__doc__ = "Server sent an unexpected response"
Status.TEMPORARY_ERROR.__doc__ = "Request failed, trying again may succeed"
Status.PERMANENT_ERROR.__doc__ = "Request failed, trying again will not help"
Status.DNS_ERROR.__doc__ = "Server hostname could not be resolved"
Status.TCP_ERROR.__doc__ = "Connection to the server could not be established"
Status.TLS_ERROR.__doc__ = "TLS handshake with the server failed"
Status.HTTP_ERROR.__doc__ = "Server violated the HTTP protocol"
Status.UNAUTHENTICATED.__doc__ = "Server requires authentication"
Status.PERMISSION_DENIED.__doc__ = "Server refused access to the resource"
Status.NOT_FOUND.__doc__ = "Resource does not exist on the server"

_ERROR_TYPES: Dict[Type[Exception], Union[Status, Callable[[Exception], Status]]] = {}


def status_for_error(error: BaseException) -> Status:
    """Returns a Status that corresponds to the specified error."""
    # See if the error matches one of the registered types.
    status_or_handler = _find_status_or_handler(error, _ERROR_TYPES)
    if status_or_handler is not None:
        if isinstance(status_or_handler, Status):
            return status_or_handler
        return status_or_handler(error)
    # If not, resort to standard error categorization.
    #
    # See https://docs.python.org/3/library/exceptions.html
    if isinstance(error, TimeoutError):
        return Status.TIMEOUT
    elif isinstance(error, TypeError) or isinstance(error, ValueError):
        return Status.INVALID_ARGUMENT
    elif isinstance(error, ConnectionError):
        return Status.TCP_ERROR
    elif isinstance(error, PermissionError):
        return Status.PERMISSION_DENIED
    elif isinstance(error, ssl.SSLError) or isinstance(error, ssl.CertificateError):
        return Status.TLS_ERROR
    elif isinstance(error, OSError):
        return Status.TEMPORARY_ERROR
    return Status.PERMANENT_ERROR


def http_response_code_status(code: int) -> Status:
    """Returns a Status that's broadly equivalent to an HTTP response
    status code."""
    if code == 400:  # Bad Request
        return Status.INVALID_ARGUMENT
    elif code == 401:  # Unauthorized
        return Status.UNAUTHENTICATED
    elif code == 403:  # Forbidden
        return Status.PERMISSION_DENIED
    elif code == 404:  # Not Found
        return Status.NOT_FOUND
    elif code == 408:  # Request Timeout
        return Status.TIMEOUT
    elif code == 429:  # Too Many Requests
        return Status.THROTTLED
    elif code == 501:  # Not Implemented
        return Status.PERMANENT_ERROR

    category = code // 100
    if category == 2:  # 2xx success
        return Status.OK
    elif category in (1, 3, 4):
        return Status.PERMANENT_ERROR
    elif category == 5:  # 5xx server error
        return Status.TEMPORARY_ERROR

    return Status.UNSPECIFIED


def register_error_type(
    error_type: Type[Exception],
    status_or_handler: Union[Status, Callable[[Exception], Status]],
):
    """Register an error type to Status mapping.

    The caller can either register a base exception and a handler, which
    derives a Status from errors of this type. Or, if there's only one
    exception to Status mapping to register, the caller can simply pass
    the exception class and the associated Status.
    """
    _ERROR_TYPES[error_type] = status_or_handler


def _find_status_or_handler(obj, types):
    for cls in type(obj).__mro__:
        try:
            return types[cls]
        except KeyError:
            pass

    return None  # not found
