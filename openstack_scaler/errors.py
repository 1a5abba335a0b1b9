"""
This module defines the exceptions that can be thrown by a scaler.
"""


class Error(Exception):
    """
    Base class for all other errors in this module.
    """


class ConfigError(Error, ValueError):
    """
    Raised when required metadata, credentials or settings are missing or invalid.

    A scaler is never built when this is raised.
    """


class AuthError(Error, RuntimeError):
    """
    Raised when a token cannot be issued or validated by the identity service.
    """

    def __init__(self, detail, status_code=None):
        super().__init__(detail)
        #: The detail of the error, e.g. the response body from the identity service
        self.detail = detail
        #: The HTTP status code, if a response was received
        self.status_code = status_code


class TransportError(Error, RuntimeError):
    """
    Raised when a metric endpoint cannot be reached.
    """


class PollCancelledError(TransportError):
    """
    Raised when the deadline for a poll has passed before a request could be sent.
    """


class ProtocolError(Error, RuntimeError):
    """
    Raised when a metric endpoint responds with an unsuccessful status.
    """

    def __init__(self, status_code, detail):
        super().__init__(detail)
        #: The HTTP status code of the response
        self.status_code = status_code
        #: The body of the response
        self.detail = detail


class DecodeError(Error, ValueError):
    """
    Raised when a response payload is malformed or semantically invalid.
    """
