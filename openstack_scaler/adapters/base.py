"""
Module containing the base metric adapter and helpers for parsing trigger metadata.
"""

import functools
import logging
import typing as t

import httpx

from .. import errors, utils
from ..identity.session import Session


logger = logging.getLogger(__name__)


def convert_httpx_exceptions(f):
    """
    Decorator that converts HTTPX exceptions into transport errors.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except httpx.HTTPError as exc:
            logger.exception("Could not connect to OpenStack API.")
            raise errors.TransportError(f"Could not connect to OpenStack API: {exc}") from exc

    return wrapper


def required_str(metadata, key):
    """
    Returns the non-empty string value for the key or raises a config error.
    """
    value = metadata.get(key)
    if not value or not str(value).strip():
        raise errors.ConfigError(f"no {key} given")
    return str(value).strip()


def optional_str(metadata, key):
    value = metadata.get(key)
    return str(value) if value else None


def parse_int(metadata, key, default=None):
    """
    Returns the integer value for the key, or the default if the key is not given.

    If no default is given, the key is required.
    """
    value = metadata.get(key)
    if value is None or value == "":
        if default is None:
            raise errors.ConfigError(f"no {key} given")
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise errors.ConfigError(f"{key} must be an integer, got {value!r}")


def parse_float(metadata, key):
    value = metadata.get(key)
    if value is None or value == "":
        raise errors.ConfigError(f"no {key} given")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise errors.ConfigError(f"{key} must be a number, got {value!r}")


def parse_bool(metadata, key, default=False):
    value = metadata.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if str(value).lower() in {"true", "false"}:
        return str(value).lower() == "true"
    raise errors.ConfigError(f"{key} must be true or false, got {value!r}")


def parse_timeout(metadata, key="timeout"):
    """
    Returns the request timeout in seconds from the metadata, or ``None`` if not given.
    """
    if metadata.get(key) in {None, ""}:
        return None
    timeout = parse_int(metadata, key)
    if timeout <= 0:
        raise errors.ConfigError(f"{key} must be positive, got {timeout}")
    return timeout


class Adapter:
    """
    Base class for a metric adapter.

    An adapter turns a validated session and its metadata into a single number.
    """

    #: The kind of the adapter, also used as the prefix for metric names
    kind = None
    #: The class used to parse trigger metadata for the adapter
    metadata_cls = None

    def __init__(self, metadata):
        self.metadata = metadata

    @classmethod
    def from_trigger_metadata(cls, trigger_metadata: t.Mapping[str, str]) -> "Adapter":
        """
        Create an adapter from the trigger metadata supplied by the host.
        """
        return cls(cls.metadata_cls.from_trigger_metadata(trigger_metadata))

    def identifier(self) -> str:
        """
        Returns the identifier that distinguishes this metric from others of the
        same kind.
        """
        raise NotImplementedError

    def metric_name(self) -> str:
        return utils.metric_name(self.kind, self.identifier())

    def target_value(self) -> float:
        """
        Returns the desired value of the metric per replica.
        """
        raise NotImplementedError

    def read(self, session: Session, timeout=httpx.USE_CLIENT_DEFAULT) -> float:
        """
        Reads the current value of the metric using the given session.

        The session must hold a valid token.
        """
        raise NotImplementedError

    @convert_httpx_exceptions
    def _get(self, session, url, params=None, timeout=httpx.USE_CLIENT_DEFAULT):
        """
        Makes a GET request using the session token and returns the response.

        Unsuccessful responses are raised as protocol errors.
        """
        response = session.client.get(
            url,
            params=params,
            auth=session.auth(),
            timeout=timeout,
        )
        if not response.is_success:
            raise errors.ProtocolError(response.status_code, response.text)
        return response

    def _json(self, response):
        try:
            return response.json()
        except ValueError as exc:
            raise errors.DecodeError(f"response is not valid JSON: {exc}") from exc
