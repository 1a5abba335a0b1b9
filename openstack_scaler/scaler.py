"""
This module contains the scaler that exposes a metric adapter to the host.
"""

import datetime
import functools
import logging
import time
import typing as t

import httpx
from django.core.exceptions import ImproperlyConfigured

from . import adapters, dto, errors, identity
from .identity.session import Session
from .settings import load_settings
from .transport import build_client


logger = logging.getLogger(__name__)


class Scaler:
    """
    Scaler that binds a metric adapter to an authenticated session.

    A token is issued when the scaler is created, after which the scaler is ready to
    be polled. Polls on a single scaler must not overlap, however many scalers can
    share the same HTTPX client.

    Args:
        adapter: The metric adapter to read values with.
        session: The session to authenticate requests with.
        request_timeout: The timeout for requests in seconds. If not given, the
                         timeout from the adapter metadata or the client default
                         is used.
    """

    def __init__(
        self,
        adapter: adapters.Adapter,
        session: Session,
        request_timeout: t.Optional[float] = None,
    ):
        self.adapter = adapter
        self.session = session
        # A timeout in the trigger metadata takes precedence
        self.request_timeout = adapter.metadata.timeout or request_timeout
        logger.info("Authenticating %s scaler with %s", adapter.kind, session.auth_url)
        self.session.issue_token(timeout=self._timeout(None))

    @classmethod
    def from_config(
        cls,
        kind: str,
        trigger_metadata: t.Mapping[str, str],
        auth_params: t.Mapping[str, str],
        client: t.Optional[httpx.Client] = None,
        settings=None,
    ) -> "Scaler":
        """
        Create a scaler from the trigger metadata and auth params supplied by the host.

        All the configuration is validated before any request is made. If no client
        is given, one is built from the settings, or from the default settings if
        none are given.
        """
        adapter = adapters.get_adapter_class(kind).from_trigger_metadata(trigger_metadata)
        auth_url, credential = identity.parse_auth_params(auth_params)
        request_timeout = None
        if settings is not None:
            try:
                request_timeout = settings.REQUEST_TIMEOUT
            except ImproperlyConfigured as exc:
                raise errors.ConfigError(str(exc)) from exc
        if client is None:
            client = build_client(settings if settings is not None else load_settings())
        return cls(adapter, Session(auth_url, credential, client), request_timeout)

    def _timeout(self, deadline):
        """
        Returns the timeout for the next request given the deadline for the poll.
        """
        if deadline is None:
            if self.request_timeout is None:
                return httpx.USE_CLIENT_DEFAULT
            return self.request_timeout
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise errors.PollCancelledError("the deadline for the poll has passed")
        if self.request_timeout is None:
            return remaining
        return min(self.request_timeout, remaining)

    def describe_target(self) -> dto.MetricSpec:
        """
        Returns the metric provided by the scaler and the target value for it.
        """
        return dto.MetricSpec(self.adapter.metric_name(), self.adapter.target_value())

    def sample(self, metric_name: str, deadline: t.Optional[float] = None) -> dto.MetricSample:
        """
        Returns a sample of the metric with the given name.

        If a deadline is given, as a value of :py:func:`time.monotonic`, no request
        made by the poll will outlive it.
        """
        try:
            self.session.ensure_valid(timeout=functools.partial(self._timeout, deadline))
            value = self.adapter.read(self.session, timeout=self._timeout(deadline))
        except errors.Error as exc:
            logger.error("Error collecting metric value for %s: %s", metric_name, exc)
            raise
        return dto.MetricSample(
            metric_name,
            value,
            datetime.datetime.now(datetime.timezone.utc),
        )

    def is_active(self, deadline: t.Optional[float] = None) -> bool:
        """
        Returns true if the current value of the metric is greater than zero.
        """
        return self.sample(self.describe_target().name, deadline).value > 0

    def close(self):
        """
        Closes the scaler. The shared HTTPX client is left open.
        """
        self.session.close()
