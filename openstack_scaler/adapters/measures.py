"""
Module containing the adapter for measures from the OpenStack metrics service.
"""

import dataclasses
import datetime
import logging
import typing as t
from urllib.parse import quote

import httpx

from .. import errors
from . import base


logger = logging.getLogger(__name__)


#: The granularity to request when the configured granularity is too small
MINIMUM_GRANULARITY = 2


@dataclasses.dataclass(frozen=True)
class MeasuresMetadata:
    """
    Metadata for reading measures of a metric.
    """

    #: The URL of the metrics endpoint, e.g. http://gnocchi:8041/v1/metric
    metrics_url: str
    #: The ID of the metric to read measures for
    metric_id: str
    #: The aggregation method to apply, e.g. mean, sum or max
    aggregation_method: str
    #: The granularity of the measures in seconds
    granularity: int
    #: The target value of the metric per replica
    threshold: float
    #: The timeout for requests in seconds, if different to the default
    timeout: t.Optional[int] = None

    @classmethod
    def from_trigger_metadata(cls, metadata):
        return cls(
            base.required_str(metadata, "metricsURL"),
            base.required_str(metadata, "metricID"),
            base.required_str(metadata, "aggregationMethod"),
            base.parse_int(metadata, "granularity"),
            base.parse_float(metadata, "threshold"),
            base.parse_timeout(metadata),
        )


def request_granularity(granularity):
    """
    Returns the granularity to send with the measures request.
    """
    return max(granularity, MINIMUM_GRANULARITY)


def start_time(now, granularity):
    """
    Returns the start of the window to request measures for, as an RFC 3339 string.

    The window reaches back one granularity from now and is truncated to the minute,
    so that the most recent complete aggregate is always included.
    """
    start = now - datetime.timedelta(seconds=request_granularity(granularity))
    return start.replace(second=0, microsecond=0).isoformat()


def decode_measures(data) -> float:
    """
    Returns the value of the most recent measure in the given measures data.

    The data must be a list of ``[timestamp, granularity, value]`` tuples.
    """
    if not isinstance(data, list) or not data:
        raise errors.DecodeError("expected a non-empty list of measures")
    measure = data[-1]
    if not isinstance(measure, list) or len(measure) != 3:
        raise errors.DecodeError(
            "unexpected measure, expected structure is [string, float, float]"
        )
    value = measure[2]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise errors.DecodeError(f"measure value is not numeric: {value!r}")
    return float(value)


class MeasuresAdapter(base.Adapter):
    """
    Adapter that reads the most recent aggregated measure of a metric.
    """

    kind = "openstack-metric"
    metadata_cls = MeasuresMetadata

    def identifier(self):
        return self.metadata.metric_id

    def target_value(self):
        return self.metadata.threshold

    def read(self, session, timeout=httpx.USE_CLIENT_DEFAULT, now=None):
        now = now or datetime.datetime.now(datetime.timezone.utc)
        url = "{}/{}/measures".format(
            self.metadata.metrics_url.rstrip("/"),
            quote(self.metadata.metric_id, safe=""),
        )
        params = {
            "granularity": str(request_granularity(self.metadata.granularity)),
            "aggregation": self.metadata.aggregation_method,
            "start": start_time(now, self.metadata.granularity),
        }
        logger.debug("Reading measures from %s with %s", url, params)
        response = self._get(session, url, params=params, timeout=timeout)
        return decode_measures(self._json(response))
