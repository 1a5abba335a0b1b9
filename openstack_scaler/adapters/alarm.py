"""
Module containing the adapter for the state of an alarm in the OpenStack alarming
service.
"""

import dataclasses
import logging
import typing as t
from urllib.parse import quote

import httpx

from .. import errors
from . import base


logger = logging.getLogger(__name__)


#: The default number of alarms in the alarm state per replica
DEFAULT_THRESHOLD = 1

#: The value of the metric for each alarm state
STATE_VALUES = {
    "ok": 0,
    "insufficient data": 0,
    "alarm": 1,
}


@dataclasses.dataclass(frozen=True)
class AlarmMetadata:
    """
    Metadata for reading the state of an alarm.
    """

    #: The URL of the alarms endpoint, e.g. http://aodh:8042/v2/alarms
    alarms_url: str
    #: The ID of the alarm
    alarm_id: str
    #: The target value of the metric per replica
    threshold: int = DEFAULT_THRESHOLD
    #: The timeout for requests in seconds, if different to the default
    timeout: t.Optional[int] = None

    @classmethod
    def from_trigger_metadata(cls, metadata):
        return cls(
            base.required_str(metadata, "alarmsURL"),
            base.required_str(metadata, "alarmID"),
            base.parse_int(metadata, "threshold", DEFAULT_THRESHOLD),
            base.parse_timeout(metadata),
        )


def _is_enabled(value):
    # The enabled flag may be a JSON boolean or a string
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    raise errors.DecodeError(f"unexpected value for enabled: {value!r}")


def decode_alarm(data) -> int:
    """
    Returns the value of the metric for the given alarm data.
    """
    if not isinstance(data, dict):
        raise errors.DecodeError("expected an alarm object")
    try:
        enabled, state = data["enabled"], data["state"]
    except KeyError as exc:
        raise errors.DecodeError(f"alarm is missing field {exc}")
    if not _is_enabled(enabled):
        raise errors.DecodeError("alarm is disabled")
    try:
        return STATE_VALUES[state]
    except (KeyError, TypeError):
        raise errors.DecodeError(f"unrecognised alarm state: {state!r}")


class AlarmAdapter(base.Adapter):
    """
    Adapter that reports 1 when an alarm is firing and 0 otherwise.
    """

    kind = "openstack-alarm"
    metadata_cls = AlarmMetadata

    def identifier(self):
        return self.metadata.alarm_id

    def target_value(self):
        return self.metadata.threshold

    def read(self, session, timeout=httpx.USE_CLIENT_DEFAULT):
        url = "{}/{}".format(
            self.metadata.alarms_url.rstrip("/"),
            quote(self.metadata.alarm_id, safe=""),
        )
        logger.debug("Reading alarm state from %s", url)
        response = self._get(session, url, timeout=timeout)
        return float(decode_alarm(self._json(response)))
