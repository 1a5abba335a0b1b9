from unittest import TestCase

from .. import errors, testing
from ..identity import ApplicationCredential, Session
from .alarm import AlarmAdapter, AlarmMetadata, decode_alarm


ALARM_ID = "f2e4b0a1-1c2d-4e5f-8a9b-0c1d2e3f4a5b"
ALARM_PATH = f"/v2/alarms/{ALARM_ID}"
METADATA = {
    "alarmsURL": "http://aodh.test/v2/alarms/",
    "alarmID": ALARM_ID,
}


class AlarmMetadataTestCase(TestCase):

    def test_parse_defaults(self):
        metadata = AlarmMetadata.from_trigger_metadata(METADATA)
        self.assertEqual(metadata.alarms_url, "http://aodh.test/v2/alarms/")
        self.assertEqual(metadata.alarm_id, ALARM_ID)
        self.assertEqual(metadata.threshold, 1)
        self.assertIsNone(metadata.timeout)

    def test_parse_threshold(self):
        metadata = AlarmMetadata.from_trigger_metadata({**METADATA, "threshold": "3"})
        self.assertEqual(metadata.threshold, 3)

    def test_invalid_threshold(self):
        with self.assertRaises(errors.ConfigError):
            AlarmMetadata.from_trigger_metadata({**METADATA, "threshold": "1.5"})

    def test_missing_alarm_id(self):
        with self.assertRaises(errors.ConfigError):
            AlarmMetadata.from_trigger_metadata({"alarmsURL": "http://aodh.test/v2/alarms"})

    def test_missing_alarms_url(self):
        with self.assertRaises(errors.ConfigError):
            AlarmMetadata.from_trigger_metadata({"alarmID": ALARM_ID})


class DecodeAlarmTestCase(TestCase):

    def test_alarm(self):
        self.assertEqual(decode_alarm({"enabled": "true", "state": "alarm"}), 1)

    def test_ok(self):
        self.assertEqual(decode_alarm({"enabled": "true", "state": "ok"}), 0)

    def test_insufficient_data(self):
        self.assertEqual(decode_alarm({"enabled": True, "state": "insufficient data"}), 0)

    # Check that a disabled alarm is an error rather than a zero
    def test_disabled(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm({"enabled": "false", "state": "alarm"})

    def test_disabled_boolean(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm({"enabled": False, "state": "ok"})

    def test_unknown_state(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm({"enabled": "true", "state": "flapping"})

    def test_missing_state(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm({"enabled": "true"})

    def test_invalid_enabled(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm({"enabled": "maybe", "state": "ok"})

    def test_not_an_object(self):
        with self.assertRaises(errors.DecodeError):
            decode_alarm(["alarm"])


class AlarmAdapterTestCase(TestCase):

    def setUp(self):
        self.openstack = testing.FakeOpenStack()
        self.session = Session(
            testing.AUTH_URL,
            ApplicationCredential("my-id", "my-secret"),
            self.openstack.client(),
        )
        self.session.issue_token()
        self.adapter = AlarmAdapter.from_trigger_metadata(METADATA)

    def test_read(self):
        self.openstack.route(
            "GET",
            ALARM_PATH,
            json={"alarm_id": ALARM_ID, "enabled": True, "state": "alarm"},
        )
        self.assertEqual(self.adapter.read(self.session), 1.0)
        request = self.openstack.requests_for("GET", ALARM_PATH)[0]
        self.assertEqual(request.headers["X-Auth-Token"], "token-1")

    def test_unsuccessful_status(self):
        self.openstack.route("GET", ALARM_PATH, 403, text="Forbidden")
        with self.assertRaises(errors.ProtocolError) as ctx:
            self.adapter.read(self.session)
        self.assertEqual(ctx.exception.detail, "Forbidden")

    def test_metric_name(self):
        self.assertEqual(self.adapter.metric_name(), f"openstack-alarm-{ALARM_ID}")
        self.assertEqual(self.adapter.target_value(), 1)
