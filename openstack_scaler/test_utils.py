from unittest import TestCase

from .utils import metric_name, sanitise


class MetricNameTestCase(TestCase):

    def test_sanitise(self):
        self.assertEqual(sanitise("My_Container.01"), "my-container-01")

    def test_clean_identifier_is_unchanged(self):
        self.assertEqual(metric_name("openstack-swift", "my-container"), "openstack-swift-my-container")

    # Check that identifiers differing only in sanitised characters do not collide
    def test_no_collisions(self):
        identifiers = ["my-container", "my_container", "My-Container", "my.container", "my--container"]
        names = {metric_name("openstack-swift", identifier) for identifier in identifiers}
        self.assertEqual(len(names), len(identifiers))

    def test_no_collisions_across_kinds(self):
        self.assertNotEqual(
            metric_name("openstack-metric", "abc"),
            metric_name("openstack-alarm", "abc"),
        )

    def test_deterministic(self):
        self.assertEqual(metric_name("openstack-swift", "My Bucket"), metric_name("openstack-swift", "My Bucket"))

    def test_valid_characters(self):
        name = metric_name("openstack-swift", "___")
        self.assertRegex(name, r"^[a-z0-9]+(-[a-z0-9]+)*$")

    # Check that a clean identifier cannot mimic the hashed name of another identifier
    def test_no_collision_with_hashed_name(self):
        hashed = metric_name("openstack-swift", "X")
        self.assertRegex(hashed, r"^openstack-swift-x-[0-9a-f]{8}$")
        mimic = hashed[len("openstack-swift-"):]
        self.assertNotEqual(metric_name("openstack-swift", mimic), hashed)

    def test_no_collision_with_bare_hash(self):
        hashed = metric_name("openstack-swift", "___")
        mimic = hashed[len("openstack-swift-"):]
        self.assertNotEqual(metric_name("openstack-swift", mimic), hashed)
