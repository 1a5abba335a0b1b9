"""
Settings helpers for the ``openstack_scaler`` package.
"""

from django.core.exceptions import ImproperlyConfigured

from settings_object import Setting, SettingsObject


DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_VERIFY_SSL = True


class PositiveNumberSetting(Setting):
    """
    Setting whose value must be a number greater than zero.
    """

    def _transform(self, instance, value):
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ImproperlyConfigured(f"{instance.name}.{self.name} must be a number")
        if number <= 0:
            raise ImproperlyConfigured(f"{instance.name}.{self.name} must be positive")
        return number


class ScalerSettings(SettingsObject):
    """
    Settings object for the ``OPENSTACK_SCALER`` setting.
    """

    #: The timeout, in seconds, for every request made to OpenStack
    #: Can be overridden per trigger using the timeout metadata
    REQUEST_TIMEOUT = PositiveNumberSetting(default=DEFAULT_REQUEST_TIMEOUT)
    #: Indicates whether to verify SSL when connecting over HTTPS
    VERIFY_SSL = Setting(default=DEFAULT_VERIFY_SSL)


def load_settings(user_settings=None):
    """
    Returns a settings object for the given mapping of user settings.

    The settings are never read from the Django settings module, so an empty or
    missing mapping gives the defaults.
    """
    # An empty mapping would fall back to the Django settings module
    return ScalerSettings(
        "OPENSTACK_SCALER",
        dict({"VERIFY_SSL": DEFAULT_VERIFY_SSL}, **(user_settings or {})),
    )
