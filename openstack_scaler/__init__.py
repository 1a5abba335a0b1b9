"""
Metric sources backed by OpenStack for use by an autoscaling host.
"""

from .scaler import Scaler  # noqa: F401
