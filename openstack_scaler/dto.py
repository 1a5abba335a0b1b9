"""
This module defines data-transfer objects handed back to the host.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MetricSpec:
    """
    Represents the metric that a scaler provides and the target for it.
    """

    #: The name of the metric
    name: str
    #: The desired value of the metric per replica
    target_value: float
    #: The type of the target, as understood by the host
    metric_type: str = "AverageValue"


@dataclass(frozen=True)
class MetricSample:
    """
    Represents a single sample of a metric.
    """

    #: The name of the metric
    name: str
    #: The value of the metric
    value: float
    #: The time at which the sample was taken
    timestamp: datetime
